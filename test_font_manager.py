#!/usr/bin/env python3
"""Tests for PDF font registration and its fallback chain."""
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from word_renderer.document_builder import FontManager
from word_renderer.exceptions import FontError, RenderingError


def test_missing_font_falls_back(tmp_path):
    manager = FontManager("NoSuchFontFamily", str(tmp_path))

    assert manager.get_font_name() in ("DejaVuSans", "LiberationSans", "Helvetica")
    assert manager.get_font_name(bold=True)


def test_builtin_font_is_used_directly(tmp_path):
    manager = FontManager("Helvetica", str(tmp_path))
    assert manager.get_font_name() == "Helvetica"


def test_register_invalid_font_file(tmp_path):
    bogus = tmp_path / "Broken.ttf"
    bogus.write_bytes(b"not a font")

    with pytest.raises(FontError) as excinfo:
        FontManager.register_font("Broken", str(bogus))
    assert isinstance(excinfo.value, RenderingError)


def test_invalid_font_in_fonts_dir_raises(tmp_path):
    (tmp_path / "Corrupt-Regular.ttf").write_bytes(b"not a font either")
    with pytest.raises(FontError):
        FontManager("Corrupt", str(tmp_path))


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
