#!/usr/bin/env python3
"""Tests for heading styles and render options."""
import json
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from word_renderer.config import ENV_BASE_FONT_SIZE, ENV_FONT_NAME, ENV_HEADING_STYLES, ENV_PAGE_SIZE
from word_renderer.document_builder import StyleRegistry
from word_renderer.exceptions import (
    InvalidConfigurationError,
    UnsupportedHeadingLevelError,
    ValidationError,
)
from word_renderer.render_options import RenderOptions, load_heading_styles


def test_default_heading_sizes():
    registry = StyleRegistry(11)
    sizes = {level: registry.heading(level).font_size for level in registry.levels}
    assert sizes == pytest.approx({2: 22.0, 3: 19.25, 4: 16.5, 5: 13.75, 6: 12.1})


def test_heading_sizes_strictly_decrease():
    styles = StyleRegistry(11).all()
    sizes = [style.font_size for style in styles]
    assert all(a > b for a, b in zip(sizes, sizes[1:]))
    assert all(size > 11 for size in sizes)


def test_heading_bold_flags():
    registry = StyleRegistry(11)
    assert [registry.heading(level).bold for level in range(2, 7)] == [False, False, True, True, True]
    assert [style.name for style in registry.all()] == ["H2", "H3", "H4", "H5", "H6"]


@pytest.mark.parametrize("level", [0, 1, 7])
def test_unsupported_heading_level(level):
    with pytest.raises(UnsupportedHeadingLevelError) as excinfo:
        StyleRegistry(11).heading(level)
    assert excinfo.value.level == level
    assert excinfo.value.supported == [2, 3, 4, 5, 6]


def test_custom_heading_table():
    registry = StyleRegistry(10, {1: {"name": "Title", "size_multiplier": 3.0, "bold": True}})
    assert registry.levels == [1]
    assert registry.heading(1).font_size == pytest.approx(30.0)


def test_default_render_options():
    options = RenderOptions()
    geometry = options.page_geometry()
    assert options.font_name == "Montserrat"
    assert options.base_font_size == 11
    assert geometry.paragraph_width == pytest.approx(595.2756 - 144)


def test_default_heading_table_is_copied():
    options = RenderOptions()
    options.heading_styles[2]["size_multiplier"] = 9
    assert RenderOptions().heading_styles[2]["size_multiplier"] == 2.0


@pytest.mark.parametrize("kwargs", [
    {"base_font_size": 0},
    {"page_size": "A0"},
    {"margin_left": -1},
    {"margin_left": 300, "margin_right": 300},
    {"heading_styles": {}},
    {"heading_styles": {2: {"size_multiplier": 1.5}, 3: {"size_multiplier": 1.5}}},
    {"cell_padding": -2},
])
def test_invalid_render_options(kwargs):
    with pytest.raises(InvalidConfigurationError):
        RenderOptions(**kwargs)


def test_page_size_is_case_insensitive():
    assert RenderOptions(page_size="letter").page_geometry().width == 612.0


def test_load_heading_styles(tmp_path):
    path = tmp_path / "styles.json"
    path.write_text(json.dumps({"2": {"name": "Big", "size_multiplier": 2.5, "bold": True}}))

    styles = load_heading_styles(str(path))

    assert styles == {2: {"name": "Big", "size_multiplier": 2.5, "bold": True}}


@pytest.mark.parametrize("content", ['["not", "a", "map"]', '{"two": {"size_multiplier": 2}}', '{"2": {}}'])
def test_load_heading_styles_rejects_bad_tables(tmp_path, content):
    path = tmp_path / "styles.json"
    path.write_text(content)
    with pytest.raises(InvalidConfigurationError):
        load_heading_styles(str(path))


def test_options_from_env(tmp_path, monkeypatch):
    styles_path = tmp_path / "styles.json"
    styles_path.write_text(json.dumps({
        "2": {"size_multiplier": 1.8},
        "3": {"size_multiplier": 1.4, "bold": True},
    }))
    monkeypatch.setenv(ENV_FONT_NAME, "Arial")
    monkeypatch.setenv(ENV_BASE_FONT_SIZE, "12")
    monkeypatch.setenv(ENV_PAGE_SIZE, "letter")
    monkeypatch.setenv(ENV_HEADING_STYLES, str(styles_path))

    options = RenderOptions.from_env(dotenv_path=str(tmp_path / "missing.env"), margin_left=36)

    assert options.font_name == "Arial"
    assert options.base_font_size == 12.0
    assert options.page_size == "LETTER"
    assert options.margin_left == 36
    assert sorted(options.heading_styles) == [2, 3]


def test_options_from_env_rejects_bad_font_size(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_BASE_FONT_SIZE, "large")
    with pytest.raises(ValidationError):
        RenderOptions.from_env(dotenv_path=str(tmp_path / "missing.env"))


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
