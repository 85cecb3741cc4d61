"""Font Manager Module

Handles font registration for PDF export and the fallback chain used when the
configured font family is not installed.
"""
import os
from typing import List

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from ..config import DEFAULT_FONT_NAME, DEFAULT_FONTS_DIR
from ..exceptions import FontError
from ..utils import get_logger

LOGGER = get_logger(__name__)

# Fallback TrueType fonts (regular, bold) tried after the configured family
_FALLBACK_FONTS = [
    ('DejaVuSans', '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
     '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf'),
    ('DejaVuSans', '/usr/share/fonts/dejavu/DejaVuSans.ttf',
     '/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf'),
    ('LiberationSans', '/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf',
     '/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf'),
]


class FontManager:
    """Registers the document font family with ReportLab.

    Lookup order:
    1. Fonts already known to ReportLab (registered or standard Type 1)
    2. <fonts_dir>/<font_name>-Regular.ttf or <fonts_dir>/<font_name>.ttf
       (bold: <font_name>-Bold.ttf)
    3. DejaVu Sans / Liberation Sans system paths
    4. Helvetica (built in, never fails)

    Attributes:
        font_name: Name of the registered regular font
        font_name_bold: Name of the registered bold font
    """

    def __init__(self, font_name: str = DEFAULT_FONT_NAME, fonts_dir: str = DEFAULT_FONTS_DIR):
        self.requested_font_name = font_name
        self.fonts_dir = fonts_dir
        self.font_name = 'Helvetica'
        self.font_name_bold = 'Helvetica-Bold'
        self._setup_fonts()

    def _candidate_paths(self, suffixes: List[str]) -> List[str]:
        return [os.path.join(self.fonts_dir, f"{self.requested_font_name}{suffix}.ttf") for suffix in suffixes]

    def _setup_fonts(self):
        """Register the configured family, falling back along the chain."""
        registered = set(pdfmetrics.getRegisteredFontNames()) | set(pdfmetrics.standardFonts)
        if self.requested_font_name in registered:
            self.font_name = self.requested_font_name
            bold_name = f"{self.requested_font_name}-Bold"
            self.font_name_bold = bold_name if bold_name in registered else self.font_name
            return

        for path in self._candidate_paths(['-Regular', '']):
            if os.path.exists(path):
                self.font_name = self.register_font(self.requested_font_name, path)
                self.font_name_bold = self.font_name
                for bold_path in self._candidate_paths(['-Bold']):
                    if os.path.exists(bold_path):
                        self.font_name_bold = self.register_font(f"{self.requested_font_name}-Bold", bold_path)
                if self.font_name_bold == self.font_name:
                    LOGGER.warning("Bold variant of %s not found, using regular font for bold text",
                                   self.requested_font_name)
                LOGGER.debug("Registered font %s from %s", self.font_name, path)
                return

        for family, regular_path, bold_path in _FALLBACK_FONTS:
            if os.path.exists(regular_path):
                try:
                    self.font_name = self.register_font(family, regular_path)
                except FontError as e:
                    LOGGER.debug("Skipping fallback font %s: %s", regular_path, e)
                    continue
                self.font_name_bold = self.font_name
                if os.path.exists(bold_path):
                    try:
                        self.font_name_bold = self.register_font(f"{family}-Bold", bold_path)
                    except FontError as e:
                        LOGGER.debug("Skipping fallback bold font %s: %s", bold_path, e)
                LOGGER.warning("Font %s not found in %s, using %s",
                               self.requested_font_name, self.fonts_dir, self.font_name)
                return

        LOGGER.warning("Font %s not found, using Helvetica", self.requested_font_name)

    @staticmethod
    def register_font(name: str, path: str) -> str:
        """
        Register a TrueType font file under the given name.

        Raises:
            FontError: If the file is not a usable TrueType font
        """
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except TTFError as e:
            raise FontError(f"Could not register font '{name}' from {path}: {e}")
        return name

    def get_font_name(self, bold: bool = False) -> str:
        """
        Get the registered font name.

        Args:
            bold: If True, return the bold variant; otherwise return regular font

        Returns:
            Font name string suitable for use with ReportLab
        """
        return self.font_name_bold if bold else self.font_name
