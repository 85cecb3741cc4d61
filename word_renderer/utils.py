"""Utilities Module

Helper functions shared by the builder and the export backends.
"""
import logging
from typing import Optional, Tuple

_DEFAULT_LEVEL = logging.INFO

# Pillow format name -> MIME type
_IMAGE_CONTENT_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
    "WEBP": "image/webp",
}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return logger


def pixels_to_points(pixels: float, dpi: float) -> float:
    """
    Convert pixel measurement to points.

    Args:
        pixels: Measurement in pixels
        dpi: Dots per inch

    Returns:
        Measurement in points (1 point = 1/72 inch)

    Examples:
        >>> pixels_to_points(96, 96)
        72.0
    """
    return pixels / dpi * 72


def points_to_twips(points: float) -> int:
    """Convert points to twips (1/20th of a point)."""
    return int(round(points * 20))


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    """Format an RGB triple as an uppercase hex string without '#'."""
    return "{:02X}{:02X}{:02X}".format(*rgb)


def escape_markup(text: str) -> str:
    """
    Escape text for ReportLab paragraph markup.

    Args:
        text: Raw text

    Returns:
        Text with &, < and > replaced by entities
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(value: str) -> str:
    """Escape a value placed inside a double-quoted markup attribute."""
    return escape_markup(value).replace('"', "&quot;")


def content_type_for_format(image_format: Optional[str]) -> Optional[str]:
    """Map a Pillow image format name (e.g. 'PNG') to its MIME type."""
    if not image_format:
        return None
    return _IMAGE_CONTENT_TYPES.get(image_format.upper())
