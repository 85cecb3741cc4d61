"""Render Options Dataclass

Configuration options for document construction and export.
"""
import json
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from .config import (
    BAND_COLOR,
    CELL_PADDING,
    DEFAULT_BASE_FONT_SIZE,
    DEFAULT_FONT_NAME,
    DEFAULT_FONTS_DIR,
    DEFAULT_MARGIN,
    DEFAULT_PAGE_SIZE,
    ENV_BASE_FONT_SIZE,
    ENV_FONT_NAME,
    ENV_FONTS_DIR,
    ENV_HEADING_STYLES,
    ENV_PAGE_SIZE,
    HEADING_STYLES,
    PAGE_SIZES,
)
from .document_model import PageGeometry
from .exceptions import InvalidConfigurationError


def _default_heading_styles() -> Dict[int, Dict]:
    return {level: dict(style) for level, style in HEADING_STYLES.items()}


def load_heading_styles(path: str) -> Dict[int, Dict]:
    """
    Load a heading style table from a JSON file.

    The file maps heading levels to style definitions, e.g.
    ``{"2": {"name": "H2", "size_multiplier": 2.0, "bold": false}}``.

    Args:
        path: Path to the JSON file

    Returns:
        Dict keyed by integer heading level

    Raises:
        InvalidConfigurationError: If the file is not a level -> style mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise InvalidConfigurationError(f"Heading style table in {path} must be a JSON object")

    styles = {}
    for key, value in raw.items():
        try:
            level = int(key)
        except ValueError:
            raise InvalidConfigurationError(f"Heading level '{key}' in {path} is not an integer")
        if not isinstance(value, dict) or "size_multiplier" not in value:
            raise InvalidConfigurationError(f"Heading level {level} in {path} needs a size_multiplier")
        styles[level] = {
            "name": value.get("name", f"H{level}"),
            "size_multiplier": float(value["size_multiplier"]),
            "bold": bool(value.get("bold", False)),
        }
    return styles


@dataclass
class RenderOptions:
    """Configuration options for the content builder and its exporters.

    Attributes:
        font_name: Default font family for body text and headings
        base_font_size: Base font size in points; heading sizes are multiples of it
        fonts_dir: Directory searched first for TrueType files of font_name (PDF export)

        # Page Setup
        page_size: Key into config.PAGE_SIZES ("A4" or "LETTER")
        margin_left / margin_right / margin_top / margin_bottom: Page margins in points

        # Styles
        heading_styles: Level -> {"name", "size_multiplier", "bold"} table

        # Tables
        band_color: RGB shading for banded rows and bold-and-shaded cells
        cell_padding: Padding applied to every table cell, in points
    """

    font_name: str = DEFAULT_FONT_NAME
    base_font_size: float = DEFAULT_BASE_FONT_SIZE
    fonts_dir: str = DEFAULT_FONTS_DIR

    # Page Setup
    page_size: str = DEFAULT_PAGE_SIZE
    margin_left: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN
    margin_top: float = DEFAULT_MARGIN
    margin_bottom: float = DEFAULT_MARGIN

    # Styles
    heading_styles: Dict[int, Dict] = field(default_factory=_default_heading_styles)

    # Tables
    band_color: Tuple[int, int, int] = BAND_COLOR
    cell_padding: float = CELL_PADDING

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if self.base_font_size <= 0:
            raise InvalidConfigurationError(
                f"base_font_size must be positive, got {self.base_font_size}"
            )

        self.page_size = self.page_size.upper()
        if self.page_size not in PAGE_SIZES:
            raise InvalidConfigurationError(
                f"page_size must be one of {', '.join(PAGE_SIZES)}, got {self.page_size}"
            )

        margins = (self.margin_left, self.margin_right, self.margin_top, self.margin_bottom)
        if any(m < 0 for m in margins):
            raise InvalidConfigurationError(f"margins must not be negative, got {margins}")
        if self.page_geometry().paragraph_width <= 0:
            raise InvalidConfigurationError(
                f"margins leave no room for content on a {self.page_size} page"
            )

        if not self.heading_styles:
            raise InvalidConfigurationError("heading_styles must define at least one level")
        levels = sorted(self.heading_styles)
        multipliers = [self.heading_styles[level]["size_multiplier"] for level in levels]
        for previous, current in zip(multipliers, multipliers[1:]):
            if current >= previous:
                raise InvalidConfigurationError(
                    f"heading size multipliers must strictly decrease by level, got {multipliers}"
                )

        if self.cell_padding < 0:
            raise InvalidConfigurationError(
                f"cell_padding must not be negative, got {self.cell_padding}"
            )

    def page_geometry(self) -> PageGeometry:
        """Build the page geometry described by these options."""
        width, height = PAGE_SIZES[self.page_size]
        return PageGeometry(
            width=width,
            height=height,
            margin_left=self.margin_left,
            margin_right=self.margin_right,
            margin_top=self.margin_top,
            margin_bottom=self.margin_bottom,
        )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "RenderOptions":
        """
        Build options from environment variables (and a .env file if present).

        Args:
            dotenv_path: Optional explicit .env file; defaults to python-dotenv's lookup
            **overrides: Keyword values that win over the environment

        Returns:
            Validated RenderOptions
        """
        load_dotenv(dotenv_path)

        values = {}
        if os.getenv(ENV_FONT_NAME):
            values["font_name"] = os.getenv(ENV_FONT_NAME)
        if os.getenv(ENV_BASE_FONT_SIZE):
            try:
                values["base_font_size"] = float(os.getenv(ENV_BASE_FONT_SIZE))
            except ValueError:
                raise InvalidConfigurationError(
                    f"{ENV_BASE_FONT_SIZE} must be a number, got {os.getenv(ENV_BASE_FONT_SIZE)!r}"
                )
        if os.getenv(ENV_FONTS_DIR):
            values["fonts_dir"] = os.getenv(ENV_FONTS_DIR)
        if os.getenv(ENV_PAGE_SIZE):
            values["page_size"] = os.getenv(ENV_PAGE_SIZE)
        if os.getenv(ENV_HEADING_STYLES):
            values["heading_styles"] = load_heading_styles(os.getenv(ENV_HEADING_STYLES))

        values.update(overrides)
        return cls(**values)
