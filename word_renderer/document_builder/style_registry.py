"""Style Registry Module

Holds the heading paragraph styles registered when a document model is created.
"""
from typing import Dict, List, Mapping

from ..config import HEADING_STYLES
from ..document_model import ParagraphStyle
from ..exceptions import UnsupportedHeadingLevelError


class StyleRegistry:
    """Heading styles keyed by heading level.

    Styles come from a data table (level -> name, size multiplier, bold), so
    new levels or different sizing need no code changes.
    """

    def __init__(self, base_font_size: float, heading_styles: Mapping[int, Mapping] = None):
        """
        Initialize the registry and register every heading style in the table.

        Args:
            base_font_size: Document base font size in points
            heading_styles: Level -> {"name", "size_multiplier", "bold"}; defaults to config.HEADING_STYLES
        """
        self.base_font_size = base_font_size
        self._styles: Dict[int, ParagraphStyle] = {}

        table = heading_styles if heading_styles is not None else HEADING_STYLES
        for level in sorted(table):
            definition = table[level]
            self._styles[level] = ParagraphStyle(
                name=definition.get("name", f"H{level}"),
                size_multiplier=definition["size_multiplier"],
                bold=definition.get("bold", False),
                base_font_size=base_font_size,
            )

    def heading(self, level: int) -> ParagraphStyle:
        """
        Look up the style registered for a heading level.

        Raises:
            UnsupportedHeadingLevelError: If no style is registered for the level
        """
        try:
            return self._styles[level]
        except KeyError:
            raise UnsupportedHeadingLevelError(level, self.levels)

    @property
    def levels(self) -> List[int]:
        return sorted(self._styles)

    def all(self) -> List[ParagraphStyle]:
        """Return registered styles ordered by level."""
        return [self._styles[level] for level in self.levels]
