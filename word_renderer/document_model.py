"""Document Model

In-memory representation of authored content. Blocks and inlines are plain
dataclasses combined into tagged unions; the export backends dispatch on the
concrete type.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union, TYPE_CHECKING

from .config import (
    CELL_PADDING,
    HEADER_SPACE_AFTER,
    SECTION_BREAK_COLOR,
    SECTION_BREAK_PADDING,
    SECTION_BREAK_THICKNESS,
)

if TYPE_CHECKING:
    from .document_builder.style_registry import StyleRegistry


# Builder input records

@dataclass
class ContentText:
    """One styled run request for a paragraph."""

    text: str
    bold: bool = False
    link_target: str = ""


@dataclass
class TableContentText:
    """Text of a single table cell request."""

    text: str
    bold: bool = False
    bold_and_shaded: bool = False


@dataclass
class TableColumn:
    """Column request: a fixed width or a relative weight, plus its cells.

    Attributes:
        width: Absolute width in points, or a relative weight when is_relative is set
        is_relative: True if width is a share of the space left by fixed columns
        rows: Cell texts, one per table row
    """

    width: float
    is_relative: bool = False
    rows: List[TableContentText] = field(default_factory=list)


# Styles

@dataclass(frozen=True)
class ParagraphStyle:
    """Named paragraph style sized relative to the document base font."""

    name: str
    size_multiplier: float
    bold: bool
    base_font_size: float

    @property
    def font_size(self) -> float:
        return self.base_font_size * self.size_multiplier


# Inlines

@dataclass
class TextRun:
    text: str
    bold: bool = False


@dataclass
class Hyperlink:
    target: str
    text: str


@dataclass
class LineBreak:
    pass


@dataclass
class Picture:
    """Inline image with its laid-out size in points."""

    data: bytes
    content_type: Optional[str]
    width: float
    height: float


@dataclass
class PageField:
    """Page number field, kind is "page" or "num_pages"."""

    kind: str


Inline = Union[TextRun, Hyperlink, LineBreak, Picture, PageField]


# Blocks

@dataclass
class Paragraph:
    inlines: List[Inline] = field(default_factory=list)
    style: Optional[ParagraphStyle] = None
    alignment: str = "left"
    keep_with_next: bool = False
    space_after: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return not self.inlines


@dataclass
class TableCell:
    paragraphs: List[Paragraph] = field(default_factory=list)
    shaded: bool = False
    padding: float = CELL_PADDING


@dataclass
class TableRow:
    cells: List[TableCell] = field(default_factory=list)


@dataclass
class Table:
    column_widths: List[float]
    rows: List[TableRow] = field(default_factory=list)
    borders: bool = False


@dataclass
class SectionBreak:
    """Thin horizontal rule dividing content blocks."""

    width: float
    thickness: float = SECTION_BREAK_THICKNESS
    color: Tuple[int, int, int] = SECTION_BREAK_COLOR
    padding: float = SECTION_BREAK_PADDING
    keep_with_next: bool = True


Block = Union[Paragraph, Table, SectionBreak]


# Containers

@dataclass
class PageGeometry:
    """Page size and margins in points."""

    width: float
    height: float
    margin_left: float
    margin_right: float
    margin_top: float
    margin_bottom: float

    @property
    def paragraph_width(self) -> float:
        """Width available to body content between the side margins."""
        return self.width - self.margin_left - self.margin_right


@dataclass
class Section:
    geometry: PageGeometry
    blocks: List[Block] = field(default_factory=list)

    @property
    def paragraph_width(self) -> float:
        return self.geometry.paragraph_width


@dataclass
class HeaderState:
    """Running page header: one borderless row of cells, sized by the backend."""

    cells: List[TableCell] = field(default_factory=list)
    preferred_width: Optional[float] = None
    space_after: float = HEADER_SPACE_AFTER
    borders: bool = False
    autofit: bool = True


@dataclass
class FooterState:
    paragraphs: List[Paragraph] = field(default_factory=list)


@dataclass
class Document:
    """Root of the model consumed by the export backends."""

    styles: "StyleRegistry"
    font_name: str
    base_font_size: float
    sections: List[Section] = field(default_factory=list)
    header: HeaderState = field(default_factory=HeaderState)
    footer: FooterState = field(default_factory=FooterState)

    @property
    def blocks(self) -> List[Block]:
        """All blocks from all sections in rendering order."""
        all_blocks = []
        for section in self.sections:
            all_blocks.extend(section.blocks)
        return all_blocks
