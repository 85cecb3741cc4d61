"""Header and Footer Compositor Module

Assembles the running page header (logo image and subtitle cells in a single
borderless row) and the page-numbering footer.
"""
from ..config import SUBTITLE_HEADING_LEVEL
from ..document_model import (
    FooterState,
    HeaderState,
    PageField,
    Paragraph,
    TableCell,
    TextRun,
)
from ..utils import get_logger
from .image_scaler import ImageScaler
from .style_registry import StyleRegistry

LOGGER = get_logger(__name__)


class HeaderCompositor:
    """Appends header cells left to right in call order.

    No column widths are set; the rendering backend fits the row to its
    contents.
    """

    def __init__(self, header: HeaderState, styles: StyleRegistry, image_scaler: ImageScaler = None):
        self.header = header
        self.styles = styles
        self.image_scaler = image_scaler or ImageScaler()

    def add_logo(self, width: float, data: bytes, content_type: str = None) -> TableCell:
        """
        Append a cell holding the logo image scaled to an explicit width.

        Args:
            width: Target logo width in points
            data: Encoded image bytes
            content_type: Optional MIME type of the image

        Returns:
            The appended cell
        """
        picture = self.image_scaler.fit(data, content_type, width)
        cell = TableCell(
            paragraphs=[Paragraph(inlines=[picture], space_after=self.header.space_after)],
            padding=0,
        )
        self.header.cells.append(cell)
        LOGGER.debug("Header logo added at %.1fx%.1fpt", picture.width, picture.height)
        return cell

    def add_subtitle(self, text: str) -> TableCell:
        """Append a right-aligned subtitle cell in the subtitle heading style."""
        paragraph = Paragraph(
            inlines=[TextRun(text=text)],
            style=self.styles.heading(SUBTITLE_HEADING_LEVEL),
            alignment="right",
            space_after=self.header.space_after,
        )
        cell = TableCell(paragraphs=[paragraph], padding=0)
        self.header.cells.append(cell)
        LOGGER.debug("Header subtitle added: %r", text)
        return cell


class FooterCompositor:
    """Builds the running footer."""

    def __init__(self, footer: FooterState):
        self.footer = footer

    def page_numbering(self) -> Paragraph:
        """Set a right-aligned "<page> of <total pages>" footer paragraph."""
        paragraph = Paragraph(
            inlines=[PageField("page"), TextRun(text=" of "), PageField("num_pages")],
            alignment="right",
        )
        self.footer.paragraphs = [paragraph]
        return paragraph
