"""Document Builder Module

Orchestrates document construction by coordinating specialized components:
- StyleRegistry: Heading styles registered at model creation
- TextRunSplitter: Runs, hyperlinks and line breaks from text requests
- ImageScaler: Aspect-ratio-preserving image sizing
- TableLayoutEngine: Column widths and banded shading
- HeaderCompositor / FooterCompositor: Running header and page numbering

The builder holds one explicit Document model; every add_* call appends to it
and the export methods serialize it through the docx or PDF backend.
"""
import io
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from ..config import PDF_CONTENT_TYPE, WORD_CONTENT_TYPE
from ..document_model import (
    ContentText,
    Document,
    FooterState,
    HeaderState,
    Paragraph,
    Section,
    SectionBreak,
    TableColumn,
    TableContentText,
    TextRun,
)
from ..exceptions import UnsupportedExportFormatError
from ..render_options import RenderOptions
from ..utils import get_logger
from .header_compositor import FooterCompositor, HeaderCompositor
from .image_scaler import ImageScaler
from .style_registry import StyleRegistry
from .table_layout import TableLayoutEngine
from .text_splitter import TextRunSplitter

LOGGER = get_logger(__name__)


class ContentBuilder:
    """Build a Word/PDF document from high-level authoring calls.

    Example:
        builder = ContentBuilder()
        builder.add_heading("Summary", 2)
        builder.add_paragraph([ContentText("This should be Bold text", bold=True)])
        builder.add_section_break()
        pdf_stream = builder.export_as_pdf()
    """

    WORD_CONTENT_TYPE = WORD_CONTENT_TYPE
    PDF_CONTENT_TYPE = PDF_CONTENT_TYPE

    def __init__(self, options: Optional[RenderOptions] = None):
        """
        Initialize the builder and create its document model.

        Args:
            options: Render options; defaults to RenderOptions()
        """
        self.options = options or RenderOptions()

        # Initialize specialized components
        self.styles = StyleRegistry(self.options.base_font_size, self.options.heading_styles)
        self.text_splitter = TextRunSplitter()
        self.image_scaler = ImageScaler()
        self.table_layout = TableLayoutEngine(self.text_splitter, self.options.cell_padding)

        section = Section(geometry=self.options.page_geometry())
        self._document = Document(
            styles=self.styles,
            font_name=self.options.font_name,
            base_font_size=self.options.base_font_size,
            sections=[section],
            header=HeaderState(preferred_width=section.paragraph_width),
            footer=FooterState(),
        )
        self.header_compositor = HeaderCompositor(self._document.header, self.styles, self.image_scaler)
        FooterCompositor(self._document.footer).page_numbering()

    @property
    def document(self) -> Document:
        """The document model being built."""
        return self._document

    @property
    def _section(self) -> Section:
        return self._document.sections[0]

    def _append(self, block) -> None:
        self._section.blocks.append(block)

    # Headings

    def add_heading(self, text: str, level: int) -> Paragraph:
        """
        Add a heading paragraph kept with the block that follows it.

        Args:
            text: Heading text
            level: Heading level (2-6 with the default style table)

        Raises:
            UnsupportedHeadingLevelError: If no style is registered for level
        """
        style = self.styles.heading(level)
        paragraph = Paragraph(inlines=[TextRun(text=text)], style=style, keep_with_next=True)
        self._append(paragraph)
        LOGGER.debug("Added %s heading: %r", style.name, text)
        return paragraph

    def add_heading2(self, text: str) -> Paragraph:
        return self.add_heading(text, 2)

    def add_heading3(self, text: str) -> Paragraph:
        return self.add_heading(text, 3)

    def add_heading4(self, text: str) -> Paragraph:
        return self.add_heading(text, 4)

    def add_heading5(self, text: str) -> Paragraph:
        return self.add_heading(text, 5)

    def add_heading6(self, text: str) -> Paragraph:
        return self.add_heading(text, 6)

    # Body content

    def add_paragraph(self, texts: Sequence[ContentText]) -> Paragraph:
        """
        Add one paragraph made of styled and linked runs.

        Args:
            texts: Run requests in order; each may contain line breaks
        """
        paragraph = Paragraph(inlines=self.text_splitter.split_contents(texts))
        self._append(paragraph)
        LOGGER.debug("Added paragraph with %d inlines", len(paragraph.inlines))
        return paragraph

    def add_image(self, data: bytes, content_type: Optional[str] = None, name: Optional[str] = None) -> Paragraph:
        """
        Add an image scaled to the full paragraph width.

        Args:
            data: Encoded image bytes (copied into the model)
            content_type: MIME type of the image
            name: Optional label used in log messages
        """
        picture = self.image_scaler.fit(data, content_type, self._section.paragraph_width)
        paragraph = Paragraph(inlines=[picture])
        self._append(paragraph)
        LOGGER.debug("Added image %s (%.1fx%.1fpt)", name or "<unnamed>", picture.width, picture.height)
        return paragraph

    def add_section_break(self) -> SectionBreak:
        """Add a thin light-grey rule across the paragraph width."""
        marker = SectionBreak(width=self._section.paragraph_width)
        self._append(marker)
        LOGGER.debug("Added section break")
        return marker

    def add_table(self, columns: Sequence[TableColumn], use_banded_rows: bool = False):
        """
        Add a borderless table followed by an empty spacer paragraph.

        Args:
            columns: Column requests; an empty list adds nothing
            use_banded_rows: If True, shade every odd row

        Returns:
            The Table block, or None when columns is empty

        Raises:
            ColumnFitError: If fixed widths leave negative room for relative columns
        """
        if not columns:
            LOGGER.debug("Skipping table with no columns")
            return None

        table = self.table_layout.layout(columns, self._section.paragraph_width, use_banded_rows)
        self._append(table)
        self._append(Paragraph())
        return table

    # Header

    def set_header_logo(self, width: float, data: bytes, content_type: Optional[str] = None):
        """Append the header logo cell, scaled to width points."""
        return self.header_compositor.add_logo(width, data, content_type)

    def add_header_subtitle(self, text: str):
        """Append a right-aligned subtitle cell to the header row."""
        return self.header_compositor.add_subtitle(text)

    @contextmanager
    def header_section(self) -> Iterator[HeaderCompositor]:
        """
        Compose header cells as one unit.

        Cells added through the yielded compositor are committed to the
        document header when the block exits, on success and on error alike.

        Example:
            with builder.header_section() as header:
                header.add_logo(120, logo_bytes)
                header.add_subtitle("Quarterly Report")
        """
        staging = HeaderState(preferred_width=self._document.header.preferred_width)
        compositor = HeaderCompositor(staging, self.styles, self.image_scaler)
        try:
            yield compositor
        finally:
            self._document.header.cells.extend(staging.cells)
            LOGGER.debug("Committed %d header cells", len(staging.cells))

    # Dict-driven input

    def add_from_content_list(self, items: Iterable[Dict[str, Any]]):
        """
        Build content from a list of dict items (e.g. parsed JSON).

        Handles:
            - {"type": "heading", "text": ..., "level": 2-6}
            - {"type": "text", "runs": [{"text", "bold", "link_target"}]} or {"type": "text", "text": ...}
            - {"type": "image", "data": bytes, "content_type": ...}
            - {"type": "table", "columns": [{"width", "is_relative", "rows": [...]}], "use_banded_rows": bool}
            - {"type": "section_break"}

        Unknown item types are skipped with a warning.
        """
        for item in items:
            item_type = item.get("type", "")

            if item_type == "heading":
                self.add_heading(item.get("text", ""), item.get("level", 2))
            elif item_type == "text":
                runs = item.get("runs")
                if runs is None:
                    runs = [{"text": item.get("text", ""), "bold": item.get("bold", False)}]
                self.add_paragraph([
                    ContentText(
                        text=run.get("text", ""),
                        bold=run.get("bold", False),
                        link_target=run.get("link_target") or "",
                    )
                    for run in runs
                ])
            elif item_type == "image":
                self.add_image(item["data"], item.get("content_type"), item.get("name"))
            elif item_type == "table":
                self.add_table(
                    [_column_from_dict(col) for col in item.get("columns", [])],
                    use_banded_rows=item.get("use_banded_rows", False),
                )
            elif item_type == "section_break":
                self.add_section_break()
            else:
                LOGGER.warning("Skipping content item of unknown type %r", item_type)

    # Export

    def _finalize(self) -> Document:
        LOGGER.debug(
            "Finalizing document: %d blocks, %d header cells",
            len(self._document.blocks), len(self._document.header.cells),
        )
        return self._document

    def export_as_word(self) -> io.BytesIO:
        """Serialize the current model to .docx; the stream is positioned at 0."""
        from ..export.docx_exporter import DocxExporter
        return DocxExporter(band_color=self.options.band_color).render(self._finalize())

    def export_as_pdf(self) -> io.BytesIO:
        """Serialize the current model to PDF; the stream is positioned at 0."""
        from ..export.pdf_exporter import PdfExporter
        exporter = PdfExporter(fonts_dir=self.options.fonts_dir, band_color=self.options.band_color)
        return exporter.render(self._finalize())

    def export(self, output_format: str) -> io.BytesIO:
        """
        Serialize the current model to "docx" or "pdf".

        Raises:
            UnsupportedExportFormatError: For any other format
        """
        fmt = output_format.lower().lstrip(".")
        if fmt in ("docx", "word"):
            return self.export_as_word()
        if fmt == "pdf":
            return self.export_as_pdf()
        raise UnsupportedExportFormatError(output_format)


def _column_from_dict(col: Dict[str, Any]) -> TableColumn:
    rows: List[TableContentText] = []
    for row in col.get("rows", []):
        if isinstance(row, str):
            rows.append(TableContentText(text=row))
        else:
            rows.append(TableContentText(
                text=row.get("text", ""),
                bold=row.get("bold", False),
                bold_and_shaded=row.get("bold_and_shaded", False),
            ))
    return TableColumn(width=col["width"], is_relative=col.get("is_relative", False), rows=rows)


# Helper functions

def render_content_list(
    items: Iterable[Dict[str, Any]],
    output_format: str = "pdf",
    options: Optional[RenderOptions] = None,
) -> io.BytesIO:
    """
    Helper function to build and export a document from dict items.

    Args:
        items: Content items as accepted by ContentBuilder.add_from_content_list
        output_format: "docx" or "pdf"
        options: Optional render options

    Returns:
        Output stream positioned at 0
    """
    builder = ContentBuilder(options)
    builder.add_from_content_list(items)
    return builder.export(output_format)
