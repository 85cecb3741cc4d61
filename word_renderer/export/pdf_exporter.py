"""PDF Exporter Module

Serializes the document model to PDF with ReportLab platypus. The running
header and the page-numbering footer are drawn on every page from the page
callback; the total page count comes from a counting pass that precedes the
final build.
"""
import io
from functools import partial
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle as PdfParagraphStyle
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    Image as RLImage,
    PageTemplate,
    Paragraph as RLParagraph,
    Spacer,
    Table as RLTable,
    TableStyle,
)
from reportlab.platypus.flowables import HRFlowable

from ..config import (
    BAND_COLOR,
    DEFAULT_FONTS_DIR,
    FOOTER_DISTANCE,
    HEADER_DISTANCE,
    HYPERLINK_COLOR,
    LINE_HEIGHT_FACTOR,
)
from ..document_builder.font_manager import FontManager
from ..document_model import (
    Document,
    Hyperlink,
    LineBreak,
    PageField,
    Paragraph,
    Picture,
    SectionBreak,
    Table,
    TableCell,
    TextRun,
)
from ..utils import escape_attribute, escape_markup, get_logger, rgb_to_hex

LOGGER = get_logger(__name__)

_ALIGNMENTS = {
    "left": TA_LEFT,
    "right": TA_RIGHT,
    "center": TA_CENTER,
}

_IMAGE_ALIGNMENTS = {
    "left": "LEFT",
    "right": "RIGHT",
    "center": "CENTER",
}


def _rl_color(rgb) -> colors.Color:
    r, g, b = rgb
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


class PdfExporter:
    """Produce a PDF byte stream from the document model."""

    def __init__(self, fonts_dir: str = DEFAULT_FONTS_DIR, band_color=BAND_COLOR):
        """
        Initialize PDF exporter.

        Args:
            fonts_dir: Directory searched for the document font's TrueType files
            band_color: RGB background of shaded table cells
        """
        self.fonts_dir = fonts_dir
        self.band_color = band_color
        self.font_manager = None
        self.header_height = 0.0
        self.top_margin = None
        self._heading_styles = {}
        self._body_style = None

    def render(self, model: Document) -> io.BytesIO:
        """
        Build the PDF and return it as a stream at position 0.

        The model is only read; repeated calls yield equivalent output.
        """
        self.font_manager = FontManager(model.font_name, self.fonts_dir)
        self._setup_styles(model)
        self._reserve_header_space(model)

        # Counting pass: header/footer live in the margins, so pagination is
        # identical in both passes.
        total_pages = self._build(io.BytesIO(), model, total_pages=None)

        stream = io.BytesIO()
        self._build(stream, model, total_pages=total_pages)
        stream.seek(0)
        LOGGER.debug("Exported PDF: %d pages (%d bytes)", total_pages, len(stream.getbuffer()))
        return stream

    def _setup_styles(self, model: Document):
        """Create the body style and one style per registered heading."""
        base = model.base_font_size
        self._body_style = PdfParagraphStyle(
            'Body',
            fontName=self.font_manager.get_font_name(bold=False),
            fontSize=base,
            leading=base * LINE_HEIGHT_FACTOR,
            alignment=TA_LEFT,
        )
        self._heading_styles = {}
        for style in model.styles.all():
            self._heading_styles[style.name] = PdfParagraphStyle(
                style.name,
                parent=self._body_style,
                fontName=self.font_manager.get_font_name(bold=style.bold),
                fontSize=style.font_size,
                leading=style.font_size * LINE_HEIGHT_FACTOR,
                spaceBefore=style.font_size * 0.5,
                spaceAfter=style.font_size * 0.25,
            )

    def _build(self, target, model: Document, total_pages: Optional[int]) -> int:
        geometry = model.sections[0].geometry
        doc = BaseDocTemplate(
            target,
            pagesize=(geometry.width, geometry.height),
            leftMargin=geometry.margin_left,
            rightMargin=geometry.margin_right,
            topMargin=self.top_margin,
            bottomMargin=geometry.margin_bottom,
        )
        frame = Frame(
            doc.leftMargin, doc.bottomMargin, doc.width, doc.height,
            id='content', leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0,
        )
        on_page = partial(self._draw_page_decorations, model=model, total_pages=total_pages)
        doc.addPageTemplates([PageTemplate(id='page', frames=[frame], onPage=on_page)])
        doc.build(self._build_story(model))
        return doc.page

    # Story

    def _build_story(self, model: Document) -> list:
        story = []
        for block in model.blocks:
            if isinstance(block, Paragraph):
                story.extend(self._paragraph_flowables(block))
            elif isinstance(block, Table):
                table = self._table_flowable(block)
                if table is not None:
                    story.append(table)
            elif isinstance(block, SectionBreak):
                story.append(self._section_break_flowable(block))
        return story

    def _paragraph_style(self, paragraph: Paragraph, use_spacing: bool = True) -> PdfParagraphStyle:
        parent = self._body_style
        if paragraph.style is not None:
            parent = self._heading_styles.get(paragraph.style.name, self._body_style)

        overrides = {
            'alignment': _ALIGNMENTS.get(paragraph.alignment, TA_LEFT),
            'keepWithNext': 1 if paragraph.keep_with_next else 0,
        }
        if not use_spacing:
            overrides['spaceBefore'] = 0
            overrides['spaceAfter'] = 0
        elif paragraph.space_after is not None:
            overrides['spaceAfter'] = paragraph.space_after
        return PdfParagraphStyle(f'{parent.name}_derived', parent=parent, **overrides)

    def _inline_markup(self, inline, bold_default: bool) -> str:
        if isinstance(inline, TextRun):
            if not inline.text:
                return ""
            text = escape_markup(inline.text)
            if inline.bold and not bold_default:
                return f'<font name="{self.font_manager.get_font_name(bold=True)}">{text}</font>'
            return text
        if isinstance(inline, Hyperlink):
            return (
                f'<a href="{escape_attribute(inline.target)}" color="#{rgb_to_hex(HYPERLINK_COLOR)}">'
                f'<u>{escape_markup(inline.text)}</u></a>'
            )
        if isinstance(inline, LineBreak):
            return "<br/>"
        return ""

    def _paragraph_flowables(self, paragraph: Paragraph, use_spacing: bool = True) -> list:
        """
        Convert a paragraph into flowables.

        Text-like inlines become one Paragraph; each picture becomes an Image
        flowable placed where it occurs. An empty paragraph becomes a
        one-line spacer.
        """
        style = self._paragraph_style(paragraph, use_spacing)
        if paragraph.is_empty:
            return [Spacer(1, style.leading)] if use_spacing else []

        bold_default = paragraph.style is not None and paragraph.style.bold
        flowables = []
        markup: List[str] = []
        has_text = False

        def flush():
            if has_text:
                flowables.append(RLParagraph("".join(markup), style))
            markup.clear()

        for inline in paragraph.inlines:
            if isinstance(inline, Picture):
                flush()
                has_text = False
                image = RLImage(io.BytesIO(inline.data), width=inline.width, height=inline.height)
                image.hAlign = _IMAGE_ALIGNMENTS.get(paragraph.alignment, "LEFT")
                flowables.append(image)
            else:
                markup.append(self._inline_markup(inline, bold_default))
                has_text = True
        flush()

        if paragraph.keep_with_next and flowables:
            flowables[-1].keepWithNext = 1
        return flowables

    def _cell_flowables(self, cell: TableCell, use_spacing: bool = True) -> list:
        flowables = []
        for paragraph in cell.paragraphs:
            flowables.extend(self._paragraph_flowables(paragraph, use_spacing))
        return flowables

    def _table_flowable(self, table: Table) -> Optional[RLTable]:
        if not table.rows:
            LOGGER.debug("Skipping table without rows")
            return None

        data = []
        commands = [('VALIGN', (0, 0), (-1, -1), 'TOP')]
        for row_index, row in enumerate(table.rows):
            data.append([self._cell_flowables(cell) for cell in row.cells])
            for col_index, cell in enumerate(row.cells):
                position = (col_index, row_index)
                commands.extend([
                    ('LEFTPADDING', position, position, cell.padding),
                    ('RIGHTPADDING', position, position, cell.padding),
                    ('TOPPADDING', position, position, cell.padding),
                    ('BOTTOMPADDING', position, position, cell.padding),
                ])
                if cell.shaded:
                    commands.append(('BACKGROUND', position, position, _rl_color(self.band_color)))
        if table.borders:
            commands.append(('GRID', (0, 0), (-1, -1), 0.5, colors.black))

        rl_table = RLTable(data, colWidths=table.column_widths, hAlign='LEFT')
        rl_table.setStyle(TableStyle(commands))
        return rl_table

    def _section_break_flowable(self, marker: SectionBreak) -> HRFlowable:
        rule = HRFlowable(
            width=marker.width,
            thickness=marker.thickness,
            color=_rl_color(marker.color),
            spaceBefore=marker.padding,
            spaceAfter=marker.padding,
            hAlign='LEFT',
        )
        if marker.keep_with_next:
            rule.keepWithNext = 1
        return rule

    # Page decorations

    def _draw_page_decorations(self, canvas, doc, model: Document, total_pages: Optional[int]):
        canvas.saveState()
        self._draw_header(canvas, doc, model)
        self._draw_footer(canvas, doc, model, total_pages)
        canvas.restoreState()

    def _header_column_widths(self, model: Document) -> List[float]:
        """Give picture cells their image width and share the rest among text cells."""
        header = model.header
        available = header.preferred_width or model.sections[0].paragraph_width

        widths: List[Optional[float]] = []
        for cell in header.cells:
            pictures = [i for p in cell.paragraphs for i in p.inlines if isinstance(i, Picture)]
            if pictures:
                widths.append(max(pic.width for pic in pictures) + 2 * cell.padding)
            else:
                widths.append(None)

        text_cells = widths.count(None)
        remaining = max(available - sum(w for w in widths if w is not None), 0)
        share = remaining / text_cells if text_cells else 0
        return [share if w is None else w for w in widths]

    def _header_table(self, model: Document) -> RLTable:
        row = [self._cell_flowables(cell, use_spacing=False) for cell in model.header.cells]
        table = RLTable([row], colWidths=self._header_column_widths(model), hAlign='LEFT')
        table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('LEFTPADDING', (0, 0), (-1, -1), 0),
            ('RIGHTPADDING', (0, 0), (-1, -1), 0),
            ('TOPPADDING', (0, 0), (-1, -1), 0),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 0),
        ]))
        return table

    def _reserve_header_space(self, model: Document):
        """
        Measure the header and push the body frame below it.

        The header is drawn HEADER_DISTANCE from the page top; the body starts
        no higher than the header bottom plus the header's space-after.
        """
        geometry = model.sections[0].geometry
        self.header_height = 0.0
        self.top_margin = geometry.margin_top
        if not model.header.cells:
            return

        _, self.header_height = self._header_table(model).wrap(geometry.paragraph_width, geometry.height)
        needed = HEADER_DISTANCE + self.header_height + model.header.space_after
        if needed > self.top_margin:
            LOGGER.debug("Header needs %.1fpt, top margin raised from %.1fpt", needed, self.top_margin)
            self.top_margin = needed

    def _draw_header(self, canvas, doc, model: Document):
        if not model.header.cells:
            return

        table = self._header_table(model)
        _, page_height = doc.pagesize
        _, height = table.wrapOn(canvas, doc.width, doc.topMargin)
        table.drawOn(canvas, doc.leftMargin, page_height - HEADER_DISTANCE - height)

    def _draw_footer(self, canvas, doc, model: Document, total_pages: Optional[int]):
        page_width, _ = doc.pagesize
        page_number = str(canvas.getPageNumber())
        total = str(total_pages) if total_pages else page_number

        canvas.setFont(self.font_manager.get_font_name(), model.base_font_size)
        y = FOOTER_DISTANCE
        for paragraph in model.footer.paragraphs:
            text = "".join(self._footer_text(inline, page_number, total) for inline in paragraph.inlines)
            if paragraph.alignment == "right":
                canvas.drawRightString(page_width - doc.rightMargin, y, text)
            elif paragraph.alignment == "center":
                canvas.drawCentredString(page_width / 2, y, text)
            else:
                canvas.drawString(doc.leftMargin, y, text)
            y -= model.base_font_size * LINE_HEIGHT_FACTOR

    @staticmethod
    def _footer_text(inline, page_number: str, total_pages: str) -> str:
        if isinstance(inline, TextRun):
            return inline.text
        if isinstance(inline, PageField):
            return page_number if inline.kind == "page" else total_pages
        return ""
