"""Word Exporter Module

Serializes the document model to a .docx package with python-docx.
"""
import io
from typing import Iterable

from docx import Document as DocxDocument
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from ..config import BAND_COLOR, HYPERLINK_COLOR
from ..document_model import (
    Document,
    Hyperlink,
    Inline,
    LineBreak,
    PageField,
    Paragraph,
    Picture,
    SectionBreak,
    Table,
    TableCell,
    TextRun,
)
from ..utils import get_logger, points_to_twips, rgb_to_hex

LOGGER = get_logger(__name__)

_ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
}

_FIELD_INSTRUCTIONS = {
    "page": "PAGE",
    "num_pages": "NUMPAGES",
}


def _set_cell_shading(cell, color) -> None:
    """Apply background shading to a table cell."""
    tc_pr = cell._element.get_or_add_tcPr()
    shading = OxmlElement("w:shd")
    shading.set(qn("w:fill"), rgb_to_hex(color))
    shading.set(qn("w:val"), "clear")
    tc_pr.append(shading)


def _set_cell_margins(cell, padding: float) -> None:
    """Set the same cell margin on every side, padding given in points."""
    tc_pr = cell._element.get_or_add_tcPr()
    tc_mar = OxmlElement("w:tcMar")
    # CT_TcMar child order
    for side in ("top", "start", "bottom", "end"):
        el = OxmlElement(f"w:{side}")
        el.set(qn("w:w"), str(points_to_twips(padding)))
        el.set(qn("w:type"), "dxa")
        tc_mar.append(el)
    tc_pr.append(tc_mar)


def _remove_table_borders(table) -> None:
    """Explicitly switch off every table border."""
    tbl_pr = table._element.tblPr
    borders = OxmlElement("w:tblBorders")
    for edge in ("top", "left", "bottom", "right", "insideH", "insideV"):
        el = OxmlElement(f"w:{edge}")
        el.set(qn("w:val"), "nil")
        borders.append(el)
    tbl_pr.insert_element_before(
        borders, "w:shd", "w:tblLayout", "w:tblCellMar", "w:tblLook", "w:tblCaption", "w:tblDescription"
    )


def _add_bottom_border(paragraph, color, thickness: float) -> None:
    """Add a bottom border to a paragraph; thickness in points."""
    p_pr = paragraph._element.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    # w:sz is in eighths of a point; Word's minimum is 2
    bottom.set(qn("w:sz"), str(max(2, int(round(thickness * 8)))))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), rgb_to_hex(color))
    p_bdr.append(bottom)
    p_pr.append(p_bdr)


def _add_hyperlink(paragraph, text: str, url: str) -> None:
    """Add a clickable hyperlink run to a paragraph."""
    part = paragraph.part
    r_id = part.relate_to(
        url,
        "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink",
        is_external=True,
    )
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)

    run_el = OxmlElement("w:r")
    rPr = OxmlElement("w:rPr")
    color_el = OxmlElement("w:color")
    color_el.set(qn("w:val"), rgb_to_hex(HYPERLINK_COLOR))
    rPr.append(color_el)
    u_el = OxmlElement("w:u")
    u_el.set(qn("w:val"), "single")
    rPr.append(u_el)
    run_el.append(rPr)

    t_el = OxmlElement("w:t")
    t_el.set(qn("xml:space"), "preserve")
    t_el.text = text
    run_el.append(t_el)

    hyperlink.append(run_el)
    paragraph._element.append(hyperlink)


def _add_field(paragraph, instruction: str) -> None:
    """Add a complex field (e.g. PAGE) whose value Word computes on open."""
    run = paragraph.add_run()
    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = instruction
    separate = OxmlElement("w:fldChar")
    separate.set(qn("w:fldCharType"), "separate")
    placeholder = OxmlElement("w:t")
    placeholder.text = "1"
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")
    for el in (begin, instr, separate, placeholder, end):
        run._r.append(el)


class DocxExporter:
    """Produce a .docx byte stream from the document model."""

    def __init__(self, band_color=BAND_COLOR):
        self.band_color = band_color

    def render(self, model: Document) -> io.BytesIO:
        """
        Build the Word document and return it as a stream at position 0.

        The model is only read; repeated calls yield equivalent output.
        """
        docx = DocxDocument()
        self._setup_page(docx, model)
        self._setup_styles(docx, model)

        for block in model.blocks:
            if isinstance(block, Paragraph):
                self._write_paragraph(docx.add_paragraph(), block)
            elif isinstance(block, Table):
                self._write_table(docx, block)
            elif isinstance(block, SectionBreak):
                self._write_section_break(docx.add_paragraph(), block)

        self._write_header(docx, model)
        self._write_footer(docx, model)

        stream = io.BytesIO()
        docx.save(stream)
        stream.seek(0)
        LOGGER.debug("Exported docx (%d bytes)", len(stream.getbuffer()))
        return stream

    def _setup_page(self, docx, model: Document) -> None:
        geometry = model.sections[0].geometry
        section = docx.sections[0]
        section.page_width = Pt(geometry.width)
        section.page_height = Pt(geometry.height)
        section.left_margin = Pt(geometry.margin_left)
        section.right_margin = Pt(geometry.margin_right)
        section.top_margin = Pt(geometry.margin_top)
        section.bottom_margin = Pt(geometry.margin_bottom)

    def _setup_styles(self, docx, model: Document) -> None:
        normal = docx.styles["Normal"]
        normal.font.name = model.font_name
        normal.font.size = Pt(model.base_font_size)

        for style in model.styles.all():
            docx_style = docx.styles.add_style(style.name, WD_STYLE_TYPE.PARAGRAPH)
            docx_style.base_style = normal
            docx_style.font.size = Pt(style.font_size)
            docx_style.font.bold = style.bold

    def _write_paragraph(self, p, paragraph: Paragraph) -> None:
        if paragraph.style is not None:
            p.style = paragraph.style.name
        p.alignment = _ALIGNMENTS.get(paragraph.alignment, WD_ALIGN_PARAGRAPH.LEFT)
        if paragraph.keep_with_next:
            p.paragraph_format.keep_with_next = True
        if paragraph.space_after is not None:
            p.paragraph_format.space_after = Pt(paragraph.space_after)
        self._write_inlines(p, paragraph.inlines)

    def _write_inlines(self, p, inlines: Iterable[Inline]) -> None:
        for inline in inlines:
            if isinstance(inline, TextRun):
                run = p.add_run(inline.text)
                # Unset rather than False so heading styles keep their bold
                if inline.bold:
                    run.bold = True
            elif isinstance(inline, Hyperlink):
                _add_hyperlink(p, inline.text, inline.target)
            elif isinstance(inline, LineBreak):
                p.add_run().add_break(WD_BREAK.LINE)
            elif isinstance(inline, Picture):
                p.add_run().add_picture(io.BytesIO(inline.data), width=Pt(inline.width), height=Pt(inline.height))
            elif isinstance(inline, PageField):
                _add_field(p, _FIELD_INSTRUCTIONS[inline.kind])

    def _write_cell(self, docx_cell, cell: TableCell) -> None:
        paragraphs = cell.paragraphs or [Paragraph()]
        self._write_paragraph(docx_cell.paragraphs[0], paragraphs[0])
        for paragraph in paragraphs[1:]:
            self._write_paragraph(docx_cell.add_paragraph(), paragraph)
        if cell.shaded:
            _set_cell_shading(docx_cell, self.band_color)
        if cell.padding:
            _set_cell_margins(docx_cell, cell.padding)

    def _write_table(self, docx, table: Table) -> None:
        docx_table = docx.add_table(rows=0, cols=len(table.column_widths))
        docx_table.autofit = False
        if not table.borders:
            _remove_table_borders(docx_table)
        for column, width in zip(docx_table.columns, table.column_widths):
            column.width = Pt(width)

        for row in table.rows:
            docx_row = docx_table.add_row()
            for docx_cell, cell, width in zip(docx_row.cells, row.cells, table.column_widths):
                docx_cell.width = Pt(width)
                self._write_cell(docx_cell, cell)

    def _write_section_break(self, p, marker: SectionBreak) -> None:
        # Border goes in first; python-docx inserts spacing and keepNext in schema order around it
        _add_bottom_border(p, marker.color, marker.thickness)
        p.paragraph_format.space_before = Pt(marker.padding)
        p.paragraph_format.space_after = Pt(marker.padding)
        if marker.keep_with_next:
            p.paragraph_format.keep_with_next = True

    def _write_header(self, docx, model: Document) -> None:
        header_state = model.header
        if not header_state.cells:
            return

        header = docx.sections[0].header
        header.is_linked_to_previous = False
        width = header_state.preferred_width or model.sections[0].paragraph_width
        table = header.add_table(rows=1, cols=len(header_state.cells), width=Pt(width))
        table.autofit = header_state.autofit
        if not header_state.borders:
            _remove_table_borders(table)
        for docx_cell, cell in zip(table.rows[0].cells, header_state.cells):
            self._write_cell(docx_cell, cell)

    def _write_footer(self, docx, model: Document) -> None:
        if not model.footer.paragraphs:
            return

        footer = docx.sections[0].footer
        footer.is_linked_to_previous = False
        first, rest = model.footer.paragraphs[0], model.footer.paragraphs[1:]
        self._write_paragraph(footer.paragraphs[0], first)
        for paragraph in rest:
            self._write_paragraph(footer.add_paragraph(), paragraph)
