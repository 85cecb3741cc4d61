#!/usr/bin/env python3
"""Tests for the content builder's authoring calls."""
import io
import os
import sys

import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from word_renderer.document_builder import ContentBuilder
from word_renderer.document_model import (
    ContentText,
    Hyperlink,
    LineBreak,
    Paragraph,
    Picture,
    SectionBreak,
    Table,
    TableColumn,
    TableContentText,
    TextRun,
)
from word_renderer.exceptions import (
    ColumnFitError,
    UnsupportedExportFormatError,
    UnsupportedHeadingLevelError,
)
from word_renderer.render_options import RenderOptions


def make_png(width=800, height=400):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (0, 128, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def builder():
    return ContentBuilder()


def test_content_type_constants():
    assert ContentBuilder.WORD_CONTENT_TYPE == (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    assert ContentBuilder.PDF_CONTENT_TYPE == "application/pdf"


def test_new_builder_has_footer_and_no_blocks(builder):
    assert builder.document.blocks == []
    assert len(builder.document.footer.paragraphs) == 1
    assert builder.document.header.cells == []


def test_heading_keeps_with_next(builder):
    paragraph = builder.add_heading("Summary", 2)
    assert paragraph.keep_with_next is True
    assert paragraph.style.name == "H2"
    assert paragraph.style.font_size == pytest.approx(22)
    assert builder.document.blocks == [paragraph]


def test_heading_shortcuts(builder):
    names = [
        builder.add_heading2("a").style.name,
        builder.add_heading3("b").style.name,
        builder.add_heading4("c").style.name,
        builder.add_heading5("d").style.name,
        builder.add_heading6("e").style.name,
    ]
    assert names == ["H2", "H3", "H4", "H5", "H6"]


def test_unsupported_heading_adds_nothing(builder):
    with pytest.raises(UnsupportedHeadingLevelError):
        builder.add_heading("Title", 1)
    assert builder.document.blocks == []


def test_paragraph_runs(builder):
    paragraph = builder.add_paragraph([
        ContentText("This should be Bold text\nSecond line", bold=True),
        ContentText(" and a link", link_target="https://example.com"),
    ])
    assert paragraph.inlines == [
        TextRun("This should be Bold text", bold=True),
        LineBreak(),
        TextRun("Second line", bold=True),
        Hyperlink("https://example.com", " and a link"),
    ]


def test_image_fills_paragraph_width(builder):
    paragraph = builder.add_image(make_png(800, 400), "image/png")
    picture = paragraph.inlines[0]
    width = builder.document.sections[0].paragraph_width
    assert isinstance(picture, Picture)
    assert picture.width == pytest.approx(width)
    assert picture.height == pytest.approx(width / 2)


def test_section_break(builder):
    marker = builder.add_section_break()
    assert isinstance(marker, SectionBreak)
    assert marker.keep_with_next is True
    assert marker.thickness == pytest.approx(0.1)
    assert marker.width == pytest.approx(builder.document.sections[0].paragraph_width)


def test_empty_table_adds_nothing(builder):
    assert builder.add_table([]) is None
    assert builder.document.blocks == []


def test_table_is_followed_by_empty_paragraph(builder):
    table = builder.add_table([
        TableColumn(100, rows=[TableContentText("A"), TableContentText("B")]),
        TableColumn(1, is_relative=True, rows=[TableContentText("C"), TableContentText("D")]),
    ], use_banded_rows=True)

    blocks = builder.document.blocks
    assert len(blocks) == 2
    assert blocks[0] is table
    assert isinstance(blocks[1], Paragraph) and blocks[1].is_empty
    assert sum(table.column_widths) == pytest.approx(builder.document.sections[0].paragraph_width)
    assert [row.cells[0].shaded for row in table.rows] == [False, True]


def test_table_overflow_adds_nothing(builder):
    with pytest.raises(ColumnFitError):
        builder.add_table([TableColumn(1000), TableColumn(1, is_relative=True)])
    assert builder.document.blocks == []


def test_options_change_geometry():
    builder = ContentBuilder(RenderOptions(page_size="LETTER", margin_left=36, margin_right=36))
    assert builder.document.sections[0].paragraph_width == pytest.approx(540)
    table = builder.add_table([TableColumn(1, is_relative=True, rows=[TableContentText("x")])])
    assert table.column_widths == pytest.approx([540])


def test_add_from_content_list(builder):
    builder.add_from_content_list([
        {"type": "heading", "text": "Report", "level": 3},
        {"type": "text", "text": "Plain paragraph"},
        {"type": "text", "runs": [{"text": "Bold", "bold": True}, {"text": " link", "link_target": "https://x"}]},
        {"type": "image", "data": make_png(), "content_type": "image/png"},
        {"type": "table", "use_banded_rows": True, "columns": [
            {"width": 120, "rows": ["Name", {"text": "Total", "bold_and_shaded": True}]},
            {"width": 1, "is_relative": True, "rows": ["Value", "42"]},
        ]},
        {"type": "section_break"},
        {"type": "unknown"},
    ])

    kinds = [type(block).__name__ for block in builder.document.blocks]
    assert kinds == ["Paragraph", "Paragraph", "Paragraph", "Paragraph", "Table", "Paragraph", "SectionBreak"]
    table = builder.document.blocks[4]
    assert isinstance(table, Table)
    assert table.rows[1].cells[0].shaded is True
    assert table.rows[1].cells[0].paragraphs[0].inlines[0].bold is True


def test_unknown_content_type_is_logged(builder, caplog):
    builder.add_from_content_list([{"type": "chart"}])
    assert "unknown type" in caplog.text
    assert builder.document.blocks == []


def test_unsupported_export_format(builder):
    with pytest.raises(UnsupportedExportFormatError) as excinfo:
        builder.export("odt")
    assert excinfo.value.output_format == "odt"


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
