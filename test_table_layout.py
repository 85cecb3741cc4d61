#!/usr/bin/env python3
"""Tests for table column width resolution and banded rows.

Usage:
    pytest test_table_layout.py
"""
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from word_renderer.document_builder import TableLayoutEngine, apply_banding, compute_column_widths
from word_renderer.document_model import TableColumn, TableContentText, TableRow, TableCell
from word_renderer.exceptions import ColumnFitError, LayoutError


def _column(width, relative=False, rows=()):
    return TableColumn(width=width, is_relative=relative, rows=[TableContentText(r) for r in rows])


def test_fixed_and_relative_columns():
    columns = [_column(100, rows=["A", "B"]), _column(1, relative=True, rows=["C", "D"])]
    assert compute_column_widths(columns, 300) == pytest.approx([100, 200])


def test_relative_columns_share_by_weight():
    columns = [_column(1, relative=True, rows=["X"]), _column(3, relative=True, rows=["Y"])]
    assert compute_column_widths(columns, 400) == pytest.approx([100, 300])


def test_widths_fill_available_width():
    columns = [
        _column(72),
        _column(2, relative=True),
        _column(36),
        _column(1, relative=True),
        _column(0.5, relative=True),
    ]
    widths = compute_column_widths(columns, 451.3)
    assert sum(widths) == pytest.approx(451.3)
    # Relative widths keep their weight ratios
    assert widths[1] / widths[3] == pytest.approx(2.0)
    assert widths[3] / widths[4] == pytest.approx(2.0)


def test_fixed_widths_are_kept_verbatim():
    columns = [_column(120), _column(80)]
    assert compute_column_widths(columns, 500) == [120, 80]


def test_fixed_overflow_with_relative_column_raises():
    columns = [_column(400), _column(1, relative=True)]
    with pytest.raises(ColumnFitError) as excinfo:
        compute_column_widths(columns, 300)
    assert excinfo.value.fixed_width == 400
    assert excinfo.value.available_width == 300
    assert isinstance(excinfo.value, LayoutError)


def test_fixed_overflow_without_relative_columns_warns(caplog):
    columns = [_column(200), _column(200)]
    widths = compute_column_widths(columns, 300)
    assert widths == [200, 200]
    assert "exceed available width" in caplog.text


def test_no_columns_gives_no_widths():
    assert compute_column_widths([], 300) == []


def test_banding_shades_odd_rows():
    rows = [TableRow(cells=[TableCell(), TableCell()]) for _ in range(4)]
    apply_banding(rows)
    shaded = [all(cell.shaded for cell in row.cells) for row in rows]
    assert shaded == [False, True, False, True]


def test_layout_builds_rows_from_columns():
    engine = TableLayoutEngine(cell_padding=4)
    columns = [_column(100, rows=["A", "B"]), _column(1, relative=True, rows=["C", "D"])]

    table = engine.layout(columns, 300)

    assert table.column_widths == pytest.approx([100, 200])
    assert table.borders is False
    assert len(table.rows) == 2
    texts = [[cell.paragraphs[0].inlines[0].text for cell in row.cells] for row in table.rows]
    assert texts == [["A", "C"], ["B", "D"]]
    assert all(cell.padding == 4 for row in table.rows for cell in row.cells)
    assert not any(cell.shaded for row in table.rows for cell in row.cells)


def test_layout_with_banded_rows():
    engine = TableLayoutEngine()
    columns = [_column(1, relative=True, rows=["1", "2", "3", "4"])]

    table = engine.layout(columns, 200, use_banded_rows=True)

    assert [row.cells[0].shaded for row in table.rows] == [False, True, False, True]


def test_bold_and_shaded_cell():
    engine = TableLayoutEngine()
    cell = engine.text_cell(TableContentText("Total", bold_and_shaded=True))
    run = cell.paragraphs[0].inlines[0]
    assert cell.shaded is True
    assert run.bold is True


def test_cell_text_keeps_line_breaks():
    engine = TableLayoutEngine()
    cell = engine.text_cell(TableContentText("one\ntwo", bold=True))
    kinds = [type(inline).__name__ for inline in cell.paragraphs[0].inlines]
    assert kinds == ["TextRun", "LineBreak", "TextRun"]
    assert cell.shaded is False


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
