"""Table Layout Module

Resolves table column widths from mixed fixed/relative column requests and
assembles the table model:
- Fixed columns keep their absolute width
- Relative columns share the width left over after fixed columns
- Optional banded shading on odd rows
"""
from typing import List, Sequence

from ..config import CELL_PADDING
from ..document_model import (
    Paragraph,
    Table,
    TableCell,
    TableColumn,
    TableContentText,
    TableRow,
)
from ..exceptions import ColumnFitError
from ..utils import get_logger
from .text_splitter import TextRunSplitter

LOGGER = get_logger(__name__)


def compute_column_widths(columns: Sequence[TableColumn], available_width: float) -> List[float]:
    """
    Compute the absolute width of every column.

    Args:
        columns: Column requests in table order
        available_width: Paragraph width the table must fill, in points

    Returns:
        Absolute widths parallel to columns (empty list for no columns)

    Raises:
        ColumnFitError: If relative columns exist and fixed widths exceed available_width

    Examples:
        >>> compute_column_widths([TableColumn(100), TableColumn(1, True)], 300)
        [100, 200.0]
    """
    if not columns:
        return []

    fixed_sum = sum(col.width for col in columns if not col.is_relative)
    relative_sum = sum(col.width for col in columns if col.is_relative)
    remaining = available_width - fixed_sum
    has_relative = any(col.is_relative for col in columns)

    if remaining < 0:
        if has_relative:
            raise ColumnFitError(fixed_sum, available_width)
        LOGGER.warning(
            "Fixed column widths (%.1fpt) exceed available width (%.1fpt)", fixed_sum, available_width
        )

    ratio = remaining / relative_sum if relative_sum > 0 else 0.0

    widths = []
    for col in columns:
        if col.is_relative:
            widths.append(col.width * ratio)
        else:
            widths.append(col.width)
    return widths


def apply_banding(rows: Sequence[TableRow]) -> None:
    """Shade every cell of the odd rows (0-based indices 1, 3, 5, ...)."""
    for i, row in enumerate(rows):
        if i % 2 == 1:
            for cell in row.cells:
                cell.shaded = True


class TableLayoutEngine:
    """Builds table models with resolved column widths."""

    def __init__(self, splitter: TextRunSplitter = None, cell_padding: float = CELL_PADDING):
        self.splitter = splitter or TextRunSplitter()
        self.cell_padding = cell_padding

    def text_cell(self, content: TableContentText) -> TableCell:
        """
        Build a single-paragraph cell from a cell text request.

        Bold-and-shaded cells are rendered bold and get the shading flag.
        """
        inlines = self.splitter.split(content.text, content.bold or content.bold_and_shaded, "")
        return TableCell(
            paragraphs=[Paragraph(inlines=inlines)],
            shaded=content.bold_and_shaded,
            padding=self.cell_padding,
        )

    def layout(self, columns: Sequence[TableColumn], available_width: float,
               use_banded_rows: bool = False) -> Table:
        """
        Build the table model for the given columns.

        The first column's row count drives the number of rows; every column
        is expected to carry the same number of rows.

        Args:
            columns: Non-empty list of column requests
            available_width: Paragraph width in points
            use_banded_rows: If True, shade odd rows after widths are resolved

        Returns:
            Borderless Table with absolute column widths
        """
        widths = compute_column_widths(columns, available_width)

        rows = []
        for i in range(len(columns[0].rows)):
            rows.append(TableRow(cells=[self.text_cell(col.rows[i]) for col in columns]))

        if use_banded_rows:
            apply_banding(rows)

        LOGGER.debug("Laid out table: %d columns x %d rows, widths=%s", len(columns), len(rows), widths)
        return Table(column_widths=widths, rows=rows, borders=False)
