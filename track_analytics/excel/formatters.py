"""
Cell-level formatting: header rows, typed data cells, KPI cards, column widths.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from track_analytics.excel.styles import (
    CELL_BORDER, CENTER, DATA_FONT, HEADER_BORDER, HEADER_FILL, HEADER_FONT,
    KPI_LABEL_FONT, KPI_VALUE_FONT, LEFT, RIGHT, ZEBRA_FILL,
)

# col_type -> Excel number format; anything else is written as text
NUMBER_FORMATS = {
    "number": "#,##0",
    "float": "0.000",
}


def format_header_row(ws: Worksheet, row_num: int, labels: list[str]) -> None:
    """Write and style a header row of column labels."""
    for col_num, label in enumerate(labels, 1):
        cell = ws.cell(row=row_num, column=col_num, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def format_data_cell(ws: Worksheet, row_num: int, col_num: int, value, col_type: str = "text",
                     zebra: bool = False) -> None:
    """Write one data cell. Booleans become Yes/No, None stays blank."""
    if isinstance(value, bool):
        value = "Yes" if value else "No"
    cell = ws.cell(row=row_num, column=col_num, value=value)
    cell.font = DATA_FONT
    cell.border = CELL_BORDER

    number_format = NUMBER_FORMATS.get(col_type)
    if number_format:
        cell.number_format = number_format
        cell.alignment = RIGHT
    else:
        cell.alignment = LEFT
    if zebra:
        cell.fill = ZEBRA_FILL


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, col_type: str = "number") -> None:
    """Large value with a small caption underneath."""
    top = ws.cell(row=row, column=col, value=value)
    top.font = KPI_VALUE_FONT
    top.alignment = CENTER
    if col_type in NUMBER_FORMATS:
        top.number_format = NUMBER_FORMATS[col_type]

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font = KPI_LABEL_FONT
    caption.alignment = CENTER


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 50) -> None:
    """Size each column to its longest rendered value, within bounds."""
    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
    for col, longest in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = min(max(longest + 2, min_width), max_width)
