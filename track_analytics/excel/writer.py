"""
ExcelWriter — builds the styled workbooks behind reports and exports.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from track_analytics.excel.formatters import (
    add_kpi_card,
    auto_column_width,
    format_data_cell,
    format_header_row,
)
from track_analytics.excel.styles import SECTION_FONT, SUBTITLE_FONT, TITLE_FONT


ColSpec = tuple[str, str, str]  # (key, col_type, label)

MAX_SHEET_TITLE = 31  # Excel limit


class ExcelWriter:
    """One workbook, filled sheet by sheet."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._fresh = True

    def add_sheet(self, title: str, tab_color: str | None = None) -> Worksheet:
        """New worksheet; the workbook's default sheet is reused for the first one."""
        if self._fresh:
            ws = self.wb.active
            ws.title = title[:MAX_SHEET_TITLE]
            self._fresh = False
        else:
            ws = self.wb.create_sheet(title=title[:MAX_SHEET_TITLE])
        if tab_color:
            ws.sheet_properties.tabColor = tab_color
        return ws

    def write_title(self, ws: Worksheet, title: str, subtitle: str, merge_cols: int = 6) -> int:
        """Title and subtitle across the first rows. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=merge_cols)
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[tuple], col_spacing: int = 2) -> int:
        """kpis: [(value, label, col_type), ...] laid out left to right."""
        for i, (value, label, col_type) in enumerate(kpis):
            add_kpi_card(ws, row, 1 + i * col_spacing, value, label, col_type)
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        freeze: bool = True,
    ) -> int:
        """Header plus one row per record; missing values are left blank.

        Returns the row after the last record.
        """
        format_header_row(ws, start_row, [label for _, _, label in columns])
        records = data.to_dict("records") if isinstance(data, pd.DataFrame) else data

        for offset, record in enumerate(records, 1):
            row = start_row + offset
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                value = record.get(key)
                if value is not None and pd.isna(value):
                    value = None
                format_data_cell(ws, row, col_num, value, col_type, zebra=offset % 2 == 0)

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return start_row + len(records) + 1

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
