"""
WorkbookBuilder — assembles the styled dashboard workbook sheet by sheet.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from layofflens.excel import styles
from layofflens.excel.formatters import fit_columns, kpi_card, style_header, write_cell

Column = tuple[str, str, str]  # (field, kind, header)
Kpi = tuple  # (value, caption, kind) or (value, caption, kind, font)


def _blank(value, kind: str):
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return 0 if kind == "number" else ""
    return value


class WorkbookBuilder:
    """Adds sheets to one openpyxl Workbook and writes it out."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._sheets: list[Worksheet] = []

    def sheet(self, title: str) -> Worksheet:
        """New worksheet; the workbook's initial empty sheet is used first."""
        ws = self.wb.active if not self._sheets else self.wb.create_sheet(title=title)
        ws.title = title
        self._sheets.append(ws)
        return ws

    def title(self, ws: Worksheet, heading: str, subheading: str, span: int = 8) -> int:
        """Heading on row 1, subheading on row 2, both merged across `span` columns."""
        for row, text, font in ((1, heading, styles.TITLE_FONT), (2, subheading, styles.SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)
        for col in range(1, span + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def section(self, ws: Worksheet, row: int, heading: str) -> int:
        ws.cell(row=row, column=1, value=heading).font = styles.SECTION_FONT
        return row + 2

    def kpis(self, ws: Worksheet, row: int, cards: Iterable[Kpi], gap: int = 2) -> int:
        """A row of KPI cards, one every `gap` columns. Returns the next free row."""
        for i, (value, caption, kind, *font) in enumerate(cards):
            kpi_card(ws, row, 1 + i * gap, value, caption, kind, font[0] if font else None)
        return row + 3

    def table(
        self,
        ws: Worksheet,
        row: int,
        columns: list[Column],
        rows: list[dict],
        tint: Optional[Callable[[int, dict], Optional[str]]] = None,
        total_label: Optional[str] = None,
        freeze: bool = True,
    ) -> int:
        """Header + one line per dict (+ a totals line when `total_label` is set).

        `tint(index, row)` may return "alert" or "lead" to color a whole line.
        Returns the first row below the table.
        """
        style_header(ws, row, [header for _, _, header in columns])
        first = row + 1
        for offset, item in enumerate(rows):
            shade = tint(offset, item) if tint else None
            for col, (field, kind, _) in enumerate(columns, 1):
                write_cell(ws, first + offset, col, _blank(item.get(field), kind), kind, tint=shade)
        nxt = first + len(rows)

        if total_label and rows:
            for col, (field, kind, _) in enumerate(columns, 1):
                if col == 1:
                    value = total_label
                elif kind == "number":
                    value = sum(r.get(field) or 0 for r in rows)
                else:
                    value = ""
                write_cell(ws, nxt, col, value, kind if col > 1 else "text", total=True)
            nxt += 1

        fit_columns(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=first, column=1)
        return nxt

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
