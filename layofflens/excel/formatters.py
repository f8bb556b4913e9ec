"""
Cell-level helpers: header rows, typed data cells, KPI cards, column fitting.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from layofflens.excel import styles

# column kind → Excel number format
NUMBER_FORMATS = {
    "number": "#,##0",
    "percent": '0"%"',
    "coord": "0.0000",
    "ratio": "0.00",
}


def style_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = styles.HEADER_FONT
        cell.fill = styles.HEADER_FILL
        cell.border = styles.HEADER_BORDER
        cell.alignment = styles.CENTERED


def write_cell(ws: Worksheet, row: int, col: int, value, kind: str = "text",
               total: bool = False, tint: str | None = None) -> None:
    """Write one table cell; numeric kinds are right-aligned and formatted.

    Fill precedence: row tint, then total row, then zebra striping.
    """
    cell = ws.cell(row=row, column=col, value=value)
    numeric = kind in NUMBER_FORMATS
    if numeric:
        cell.number_format = NUMBER_FORMATS[kind]
    cell.alignment = styles.RIGHT if numeric else styles.LEFT
    cell.font = styles.TOTAL_FONT if total else styles.CELL_FONT
    cell.border = styles.TOTAL_BORDER if total else styles.CELL_BORDER

    fill = styles.ROW_FILLS.get(tint) if tint else None
    if fill is None and total:
        fill = styles.TOTAL_FILL
    if fill is None and row % 2 == 0:
        fill = styles.STRIPE_FILL
    if fill is not None:
        cell.fill = fill


def kpi_card(ws: Worksheet, row: int, col: int, value, caption: str,
             kind: str = "number", font=None) -> None:
    """Big value with a caption underneath."""
    top = ws.cell(row=row, column=col, value=value)
    top.font = font or styles.KPI_FONT
    top.alignment = styles.CENTERED
    if kind in NUMBER_FORMATS:
        top.number_format = NUMBER_FORMATS[kind]

    bottom = ws.cell(row=row + 1, column=col, value=caption)
    bottom.font = styles.KPI_CAPTION_FONT
    bottom.alignment = styles.CENTERED


def fit_columns(ws: Worksheet, narrowest: int = 10, widest: int = 50) -> None:
    for cells in ws.iter_cols():
        longest = max((len(str(c.value)) for c in cells if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(cells[0].column)].width = max(narrowest, min(longest + 2, widest))
