"""
Dashboard workbook palette and the openpyxl style objects built from it.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# Palette
INK = "111827"
MUTED = "6B7280"
BRAND = "1D4ED8"
BRAND_DARK = "1E3A8A"
BRAND_TINT = "EFF6FF"
STRIPE = "F3F4F6"
GRID = "D1D5DB"
TOTAL_TINT = "E0E7FF"
ALERT = "DC2626"
ALERT_TINT = "FEE2E2"
CALM = "16A34A"


def _font(size: int = 10, color: str = INK, bold: bool = False, italic: bool = False) -> Font:
    return Font(name="Calibri", size=size, color=color, bold=bold, italic=italic)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, bottom: str = "thin", top: str = "thin") -> Border:
    edge = Side(style="thin", color=color)
    return Border(
        left=edge,
        right=edge,
        top=Side(style=top, color=color),
        bottom=Side(style=bottom, color=color),
    )


TITLE_FONT = _font(22, BRAND_DARK, bold=True)
SUBTITLE_FONT = _font(11, MUTED, italic=True)
SECTION_FONT = _font(13, BRAND_DARK, bold=True)
HEADER_FONT = _font(11, "FFFFFF", bold=True)
CELL_FONT = _font()
TOTAL_FONT = _font(bold=True)
KPI_FONT = _font(26, BRAND_DARK, bold=True)
KPI_CAPTION_FONT = _font(10, MUTED)

# More layoffs is bad news: red when rising, green when falling
TREND_FONTS = {
    "increasing": _font(26, ALERT, bold=True),
    "decreasing": _font(26, CALM, bold=True),
    "stable": KPI_FONT,
}

HEADER_FILL = _fill(BRAND)
STRIPE_FILL = _fill(STRIPE)
TOTAL_FILL = _fill(TOTAL_TINT)
ROW_FILLS = {
    "alert": _fill(ALERT_TINT),
    "lead": _fill(BRAND_TINT),
}

CELL_BORDER = _box(GRID)
HEADER_BORDER = _box(BRAND_DARK, bottom="medium")
TOTAL_BORDER = _box(MUTED, bottom="medium", top="medium")

CENTERED = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
