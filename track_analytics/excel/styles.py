"""
Workbook look: palette, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
GREEN = "1DB954"
INK = "191414"
MUTED = "6A6A6A"
ZEBRA = "F2F7F3"
GRID = "D0D0D0"
WHITE = "FFFFFF"

# Sheet tab per query tier
TIER_TAB_COLORS = {
    "easy": GREEN,
    "medium": "F59B23",
    "advanced": "E22134",
}


def _font(size: int, color: str = INK, **kw) -> Font:
    return Font(name="Calibri", size=size, color=color, **kw)


def _solid(color: str) -> PatternFill:
    return PatternFill(fill_type="solid", start_color=color, end_color=color)


def _box(color: str, bottom: Side | None = None) -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side, top=side, bottom=bottom or side)


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = _font(22, bold=True)
SUBTITLE_FONT = _font(11, MUTED, italic=True)
SECTION_FONT = _font(13, GREEN, bold=True)
HEADER_FONT = _font(11, WHITE, bold=True)
DATA_FONT = _font(10)
KPI_VALUE_FONT = _font(26, GREEN, bold=True)
KPI_LABEL_FONT = _font(9, MUTED)

# ---------------------------------------------------------------------------
# Fills & borders
# ---------------------------------------------------------------------------
HEADER_FILL = _solid(INK)
ZEBRA_FILL = _solid(ZEBRA)

CELL_BORDER = _box(GRID)
HEADER_BORDER = _box(INK, bottom=Side(style="medium", color=GREEN))

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
