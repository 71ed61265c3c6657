"""
Single source of truth for Excel colors, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------
NAVY = "1F3864"
WHITE = "FFFFFF"
BLACK = "000000"
ALTERNATE_ROW = "F5F5F5"
TOTAL_ROW_BG = "E3F2FD"
GRID = "CCCCCC"
TOTAL_GRID = "999999"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=BLACK)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=NAVY, end_color=NAVY, fill_type="solid")
ALTERNATE_FILL = PatternFill(start_color=ALTERNATE_ROW, end_color=ALTERNATE_ROW, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=TOTAL_ROW_BG, end_color=TOTAL_ROW_BG, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color=GRID),
    right=Side(style="thin", color=GRID),
    top=Side(style="thin", color=GRID),
    bottom=Side(style="thin", color=GRID),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=NAVY),
    right=Side(style="thin", color=NAVY),
    top=Side(style="thin", color=NAVY),
    bottom=Side(style="medium", color=NAVY),
)
TOTAL_BORDER = Border(
    left=Side(style="thin", color=TOTAL_GRID),
    right=Side(style="thin", color=TOTAL_GRID),
    top=Side(style="medium", color=TOTAL_GRID),
    bottom=Side(style="medium", color=TOTAL_GRID),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# ---------------------------------------------------------------------------
# Number formats
# ---------------------------------------------------------------------------
CURRENCY_FORMAT = "#,##0.00"
NUMBER_FORMAT = "#,##0"
DATE_FORMAT = "yyyy-mm-dd"
