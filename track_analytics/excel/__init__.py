"""Styled openpyxl workbooks for reports and query exports."""
from .styles import TIER_TAB_COLORS
from .writer import ColSpec, ExcelWriter
