"""
Calculation sheet export, display tables and number formatting
"""

from .formatting import format_number, format_percent, to_ascii
from .calc_sheet import CalcSheetGenerator, ProjectInfo, render_calc_sheet, export_calc_sheet
from .tables import ratios_table, checks_table, section_properties_table

__all__ = [
    'format_number',
    'format_percent',
    'to_ascii',
    'CalcSheetGenerator',
    'ProjectInfo',
    'render_calc_sheet',
    'export_calc_sheet',
    'ratios_table',
    'checks_table',
    'section_properties_table',
]
