"""
beamcalc - ACI 318-19 flexural strength of rectangular reinforced concrete beams
"""

from .design import (
    BeamInput,
    BeamResults,
    SectionType,
    Severity,
    analyze_beam,
    calculate_required_steel,
    get_design_code,
)

__version__ = "0.1.0"

__all__ = [
    'BeamInput',
    'BeamResults',
    'SectionType',
    'Severity',
    'analyze_beam',
    'calculate_required_steel',
    'get_design_code',
]
