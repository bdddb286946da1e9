"""
Design code modules for beamcalc
Supports ACI 318-19 flexural analysis of rectangular beam sections
"""

from .models import (
    BeamInput,
    BeamResults,
    DesignWarning,
    RequiredSteelResult,
    SectionType,
    Severity,
    validate_beam_input,
)
from .base import DesignCode
from .materials import MaterialLoaderACI, SteelGradeACI
from .aci318 import ACI318Code, analyze_beam, calculate_required_steel

# ============================================================================
# CODE REGISTRY (Factory Pattern)
# ============================================================================

CODE_REGISTRY = {
    "ACI 318-19 (USA)": ACI318Code(),
}


def get_design_code(code_name: str) -> DesignCode:
    """
    Factory method to get design code checker.

    Args:
        code_name: Design code identifier (e.g., "ACI 318-19 (USA)")

    Returns:
        DesignCode implementation instance

    Raises:
        ValueError: If code_name not found in registry
    """
    if code_name not in CODE_REGISTRY:
        available = ", ".join(CODE_REGISTRY.keys())
        raise ValueError(f"Unknown code: {code_name}. Available: {available}")
    return CODE_REGISTRY[code_name]


__all__ = [
    'BeamInput',
    'BeamResults',
    'DesignWarning',
    'RequiredSteelResult',
    'SectionType',
    'Severity',
    'validate_beam_input',
    'DesignCode',
    'MaterialLoaderACI',
    'SteelGradeACI',
    'ACI318Code',
    'analyze_beam',
    'calculate_required_steel',
    'CODE_REGISTRY',
    'get_design_code',
]
