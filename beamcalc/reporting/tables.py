"""
Tabular summaries of beam results for display.
"""

import pandas as pd

from ..design.models import BeamResults
from .formatting import format_number, format_percent


def ratios_table(results: BeamResults) -> pd.DataFrame:
    """Reinforcement ratios as display strings."""
    return pd.DataFrame({
        "Ratio": ["ρmin", "ρ (actual)", "ρmax", "ρb (balanced)"],
        "Value": [
            format_percent(results.rho_min),
            format_percent(results.rho),
            format_percent(results.rho_max),
            format_percent(results.rho_b),
        ],
    })


def checks_table(results: BeamResults) -> pd.DataFrame:
    """Code compliance checks with PASS/FAIL status."""
    rows = [
        ("Minimum Reinforcement", "ρ ≥ ρmin", results.is_adequately_reinforced),
        ("Maximum Reinforcement", "ρ ≤ ρmax", results.is_not_over_reinforced),
        ("Steel Yielding", "εt ≥ εy", results.steel_yields),
    ]
    return pd.DataFrame({
        "Check": [r[0] for r in rows],
        "Condition": [r[1] for r in rows],
        "Status": ['PASS' if r[2] else 'FAIL' for r in rows],
    })


def section_properties_table(results: BeamResults) -> pd.DataFrame:
    """Derived section properties with display precision."""
    return pd.DataFrame({
        "Parameter": ["β1", "a (in)", "c (in)", "εcu", "εt", "εy", "φ"],
        "Value": [
            format_number(results.beta1, 3),
            format_number(results.a, 3),
            format_number(results.c, 3),
            format_number(results.epsilon_cu, 4),
            format_number(results.epsilon_t, 5),
            format_number(results.epsilon_y, 5),
            format_number(results.phi, 3),
        ],
    })
