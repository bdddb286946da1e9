"""
ACI 318-19 Flexural Analysis of Rectangular Beam Sections.

Reference: ACI 318-19 Building Code Requirements for Structural Concrete
Units: US customary (psi, inches, sq in); moments in lb-in and kip-ft

Singly reinforced analysis with the Whitney rectangular stress block.
Compression steel (As', d') is carried on the input for display only.

The functions never raise for numeric input: zero denominators give
inf/nan and physically invalid sections are reported as ERROR warnings.
"""

import logging
from typing import Any, Dict

import numpy as np

from .base import DesignCode
from .models import (
    BeamInput,
    BeamResults,
    DesignWarning,
    RequiredSteelResult,
    SectionType,
    Severity,
)

logger = logging.getLogger(__name__)


EPSILON_CU = 0.003  # Ultimate concrete strain (ACI 22.2.2.1)
EPSILON_TC = 0.005  # Tension-controlled strain limit (ACI 21.2.2)
EPSILON_T_MIN = 0.004  # Minimum net tensile strain for beams (ACI 9.3.3.1)

PHI_TENSION = 0.90
PHI_COMPRESSION = 0.65

LB_IN_PER_KIP_FT = 1000 * 12


def _divide(num: float, den: float) -> float:
    """Float division that yields inf/nan instead of raising on zero."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(num) / np.float64(den))


def _sqrt(x: float) -> float:
    with np.errstate(invalid='ignore'):
        return float(np.sqrt(np.float64(x)))


# ============================================================================
# SECTION MECHANICS (ACI 318-19 Section 22.2)
# ============================================================================

def calculate_beta1(fc: float) -> float:
    """
    Stress block depth factor β1 per ACI 22.2.2.4.3.

    β1 = 0.85 for f'c ≤ 4000 psi
    β1 = 0.85 - 0.05(f'c - 4000)/1000 for f'c > 4000 psi
    β1 ≥ 0.65
    """
    if fc <= 4000:
        return 0.85
    # β1 decreases by 0.05 for each 1000 psi above 4000 psi
    beta = 0.85 - 0.05 * (fc - 4000) / 1000
    return max(beta, 0.65)


def calculate_epsilon_y(fy: float, Es: float) -> float:
    """Yield strain of reinforcement εy = fy / Es."""
    return _divide(fy, Es)


def calculate_stress_block_depth(As: float, fy: float, fc: float, b: float) -> float:
    """
    Depth of the equivalent rectangular stress block.

    a = As·fy / (0.85·f'c·b)

    Returns inf when b or f'c is zero.
    """
    return _divide(As * fy, 0.85 * fc * b)


def calculate_neutral_axis_depth(a: float, beta1: float) -> float:
    """Neutral axis depth c = a / β1."""
    return _divide(a, beta1)


def calculate_tension_strain(d: float, c: float, epsilon_cu: float = EPSILON_CU) -> float:
    """
    Net tensile strain in the extreme tension steel.

    εt = εcu·(d - c) / c

    Returns +inf for c ≤ 0 (no compression zone). Negative when c > d.
    """
    if c <= 0:
        return float('inf')
    return epsilon_cu * (d - c) / c


# ============================================================================
# STRENGTH REDUCTION (ACI 318-19 Table 21.2.2)
# ============================================================================

def calculate_phi(epsilon_t: float, epsilon_y: float) -> float:
    """
    Strength reduction factor φ per ACI Table 21.2.2.

    - Tension-controlled: εt ≥ 0.005 → φ = 0.90
    - Compression-controlled: εt ≤ εy → φ = 0.65
    - Transition: linear interpolation between (εy, 0.65) and (0.005, 0.90)

    Args:
        epsilon_t: Net tensile strain
        epsilon_y: Yield strain of the reinforcement

    Returns:
        φ factor (0.65 to 0.90)
    """
    if epsilon_t >= EPSILON_TC:
        return PHI_TENSION
    if epsilon_t <= epsilon_y:
        return PHI_COMPRESSION
    return PHI_COMPRESSION + (PHI_TENSION - PHI_COMPRESSION) * (epsilon_t - epsilon_y) / (EPSILON_TC - epsilon_y)


def classify_section(epsilon_t: float, epsilon_y: float) -> SectionType:
    """Ductility classification, consistent with ``calculate_phi``."""
    if epsilon_t >= EPSILON_TC:
        return SectionType.TENSION_CONTROLLED
    if epsilon_t <= epsilon_y:
        return SectionType.COMPRESSION_CONTROLLED
    return SectionType.TRANSITION


# ============================================================================
# REINFORCEMENT LIMITS (ACI 318-19 Sections 9.3.3 and 9.6.1)
# ============================================================================

def calculate_rho_balanced(
    fc: float,
    fy: float,
    beta1: float,
    epsilon_y: float,
    epsilon_cu: float = EPSILON_CU,
) -> float:
    """
    Balanced reinforcement ratio.

    ρb = (0.85·β1·f'c/fy)·(εcu / (εcu + εy))
    """
    return _divide(0.85 * beta1 * fc, fy) * _divide(epsilon_cu, epsilon_cu + epsilon_y)


def calculate_rho_max(fc: float, fy: float, beta1: float, epsilon_cu: float = EPSILON_CU) -> float:
    """
    Maximum reinforcement ratio for εt ≥ 0.004 (ACI 9.3.3.1).

    ρmax = (0.85·β1·f'c/fy)·(εcu / (εcu + 0.004))
    """
    return _divide(0.85 * beta1 * fc, fy) * (epsilon_cu / (epsilon_cu + EPSILON_T_MIN))


def calculate_rho_min(fc: float, fy: float) -> float:
    """
    Minimum reinforcement ratio per ACI 9.6.1.2.

    ρmin = max(3·√f'c / fy, 200 / fy)
    """
    rho1 = _divide(3 * _sqrt(fc), fy)
    rho2 = _divide(200, fy)
    return max(rho1, rho2)


# ============================================================================
# MOMENT CAPACITY (ACI 318-19 Section 22.3)
# ============================================================================

def calculate_Mn(As: float, fy: float, d: float, a: float) -> float:
    """Nominal moment Mn = As·fy·(d - a/2) in lb-in."""
    return As * fy * (d - a / 2)


def convert_to_kip_ft(moment_lb_in: float) -> float:
    """Convert a moment from lb-in to kip-ft."""
    return moment_lb_in / LB_IN_PER_KIP_FT


# ============================================================================
# BEAM ANALYSIS
# ============================================================================

def _collect_warnings(
    rho: float,
    rho_min: float,
    rho_max: float,
    a: float,
    c: float,
    d: float,
    section_type: SectionType,
    steel_yields: bool,
    is_adequately_reinforced: bool,
    is_not_over_reinforced: bool,
):
    warnings = []

    if not steel_yields:
        warnings.append(DesignWarning(
            severity=Severity.WARNING,
            message="Tension steel does not yield at ultimate. Section is over-reinforced.",
        ))

    if not is_adequately_reinforced:
        warnings.append(DesignWarning(
            severity=Severity.WARNING,
            message=(
                f"Reinforcement ratio ({rho * 100:.3f}%) is less than minimum ({rho_min * 100:.3f}%). "
                "Per ACI 318, As,min requirements may govern."
            ),
        ))

    if not is_not_over_reinforced:
        warnings.append(DesignWarning(
            severity=Severity.WARNING,
            message=(
                f"Reinforcement ratio ({rho * 100:.3f}%) exceeds maximum ({rho_max * 100:.3f}%). "
                "Section may not have adequate ductility."
            ),
        ))

    if section_type is SectionType.COMPRESSION_CONTROLLED:
        warnings.append(DesignWarning(
            severity=Severity.WARNING,
            message="Section is compression-controlled. Consider reducing reinforcement for better ductility.",
        ))

    if section_type is SectionType.TRANSITION:
        warnings.append(DesignWarning(
            severity=Severity.NOTE,
            message="Section is in the transition zone between tension and compression controlled.",
        ))

    if a > d:
        warnings.append(DesignWarning(
            severity=Severity.ERROR,
            message="Stress block depth exceeds effective depth. Check input values.",
        ))

    if c >= d:
        warnings.append(DesignWarning(
            severity=Severity.ERROR,
            message="Neutral axis is at or below tension steel. Invalid configuration.",
        ))

    return warnings


def analyze_beam(beam: BeamInput) -> BeamResults:
    """
    Flexural analysis of a singly reinforced rectangular section.

    Reference: ACI 318-19 Sections 21.2, 22.2, 22.3, 9.3.3, 9.6.1

    The input is not validated: degenerate sections produce non-finite
    values and/or ERROR warnings rather than exceptions.

    Args:
        beam: Section geometry, materials and reinforcement

    Returns:
        BeamResults with mechanics, ratios, capacities, checks and warnings

    Example:
        >>> r = analyze_beam(BeamInput(b=12, h=24, d=21.5, fc=4000, fy=60000, As=3.0))
        >>> round(r.phiMn_kip_ft, 1)
        260.5
    """
    b, d, fc, fy, Es, As = beam.b, beam.d, beam.fc, beam.fy, beam.Es, beam.As

    # Step 1: Material factors
    beta1 = calculate_beta1(fc)
    epsilon_y = calculate_epsilon_y(fy, Es)
    if epsilon_y >= EPSILON_TC:
        logger.warning(
            "Yield strain εy = %.5f ≥ 0.005: transition zone undefined, "
            "section is classified as tension- or compression-controlled only",
            epsilon_y,
        )

    # Step 2: Whitney stress block and neutral axis
    a = calculate_stress_block_depth(As, fy, fc, b)
    c = calculate_neutral_axis_depth(a, beta1)

    # Step 3: Strain, φ and classification
    epsilon_t = calculate_tension_strain(d, c)
    phi = calculate_phi(epsilon_t, epsilon_y)
    section_type = classify_section(epsilon_t, epsilon_y)

    # Step 4: Reinforcement ratios
    rho = _divide(As, b * d)
    rho_b = calculate_rho_balanced(fc, fy, beta1, epsilon_y)
    rho_max = calculate_rho_max(fc, fy, beta1)
    rho_min = calculate_rho_min(fc, fy)

    # Step 5: Moment capacity
    Mn = calculate_Mn(As, fy, d, a)
    phiMn = phi * Mn

    # Step 6: Code checks
    steel_yields = epsilon_t >= epsilon_y
    is_adequately_reinforced = rho >= rho_min
    is_not_over_reinforced = rho <= rho_max

    warnings = _collect_warnings(
        rho, rho_min, rho_max, a, c, d, section_type,
        steel_yields, is_adequately_reinforced, is_not_over_reinforced,
    )

    logger.debug(
        "ACI 318-19 flexure: a=%.3f c=%.3f εt=%.5f φ=%.3f φMn=%.1f kip-ft (%s, %d messages)",
        a, c, epsilon_t, phi, convert_to_kip_ft(phiMn), section_type.value, len(warnings),
    )

    return BeamResults(
        beta1=beta1,
        a=a,
        c=c,
        epsilon_t=epsilon_t,
        epsilon_y=epsilon_y,
        epsilon_cu=EPSILON_CU,
        rho=rho,
        rho_b=rho_b,
        rho_max=rho_max,
        rho_min=rho_min,
        Mn=Mn,
        Mn_kip_ft=convert_to_kip_ft(Mn),
        phi=phi,
        phiMn=phiMn,
        phiMn_kip_ft=convert_to_kip_ft(phiMn),
        section_type=section_type,
        is_adequately_reinforced=is_adequately_reinforced,
        is_not_over_reinforced=is_not_over_reinforced,
        steel_yields=steel_yields,
        warnings=warnings,
    )


# ============================================================================
# REQUIRED STEEL FOR A MOMENT DEMAND
# ============================================================================

def calculate_required_steel(
    Mu: float,  # Factored moment demand (lb-in)
    b: float,  # Width (in)
    d: float,  # Effective depth (in)
    fc: float,  # Concrete strength (psi)
    fy: float,  # Yield strength (psi)
) -> RequiredSteelResult:
    """
    Tension steel required to resist a factored moment.

    Assumes a tension-controlled section (φ = 0.90) and solves the stress
    block quadratic:

        Rn = Mu / (φ·b·d²)
        ρ = (0.85·f'c/fy)·(1 - √(1 - 2·Rn/(0.85·f'c)))

    Args:
        Mu: Factored moment demand (lb-in)
        b: Width (in)
        d: Effective depth (in)
        fc: Concrete strength (psi)
        fy: Yield strength (psi)

    Returns:
        RequiredSteelResult; infeasible demands are reported with
        is_valid=False and As_required=0
    """
    phi = PHI_TENSION
    R_n = _divide(Mu, phi * b * d * d)
    radicand = 1 - _divide(2 * R_n, 0.85 * fc)

    rho_required = float('nan')
    if radicand >= 0:
        rho_required = _divide(0.85 * fc, fy) * (1 - _sqrt(radicand))

    if not np.isfinite(rho_required) or rho_required < 0:
        logger.info("Section b=%s d=%s cannot carry Mu=%s lb-in", b, d, Mu)
        return RequiredSteelResult(
            As_required=0.0,
            rho_required=0.0,
            is_valid=False,
            message="Section cannot carry the applied moment. Increase section size.",
        )

    As_required = rho_required * b * d
    rho_max = calculate_rho_max(fc, fy, calculate_beta1(fc))

    if rho_required > rho_max:
        return RequiredSteelResult(
            As_required=As_required,
            rho_required=rho_required,
            is_valid=False,
            message=(
                f"Required reinforcement ratio ({rho_required * 100:.3f}%) "
                f"exceeds maximum ({rho_max * 100:.3f}%)."
            ),
        )

    return RequiredSteelResult(
        As_required=As_required,
        rho_required=rho_required,
        is_valid=True,
        message="OK",
    )


# ============================================================================
# ACI 318-19 CODE CLASS
# ============================================================================

class ACI318Code(DesignCode):
    """ACI 318-19 implementation of DesignCode interface."""

    @property
    def code_name(self) -> str:
        return "ACI 318-19"

    @property
    def code_units(self) -> str:
        return "Imperial"

    def analyze_beam(self, beam: BeamInput) -> BeamResults:
        """Flexural analysis per ACI 318-19 Section 22.3."""
        return analyze_beam(beam)

    def required_steel(self, **kwargs) -> RequiredSteelResult:
        """Required tension steel for a factored moment (lb-in)."""
        return calculate_required_steel(**kwargs)


# ============================================================================
# STREAMLIT INTEGRATION WRAPPERS
# ============================================================================

def run_beam_analysis_from_ui(**kwargs) -> Dict[str, Any]:
    """
    Wrapper for Streamlit UI integration.

    Builds a BeamInput from keyword fields and returns the results as a
    plain dict (enum values as strings, warnings as display text).
    """
    results = analyze_beam(BeamInput(**kwargs))
    data = results.model_dump(exclude={'warnings'})
    data['section_type'] = results.section_type.value
    data['warnings'] = results.warning_texts
    return data
