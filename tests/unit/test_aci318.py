"""
Unit tests for ACI 318-19 flexural analysis.

Tests cover:
- Stress block factor and yield strain
- Stress block, neutral axis and tension strain
- Strength reduction factor and section classification
- Reinforcement ratios
- Complete beam analysis and warnings
- Required steel solver
"""

import logging

import pytest
import numpy as np
from beamcalc.design.models import BeamInput, SectionType, Severity
from beamcalc.design.aci318 import (
    EPSILON_CU,
    calculate_beta1,
    calculate_epsilon_y,
    calculate_stress_block_depth,
    calculate_neutral_axis_depth,
    calculate_tension_strain,
    calculate_phi,
    classify_section,
    calculate_rho_balanced,
    calculate_rho_max,
    calculate_rho_min,
    calculate_Mn,
    convert_to_kip_ft,
    analyze_beam,
    calculate_required_steel,
    run_beam_analysis_from_ui,
    ACI318Code,
)


def make_beam(**overrides) -> BeamInput:
    """12x24 in section, d = 21.5 in, 4000 psi, Grade 60, 3 sq in."""
    fields = dict(b=12, h=24, d=21.5, d_prime=2.5, fc=4000, fy=60000, Es=29_000_000, As=3.0)
    fields.update(overrides)
    return BeamInput(**fields)


# ============================================================================
# MATERIAL FACTOR TESTS
# ============================================================================

class TestBeta1:
    """Test β1 stress block factor."""

    @pytest.mark.parametrize("fc", [2500, 3000, 4000])
    def test_beta1_at_or_below_4000_psi(self, fc):
        """β1 = 0.85 for f'c ≤ 4000 psi."""
        assert calculate_beta1(fc) == 0.85

    def test_beta1_5000_psi(self):
        """β1 decreases 0.05 per 1000 psi above 4000 psi."""
        assert calculate_beta1(5000) == pytest.approx(0.80)
        assert calculate_beta1(6000) == pytest.approx(0.75)

    def test_beta1_floor(self):
        """β1 ≥ 0.65."""
        assert calculate_beta1(8000) == pytest.approx(0.65)
        assert calculate_beta1(10000) == 0.65
        assert calculate_beta1(15000) == 0.65


class TestYieldStrain:
    """Test yield strain εy = fy/Es."""

    def test_grade_60(self):
        assert calculate_epsilon_y(60000, 29_000_000) == pytest.approx(0.0020690, abs=1e-7)

    def test_zero_modulus_is_infinite(self):
        """Es = 0 gives inf rather than an exception."""
        assert np.isinf(calculate_epsilon_y(60000, 0))


# ============================================================================
# SECTION MECHANICS TESTS
# ============================================================================

class TestSectionMechanics:
    """Test stress block, neutral axis and tension strain."""

    def test_stress_block_depth(self):
        """a = As·fy / (0.85·f'c·b)."""
        a = calculate_stress_block_depth(As=3.0, fy=60000, fc=4000, b=12)
        assert abs(a - 4.4118) < 0.001

    def test_stress_block_zero_width(self):
        """b = 0 yields inf, not ZeroDivisionError."""
        assert np.isinf(calculate_stress_block_depth(As=3.0, fy=60000, fc=4000, b=0))

    def test_neutral_axis_depth(self):
        c = calculate_neutral_axis_depth(4.4118, 0.85)
        assert abs(c - 5.1903) < 0.001

    def test_tension_strain(self):
        """εt = 0.003·(d - c)/c."""
        eps_t = calculate_tension_strain(d=21.5, c=5.1903)
        assert eps_t == pytest.approx(0.003 * (21.5 - 5.1903) / 5.1903)

    def test_tension_strain_zero_c_is_infinite(self):
        """c ≤ 0 returns +inf."""
        assert calculate_tension_strain(d=21.5, c=0.0) == float('inf')
        assert calculate_tension_strain(d=21.5, c=-1.0) == float('inf')

    def test_tension_strain_negative_below_steel(self):
        """c > d gives a negative strain."""
        assert calculate_tension_strain(d=10, c=12) < 0


# ============================================================================
# PHI FACTOR TESTS
# ============================================================================

class TestPhiFactor:
    """Test strength reduction factor φ and classification."""

    EPS_Y = 60000 / 29_000_000

    def test_tension_controlled(self):
        """εt ≥ 0.005 → φ = 0.90."""
        assert calculate_phi(0.005, self.EPS_Y) == 0.90
        assert calculate_phi(0.02, self.EPS_Y) == 0.90
        assert classify_section(0.005, self.EPS_Y) is SectionType.TENSION_CONTROLLED

    def test_compression_controlled(self):
        """εt ≤ εy → φ = 0.65."""
        assert calculate_phi(self.EPS_Y, self.EPS_Y) == 0.65
        assert calculate_phi(-0.001, self.EPS_Y) == 0.65
        assert classify_section(self.EPS_Y, self.EPS_Y) is SectionType.COMPRESSION_CONTROLLED

    def test_transition_zone(self):
        """εy < εt < 0.005 → linear interpolation."""
        eps_t = 0.0035
        expected = 0.65 + 0.25 * (eps_t - self.EPS_Y) / (0.005 - self.EPS_Y)
        assert calculate_phi(eps_t, self.EPS_Y) == pytest.approx(expected)
        assert 0.65 < calculate_phi(eps_t, self.EPS_Y) < 0.90
        assert classify_section(eps_t, self.EPS_Y) is SectionType.TRANSITION

    def test_phi_continuous_at_boundaries(self):
        """Transition formula meets the constant branches."""
        assert calculate_phi(self.EPS_Y + 1e-12, self.EPS_Y) == pytest.approx(0.65, abs=1e-8)
        assert calculate_phi(0.005 - 1e-12, self.EPS_Y) == pytest.approx(0.90, abs=1e-8)

    def test_phi_monotonic_in_strain(self):
        strains = np.linspace(0.0, 0.008, 50)
        phis = [calculate_phi(e, self.EPS_Y) for e in strains]
        assert all(p2 >= p1 for p1, p2 in zip(phis, phis[1:]))

    def test_phi_agrees_with_classification(self):
        for eps_t in np.linspace(-0.002, 0.01, 60):
            phi = calculate_phi(eps_t, self.EPS_Y)
            section = classify_section(eps_t, self.EPS_Y)
            if section is SectionType.TENSION_CONTROLLED:
                assert phi == 0.90
            elif section is SectionType.COMPRESSION_CONTROLLED:
                assert phi == 0.65
            else:
                assert 0.65 < phi < 0.90


# ============================================================================
# REINFORCEMENT RATIO TESTS
# ============================================================================

class TestReinforcementRatios:
    """Test ρb, ρmax and ρmin."""

    def test_rho_balanced(self):
        eps_y = 60000 / 29_000_000
        expected = (0.85 * 0.85 * 4000 / 60000) * (0.003 / (0.003 + eps_y))
        assert calculate_rho_balanced(4000, 60000, 0.85, eps_y) == pytest.approx(expected)
        assert abs(calculate_rho_balanced(4000, 60000, 0.85, eps_y) - 0.02851) < 1e-4

    def test_rho_max_uses_strain_0004(self):
        expected = (0.85 * 0.85 * 4000 / 60000) * (0.003 / 0.007)
        assert calculate_rho_max(4000, 60000, 0.85) == pytest.approx(expected)

    def test_rho_max_below_rho_balanced(self):
        eps_y = 60000 / 29_000_000
        assert calculate_rho_max(4000, 60000, 0.85) < calculate_rho_balanced(4000, 60000, 0.85, eps_y)

    def test_rho_min_governed_by_200_over_fy(self):
        """For f'c = 4000 psi, 200/fy governs."""
        assert calculate_rho_min(4000, 60000) == pytest.approx(200 / 60000)

    def test_rho_min_governed_by_sqrt_fc(self):
        """For f'c = 5000 psi, 3·√f'c/fy governs."""
        assert calculate_rho_min(5000, 60000) == pytest.approx(3 * np.sqrt(5000) / 60000)


class TestMomentCapacity:
    """Test nominal moment and unit conversion."""

    def test_nominal_moment(self):
        Mn = calculate_Mn(As=3.0, fy=60000, d=21.5, a=4.41176)
        assert abs(Mn - 3_472_941) < 10

    def test_kip_ft_conversion(self):
        assert convert_to_kip_ft(12000) == 1.0
        assert convert_to_kip_ft(3_472_941) == pytest.approx(289.41, abs=0.01)


# ============================================================================
# BEAM ANALYSIS TESTS
# ============================================================================

class TestAnalyzeBeam:
    """Test complete beam analysis."""

    def test_reference_section(self):
        """12x24 in, d = 21.5 in, As = 3.0 sq in, 4000 psi, Grade 60."""
        r = analyze_beam(make_beam())

        assert r.beta1 == 0.85
        assert abs(r.a - 4.4118) < 0.001
        assert abs(r.c - 5.1903) < 0.001
        assert r.epsilon_t == pytest.approx(0.003 * (21.5 - r.c) / r.c)
        assert abs(r.epsilon_t - 0.00943) < 1e-4
        assert r.epsilon_cu == EPSILON_CU
        assert r.section_type is SectionType.TENSION_CONTROLLED
        assert r.phi == 0.90
        assert abs(r.Mn - 3_472_941) < 10
        assert abs(r.Mn_kip_ft - 289.4) < 0.1
        assert abs(r.phiMn_kip_ft - 260.5) < 0.1
        assert r.phiMn == pytest.approx(0.90 * r.Mn)

    def test_reference_section_checks(self):
        r = analyze_beam(make_beam())

        assert r.rho == pytest.approx(3.0 / (12 * 21.5))
        assert r.steel_yields
        assert r.is_adequately_reinforced
        assert r.is_not_over_reinforced
        assert r.warnings == []

    def test_checks_consistent_with_fields(self):
        for As in [0.0, 0.5, 3.0, 5.0, 8.0, 20.0]:
            r = analyze_beam(make_beam(As=As))
            assert r.steel_yields == (r.epsilon_t >= r.epsilon_y)
            assert r.is_adequately_reinforced == (r.rho >= r.rho_min)
            assert r.is_not_over_reinforced == (r.rho <= r.rho_max)
            assert r.section_type is classify_section(r.epsilon_t, r.epsilon_y)

    def test_monotonic_in_steel_area(self):
        """More steel → deeper a and c, lower εt."""
        results = [analyze_beam(make_beam(As=As)) for As in [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]]
        for r1, r2 in zip(results, results[1:]):
            assert r2.a > r1.a
            assert r2.c > r1.c
            assert r2.epsilon_t < r1.epsilon_t

    def test_idempotent(self):
        """Identical input gives identical results."""
        assert analyze_beam(make_beam()) == analyze_beam(make_beam())

    def test_compression_steel_ignored(self):
        """As' and d' do not enter the mechanics."""
        r1 = analyze_beam(make_beam())
        r2 = analyze_beam(make_beam(As_prime=2.0, d_prime=3.0))
        assert r1 == r2

    def test_high_strength_concrete(self):
        r = analyze_beam(make_beam(fc=5000))
        assert r.beta1 == pytest.approx(0.80)
        assert r.c == pytest.approx(r.a / 0.80)


class TestDegenerateSections:
    """Test degenerate and invalid configurations."""

    def test_zero_steel(self):
        """As = 0: a = c = 0, εt = inf, minimum steel warning."""
        r = analyze_beam(make_beam(As=0.0))

        assert r.a == 0.0
        assert r.c == 0.0
        assert r.epsilon_t == float('inf')
        assert r.section_type is SectionType.TENSION_CONTROLLED
        assert r.rho == 0.0
        assert not r.is_adequately_reinforced
        assert r.Mn == 0.0
        assert len(r.warnings) == 1
        assert r.warnings[0].severity is Severity.WARNING
        assert r.warnings[0].text == (
            "Warning: Reinforcement ratio (0.000%) is less than minimum (0.333%). "
            "Per ACI 318, As,min requirements may govern."
        )

    def test_neutral_axis_below_steel(self):
        """Very large As: c ≥ d reported as error, Mn still returned."""
        r = analyze_beam(make_beam(As=20.0))

        assert r.c >= 21.5
        assert r.epsilon_t < 0
        assert r.section_type is SectionType.COMPRESSION_CONTROLLED
        assert r.Mn > 0
        assert r.has_errors
        assert [w.severity for w in r.warnings] == [
            Severity.WARNING,
            Severity.WARNING,
            Severity.WARNING,
            Severity.ERROR,
            Severity.ERROR,
        ]
        assert r.warning_texts[-2] == "Error: Stress block depth exceeds effective depth. Check input values."
        assert r.warning_texts[-1] == "Error: Neutral axis is at or below tension steel. Invalid configuration."

    def test_zero_width_does_not_raise(self):
        """b = 0 gives non-finite values and errors, no exception."""
        r = analyze_beam(make_beam(b=0.0))

        assert np.isinf(r.a)
        assert np.isinf(r.c)
        assert r.has_errors


class TestWarnings:
    """Test warning order and severity."""

    def test_transition_note(self):
        """As = 5.0 sq in → transition zone, note only."""
        r = analyze_beam(make_beam(As=5.0))

        assert r.section_type is SectionType.TRANSITION
        assert 0.65 < r.phi < 0.90
        assert r.steel_yields
        assert len(r.warnings) == 1
        assert r.warnings[0].severity is Severity.NOTE
        assert r.warnings[0].text == (
            "Note: Section is in the transition zone between tension and compression controlled."
        )

    def test_compression_controlled_warnings(self):
        """As = 8.0 sq in → steel does not yield, over-reinforced."""
        r = analyze_beam(make_beam(As=8.0))

        assert r.section_type is SectionType.COMPRESSION_CONTROLLED
        assert r.phi == 0.65
        assert not r.steel_yields
        assert not r.is_not_over_reinforced
        assert not r.has_errors
        texts = r.warning_texts
        assert texts[0] == "Warning: Tension steel does not yield at ultimate. Section is over-reinforced."
        assert texts[1].startswith("Warning: Reinforcement ratio (3.101%) exceeds maximum (2.064%).")
        assert texts[2] == (
            "Warning: Section is compression-controlled. Consider reducing reinforcement for better ductility."
        )

    def test_neutral_axis_error_without_stress_block_error(self):
        """a = 0.9·d ≤ d but c = a/β1 ≥ d → only the trailing neutral-axis error."""
        As = 0.9 * 21.5 * 0.85 * 4000 * 12 / 60000
        r = analyze_beam(make_beam(As=As))

        assert r.a == pytest.approx(19.35)
        assert r.c == pytest.approx(22.765, abs=1e-3)
        assert r.a <= 21.5 <= r.c
        assert [w.severity for w in r.warnings] == [
            Severity.WARNING, Severity.WARNING, Severity.WARNING, Severity.ERROR,
        ]
        assert r.errors == [r.warnings[-1]]
        assert r.warning_texts[-1] == "Error: Neutral axis is at or below tension steel. Invalid configuration."
        assert not any(t.startswith("Error: Stress block") for t in r.warning_texts)

    def test_yield_strain_above_tension_limit_logged(self, caplog):
        """εy ≥ 0.005 is logged; φ and classification stay consistent."""
        with caplog.at_level(logging.WARNING, logger="beamcalc.design.aci318"):
            r = analyze_beam(make_beam(Es=10_000_000, As=5.0))

        assert r.epsilon_y == pytest.approx(0.006)
        assert r.section_type is SectionType.COMPRESSION_CONTROLLED
        assert r.phi == 0.65
        assert any("0.005" in rec.getMessage() for rec in caplog.records)


# ============================================================================
# REQUIRED STEEL TESTS
# ============================================================================

class TestRequiredSteel:
    """Test required steel solver."""

    def test_required_steel_resists_moment(self):
        """φ·As·fy·(d - a/2) recovers Mu."""
        Mu = 200 * 12000
        result = calculate_required_steel(Mu=Mu, b=12, d=21.5, fc=4000, fy=60000)

        assert result.is_valid
        assert result.message == "OK"
        assert abs(result.As_required - 2.239) < 0.01

        a = result.As_required * 60000 / (0.85 * 4000 * 12)
        assert 0.9 * result.As_required * 60000 * (21.5 - a / 2) == pytest.approx(Mu, rel=1e-6)

    def test_required_steel_exceeds_max(self):
        result = calculate_required_steel(Mu=5.5e6, b=12, d=21.5, fc=4000, fy=60000)

        assert not result.is_valid
        assert result.As_required > 0
        assert "exceeds maximum" in result.message
        assert result.rho_required > calculate_rho_max(4000, 60000, 0.85)

    def test_section_cannot_carry_moment(self):
        """2·Rn > 0.85·f'c → invalid, As = 0."""
        result = calculate_required_steel(Mu=1e8, b=12, d=21.5, fc=4000, fy=60000)

        assert not result.is_valid
        assert result.As_required == 0
        assert result.message == "Section cannot carry the applied moment. Increase section size."

    def test_negative_moment_is_invalid(self):
        result = calculate_required_steel(Mu=-1e6, b=12, d=21.5, fc=4000, fy=60000)
        assert not result.is_valid
        assert result.As_required == 0

    def test_zero_width_does_not_raise(self):
        result = calculate_required_steel(Mu=1e6, b=0, d=21.5, fc=4000, fy=60000)
        assert not result.is_valid
        assert result.message

    def test_zero_moment(self):
        result = calculate_required_steel(Mu=0, b=12, d=21.5, fc=4000, fy=60000)
        assert result.is_valid
        assert result.As_required == 0


# ============================================================================
# CODE CLASS TESTS
# ============================================================================

class TestACI318Code:
    """Test DesignCode implementation."""

    def test_code_properties(self):
        code = ACI318Code()
        assert code.code_name == "ACI 318-19"
        assert code.code_units == "Imperial"

    def test_analyze_beam_delegates(self):
        code = ACI318Code()
        assert code.analyze_beam(make_beam()) == analyze_beam(make_beam())

    def test_ui_wrapper(self):
        data = run_beam_analysis_from_ui(b=12, h=24, d=21.5, fc=4000, fy=60000, As=5.0)

        assert data['section_type'] == 'transition'
        assert data['warnings'] == [
            "Note: Section is in the transition zone between tension and compression controlled."
        ]
        assert data['phi'] == pytest.approx(analyze_beam(make_beam(As=5.0)).phi)
