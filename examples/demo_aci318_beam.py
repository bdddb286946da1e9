"""
ACI 318-19 Beam Flexure Quick Demonstration
===========================================

This script demonstrates:
1. Flexural analysis of the default trial section
2. Effect of increasing tension steel on ductility classification
3. Required steel for a factored moment
4. Calculation sheet PDF export
"""

from beamcalc.design import MaterialLoaderACI, get_design_code
from beamcalc.reporting import ProjectInfo, export_calc_sheet


def demo_section_analysis():
    """Analyze the default 12x24 in section with 3 #9 bars."""
    print("\n" + "="*70)
    print("ACI 318-19 SECTION ANALYSIS DEMO")
    print("="*70)

    aci = get_design_code("ACI 318-19 (USA)")
    beam = MaterialLoaderACI.default_beam_input()
    results = aci.analyze_beam(beam)

    print(f"\nSection: b = {beam.b} in, h = {beam.h} in, d = {beam.d} in")
    print(f"Materials: f'c = {beam.fc:,.0f} psi, fy = {beam.fy:,.0f} psi")
    print(f"Steel: As = {beam.As} sq in")
    print(f"\na = {results.a:.3f} in, c = {results.c:.3f} in")
    print(f"εt = {results.epsilon_t:.5f} ({results.section_type.value})")
    print(f"Mn = {results.Mn_kip_ft:.1f} kip-ft, φ = {results.phi:.3f}, φMn = {results.phiMn_kip_ft:.1f} kip-ft")
    for warning in results.warnings:
        print(f"  {warning.text}")


def demo_steel_sweep():
    """Show how classification changes as As increases."""
    print("\n" + "="*70)
    print("TENSION STEEL SWEEP")
    print("="*70)

    aci = get_design_code("ACI 318-19 (USA)")
    base = MaterialLoaderACI.default_beam_input()

    print(f"\n{'As (sq in)':>10} {'εt':>10} {'φ':>6} {'φMn (kip-ft)':>14}  Classification")
    for As in [1.0, 3.0, 5.0, 8.0, 12.0]:
        results = aci.analyze_beam(base.model_copy(update={'As': As}))
        print(f"{As:>10.2f} {results.epsilon_t:>10.5f} {results.phi:>6.3f} "
              f"{results.phiMn_kip_ft:>14.1f}  {results.section_type.value}")


def demo_required_steel():
    """Solve for As given Mu = 200 kip-ft."""
    print("\n" + "="*70)
    print("REQUIRED STEEL DEMO")
    print("="*70)

    aci = get_design_code("ACI 318-19 (USA)")
    for Mu_kip_ft in [200, 500, 2000]:
        result = aci.required_steel(Mu=Mu_kip_ft * 12000, b=12, d=21.5, fc=4000, fy=60000)
        print(f"\nMu = {Mu_kip_ft} kip-ft: As = {result.As_required:.2f} sq in "
              f"({'valid' if result.is_valid else 'invalid'}) - {result.message}")


def demo_calc_sheet():
    """Write the calculation sheet PDF for the default section."""
    aci = get_design_code("ACI 318-19 (USA)")
    beam = MaterialLoaderACI.default_beam_input()
    project = ProjectInfo(project_name="Demo Beam", project_number="D-001")
    pdf = export_calc_sheet(project.file_name, beam, aci.analyze_beam(beam), project)
    print(f"\nWrote {project.file_name} ({len(pdf):,} bytes)")


if __name__ == "__main__":
    demo_section_analysis()
    demo_steel_sweep()
    demo_required_steel()
    demo_calc_sheet()
