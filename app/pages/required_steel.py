"""
Required Steel Page - tension steel for a factored moment demand
"""

import streamlit as st

from beamcalc.design import MaterialLoaderACI, get_design_code
from beamcalc.reporting import format_number, format_percent


def render():
    """Render the required steel page."""
    st.header("🧮 Required Tension Steel (ACI 318-19)")
    st.caption("Assumes a tension-controlled section (φ = 0.90).")

    code = get_design_code("ACI 318-19 (USA)")
    beam = st.session_state.beam_input

    col1, col2 = st.columns(2)
    with col1:
        Mu_kip_ft = st.number_input("Factored Moment Mu (kip-ft)", min_value=0.0, value=200.0, step=10.0)
        b = st.number_input("Width b (in)", min_value=0.0, value=beam.b, step=0.5, key="req_b")
        d = st.number_input("Effective Depth d (in)", min_value=0.0, value=beam.d, step=0.25, key="req_d")
    with col2:
        fc = st.selectbox("Concrete Strength f'c (psi)", MaterialLoaderACI.list_concrete_strengths(), index=1,
                          format_func=lambda v: f"{v:,.0f}", key="req_fc")
        grade = st.selectbox("Steel Grade", MaterialLoaderACI.list_steel_grades(), index=1, key="req_grade")

    if st.button("Solve", key="req_solve"):
        result = code.required_steel(
            Mu=Mu_kip_ft * 12000,
            b=b, d=d,
            fc=fc,
            fy=MaterialLoaderACI.get_steel(grade).fy,
        )

        col1, col2 = st.columns(2)
        col1.metric("As required", f"{format_number(result.As_required, 2)} sq in")
        col2.metric("ρ required", format_percent(result.rho_required))

        if not result.is_valid:
            st.error(f"❌ {result.message}")
            return

        st.success("✅ Tension-controlled design is feasible")

        from beamcalc.design.aci318 import run_beam_analysis_from_ui
        check = run_beam_analysis_from_ui(
            b=b, h=beam.h, d=d, d_prime=beam.d_prime,
            fc=fc, fy=MaterialLoaderACI.get_steel(grade).fy,
            As=result.As_required,
        )

        st.markdown("#### Check with As required")
        col1, col2 = st.columns(2)
        col1.metric("φMn", f"{format_number(check['phiMn_kip_ft'], 1)} kip-ft")
        col2.metric("Classification", check['section_type'])
        for text in check['warnings']:
            st.warning(text)
