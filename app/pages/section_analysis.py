"""
Section Analysis Page - ACI 318-19 flexural strength of a trial section
"""

import tempfile
from pathlib import Path

import streamlit as st

from beamcalc.design import (
    BeamInput,
    MaterialLoaderACI,
    get_design_code,
    validate_beam_input,
)
from beamcalc.reporting import (
    ProjectInfo,
    checks_table,
    export_calc_sheet,
    format_number,
    ratios_table,
    section_properties_table,
)
from beamcalc.visualization import plot_cross_section, plot_strain_diagram


def render_input_form(current: BeamInput) -> BeamInput:
    """Collect section geometry, materials and reinforcement."""
    st.markdown("#### Section Geometry")
    b = st.number_input("Width b (in)", min_value=0.0, value=current.b, step=0.5, key="b")
    h = st.number_input("Total Height h (in)", min_value=0.0, value=current.h, step=0.5, key="h")

    d_default = current.d
    if st.button("Auto d = h - 2.5 in", key="auto_d"):
        estimated = MaterialLoaderACI.estimate_effective_depth(h)
        if estimated is not None:
            d_default = estimated
    d = st.number_input("Effective Depth d (in)", min_value=0.0, value=d_default, step=0.25, key="d")

    st.markdown("#### Material Properties")
    strengths = MaterialLoaderACI.list_concrete_strengths()
    fc = st.selectbox(
        "Concrete Strength f'c (psi)",
        strengths,
        index=strengths.index(current.fc) if current.fc in strengths else 0,
        format_func=lambda v: f"{v:,.0f}",
        key="fc"
    )
    grade = st.selectbox("Steel Grade", MaterialLoaderACI.list_steel_grades(), index=1, key="grade")
    steel = MaterialLoaderACI.get_steel(grade)
    Es = st.number_input("Steel Modulus Es (psi)", min_value=0.0, value=steel.Es, step=1e6, key="Es")

    st.markdown("#### Reinforcement")
    col1, col2 = st.columns(2)
    with col1:
        bar_size = st.selectbox("Bar Size", MaterialLoaderACI.list_rebar_sizes(), index=6, key="bar_size")
    with col2:
        bar_count = st.number_input("Number of Bars", min_value=0, value=3, step=1, key="bar_count")
    As_bars = MaterialLoaderACI.total_steel_area(bar_size, int(bar_count))
    As = st.number_input("Tension Steel As (sq in)", min_value=0.0, value=round(As_bars, 2), step=0.1, key="As")

    As_prime = st.number_input("Compression Steel A's (sq in)", min_value=0.0, value=current.As_prime, step=0.1,
                               key="As_prime")
    d_prime = st.number_input("Compression Steel Depth d' (in)", min_value=0.0, value=current.d_prime, step=0.25,
                              key="d_prime")

    return BeamInput(b=b, h=h, d=d, d_prime=d_prime, fc=fc, fy=steel.fy, Es=Es, As=As, As_prime=As_prime)


def render():
    """Render the section analysis page."""
    st.header("📐 Section Analysis (ACI 318-19)")

    code = get_design_code("ACI 318-19 (USA)")
    col_input, col_plot, col_results = st.columns([1, 1, 1])

    with col_input:
        beam = render_input_form(st.session_state.beam_input)
        st.session_state.beam_input = beam

    problems = validate_beam_input(beam)
    results = None if problems else code.analyze_beam(beam)

    with col_plot:
        st.plotly_chart(plot_cross_section(beam, results), use_container_width=True)
        if results is not None:
            st.plotly_chart(plot_strain_diagram(beam, results), use_container_width=True)

    with col_results:
        if problems:
            for problem in problems:
                st.error(problem)
            return

        st.metric("Design Capacity φMn", f"{format_number(results.phiMn_kip_ft, 1)} kip-ft")
        st.caption(
            f"φMn = {format_number(results.phi, 2)} x {format_number(results.Mn_kip_ft, 1)} kip-ft"
        )
        col1, col2 = st.columns(2)
        col1.metric("Nominal Mn", f"{format_number(results.Mn_kip_ft, 1)} kip-ft")
        col2.metric("φ Factor", format_number(results.phi, 3))

        st.markdown(f"**Classification:** {results.section_type.value}")
        st.dataframe(section_properties_table(results), use_container_width=True, hide_index=True)
        st.dataframe(ratios_table(results), use_container_width=True, hide_index=True)
        st.dataframe(checks_table(results), use_container_width=True, hide_index=True)

        if results.errors:
            st.error(f"{len(results.errors)} configuration error(s): results below are not valid for design.")
        for warning in results.warnings:
            if warning.is_error:
                st.error(warning.text)
            else:
                st.warning(warning.text)

        with st.expander("📘 ACI 318-19 Formulas Used"):
            st.latex(r"a = \frac{A_s f_y}{0.85 f'_c b}")
            st.latex(r"c = \frac{a}{\beta_1}")
            st.latex(r"M_n = A_s f_y \left(d - \frac{a}{2}\right)")
            st.latex(r"\varepsilon_t = \varepsilon_{cu} \frac{d - c}{c}")

        with st.expander("📄 Export Calculation Sheet"):
            project = ProjectInfo(
                project_name=st.text_input("Project Name", value="Reinforced Concrete Beam Design"),
                project_number=st.text_input("Project Number", value=""),
                engineer=st.text_input("Engineer", value=""),
            )
            export_dir = Path(tempfile.gettempdir())
            pdf = export_calc_sheet(export_dir / project.file_name, beam, results, project)
            st.download_button(
                "📥 Download PDF",
                data=pdf,
                file_name=project.file_name,
                mime="application/pdf"
            )
