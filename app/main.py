"""
Beam Section Calculator - ACI 318-19 Flexural Analysis
Main Streamlit Application Entry Point
"""

import logging

import streamlit as st

from beamcalc.design import MaterialLoaderACI

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Page configuration
st.set_page_config(
    page_title="Beam Section Calculator",
    page_icon="🏗️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Session state initialization
if 'beam_input' not in st.session_state:
    st.session_state.beam_input = MaterialLoaderACI.default_beam_input()

# Sidebar navigation
with st.sidebar:
    st.title("Beam Section Calculator")
    st.caption("ACI 318-19 Flexural Analysis · US Customary Units")
    st.markdown("---")

    page = st.radio(
        "Navigation",
        ["📐 Section Analysis", "🧮 Required Steel"],
        index=0
    )

    st.markdown("---")
    st.markdown(
        "**Disclaimer:** This calculator is for educational and preliminary design purposes only. "
        "All designs must be verified by a licensed professional engineer."
    )

# Main content area
if page == "📐 Section Analysis":
    from pages import section_analysis
    section_analysis.render()

elif page == "🧮 Required Steel":
    from pages import required_steel
    required_steel.render()
