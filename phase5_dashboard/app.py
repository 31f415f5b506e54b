"""Streamlit app: HR KPI Dashboard (multipage entry point)."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st

# Page config -- only allowed in the entry point
st.set_page_config(
    page_title="Tableau de bord RH",
    page_icon=":bar_chart:",
    layout="wide",
    initial_sidebar_state="expanded",
)

from config.company_profile import COMPANY
from phase5_dashboard.session import get_dashboard_state, render_filter_sidebar

state = get_dashboard_state()
render_filter_sidebar(state)

# --- Welcome page ---
st.header(f"Indicateurs RH - {COMPANY['name']}")
st.markdown(
    """
    Utilisez la barre latérale pour naviguer :

    - **Dashboard** -- tableaux de bord, cartes KPI, graphiques et exports
    - **KPI Details** -- fiche détaillée d'un indicateur (définition, formule, répartitions)
    """
)

headcount = state.analytics.get_extended_headcount(state.filters)
labels = state.analytics.get_comparison_labels(state.filters)

col1, col2, col3, col4 = st.columns(4)
col1.info(f"**{headcount.total_headcount}** collaborateurs actifs")
col2.info(f"**{headcount.total_etp}** ETP")
col3.info(f"**{len(state.boards)}** tableaux de bord")
col4.info(f"Période : **{labels['current']}**")

if state.ai_enabled:
    st.success(state.global_insight)
