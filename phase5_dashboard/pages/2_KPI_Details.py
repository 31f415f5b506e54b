"""KPI details page, addressed by ?kpi=<id>."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pandas as pd
import streamlit as st

from phase2_analytics.kpis import KPI_IDS, KPI_REGISTRY
from phase5_dashboard.session import get_dashboard_state, render_filter_sidebar

state = get_dashboard_state()
render_filter_sidebar(state)
analytics = state.analytics

# --- Route ---
requested = st.session_state.pop("selected_kpi", None) or st.query_params.get("kpi") or KPI_IDS[0]
if requested not in KPI_REGISTRY:
    st.error(f"Indicateur inconnu : {requested}")
    requested = KPI_IDS[0]

kpi_id = st.selectbox(
    "Indicateur",
    KPI_IDS,
    index=KPI_IDS.index(requested),
    format_func=lambda k: KPI_REGISTRY[k].name,
)
st.query_params["kpi"] = kpi_id

kpi = analytics.get_kpi(kpi_id, state.filters)
details = analytics.get_kpi_details(kpi_id)
labels = analytics.get_comparison_labels(state.filters)

st.header(kpi.name)
st.caption(labels["current"] + (f" -- comparé à : {labels['comparison']}" if labels["comparison"] else ""))

col_value, col_text = st.columns([1, 2])
with col_value:
    delta = None if kpi.trend is None else f"{kpi.trend:+.1f} %"
    st.metric("Valeur", f"{kpi.value} {kpi.unit}".strip(), delta=delta, delta_color="off")
    st.markdown(f"Statut : **{kpi.category}**")
with col_text:
    st.markdown(f"**Définition** -- {details['description']}")
    st.markdown(f"**Formule** -- `{details['formula']}`")
    if state.ai_enabled:
        st.info(kpi.insight)

st.divider()

chart = analytics.get_kpi_chart_data(kpi_id, state.filters)
col_evo, col_dept = st.columns(2)
with col_evo:
    st.subheader("Évolution")
    st.line_chart(pd.DataFrame([p.model_dump() for p in chart.time_evolution]), x="label", y="value")
with col_dept:
    st.subheader("Par département")
    st.bar_chart(pd.DataFrame([p.model_dump() for p in chart.department_breakdown]),
                 x="department", y="value")

st.subheader(chart.specific_breakdown.title)
breakdown = pd.DataFrame([p.model_dump() for p in chart.specific_breakdown.data])
st.dataframe(breakdown.rename(columns={"name": "Catégorie", "value": "Valeur"}),
             hide_index=True, use_container_width=True)

if kpi_id == "headcount":
    st.divider()
    extended = analytics.get_extended_headcount(state.filters)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("ETP", extended.total_etp)
    c2.metric("Arrivées", extended.new_hires)
    c3.metric("Départs", extended.departures)
    c4.metric("Hommes / Femmes", f"{extended.gender_ratio.men:.0f} % / {extended.gender_ratio.women:.0f} %")
    st.dataframe(
        pd.DataFrame([d.model_dump() for d in extended.department_breakdown]),
        hide_index=True, use_container_width=True,
    )
