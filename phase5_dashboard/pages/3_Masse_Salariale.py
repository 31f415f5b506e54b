"""Payroll page: salary mass and its splits under the current filters."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pandas as pd
import streamlit as st

from phase5_dashboard.session import get_dashboard_state, render_filter_sidebar

state = get_dashboard_state()
render_filter_sidebar(state)
analytics = state.analytics

salary = analytics.get_salary_breakdown(state.filters)
labels = analytics.get_comparison_labels(state.filters)

st.header("Masse salariale")
st.caption(labels["current"] + (f" -- comparé à : {labels['comparison']}" if labels["comparison"] else ""))

c1, c2, c3 = st.columns(3)
delta = None if salary.trend is None else f"{salary.trend:+.1f} %"
c1.metric("Masse salariale totale", f"{salary.total_salary_mass / 1000:.0f} k€", delta=delta, delta_color="off")
c2.metric("Par ETP", f"{salary.salary_mass_per_etp / 1000:.0f} k€")
c3.metric("Salaire moyen", f"{salary.average_salary / 1000:.1f} k€")
if state.ai_enabled:
    st.info(salary.insight)

st.divider()

col_evo, col_dept = st.columns(2)
with col_evo:
    st.subheader("Évolution")
    st.line_chart(pd.DataFrame([p.model_dump() for p in salary.evolution]), x="label", y="value")
with col_dept:
    st.subheader("Par département")
    st.dataframe(
        pd.DataFrame([d.model_dump() for d in salary.department_breakdown]).rename(columns={
            "department": "Département", "headcount": "Effectif",
            "total_salary": "Masse salariale", "average_salary": "Salaire moyen",
        }),
        hide_index=True, use_container_width=True,
    )

for column, breakdown in zip(st.columns(3), (salary.by_agency, salary.by_seniority, salary.by_age)):
    with column:
        st.subheader(breakdown.title)
        if breakdown.data:
            st.bar_chart(pd.DataFrame([p.model_dump() for p in breakdown.data]), x="name", y="value")
        else:
            st.caption("Aucune donnée")
