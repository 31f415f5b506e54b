"""Session bootstrap and the filter sidebar shared by every page."""

from datetime import date, timedelta

import streamlit as st

from config.settings import DEMO_MODE, RANDOM_SEED, STATE_FILE
from phase1_synthetic_data.orchestrator import GenerationError
from phase2_analytics.engine import HRAnalytics
from phase2_analytics.schema import FilterOptions
from phase3_dashboard_state.persistence import DashboardStore
from phase3_dashboard_state.state import DashboardState

PERIOD_OPTIONS = {
    "week": "Semaine",
    "month": "Mois",
    "quarter": "Trimestre",
    "year": "Année",
    "custom": "Personnalisée",
}
COMPARE_OPTIONS = {
    None: "Aucune comparaison",
    "previous": "Période précédente",
    "year-ago": "Année précédente",
}
REMOTE_OPTIONS = {
    None: "Tous",
    True: "Télétravail",
    False: "Sur site",
}
ALL = "Tous"


def _build_state(boards=None, current_board_id=None) -> DashboardState:
    analytics = HRAnalytics.generate(seed=RANDOM_SEED, demo_mode=DEMO_MODE)
    st.session_state.hr_data = analytics.data
    state = DashboardState(analytics, DashboardStore(STATE_FILE), boards)
    if current_board_id and any(b.id == current_board_id for b in state.boards):
        state.select_board(current_board_id)
    return state


def get_dashboard_state() -> DashboardState:
    """Create the dataset and dashboard context once per browser session."""
    if "dashboard" not in st.session_state:
        try:
            st.session_state.dashboard = _build_state()
        except GenerationError as e:
            st.error(f"Impossible de générer les données RH : {e}")
            st.stop()
    return st.session_state.dashboard


def regenerate_dataset() -> None:
    """Draw a fresh dataset, keeping the session's boards."""
    previous = st.session_state.get("dashboard")
    boards = previous.boards if previous else None
    current = previous.current_board.id if previous and previous.current_board else None
    try:
        st.session_state.dashboard = _build_state(boards, current)
    except GenerationError as e:
        st.error(f"Impossible de générer les données RH : {e}")


def render_filter_sidebar(state: DashboardState) -> None:
    """Filter controls and the AI-insight toggle. Applies changes immediately."""
    analytics = state.analytics
    current = state.filters

    with st.sidebar:
        st.title("Tableau de bord RH")
        st.caption(f"{len(st.session_state.hr_data.employees)} collaborateurs")

        period = st.selectbox(
            "Période",
            list(PERIOD_OPTIONS),
            index=list(PERIOD_OPTIONS).index(current.period),
            format_func=PERIOD_OPTIONS.get,
        )

        start_date = end_date = None
        if period == "custom":
            today = analytics.reference_date
            start_date = st.date_input("Début", value=current.start_date or today - timedelta(days=90))
            end_date = st.date_input("Fin", value=current.end_date or today)

        departments = [ALL] + analytics.get_departments()
        department = st.selectbox(
            "Département",
            departments,
            index=departments.index(current.department) if current.department in departments else 0,
        )

        agencies = [ALL] + analytics.get_agencies()
        agency = st.selectbox(
            "Agence",
            agencies,
            index=agencies.index(current.agency) if current.agency in agencies else 0,
        )

        remote_work = st.selectbox(
            "Mode de travail",
            list(REMOTE_OPTIONS),
            index=list(REMOTE_OPTIONS).index(current.remote_work),
            format_func=REMOTE_OPTIONS.get,
        )

        compare_with = st.selectbox(
            "Comparer avec",
            list(COMPARE_OPTIONS),
            index=list(COMPARE_OPTIONS).index(current.compare_with),
            format_func=COMPARE_OPTIONS.get,
        )

        selected = FilterOptions(
            period=period,
            department=department,
            agency=agency,
            remote_work=remote_work,
            start_date=start_date if isinstance(start_date, date) else None,
            end_date=end_date if isinstance(end_date, date) else None,
            compare_with=compare_with,
        )
        if selected != current and not state.set_filters(selected):
            st.warning("Les filtres n'ont pas pu être sauvegardés.")

        st.divider()
        ai_enabled = st.toggle("Insights IA", value=state.ai_enabled)
        if ai_enabled != state.ai_enabled and not state.set_ai_enabled(ai_enabled):
            st.warning("La préférence IA n'a pas pu être sauvegardée.")

        if st.button("Régénérer les données", use_container_width=True):
            regenerate_dataset()
            st.rerun()
