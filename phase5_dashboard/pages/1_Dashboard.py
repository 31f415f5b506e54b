"""Dashboard page: board manager, KPI grid, charts and exports."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import json
import pandas as pd
import streamlit as st

from phase2_analytics.kpis import KPI_IDS, KPI_REGISTRY
from phase3_dashboard_state.boards import BoardError
from phase4_exports.dataset_export import build_complete_dataset, build_gender_distribution
from phase4_exports.kpi_exports import (
    ExportError, export_filename, kpis_to_csv, kpis_to_excel, kpis_to_json, kpis_to_pdf,
)
from phase5_dashboard.session import get_dashboard_state, render_filter_sidebar


CATEGORY_ICONS = {
    "positive": ":green[●]",
    "negative": ":red[●]",
    "neutral": ":gray[●]",
}
GRID_COLUMNS = 3


def _kpi_label(kpi_id: str) -> str:
    return KPI_REGISTRY[kpi_id].name


def _render_board_manager(state):
    """Board selection, creation, duplication and deletion."""
    boards = state.boards
    if not boards:
        st.info("Aucun tableau de bord. Créez-en un pour afficher des indicateurs.")
    else:
        ids = [b.id for b in boards]
        selected = st.selectbox(
            "Tableau de bord",
            ids,
            index=ids.index(state.current_board.id),
            format_func=lambda i: next(
                f"{b.name} (Défaut)" if b.is_default else b.name for b in boards if b.id == i
            ),
        )
        if selected != state.current_board.id:
            state.select_board(selected)
            st.rerun()
        if state.current_board.description:
            st.caption(state.current_board.description)

    col_create, col_edit, col_dup, col_del = st.columns(4)

    with col_create.popover("Nouveau", use_container_width=True):
        with st.form("create_board", clear_on_submit=True):
            name = st.text_input("Nom")
            description = st.text_input("Description")
            kpis = st.multiselect("Indicateurs", KPI_IDS, format_func=_kpi_label)
            if st.form_submit_button("Créer"):
                try:
                    state.create_board(name, kpis, description)
                    st.toast("Tableau de bord créé avec succès")
                    st.rerun()
                except BoardError as e:
                    st.error(str(e))

    if state.current_board is None:
        return

    board = state.current_board
    with col_edit.popover("Modifier", use_container_width=True):
        with st.form("edit_board"):
            name = st.text_input("Nom", value=board.name)
            description = st.text_input("Description", value=board.description)
            kpis = st.multiselect("Indicateurs", KPI_IDS, default=board.kpis, format_func=_kpi_label)
            if st.form_submit_button("Enregistrer"):
                try:
                    state.update_board(board.id, name=name, description=description, kpis=kpis)
                    st.toast("Tableau de bord mis à jour")
                    st.rerun()
                except BoardError as e:
                    st.error(str(e))

    if col_dup.button("Dupliquer", use_container_width=True):
        state.duplicate_board(board.id)
        st.toast("Tableau de bord dupliqué avec succès")
        st.rerun()

    if col_del.button("Supprimer", use_container_width=True, disabled=board.is_default):
        try:
            state.delete_board(board.id)
            st.toast("Tableau de bord supprimé")
            st.rerun()
        except BoardError as e:
            st.error(str(e))


def _render_kpi_card(state, kpi, position: int, count: int):
    with st.container(border=True):
        st.markdown(f"{CATEGORY_ICONS[kpi.category]} **{kpi.name}**")
        delta = None if kpi.trend is None else f"{kpi.trend:+.1f} %"
        st.metric(kpi.name, f"{kpi.value} {kpi.unit}".strip(), delta=delta,
                  delta_color="off", label_visibility="collapsed")
        if state.ai_enabled:
            st.caption(kpi.insight)

        up, down, remove, details = st.columns(4)
        if up.button("↑", key=f"up_{kpi.id}", disabled=position == 0):
            state.move_kpi(position, position - 1)
            st.rerun()
        if down.button("↓", key=f"down_{kpi.id}", disabled=position == count - 1):
            state.move_kpi(position, position + 1)
            st.rerun()
        if remove.button("✕", key=f"rm_{kpi.id}"):
            state.remove_kpi(kpi.id)
            st.rerun()
        if details.button("ⓘ", key=f"info_{kpi.id}"):
            st.session_state.selected_kpi = kpi.id
            st.switch_page("pages/2_KPI_Details.py")


def _render_kpi_grid(state):
    kpis = state.kpis
    if not kpis:
        st.info("Ce tableau de bord ne contient aucun indicateur.")
        return
    for row_start in range(0, len(kpis), GRID_COLUMNS):
        columns = st.columns(GRID_COLUMNS)
        for offset, kpi in enumerate(kpis[row_start:row_start + GRID_COLUMNS]):
            with columns[offset]:
                _render_kpi_card(state, kpi, row_start + offset, len(kpis))

    missing = [k for k in KPI_IDS if k not in state.current_board.kpis]
    if missing:
        col_pick, col_add = st.columns([3, 1])
        to_add = col_pick.selectbox("Ajouter un indicateur", missing, format_func=_kpi_label,
                                    label_visibility="collapsed")
        if col_add.button("Ajouter", use_container_width=True):
            state.add_kpi(to_add)
            st.rerun()


def _render_charts(state):
    if not state.kpis:
        return
    kpi_id = st.selectbox("Indicateur", [k.id for k in state.kpis], format_func=_kpi_label)
    chart = state.analytics.get_kpi_chart_data(kpi_id, state.filters)
    if chart is None:
        return

    evolution, by_department, specific = st.tabs(
        ["Évolution", "Par département", chart.specific_breakdown.title]
    )
    with evolution:
        df = pd.DataFrame([p.model_dump() for p in chart.time_evolution])
        st.line_chart(df, x="label", y="value")
    with by_department:
        df = pd.DataFrame([p.model_dump() for p in chart.department_breakdown])
        st.bar_chart(df, x="department", y="value")
    with specific:
        df = pd.DataFrame([p.model_dump() for p in chart.specific_breakdown.data])
        st.bar_chart(df, x="name", y="value")


def _render_exports(state):
    analytics = state.analytics
    title = state.current_board.name if state.current_board else "KPIs RH"
    headcount = analytics.get_extended_headcount(state.filters)

    try:
        documents = [
            ("CSV", kpis_to_csv(state.kpis), "csv", "text/csv"),
            ("Excel", kpis_to_excel(state.kpis, headcount), "xlsx",
             "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
            ("PDF", kpis_to_pdf(state.kpis, title, state.global_insight), "pdf", "application/pdf"),
            ("JSON", kpis_to_json(state.kpis, state.filters, headcount), "json", "application/json"),
        ]
    except ExportError as e:
        st.error(f"Export impossible : {e}")
        return

    columns = st.columns(len(documents) + 2)
    for column, (label, content, extension, mime) in zip(columns, documents):
        column.download_button(label, content, file_name=export_filename("kpis-rh", extension),
                               mime=mime, use_container_width=True)

    dataset = json.dumps(build_complete_dataset(st.session_state.hr_data), ensure_ascii=False, indent=2)
    columns[-2].download_button("Jeu de données", dataset,
                                file_name=export_filename("donnees-rh-completes", "json"),
                                mime="application/json", use_container_width=True)
    genders = json.dumps(build_gender_distribution(analytics, state.filters), ensure_ascii=False, indent=2)
    columns[-1].download_button("Genre", genders,
                                file_name=export_filename("repartition-genre", "json"),
                                mime="application/json", use_container_width=True)


# ---------------------------------------------------------------------------
# Page layout
# ---------------------------------------------------------------------------

state = get_dashboard_state()
render_filter_sidebar(state)

st.header("Tableau de bord RH")
labels = state.analytics.get_comparison_labels(state.filters)
st.caption(labels["current"] + (f" -- comparé à : {labels['comparison']}" if labels["comparison"] else ""))

_render_board_manager(state)

if state.ai_enabled:
    st.info(state.global_insight)

st.divider()
_render_kpi_grid(state)

st.divider()
st.subheader("Graphiques")
_render_charts(state)

st.divider()
st.subheader("Exports")
_render_exports(state)
