"""Boards: named, ordered subsets of the KPI catalogue."""

import uuid
from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, Field

from phase2_analytics.kpis import KPI_IDS


class BoardError(ValueError):
    """Invalid board operation (blank name, unknown id, protected default)."""


class Board(BaseModel):
    id: str
    name: str
    description: str = ""
    kpis: list[str]
    kpi_order: list[str] = []
    created_at: datetime = Field(default_factory=datetime.now)
    is_default: bool = False


def new_board_id() -> str:
    return f"board-{uuid.uuid4().hex[:8]}"


def ordered_kpi_ids(board: Board, available: Iterable[str]) -> list[str]:
    """Display order of a board's KPIs.

    ``kpi_order`` entries come first (restricted to ``kpis`` and to the
    available ids), then the remaining board KPIs in catalogue order.
    """
    available = list(available)
    members = set(board.kpis) & set(available)
    ordered = []
    for kpi_id in board.kpi_order:
        if kpi_id in members and kpi_id not in ordered:
            ordered.append(kpi_id)
    ordered.extend(k for k in available if k in members and k not in ordered)
    return ordered


def default_boards() -> list[Board]:
    """Boards recreated at every session start."""
    return [
        Board(
            id="overview",
            name="Vue d'ensemble",
            description="Tous les indicateurs RH",
            kpis=list(KPI_IDS),
            kpi_order=list(KPI_IDS),
            is_default=True,
        ),
        Board(
            id="workforce",
            name="Effectifs & engagement",
            description="Effectif, mouvements et organisation du travail",
            kpis=["headcount", "turnover", "absenteeism", "remote-work", "age-seniority"],
            kpi_order=["headcount", "turnover", "absenteeism", "remote-work", "age-seniority"],
        ),
        Board(
            id="hr-operations",
            name="Opérations RH",
            description="Processus administratifs et budget",
            kpis=["onboarding", "task-completion", "document-completion", "hr-expenses"],
            kpi_order=["onboarding", "task-completion", "document-completion", "hr-expenses"],
        ),
    ]
