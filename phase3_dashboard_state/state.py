"""DashboardState: active filters, boards and the KPI set they select."""

from typing import Optional

from phase2_analytics.engine import HRAnalytics
from phase2_analytics.kpis import KPI_IDS, KPI_REGISTRY
from phase2_analytics.schema import FilterOptions, KPIData
from phase3_dashboard_state.boards import (
    Board, BoardError, default_boards, new_board_id, ordered_kpi_ids,
)
from phase3_dashboard_state.persistence import DashboardStore


class DashboardState:
    """Explicit dashboard context shared by the presentation layer.

    Every mutation recomputes ``kpis`` and ``global_insight`` before
    returning. ``current_board`` is always one of ``boards``, or None only
    when no board is left.
    """

    def __init__(self, analytics: HRAnalytics, store: DashboardStore,
                 boards: Optional[list[Board]] = None):
        self.analytics = analytics
        self.store = store
        self.filters = store.load_filters()
        self.ai_enabled = store.load_ai_enabled()
        self.boards = list(boards) if boards is not None else default_boards()
        self.current_board = self.boards[0] if self.boards else None
        self.kpis: list[KPIData] = []
        self.global_insight = ""
        self.refresh()

    # -------------------------------------------------------------------------
    # Recomputation
    # -------------------------------------------------------------------------

    def refresh(self) -> list[KPIData]:
        """Recompute the KPI set of the current board under the current filters."""
        if self.current_board is None:
            self.kpis = []
        else:
            by_id = {k.id: k for k in self.analytics.get_all_kpis(self.filters)}
            self.kpis = [by_id[k] for k in ordered_kpi_ids(self.current_board, by_id)]
        self.global_insight = self.analytics.generate_global_insight(self.kpis, self.filters)
        return self.kpis

    def displayed_kpi_ids(self) -> list[str]:
        if self.current_board is None:
            return []
        return ordered_kpi_ids(self.current_board, KPI_IDS)

    # -------------------------------------------------------------------------
    # Persisted fields
    # -------------------------------------------------------------------------

    def set_filters(self, filters: FilterOptions) -> bool:
        """Apply and persist filters. Returns False when the save failed."""
        self.filters = filters
        saved = self.store.save_filters(filters)
        self.refresh()
        return saved

    def update_filters(self, **changes) -> bool:
        merged = {**self.filters.model_dump(), **changes}
        return self.set_filters(FilterOptions.model_validate(merged))

    def set_ai_enabled(self, enabled: bool) -> bool:
        self.ai_enabled = bool(enabled)
        return self.store.save_ai_enabled(self.ai_enabled)

    # -------------------------------------------------------------------------
    # Boards
    # -------------------------------------------------------------------------

    def get_board(self, board_id: str) -> Board:
        for board in self.boards:
            if board.id == board_id:
                return board
        raise BoardError(f"Unknown board: {board_id}")

    def _replace(self, board: Board) -> Board:
        self.boards = [board if b.id == board.id else b for b in self.boards]
        if self.current_board is not None and self.current_board.id == board.id:
            self.current_board = board
        self.refresh()
        return board

    @staticmethod
    def _check_name(name: str) -> str:
        if not name or not name.strip():
            raise BoardError("Board name is required")
        return name.strip()

    @staticmethod
    def _check_kpis(kpis) -> list[str]:
        unknown = [k for k in kpis if k not in KPI_REGISTRY]
        if unknown:
            raise BoardError(f"Unknown KPI id(s): {', '.join(unknown)}")
        return list(dict.fromkeys(kpis))

    def select_board(self, board_id: str) -> Board:
        self.current_board = self.get_board(board_id)
        self.refresh()
        return self.current_board

    def create_board(self, name: str, kpis: list[str], description: str = "",
                     kpi_order: Optional[list[str]] = None) -> Board:
        """Add a board and make it current."""
        kpis = self._check_kpis(kpis)
        board = Board(
            id=new_board_id(),
            name=self._check_name(name),
            description=description,
            kpis=kpis,
            kpi_order=[k for k in (kpi_order or kpis) if k in kpis],
        )
        self.boards.append(board)
        self.current_board = board
        self.refresh()
        return board

    def update_board(self, board_id: str, name: Optional[str] = None,
                     description: Optional[str] = None,
                     kpis: Optional[list[str]] = None) -> Board:
        board = self.get_board(board_id)
        changes = {}
        if name is not None:
            changes["name"] = self._check_name(name)
        if description is not None:
            changes["description"] = description
        if kpis is not None:
            kpis = self._check_kpis(kpis)
            kept = [k for k in board.kpi_order if k in kpis]
            changes["kpis"] = kpis
            changes["kpi_order"] = kept + [k for k in kpis if k not in kept]
        return self._replace(board.model_copy(update=changes))

    def duplicate_board(self, board_id: str) -> Board:
        source = self.get_board(board_id)
        return self.create_board(
            name=f"{source.name} (Copie)",
            kpis=list(source.kpis),
            description=source.description,
            kpi_order=list(source.kpi_order or source.kpis),
        )

    def delete_board(self, board_id: str, force: bool = False) -> None:
        """Remove a board; the current board falls back to the first remaining one."""
        board = self.get_board(board_id)
        if board.is_default and not force:
            raise BoardError(f"Default board '{board.name}' cannot be deleted")

        self.boards = [b for b in self.boards if b.id != board_id]
        if self.current_board is not None and self.current_board.id == board_id:
            self.current_board = self.boards[0] if self.boards else None
        self.refresh()

    # -------------------------------------------------------------------------
    # KPI layout of the current board
    # -------------------------------------------------------------------------

    def _require_board(self) -> Board:
        if self.current_board is None:
            raise BoardError("No board selected")
        return self.current_board

    def reorder_kpis(self, new_order: list[str]) -> list[str]:
        """Set the display order; ids missing from new_order keep their relative order after it."""
        board = self._require_board()
        current = ordered_kpi_ids(board, KPI_IDS)
        head = [k for k in dict.fromkeys(new_order) if k in board.kpis]
        order = head + [k for k in current if k not in head]
        self._replace(board.model_copy(update={"kpi_order": order}))
        return order

    def move_kpi(self, source: int, destination: int) -> list[str]:
        """Move the KPI displayed at position `source` to position `destination`."""
        order = self.displayed_kpi_ids()
        if not (0 <= source < len(order) and 0 <= destination < len(order)):
            raise BoardError(f"Position out of range: {source} -> {destination}")
        order.insert(destination, order.pop(source))
        return self.reorder_kpis(order)

    def add_kpi(self, kpi_id: str) -> Board:
        board = self._require_board()
        self._check_kpis([kpi_id])
        if kpi_id in board.kpis:
            return board
        return self._replace(board.model_copy(update={
            "kpis": board.kpis + [kpi_id],
            "kpi_order": ordered_kpi_ids(board, KPI_IDS) + [kpi_id],
        }))

    def remove_kpi(self, kpi_id: str) -> Board:
        board = self._require_board()
        return self._replace(board.model_copy(update={
            "kpis": [k for k in board.kpis if k != kpi_id],
            "kpi_order": [k for k in board.kpi_order if k != kpi_id],
        }))
