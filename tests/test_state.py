"""DashboardState and its local JSON store."""

import json

import pytest

from phase2_analytics.kpis import KPI_IDS
from phase2_analytics.schema import FilterOptions
from phase3_dashboard_state.boards import BoardError
from phase3_dashboard_state.persistence import AI_ENABLED_KEY, FILTERS_KEY, DashboardStore
from phase3_dashboard_state.state import DashboardState


@pytest.fixture
def store(tmp_path):
    return DashboardStore(tmp_path / "state" / "dashboard.json")


@pytest.fixture
def state(small_analytics, store):
    return DashboardState(small_analytics, store)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class TestDashboardStore:

    def test_missing_file_gives_defaults(self, store):
        assert store.load_filters() == FilterOptions(period="year")
        assert store.load_ai_enabled() is False

    def test_filters_round_trip(self, store):
        filters = FilterOptions(period="quarter", department="Finance", compare_with="year-ago")
        assert store.save_filters(filters)
        assert store.load_filters() == filters

    def test_file_layout(self, store):
        store.save_filters(FilterOptions(period="week"))
        store.save_ai_enabled(True)
        document = json.loads(store.path.read_text(encoding="utf-8"))
        assert document[FILTERS_KEY]["period"] == "week"
        assert document[AI_ENABLED_KEY] == "true"

    def test_ai_toggle(self, store):
        store.save_ai_enabled(True)
        assert store.load_ai_enabled() is True
        store.save_ai_enabled(False)
        assert store.load_ai_enabled() is False

    def test_ai_toggle_does_not_clobber_filters(self, store):
        store.save_filters(FilterOptions(period="month"))
        store.save_ai_enabled(True)
        assert store.load_filters().period == "month"

    def test_corrupt_file(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load_filters() == FilterOptions(period="year")
        assert store.load_ai_enabled() is False

    def test_file_with_invalid_utf8(self, store, small_analytics):
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b'{"aiEnabled": "\xff\xfe"}')
        assert store.load_filters() == FilterOptions(period="year")
        assert store.load_ai_enabled() is False
        assert DashboardState(small_analytics, store).current_board.id == "overview"

    def test_invalid_filters_fall_back(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({FILTERS_KEY: {"period": "decade"}, AI_ENABLED_KEY: "true"}),
                              encoding="utf-8")
        assert store.load_filters() == FilterOptions(period="year")
        assert store.load_ai_enabled() is True

    def test_write_failure_reported(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = DashboardStore(blocker / "dashboard.json")
        assert store.save_filters(FilterOptions()) is False


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

class TestFilters:

    def test_initial_state(self, state):
        assert state.filters == FilterOptions(period="year")
        assert state.current_board.id == "overview"
        assert [k.id for k in state.kpis] == KPI_IDS
        assert state.global_insight

    def test_set_filters_recomputes_and_persists(self, state, store):
        assert state.set_filters(FilterOptions(period="month", department="Finance"))
        assert all(k.category == "neutral" for k in state.kpis if k.id not in ("hr-expenses", "headcount"))
        assert store.load_filters().department == "Finance"

    def test_update_filters_merges(self, state):
        state.update_filters(period="week")
        state.update_filters(department="Marketing")
        assert state.filters.period == "week"
        assert state.filters.department == "Marketing"

    def test_filters_restored_by_new_state(self, small_analytics, store, state):
        state.update_filters(period="quarter")
        state.set_ai_enabled(True)
        restored = DashboardState(small_analytics, store)
        assert restored.filters.period == "quarter"
        assert restored.ai_enabled is True


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------

class TestBoards:

    def test_select_board(self, state):
        state.select_board("hr-operations")
        assert [k.id for k in state.kpis] == ["onboarding", "task-completion", "document-completion", "hr-expenses"]

    def test_unknown_board(self, state):
        with pytest.raises(BoardError):
            state.select_board("missing")

    def test_create_board_becomes_current(self, state):
        board = state.create_board("  Direction  ", ["turnover", "headcount", "turnover"])
        assert state.current_board.id == board.id
        assert board.name == "Direction"
        assert [k.id for k in state.kpis] == ["turnover", "headcount"]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, state, name):
        with pytest.raises(BoardError):
            state.create_board(name, ["headcount"])

    def test_unknown_kpi_rejected(self, state):
        with pytest.raises(BoardError):
            state.create_board("Direction", ["headcount", "nps"])
        assert len(state.boards) == 3

    def test_update_board(self, state):
        state.select_board("workforce")
        state.update_board("workforce", name="Équipe", kpis=["absenteeism", "headcount"])
        assert state.current_board.name == "Équipe"
        assert [k.id for k in state.kpis] == ["headcount", "absenteeism"]

    def test_duplicate_board(self, state):
        copy = state.duplicate_board("workforce")
        assert copy.name == "Effectifs & engagement (Copie)"
        assert copy.id != "workforce"
        assert not copy.is_default
        assert state.current_board.id == copy.id
        assert [k.id for k in state.kpis] == state.get_board("workforce").kpi_order

    def test_default_board_protected(self, state):
        with pytest.raises(BoardError):
            state.delete_board("overview")
        state.delete_board("overview", force=True)
        assert state.current_board.id == "workforce"

    def test_delete_current_falls_back_to_first(self, state):
        state.select_board("hr-operations")
        state.delete_board("hr-operations")
        assert state.current_board.id == "overview"

    def test_delete_every_board(self, state):
        for board_id in ["workforce", "hr-operations", "overview"]:
            state.delete_board(board_id, force=True)
        assert state.current_board is None
        assert state.kpis == []
        assert state.displayed_kpi_ids() == []


# ---------------------------------------------------------------------------
# KPI layout
# ---------------------------------------------------------------------------

class TestLayout:

    def test_move_kpi(self, state):
        state.select_board("workforce")
        order = state.move_kpi(0, 2)
        assert order == ["turnover", "absenteeism", "headcount", "remote-work", "age-seniority"]
        assert [k.id for k in state.kpis] == order

    def test_move_out_of_range(self, state):
        with pytest.raises(BoardError):
            state.move_kpi(0, 42)

    def test_reorder_partial(self, state):
        state.select_board("hr-operations")
        order = state.reorder_kpis(["hr-expenses"])
        assert order == ["hr-expenses", "onboarding", "task-completion", "document-completion"]

    def test_add_and_remove(self, state):
        state.select_board("hr-operations")
        state.add_kpi("headcount")
        assert state.displayed_kpi_ids()[-1] == "headcount"
        state.add_kpi("headcount")
        assert state.displayed_kpi_ids().count("headcount") == 1
        state.remove_kpi("onboarding")
        assert "onboarding" not in [k.id for k in state.kpis]

    def test_add_unknown_kpi(self, state):
        with pytest.raises(BoardError):
            state.add_kpi("nps")

    def test_layout_without_board(self, state):
        for board_id in ["workforce", "hr-operations", "overview"]:
            state.delete_board(board_id, force=True)
        with pytest.raises(BoardError):
            state.add_kpi("headcount")
