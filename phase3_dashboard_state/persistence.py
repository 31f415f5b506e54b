"""Local JSON store for the dashboard's persisted fields.

Two keys survive a restart: the active filters and the AI-insight toggle.
Boards are not stored. Read failures fall back to defaults and write
failures are reported, never raised.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console

from config.settings import STATE_FILE
from phase2_analytics.schema import FilterOptions

console = Console()

FILTERS_KEY = "hr_dashboard_filters"
AI_ENABLED_KEY = "aiEnabled"


class PersistedDashboard(BaseModel):
    """On-disk document. Values stay raw so one bad key does not void the other."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    filters: Optional[dict] = Field(default=None, alias=FILTERS_KEY)
    ai_enabled: Optional[Union[str, bool]] = Field(default=None, alias=AI_ENABLED_KEY)


class DashboardStore:
    def __init__(self, path: Union[str, Path] = STATE_FILE):
        self.path = Path(path)

    def _read(self) -> PersistedDashboard:
        if not self.path.exists():
            return PersistedDashboard()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return PersistedDashboard.model_validate(payload)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            console.print(f"[yellow]Unreadable dashboard state {self.path}: {e}[/yellow]")
            return PersistedDashboard()

    def _write(self, document: PersistedDashboard) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(document.model_dump(by_alias=True), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            console.print(f"[red]Could not save dashboard state to {self.path}: {e}[/red]")
            return False
        return True

    def load_filters(self) -> FilterOptions:
        raw = self._read().filters
        if raw is None:
            return FilterOptions(period="year")
        try:
            return FilterOptions.model_validate(raw)
        except ValidationError as e:
            console.print(f"[yellow]Ignoring saved filters: {e.error_count()} invalid field(s)[/yellow]")
            return FilterOptions(period="year")

    def save_filters(self, filters: FilterOptions) -> bool:
        document = self._read()
        document.filters = filters.model_dump(mode="json")
        return self._write(document)

    def load_ai_enabled(self) -> bool:
        value = self._read().ai_enabled
        return value is True or value == "true"

    def save_ai_enabled(self, enabled: bool) -> bool:
        document = self._read()
        document.ai_enabled = "true" if enabled else "false"
        return self._write(document)
