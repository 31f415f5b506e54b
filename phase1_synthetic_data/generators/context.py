"""Generation context shared by the generators of one dataset run."""

from __future__ import annotations
from datetime import date
from typing import Optional

import numpy as np
from faker import Faker


class GenerationContext:
    """Explicit state for one generation run.

    Each generator reads from and writes to the context it is handed so that
    employee ids referenced by absences, tasks and documents stay consistent.
    A new context is built per run; nothing is shared across runs.
    """

    def __init__(self, seed: Optional[int] = None, reference_date: Optional[date] = None) -> None:
        self.seed = seed
        self.reference_date = reference_date or date.today()
        self.rng = np.random.default_rng(seed)

        self.fake = Faker("fr_FR")
        if seed is not None:
            self.fake.seed_instance(seed)

        # Raw records, filled by the generators in dependency order
        self.employees: list[dict] = []
        self.expenses: list[dict] = []
        self.absences: list[dict] = []
        self.tasks: list[dict] = []
        self.documents: list[dict] = []

        # Counters for ID generation
        self._counters: dict[str, int] = {}

    def next_id(self, prefix: str) -> str:
        """Generate the next sequential ID for a given prefix."""
        count = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = count
        return f"{prefix}-{count:05d}"

    def employee_ids(self) -> list[str]:
        return [e["id"] for e in self.employees]

    def present_employees(self) -> list[dict]:
        """Employees not flagged inactive (active or terminated, who worked in the window)."""
        return [e for e in self.employees if e["status"] != "inactive"]

    def as_raw_data(self) -> dict[str, list[dict]]:
        """Raw generator output, as consumed by the normalizer."""
        return {
            "employees": list(self.employees),
            "expenses": list(self.expenses),
            "absences": list(self.absences),
            "tasks": list(self.tasks),
            "documents": list(self.documents),
        }
