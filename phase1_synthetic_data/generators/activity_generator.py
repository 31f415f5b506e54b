"""Activity generator: absences and HR tasks for the workforce."""

from datetime import date, timedelta

import numpy as np
import pandas as pd

from config.company_profile import ABSENCE_TYPES, TASK_STATUS_WEIGHTS, TASK_TEMPLATES
from phase1_synthetic_data.generators.base_generator import BaseGenerator
from phase1_synthetic_data.generators.distributions import random_date_between, weighted_choice

# Activity history depth, so prior-year comparisons have data
HISTORY_DAYS = 730

# Expected absences per employee-year and their length in days
ABSENCES_PER_YEAR = 2.0
MAX_ABSENCE_DAYS = 7


class ActivityGenerator(BaseGenerator):
    name = "activity"

    def generate(self) -> None:
        rng = self.context.rng

        for emp in self.context.present_employees():
            start, end = self._activity_span(emp)
            if start > end:
                continue
            self.context.absences.extend(self._generate_absences(rng, emp["id"], start, end))
            self.context.tasks.extend(self._generate_tasks(rng, emp["id"], start, end))

        self.register("absences", pd.DataFrame(
            self.context.absences, columns=["employee_id", "days", "type", "date"],
        ))
        self.register("tasks", pd.DataFrame(
            self.context.tasks, columns=["employee_id", "task", "category", "due_date", "status"],
        ))

    def _activity_span(self, emp: dict) -> tuple[date, date]:
        """Days on which the employee was on the payroll within the history depth."""
        today = self.context.reference_date
        hire_date = date.fromisoformat(emp["hire_date"])
        start = max(hire_date, today - timedelta(days=HISTORY_DAYS - 1))
        end = today
        if emp["termination_date"]:
            end = date.fromisoformat(emp["termination_date"]) - timedelta(days=1)
        return start, end

    def _generate_absences(self, rng: np.random.Generator, employee_id: str,
                           start: date, end: date) -> list[dict]:
        years = ((end - start).days + 1) / 365.25
        count = rng.poisson(ABSENCES_PER_YEAR * years)
        dates = random_date_between(rng, start, end, size=count) if count else []
        types = weighted_choice(rng, ABSENCE_TYPES, size=count) if count else []

        return [
            {
                "employee_id": employee_id,
                "days": int(rng.integers(1, MAX_ABSENCE_DAYS + 1)),
                "type": absence_type,
                "date": absence_date.isoformat(),
            }
            for absence_date, absence_type in zip(dates, types)
        ]

    def _generate_tasks(self, rng: np.random.Generator, employee_id: str,
                        start: date, end: date) -> list[dict]:
        count = int(rng.integers(2, 7))
        due_dates = random_date_between(rng, start, end, size=count)
        categories = list(TASK_TEMPLATES)

        tasks = []
        for due_date in due_dates:
            category = categories[int(rng.integers(0, len(categories)))]
            tasks.append({
                "employee_id": employee_id,
                "task": str(rng.choice(TASK_TEMPLATES[category])),
                "category": category,
                "due_date": due_date.isoformat(),
                "status": weighted_choice(rng, TASK_STATUS_WEIGHTS)[0],
            })
        return tasks

    def validate(self) -> list[str]:
        errors = []

        known_ids = set(self.context.employee_ids())
        for name in ("absences", "tasks"):
            df = self.dataframe(name)
            if df is None or df.empty:
                continue
            orphans = set(df["employee_id"]) - known_ids
            if orphans:
                errors.append(f"{self.name}/{name}: {len(orphans)} orphan employee ids")

        absences = self.dataframe("absences")
        if absences is not None and not absences.empty:
            if (absences["days"] <= 0).any():
                errors.append("absences: non-positive duration")

        return errors
