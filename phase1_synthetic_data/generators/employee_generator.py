"""Core employee generator: workforce records and employee file checklists."""

import unicodedata
from datetime import date, timedelta

import numpy as np
import pandas as pd

from config.company_profile import (
    AGENCY_WEIGHTS, COMPANY, CONTRACT_TYPE_WEIGHTS, DEPARTMENT_WEIGHTS, DOCUMENT_TYPES,
    GENDER_DISTRIBUTION, MAX_REMOTE_WORK_DAYS, PERFORMANCE_RANGE, POSITIONS_BY_DEPARTMENT,
    SALARY_MEDIAN, SALARY_RANGE, STATUS_WEIGHTS, TRAINING_HOURS_RANGE,
    WORKING_TIME_RATE_WEIGHTS,
)
from config.settings import EMPLOYEE_COUNT
from phase1_synthetic_data.generators.base_generator import BaseGenerator
from phase1_synthetic_data.generators.context import GenerationContext
from phase1_synthetic_data.generators.distributions import (
    beta_rating, birth_date_from_age, exponential_tenure, lognormal_salary,
    normal_clipped, random_date_between, weighted_choice,
)


def _ascii_slug(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in normalized if not unicodedata.combining(c))
    return "".join(c for c in stripped.lower() if c.isalnum() or c == "-")


class EmployeeGenerator(BaseGenerator):
    name = "employees"

    def __init__(self, context: GenerationContext, count: int = EMPLOYEE_COUNT):
        super().__init__(context)
        self.count = count
        self._emails: set[str] = set()

    def generate(self) -> None:
        rng = self.context.rng

        # 1. Workforce
        for _ in range(self.count):
            self.context.employees.append(self._create_employee(rng))

        # 2. Employee file checklists (one per employee)
        for emp in self.context.employees:
            self.context.documents.append(self._create_checklist(rng, emp["id"]))

        self.register("employees", pd.DataFrame(self.context.employees))
        self.register("documents", pd.DataFrame(self.context.documents))

    def _create_employee(self, rng: np.random.Generator) -> dict:
        today = self.context.reference_date
        fake = self.context.fake

        gender = weighted_choice(rng, GENDER_DISTRIBUTION)[0]
        first_name = fake.first_name_male() if gender == "Homme" else fake.first_name_female()
        last_name = fake.last_name()
        department = weighted_choice(rng, DEPARTMENT_WEIGHTS)[0]
        position = str(rng.choice(POSITIONS_BY_DEPARTMENT[department]))

        # Tenure-based hire date, always strictly in the past
        tenure_years = exponential_tenure(rng, scale=3.3, max_years=COMPANY["max_tenure_years"])[0]
        hire_date = today - timedelta(days=max(1, int(tenure_years * 365.25)))
        birth_date = birth_date_from_age(rng, hire_date, mean_age=34, std_age=9, min_age=20, max_age=60)[0]

        status = weighted_choice(rng, STATUS_WEIGHTS)[0]
        termination_date = None
        if status == "terminated":
            termination_date = self._termination_date(rng, hire_date, today)

        # Roughly half the workforce never works remotely
        remote_days = 0 if rng.random() < 0.45 else int(rng.integers(1, MAX_REMOTE_WORK_DAYS + 1))
        onboarding_days = int(round(normal_clipped(
            rng, 18, 8, COMPANY["min_onboarding_days"], COMPANY["max_onboarding_days"],
        )[0]))

        emp_id = self.context.next_id("EMP")
        return {
            "id": emp_id,
            "name": f"{first_name} {last_name}",
            "email": self._email(first_name, last_name, emp_id),
            "department": department,
            "agency": weighted_choice(rng, AGENCY_WEIGHTS)[0],
            "position": position,
            "salary": int(lognormal_salary(rng, SALARY_MEDIAN, *SALARY_RANGE)[0]),
            "hire_date": hire_date.isoformat(),
            "termination_date": termination_date.isoformat() if termination_date else None,
            "status": status,
            "performance_score": int(beta_rating(rng, 4.0, 2.5, *PERFORMANCE_RANGE)[0]),
            "training_hours": int(rng.integers(TRAINING_HOURS_RANGE[0], TRAINING_HOURS_RANGE[1] + 1)),
            "remote_work_days": remote_days,
            "working_time_rate": float(weighted_choice(rng, WORKING_TIME_RATE_WEIGHTS)[0]),
            "gender": gender,
            "birth_date": birth_date.isoformat(),
            "contract_type": weighted_choice(rng, CONTRACT_TYPE_WEIGHTS)[0],
            "onboarding_days": onboarding_days,
        }

    @staticmethod
    def _termination_date(rng: np.random.Generator, hire_date: date, today: date) -> date:
        """Termination between hire + 30 days and yesterday (earlier for very recent hires)."""
        latest = today - timedelta(days=1)
        earliest = min(hire_date + timedelta(days=30), latest)
        earliest = max(earliest, hire_date + timedelta(days=1))
        if earliest > latest:
            return latest
        return random_date_between(rng, earliest, latest)[0]

    def _email(self, first_name: str, last_name: str, emp_id: str) -> str:
        local = f"{_ascii_slug(first_name)}.{_ascii_slug(last_name)}"
        if local in self._emails:
            local = f"{local}.{emp_id.split('-')[1]}"
        self._emails.add(local)
        return f"{local}@{COMPANY['email_domain']}"

    def _create_checklist(self, rng: np.random.Generator, employee_id: str) -> dict:
        row = {"employee_id": employee_id}
        for field, (_, probability) in DOCUMENT_TYPES.items():
            row[field] = bool(rng.random() < probability)
        return row

    def validate(self) -> list[str]:
        errors = super().validate()

        employees_df = self.dataframe("employees")
        if employees_df is not None and not employees_df.empty:
            if len(employees_df) != self.count:
                errors.append(f"Expected {self.count} employees, got {len(employees_df)}")

            if employees_df["id"].duplicated().any():
                errors.append("Duplicate employee ids")

            # termination_date is set if and only if status is terminated
            terminated = employees_df["status"] == "terminated"
            has_term = employees_df["termination_date"].notna()
            mismatched = employees_df[terminated != has_term]
            if len(mismatched) > 0:
                errors.append(f"{len(mismatched)} employees with status/termination_date mismatch")

            bad_rates = ~employees_df["working_time_rate"].isin(list(WORKING_TIME_RATE_WEIGHTS))
            if bad_rates.any():
                errors.append(f"{int(bad_rates.sum())} employees with an unknown working time rate")

            low, high = SALARY_RANGE
            bad_salaries = ~employees_df["salary"].between(low, high)
            if bad_salaries.any():
                errors.append(f"{int(bad_salaries.sum())} salaries outside [{low}, {high}]")

            today = self.context.reference_date.isoformat()
            future_hires = employees_df[employees_df["hire_date"] >= today]
            if len(future_hires) > 0:
                errors.append(f"{len(future_hires)} employees hired on or after the reference date")

            termed = employees_df[has_term]
            bad_terms = termed[termed["termination_date"] < termed["hire_date"]]
            if len(bad_terms) > 0:
                errors.append(f"{len(bad_terms)} employees terminated before hire date")

        return errors
