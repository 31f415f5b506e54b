"""Synthetic data generator: counts, invariants and reproducibility."""

from datetime import date

import pytest

from config.company_profile import (
    DOCUMENT_TYPES, EXPENSE_CATEGORIES, SALARY_RANGE, WORKING_TIME_RATE_WEIGHTS,
)
from phase1_synthetic_data.generators.context import GenerationContext
from phase1_synthetic_data.generators.distributions import weighted_choice
from phase1_synthetic_data.generators.employee_generator import EmployeeGenerator
from phase1_synthetic_data.generators.temporal import workdays_between
from phase1_synthetic_data.orchestrator import generate_hr_data, generate_raw_hr_data

from conftest import REFERENCE_DATE


class TestGeneratedDataset:

    def test_default_counts(self, raw_data):
        assert len(raw_data["employees"]) == 250
        assert len(raw_data["expenses"]) == 500
        assert len(raw_data["documents"]) == 250

    def test_terminated_iff_termination_date(self, raw_data):
        for emp in raw_data["employees"]:
            assert (emp["status"] == "terminated") == (emp["termination_date"] is not None)

    def test_working_time_rates(self, raw_data):
        assert {e["working_time_rate"] for e in raw_data["employees"]} <= {0.5, 0.6, 0.8, 1.0}

    def test_employee_ranges(self, raw_data):
        low, high = SALARY_RANGE
        for emp in raw_data["employees"]:
            assert low <= emp["salary"] <= high
            assert 1 <= emp["performance_score"] <= 5
            assert 0 <= emp["training_hours"] <= 80
            assert date.fromisoformat(emp["hire_date"]) < REFERENCE_DATE

    def test_termination_after_hire(self, raw_data):
        for emp in raw_data["employees"]:
            if emp["termination_date"]:
                assert emp["termination_date"] >= emp["hire_date"]
                assert date.fromisoformat(emp["termination_date"]) < REFERENCE_DATE

    def test_unique_ids_and_emails(self, raw_data):
        employees = raw_data["employees"]
        assert len({e["id"] for e in employees}) == len(employees)
        assert len({e["email"] for e in employees}) == len(employees)
        assert all(e["email"].endswith("@horizon-services.fr") for e in employees)

    def test_expense_amounts_inside_category_bucket(self, raw_data):
        for expense in raw_data["expenses"]:
            low, high = EXPENSE_CATEGORIES[expense["category"]]["amount_range"]
            assert low <= expense["amount"] <= high

    def test_activity_references_known_employees(self, raw_data):
        ids = {e["id"] for e in raw_data["employees"]}
        assert {a["employee_id"] for a in raw_data["absences"]} <= ids
        assert {t["employee_id"] for t in raw_data["tasks"]} <= ids

    def test_inactive_employees_have_no_activity(self, raw_data):
        inactive = {e["id"] for e in raw_data["employees"] if e["status"] == "inactive"}
        assert not inactive & {a["employee_id"] for a in raw_data["absences"]}
        assert not inactive & {t["employee_id"] for t in raw_data["tasks"]}

    def test_status_mix_roughly_follows_weights(self, raw_data):
        active = sum(1 for e in raw_data["employees"] if e["status"] == "active")
        assert 0.75 < active / 250 < 0.95


class TestGeneration:

    def test_same_seed_same_data(self):
        first = generate_raw_hr_data(seed=7, reference_date=REFERENCE_DATE,
                                     employee_count=30, expense_count=40)
        second = generate_raw_hr_data(seed=7, reference_date=REFERENCE_DATE,
                                      employee_count=30, expense_count=40)
        assert first == second

    def test_generate_hr_data_is_normalized(self):
        data = generate_hr_data(seed=3, reference_date=REFERENCE_DATE,
                                employee_count=20, expense_count=30)
        assert len(data.employees) == 20
        assert len(data.expenses) == 30
        assert isinstance(data.employees, tuple)
        assert all(isinstance(e.hire_date, date) for e in data.employees)

    def test_employee_generator_validates(self):
        context = GenerationContext(seed=1, reference_date=REFERENCE_DATE)
        generator = EmployeeGenerator(context, count=15)
        generator.generate()
        assert generator.validate() == []
        assert set(generator.dataframe("documents").columns) == {"employee_id", *DOCUMENT_TYPES}

    def test_validate_flags_status_mismatch(self):
        context = GenerationContext(seed=1, reference_date=REFERENCE_DATE)
        generator = EmployeeGenerator(context, count=5)
        generator.generate()
        df = generator.dataframe("employees")
        df.loc[0, "status"] = "terminated"
        df.loc[0, "termination_date"] = None
        assert any("mismatch" in err for err in generator.validate())

    def test_context_ids_are_sequential(self):
        context = GenerationContext(seed=1)
        assert context.next_id("EMP") == "EMP-00001"
        assert context.next_id("EMP") == "EMP-00002"
        assert context.next_id("EXP") == "EXP-00001"


class TestHelpers:

    def test_weighted_choice_only_returns_options(self):
        context = GenerationContext(seed=5)
        picks = weighted_choice(context.rng, WORKING_TIME_RATE_WEIGHTS, size=200)
        assert set(picks) <= set(WORKING_TIME_RATE_WEIGHTS)

    @pytest.mark.parametrize("start, end, expected", [
        (date(2024, 1, 1), date(2024, 1, 29), 20),   # four full weeks
        (date(2024, 1, 6), date(2024, 1, 8), 0),     # weekend only
        (date(2024, 1, 5), date(2024, 1, 9), 2),     # Fri + Mon
        (date(2024, 1, 9), date(2024, 1, 9), 0),     # empty range
    ])
    def test_workdays_between(self, start, end, expected):
        assert workdays_between(start, end) == expected
