"""Data normalizer: raw generator records to immutable HRData."""

import dataclasses
from datetime import date

import numpy as np
import pytest

from config.company_profile import REMOTE_WORK_DAYS_THRESHOLD
from phase1_synthetic_data.normalizer import normalize_employee, normalize_hr_data, split_name

RAW_EMPLOYEE = {
    "id": "EMP-00042",
    "name": "Jean Le Gall",
    "email": "jean.le-gall@horizon-services.fr",
    "department": "Finance",
    "position": "Comptable",
    "salary": 41_000,
    "hire_date": "2021-09-01",
    "termination_date": None,
    "status": "active",
    "performance_score": 3,
    "training_hours": 12,
    "remote_work_days": 6,
}


@pytest.fixture
def rng():
    return np.random.default_rng(0)


class TestSplitName:

    def test_first_token_is_first_name(self):
        assert split_name("Jean Le Gall") == ("Jean", "Le Gall")

    def test_single_token(self):
        assert split_name("Cher") == ("Cher", "")


class TestNormalizeEmployee:

    def test_renames_and_parses(self, rng):
        emp = normalize_employee(RAW_EMPLOYEE, rng)
        assert emp.first_name == "Jean"
        assert emp.last_name == "Le Gall"
        assert emp.hire_date == date(2021, 9, 1)
        assert emp.termination_date is None

    def test_fills_missing_optional_fields(self, rng):
        emp = normalize_employee(RAW_EMPLOYEE, rng)
        assert emp.agency
        assert emp.gender in ("Homme", "Femme")
        assert emp.birth_date < emp.hire_date
        assert emp.working_time_rate in (0.5, 0.6, 0.8, 1.0)
        assert 5 <= emp.onboarding_days <= 45

    @pytest.mark.parametrize("days, expected", [
        (0, False),
        (REMOTE_WORK_DAYS_THRESHOLD - 1, False),
        (REMOTE_WORK_DAYS_THRESHOLD, True),
        (15, True),
    ])
    def test_remote_work_flag(self, rng, days, expected):
        emp = normalize_employee({**RAW_EMPLOYEE, "remote_work_days": days}, rng)
        assert emp.remote_work is expected

    def test_termination_date_only_for_terminated(self, rng):
        raw = {**RAW_EMPLOYEE, "status": "terminated", "termination_date": "2023-02-10"}
        assert normalize_employee(raw, rng).termination_date == date(2023, 2, 10)

    def test_terminated_without_date_gets_one(self, rng):
        raw = {**RAW_EMPLOYEE, "status": "terminated", "termination_date": None}
        reference = date(2024, 6, 28)
        emp = normalize_employee(raw, rng, reference_date=reference)
        assert emp.termination_date is not None
        assert emp.hire_date <= emp.termination_date < reference
        assert not emp.is_active_on(reference)

    def test_terminated_without_date_counts_as_leaver(self, rng):
        raw = {**RAW_EMPLOYEE, "status": "terminated"}
        raw.pop("termination_date")
        data = normalize_hr_data({"employees": [raw]}, rng=rng, reference_date=date(2024, 6, 28))
        assert data.employees[0].termination_date is not None


class TestNormalizeDataset:

    def test_collections_are_tuples(self, hr_data):
        for field in dataclasses.fields(hr_data):
            assert isinstance(getattr(hr_data, field.name), tuple)

    def test_records_are_frozen(self, hr_data):
        with pytest.raises(dataclasses.FrozenInstanceError):
            hr_data.employees[0].salary = 1

    def test_counts_preserved(self, raw_data, hr_data):
        assert len(hr_data.employees) == len(raw_data["employees"])
        assert len(hr_data.expenses) == len(raw_data["expenses"])
        assert len(hr_data.absences) == len(raw_data["absences"])

    def test_status_and_termination_consistent(self, hr_data):
        for emp in hr_data.employees:
            assert (emp.status == "terminated") == (emp.termination_date is not None)

    def test_missing_collections_default_empty(self, rng):
        data = normalize_hr_data({"employees": [RAW_EMPLOYEE]}, rng=rng)
        assert len(data.employees) == 1
        assert data.expenses == ()
        assert data.documents == ()
