"""
Shared pytest fixtures for the HR dashboard test suite.

Two kinds of datasets are provided:
  - a generated dataset (fixed seed, fixed reference date) for end-to-end
    checks against the real generator and normalizer;
  - small hand-built datasets for exact boundary and degenerate cases.

The project root is inserted into sys.path so that the phase packages
import regardless of where pytest is invoked.
"""

import os
import sys
from datetime import date

import numpy as np
import pytest

_ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from phase1_synthetic_data.orchestrator import generate_raw_hr_data
from phase1_synthetic_data.normalizer import normalize_hr_data
from phase1_synthetic_data.records import (
    Absence, DocumentChecklist, Employee, Expense, HRData, Task,
)
from phase2_analytics.engine import HRAnalytics

SEED = 42
REFERENCE_DATE = date(2024, 6, 28)  # a Friday


# ---------------------------------------------------------------------------
# Generated dataset
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def raw_data():
    """250 employees and 500 expenses, as produced by the generator."""
    return generate_raw_hr_data(seed=SEED, reference_date=REFERENCE_DATE)


@pytest.fixture(scope="session")
def hr_data(raw_data):
    return normalize_hr_data(raw_data, rng=np.random.default_rng(SEED), reference_date=REFERENCE_DATE)


@pytest.fixture(scope="session")
def analytics(hr_data):
    return HRAnalytics(hr_data, reference_date=REFERENCE_DATE)


# ---------------------------------------------------------------------------
# Hand-built records
# ---------------------------------------------------------------------------

def make_employee(id="EMP-00001", **overrides) -> Employee:
    """Active, full-time, on-site employee hired in 2020 unless overridden."""
    fields = dict(
        id=id,
        first_name="Camille",
        last_name="Martin",
        email=f"{id.lower()}@horizon-services.fr",
        department="Développement",
        position="DevOps",
        salary=50_000,
        hire_date=date(2020, 1, 6),
        status="active",
        performance_score=4,
        training_hours=20,
        remote_work=False,
        working_time_rate=1.0,
        agency="Paris",
        gender="Femme",
        birth_date=date(1990, 3, 15),
        contract_type="CDI",
        onboarding_days=15,
    )
    fields.update(overrides)
    return Employee(**fields)


def make_checklist(employee_id: str, provided: int = 5) -> DocumentChecklist:
    flags = [i < provided for i in range(5)]
    return DocumentChecklist(employee_id, *flags)


@pytest.fixture
def small_data():
    """Four employees of the Développement department plus a little activity."""
    employees = (
        make_employee("EMP-00001"),
        make_employee("EMP-00002", gender="Homme", remote_work=True, working_time_rate=0.8,
                      agency="Lyon", birth_date=date(1980, 1, 1)),
        make_employee("EMP-00003", department="Marketing", agency="Lyon",
                      hire_date=date(2024, 6, 10), onboarding_days=40),
        make_employee("EMP-00004", status="terminated", termination_date=date(2024, 6, 3),
                      contract_type="CDD"),
    )
    expenses = (
        Expense("EXP-00001", "repas", 25.5, date(2024, 6, 20), "Repas d'affaires - Lyon"),
        Expense("EXP-00002", "formation", 1200.0, date(2024, 6, 5), "Session de formation - Paris"),
        Expense("EXP-00003", "transport", 150.0, date(2024, 5, 15), "Déplacement - Nantes"),
    )
    absences = (
        Absence("EMP-00001", 2, "maladie", date(2024, 6, 12)),
        Absence("EMP-00002", 1, "congé", date(2024, 6, 3)),
    )
    tasks = (
        Task("EMP-00001", "Entretien annuel", "evaluation", date(2024, 6, 14), "complétée"),
        Task("EMP-00002", "Valider congés", "administrative", date(2024, 6, 17), "en_retard"),
        Task("EMP-00003", "Signer contrat", "onboarding", date(2024, 6, 11), "complétée"),
    )
    documents = tuple(make_checklist(e.id, provided=4) for e in employees)
    return HRData(employees, expenses, absences, tasks, documents)


@pytest.fixture
def small_analytics(small_data):
    return HRAnalytics(small_data, reference_date=REFERENCE_DATE)
