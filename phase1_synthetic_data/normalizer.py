"""Maps raw generator records onto the normalized shape used by the analytics engine."""

from datetime import date, timedelta
from typing import Any, Optional

import numpy as np

from config.company_profile import (
    AGENCY_WEIGHTS, CONTRACT_TYPE_WEIGHTS, GENDER_DISTRIBUTION,
    REMOTE_WORK_DAYS_THRESHOLD, WORKING_TIME_RATE_WEIGHTS,
)
from phase1_synthetic_data.generators.distributions import (
    birth_date_from_age, normal_clipped, random_date_between, weighted_choice,
)
from phase1_synthetic_data.records import (
    Absence, DocumentChecklist, Employee, Expense, HRData, Task,
)


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def split_name(full_name: str) -> tuple[str, str]:
    """'Jean Le Gall' -> ('Jean', 'Le Gall'). Single tokens have an empty last name."""
    parts = full_name.strip().split(" ", 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def normalize_employee(raw: dict, rng: np.random.Generator,
                       reference_date: Optional[date] = None) -> Employee:
    """Normalize one raw employee record, filling missing optional fields."""
    first_name, last_name = split_name(raw["name"])
    hire_date = _parse_date(raw["hire_date"])

    birth_date = _parse_date(raw.get("birth_date"))
    if birth_date is None:
        birth_date = birth_date_from_age(rng, hire_date, mean_age=34, std_age=9)[0]

    working_time_rate = raw.get("working_time_rate")
    if working_time_rate is None:
        working_time_rate = weighted_choice(rng, WORKING_TIME_RATE_WEIGHTS)[0]

    onboarding_days = raw.get("onboarding_days")
    if onboarding_days is None:
        onboarding_days = int(round(normal_clipped(rng, 18, 8, 5, 45)[0]))

    status = raw["status"]
    termination_date = _parse_date(raw.get("termination_date")) if status == "terminated" else None
    if status == "terminated" and termination_date is None:
        last_day = (reference_date or date.today()) - timedelta(days=1)
        termination_date = random_date_between(rng, hire_date, max(hire_date, last_day))[0]

    return Employee(
        id=str(raw["id"]),
        first_name=first_name,
        last_name=last_name,
        email=raw["email"],
        department=raw["department"],
        agency=raw.get("agency") or weighted_choice(rng, AGENCY_WEIGHTS)[0],
        position=raw["position"],
        salary=int(raw["salary"]),
        hire_date=hire_date,
        termination_date=termination_date,
        status=status,
        performance_score=int(raw["performance_score"]),
        training_hours=int(raw["training_hours"]),
        remote_work=int(raw.get("remote_work_days") or 0) >= REMOTE_WORK_DAYS_THRESHOLD,
        working_time_rate=float(working_time_rate),
        gender=raw.get("gender") or weighted_choice(rng, GENDER_DISTRIBUTION)[0],
        birth_date=birth_date,
        contract_type=raw.get("contract_type") or weighted_choice(rng, CONTRACT_TYPE_WEIGHTS)[0],
        onboarding_days=int(onboarding_days),
    )


def normalize_hr_data(raw: dict, rng: Optional[np.random.Generator] = None,
                      reference_date: Optional[date] = None) -> HRData:
    """Normalize raw generator output into an immutable HRData snapshot.

    The mapping is one-directional: feeding already-normalized data back in
    is not supported.
    """
    rng = rng or np.random.default_rng()

    employees = tuple(normalize_employee(e, rng, reference_date) for e in raw.get("employees", []))
    expenses = tuple(
        Expense(
            id=str(e["id"]),
            category=e["category"],
            amount=float(e["amount"]),
            date=_parse_date(e["date"]),
            description=e.get("description", ""),
        )
        for e in raw.get("expenses", [])
    )
    absences = tuple(
        Absence(
            employee_id=str(a["employee_id"]),
            days=int(a["days"]),
            type=a["type"],
            date=_parse_date(a["date"]),
        )
        for a in raw.get("absences", [])
    )
    tasks = tuple(
        Task(
            employee_id=str(t["employee_id"]),
            task=t["task"],
            category=t["category"],
            due_date=_parse_date(t["due_date"]),
            status=t["status"],
        )
        for t in raw.get("tasks", [])
    )
    documents = tuple(
        DocumentChecklist(
            employee_id=str(d["employee_id"]),
            contract_signed=bool(d.get("contract_signed", False)),
            id_card_provided=bool(d.get("id_card_provided", False)),
            bank_details_provided=bool(d.get("bank_details_provided", False)),
            evaluation_completed=bool(d.get("evaluation_completed", False)),
            medical_check_completed=bool(d.get("medical_check_completed", False)),
        )
        for d in raw.get("documents", [])
    )

    return HRData(
        employees=employees,
        expenses=expenses,
        absences=absences,
        tasks=tasks,
        documents=documents,
    )
