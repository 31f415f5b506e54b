"""Normalized HR records consumed by the analytics engine.

Records are frozen and collections are tuples: a dataset is an immutable
snapshot shared read-only by every KPI computation.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    id: str
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    salary: int
    hire_date: date
    status: str
    performance_score: int
    training_hours: int
    remote_work: bool
    working_time_rate: float
    agency: Optional[str] = None
    termination_date: Optional[date] = None
    gender: Optional[str] = None
    birth_date: Optional[date] = None
    contract_type: str = "CDI"
    onboarding_days: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_active_on(self, day: date) -> bool:
        """On the payroll at the end of `day`.

        Inactive employees are never counted; at the reference date this
        reduces to ``status == "active"``.
        """
        if self.status == "inactive" or self.hire_date > day:
            return False
        return self.termination_date is None or self.termination_date > day

    def age_on(self, day: date) -> Optional[float]:
        if self.birth_date is None:
            return None
        return (day - self.birth_date).days / 365.25


@dataclass(frozen=True)
class Expense:
    id: str
    category: str
    amount: float
    date: date
    description: str


@dataclass(frozen=True)
class Absence:
    employee_id: str
    days: int
    type: str
    date: date


@dataclass(frozen=True)
class Task:
    employee_id: str
    task: str
    category: str
    due_date: date
    status: str

    @property
    def completed(self) -> bool:
        return self.status == "complétée"


@dataclass(frozen=True)
class DocumentChecklist:
    employee_id: str
    contract_signed: bool
    id_card_provided: bool
    bank_details_provided: bool
    evaluation_completed: bool
    medical_check_completed: bool

    def flags(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "employee_id"}

    @property
    def provided_count(self) -> int:
        return sum(self.flags().values())


@dataclass(frozen=True)
class HRData:
    employees: tuple[Employee, ...]
    expenses: tuple[Expense, ...]
    absences: tuple[Absence, ...] = ()
    tasks: tuple[Task, ...] = ()
    documents: tuple[DocumentChecklist, ...] = ()
