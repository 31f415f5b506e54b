"""Employee and expense scoping for a filter set."""

from typing import Iterable

from phase1_synthetic_data.records import Employee, HRData
from phase2_analytics.schema import FilterOptions


def filter_employees(employees: Iterable[Employee], filters: FilterOptions) -> list[Employee]:
    """Apply department, remote-work and agency restrictions, in that order."""
    result = list(employees)
    if filters.department is not None:
        result = [e for e in result if e.department == filters.department]
    if filters.remote_work is not None:
        result = [e for e in result if e.remote_work == filters.remote_work]
    if filters.agency is not None:
        result = [e for e in result if e.agency == filters.agency]
    return result


class Scope:
    """The slice of a dataset one KPI evaluation sees.

    Employees are restricted by the filters; expenses stay company-level.
    """

    def __init__(self, data: HRData, employees: Iterable[Employee], department=None):
        self.data = data
        self.employees = tuple(employees)
        self.employee_ids = frozenset(e.id for e in self.employees)
        self.department = department

    @classmethod
    def from_filters(cls, data: HRData, filters: FilterOptions) -> "Scope":
        return cls(data, filter_employees(data.employees, filters), filters.department)

    def active_on(self, day) -> list[Employee]:
        return [e for e in self.employees if e.is_active_on(day)]
