"""HRAnalytics: KPI cards, chart data and insights over one HR dataset."""

from collections import defaultdict
from datetime import date
from typing import Optional

import numpy as np

from config.settings import EMPLOYEE_COUNT, EXPENSE_COUNT
from phase1_synthetic_data.orchestrator import generate_hr_data
from phase1_synthetic_data.records import Employee, HRData
from phase2_analytics import insights
from phase2_analytics.filtering import Scope, filter_employees
from phase2_analytics.kpis import (
    KPI_IDS, KPI_REGISTRY, Measure, departures_in, salary_by_age, salary_by_agency,
    salary_by_seniority, salary_mass,
)
from phase2_analytics.schema import (
    DepartmentHeadcount, DepartmentPoint, DepartmentSalary, ExtendedHeadcount,
    FilterOptions, GenderRatio, KPIChartData, KPIData, SalaryBreakdown, TimeSeriesPoint,
)
from phase2_analytics.windows import (
    Window, comparison_window, evolution_slices, period_window,
)

PERIOD_LABELS = {
    "week": "7 derniers jours",
    "month": "30 derniers jours",
    "quarter": "Dernier trimestre",
    "year": "12 derniers mois",
}

COMPARISON_LABELS = {
    "previous": "Période précédente",
    "year-ago": "Même période l'an dernier",
}


def _comparison(trend: Optional[float]) -> str:
    if trend is None or trend == 0:
        return "stable"
    return "higher" if trend > 0 else "lower"


class HRAnalytics:
    """Computes the KPI catalogue over an immutable HRData snapshot.

    Windows end at ``reference_date`` (today by default). Trends come from
    re-running the same measure over the comparison window; with
    ``demo_mode`` the previous value is instead drawn around the current one.
    """

    def __init__(self, data: HRData, reference_date: Optional[date] = None,
                 demo_mode: bool = False, rng: Optional[np.random.Generator] = None):
        self.data = data
        self.reference_date = reference_date or date.today()
        self.demo_mode = demo_mode
        self.rng = rng or np.random.default_rng()

    @classmethod
    def generate(cls, seed: Optional[int] = None, reference_date: Optional[date] = None,
                 demo_mode: bool = False, employee_count: int = EMPLOYEE_COUNT,
                 expense_count: int = EXPENSE_COUNT) -> "HRAnalytics":
        """Generate a dataset and an engine anchored on the same reference date."""
        reference_date = reference_date or date.today()
        data = generate_hr_data(seed, reference_date, employee_count, expense_count)
        return cls(data, reference_date=reference_date, demo_mode=demo_mode)

    # -------------------------------------------------------------------------
    # Core evaluation
    # -------------------------------------------------------------------------

    def _window(self, filters: FilterOptions) -> Window:
        return period_window(filters, self.reference_date)

    def _trend(self, measure: Measure, scope: Scope, window: Window,
               current: float, filters: FilterOptions) -> Optional[float]:
        if self.demo_mode:
            previous = current * self.rng.uniform(0.9, 1.1)
        else:
            prior = comparison_window(window, filters.compare_with)
            if prior is None:
                return None
            previous = measure(scope, prior)
        if not previous:
            return None
        return round((current - previous) / previous * 100, 1)

    def _evaluate(self, kpi_id: str, filters: Optional[FilterOptions]) -> KPIData:
        filters = filters or FilterOptions()
        definition = KPI_REGISTRY[kpi_id]
        window = self._window(filters)
        scope = Scope.from_filters(self.data, filters)
        current = definition.measure(scope, window)

        if current is None:
            return KPIData(
                id=definition.id,
                name=definition.name,
                value=definition.format_value(None, scope, window),
                unit=definition.unit,
                trend=None,
                comparison="stable",
                category="neutral",
                insight=insights.no_data(definition.name, filters.department),
            )

        trend = self._trend(definition.measure, scope, window, current, filters)
        comparison = _comparison(trend)

        return KPIData(
            id=definition.id,
            name=definition.name,
            value=definition.format_value(current, scope, window),
            unit=definition.unit,
            trend=trend,
            comparison=comparison,
            category=definition.classify(current, trend),
            insight=definition.insight(current, trend, filters.department),
        )

    # -------------------------------------------------------------------------
    # KPI catalogue
    # -------------------------------------------------------------------------

    def get_absenteeism_rate(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("absenteeism", filters)

    def get_turnover_rate(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("turnover", filters)

    def get_headcount(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("headcount", filters)

    def get_workforce_utilization(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("work-utilization", filters)

    def get_remote_work_adoption(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("remote-work", filters)

    def get_onboarding_duration(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("onboarding", filters)

    def get_hr_expenses(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("hr-expenses", filters)

    def get_age_and_seniority(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("age-seniority", filters)

    def get_task_completion_rate(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("task-completion", filters)

    def get_document_completion_rate(self, filters: Optional[FilterOptions] = None) -> KPIData:
        return self._evaluate("document-completion", filters)

    def get_all_kpis(self, filters: Optional[FilterOptions] = None) -> list[KPIData]:
        """Every KPI of the catalogue, in catalogue order."""
        return [self._evaluate(kpi_id, filters) for kpi_id in KPI_IDS]

    def get_kpi(self, kpi_id: str, filters: Optional[FilterOptions] = None) -> Optional[KPIData]:
        if kpi_id not in KPI_REGISTRY:
            return None
        return self._evaluate(kpi_id, filters)

    # -------------------------------------------------------------------------
    # Charts
    # -------------------------------------------------------------------------

    def get_kpi_chart_data(self, kpi_id: str,
                           filters: Optional[FilterOptions] = None) -> Optional[KPIChartData]:
        """Evolution, per-department and KPI-specific breakdown. None for unknown ids."""
        definition = KPI_REGISTRY.get(kpi_id)
        if definition is None:
            return None

        filters = filters or FilterOptions()
        window = self._window(filters)
        scope = Scope.from_filters(self.data, filters)

        time_evolution = [
            TimeSeriesPoint(label=label, value=round(definition.measure(scope, w) or 0.0, 2))
            for label, w in evolution_slices(filters, window)
        ]

        company = Scope.from_filters(self.data, filters.model_copy(update={"department": None}))
        department_breakdown = []
        for department in self.get_departments():
            dept_scope = Scope.from_filters(
                self.data, filters.model_copy(update={"department": department})
            )
            if definition.department_measure is not None:
                value = definition.department_measure(company, dept_scope, window)
            else:
                value = definition.measure(dept_scope, window)
            department_breakdown.append(
                DepartmentPoint(department=department, value=round(value or 0.0, 2))
            )

        return KPIChartData(
            kpi_id=kpi_id,
            time_evolution=time_evolution,
            department_breakdown=department_breakdown,
            specific_breakdown=definition.breakdown(scope, window),
        )

    # -------------------------------------------------------------------------
    # Insights and helpers
    # -------------------------------------------------------------------------

    def generate_global_insight(self, kpis: list[KPIData],
                                filters: Optional[FilterOptions] = None) -> str:
        filters = filters or FilterOptions()
        return insights.global_insight(kpis, filters.department)

    def filter_employees(self, filters: Optional[FilterOptions] = None) -> list[Employee]:
        return filter_employees(self.data.employees, filters or FilterOptions())

    def get_departments(self) -> list[str]:
        return sorted({e.department for e in self.data.employees})

    def get_agencies(self) -> list[str]:
        return sorted({e.agency for e in self.data.employees if e.agency})

    def get_comparison_labels(self, filters: Optional[FilterOptions] = None) -> dict[str, Optional[str]]:
        """Human labels for the current and comparison windows."""
        filters = filters or FilterOptions()
        window = self._window(filters)
        current = PERIOD_LABELS.get(filters.period, window.label())
        if filters.period == "custom":
            current = window.label()

        prior = comparison_window(window, filters.compare_with)
        comparison = None
        if prior is not None:
            comparison = f"{COMPARISON_LABELS[filters.compare_with]} ({prior.label()})"
        return {"current": current, "comparison": comparison}

    def get_kpi_details(self, kpi_id: str) -> Optional[dict[str, str]]:
        """Description and formula text of a KPI, None for unknown ids."""
        definition = KPI_REGISTRY.get(kpi_id)
        if definition is None:
            return None
        return {
            "id": definition.id,
            "name": definition.name,
            "unit": definition.unit,
            "description": definition.description,
            "formula": definition.formula,
        }

    def get_extended_headcount(self, filters: Optional[FilterOptions] = None) -> ExtendedHeadcount:
        """Headcount card with FTE, movements, department split and gender ratio."""
        filters = filters or FilterOptions()
        window = self._window(filters)
        scope = Scope.from_filters(self.data, filters)
        active = scope.active_on(window.end)
        kpi = self._evaluate("headcount", filters)

        by_department = defaultdict(list)
        for e in active:
            by_department[e.department].append(e)

        gender_ratio = GenderRatio()
        if active:
            gender_ratio = GenderRatio(
                men=round(100.0 * sum(1 for e in active if e.gender == "Homme") / len(active), 1),
                women=round(100.0 * sum(1 for e in active if e.gender == "Femme") / len(active), 1),
            )

        return ExtendedHeadcount(
            total_headcount=len(active),
            total_etp=round(sum(e.working_time_rate for e in active), 1),
            new_hires=sum(
                1 for e in scope.employees
                if e.status != "inactive" and window.contains(e.hire_date)
            ),
            departures=len(departures_in(scope, window)),
            department_breakdown=[
                DepartmentHeadcount(
                    department=dept,
                    count=len(members),
                    etp=round(sum(e.working_time_rate for e in members), 1),
                )
                for dept, members in sorted(by_department.items())
            ],
            gender_ratio=gender_ratio,
            trend=kpi.trend,
            category=kpi.category,
            insight=kpi.insight,
        )

    def get_salary_breakdown(self, filters: Optional[FilterOptions] = None) -> SalaryBreakdown:
        """Payroll card: salary mass, its evolution and its department, agency, seniority and age splits."""
        filters = filters or FilterOptions()
        window = self._window(filters)
        scope = Scope.from_filters(self.data, filters)
        active = scope.active_on(window.end)
        total = salary_mass(scope, window)

        trend = None
        if total is not None:
            trend = self._trend(salary_mass, scope, window, total, filters)
        total = total or 0.0
        etp = sum(e.working_time_rate for e in active)

        by_department = defaultdict(list)
        for e in active:
            by_department[e.department].append(e.salary)
        department_breakdown = sorted(
            (
                DepartmentSalary(
                    department=dept,
                    headcount=len(salaries),
                    total_salary=float(sum(salaries)),
                    average_salary=round(sum(salaries) / len(salaries), 2),
                )
                for dept, salaries in by_department.items()
            ),
            key=lambda d: (-d.total_salary, d.department),
        )

        return SalaryBreakdown(
            total_salary_mass=total,
            salary_mass_per_etp=round(total / etp, 2) if etp else 0.0,
            average_salary=round(total / len(active), 2) if active else 0.0,
            trend=trend,
            comparison=_comparison(trend),
            evolution=[
                TimeSeriesPoint(label=label, value=salary_mass(scope, w) or 0.0)
                for label, w in evolution_slices(filters, window)
            ],
            department_breakdown=department_breakdown,
            by_agency=salary_by_agency(scope, window),
            by_seniority=salary_by_seniority(scope, window),
            by_age=salary_by_age(scope, window),
            insight=(insights.salary_mass(total, trend, filters.department) if active
                     else insights.no_data("Masse salariale", filters.department)),
        )
