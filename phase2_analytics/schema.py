"""Plain-data models produced and consumed by the analytics engine."""

from datetime import date
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

Period = Literal["week", "month", "quarter", "year", "custom"]
CompareWith = Literal["previous", "year-ago"]
Comparison = Literal["higher", "lower", "stable"]
Category = Literal["positive", "negative", "neutral"]


# =============================================================================
# Query
# =============================================================================

class FilterOptions(BaseModel):
    """The query a KPI set is evaluated against. Unset fields mean no restriction."""
    model_config = ConfigDict(extra="ignore")

    period: Period = "year"
    department: Optional[str] = None
    agency: Optional[str] = None
    remote_work: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    compare_with: Optional[CompareWith] = None

    @field_validator("department", "agency", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("", "all", "tous"):
            return None
        return value


# =============================================================================
# KPI output
# =============================================================================

class KPIData(BaseModel):
    id: str
    name: str
    value: Union[int, float, str]
    unit: str
    trend: Optional[float] = None
    comparison: Comparison = "stable"
    category: Category = "neutral"
    insight: str = ""


class TimeSeriesPoint(BaseModel):
    label: str
    value: float


class DepartmentPoint(BaseModel):
    department: str
    value: float


class CategoryPoint(BaseModel):
    name: str
    value: float


class CategoricalBreakdown(BaseModel):
    title: str
    data: list[CategoryPoint] = []


class KPIChartData(BaseModel):
    kpi_id: str
    time_evolution: list[TimeSeriesPoint]
    department_breakdown: list[DepartmentPoint]
    specific_breakdown: CategoricalBreakdown


# =============================================================================
# Extended headcount card
# =============================================================================

class DepartmentHeadcount(BaseModel):
    department: str
    count: int
    etp: float


class GenderRatio(BaseModel):
    men: float = 0.0
    women: float = 0.0


class ExtendedHeadcount(BaseModel):
    total_headcount: int
    total_etp: float
    new_hires: int
    departures: int
    department_breakdown: list[DepartmentHeadcount] = []
    gender_ratio: GenderRatio = GenderRatio()
    trend: Optional[float] = None
    category: Category = "neutral"
    insight: str = ""


# =============================================================================
# Payroll card
# =============================================================================

class DepartmentSalary(BaseModel):
    department: str
    headcount: int
    total_salary: float
    average_salary: float


class SalaryBreakdown(BaseModel):
    """Salary mass on the payroll at the end of the window, with its splits."""
    total_salary_mass: float
    salary_mass_per_etp: float
    average_salary: float
    trend: Optional[float] = None
    comparison: Comparison = "stable"
    evolution: list[TimeSeriesPoint] = []
    department_breakdown: list[DepartmentSalary] = []
    by_agency: CategoricalBreakdown
    by_seniority: CategoricalBreakdown
    by_age: CategoricalBreakdown
    insight: str = ""
