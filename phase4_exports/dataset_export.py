"""Full-dataset and gender-split JSON documents."""

from datetime import date, datetime
from typing import Optional

import pandas as pd

from config.company_profile import (
    COMPANY, DEPARTMENTS, PERFORMANCE_RANGE, POSITIONS_BY_DEPARTMENT,
    SALARY_RANGE, STATUS_WEIGHTS, TRAINING_HOURS_RANGE,
)
from phase1_synthetic_data.records import HRData
from phase2_analytics.engine import HRAnalytics
from phase2_analytics.schema import FilterOptions


def salary_category(salary: int) -> str:
    if salary < 40_000:
        return "junior"
    if salary < 70_000:
        return "intermediate"
    return "senior"


def performance_category(score: int) -> str:
    if score >= 4:
        return "excellent"
    if score >= 3:
        return "good"
    return "needs_improvement"


def _employee_rows(data: HRData, today: date) -> list[dict]:
    rows = []
    for e in data.employees:
        seniority_days = (today - e.hire_date).days
        rows.append({
            "id": e.id,
            "first_name": e.first_name,
            "last_name": e.last_name,
            "full_name": e.full_name,
            "email": e.email,
            "department": e.department,
            "agency": e.agency,
            "position": e.position,
            "salary": e.salary,
            "hire_date": e.hire_date.isoformat(),
            "hire_date_formatted": f"{e.hire_date:%d/%m/%Y}",
            "termination_date": e.termination_date.isoformat() if e.termination_date else None,
            "status": e.status,
            "performance_score": e.performance_score,
            "training_hours": e.training_hours,
            "remote_work": e.remote_work,
            "working_time_rate": e.working_time_rate,
            "gender": e.gender,
            "contract_type": e.contract_type,
            "seniority": {"days": seniority_days, "years": seniority_days // 365},
            "salary_category": salary_category(e.salary),
            "performance_category": performance_category(e.performance_score),
        })
    return rows


def _expense_rows(data: HRData) -> list[dict]:
    return [
        {
            "id": x.id,
            "category": x.category,
            "amount": x.amount,
            "date": x.date.isoformat(),
            "date_formatted": f"{x.date:%d/%m/%Y}",
            "description": x.description,
            "month": x.date.month,
            "year": x.date.year,
            "quarter": (x.date.month - 1) // 3 + 1,
        }
        for x in data.expenses
    ]


def _analytics(employees: pd.DataFrame, expenses: pd.DataFrame) -> dict:
    if employees.empty:
        return {}

    by_dept = employees.groupby("department").agg(
        count=("id", "size"),
        total_salary=("salary", "sum"),
        avg_salary=("salary", "mean"),
        avg_performance=("performance_score", "mean"),
        remote_work_count=("remote_work", "sum"),
    )
    department_stats = {
        dept: {
            "count": int(row["count"]),
            "total_salary": int(row["total_salary"]),
            "avg_salary": int(round(row["avg_salary"])),
            "avg_performance": round(float(row["avg_performance"]), 2),
            "remote_work_count": int(row["remote_work_count"]),
            "remote_work_percentage": int(round(100 * row["remote_work_count"] / row["count"])),
        }
        for dept, row in by_dept.iterrows()
    }

    salaries = employees["salary"]
    scores = employees["performance_score"]
    remote = int(employees["remote_work"].sum())

    expense_stats = {}
    if not expenses.empty:
        grouped = expenses.groupby("category")["amount"].agg(["size", "sum", "mean"])
        expense_stats = {
            cat: {"count": int(row["size"]), "total": round(float(row["sum"]), 2),
                  "average": round(float(row["mean"]), 2)}
            for cat, row in grouped.iterrows()
        }

    low, high = PERFORMANCE_RANGE
    return {
        "department_stats": department_stats,
        "salary_stats": {
            "min": int(salaries.min()),
            "max": int(salaries.max()),
            "average": int(round(salaries.mean())),
            "median": float(salaries.median()),
            "q1": float(salaries.quantile(0.25)),
            "q3": float(salaries.quantile(0.75)),
        },
        "performance_stats": {
            "average": round(float(scores.mean()), 2),
            "distribution": {str(s): int((scores == s).sum()) for s in range(low, high + 1)},
        },
        "remote_work_stats": {
            "remote_workers": remote,
            "office_workers": len(employees) - remote,
            "remote_percentage": int(round(100 * remote / len(employees))),
        },
        "expense_stats": expense_stats,
    }


def build_complete_dataset(data: HRData, generated_at: Optional[datetime] = None) -> dict:
    """Everything the dashboard knows, with derived categories and summary stats."""
    generated_at = generated_at or datetime.now()
    employees = _employee_rows(data, generated_at.date())
    expenses = _expense_rows(data)

    return {
        "metadata": {
            "title": "Données RH Complètes",
            "company": COMPANY["name"],
            "generation_date": generated_at.isoformat(timespec="seconds"),
            "total_employees": len(employees),
            "total_expenses": len(expenses),
            "data_source": "hr_dashboard_generator",
            "version": "1.0",
        },
        "structure": {
            "departments": list(DEPARTMENTS),
            "positions_by_department": {k: list(v) for k, v in POSITIONS_BY_DEPARTMENT.items()},
            "status_options": list(STATUS_WEIGHTS),
            "salary_range": {"min": SALARY_RANGE[0], "max": SALARY_RANGE[1]},
            "performance_score_range": {"min": PERFORMANCE_RANGE[0], "max": PERFORMANCE_RANGE[1]},
            "training_hours_range": {"min": TRAINING_HOURS_RANGE[0], "max": TRAINING_HOURS_RANGE[1]},
        },
        "employees": employees,
        "expenses": expenses,
        "analytics": _analytics(pd.DataFrame(employees), pd.DataFrame(expenses)),
    }


def build_gender_distribution(analytics: HRAnalytics,
                              filters: Optional[FilterOptions] = None) -> dict:
    """Headcount split by gender, with percentages."""
    chart = analytics.get_kpi_chart_data("headcount", filters or FilterOptions())
    points = chart.specific_breakdown.data
    total = sum(p.value for p in points)

    return {
        "title": "Répartition par genre",
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "data": [
            {
                "genre": p.name,
                "effectif": int(p.value),
                "pourcentage": round(100 * p.value / total, 1) if total else 0.0,
            }
            for p in points
        ],
        "total": int(total),
    }
