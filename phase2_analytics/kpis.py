"""KPI catalogue: one definition per indicator.

Each definition bundles how the indicator is measured over a window, how
the measure is displayed and classified, the French insight shown on its
card and the breakdown chart of its detail view. The engine dispatches
through ``KPI_REGISTRY`` only.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional, Union

from config.company_profile import (
    ABSENCE_TYPES, CONTRACT_TYPE_WEIGHTS, DOCUMENT_TYPES, EXPENSE_CATEGORIES,
    GENDER_DISTRIBUTION, TASK_STATUS_WEIGHTS, WORKING_TIME_RATE_WEIGHTS,
)
from phase1_synthetic_data.generators.temporal import years_between
from phase2_analytics import insights
from phase2_analytics.filtering import Scope
from phase2_analytics.schema import CategoricalBreakdown, CategoryPoint
from phase2_analytics.windows import Window

Measure = Callable[[Scope, Window], Optional[float]]


@dataclass(frozen=True)
class KPIDefinition:
    id: str
    name: str
    unit: str
    measure: Measure
    classify: Callable[[float, Optional[float]], str]
    insight: Callable[[float, Optional[float], Optional[str]], str]
    breakdown: Callable[[Scope, Window], CategoricalBreakdown]
    description: str
    formula: str
    value_kind: str = "rate"  # rate | count | amount | age
    department_measure: Optional[Callable[[Scope, Scope, Window], Optional[float]]] = None

    def format_value(self, measure: Optional[float], scope: Scope, window: Window) -> Union[int, str]:
        if self.value_kind in ("count", "amount"):
            return int(round(measure or 0))
        if self.value_kind == "age":
            seniority = average_seniority(scope, window) if measure is not None else 0.0
            return f"{measure or 0:.0f} ans ({seniority:.1f} ans d'ancienneté)"
        return f"{measure or 0:.1f}"


def _percent(numerator: float, denominator: float) -> Optional[float]:
    if not denominator:
        return None
    return 100.0 * numerator / denominator


def _breakdown(title: str, counts: dict, digits: int = 1) -> CategoricalBreakdown:
    return CategoricalBreakdown(
        title=title,
        data=[CategoryPoint(name=str(name), value=round(float(v), digits)) for name, v in counts.items()],
    )


def _zeroed(keys) -> dict:
    return {k: 0 for k in keys}


# =============================================================================
# Measures
# =============================================================================

def absenteeism_rate(scope: Scope, window: Window) -> Optional[float]:
    headcount = scope.active_on(window.end)
    ids = {e.id for e in headcount}
    days = sum(a.days for a in scope.data.absences if a.employee_id in ids and window.contains(a.date))
    return _percent(days, len(headcount) * window.workdays)


def departures_in(scope: Scope, window: Window) -> list:
    return [
        e for e in scope.employees
        if e.status == "terminated" and window.contains(e.termination_date)
    ]


def turnover_rate(scope: Scope, window: Window) -> Optional[float]:
    opening = len(scope.active_on(window.start - timedelta(days=1)))
    closing = len(scope.active_on(window.end))
    return _percent(len(departures_in(scope, window)), (opening + closing) / 2)


def headcount(scope: Scope, window: Window) -> Optional[float]:
    return float(len(scope.active_on(window.end)))


def workforce_utilization(scope: Scope, window: Window) -> Optional[float]:
    active = scope.active_on(window.end)
    return _percent(sum(e.working_time_rate for e in active), len(active))


def remote_work_adoption(scope: Scope, window: Window) -> Optional[float]:
    active = scope.active_on(window.end)
    return _percent(sum(1 for e in active if e.remote_work), len(active))


def onboarding_duration(scope: Scope, window: Window) -> Optional[float]:
    active = scope.active_on(window.end)
    if not active:
        return None
    return sum(e.onboarding_days for e in active) / len(active)


def hr_expenses(scope: Scope, window: Window) -> Optional[float]:
    return sum(x.amount for x in scope.data.expenses if window.contains(x.date))


def hr_expenses_share(company: Scope, department: Scope, window: Window) -> Optional[float]:
    """Company expenses allocated to a department by its share of the headcount."""
    total = len(company.active_on(window.end))
    if not total:
        return None
    return hr_expenses(company, window) * len(department.active_on(window.end)) / total


def average_age(scope: Scope, window: Window) -> Optional[float]:
    ages = [a for a in (e.age_on(window.end) for e in scope.active_on(window.end)) if a is not None]
    if not ages:
        return None
    return sum(ages) / len(ages)


def average_seniority(scope: Scope, window: Window) -> float:
    active = scope.active_on(window.end)
    if not active:
        return 0.0
    return sum(years_between(e.hire_date, window.end) for e in active) / len(active)


def salary_mass(scope: Scope, window: Window) -> Optional[float]:
    """Yearly gross salaries of the employees on the payroll at the window end."""
    active = scope.active_on(window.end)
    if not active:
        return None
    return float(sum(e.salary for e in active))


def tasks_due_in(scope: Scope, window: Window) -> list:
    return [
        t for t in scope.data.tasks
        if t.employee_id in scope.employee_ids and window.contains(t.due_date)
    ]


def task_completion_rate(scope: Scope, window: Window) -> Optional[float]:
    tasks = tasks_due_in(scope, window)
    return _percent(sum(1 for t in tasks if t.completed), len(tasks))


def checklists_of(scope: Scope, window: Window) -> list:
    ids = {e.id for e in scope.active_on(window.end)}
    return [d for d in scope.data.documents if d.employee_id in ids]


def document_completion_rate(scope: Scope, window: Window) -> Optional[float]:
    ids = {e.id for e in scope.active_on(window.end)}
    provided = sum(d.provided_count for d in checklists_of(scope, window))
    return _percent(provided, len(DOCUMENT_TYPES) * len(ids))


# =============================================================================
# Breakdowns
# =============================================================================

def absence_types(scope: Scope, window: Window) -> CategoricalBreakdown:
    ids = {e.id for e in scope.active_on(window.end)}
    days = _zeroed(ABSENCE_TYPES)
    for a in scope.data.absences:
        if a.employee_id in ids and window.contains(a.date):
            days[a.type] = days.get(a.type, 0) + a.days
    return _breakdown("Jours d'absence par type", days, digits=0)


def departure_contracts(scope: Scope, window: Window) -> CategoricalBreakdown:
    counts = _zeroed(CONTRACT_TYPE_WEIGHTS)
    counts.update(Counter(e.contract_type for e in departures_in(scope, window)))
    return _breakdown("Départs par type de contrat", counts, digits=0)


def genders(scope: Scope, window: Window) -> CategoricalBreakdown:
    counts = _zeroed(GENDER_DISTRIBUTION)
    counts.update(Counter(e.gender or "Non renseigné" for e in scope.active_on(window.end)))
    return _breakdown("Répartition par genre", counts, digits=0)


def working_time_rates(scope: Scope, window: Window) -> CategoricalBreakdown:
    counts = {f"{rate:.0%}": 0 for rate in sorted(WORKING_TIME_RATE_WEIGHTS, reverse=True)}
    for e in scope.active_on(window.end):
        key = f"{e.working_time_rate:.0%}"
        counts[key] = counts.get(key, 0) + 1
    return _breakdown("Répartition par temps de travail", counts, digits=0)


def remote_split(scope: Scope, window: Window) -> CategoricalBreakdown:
    active = scope.active_on(window.end)
    remote = sum(1 for e in active if e.remote_work)
    return _breakdown("Télétravail", {"Télétravail": remote, "Sur site": len(active) - remote}, digits=0)


def onboarding_buckets(scope: Scope, window: Window) -> CategoricalBreakdown:
    counts = {"< 15 jours": 0, "15-30 jours": 0, "> 30 jours": 0}
    for e in scope.active_on(window.end):
        if e.onboarding_days < 15:
            counts["< 15 jours"] += 1
        elif e.onboarding_days <= 30:
            counts["15-30 jours"] += 1
        else:
            counts["> 30 jours"] += 1
    return _breakdown("Durée d'onboarding", counts, digits=0)


def expense_categories(scope: Scope, window: Window) -> CategoricalBreakdown:
    totals = {spec["label"]: 0.0 for spec in EXPENSE_CATEGORIES.values()}
    for x in scope.data.expenses:
        if window.contains(x.date):
            label = EXPENSE_CATEGORIES.get(x.category, {}).get("label", x.category)
            totals[label] = totals.get(label, 0.0) + x.amount
    return _breakdown("Dépenses par catégorie", totals, digits=2)


AGE_BRACKETS = ("< 30 ans", "30-39 ans", "40-49 ans", "50 ans et +")
SENIORITY_BRACKETS = ("< 2 ans", "2-5 ans", "5-10 ans", "10 ans et +")


def age_bracket(age: float) -> str:
    if age < 30:
        return "< 30 ans"
    if age < 40:
        return "30-39 ans"
    if age < 50:
        return "40-49 ans"
    return "50 ans et +"


def seniority_bracket(years: float) -> str:
    if years < 2:
        return "< 2 ans"
    if years < 5:
        return "2-5 ans"
    if years < 10:
        return "5-10 ans"
    return "10 ans et +"


def age_brackets(scope: Scope, window: Window) -> CategoricalBreakdown:
    counts = _zeroed(AGE_BRACKETS)
    for e in scope.active_on(window.end):
        age = e.age_on(window.end)
        if age is not None:
            counts[age_bracket(age)] += 1
    return _breakdown("Pyramide des âges", counts, digits=0)


def salary_by_agency(scope: Scope, window: Window) -> CategoricalBreakdown:
    totals = {}
    for e in sorted(scope.active_on(window.end), key=lambda e: e.agency or ""):
        if e.agency:
            totals[e.agency] = totals.get(e.agency, 0) + e.salary
    return _breakdown("Masse salariale par agence", totals, digits=0)


def salary_by_seniority(scope: Scope, window: Window) -> CategoricalBreakdown:
    totals = _zeroed(SENIORITY_BRACKETS)
    for e in scope.active_on(window.end):
        totals[seniority_bracket(years_between(e.hire_date, window.end))] += e.salary
    return _breakdown("Masse salariale par ancienneté", totals, digits=0)


def salary_by_age(scope: Scope, window: Window) -> CategoricalBreakdown:
    totals = _zeroed(AGE_BRACKETS)
    for e in scope.active_on(window.end):
        age = e.age_on(window.end)
        if age is not None:
            totals[age_bracket(age)] += e.salary
    return _breakdown("Masse salariale par âge", totals, digits=0)


def task_statuses(scope: Scope, window: Window) -> CategoricalBreakdown:
    counts = _zeroed(TASK_STATUS_WEIGHTS)
    counts.update(Counter(t.status for t in tasks_due_in(scope, window)))
    return _breakdown("Tâches par statut", counts, digits=0)


def document_types(scope: Scope, window: Window) -> CategoricalBreakdown:
    checklists = checklists_of(scope, window)
    rates = {}
    for field, (label, _) in DOCUMENT_TYPES.items():
        provided = sum(1 for d in checklists if getattr(d, field))
        rates[label] = _percent(provided, len(checklists)) or 0.0
    return _breakdown("Complétude par document", rates)


# =============================================================================
# Classification
# =============================================================================

def above(threshold: float):
    def classify(value: float, trend: Optional[float] = None) -> str:
        return "negative" if value > threshold else "positive"
    return classify


def below(threshold: float):
    def classify(value: float, trend: Optional[float] = None) -> str:
        return "negative" if value < threshold else "positive"
    return classify


def classify_expenses(value: float, trend: Optional[float] = None) -> str:
    trend = trend or 0.0
    if trend > 15:
        return "negative"
    if trend > 5:
        return "neutral"
    return "positive"


# =============================================================================
# Registry
# =============================================================================

_DEFINITIONS = [
    KPIDefinition(
        id="absenteeism",
        name="Taux d'absentéisme",
        unit="%",
        measure=absenteeism_rate,
        classify=above(5),
        insight=insights.absenteeism,
        breakdown=absence_types,
        description="Part des jours ouvrés perdus pour absence sur la période.",
        formula="Jours d'absence / (Effectif × Jours ouvrés) × 100",
    ),
    KPIDefinition(
        id="turnover",
        name="Turnover",
        unit="%",
        measure=turnover_rate,
        classify=above(10),
        insight=insights.turnover,
        breakdown=departure_contracts,
        description="Départs de la période rapportés à l'effectif moyen.",
        formula="Départs / ((Effectif début + Effectif fin) / 2) × 100",
    ),
    KPIDefinition(
        id="headcount",
        name="Effectif total actif",
        unit="collaborateurs",
        measure=headcount,
        classify=below(100),
        insight=insights.headcount,
        breakdown=genders,
        description="Nombre de collaborateurs en poste à la fin de la période.",
        formula="Nombre de collaborateurs actifs",
        value_kind="count",
    ),
    KPIDefinition(
        id="work-utilization",
        name="Utilisation du temps de travail",
        unit="%",
        measure=workforce_utilization,
        classify=below(80),
        insight=insights.work_utilization,
        breakdown=working_time_rates,
        description="Temps de travail contractuel moyen des collaborateurs actifs.",
        formula="Σ Taux de temps de travail / Effectif × 100",
    ),
    KPIDefinition(
        id="remote-work",
        name="Adoption du télétravail",
        unit="%",
        measure=remote_work_adoption,
        classify=below(20),
        insight=insights.remote_work,
        breakdown=remote_split,
        description="Part des collaborateurs actifs en télétravail régulier.",
        formula="Collaborateurs en télétravail / Effectif × 100",
    ),
    KPIDefinition(
        id="onboarding",
        name="Durée moyenne d'onboarding",
        unit="jours",
        measure=onboarding_duration,
        classify=above(30),
        insight=insights.onboarding,
        breakdown=onboarding_buckets,
        description="Nombre moyen de jours nécessaires à l'intégration d'un collaborateur.",
        formula="Σ Jours d'onboarding / Effectif",
    ),
    KPIDefinition(
        id="hr-expenses",
        name="Dépenses RH",
        unit="€",
        measure=hr_expenses,
        classify=classify_expenses,
        insight=insights.hr_expenses,
        breakdown=expense_categories,
        description="Total des notes de frais de l'entreprise sur la période.",
        formula="Σ Montants des dépenses de la période",
        value_kind="amount",
        department_measure=hr_expenses_share,
    ),
    KPIDefinition(
        id="age-seniority",
        name="Âge moyen & ancienneté",
        unit="",
        measure=average_age,
        classify=above(40),
        insight=insights.age_seniority,
        breakdown=age_brackets,
        description="Âge moyen et ancienneté moyenne des collaborateurs actifs.",
        formula="Σ Âges / Effectif ; Σ Années depuis l'embauche / Effectif",
        value_kind="age",
    ),
    KPIDefinition(
        id="task-completion",
        name="Tâches RH complétées",
        unit="%",
        measure=task_completion_rate,
        classify=below(80),
        insight=insights.task_completion,
        breakdown=task_statuses,
        description="Part des tâches RH échues sur la période qui ont été complétées.",
        formula="Tâches complétées / Tâches échues × 100",
    ),
    KPIDefinition(
        id="document-completion",
        name="Dossiers collaborateurs complets",
        unit="%",
        measure=document_completion_rate,
        classify=below(80),
        insight=insights.document_completion,
        breakdown=document_types,
        description="Part des pièces du dossier administratif fournies.",
        formula=f"Documents fournis / ({len(DOCUMENT_TYPES)} × Effectif) × 100",
    ),
]

KPI_REGISTRY: dict[str, KPIDefinition] = {d.id: d for d in _DEFINITIONS}
KPI_IDS: list[str] = [d.id for d in _DEFINITIONS]
