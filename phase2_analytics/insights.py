"""Narrative insight templates (French), one per KPI plus the board roll-up.

Every function is pure: the text depends only on the measured value, its
trend and the department filter.
"""

from typing import Optional


def _scope(department: Optional[str]) -> str:
    return f" dans le département {department}" if department else ""


def _trend_text(trend: Optional[float]) -> str:
    if trend is None:
        return ""
    return f" ({trend:+.1f} % vs période de comparaison)"


def no_data(name: str, department: Optional[str] = None) -> str:
    return f"ℹ️ Aucune donnée disponible pour « {name} »{_scope(department)} sur cette période."


def absenteeism(rate: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    if trend is not None and trend > 5:
        return (f"⚠️ L'absentéisme a augmenté de {abs(trend):.1f} %{scope}. "
                "Il pourrait être lié aux congés d'été ou à des problèmes de santé saisonniers.")
    if trend is not None and trend < -5:
        return (f"✅ Nette baisse de l'absentéisme ({trend:.1f} %){scope}. "
                "Les actions de prévention semblent porter leurs fruits.")
    if rate > 5:
        return f"⚠️ Absentéisme élevé{scope} à {rate:.1f} %, au-dessus du seuil de 5 %."
    return f"📊 L'absentéisme reste maîtrisé{scope} avec {rate:.1f} %, dans la moyenne du secteur."


def turnover(rate: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    if rate > 10:
        return (f"🚨 Turnover élevé ({rate:.1f} %){scope}. "
                "Recommandation : analyser les entretiens de départ et améliorer la rétention.")
    if rate < 5:
        return f"🎯 Excellent taux de rétention{scope}. L'entreprise maintient ses talents efficacement."
    return f"📈 Turnover modéré{scope}{_trend_text(trend)}. Surveillance recommandée."


def headcount(count: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    if trend is not None and trend > 5:
        return f"📈 Croissance forte des effectifs (+{trend:.1f} %){scope}. Vérifier que l'onboarding suit le rythme."
    if trend is not None and trend < -5:
        return f"📉 Réduction significative des effectifs ({trend:.1f} %){scope}. Impact possible sur la charge de travail."
    return f"⚖️ Effectifs stables{scope} avec {int(count)} collaborateurs actifs."


def work_utilization(rate: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    if rate < 80:
        return (f"📊 Forte part de temps partiels{scope} ({rate:.1f} % d'utilisation). "
                "Vérifier l'adéquation entre capacité et charge.")
    return f"✅ Utilisation du temps de travail satisfaisante{scope} ({rate:.1f} %){_trend_text(trend)}."


def remote_work(rate: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    if rate > 60:
        return f"🏠 Forte adoption du télétravail ({rate:.1f} %){scope}. Vérifier l'impact sur la collaboration."
    if rate < 20:
        return f"🏢 Faible recours au télétravail{scope} ({rate:.1f} %). Opportunité d'améliorer la flexibilité."
    return f"⚖️ Équilibre télétravail/présentiel bien dosé{scope} ({rate:.1f} %)."


def onboarding(days: float, trend: Optional[float], department: Optional[str] = None) -> str:
    if days > 30:
        return f"🐌 Onboarding long ({days:.1f} jours). Risque de démotivation, optimiser le processus d'intégration."
    if days < 10:
        return "⚡ Onboarding rapide et efficace. Excellent time-to-productivity pour les nouveaux collaborateurs."
    return f"👍 Durée d'onboarding raisonnable ({days:.1f} jours){_scope(department)}."


def hr_expenses(amount: float, trend: Optional[float], department: Optional[str] = None) -> str:
    if trend is not None and trend > 15:
        return f"💰 Hausse significative des dépenses RH (+{trend:.1f} %). Analyser les postes de dépenses principaux."
    if trend is not None and trend > 5:
        return f"👀 Dépenses RH en hausse (+{trend:.1f} %). À surveiller d'ici la prochaine clôture."
    if trend is not None and trend < -5:
        return f"💡 Optimisation réussie des dépenses RH ({trend:.1f} %). Bonne maîtrise budgétaire."
    total = f"{amount:,.0f}".replace(",", " ")
    return f"📊 Évolution maîtrisée des dépenses RH ({total} €). Budget en ligne avec les prévisions."


def age_seniority(age: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    if age > 40:
        return (f"👥 Population expérimentée{scope} ({age:.0f} ans). "
                "Prévoir les futurs départs en retraite et la transmission des savoirs.")
    if age < 30:
        return f"🌟 Équipe jeune et dynamique{scope}. Opportunité de développement des talents."
    return f"⚖️ Bon équilibre générationnel{scope} avec un âge moyen de {age:.0f} ans."


def task_completion(rate: float, trend: Optional[float], department: Optional[str] = None) -> str:
    if rate > 90:
        return f"✅ Excellente performance opérationnelle RH ({rate:.1f} % de réalisation). Processus bien rodés."
    if rate < 80:
        return f"⚠️ Retards dans l'exécution des tâches RH ({rate:.1f} %). Identifier les goulets d'étranglement."
    return f"📊 Performance RH correcte mais perfectible ({rate:.1f} %){_trend_text(trend)}."


def document_completion(rate: float, trend: Optional[float], department: Optional[str] = None) -> str:
    if rate > 90:
        return f"📋 Excellente complétude des dossiers ({rate:.1f} %). Administration RH rigoureuse."
    if rate < 80:
        return f"📝 Dossiers incomplets ({rate:.1f} %). Risque de non-conformité, relancer les collaborateurs."
    return f"📊 Niveau de complétude acceptable ({rate:.1f} %). Quelques rappels à prévoir."


def salary_mass(amount: float, trend: Optional[float], department: Optional[str] = None) -> str:
    scope = _scope(department)
    total = f"{amount / 1000:,.0f}".replace(",", " ")
    if trend is not None and trend > 5:
        return (f"💶 Masse salariale en hausse de {trend:.1f} %{scope} ({total} k€). "
                "Vérifier l'impact des recrutements et des augmentations.")
    if trend is not None and trend < -5:
        return f"📉 Masse salariale en baisse ({trend:.1f} %){scope}, à rapprocher des départs de la période."
    return f"📊 Masse salariale stable{scope} à {total} k€{_trend_text(trend)}."


def global_insight(kpis, department: Optional[str] = None) -> str:
    """Roll-up sentence over a KPI set.

    No negative KPI gives the "no critical point" sentence; as many positive
    as negative KPIs gives the "balanced" sentence; otherwise every negative
    KPI is named.
    """
    scope = _scope(department) or " globalement"
    negatives = [k for k in kpis if k.category == "negative"]
    positives = [k for k in kpis if k.category == "positive"]

    if not negatives:
        return f"🎯 Aucun point critique{scope} : {len(positives)} indicateur(s) au vert."
    if len(positives) == len(negatives):
        return (f"📊 Situation équilibrée{scope} : {len(positives)} indicateur(s) au vert "
                f"et {len(negatives)} en alerte.")

    names = ", ".join(k.name for k in negatives)
    return f"🚨 {len(negatives)} indicateur(s) en alerte{scope} : {names}. Prioriser les actions sur ces points."
