"""Console KPI report: python -m phase2_analytics.kpi_report [period] [department] [--csv]

With --csv the KPI table is also written to data/exports/.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import DEMO_MODE, RANDOM_SEED
from phase2_analytics.engine import HRAnalytics
from phase2_analytics.schema import FilterOptions
from phase4_exports.kpi_exports import ExportError, export_filename, kpis_to_csv, write_export

console = Console()

CATEGORY_STYLES = {
    "positive": "green",
    "negative": "red",
    "neutral": "yellow",
}


def print_kpi_report(analytics: HRAnalytics, filters: FilterOptions) -> list:
    """Print the KPI catalogue and the global insight."""
    kpis = analytics.get_all_kpis(filters)
    labels = analytics.get_comparison_labels(filters)

    table = Table(title=f"KPIs RH - {labels['current']}")
    table.add_column("KPI", style="cyan")
    table.add_column("Valeur", justify="right")
    table.add_column("Tendance", justify="right")
    table.add_column("Statut")
    for kpi in kpis:
        style = CATEGORY_STYLES[kpi.category]
        trend = "-" if kpi.trend is None else f"{kpi.trend:+.1f} %"
        table.add_row(kpi.name, f"{kpi.value} {kpi.unit}".strip(), trend,
                      f"[{style}]{kpi.category}[/{style}]")
    console.print(table)

    console.print(Panel.fit(analytics.generate_global_insight(kpis, filters), title="Insight global"))
    return kpis


def main(argv: list[str]) -> bool:
    export_csv = "--csv" in argv
    args = [a for a in argv if a != "--csv"]
    period = args[0] if args else "year"
    department = args[1] if len(args) > 1 else None
    filters = FilterOptions(period=period, department=department, compare_with="previous")

    analytics = HRAnalytics.generate(seed=RANDOM_SEED, demo_mode=DEMO_MODE)
    kpis = print_kpi_report(analytics, filters)

    if export_csv:
        try:
            write_export(kpis_to_csv(kpis), export_filename("kpis-rh", "csv"))
        except ExportError as e:
            console.print(f"[red]{e}[/red]")
            return False
    return True


if __name__ == "__main__":
    sys.exit(0 if main(sys.argv[1:]) else 1)
