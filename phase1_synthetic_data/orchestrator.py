"""Orchestrator: runs all generators in dependency order and validates output."""

import sys
from datetime import date
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel

from config.settings import EMPLOYEE_COUNT, EXPENSE_COUNT, RANDOM_SEED
from phase1_synthetic_data.generators.activity_generator import ActivityGenerator
from phase1_synthetic_data.generators.context import GenerationContext
from phase1_synthetic_data.generators.employee_generator import EmployeeGenerator
from phase1_synthetic_data.generators.expense_generator import ExpenseGenerator
from phase1_synthetic_data.normalizer import normalize_hr_data
from phase1_synthetic_data.records import HRData

console = Console()


class GenerationError(RuntimeError):
    """A generator produced records that failed validation."""


def run_generation(
    seed: Optional[int] = None,
    reference_date: Optional[date] = None,
    employee_count: int = EMPLOYEE_COUNT,
    expense_count: int = EXPENSE_COUNT,
    save: bool = False,
    verbose: bool = False,
) -> tuple[GenerationContext, bool]:
    """Execute the generator pipeline. Returns (context, all_passed)."""
    context = GenerationContext(seed=seed, reference_date=reference_date)

    # Generator pipeline in dependency order
    generators = [
        EmployeeGenerator(context, count=employee_count),   # Layer 0: workforce + files
        ActivityGenerator(context),                         # Layer 1: depends on employees
        ExpenseGenerator(context, count=expense_count),     # Independent
    ]

    for gen in generators:
        if not gen.run(save=save, verbose=verbose):
            if verbose:
                console.print(f"[bold red]FAILED: {gen.name}[/bold red]")
            return context, False

    return context, True


def generate_raw_hr_data(
    seed: Optional[int] = None,
    reference_date: Optional[date] = None,
    employee_count: int = EMPLOYEE_COUNT,
    expense_count: int = EXPENSE_COUNT,
) -> dict[str, list[dict]]:
    """Generate one raw dataset in memory: employees, expenses, absences, tasks, documents."""
    context, passed = run_generation(seed, reference_date, employee_count, expense_count)
    if not passed:
        raise GenerationError("Synthetic HR data failed validation")
    return context.as_raw_data()


def generate_hr_data(
    seed: Optional[int] = None,
    reference_date: Optional[date] = None,
    employee_count: int = EMPLOYEE_COUNT,
    expense_count: int = EXPENSE_COUNT,
) -> HRData:
    """Generate and normalize a dataset, ready for the analytics engine."""
    context, passed = run_generation(seed, reference_date, employee_count, expense_count)
    if not passed:
        raise GenerationError("Synthetic HR data failed validation")
    return normalize_hr_data(context.as_raw_data(), rng=context.rng,
                             reference_date=context.reference_date)


def main() -> bool:
    """Generate a dataset, save the raw CSVs and print a summary."""
    console.print(Panel.fit(
        "[bold green]Synthetic HR Data Generation[/bold green]\n"
        f"Generating {EMPLOYEE_COUNT} employees and {EXPENSE_COUNT} expenses",
        title="HR Dashboard",
    ))

    context, all_passed = run_generation(seed=RANDOM_SEED, save=True, verbose=True)

    if all_passed:
        statuses = {}
        for emp in context.employees:
            statuses[emp["status"]] = statuses.get(emp["status"], 0) + 1

        console.print()
        console.print(Panel.fit(
            f"[bold green]Generation Complete![/bold green]\n\n"
            f"Active employees:     {statuses.get('active', 0)}\n"
            f"Inactive employees:   {statuses.get('inactive', 0)}\n"
            f"Terminated employees: {statuses.get('terminated', 0)}\n"
            f"Expenses:             {len(context.expenses)}\n"
            f"Absences:             {len(context.absences)}\n"
            f"Tasks:                {len(context.tasks)}",
            title="Summary",
        ))
    else:
        console.print(Panel.fit(
            "[bold red]Generation failed. See errors above.[/bold red]",
            title="FAILED",
        ))

    return all_passed


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
