"""Expense generator: HR cost entries over the last twelve months."""

from datetime import timedelta

import numpy as np
import pandas as pd

from config.company_profile import EXPENSE_CATEGORIES
from config.settings import EXPENSE_COUNT
from phase1_synthetic_data.generators.base_generator import BaseGenerator
from phase1_synthetic_data.generators.context import GenerationContext
from phase1_synthetic_data.generators.distributions import random_date_between, weighted_choice

# Expenses span the trailing year window ending on the reference date
EXPENSE_HISTORY_DAYS = 365


class ExpenseGenerator(BaseGenerator):
    name = "expenses"

    def __init__(self, context: GenerationContext, count: int = EXPENSE_COUNT):
        super().__init__(context)
        self.count = count

    def generate(self) -> None:
        rng = self.context.rng
        today = self.context.reference_date
        start = today - timedelta(days=EXPENSE_HISTORY_DAYS - 1)

        category_weights = {name: cfg["weight"] for name, cfg in EXPENSE_CATEGORIES.items()}
        categories = weighted_choice(rng, category_weights, size=self.count)
        dates = random_date_between(rng, start, today, size=self.count)

        for category, expense_date in zip(categories, dates):
            self.context.expenses.append({
                "id": self.context.next_id("EXP"),
                "category": category,
                "amount": self._amount(rng, category),
                "date": expense_date.isoformat(),
                "description": f"{EXPENSE_CATEGORIES[category]['label']} - {self.context.fake.city()}",
            })

        self.register("expenses", pd.DataFrame(
            self.context.expenses, columns=["id", "category", "amount", "date", "description"],
        ))

    @staticmethod
    def _amount(rng: np.random.Generator, category: str) -> float:
        """Amount drawn inside the category bucket (meals small, training large)."""
        low, high = EXPENSE_CATEGORIES[category]["amount_range"]
        return round(float(rng.uniform(low, high)), 2)

    def validate(self) -> list[str]:
        errors = super().validate()

        df = self.dataframe("expenses")
        if df is not None and not df.empty:
            if len(df) != self.count:
                errors.append(f"Expected {self.count} expenses, got {len(df)}")

            for category, cfg in EXPENSE_CATEGORIES.items():
                low, high = cfg["amount_range"]
                amounts = df.loc[df["category"] == category, "amount"]
                outside = amounts[(amounts < low) | (amounts > high)]
                if len(outside) > 0:
                    errors.append(f"expenses/{category}: {len(outside)} amounts outside [{low}, {high}]")

        return errors
