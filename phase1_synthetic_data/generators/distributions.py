"""Statistical distribution helpers for realistic synthetic data generation."""

from datetime import date, timedelta
from typing import Hashable

import numpy as np


def weighted_choice(rng: np.random.Generator, options: dict[Hashable, float], size: int = 1) -> list:
    """Pick from weighted options. options = {"active": 0.85, "inactive": 0.10, ...}"""
    keys = list(options.keys())
    weights = np.array(list(options.values()), dtype=float)
    weights = weights / weights.sum()  # normalize
    indices = rng.choice(len(keys), size=size, p=weights)
    return [keys[i] for i in indices]


def normal_clipped(rng: np.random.Generator, mean: float, std: float,
                   low: float, high: float, size: int = 1) -> np.ndarray:
    """Normal distribution clipped to [low, high]."""
    values = rng.normal(mean, std, size=size)
    return np.clip(values, low, high)


def lognormal_salary(rng: np.random.Generator, median: float, low: int, high: int,
                     sigma: float = 0.35, size: int = 1) -> np.ndarray:
    """Log-normal salary distribution centered around a median, clipped to the band."""
    mu = np.log(median)
    values = rng.lognormal(mu, sigma, size=size)
    return np.clip(np.round(values / 100) * 100, low, high).astype(int)


def beta_rating(rng: np.random.Generator, alpha: float = 5.0, beta: float = 2.0,
                low: int = 1, high: int = 5, size: int = 1) -> np.ndarray:
    """Beta distribution scaled to an integer rating range (default 1-5, right-skewed)."""
    raw = rng.beta(alpha, beta, size=size)
    return np.clip(np.rint(raw * (high - low) + low), low, high).astype(int)


def exponential_tenure(rng: np.random.Generator, scale: float = 3.3,
                       max_years: float = 12.0, size: int = 1) -> np.ndarray:
    """Exponential tenure distribution in years (median ~2.3 years with scale=3.3)."""
    values = rng.exponential(scale, size=size)
    return np.clip(values, 0.05, max_years)


def random_date_between(rng: np.random.Generator, start: date, end: date,
                        size: int = 1) -> list[date]:
    """Generate random dates uniformly between start and end (inclusive)."""
    delta_days = (end - start).days
    if delta_days <= 0:
        return [start] * size
    offsets = rng.integers(0, delta_days + 1, size=size)
    return [start + timedelta(days=int(d)) for d in offsets]


def birth_date_from_age(rng: np.random.Generator, reference_date: date,
                        mean_age: float = 38.0, std_age: float = 10.0,
                        min_age: float = 20.0, max_age: float = 64.0,
                        size: int = 1) -> list[date]:
    """Generate birth dates based on age distribution at a reference date."""
    ages = normal_clipped(rng, mean_age, std_age, min_age, max_age, size=size)
    return [reference_date - timedelta(days=int(a * 365.25)) for a in ages]
