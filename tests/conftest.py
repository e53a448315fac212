"""Pytest configuration and shared fixtures for boxjenkins tests.

This module provides:
- A deterministic numpy RNG fixture
- Global seeding so tests using np.random directly stay reproducible
- Series generators shared by the model tests
"""

import os

import numpy as np
import pytest


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for reproducibility."""
    np.random.seed(_seed())


@pytest.fixture
def ar2_series() -> np.ndarray:
    """200 points of y[t] = 100 + 0.5 y[t-1] - 0.25 y[t-2], started off equilibrium."""
    y = np.full(200, 100.0)
    y[0] = 150.0
    y[1] = 50.0
    for t in range(2, len(y)):
        y[t] += 0.5 * y[t - 1] - 0.25 * y[t - 2]
    return y


@pytest.fixture
def weekly_series(rng: np.random.Generator) -> np.ndarray:
    """736 days of a trending series with a weekly pattern and noise."""
    n = 736
    t = np.arange(n)
    weekly = np.array([3.0, 1.0, -0.5, -1.0, 0.0, 4.0, 6.0])
    return 50.0 + 0.02 * t + weekly[t % 7] + rng.normal(scale=1.0, size=n)
