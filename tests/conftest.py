"""
Pytest configuration and shared fixtures.

This module provides observation generators and accumulator fixtures for
all test suites.
"""

import numpy as np
import pytest

from idiomcooc.core.cooccurrence import ElementCooccurrence


def generate_synthetic_observations(
    n_observations: int,
    n_rows: int = 20,
    n_columns: int = 30,
    max_set_size: int = 4,
    seed: int = 42,
) -> list:
    """
    Generate random (rows, columns) observations over integer elements.

    Args:
        n_observations: Number of observations
        n_rows: Size of the row element universe (0..n_rows-1)
        n_columns: Size of the column element universe, offset by 1000
            so the two domains never overlap
        max_set_size: Largest set drawn per side (sets may be empty)
        seed: Random seed for reproducibility

    Returns:
        List of (row_set, column_set) tuples.
    """
    rng = np.random.RandomState(seed)
    observations = []
    for _ in range(n_observations):
        n_r = rng.randint(0, max_set_size + 1)
        n_c = rng.randint(0, max_set_size + 1)
        rows = {int(r) for r in rng.choice(n_rows, size=n_r, replace=False)}
        columns = {1000 + int(c) for c in rng.choice(n_columns, size=n_c, replace=False)}
        observations.append((rows, columns))
    return observations


@pytest.fixture
def scenario_cooc():
    """({A, B}, {X}) then ({A}, {X, Y})."""
    cooc = ElementCooccurrence()
    cooc.ingest({"A", "B"}, {"X"})
    cooc.ingest({"A"}, {"X", "Y"})
    return cooc


@pytest.fixture
def synthetic_observations():
    """500 random observations over disjoint integer domains."""
    return generate_synthetic_observations(n_observations=500)


@pytest.fixture
def synthetic_cooc(synthetic_observations):
    """Accumulator loaded with ``synthetic_observations``."""
    cooc = ElementCooccurrence()
    for rows, columns in synthetic_observations:
        cooc.ingest(rows, columns)
    return cooc
