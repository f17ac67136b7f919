"""
Pytest configuration for the latopt test suite.

Shared corridor fixtures used across unit, property and integration tests.
"""

from __future__ import annotations

import pytest

from latopt.optimization import LateralTrajectoryProblem


@pytest.fixture
def straight_corridor() -> list[tuple[float, float]]:
    """Five samples of a symmetric 2 m wide corridor."""
    return [(-1.0, 1.0)] * 5


@pytest.fixture
def problem(straight_corridor: list[tuple[float, float]]) -> LateralTrajectoryProblem:
    """Problem with a non-trivial initial state and 0.5 m spacing."""
    return LateralTrajectoryProblem(0.3, -0.1, 0.02, 0.5, straight_corridor)
