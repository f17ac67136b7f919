"""Property-based tests for the lateral problem definition.

Tests cover:
- Size invariants for any corridor length
- Exact affinity of the constraint residuals
- Hessian independence from iterate, scale and multipliers
"""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from latopt.optimization import LateralTrajectoryProblem

finite = st.floats(min_value=-5.0, max_value=5.0, allow_nan=False, allow_infinity=False)


@st.composite
def problems(draw, min_points: int = 1, max_points: int = 8) -> LateralTrajectoryProblem:
    num_points = draw(st.integers(min_value=min_points, max_value=max_points))
    lowers = draw(st.lists(st.floats(-3.0, 0.0), min_size=num_points, max_size=num_points))
    widths = draw(st.lists(st.floats(0.0, 3.0), min_size=num_points, max_size=num_points))
    delta_s = draw(st.floats(min_value=0.1, max_value=5.0))
    d_init, d_prime_init, d_pprime_init = draw(st.tuples(finite, finite, finite))
    corridor = [(lo, lo + w) for lo, w in zip(lowers, widths)]
    return LateralTrajectoryProblem(d_init, d_prime_init, d_pprime_init, delta_s, corridor)


def _vector(draw, size: int) -> np.ndarray:
    return np.array(draw(st.lists(finite, min_size=size, max_size=size)))


class TestPropertyBasedLateralProblem:
    """Invariants that must hold for every corridor."""

    @given(problem=problems())
    @settings(max_examples=30, deadline=None)
    def test_sizes(self, problem: LateralTrajectoryProblem) -> None:
        sizes = problem.query_sizes()
        n = problem.num_points
        assert sizes.n_vars == 3 * n
        assert sizes.n_constraints == 3 * n
        assert len(problem.starting_point()) == 3 * n
        assert len(problem.evaluate_constraints(problem.starting_point())) == 3 * n

    @given(data=st.data(), problem=problems(min_points=2))
    @settings(max_examples=50, deadline=None)
    def test_constraints_are_affine(self, data, problem: LateralTrajectoryProblem) -> None:
        x1 = _vector(data.draw, problem.num_variables)
        x2 = _vector(data.draw, problem.num_variables)
        lam = data.draw(st.floats(min_value=0.0, max_value=1.0))

        mixed = problem.evaluate_constraints(lam * x1 + (1.0 - lam) * x2)
        combined = lam * problem.evaluate_constraints(x1) + (1.0 - lam) * problem.evaluate_constraints(x2)
        np.testing.assert_allclose(mixed, combined, atol=1e-8)

    @given(data=st.data(), problem=problems())
    @settings(max_examples=30, deadline=None)
    def test_hessian_constant(self, data, problem: LateralTrajectoryProblem) -> None:
        x = _vector(data.draw, problem.num_variables)
        multipliers = _vector(data.draw, problem.num_constraints)
        scale = data.draw(st.floats(min_value=1e-3, max_value=1e3))

        reference = problem.evaluate_lagrangian_hessian(None, 1.0, None, structure_only=False)
        values = problem.evaluate_lagrangian_hessian(x, scale, multipliers, structure_only=False)
        np.testing.assert_array_equal(values, reference)

    @given(problem=problems())
    @settings(max_examples=30, deadline=None)
    def test_jacobian_structure_matches_values(self, problem: LateralTrajectoryProblem) -> None:
        structure = problem.evaluate_constraint_jacobian(None, structure_only=True)
        values = problem.evaluate_constraint_jacobian(problem.starting_point(), structure_only=False)
        assert len(structure) == len(values) == problem.query_sizes().n_nonzero_jacobian
        assert all(0 <= r < problem.num_constraints for r in structure.rows)
        assert all(0 <= c < problem.num_variables for c in structure.cols)

    @given(data=st.data(), problem=problems())
    @settings(max_examples=30, deadline=None)
    def test_objective_non_negative(self, data, problem: LateralTrajectoryProblem) -> None:
        x = _vector(data.draw, problem.num_variables)
        assert problem.evaluate_objective(x) >= 0.0
        assert problem.evaluate_objective(x) == pytest.approx(
            0.5 * x @ (problem.hessian_values() * x)
            + problem.evaluate_objective_gradient(np.zeros_like(x)) @ x
            + problem.evaluate_objective(np.zeros_like(x)),
            rel=1e-9,
            abs=1e-9,
        )
