"""One-call entry point used by the planning pipeline."""

from __future__ import annotations

from typing import Any, Sequence

from latopt.constants import CONSTRAINT_TOLERANCE
from latopt.logging import get_logger

from .base import OptimizationResult
from .config import IpoptSettings, LateralOptimizerConfig
from .lateral_problem import LateralTrajectoryProblem
from .solvers.casadi_adapter import solve_with_ipopt

log = get_logger(__name__)


def optimize_lateral_trajectory(
    d_init: float,
    d_prime_init: float,
    d_pprime_init: float,
    delta_s: float,
    d_bounds: Sequence[tuple[float, float]],
    config: LateralOptimizerConfig | None = None,
    settings: IpoptSettings | None = None,
    overrides: dict[str, Any] | None = None,
) -> OptimizationResult:
    """
    Optimize a lateral offset trajectory inside ``d_bounds``.

    Args:
        d_init: Initial lateral offset
        d_prime_init: Initial d/ds of the offset
        d_pprime_init: Initial d2/ds2 of the offset
        delta_s: Arc-length spacing between corridor samples
        d_bounds: (lower, upper) offset bound per sample
        config: Objective weights and limits
        settings: IPOPT settings
        overrides: Raw ``ipopt.*`` options

    Returns:
        OptimizationResult with ``d``, ``d_prime`` and ``d_pprime`` blocks,
        the piecewise-jerk trajectory and the solver status. Solver status
        is reported, not enforced.
    """
    problem = LateralTrajectoryProblem(
        d_init, d_prime_init, d_pprime_init, delta_s, d_bounds, config=config
    )
    log.info(
        "Optimizing lateral trajectory over %d points (%.2f m)",
        problem.num_points,
        problem.delta_s * max(problem.num_points - 1, 0),
    )

    result = solve_with_ipopt(problem, settings, overrides)

    x_opt = result.solution["x"]
    d, d_prime, d_pprime = problem.split(x_opt)
    result.solution = {
        "d": d.copy(),
        "d_prime": d_prime.copy(),
        "d_pprime": d_pprime.copy(),
        "lam_g": result.solution["lam_g"],
    }
    result.constraint_violation = problem.constraint_violation(x_opt)
    result.trajectory = problem.get_optimal_trajectory()

    if result.constraint_violation > CONSTRAINT_TOLERANCE:
        log.warning("Final iterate violates constraints by %.3e", result.constraint_violation)
    if not result.is_successful():
        log.warning(
            "Lateral optimization did not converge (%s); trajectory built from last iterate",
            result.solver_return.value,
        )
    return result
