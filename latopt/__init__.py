"""latopt: lateral offset trajectory optimization with CasADi and IPOPT."""
from __future__ import annotations

from latopt.optimization import (
    IpoptSettings,
    LateralOptimizerConfig,
    LateralTrajectoryProblem,
    OptimizationResult,
    ProblemContractError,
    SolverReturn,
    optimize_lateral_trajectory,
)
from latopt.trajectory1d import ConstantJerkTrajectory1d, PiecewiseJerkTrajectory1d, integrate

__version__ = "0.1.0"


def is_ipopt_available() -> bool:
    """
    Check if the IPOPT plugin can be loaded by CasADi.

    Returns:
        True if ipopt is available, False otherwise
    """
    from latopt.optimization.solvers.ipopt_factory import is_ipopt_available as _probe

    return _probe()


__all__ = [
    "ConstantJerkTrajectory1d",
    "IpoptSettings",
    "LateralOptimizerConfig",
    "LateralTrajectoryProblem",
    "OptimizationResult",
    "PiecewiseJerkTrajectory1d",
    "ProblemContractError",
    "SolverReturn",
    "integrate",
    "is_ipopt_available",
    "optimize_lateral_trajectory",
]
