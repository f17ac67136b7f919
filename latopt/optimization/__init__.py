"""
Lateral trajectory optimization library
"""

from __future__ import annotations

from .base import OptimizationResult, OptimizationStatus, SolverReturn
from .config import IpoptSettings, LateralOptimizerConfig
from .driver import optimize_lateral_trajectory
from .errors import ProblemContractError
from .lateral_problem import LateralTrajectoryProblem
from .problem import NonlinearProblem, ProblemBounds, ProblemSizes
from .sparsity import SparsityPattern

__all__ = [
    "IpoptSettings",
    "LateralOptimizerConfig",
    "LateralTrajectoryProblem",
    "NonlinearProblem",
    "OptimizationResult",
    "OptimizationStatus",
    "ProblemBounds",
    "ProblemContractError",
    "ProblemSizes",
    "SolverReturn",
    "SparsityPattern",
    "optimize_lateral_trajectory",
]
