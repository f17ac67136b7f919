"""
Status and result types shared by the problem definition and the solver
adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from latopt.trajectory1d import PiecewiseJerkTrajectory1d


class SolverReturn(Enum):
    """Termination status reported by an NLP solver at finalize time."""

    SUCCESS = "success"
    STOP_AT_ACCEPTABLE_POINT = "stop_at_acceptable_point"
    FEASIBLE_POINT_FOUND = "feasible_point_found"
    MAXITER_EXCEEDED = "maxiter_exceeded"
    CPUTIME_EXCEEDED = "cputime_exceeded"
    STOP_AT_TINY_STEP = "stop_at_tiny_step"
    LOCAL_INFEASIBILITY = "local_infeasibility"
    DIVERGING_ITERATES = "diverging_iterates"
    RESTORATION_FAILURE = "restoration_failure"
    ERROR_IN_STEP_COMPUTATION = "error_in_step_computation"
    USER_REQUESTED_STOP = "user_requested_stop"
    INVALID_NUMBER_DETECTED = "invalid_number_detected"
    TOO_FEW_DEGREES_OF_FREEDOM = "too_few_degrees_of_freedom"
    INTERNAL_ERROR = "internal_error"
    UNKNOWN = "unknown"

    @property
    def is_converged(self) -> bool:
        return self in (SolverReturn.SUCCESS, SolverReturn.STOP_AT_ACCEPTABLE_POINT)


class OptimizationStatus(Enum):
    """Status of optimization process."""

    PENDING = "pending"
    RUNNING = "running"
    CONVERGED = "converged"
    FAILED = "failed"
    TIMEOUT = "timeout"
    INFEASIBLE = "infeasible"

    @classmethod
    def from_solver_return(cls, status: SolverReturn) -> OptimizationStatus:
        if status.is_converged:
            return cls.CONVERGED
        if status in (SolverReturn.MAXITER_EXCEEDED, SolverReturn.CPUTIME_EXCEEDED):
            return cls.TIMEOUT
        if status in (SolverReturn.LOCAL_INFEASIBILITY, SolverReturn.RESTORATION_FAILURE):
            return cls.INFEASIBLE
        return cls.FAILED


@dataclass
class OptimizationResult:
    """Result of a lateral trajectory optimization."""

    # Solution blocks keyed "d", "d_prime", "d_pprime"
    solution: Dict[str, np.ndarray] = field(default_factory=dict)

    status: OptimizationStatus = OptimizationStatus.PENDING
    solver_return: SolverReturn = SolverReturn.UNKNOWN

    objective_value: Optional[float] = None
    solve_time: Optional[float] = None
    iterations: Optional[int] = None
    constraint_violation: Optional[float] = None

    trajectory: Optional[PiecewiseJerkTrajectory1d] = None

    metadata: Dict[str, Any] = field(default_factory=dict)

    def is_successful(self) -> bool:
        """Check if optimization was successful."""
        return self.status == OptimizationStatus.CONVERGED

    def has_solution(self) -> bool:
        """Check if solution data is available."""
        return len(self.solution) > 0

    def get_solution_summary(self) -> Dict[str, Any]:
        """Get a summary of the solution."""
        if not self.has_solution():
            return {}

        summary = {}
        for key, values in self.solution.items():
            if isinstance(values, np.ndarray) and values.size > 0:
                summary[key] = {
                    "shape": values.shape,
                    "min": float(np.min(values)),
                    "max": float(np.max(values)),
                    "mean": float(np.mean(values)),
                }
        return summary
