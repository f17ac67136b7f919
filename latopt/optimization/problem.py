"""
Solver-agnostic nonlinear problem interface.

A concrete problem exposes sizes, bounds, a starting point and exact
first/second order information. Solver adapters drive it and call
:meth:`NonlinearProblem.finalize` exactly once at termination.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple, Sequence, Union

import numpy as np

from .base import SolverReturn
from .sparsity import SparsityPattern


class ProblemSizes(NamedTuple):
    """Dimensions announced to the solver."""

    n_vars: int
    n_constraints: int
    n_nonzero_jacobian: int
    n_nonzero_hessian: int
    index_base: int = 0


class ProblemBounds(NamedTuple):
    """Box bounds on variables and constraint values."""

    var_lower: np.ndarray
    var_upper: np.ndarray
    cons_lower: np.ndarray
    cons_upper: np.ndarray


SparseResult = Union[SparsityPattern, np.ndarray]


class NonlinearProblem(ABC):
    """Contract consumed by NLP solver adapters."""

    @abstractmethod
    def query_sizes(self) -> ProblemSizes:
        """Return problem dimensions and nonzero counts."""

    @abstractmethod
    def query_bounds(self, n: int, m: int) -> ProblemBounds:
        """Return variable and constraint bounds."""

    @abstractmethod
    def query_start(
        self,
        n: int,
        m: int,
        init_x: bool = True,
        init_z: bool = False,
        init_lambda: bool = False,
    ) -> np.ndarray:
        """Return the primal starting point."""

    @abstractmethod
    def evaluate_objective(self, x: Sequence[float]) -> float:
        """Objective value at ``x``."""

    @abstractmethod
    def evaluate_objective_gradient(self, x: Sequence[float]) -> np.ndarray:
        """Objective gradient at ``x``."""

    @abstractmethod
    def evaluate_constraints(self, x: Sequence[float]) -> np.ndarray:
        """Constraint residuals at ``x``."""

    @abstractmethod
    def evaluate_constraint_jacobian(
        self, x: Sequence[float] | None, structure_only: bool, new_x: bool = True
    ) -> SparseResult:
        """
        Sparsity pattern when ``structure_only`` else the nonzero values.

        ``new_x`` is informational; it never forces a recomputation here.
        """

    @abstractmethod
    def evaluate_lagrangian_hessian(
        self,
        x: Sequence[float] | None,
        objective_scale: float,
        multipliers: Sequence[float] | None,
        structure_only: bool,
    ) -> SparseResult:
        """Sparsity pattern when ``structure_only`` else the nonzero values."""

    @abstractmethod
    def finalize(
        self,
        status: SolverReturn,
        x: Sequence[float],
        multipliers: Sequence[float] | None,
        objective_value: float,
    ) -> None:
        """Consume the final iterate."""
