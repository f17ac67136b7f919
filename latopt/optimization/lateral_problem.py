"""
Lateral offset trajectory as a nonlinear program.

The lateral offset ``d(s)`` along a reference path is sampled at ``N`` points
spaced ``delta_s`` apart. The decision vector has a fixed block layout::

    x = [d_0 .. d_{N-1}, d'_0 .. d'_{N-1}, d''_0 .. d''_{N-1}]

and the constraint vector ``g`` has four contiguous blocks::

    [0, N-1)          d''_{i+1} - d''_i                 bounded by +-d'''_max * delta_s
    [N-1, 2(N-1))     end velocity of segment i - d'_{i+1}    == 0
    [2(N-1), 3(N-1))  end position of segment i - d_{i+1}     == 0
    [3(N-1), 3N)      d_0 - d_init, d'_0 - d'_init, d''_0 - d''_init == 0

Segment ``i`` is the constant-jerk cubic starting at ``(d_i, d'_i, d''_i)``
with jerk ``(d''_{i+1} - d''_i) / delta_s``. Every constraint is affine in
``x`` and the objective is a separable quadratic, so the Jacobian and the
Lagrangian Hessian are constant.
"""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from latopt.logging import get_logger
from latopt.trajectory1d import PiecewiseJerkTrajectory1d, integrate

from .base import SolverReturn
from .config import LateralOptimizerConfig
from .errors import ProblemContractError
from .problem import NonlinearProblem, ProblemBounds, ProblemSizes, SparseResult
from .sparsity import SparsityPattern

log = get_logger(__name__)

NUM_INITIAL_CONDITIONS = 3


class LateralTrajectoryProblem(NonlinearProblem):
    """
    Problem definition for the lateral offset optimizer.

    Parameters
    ----------
    d_init, d_prime_init, d_pprime_init : float
        Lateral state the trajectory must match at sample 0
    delta_s : float
        Arc-length spacing between samples
    d_bounds : sequence of (lower, upper)
        Admissible lateral offset per sample (drivable corridor), shape ``(N, 2)``
    config : LateralOptimizerConfig, optional
        Weights and limits; defaults reproduce the reference tuning
    """

    def __init__(
        self,
        d_init: float,
        d_prime_init: float,
        d_pprime_init: float,
        delta_s: float,
        d_bounds: Sequence[tuple[float, float]],
        config: LateralOptimizerConfig | None = None,
    ):
        self.config = config or LateralOptimizerConfig()

        self._d_init = float(d_init)
        self._d_prime_init = float(d_prime_init)
        self._d_pprime_init = float(d_pprime_init)
        self._delta_s = float(delta_s)
        self._d_bounds = np.asarray(d_bounds, dtype=float)
        if self._d_bounds.size == 0:
            self._d_bounds = self._d_bounds.reshape(0, 2)
        elif self._d_bounds.ndim != 2 or self._d_bounds.shape[1] != 2:
            raise ValueError(
                f"d_bounds must have shape (N, 2), got {self._d_bounds.shape}"
            )

        self._num_points = self._d_bounds.shape[0]
        self._num_variables = 3 * self._num_points
        self._num_constraints = 3 * self._num_points

        self._check_degenerate_inputs()

        self._jacobian_pattern = SparsityPattern.from_pairs(
            ((row, col) for row, col, _ in self._jacobian_entries()),
            (self._num_constraints, self._num_variables),
        )
        self._hessian_pattern = SparsityPattern.diagonal(self._num_variables)

        self._optimal_trajectory = PiecewiseJerkTrajectory1d(
            self._d_init, self._d_prime_init, self._d_pprime_init
        )
        self._final_status: SolverReturn | None = None

        log.debug(
            "Lateral problem: N=%d, delta_s=%.3f, nnz_jac=%d",
            self._num_points,
            self._delta_s,
            self._jacobian_pattern.nnz,
        )

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def num_points(self) -> int:
        return self._num_points

    @property
    def num_variables(self) -> int:
        return self._num_variables

    @property
    def num_constraints(self) -> int:
        return self._num_constraints

    @property
    def delta_s(self) -> float:
        return self._delta_s

    @property
    def d_bounds(self) -> np.ndarray:
        return self._d_bounds.copy()

    @property
    def corridor_centers(self) -> np.ndarray:
        return 0.5 * (self._d_bounds[:, 0] + self._d_bounds[:, 1])

    @property
    def initial_state(self) -> tuple[float, float, float]:
        return self._d_init, self._d_prime_init, self._d_pprime_init

    @property
    def final_status(self) -> SolverReturn | None:
        return self._final_status

    @property
    def _d_prime_offset(self) -> int:
        return self._num_points

    @property
    def _d_pprime_offset(self) -> int:
        return 2 * self._num_points

    def split(self, x: Sequence[float]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return the ``(d, d', d'')`` blocks of ``x`` as views."""
        x = self._as_variables(x)
        n = self._num_points
        return x[:n], x[n : 2 * n], x[2 * n :]

    # ------------------------------------------------------------------
    # Sizes, bounds, starting point
    # ------------------------------------------------------------------

    def query_sizes(self) -> ProblemSizes:
        return ProblemSizes(
            n_vars=self._num_variables,
            n_constraints=self._num_constraints,
            n_nonzero_jacobian=self._jacobian_pattern.nnz,
            n_nonzero_hessian=self._hessian_pattern.nnz,
            index_base=0,
        )

    def query_bounds(self, n: int, m: int) -> ProblemBounds:
        self._check_dimensions(n, m)
        num_points = self._num_points

        var_lower = np.empty(self._num_variables)
        var_upper = np.empty(self._num_variables)

        var_lower[:num_points] = self._d_bounds[:, 0]
        var_upper[:num_points] = self._d_bounds[:, 1]

        d_prime = slice(self._d_prime_offset, self._d_pprime_offset)
        var_lower[d_prime] = -self.config.d_prime_bound
        var_upper[d_prime] = self.config.d_prime_bound

        d_pprime = slice(self._d_pprime_offset, self._num_variables)
        var_lower[d_pprime] = -self.config.d_pprime_bound
        var_upper[d_pprime] = self.config.d_pprime_bound

        # Only the d'' increment block is an inequality
        cons_lower = np.zeros(self._num_constraints)
        cons_upper = np.zeros(self._num_constraints)
        jerk_block = slice(0, max(num_points - 1, 0))
        increment_limit = self.config.d_ppprime_max * self._delta_s
        cons_lower[jerk_block] = -increment_limit
        cons_upper[jerk_block] = increment_limit

        return ProblemBounds(var_lower, var_upper, cons_lower, cons_upper)

    def query_start(
        self,
        n: int,
        m: int,
        init_x: bool = True,
        init_z: bool = False,
        init_lambda: bool = False,
    ) -> np.ndarray:
        self._check_dimensions(n, m)
        if not init_x:
            raise ProblemContractError("Solver must request a primal starting point")
        if init_z:
            raise ProblemContractError("Bound multiplier initialization is not supported")
        if init_lambda:
            raise ProblemContractError("Constraint multiplier initialization is not supported")

        x0 = np.zeros(self._num_variables)
        x0[0] = self._d_init
        x0[self._d_prime_offset] = self._d_prime_init
        x0[self._d_pprime_offset] = self._d_pprime_init
        return x0

    def sizes(self) -> ProblemSizes:
        return self.query_sizes()

    def bounds(self) -> ProblemBounds:
        return self.query_bounds(self._num_variables, self._num_constraints)

    def starting_point(self) -> np.ndarray:
        return self.query_start(self._num_variables, self._num_constraints)

    # ------------------------------------------------------------------
    # Objective
    # ------------------------------------------------------------------

    def evaluate_objective(self, x: Sequence[float]) -> float:
        d, d_prime, d_pprime = self.split(x)
        cfg = self.config
        dist = d - self.corridor_centers
        return float(
            cfg.w_d * np.dot(d, d)
            + cfg.w_d_prime * np.dot(d_prime, d_prime)
            + cfg.w_d_pprime * np.dot(d_pprime, d_pprime)
            + cfg.w_d_obs * np.dot(dist, dist)
        )

    def evaluate_objective_gradient(self, x: Sequence[float]) -> np.ndarray:
        d, d_prime, d_pprime = self.split(x)
        cfg = self.config
        return np.concatenate(
            [
                2.0 * cfg.w_d * d + 2.0 * cfg.w_d_obs * (d - self.corridor_centers),
                2.0 * cfg.w_d_prime * d_prime,
                2.0 * cfg.w_d_pprime * d_pprime,
            ]
        )

    # ------------------------------------------------------------------
    # Constraints
    # ------------------------------------------------------------------

    def evaluate_constraints(self, x: Sequence[float]) -> np.ndarray:
        d, d_prime, d_pprime = self.split(x)

        pprime_increment = d_pprime[1:] - d_pprime[:-1]
        jerk = pprime_increment / self._delta_s
        end_velocity, end_position = integrate(
            d[:-1], d_prime[:-1], d_pprime[:-1], jerk, self._delta_s
        )

        initial = np.array(
            [
                d[0] - self._d_init,
                d_prime[0] - self._d_prime_init,
                d_pprime[0] - self._d_pprime_init,
            ]
        )
        return np.concatenate(
            [pprime_increment, end_velocity - d_prime[1:], end_position - d[1:], initial]
        )

    def constraint_violation(self, x: Sequence[float]) -> float:
        """Largest amount by which ``g(x)`` leaves its bounds."""
        g = self.evaluate_constraints(x)
        bounds = self.bounds()
        below = np.maximum(bounds.cons_lower - g, 0.0)
        above = np.maximum(g - bounds.cons_upper, 0.0)
        return float(np.max(np.concatenate([below, above]), initial=0.0))

    # ------------------------------------------------------------------
    # Jacobian
    # ------------------------------------------------------------------

    def _jacobian_entries(self) -> Iterator[tuple[int, int, float]]:
        """Yield ``(row, col, value)`` in block order."""
        num_points = self._num_points
        ds = self._delta_s
        dp = self._d_prime_offset
        dpp = self._d_pprime_offset
        row = 0

        # d''_{i+1} - d''_i
        for i in range(num_points - 1):
            yield row, dpp + i, -1.0
            yield row, dpp + i + 1, 1.0
            row += 1

        # d'_i - d'_{i+1} + 0.5 * ds * (d''_i + d''_{i+1})
        for i in range(num_points - 1):
            yield row, dp + i, 1.0
            yield row, dp + i + 1, -1.0
            yield row, dpp + i, 0.5 * ds
            yield row, dpp + i + 1, 0.5 * ds
            row += 1

        # d_i - d_{i+1} + ds * d'_i + ds^2 / 3 * d''_i + ds^2 / 6 * d''_{i+1}
        for i in range(num_points - 1):
            yield row, i, 1.0
            yield row, i + 1, -1.0
            yield row, dp + i, ds
            yield row, dpp + i, ds * ds / 3.0
            yield row, dpp + i + 1, ds * ds / 6.0
            row += 1

        if num_points > 0:
            for col in (0, dp, dpp):
                yield row, col, 1.0
                row += 1

    def jacobian_structure(self) -> SparsityPattern:
        return self._jacobian_pattern

    def jacobian_values(
        self, x: Sequence[float] | None = None, out: np.ndarray | None = None
    ) -> np.ndarray:
        """
        Fill the constant Jacobian values in structure order.

        ``x`` is accepted for interface symmetry and only checked for size.
        The first block emits ``(-1, +1)``, the exact derivative of
        ``d''_{i+1} - d''_i``, not the negated ``(1, -1)`` pair.
        """
        if x is not None:
            self._as_variables(x)

        nnz = self._jacobian_pattern.nnz
        if out is None:
            out = np.zeros(nnz)
        elif out.shape != (nnz,):
            raise ProblemContractError(
                f"Jacobian buffer holds {out.size} values, structure declared {nnz}"
            )

        nz_index = 0
        for _, _, value in self._jacobian_entries():
            out[nz_index] = value
            nz_index += 1

        if nz_index != nnz:
            raise ProblemContractError(
                f"Wrote {nz_index} Jacobian values, structure declared {nnz}"
            )
        return out

    def evaluate_constraint_jacobian(
        self, x: Sequence[float] | None, structure_only: bool, new_x: bool = True
    ) -> SparseResult:
        if structure_only:
            return self.jacobian_structure()
        return self.jacobian_values(x)

    # ------------------------------------------------------------------
    # Hessian
    # ------------------------------------------------------------------

    def hessian_structure(self) -> SparsityPattern:
        return self._hessian_pattern

    def hessian_values(
        self,
        x: Sequence[float] | None = None,
        objective_scale: float = 1.0,
        multipliers: Sequence[float] | None = None,
    ) -> np.ndarray:
        """
        Diagonal of the Lagrangian Hessian.

        Constraints are affine, so only the objective contributes and the
        result does not depend on ``x``, ``objective_scale`` or
        ``multipliers``.
        """
        if x is not None:
            self._as_variables(x)
        if multipliers is not None and len(multipliers) != self._num_constraints:
            raise ProblemContractError(
                f"Expected {self._num_constraints} multipliers, got {len(multipliers)}"
            )

        cfg = self.config
        n = self._num_points
        values = np.empty(self._num_variables)
        values[:n] = 2.0 * cfg.w_d + 2.0 * cfg.w_d_obs
        values[n : 2 * n] = 2.0 * cfg.w_d_prime
        values[2 * n :] = 2.0 * cfg.w_d_pprime
        return values

    def evaluate_lagrangian_hessian(
        self,
        x: Sequence[float] | None,
        objective_scale: float,
        multipliers: Sequence[float] | None,
        structure_only: bool,
    ) -> SparseResult:
        if structure_only:
            return self.hessian_structure()
        return self.hessian_values(x, objective_scale, multipliers)

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def finalize(
        self,
        status: SolverReturn,
        x: Sequence[float],
        multipliers: Sequence[float] | None = None,
        objective_value: float | None = None,
    ) -> None:
        """
        Build the piecewise-jerk trajectory from the final iterate.

        The solver status is recorded but not acted on; a non-optimal
        termination still yields a trajectory from the reported ``x``.
        """
        _, _, d_pprime = self.split(x)
        jerks = np.diff(d_pprime) / self._delta_s

        trajectory = PiecewiseJerkTrajectory1d(
            self._d_init, self._d_prime_init, self._d_pprime_init
        )
        for jerk in jerks:
            trajectory.append_segment(float(jerk), self._delta_s)

        self._optimal_trajectory = trajectory
        self._final_status = status

        if objective_value is None:
            log.info("Lateral optimization finished: %s", status.value)
        else:
            log.info(
                "Lateral optimization finished: %s (objective %.6f)",
                status.value,
                objective_value,
            )

    def get_optimal_trajectory(self) -> PiecewiseJerkTrajectory1d:
        """Return a copy of the trajectory built at finalize time."""
        return self._optimal_trajectory.copy()

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _as_variables(self, x: Sequence[float]) -> np.ndarray:
        arr = np.asarray(x, dtype=float)
        if arr.shape != (self._num_variables,):
            raise ProblemContractError(
                f"Expected {self._num_variables} variables, got shape {arr.shape}"
            )
        return arr

    def _check_dimensions(self, n: int, m: int) -> None:
        if n != self._num_variables:
            raise ProblemContractError(f"Expected n={self._num_variables}, got {n}")
        if m != self._num_constraints:
            raise ProblemContractError(f"Expected m={self._num_constraints}, got {m}")

    def _check_degenerate_inputs(self) -> None:
        if self._num_points < 2:
            log.warning(
                "Corridor has %d point(s); continuity constraints are empty",
                self._num_points,
            )
        inverted = np.flatnonzero(self._d_bounds[:, 0] > self._d_bounds[:, 1])
        if inverted.size:
            log.warning(
                "Corridor bounds inverted at %d point(s), first at index %d",
                inverted.size,
                int(inverted[0]),
            )
