"""
IPOPT adapter for problems with a quadratic objective and affine constraints.

The adapter talks to the problem only through :class:`NonlinearProblem`.
Because the objective is quadratic and the constraints are affine, the
exact model is recovered from one evaluation at the origin plus the
constant Hessian and Jacobian::

    f(x) = f(0) + grad f(0) . x + 0.5 x' H x
    g(x) = g(0) + A x

and handed to CasADi's ``nlpsol`` with the IPOPT plugin.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import casadi as ca
import numpy as np
from scipy import sparse

from latopt.logging import get_logger
from latopt.optimization.base import OptimizationResult, OptimizationStatus, SolverReturn
from latopt.optimization.config import IpoptSettings
from latopt.optimization.problem import NonlinearProblem

from .ipopt_factory import create_ipopt_solver

log = get_logger(__name__)

_RETURN_STATUS_MAP: dict[str, SolverReturn] = {
    "Solve_Succeeded": SolverReturn.SUCCESS,
    "Solved_To_Acceptable_Level": SolverReturn.STOP_AT_ACCEPTABLE_POINT,
    "Feasible_Point_Found": SolverReturn.FEASIBLE_POINT_FOUND,
    "Maximum_Iterations_Exceeded": SolverReturn.MAXITER_EXCEEDED,
    "Maximum_CpuTime_Exceeded": SolverReturn.CPUTIME_EXCEEDED,
    "Maximum_WallTime_Exceeded": SolverReturn.CPUTIME_EXCEEDED,
    "Search_Direction_Becomes_Too_Small": SolverReturn.STOP_AT_TINY_STEP,
    "Infeasible_Problem_Detected": SolverReturn.LOCAL_INFEASIBILITY,
    "Diverging_Iterates": SolverReturn.DIVERGING_ITERATES,
    "Restoration_Failed": SolverReturn.RESTORATION_FAILURE,
    "Error_In_Step_Computation": SolverReturn.ERROR_IN_STEP_COMPUTATION,
    "User_Requested_Stop": SolverReturn.USER_REQUESTED_STOP,
    "Invalid_Number_Detected": SolverReturn.INVALID_NUMBER_DETECTED,
    "Not_Enough_Degrees_Of_Freedom": SolverReturn.TOO_FEW_DEGREES_OF_FREEDOM,
    "Internal_Error": SolverReturn.INTERNAL_ERROR,
}


def map_return_status(return_status: str) -> SolverReturn:
    """Translate IPOPT's ``return_status`` string."""
    return _RETURN_STATUS_MAP.get(return_status, SolverReturn.UNKNOWN)


@dataclass
class QuadraticModel:
    """Exact quadratic/affine model of a problem."""

    hessian: sparse.csr_matrix
    gradient_at_origin: np.ndarray
    objective_at_origin: float
    jacobian: sparse.csr_matrix
    constraints_at_origin: np.ndarray


def build_quadratic_model(problem: NonlinearProblem) -> QuadraticModel:
    """Assemble the model from the problem's evaluators."""
    sizes = problem.query_sizes()
    origin = np.zeros(sizes.n_vars)

    jac_pattern = problem.evaluate_constraint_jacobian(None, structure_only=True)
    jac_values = problem.evaluate_constraint_jacobian(origin, structure_only=False)
    hess_pattern = problem.evaluate_lagrangian_hessian(
        None, 1.0, None, structure_only=True
    )
    hess_values = problem.evaluate_lagrangian_hessian(
        origin, 1.0, np.zeros(sizes.n_constraints), structure_only=False
    )

    return QuadraticModel(
        hessian=hess_pattern.to_scipy(hess_values),
        gradient_at_origin=problem.evaluate_objective_gradient(origin),
        objective_at_origin=problem.evaluate_objective(origin),
        jacobian=jac_pattern.to_scipy(jac_values),
        constraints_at_origin=problem.evaluate_constraints(origin),
    )


def _to_casadi_nlp(model: QuadraticModel, n_vars: int) -> dict[str, Any]:
    x = ca.SX.sym("x", n_vars)
    hessian = ca.DM(model.hessian.tocsc())
    jacobian = ca.DM(model.jacobian.tocsc())

    f = (
        0.5 * ca.dot(x, ca.mtimes(hessian, x))
        + ca.dot(ca.DM(model.gradient_at_origin), x)
        + model.objective_at_origin
    )
    g = ca.mtimes(jacobian, x) + ca.DM(model.constraints_at_origin)
    return {"x": x, "f": f, "g": g}


def solve_with_ipopt(
    problem: NonlinearProblem,
    settings: IpoptSettings | None = None,
    overrides: dict[str, Any] | None = None,
) -> OptimizationResult:
    """
    Solve ``problem`` with IPOPT and finalize it.

    Returns an :class:`OptimizationResult` whose ``solution`` holds the raw
    primal vector ``x`` and constraint multipliers ``lam_g``.
    """
    sizes = problem.query_sizes()
    bounds = problem.query_bounds(sizes.n_vars, sizes.n_constraints)
    x0 = problem.query_start(sizes.n_vars, sizes.n_constraints)

    model = build_quadratic_model(problem)
    nlp = _to_casadi_nlp(model, sizes.n_vars)

    start_time = time.time()
    try:
        solver = create_ipopt_solver("lateral_trajectory", nlp, settings, overrides)
        sol = solver(
            x0=x0,
            lbx=bounds.var_lower,
            ubx=bounds.var_upper,
            lbg=bounds.cons_lower,
            ubg=bounds.cons_upper,
        )
    except RuntimeError as exc:
        log.error(f"IPOPT solve failed after {time.time() - start_time:.3f}s: {exc}")
        raise
    solve_time = time.time() - start_time

    stats = solver.stats()
    return_status = str(stats.get("return_status", "unknown"))
    status = map_return_status(return_status)

    x_opt = sol["x"].full().flatten()
    lam_g = sol["lam_g"].full().flatten()
    f_opt = float(sol["f"])

    problem.finalize(status, x_opt, lam_g, f_opt)

    log.info(
        "IPOPT %s in %d iterations (%.3f s), objective %.6f",
        return_status,
        int(stats.get("iter_count", 0)),
        solve_time,
        f_opt,
    )

    return OptimizationResult(
        solution={"x": x_opt, "lam_g": lam_g},
        status=OptimizationStatus.from_solver_return(status),
        solver_return=status,
        objective_value=f_opt,
        solve_time=solve_time,
        iterations=int(stats.get("iter_count", 0)),
        metadata={"return_status": return_status},
    )
