"""Solver adapters for the lateral problem."""

from .casadi_adapter import build_quadratic_model, map_return_status, solve_with_ipopt
from .ipopt_factory import build_ipopt_solver_options, create_ipopt_solver, is_ipopt_available

__all__ = [
    "build_ipopt_solver_options",
    "build_quadratic_model",
    "create_ipopt_solver",
    "is_ipopt_available",
    "map_return_status",
    "solve_with_ipopt",
]
