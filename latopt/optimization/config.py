"""Configuration dataclasses for the lateral optimizer and its IPOPT adapter."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Final

from latopt.constants import LATERAL_DERIVATIVE_BOUND, LATERAL_THIRD_ORDER_DERIVATIVE_MAX


@dataclass
class LateralOptimizerConfig:
    """Objective weights and dynamic limits of the lateral problem."""

    # Objective weights
    w_d: float = 1.0
    w_d_prime: float = 1.0
    w_d_pprime: float = 1.0
    w_d_obs: float = 1.0  # corridor-centering penalty

    # Bound on |d''_{i+1} - d''_i| / delta_s
    d_ppprime_max: float = float(LATERAL_THIRD_ORDER_DERIVATIVE_MAX)

    # Symmetric box on d' and d''
    d_prime_bound: float = float(LATERAL_DERIVATIVE_BOUND)
    d_pprime_bound: float = float(LATERAL_DERIVATIVE_BOUND)

    def __post_init__(self):
        """Validate configuration after initialization."""
        for name in ("w_d", "w_d_prime", "w_d_pprime", "w_d_obs"):
            if getattr(self, name) < 0:
                raise ValueError(f"Weight {name} must be non-negative, got {getattr(self, name)}")

        if self.d_ppprime_max <= 0:
            raise ValueError("d_ppprime_max must be positive")

        if self.d_prime_bound <= 0 or self.d_pprime_bound <= 0:
            raise ValueError("Derivative bounds must be positive")

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


_DIRECT_MAP: Final = {
    "max_iter": "ipopt.max_iter",
    "tol": "ipopt.tol",
    "acceptable_tol": "ipopt.acceptable_tol",
    "acceptable_iter": "ipopt.acceptable_iter",
    "print_level": "ipopt.print_level",
    "linear_solver": "ipopt.linear_solver",
    "hessian_approximation": "ipopt.hessian_approximation",
    "mu_strategy": "ipopt.mu_strategy",
}


@dataclass
class IpoptSettings:
    """IPOPT solver options used by the CasADi adapter."""

    max_iter: int = 200
    tol: float = 1e-8
    acceptable_tol: float = 1e-6
    acceptable_iter: int = 15
    print_level: int = 0
    print_time: bool = False

    # None resolves to LATOPT_LINEAR_SOLVER, then MUMPS (ships with the CasADi wheels)
    linear_solver: str | None = None
    hessian_approximation: str = "exact"
    mu_strategy: str = "adaptive"

    def __post_init__(self):
        if self.linear_solver is None:
            env_solver = os.getenv("LATOPT_LINEAR_SOLVER", "").strip().lower()
            self.linear_solver = env_solver or "mumps"

        if self.max_iter <= 0:
            raise ValueError("max_iter must be positive")
        if self.tol <= 0 or self.acceptable_tol <= 0:
            raise ValueError("Tolerances must be positive")
        if self.hessian_approximation not in ("exact", "limited-memory"):
            raise ValueError(
                f"Unknown hessian_approximation '{self.hessian_approximation}'"
            )

    def to_casadi_options(self) -> dict[str, Any]:
        """Return the options dict expected by ``casadi.nlpsol``."""
        data = asdict(self)
        opts: dict[str, Any] = {
            key: data[name] for name, key in _DIRECT_MAP.items() if data[name] is not None
        }
        opts["print_time"] = self.print_time
        opts.setdefault("ipopt.sb", "yes")
        return opts
