"""
Centralized IPOPT solver construction through CasADi.

All ``nlpsol`` instances are created here so option handling and linear
solver selection stay in one place.
"""

from __future__ import annotations

from typing import Any

import casadi as ca

from latopt.logging import get_logger
from latopt.optimization.config import IpoptSettings

log = get_logger(__name__)

# Cached plugin probe
_IPOPT_AVAILABLE: bool | None = None


def is_ipopt_available() -> bool:
    """Check whether CasADi can load the IPOPT plugin."""
    global _IPOPT_AVAILABLE

    if _IPOPT_AVAILABLE is not None:
        return _IPOPT_AVAILABLE

    if hasattr(ca, "has_nlpsol") and ca.has_nlpsol("ipopt"):
        _IPOPT_AVAILABLE = True
        return _IPOPT_AVAILABLE

    # Direct instantiation as a secondary check
    try:
        x = ca.SX.sym("x")
        create_ipopt_solver("ipopt_probe", {"x": x, "f": x**2})
        _IPOPT_AVAILABLE = True
    except RuntimeError as exc:
        log.warning("IPOPT plugin not available in CasADi: %s", exc)
        _IPOPT_AVAILABLE = False

    return _IPOPT_AVAILABLE


def build_ipopt_solver_options(
    settings: IpoptSettings | None = None,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return CasADi options for IPOPT, with ``overrides`` applied last."""
    opts = (settings or IpoptSettings()).to_casadi_options()
    if overrides:
        opts.update(overrides)
    return opts


def create_ipopt_solver(
    name: str,
    nlp: dict[str, Any],
    settings: IpoptSettings | None = None,
    overrides: dict[str, Any] | None = None,
) -> Any:
    """
    Create an IPOPT solver.

    Args:
        name: Name for the solver instance
        nlp: CasADi NLP dict with ``x``, ``f`` and ``g``
        settings: IPOPT settings (defaults if omitted)
        overrides: Raw ``ipopt.*`` options applied after ``settings``

    Returns:
        CasADi IPOPT solver instance
    """
    opts = build_ipopt_solver_options(settings, overrides)
    log.debug(f"Creating solver '{name}' with linear solver: {opts.get('ipopt.linear_solver')}")
    return ca.nlpsol(name, "ipopt", nlp, opts)
