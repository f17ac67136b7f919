"""Exceptions raised by the problem definition."""

from __future__ import annotations


class ProblemContractError(RuntimeError):
    """
    A solver integration broke the problem definition contract.

    Raised for mismatched variable/constraint counts, requests to
    initialize dual or bound multipliers, and Jacobian nonzero count
    mismatches. It signals a bug in the caller, not a recoverable
    runtime condition.
    """
