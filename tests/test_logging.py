from __future__ import annotations

import logging

import pytest

from latopt.logging import DEFAULT_LEVEL, LOG_LEVEL_ENV, get_logger, resolve_level


def test_get_logger_returns_logger() -> None:
    """get_logger returns a logging.Logger instance with correct name."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_module"


def test_get_logger_sets_correct_level(monkeypatch) -> None:
    """Logger is set to INFO level by default."""
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    logger = get_logger("test_module")
    assert logger.level == logging.INFO


def test_get_logger_does_not_add_handlers() -> None:
    """get_logger must not add handlers."""
    logger = logging.getLogger("policy_test")
    before = len(logger.handlers)
    _ = get_logger("policy_test")
    assert len(logger.handlers) == before


def test_logger_reuse() -> None:
    """Same name returns the same logger instance."""
    assert get_logger("test_module") is get_logger("test_module")


def test_env_level_is_read_per_call(monkeypatch) -> None:
    """Changing the variable affects loggers fetched afterwards."""
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_logger("env_module").level == logging.DEBUG
    monkeypatch.setenv(LOG_LEVEL_ENV, "WARNING")
    assert get_logger("env_module").level == logging.WARNING


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, DEFAULT_LEVEL),
        ("", DEFAULT_LEVEL),
        (" error ", logging.ERROR),
        ("15", 15),
        ("verbose", DEFAULT_LEVEL),
    ],
)
def test_resolve_level(value, expected) -> None:
    assert resolve_level(value) == expected


def test_degenerate_corridor_is_logged(caplog) -> None:
    """A single-point corridor is reported, not rejected."""
    from latopt.optimization import LateralTrajectoryProblem

    with caplog.at_level(logging.WARNING, logger="latopt.optimization.lateral_problem"):
        LateralTrajectoryProblem(0.0, 0.0, 0.0, 1.0, [(-1.0, 1.0)])
    assert "continuity constraints are empty" in caplog.text


def test_inverted_bounds_are_logged(caplog) -> None:
    """Inverted corridor bounds are reported with the first offending index."""
    from latopt.optimization import LateralTrajectoryProblem

    with caplog.at_level(logging.WARNING, logger="latopt.optimization.lateral_problem"):
        LateralTrajectoryProblem(0.0, 0.0, 0.0, 1.0, [(-1.0, 1.0), (1.0, -1.0)])
    assert "first at index 1" in caplog.text
