"""
Piecewise constant-jerk trajectory.

Segments are appended in order; each one starts from the end state of the
previous segment, so the trajectory is continuous up to the second
derivative by construction.
"""

from __future__ import annotations

import bisect

import numpy as np

from .constant_jerk import ConstantJerkTrajectory1d


class PiecewiseJerkTrajectory1d:
    """
    Append-only sequence of constant-jerk segments.

    Parameters
    ----------
    p : float
        Initial position
    v : float
        Initial velocity
    a : float
        Initial acceleration
    """

    def __init__(self, p: float, v: float, a: float):
        self._init_state = (float(p), float(v), float(a))
        self._last_p, self._last_v, self._last_a = self._init_state
        self._segments: list[ConstantJerkTrajectory1d] = []
        self._param: list[float] = [0.0]

    def append_segment(self, jerk: float, param: float) -> None:
        """Append a segment of constant ``jerk`` lasting ``param``."""
        if param <= 0.0:
            raise ValueError(f"Segment length must be positive, got {param}")

        segment = ConstantJerkTrajectory1d(
            self._last_p, self._last_v, self._last_a, float(jerk), float(param)
        )
        self._segments.append(segment)
        self._param.append(self._param[-1] + float(param))

        self._last_p = segment.end_position
        self._last_v = segment.end_velocity
        self._last_a = segment.end_acceleration

    def evaluate(self, order: int, param: float) -> float:
        """
        Evaluate the ``order``-th derivative at arc length ``param``.

        Arguments before zero use the first segment and arguments past the
        end extrapolate the last one.
        """
        if not self._segments:
            p, v, a = self._init_state
            return ConstantJerkTrajectory1d(p, v, a, 0.0, 0.0).evaluate(order, param)

        index = bisect.bisect_left(self._param, param)
        if index == 0:
            return self._segments[0].evaluate(order, param)
        if index == len(self._param):
            return self._segments[-1].evaluate(order, param - self._param[-2])
        return self._segments[index - 1].evaluate(order, param - self._param[index - 1])

    def sample(self, params, order: int = 0) -> np.ndarray:
        """Evaluate the ``order``-th derivative at every value of ``params``."""
        return np.array([self.evaluate(order, float(s)) for s in np.asarray(params).ravel()])

    @property
    def param_length(self) -> float:
        return self._param[-1]

    @property
    def num_segments(self) -> int:
        return len(self._segments)

    @property
    def initial_state(self) -> tuple[float, float, float]:
        return self._init_state

    @property
    def segments(self) -> tuple[tuple[float, float], ...]:
        """Return ``(jerk, duration)`` for every segment in append order."""
        return tuple((seg.jerk, seg.param) for seg in self._segments)

    def copy(self) -> PiecewiseJerkTrajectory1d:
        clone = PiecewiseJerkTrajectory1d(*self._init_state)
        for jerk, duration in self.segments:
            clone.append_segment(jerk, duration)
        return clone

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PiecewiseJerkTrajectory1d):
            return NotImplemented
        return self._init_state == other._init_state and self.segments == other.segments

    def __repr__(self) -> str:
        return (
            f"PiecewiseJerkTrajectory1d(init={self._init_state}, "
            f"segments={self.num_segments}, length={self.param_length:.3f})"
        )
