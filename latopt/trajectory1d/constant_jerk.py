"""
Constant-jerk trajectory segments.

A segment is the cubic polynomial fully determined by a start state
``(p0, v0, a0)`` and one constant third derivative over a fixed parameter
length. End states are computed in closed form.
"""

from __future__ import annotations

from dataclasses import dataclass


def integrate(p0: float, v0: float, a0: float, jerk: float, length: float) -> tuple[float, float]:
    """
    Integrate a constant-jerk segment over ``length``.

    Args:
        p0: Start position
        v0: Start velocity (first derivative)
        a0: Start acceleration (second derivative)
        jerk: Constant third derivative over the segment
        length: Parameter length of the segment

    Returns:
        (end_velocity, end_position)
    """
    end_velocity = v0 + a0 * length + 0.5 * jerk * length * length
    end_position = (
        p0 + v0 * length + 0.5 * a0 * length * length + jerk * length * length * length / 6.0
    )
    return end_velocity, end_position


@dataclass(frozen=True)
class ConstantJerkTrajectory1d:
    """Cubic segment with constant jerk starting at ``(p0, v0, a0)``."""

    p0: float
    v0: float
    a0: float
    jerk: float
    param: float

    def evaluate(self, order: int, s: float) -> float:
        """Evaluate the ``order``-th derivative at local parameter ``s``."""
        if order == 0:
            return self.p0 + self.v0 * s + 0.5 * self.a0 * s * s + self.jerk * s * s * s / 6.0
        if order == 1:
            return self.v0 + self.a0 * s + 0.5 * self.jerk * s * s
        if order == 2:
            return self.a0 + self.jerk * s
        if order == 3:
            return self.jerk
        return 0.0

    @property
    def param_length(self) -> float:
        return self.param

    @property
    def end_position(self) -> float:
        return integrate(self.p0, self.v0, self.a0, self.jerk, self.param)[1]

    @property
    def end_velocity(self) -> float:
        return integrate(self.p0, self.v0, self.a0, self.jerk, self.param)[0]

    @property
    def end_acceleration(self) -> float:
        return self.a0 + self.jerk * self.param
