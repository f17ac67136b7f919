"""One-dimensional jerk-parameterized trajectories."""

from .constant_jerk import ConstantJerkTrajectory1d, integrate
from .piecewise_jerk import PiecewiseJerkTrajectory1d

__all__ = ["ConstantJerkTrajectory1d", "PiecewiseJerkTrajectory1d", "integrate"]
