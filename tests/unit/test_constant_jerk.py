"""
Unit tests for the constant-jerk segment integrator.
"""

import numpy as np
import pytest

from latopt.trajectory1d import ConstantJerkTrajectory1d, integrate


class TestIntegrate:
    """Closed-form end state of a constant-jerk segment."""

    def test_pure_jerk_from_rest(self):
        """From rest, v = j L^2 / 2 and p = j L^3 / 6."""
        end_v, end_p = integrate(0.0, 0.0, 0.0, 6.0, 1.0)
        assert end_v == pytest.approx(3.0)
        assert end_p == pytest.approx(1.0)

    def test_zero_jerk_is_quadratic(self):
        """Without jerk the segment is a parabola."""
        end_v, end_p = integrate(1.0, 2.0, 3.0, 0.0, 2.0)
        assert end_v == pytest.approx(2.0 + 3.0 * 2.0)
        assert end_p == pytest.approx(1.0 + 2.0 * 2.0 + 0.5 * 3.0 * 4.0)

    def test_zero_length_returns_start_state(self):
        end_v, end_p = integrate(0.4, -0.2, 1.5, 7.0, 0.0)
        assert end_v == pytest.approx(-0.2)
        assert end_p == pytest.approx(0.4)

    def test_accepts_arrays(self):
        """Works elementwise on numpy arrays."""
        p0 = np.array([0.0, 1.0])
        v0 = np.array([0.0, 2.0])
        a0 = np.array([0.0, 3.0])
        jerk = np.array([6.0, 0.0])
        end_v, end_p = integrate(p0, v0, a0, jerk, 1.0)
        np.testing.assert_allclose(end_v, [3.0, 5.0])
        np.testing.assert_allclose(end_p, [1.0, 4.5])

    def test_linear_in_start_state_and_jerk(self):
        """End velocity equals v0 + 0.5 L (a0 + a1) with a1 = a0 + j L."""
        v0, a0, jerk, length = 0.3, -0.4, 0.25, 1.7
        end_v, _ = integrate(0.0, v0, a0, jerk, length)
        a1 = a0 + jerk * length
        assert end_v == pytest.approx(v0 + 0.5 * length * (a0 + a1))


class TestConstantJerkTrajectory1d:
    """Evaluation of a single segment."""

    @pytest.fixture
    def segment(self) -> ConstantJerkTrajectory1d:
        return ConstantJerkTrajectory1d(p0=1.0, v0=0.5, a0=-0.2, jerk=0.3, param=2.0)

    def test_evaluate_orders(self, segment: ConstantJerkTrajectory1d):
        s = 1.5
        assert segment.evaluate(0, s) == pytest.approx(1.0 + 0.5 * s - 0.1 * s**2 + 0.05 * s**3)
        assert segment.evaluate(1, s) == pytest.approx(0.5 - 0.2 * s + 0.15 * s**2)
        assert segment.evaluate(2, s) == pytest.approx(-0.2 + 0.3 * s)
        assert segment.evaluate(3, s) == pytest.approx(0.3)

    def test_higher_orders_are_zero(self, segment: ConstantJerkTrajectory1d):
        assert segment.evaluate(4, 0.7) == 0.0

    def test_end_state_matches_evaluate(self, segment: ConstantJerkTrajectory1d):
        assert segment.end_position == pytest.approx(segment.evaluate(0, 2.0))
        assert segment.end_velocity == pytest.approx(segment.evaluate(1, 2.0))
        assert segment.end_acceleration == pytest.approx(segment.evaluate(2, 2.0))
        assert segment.param_length == 2.0

    def test_end_state_matches_integrate(self, segment: ConstantJerkTrajectory1d):
        end_v, end_p = integrate(1.0, 0.5, -0.2, 0.3, 2.0)
        assert segment.end_velocity == pytest.approx(end_v)
        assert segment.end_position == pytest.approx(end_p)
