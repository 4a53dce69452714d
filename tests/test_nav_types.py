# tests/test_nav_types.py
"""
Unit tests for the navigator boundary types.
"""

import numpy as np
import pytest

from waypoint_nav.navigation.nav_types import VelocityCommand, Waypoint


# =============================================================================
# Test: VelocityCommand
# =============================================================================

class TestTwistComponents:
    """Twist and TwistStamped are filled from the same component pair."""

    def test_components_match_command(self):
        cmd = VelocityCommand(linear=(0.5, -0.25, 1.0), angular_z=-0.7)
        linear, angular = cmd.twist_components()
        assert linear == (0.5, -0.25, 1.0)
        assert angular == (0.0, 0.0, -0.7)

    def test_components_are_plain_floats(self):
        cmd = VelocityCommand(linear=tuple(np.array([1, 2, 3], dtype=np.float32)),
                              angular_z=np.float64(0.25))
        linear, angular = cmd.twist_components()
        assert all(type(v) is float for v in linear + angular)
        assert linear == pytest.approx((1.0, 2.0, 3.0))

    def test_repeated_calls_agree(self):
        cmd = VelocityCommand(linear=(0.1, 0.2, 0.3), angular_z=0.4)
        assert cmd.twist_components() == cmd.twist_components()

    def test_default_command_is_zero(self):
        assert VelocityCommand().twist_components() == ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))


class TestWaypoint:

    def test_from_xyzyaw_converts_to_float(self):
        w = Waypoint.from_xyzyaw(1, 2, 3, 0)
        assert w.position == (1.0, 2.0, 3.0)
        assert type(w.yaw) is float
