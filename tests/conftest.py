# tests/conftest.py
"""
Shared fixtures for waypoint_nav tests.

Only ROS-free modules are imported here; the rclpy node is not exercised.
"""

import math
import os
import sys

import pytest

# Make the package importable without installing it
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from waypoint_nav.navigation.navigator import Navigator
from waypoint_nav.navigation.nav_types import Waypoint, PoseEstimate
from waypoint_nav.utils.param_types import (
    NavigatorParams, AxisGains, PIDGains, SpeedLimits, ToleranceParams
)


def p_only_params(kp=0.5, kp_yaw=0.5, v_max=2.0, w_max=2.0,
                  tol=0.15, yaw_tol=0.05, **kwargs) -> NavigatorParams:
    """Navigator params with pure-proportional gains on every axis."""
    return NavigatorParams(
        gains=AxisGains(
            x=PIDGains(kp, 0.0, 0.0),
            y=PIDGains(kp, 0.0, 0.0),
            z=PIDGains(kp, 0.0, 0.0),
            yaw=PIDGains(kp_yaw, 0.0, 0.0),
        ),
        max_speed=SpeedLimits(translational=v_max, rotational=w_max),
        tolerance=ToleranceParams(position=tol, yaw=yaw_tol),
        **kwargs,
    )


def wp(x, y, z, yaw=0.0) -> Waypoint:
    return Waypoint.from_xyzyaw(x, y, z, yaw)


class PoseStream:
    """Produces PoseEstimates with a monotonically increasing stamp."""

    def __init__(self, dt=0.1, t0=100.0):
        self.dt = dt
        self.t = t0

    def __call__(self, x=0.0, y=0.0, z=0.0, yaw=0.0) -> PoseEstimate:
        pose = PoseEstimate(position=(x, y, z), yaw=yaw, stamp=self.t)
        self.t += self.dt
        return pose


@pytest.fixture
def params():
    return p_only_params()


@pytest.fixture
def navigator(params):
    return Navigator(params)


@pytest.fixture
def poses():
    return PoseStream()


@pytest.fixture
def half_pi():
    return math.pi / 2.0
