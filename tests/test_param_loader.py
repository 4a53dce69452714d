# tests/test_param_loader.py
"""
Unit tests for loading navigator parameters from a ROS 2 style YAML file.
"""

import os
import textwrap

import pytest

from waypoint_nav.utils.param_loader import ParamLoader, tolerance_from_values
from waypoint_nav.utils.param_types import NavigatorParams, PIDGains, TopicNames, ToleranceParams

CONFIG_DIR = os.path.join(os.path.dirname(__file__), '..', 'config')


def write_yaml(tmp_path, body: str) -> str:
    path = tmp_path / "nav.yaml"
    path.write_text("/**:\n  ros__parameters:\n" + textwrap.indent(textwrap.dedent(body), "    "))
    return str(path)


class TestShippedConfig:

    def test_default_file_matches_builtin_defaults(self):
        loader = ParamLoader(os.path.join(CONFIG_DIR, 'navigator.yaml'))
        ok, msg = loader.validate()
        assert ok, msg
        assert loader.get_navigator_params() == NavigatorParams()


class TestLoading:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ParamLoader(str(tmp_path / "nope.yaml"))

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ParamLoader(str(path)).get_navigator_params() == NavigatorParams()

    def test_gains_and_limits(self, tmp_path):
        path = write_yaml(tmp_path, """
            pid:
              x: {kp: 1.2, ki: 0.1, kd: 0.05}
              yaw: {kp: "0.8"}
            max_speed:
              translational: 1.0
              rotational: 0.5
            tolerance:
              position: 0.3
              yaw: 0.1
            integral_mode: accumulate
            wrap_yaw_error: true
        """)
        p = ParamLoader(path).get_navigator_params()
        assert p.gains.x == PIDGains(1.2, 0.1, 0.05)
        assert p.gains.y == PIDGains()
        assert p.gains.yaw == PIDGains(0.8, 0.0, 0.0)
        assert p.max_speed.translational == 1.0
        assert p.max_speed.rotational == 0.5
        assert p.tolerance.position == 0.3
        assert p.tolerance.yaw == 0.1
        assert p.integral_mode == "accumulate"
        assert p.wrap_yaw_error is True

    def test_topics_partial_override(self, tmp_path):
        path = write_yaml(tmp_path, """
            topics_names:
              pose_topic: /drone/pose
        """)
        loader = ParamLoader(path)
        topics = loader.get_topic_names()
        assert topics.pose_topic == "/drone/pose"
        assert topics.cmd_vel_topic == TopicNames().cmd_vel_topic
        assert loader.get_topic("pose_topic") == "/drone/pose"
        assert loader.get_topic("missing", "x") == "x"

    def test_missing_topics_section_gives_defaults(self, tmp_path):
        loader = ParamLoader(write_yaml(tmp_path, "wrap_yaw_error: false\n"))
        assert loader.get_topic_names() == TopicNames()


class TestValidation:

    @pytest.mark.parametrize("body", [
        "tolerance: {position: -0.1}\n",
        "max_speed: {translational: -1.0}\n",
        "integral_mode: trapezoid\n",
        "pid: {x: {kp: fast}}\n",
        "pid: {x: {kq: 1.0}}\n",
        "pid: {x: [1, 2, 3]}\n",
        "wrap_yaw_error: maybe\n",
        "warn_throttle_sec: 0\n",
        "max_speed: {rotational: .nan}\n",
        "max_speed: 3.0\n",
    ])
    def test_invalid_values_fail_validation(self, tmp_path, body):
        loader = ParamLoader(write_yaml(tmp_path, body))
        ok, msg = loader.validate()
        assert not ok
        assert msg

    def test_invalid_values_raise(self, tmp_path):
        loader = ParamLoader(write_yaml(tmp_path, "tolerance: {yaw: -1}\n"))
        with pytest.raises(ValueError):
            loader.get_navigator_params()

    def test_valid_message_names_file(self, tmp_path):
        ok, msg = ParamLoader(write_yaml(tmp_path, "integral_mode: recursive\n")).validate()
        assert ok
        assert "nav.yaml" in msg


class TestToleranceFromValues:
    """Raw tolerance values as they arrive from YAML or ROS parameters."""

    def test_integer_values_are_accepted(self):
        tol = tolerance_from_values(1, 0)
        assert tol == ToleranceParams(position=1.0, yaw=0.0)
        assert isinstance(tol.position, float)
        assert isinstance(tol.yaw, float)

    def test_numeric_strings_are_accepted(self):
        assert tolerance_from_values("0.2", " 0.1 ") == ToleranceParams(0.2, 0.1)

    @pytest.mark.parametrize("position, yaw", [
        (-0.1, 0.05),
        (0.15, -1),
        (True, 0.05),
        ("wide", 0.05),
        (float("inf"), 0.05),
    ])
    def test_invalid_values_raise(self, position, yaw):
        with pytest.raises(ValueError):
            tolerance_from_values(position, yaw)
