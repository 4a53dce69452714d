import yaml
import os
import math
from dataclasses import fields

from waypoint_nav.utils.param_types import (
    NavigatorParams, AxisGains, PIDGains, SpeedLimits, ToleranceParams, TopicNames,
    INTEGRAL_MODES
)

def _to_f(x, name):
    if isinstance(x, bool):
        raise ValueError(f"Navigator YAML: '{name}' must be a number, got bool")
    v = None
    if isinstance(x, (int, float)): v = float(x)
    elif isinstance(x, str):
        try:
            v = float(x.strip())
        except ValueError:
            pass
    if v is not None:
        if not math.isfinite(v):
            raise ValueError(f"Navigator YAML: '{name}' must be finite, got {x!r}")
        return v
    raise ValueError(f"Navigator YAML: '{name}' must be a number, got {type(x).__name__}")


def _to_bool(x, name):
    if isinstance(x, bool):
        return x
    if isinstance(x, str):
        s = x.strip().lower()
        if s in ("true", "yes", "on", "1"): return True
        if s in ("false", "no", "off", "0"): return False
    raise ValueError(f"Navigator YAML: '{name}' must be a boolean, got {x!r}")


def tolerance_from_values(position, yaw) -> ToleranceParams:
    """
    Build tolerances from raw values (YAML entries or ROS params).
    Integers are accepted: `tolerance:=1` arrives as an int.
    """
    params = ToleranceParams(
        position=_to_f(position, "tolerance.position"),
        yaw=_to_f(yaw, "tolerance.yaw"),
    )
    if params.position < 0.0 or params.yaw < 0.0:
        raise ValueError("tolerance: position/yaw must be >= 0")
    return params


class ParamLoader:
    def __init__(self, yaml_path):
        self.yaml_path = yaml_path
        self.params = self._load_yaml(yaml_path)

    def _load_yaml(self, path):
        if not os.path.exists(path):
            raise FileNotFoundError(f"YAML file not found: {path}")
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return data.get('/**', {}).get('ros__parameters', {}) or {}

    def get(self, key, default=None):
        """Generic access to a top-level parameter."""
        return self.params.get(key, default)

    def get_nested(self, keys, default=None):
        """Access nested parameter with list of keys."""
        ref = self.params
        try:
            for key in keys:
                ref = ref[key]
            return ref
        except (KeyError, TypeError):
            return default

    def get_topic(self, topic_key, default=None):
        """Access topic name from 'topics_names' section."""
        return self.get_nested(["topics_names", topic_key], default)

    def get_topic_names(self) -> TopicNames:
        defaults = TopicNames()
        return TopicNames(**{
            f.name: str(self.get_topic(f.name, getattr(defaults, f.name)))
            for f in fields(TopicNames)
        })

    def get_pid_gains(self, axis: str) -> PIDGains:
        block = self.get_nested(["pid", axis], {}) or {}
        if not isinstance(block, dict):
            raise ValueError(f"pid.{axis}: expected a mapping with kp/ki/kd, got {block!r}")
        unknown = set(block) - {"kp", "ki", "kd"}
        if unknown:
            raise ValueError(f"pid.{axis}: unknown gain(s) {sorted(unknown)}")
        d = PIDGains()
        return PIDGains(
            kp=_to_f(block.get("kp", d.kp), f"pid.{axis}.kp"),
            ki=_to_f(block.get("ki", d.ki), f"pid.{axis}.ki"),
            kd=_to_f(block.get("kd", d.kd), f"pid.{axis}.kd"),
        )

    def get_axis_gains(self) -> AxisGains:
        return AxisGains(
            x=self.get_pid_gains("x"),
            y=self.get_pid_gains("y"),
            z=self.get_pid_gains("z"),
            yaw=self.get_pid_gains("yaw"),
        )

    def get_speed_limits(self) -> SpeedLimits:
        ms = self.get("max_speed", {}) or {}
        d = SpeedLimits()
        limits = SpeedLimits(
            translational=_to_f(ms.get("translational", d.translational), "max_speed.translational"),
            rotational=_to_f(ms.get("rotational", d.rotational), "max_speed.rotational"),
        )
        if limits.translational < 0.0 or limits.rotational < 0.0:
            raise ValueError("max_speed: translational/rotational must be >= 0")
        return limits

    def get_tolerance_params(self) -> ToleranceParams:
        tol = self.get("tolerance", {}) or {}
        d = ToleranceParams()
        return tolerance_from_values(tol.get("position", d.position), tol.get("yaw", d.yaw))

    def get_navigator_params(self) -> NavigatorParams:
        """
        Return a single object bundling gains, limits, tolerances and topics.
        """
        mode = str(self.get("integral_mode", "recursive")).strip().lower()
        if mode not in INTEGRAL_MODES:
            raise ValueError(f"Unknown integral_mode: {mode} (expected one of {INTEGRAL_MODES})")

        throttle = _to_f(self.get("warn_throttle_sec", 5.0), "warn_throttle_sec")
        if throttle <= 0.0:
            raise ValueError("warn_throttle_sec must be > 0")

        return NavigatorParams(
            gains=self.get_axis_gains(),
            max_speed=self.get_speed_limits(),
            tolerance=self.get_tolerance_params(),
            integral_mode=mode,
            wrap_yaw_error=_to_bool(self.get("wrap_yaw_error", False), "wrap_yaw_error"),
            warn_throttle_sec=throttle,
            topics=self.get_topic_names(),
        )

    def validate(self) -> tuple[bool, str]:
        """
        Try parsing the navigator parameters; return (ok, message).
        """
        try:
            self.get_navigator_params()
            return True, f"OK ({os.path.basename(self.yaml_path)})"
        except (ValueError, TypeError, AttributeError) as e:
            return False, f"{type(e).__name__}: {e}"
