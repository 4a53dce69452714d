# param_types.py

from dataclasses import dataclass, field
from typing import Literal

IntegralMode = Literal["recursive", "accumulate"]
INTEGRAL_MODES = ("recursive", "accumulate")


@dataclass
class PIDGains:
    kp: float = 0.5
    ki: float = 0.0
    kd: float = 0.0


@dataclass
class AxisGains:
    x: PIDGains = field(default_factory=PIDGains)
    y: PIDGains = field(default_factory=PIDGains)
    z: PIDGains = field(default_factory=PIDGains)
    yaw: PIDGains = field(default_factory=PIDGains)


@dataclass
class SpeedLimits:
    translational: float = 2.0          # m/s, per axis
    rotational: float = 2.0             # rad/s


@dataclass
class ToleranceParams:
    position: float = 0.15              # m, per axis
    yaw: float = 0.05                   # rad


@dataclass
class TopicNames:
    pose_topic: str = "/amcl_pose"
    waypoints_topic: str = "/waypoints_smooth"
    cmd_vel_topic: str = "/cmd_vel"
    cmd_vel_stamped_topic: str = "/cmd_vel/stamped"
    goal_reached_topic: str = "/goal_reached"
    nav_state_topic: str = "/navigator/state"


@dataclass
class NavigatorParams:
    gains: AxisGains = field(default_factory=AxisGains)
    max_speed: SpeedLimits = field(default_factory=SpeedLimits)
    tolerance: ToleranceParams = field(default_factory=ToleranceParams)
    integral_mode: IntegralMode = "recursive"
    wrap_yaw_error: bool = False
    warn_throttle_sec: float = 5.0
    topics: TopicNames = field(default_factory=TopicNames)
