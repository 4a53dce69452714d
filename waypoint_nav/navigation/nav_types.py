# waypoint_nav/navigation/nav_types.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Waypoint:
    """Goal pose: world-frame position and heading (rad)."""
    position: Vec3
    yaw: float = 0.0

    @classmethod
    def from_xyzyaw(cls, x: float, y: float, z: float, yaw: float = 0.0) -> "Waypoint":
        return cls((float(x), float(y), float(z)), float(yaw))


@dataclass(frozen=True)
class PoseEstimate:
    position: Vec3
    yaw: float
    stamp: float                        # s


@dataclass(frozen=True)
class VelocityCommand:
    linear: Vec3 = (0.0, 0.0, 0.0)      # body frame, m/s
    angular_z: float = 0.0              # rad/s

    def twist_components(self) -> Tuple[Vec3, Vec3]:
        """(linear, angular) as plain floats, shared by Twist and TwistStamped."""
        linear = tuple(float(v) for v in self.linear)
        return linear, (0.0, 0.0, float(self.angular_z))


@dataclass
class NavOutput:
    """Result of one control cycle."""
    command: Optional[VelocityCommand] = None
    goal_reached: bool = False
    advanced: bool = False
    waypoint_number: int = 0
    skipped: Optional[str] = None       # "no_trajectory" | "non_finite_pose"
