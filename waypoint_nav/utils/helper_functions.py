import math
import numpy as np
from scipy.spatial.transform import Rotation as R

def quat_to_yaw(q_xyzw):
    # geometry_msgs order: [x, y, z, w]
    r = R.from_quat([q_xyzw[0], q_xyzw[1], q_xyzw[2], q_xyzw[3]])
    yaw, _pitch, _roll = r.as_euler('ZYX', degrees=False)
    return float(yaw)

def wrap_angle(angle: float) -> float:
    # Normalize to [-pi, pi]
    return math.atan2(math.sin(angle), math.cos(angle))

def clamp(value: float, max_magnitude: float) -> float:
    """
    Bound |value| to max_magnitude, keeping the sign. clamp(0, m) == 0.
    """
    if abs(value) > max_magnitude:
        return math.copysign(max_magnitude, value) if value != 0.0 else 0.0
    return value

def world_to_body_xy(ax: float, ay: float, yaw: float) -> tuple[float, float]:
    """
    Rotate a world-frame planar action into the body frame of a vehicle
    heading `yaw`. Both outputs are computed from the same input pair.
    """
    c, s = math.cos(yaw), math.sin(yaw)
    return ax * c + ay * s, ay * c - ax * s

def all_finite(*values) -> bool:
    for x in values:
        if x is None:
            return False
        if not np.all(np.isfinite(np.asarray(x, dtype=float))):
            return False
    return True
