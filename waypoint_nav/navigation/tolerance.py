# waypoint_nav/navigation/tolerance.py
from __future__ import annotations
import numpy as np


class TolerancePolicy:
    """
    Per-axis position tolerance and yaw tolerance for goal arrival.
    The final waypoint uses half the configured position tolerance.
    """
    def __init__(self, position: float, yaw: float):
        self.configure(position, yaw)

    def configure(self, position: float, yaw: float) -> None:
        if position < 0.0 or yaw < 0.0:
            raise ValueError("tolerances must be >= 0")
        self.position_tolerance = float(position)
        self.yaw_tolerance = float(yaw)
        self.active_position_tolerance = self.position_tolerance

    @property
    def final_position_tolerance(self) -> float:
        return self.position_tolerance / 2.0

    def restore(self) -> None:
        self.active_position_tolerance = self.position_tolerance

    def tighten(self) -> None:
        self.active_position_tolerance = self.final_position_tolerance

    def within_position(self, err_xyz) -> bool:
        return bool(np.all(np.abs(np.asarray(err_xyz, float)) <= self.active_position_tolerance))

    def within_yaw(self, err_yaw: float) -> bool:
        return abs(err_yaw) <= self.yaw_tolerance
