# waypoint_nav/control/pid.py
from __future__ import annotations
import math

from waypoint_nav.utils.param_types import PIDGains, IntegralMode, INTEGRAL_MODES


class AxisPID:
    """
    Three-term controller over a single pre-computed error signal.
    One instance per controlled axis (x, y, z, yaw). Output is not clamped;
    callers bound the summed action.

    integral_mode:
      "recursive"  -> integral' = ki * (integral + e*dt), term = integral'
      "accumulate" -> integral += e*dt,                  term = ki * integral
    """
    def __init__(self, gains: PIDGains, integral_mode: IntegralMode = "recursive"):
        if integral_mode not in INTEGRAL_MODES:
            raise ValueError(f"Unknown integral_mode: {integral_mode}")
        self.gains = gains
        self.integral_mode = integral_mode
        self.reset()

    def reset(self):
        self.prev_error = 0.0
        self.integral = 0.0
        self.p_term = 0.0
        self.i_term = 0.0
        self.d_term = 0.0

    def step(self, error: float, dt: float | None) -> float:
        kp, ki, kd = self.gains.kp, self.gains.ki, self.gains.kd
        error = float(error)

        self.p_term = kp * error

        if dt is None or not math.isfinite(dt) or dt <= 0.0:
            # no usable time base: hold the accumulator, no I/D contribution
            self.i_term = 0.0
            self.d_term = 0.0
        else:
            if self.integral_mode == "recursive":
                self.integral = ki * (self.integral + error * dt)
                self.i_term = self.integral
            else:
                self.integral += error * dt
                self.i_term = ki * self.integral
            self.d_term = kd * (error - self.prev_error) / dt

        self.prev_error = error
        return self.p_term + self.i_term + self.d_term
