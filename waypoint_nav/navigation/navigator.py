# waypoint_nav/navigation/navigator.py
from __future__ import annotations
import threading
from typing import Iterable, Optional

import numpy as np

from waypoint_nav.control.pid import AxisPID
from waypoint_nav.navigation.nav_types import (
    Waypoint, PoseEstimate, VelocityCommand, NavOutput
)
from waypoint_nav.navigation.state_machine import NavState, NavStateMachine, NavEvents
from waypoint_nav.navigation.tolerance import TolerancePolicy
from waypoint_nav.navigation.waypoint_queue import WaypointQueue
from waypoint_nav.utils.helper_functions import clamp, world_to_body_xy, wrap_angle, all_finite
from waypoint_nav.utils.param_types import NavigatorParams, ToleranceParams


class Navigator:
    """
    Waypoint-tracking velocity controller. Independent of ROS: feed it
    trajectories with on_trajectory() and pose estimates with on_pose(),
    publish whatever command the returned NavOutput carries.

    Per cycle: position error -> x/y/z PIDs -> clamp -> body-frame rotation.
    Inside the position tolerance the yaw PID aligns heading; once aligned the
    queue advances (no command that cycle) or, on the final waypoint, the
    navigator hovers and reports goal_reached exactly once.
    """
    def __init__(self, params: Optional[NavigatorParams] = None):
        self.params = params if params is not None else NavigatorParams()
        p = self.params

        self.sm = NavStateMachine()
        self.queue = WaypointQueue()
        self.tolerance = TolerancePolicy(p.tolerance.position, p.tolerance.yaw)

        mode = p.integral_mode
        self.pid_x = AxisPID(p.gains.x, mode)
        self.pid_y = AxisPID(p.gains.y, mode)
        self.pid_z = AxisPID(p.gains.z, mode)
        self.pid_yaw = AxisPID(p.gains.yaw, mode)

        self._last_stamp: float | None = None
        self._lock = threading.Lock()

        # last cycle diagnostics
        self.error_xyz = np.zeros(3)
        self.error_yaw = 0.0

    # ---------- properties ----------
    @property
    def state(self) -> NavState:
        return self.sm.state

    @property
    def current_goal(self) -> Optional[Waypoint]:
        return self.queue.active

    # ---------- entry points ----------
    def on_trajectory(self, waypoints: Iterable[Waypoint],
                      tolerance: Optional[ToleranceParams] = None) -> Waypoint:
        """
        Replace the trajectory. Returns the first (active) goal.
        Raises EmptyTrajectoryError (empty) or ValueError (non-finite entry)
        and keeps the previous state.
        """
        waypoints = list(waypoints)
        for i, wp in enumerate(waypoints):
            if not all_finite(wp.position, wp.yaw):
                raise ValueError(f"waypoint {i} is not finite: {wp}")
        with self._lock:
            if tolerance is not None and waypoints:
                self.tolerance.configure(tolerance.position, tolerance.yaw)
            first = self.queue.replace(waypoints)
            self.tolerance.restore()
            if self.queue.is_final:
                self.tolerance.tighten()
            self._last_stamp = None
            self.sm.step(NavEvents(trajectory_accepted=True))
            return first

    def cancel(self) -> None:
        """Drop the trajectory and wait for a new one."""
        with self._lock:
            self.queue.clear()
            self.tolerance.restore()
            self._last_stamp = None
            self.sm.step(NavEvents(cancel_requested=True))

    def on_pose(self, pose: PoseEstimate) -> NavOutput:
        with self._lock:
            if self.sm.state == NavState.AWAITING_TRAJECTORY:
                return NavOutput(skipped="no_trajectory")
            if not all_finite(pose.position, pose.yaw, pose.stamp):
                return NavOutput(skipped="non_finite_pose",
                                 waypoint_number=self.queue.waypoint_number)
            return self._cycle(pose)

    # ---------- control cycle ----------
    def _elapsed(self, stamp: float) -> float | None:
        dt = None if self._last_stamp is None else float(stamp) - self._last_stamp
        self._last_stamp = float(stamp)
        return dt

    def _cycle(self, pose: PoseEstimate) -> NavOutput:
        goal = self.queue.active
        dt = self._elapsed(pose.stamp)
        v_max = self.params.max_speed.translational

        err = np.asarray(goal.position, float) - np.asarray(pose.position, float)
        self.error_xyz = err

        ax = clamp(self.pid_x.step(err[0], dt), v_max)
        ay = clamp(self.pid_y.step(err[1], dt), v_max)
        az = clamp(self.pid_z.step(err[2], dt), v_max)

        bx, by = world_to_body_xy(ax, ay, pose.yaw)
        cmd = VelocityCommand(linear=(bx, by, az), angular_z=0.0)

        n = self.queue.waypoint_number
        if self.tolerance.within_position(err):
            yaw_cmd = self._control_yaw(goal.yaw, pose.yaw, dt)
            if yaw_cmd is None:
                if self.queue.is_final:
                    if self.sm.state != NavState.HOVERING:
                        self.sm.step(NavEvents(final_goal_reached=True))
                        return NavOutput(goal_reached=True, waypoint_number=n)
                    # already hovering at the final goal: hold, publish nothing
                    return NavOutput(waypoint_number=n)

                self.queue.advance()
                # half tolerance from the first cycle on the final goal
                if self.queue.is_final:
                    self.tolerance.tighten()
                # motion toward the new goal starts next cycle
                return NavOutput(advanced=True, waypoint_number=self.queue.waypoint_number)
            cmd = yaw_cmd

        return NavOutput(command=cmd, waypoint_number=n)

    def _control_yaw(self, goal_yaw: float, pose_yaw: float, dt: float | None) -> Optional[VelocityCommand]:
        """Return None when aligned, else a pure rotation command."""
        err = float(goal_yaw) - float(pose_yaw)
        if self.params.wrap_yaw_error:
            err = wrap_angle(err)
        self.error_yaw = err
        if self.tolerance.within_yaw(err):
            return None
        action = clamp(self.pid_yaw.step(err, dt), self.params.max_speed.rotational)
        return VelocityCommand(linear=(0.0, 0.0, 0.0), angular_z=action)
