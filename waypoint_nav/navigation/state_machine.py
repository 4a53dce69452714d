# waypoint_nav/navigation/state_machine.py
from __future__ import annotations
from enum import IntEnum
from dataclasses import dataclass

class NavState(IntEnum):
    AWAITING_TRAJECTORY = 0
    TRACKING            = 1
    HOVERING            = 2

@dataclass
class NavEvents:
    trajectory_accepted: bool = False
    final_goal_reached: bool = False
    cancel_requested: bool = False

class NavStateMachine:
    """Pure transition logic; no ROS, no control side effects."""
    def __init__(self):
        self.state = NavState.AWAITING_TRAJECTORY

    def reset(self, state: NavState = NavState.AWAITING_TRAJECTORY):
        self.state = state

    def step(self, ev: NavEvents) -> NavState:

        # Cancel wins over everything: drop back to waiting for input
        if ev.cancel_requested:
            self.state = NavState.AWAITING_TRAJECTORY
            return self.state

        # A new trajectory (re)starts tracking from any state
        if ev.trajectory_accepted:
            self.state = NavState.TRACKING
            return self.state

        s = self.state
        if s == NavState.TRACKING:
            if ev.final_goal_reached:
                self.state = NavState.HOVERING

        # AWAITING_TRAJECTORY and HOVERING only leave on a new trajectory

        return self.state
