# waypoint_nav/navigation/waypoint_queue.py
from __future__ import annotations
from collections import deque
from typing import Iterable, Optional

from waypoint_nav.navigation.nav_types import Waypoint


class EmptyTrajectoryError(ValueError):
    """A trajectory with no waypoints was supplied."""


class EmptyQueueError(IndexError):
    """advance() was called with no waypoints left."""


class WaypointQueue:
    """
    FIFO of goal waypoints for the current trajectory. The first entry is
    handed out by replace(); each advance() pops the next one.
    waypoint_number is 1-based and counts the active goal.
    """
    def __init__(self):
        self._queue: deque[Waypoint] = deque()
        self._total = 0
        self.waypoint_number = 0
        self.active: Optional[Waypoint] = None

    def replace(self, waypoints: Iterable[Waypoint]) -> Waypoint:
        new = list(waypoints)
        if not new:
            raise EmptyTrajectoryError("trajectory contains no waypoints")
        self._queue = deque(new)
        self._total = len(new)
        self.active = self._queue.popleft()
        self.waypoint_number = 1
        return self.active

    def advance(self) -> Waypoint:
        if not self._queue:
            raise EmptyQueueError(
                f"no waypoint after #{self.waypoint_number} of {self._total}")
        self.active = self._queue.popleft()
        self.waypoint_number += 1
        return self.active

    def clear(self) -> None:
        self._queue.clear()
        self._total = 0
        self.waypoint_number = 0
        self.active = None

    def remaining_count(self) -> int:
        return len(self._queue)

    def total_count(self) -> int:
        return self._total

    @property
    def is_final(self) -> bool:
        return self._total > 0 and self.waypoint_number == self._total
