"""Detected objects on the course and planned journeys."""

from __future__ import annotations

from dataclasses import dataclass

from ballnav.vector import Vector


def _half(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return value // 2 if value >= 0 else -((-value) // 2)


_MATCH_TOLERANCE = 10


@dataclass
class CourseObject:
    """An axis-aligned box with a label, in image pixel coordinates."""

    x1: int
    y1: int
    x2: int
    y2: int
    name: str

    def center(self) -> Vector:
        """Middle of the box, using integer division."""
        return Vector(_half(self.x1 + self.x2), _half(self.y1 + self.y2))

    def matches(self, other: CourseObject) -> bool:
        """Loose comparison of position and name."""
        tol = _MATCH_TOLERANCE
        if self.x1 > other.x1 + tol or self.x1 < other.x1 - tol:
            return False
        if self.x2 > other.x2 + tol or self.x2 < other.x2 - tol:
            return False
        if self.y1 > other.y1 + tol or self.y1 > other.y1 - tol:
            return False
        if self.y2 > other.y2 + tol or self.y2 > other.y2 - tol:
            return False
        return self.name == other.name

    def within_range(self, other: CourseObject, max_distance: float) -> bool:
        """True when the centres are closer than ``max_distance``."""
        return (other.center() - self.center()).length() < max_distance

    def shift_x(self, dx: float) -> None:
        step = int(dx)
        self.x1 += step
        self.x2 += step

    def shift_y(self, dy: float) -> None:
        step = int(dy)
        self.y1 += step
        self.y2 += step


@dataclass
class JourneyModel:
    """A planned move: distance to drive, angle to turn, and collector state."""

    distance: float
    angle: float
    collect_balls: bool