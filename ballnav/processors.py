"""Stabilise detections by comparing them with recent frames."""

from __future__ import annotations

from dataclasses import replace
from typing import Generic, TypeVar

from ballnav.config import Config
from ballnav.course_object import CourseObject
from ballnav.vector import Vector, VectorWithStartPos

_T = TypeVar("_T")


class _FrameHistory(Generic[_T]):
    """A ring of per-frame detection lists sized by ``ImagesToAverage``."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._index = 0
        self._frames: list[list[_T]] = [
            [] for _ in range(config.get_int("ImagesToAverage"))
        ]

    def begin(self) -> None:
        """Move to the next frame slot and empty it."""
        self._index = (self._index + 1) % self._config.get_int("ImagesToAverage")
        while len(self._frames) <= self._index:
            self._frames.append([])
        self._frames[self._index].clear()

    def _current(self) -> list[_T]:
        while len(self._frames) <= self._index:
            self._frames.append([])
        return self._frames[self._index]

    def _all(self):
        for frame in self._frames:
            yield from frame


class BallProcessor(_FrameHistory[CourseObject]):
    """Accepts a ball only once it has been seen in enough recent frames."""

    def begin(self) -> None:
        """Start a new frame."""
        super().begin()

    def _max_diff(self) -> int:
        return self._config.get_int("MaxDiffInSameCourseObject")

    def _times_seen(self, course_object: CourseObject) -> int:
        max_diff = self._max_diff()
        return sum(
            1 for ball in self._all() if course_object.within_range(ball, max_diff)
        )

    def is_ball_valid(self, course_object: CourseObject) -> bool:
        """Record the ball in this frame and say whether it should be used."""
        accept = self._to_add_ball(course_object)
        self._current().append(replace(course_object))
        return accept

    def is_egg_valid(self, course_object: CourseObject) -> bool:
        """True when fewer than two recent balls lie where the egg is."""
        return self._times_seen(course_object) < 2

    def _to_add_ball(self, course_object: CourseObject) -> bool:
        times_seen = self._times_seen(course_object)
        max_diff = self._max_diff()
        if any(ball.within_range(course_object, max_diff) for ball in self._current()):
            return False
        return times_seen >= self._config.get_int("AmountOfSeenBeforeCreate")


class WallProcessor(_FrameHistory[VectorWithStartPos]):
    """Accepts a wall only once it has been seen often enough recently."""

    def begin(self) -> None:
        """Start a new frame."""
        super().begin()

    def is_wall_valid(self, vector: VectorWithStartPos) -> bool:
        """Record the wall in this frame and say whether it should be used."""
        accept = self._to_add_wall(vector)
        self._current().append(
            VectorWithStartPos(vector.start_x, vector.start_y, Vector(vector.x, vector.y))
        )
        return accept

    def _to_add_wall(self, vector: VectorWithStartPos) -> bool:
        max_diff = self._config.get_int("MaxDiffInSameCourseObject")
        times_seen = sum(1 for wall in self._all() if wall.is_same_vector(vector, max_diff))
        return times_seen >= self._config.get_int("WallSeenBeforeCreate")