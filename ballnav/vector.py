"""Integer 2-D vectors, anchored segments and egg outlines."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Vector:
    """A 2-D vector with integer components."""

    x: int
    y: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(int(self.x * scalar), int(self.y * scalar))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def dot(self, other: Vector) -> float:
        """Dot product with ``other``."""
        return float(self.x * other.x + self.y * other.y)

    def closest_vector_from_point(self, start: Vector, point: Vector) -> Vector:
        """Vector from ``point`` to the nearest point of this vector placed at ``start``."""
        to_point = point - start
        denom = self.dot(self)
        if denom == 0:
            return Vector(0, 0)
        t = min(max(to_point.dot(self) / denom, 0.0), 1.0)
        nearest = start + self * t
        return nearest - point

    def normalize(self) -> Vector:
        """Divide both components by their greatest common divisor."""
        if self.is_null():
            return Vector(0, 0)
        divisor = math.gcd(abs(self.x), abs(self.y))
        return Vector(int(self.x / divisor), int(self.y / divisor))

    def is_null(self) -> bool:
        return self.x == 0 and self.y == 0

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)


class VectorWithStartPos(Vector):
    """A vector anchored at a start point, i.e. a line segment."""

    def __init__(self, start_x: int, start_y: int, vector: Vector) -> None:
        super().__init__(vector.x, vector.y)
        self.start_x = start_x
        self.start_y = start_y

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(start_x={self.start_x}, start_y={self.start_y}, "
            f"x={self.x}, y={self.y})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorWithStartPos):
            return NotImplemented
        return (self.start_x, self.start_y, self.x, self.y) == (
            other.start_x,
            other.start_y,
            other.x,
            other.y,
        )

    __hash__ = None  # type: ignore[assignment]

    def is_same_vector(self, other: VectorWithStartPos, max_diff: int) -> bool:
        """True when start and direction both differ by at most ``max_diff``."""
        diffs = (
            abs(self.start_x - other.start_x),
            abs(self.start_y - other.start_y),
            abs(self.x - other.x),
            abs(self.y - other.y),
        )
        return all(diff <= max_diff for diff in diffs)

    def minimal_points(self) -> Vector:
        return Vector(self.lowest_x(), self.lowest_y())

    def max_points(self) -> Vector:
        return Vector(self.max_x(), self.max_y())

    def closest_vector_from_point(self, point: Vector) -> Vector:  # type: ignore[override]
        """Vector from ``point`` to the nearest point of the segment."""
        return Vector.closest_vector_from_point(
            self, Vector(self.start_x, self.start_y), point
        )

    def lowest_x(self) -> int:
        return self.start_x if self.x > 0 else self.start_x + self.x

    def lowest_y(self) -> int:
        return self.start_y if self.y > 0 else self.start_y + self.y

    def max_x(self) -> int:
        return self.start_x if self.x < 0 else self.start_x + self.x

    def max_y(self) -> int:
        return self.start_y if self.y < 0 else self.start_y + self.y


class Egg(VectorWithStartPos):
    """An axis-aligned box treated as an obstacle bounded by four sides."""

    def __init__(self, x1: int, y1: int, x2: int, y2: int) -> None:
        super().__init__(x1, y1, Vector(x2 - x1, y2 - y1))
        horizontal = Vector(x2 - x1, 0)
        vertical = Vector(0, y2 - y1)
        self._sides = [
            VectorWithStartPos(x1, y1, horizontal),
            VectorWithStartPos(x1, y2, horizontal),
            VectorWithStartPos(x1, y1, vertical),
            VectorWithStartPos(x2, y1, vertical),
        ]

    def closest_vector_from_point(self, point: Vector) -> Vector:
        """Shortest vector from ``point`` to any side of the box."""
        smallest = Vector(5000, 5000)
        for side in self._sides:
            candidate = side.closest_vector_from_point(point)
            if candidate.length() < smallest.length():
                smallest = candidate
        return smallest