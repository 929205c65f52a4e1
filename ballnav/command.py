"""Drive commands sent to the robot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Command:
    """A drive command: action letter, speed, distance or angle, collector state."""

    action: str = ""
    speed: int = 0
    distance_or_angle: float = 0.0
    collect_balls: bool = True

    def format(self) -> str:
        """Text sent to the robot, without the trailing newline."""
        if not self.collect_balls:
            return "out"
        return f"{self.action} {self.speed} {self.distance_or_angle:.6f} in"