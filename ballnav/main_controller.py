"""Ties navigation planning to the command link."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from ballnav.client_controller import ClientController
from ballnav.clients import Client, MockClient
from ballnav.command import Command
from ballnav.config import Config
from ballnav.course_object import CourseObject, JourneyModel
from ballnav.navigation import NavigationController
from ballnav.vector import VectorWithStartPos

logger = logging.getLogger(__name__)


class MainController:
    """Collects detections, plans a journey and sends it as a command.

    ``client_factory`` receives the controller, so a client can report back
    through :meth:`completed_command` and :meth:`completed_goal_delivery`.
    Without one, a :class:`MockClient` is used.
    """

    def __init__(
        self,
        config: Config,
        client_factory: Callable[[MainController], Client] | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._navigation = NavigationController(config, clock)
        factory = client_factory or (lambda _controller: MockClient())
        self._client_controller = ClientController(factory(self), config)

    @property
    def navigation(self) -> NavigationController:
        return self._navigation

    def add_course_object(self, course_object: CourseObject) -> None:
        self._navigation.add_course_object(course_object)

    def add_blocked_object(self, blocking_object: VectorWithStartPos) -> None:
        self._navigation.add_blocking_object(blocking_object)

    def add_cross_object(self, cross_object: VectorWithStartPos) -> None:
        self._navigation.add_cross_object(cross_object)

    def navigate_and_send_command(self) -> Command | None:
        """Plan from the objects gathered so far, send the command, and return it."""
        journey = self._navigation.calculate_journey()
        self._navigation.clear_objects()
        if journey is None:
            logger.info("Journey was nullptr")
            return None
        logger.info("Journey: %f, %f", abs(journey.angle), journey.distance)
        command = journey_to_command(journey, self._config)
        self._client_controller.send_command(command)
        self._navigation.new_command_sent()
        return command

    def completed_goal_delivery(self) -> None:
        self._navigation.set_has_delivered_once()

    def completed_command(self) -> None:
        self._navigation.last_sent_command_was_completed()


def journey_to_command(journey: JourneyModel, config: Config) -> Command:
    """Turn a planned journey into a drive command."""
    if journey.angle == 0 and journey.distance == 0:
        return Command("f", 0, 0.0, False)

    collect = journey.collect_balls
    allowed = config.get_int("AllowedAngleDifference")
    if journey.angle > allowed or journey.angle < -allowed:
        action = "l" if journey.angle > 0 else "r"
        slow_limit = config.get_int("MaxAngleBeforeSlowingDown")
        if -slow_limit < journey.angle < slow_limit:
            speed = config.get_int("RotationSlowSpeed")
        else:
            speed = config.get_int("RotationFastSpeed")
        return Command(action, speed, float(abs(journey.angle)), collect)

    if journey.distance != 0.0:
        if journey.distance > config.get_int("FastSpeedMinimumDistance"):
            speed = config.get_int("ForwardFastSpeed")
        else:
            speed = config.get_int("ForwardSlowSpeed")
        if journey.distance > config.get_int("DistanceBeforeSmallBit"):
            distance = float(config.get_int("SmallBit"))
        else:
            distance = float(journey.distance)
        return Command("f", speed, distance, collect)

    return Command("s", 0, 0.0, collect)


def find_max_value(values: Sequence[int], max_allowed: int) -> int:
    """Largest value below ``max_allowed``, starting from the first; -1 when empty."""
    if not values:
        return -1
    best = values[0]
    for value in values:
        if best < value < max_allowed:
            best = value
    return best


def find_min_value(values: Sequence[int], min_allowed: int) -> int:
    """Smallest value above ``min_allowed``, starting from the first; -1 when empty."""
    if not values:
        return -1
    best = values[0]
    for value in values:
        if min_allowed < value < best:
            best = value
    return best