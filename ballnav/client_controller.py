"""Smooths drive commands before they reach the robot."""

from __future__ import annotations

import logging
from dataclasses import replace

from ballnav.clients import Client
from ballnav.command import Command
from ballnav.config import Config

logger = logging.getLogger(__name__)


class ClientController:
    """Forwards commands, optionally only after several agreeing ones in a row.

    With ``ToAverageCommandsInClientController`` set, commands are collected
    until ``AmountOfCommandsToAverage`` have arrived. If they all share the
    action and collector state and their distance or angle stays within the
    allowed difference of the newest, one command with the averaged value is
    sent; otherwise the collection starts over.
    """

    def __init__(self, client: Client, config: Config) -> None:
        self._client = client
        self._config = config
        self._commands: list[Command] = []

    @property
    def pending(self) -> tuple[Command, ...]:
        """Commands collected but not yet sent."""
        return tuple(self._commands)

    def send_command(self, command: Command) -> None:
        cfg = self._config
        if not cfg.get_bool("ToAverageCommandsInClientController"):
            self._client.send_command(command.format())
            return

        self._commands.append(command)
        amount = cfg.get_int("AmountOfCommandsToAverage")
        if len(self._commands) == amount:
            if not self._all_agree_with(command):
                self._clear()
                return
            total = sum(c.distance_or_angle for c in self._commands)
            averaged = replace(command, distance_or_angle=total / float(amount))
            self._client.send_command(averaged.format())
            self._commands.clear()
        if len(self._commands) > amount:
            logger.warning("Commands.Size was too large")
            self._clear()

    def _all_agree_with(self, command: Command) -> bool:
        for other in self._commands:
            if other.action != command.action:
                return False
            key = (
                "MaxDifferenceInAngle"
                if other.action in ("r", "l")
                else "MaxDifferenceInDistance"
            )
            allowed = self._config.get_int(key)
            if abs(command.distance_or_angle - other.distance_or_angle) > allowed:
                return False
            if other.collect_balls != command.collect_balls:
                return False
        return True

    def _clear(self) -> None:
        logger.info("Clearing commands and retrying")
        self._commands.clear()