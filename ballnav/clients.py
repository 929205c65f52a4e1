"""Connections that carry drive commands to the robot."""

from __future__ import annotations

import logging
import socket
import sys
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TextIO

from ballnav.config import Config

logger = logging.getLogger(__name__)

_RECEIVE_SIZE = 1024
_IDLE_SLEEP = 0.03


class Client(ABC):
    """Something that can deliver command lines to the robot."""

    @abstractmethod
    def send_command(self, command: str) -> None:
        """Queue ``command`` for sending, followed by a newline."""

    @abstractmethod
    def send_ball_collection_command(self, command: str) -> None:
        """Queue a command for the ball collector."""

    @abstractmethod
    def connect(self) -> None:
        """Open the connection to the robot."""


class TcpClient(Client):
    """Sends commands over TCP from a background thread and waits for replies.

    Only the latest queued command is kept; an older one not yet sent is
    replaced. When the robot answers, ``on_command_completed`` is called, and
    ``on_goal_delivery`` too when the command released the balls.
    """

    def __init__(
        self,
        config: Config,
        on_goal_delivery: Callable[[], None] | None = None,
        on_command_completed: Callable[[], None] | None = None,
    ) -> None:
        self._config = config
        self._on_goal_delivery = on_goal_delivery
        self._on_command_completed = on_command_completed
        self._lock = threading.Lock()
        self._pending = ""
        self._ball_collection_command = ""
        self._last_ball_collection_command = ""
        self._running = threading.Event()
        self._sock: socket.socket | None = None

        self.connect()
        self.send_ball_collection_command("in\n")
        self._running.set()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def __enter__(self) -> TcpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def connect(self) -> None:
        """Connect to ``RobotIP``:``RobotPort`` from the configuration."""
        ip = self._config.get_str("RobotIP")
        port = self._config.get_int("RobotPort")
        try:
            socket.inet_pton(socket.AF_INET, ip)
        except OSError as exc:
            raise ValueError(f"Invalid address / Address not supported: {ip!r}") from exc
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((ip, port))
        except OSError:
            sock.close()
            raise
        self._sock = sock
        logger.info("Connected using TcpClient.")

    def send_command(self, command: str) -> None:
        with self._lock:
            self._pending = command + "\n"

    def send_ball_collection_command(self, command: str) -> None:
        with self._lock:
            if command == self._last_ball_collection_command:
                return
            self._ball_collection_command = command

    def close(self) -> None:
        """Stop the sender thread and close the socket."""
        self._running.clear()
        if self._sock is not None:
            try:
                self._sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
        if self._thread.is_alive():
            self._thread.join()
        if self._sock is not None:
            self._sock.close()

    def _run(self) -> None:
        assert self._sock is not None
        while self._running.is_set():
            with self._lock:
                pending = self._pending
                self._pending = ""
            if not pending:
                time.sleep(_IDLE_SLEEP)
                continue

            at_goal = False
            try:
                self._sock.sendall(pending.encode())
            except OSError:
                logger.error("Failed to send command")
            else:
                logger.info("Sent: %s", pending.rstrip("\n"))
                at_goal = "out" in pending

            try:
                reply = self._sock.recv(_RECEIVE_SIZE)
            except OSError:
                reply = b""
            if reply and self._running.is_set():
                with self._lock:
                    self._pending = ""
                if at_goal and self._on_goal_delivery is not None:
                    self._on_goal_delivery()
                if self._on_command_completed is not None:
                    self._on_command_completed()
                logger.info("Received Response")
            logger.info("Done with sending")


class MockClient(Client):
    """Prints commands instead of sending them, and remembers them."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.sent: list[str] = []
        self.connect()

    def _write(self, text: str) -> None:
        print(text, file=self._stream if self._stream is not None else sys.stdout)

    def send_command(self, command: str) -> None:
        self.sent.append(command)
        self._write(command)
        logger.info("Sent: %s", command)

    def send_ball_collection_command(self, command: str) -> None:
        self.sent.append(command)
        self._write(command)
        logger.info("Sent: %s", command)

    def connect(self) -> None:
        self._write("Connected Using Mock Client")