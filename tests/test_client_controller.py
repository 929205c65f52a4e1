import pytest

from ballnav.client_controller import ClientController
from ballnav.clients import Client
from ballnav.command import Command
from ballnav.config import Config


class Recorder(Client):
    def __init__(self):
        self.sent = []

    def send_command(self, command):
        self.sent.append(command)

    def send_ball_collection_command(self, command):
        self.sent.append(command)

    def connect(self):
        pass


def _config(average=True, amount=3, angle=5, distance=25):
    return Config(
        {
            "ToAverageCommandsInClientController": average,
            "AmountOfCommandsToAverage": amount,
            "MaxDifferenceInAngle": angle,
            "MaxDifferenceInDistance": distance,
        }
    )


@pytest.fixture
def recorder():
    return Recorder()


def test_without_averaging_sends_immediately(recorder):
    controller = ClientController(recorder, _config(average=False))
    command = Command("f", 50, 12.5, True)
    controller.send_command(command)
    assert recorder.sent == [command.format()]
    assert controller.pending == ()


def test_averages_agreeing_commands(recorder):
    controller = ClientController(recorder, _config())
    for distance in (10.0, 20.0, 30.0):
        controller.send_command(Command("f", 50, distance, True))
    assert recorder.sent == [Command("f", 50, 20.0, True).format()]
    assert controller.pending == ()


def test_waits_until_enough_commands(recorder):
    controller = ClientController(recorder, _config())
    controller.send_command(Command("l", 20, 30.0, True))
    controller.send_command(Command("l", 20, 31.0, True))
    assert recorder.sent == []
    assert len(controller.pending) == 2


def test_mismatched_action_clears(recorder):
    controller = ClientController(recorder, _config())
    controller.send_command(Command("f", 50, 10.0, True))
    controller.send_command(Command("l", 50, 10.0, True))
    controller.send_command(Command("f", 50, 10.0, True))
    assert recorder.sent == []
    assert controller.pending == ()


def test_recovers_after_clearing(recorder):
    controller = ClientController(recorder, _config())
    for action in ("f", "r", "f"):
        controller.send_command(Command(action, 50, 10.0, True))
    for _ in range(3):
        controller.send_command(Command("r", 30, 40.0, True))
    assert recorder.sent == [Command("r", 30, 40.0, True).format()]


def test_angle_difference_too_large_clears(recorder):
    controller = ClientController(recorder, _config(angle=5))
    for angle in (30.0, 31.0, 40.0):
        controller.send_command(Command("l", 20, angle, True))
    assert recorder.sent == []
    assert controller.pending == ()


def test_collector_state_mismatch_clears(recorder):
    controller = ClientController(recorder, _config())
    controller.send_command(Command("f", 50, 10.0, False))
    controller.send_command(Command("f", 50, 10.0, True))
    controller.send_command(Command("f", 50, 10.0, True))
    assert recorder.sent == []


def test_single_command_average_passes_through(recorder):
    controller = ClientController(recorder, _config(amount=1))
    command = Command("b", 10, 7.0, True)
    controller.send_command(command)
    assert recorder.sent == [command.format()]