"""Shared fixtures for usbreset tests."""
import subprocess

import pytest

from usbreset.utils.command import CommandRunner, SimulationMode


class ScriptedInput:
    """Stands in for input(): replays answers and records every prompt."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


class FakeSubprocess:
    """Records subprocess.run calls and answers per executable name."""

    def __init__(self):
        self.calls = []
        self.responses = {
            "powershell": subprocess.CompletedProcess([], 0, stdout="[]", stderr=""),
            "diskpart": subprocess.CompletedProcess([], 0, stdout="DiskPart succeeded.\n", stderr=""),
        }

    def __call__(self, cmd, **kwargs):
        self.calls.append((list(cmd), kwargs))
        response = self.responses[cmd[0]]
        if isinstance(response, BaseException):
            raise response
        return subprocess.CompletedProcess(cmd, response.returncode, response.stdout, response.stderr)

    def calls_to(self, name):
        return [(cmd, kwargs) for cmd, kwargs in self.calls if cmd[0] == name]


@pytest.fixture
def scripted_input():
    return ScriptedInput


@pytest.fixture
def fake_subprocess(monkeypatch):
    fake = FakeSubprocess()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def runner():
    return CommandRunner(SimulationMode.DISABLED, colored_output=False)


@pytest.fixture
def sim_runner():
    return CommandRunner(SimulationMode.SIMULATE, colored_output=False)
