"""Tests for the command runner."""
import json
import subprocess
import sys

import pytest

from usbreset.utils.command import CONSOLE_ENCODING


def test_simulated_commands_are_not_executed(sim_runner, fake_subprocess):
    sim_runner.run(["diskpart"], check=False, input="select disk 1\nexit\n")
    assert fake_subprocess.calls == []
    assert sim_runner.commands_run[0]["simulated"] is True


def test_simulated_disk_list_is_json(sim_runner):
    result = sim_runner.run(["powershell", "-Command", "Get-Disk"])
    disks = json.loads(result.stdout)
    assert {d["BusType"] for d in disks} == {"NVMe", "USB"}


def test_simulated_diskpart_transcript(sim_runner):
    result = sim_runner.run(["diskpart"], check=False, input="select disk 1\nclean\nexit\n")
    assert result.returncode == 0
    assert "DISKPART> clean" in result.stdout
    assert result.stdout.count("DiskPart succeeded.") == 3


def test_simulation_report_lists_script(sim_runner):
    sim_runner.run(["diskpart"], check=False, input="select disk 1\nclean all\n")
    report = sim_runner.get_simulation_report()
    assert f"SIMULATION REPORT [ID: {sim_runner.simulation_id}]" in report
    assert "1. diskpart" in report
    assert "< clean all" in report
    assert "Total commands simulated: 1" in report


def test_report_outside_simulation(runner):
    assert runner.get_simulation_report() == "Simulation mode is not active."


def test_real_run_captures_text(runner, fake_subprocess):
    result = runner.run(["diskpart"], check=False, input="exit\n")
    assert result.stdout == "DiskPart succeeded.\n"
    _, kwargs = fake_subprocess.calls[0]
    assert kwargs["text"] is True
    assert kwargs["capture_output"] is True


def test_real_run_reraises_failures(runner, fake_subprocess):
    fake_subprocess.responses["powershell"] = subprocess.CalledProcessError(1, ["powershell"], "", "denied")
    with pytest.raises(subprocess.CalledProcessError):
        runner.run(["powershell"])


# cp850 bytes for "Datenträger ausgewählt. Grün", not valid UTF-8
OEM_TRANSCRIPT = b"Datentr\x84ger ausgew\x84hlt. Gr\x81n\r\n"


def test_output_in_oem_code_page_does_not_crash(runner):
    code = f"import sys; sys.stdout.buffer.write({OEM_TRANSCRIPT!r})"
    result = runner.run([sys.executable, "-c", code], check=False, input="exit\n")
    assert result.returncode == 0
    assert result.stdout.startswith("Datentr")
    assert "ger ausgew" in result.stdout


def test_decoding_defaults_are_passed(runner, fake_subprocess):
    runner.run(["diskpart"], check=False, input="exit\n")
    _, kwargs = fake_subprocess.calls[0]
    assert kwargs["errors"] == "replace"
    assert kwargs["encoding"] == CONSOLE_ENCODING


def test_decoding_defaults_can_be_overridden(runner, fake_subprocess):
    runner.run(["powershell"], encoding="utf-8", errors="strict")
    _, kwargs = fake_subprocess.calls[0]
    assert (kwargs["encoding"], kwargs["errors"]) == ("utf-8", "strict")
