"""Tests for diskpart script construction and dispatch."""
import subprocess

import pytest

from usbreset.core.diskpart import build_script, diskpart_succeeded, print_report, reset_disk, run_diskpart
from usbreset.core.exceptions import DiskpartError
from usbreset.core.request import ResetRequest, WipeMode


def test_full_script():
    script = build_script(ResetRequest(disk=3, label="MYDRIVE", mode=WipeMode.FULL))
    assert script == [
        "select disk 3",
        "attributes disk clear readonly",
        "clean all",
        "convert mbr",
        "create partition primary",
        'format fs=fat32 quick label="MYDRIVE"',
        "assign",
        "exit",
    ]


@pytest.mark.parametrize("mode,clean", [(WipeMode.FAST, "clean"), (WipeMode.FULL, "clean all")])
def test_exactly_one_clean_line(mode, clean):
    script = build_script(ResetRequest(disk=1, label="USB", mode=mode))
    clean_lines = [line for line in script if line.startswith("clean")]
    assert clean_lines == [clean]
    assert script[2] == clean


def test_script_sent_as_one_block_on_stdin(runner, fake_subprocess):
    script = build_script(ResetRequest(disk=1, label="USB", mode=WipeMode.FAST))
    run_diskpart(script, runner)

    calls = fake_subprocess.calls_to("diskpart")
    assert len(calls) == 1
    cmd, kwargs = calls[0]
    assert cmd == ["diskpart"]
    assert kwargs["input"] == "\n".join(script) + "\n"
    assert kwargs["check"] is False


def test_missing_diskpart_is_reported(runner, fake_subprocess):
    fake_subprocess.responses["diskpart"] = FileNotFoundError(2, "No such file", "diskpart")
    with pytest.raises(DiskpartError, match="Could not run diskpart"):
        run_diskpart(["exit"], runner)


@pytest.mark.parametrize("returncode,stdout,expected", [
    (0, "DiskPart succeeded.\n", True),
    (1, "DiskPart succeeded.\n", False),
    (0, "DiskPart has encountered an error: Access is denied.\n", False),
    (0, "Virtual Disk Service error:\nThe media is write protected.\n", False),
    (2147942405, "", False),
])
def test_diskpart_succeeded(returncode, stdout, expected):
    result = subprocess.CompletedProcess(["diskpart"], returncode, stdout, "")
    assert diskpart_succeeded(result) is expected


def test_reset_disk_surfaces_output(runner, fake_subprocess, capsys):
    fake_subprocess.responses["diskpart"] = subprocess.CompletedProcess(
        [], 0, stdout="DiskPart successfully formatted the volume.\n", stderr="")
    reset_disk(ResetRequest(disk=2, label="USB", mode=WipeMode.FAST), runner)
    assert "DiskPart successfully formatted the volume." in capsys.readouterr().out


def test_reset_disk_raises_on_failure(runner, fake_subprocess, capsys):
    fake_subprocess.responses["diskpart"] = subprocess.CompletedProcess(
        [], 0, stdout="Virtual Disk Service error:\nThere is no media in the device.\n", stderr="")
    with pytest.raises(DiskpartError, match="disk 2"):
        reset_disk(ResetRequest(disk=2, label="USB", mode=WipeMode.FULL), runner)
    out = capsys.readouterr().out
    assert "There is no media in the device." in out
    assert "DONE" not in out


def test_report_shows_mode_and_label(capsys):
    print_report(ResetRequest(disk=2, label="PHOTOS", mode=WipeMode.FULL), colored_output=False)
    out = capsys.readouterr().out
    assert "DONE" in out
    assert "Full" in out
    assert "PHOTOS" in out
