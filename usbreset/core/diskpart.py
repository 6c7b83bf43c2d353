"""
Diskpart scripting module.

This module builds the diskpart command sequence for a reset request,
feeds it to diskpart on standard input and judges the outcome.
"""
import logging
import subprocess

from usbreset.utils.command import CommandRunner
from usbreset.utils.format import TermColors, colorize
from usbreset.utils.types import DiskpartScript
from usbreset.core.exceptions import DiskpartError
from usbreset.core.request import ResetRequest

logger = logging.getLogger('usbreset')

DISKPART = "diskpart"

# diskpart can exit 0 after a failed command, so its transcript is checked too
FAILURE_MARKERS = (
    "DiskPart has encountered an error",
    "Virtual Disk Service error",
    "DiskPart failed",
)


def build_script(request: ResetRequest) -> DiskpartScript:
    """
    Build the ordered diskpart commands for a request.

    Args:
        request: Validated reset request

    Returns:
        List of diskpart commands, one per line
    """
    return [
        f"select disk {request.disk}",
        "attributes disk clear readonly",
        request.mode.clean_command,
        "convert mbr",
        "create partition primary",
        f'format fs=fat32 quick label="{request.label}"',
        "assign",
        "exit",
    ]


def run_diskpart(script: DiskpartScript, cmd_runner: CommandRunner) -> subprocess.CompletedProcess:
    """
    Send the script to diskpart as one block on standard input and wait for it to exit.

    Args:
        script: diskpart commands
        cmd_runner: CommandRunner instance for executing commands

    Returns:
        CompletedProcess holding the exit status and transcript

    Raises:
        DiskpartError: If diskpart cannot be started
    """
    text = "\n".join(script) + "\n"
    logger.debug("diskpart script:\n" + text)

    try:
        return cmd_runner.run([DISKPART], check=False, input=text)
    except OSError as e:
        raise DiskpartError(f"Could not run {DISKPART}: {e}")


def diskpart_succeeded(result: subprocess.CompletedProcess) -> bool:
    """Return True when diskpart exited cleanly without an error banner."""
    if result.returncode != 0:
        return False
    output = f"{result.stdout or ''}\n{result.stderr or ''}"
    return not any(marker in output for marker in FAILURE_MARKERS)


def reset_disk(request: ResetRequest, cmd_runner: CommandRunner) -> subprocess.CompletedProcess:
    """
    Run the reset for a confirmed request and surface diskpart's output.

    Args:
        request: Validated and confirmed reset request
        cmd_runner: CommandRunner instance for executing commands

    Returns:
        CompletedProcess of the successful diskpart run

    Raises:
        DiskpartError: If diskpart cannot be run or reports a failure
    """
    script = build_script(request)

    logger.info(colorize(f"Resetting disk {request.disk} ({request.mode.value} wipe)",
                         TermColors.INFO, cmd_runner.colored_output))
    for line in script:
        logger.info(f"  {line}")

    result = run_diskpart(script, cmd_runner)

    if result.stdout:
        print(result.stdout, end="" if result.stdout.endswith("\n") else "\n")
    if result.stderr:
        print(result.stderr, end="" if result.stderr.endswith("\n") else "\n")

    if not diskpart_succeeded(result):
        raise DiskpartError(
            f"diskpart failed on disk {request.disk} (exit status {result.returncode}); "
            "see its output above. The disk may be partially erased."
        )

    return result


def print_report(request: ResetRequest, colored_output: bool = True) -> None:
    """Print the post-run summary."""
    print(colorize("DONE", TermColors.SUCCESS + TermColors.BOLD, colored_output))
    print(f"Mode:  {request.mode.value}")
    print(f"Label: {request.label}")
