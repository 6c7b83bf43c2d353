"""
Disk information module.

This module lists the host's disks for the operator. The listing is
advisory: nothing here validates the disk number that is finally chosen.
"""
import json
import logging
import subprocess
from typing import Any, Dict, List

from usbreset.utils.command import CommandRunner
from usbreset.utils.format import TermColors, bytes_to_human_readable, colorize
from usbreset.utils.types import DiskEntry
from usbreset.core.exceptions import DiskEnumerationError

logger = logging.getLogger('usbreset')

GET_DISK_COMMAND = [
    "powershell", "-NoProfile", "-NonInteractive", "-Command",
    "Get-Disk | Select-Object Number, FriendlyName, Size, BusType | ConvertTo-Json"
]


def _to_entry(raw: Dict[str, Any]) -> DiskEntry:
    # BusType comes back as an enum number on older PowerShell versions
    return DiskEntry(
        number=int(raw.get("Number", -1)),
        friendly_name=str(raw.get("FriendlyName") or "Unknown"),
        size_bytes=int(raw.get("Size") or 0),
        bus_type=str(raw.get("BusType") if raw.get("BusType") is not None else "Unknown")
    )


def parse_disk_list(output: str) -> List[DiskEntry]:
    """
    Parse the JSON emitted by Get-Disk | ConvertTo-Json.

    A single disk comes back as an object, several as an array.

    Args:
        output: Standard output of the PowerShell call

    Returns:
        Disk entries sorted by disk number

    Raises:
        DiskEnumerationError: If the output is not the expected JSON
    """
    if not output.strip():
        return []

    try:
        data = json.loads(output)
    except ValueError as e:
        raise DiskEnumerationError(f"Could not parse disk list: {e}")

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise DiskEnumerationError(f"Unexpected disk list format: {type(data).__name__}")

    try:
        entries = [_to_entry(item) for item in data]
    except (AttributeError, TypeError, ValueError) as e:
        raise DiskEnumerationError(f"Unexpected disk entry in disk list: {e}")

    return sorted(entries, key=lambda entry: entry["number"])


def list_disks(cmd_runner: CommandRunner) -> List[DiskEntry]:
    """
    Query the host for its disks.

    Args:
        cmd_runner: CommandRunner instance for executing commands

    Returns:
        Disk entries sorted by disk number

    Raises:
        DiskEnumerationError: If the disks cannot be listed
    """
    try:
        result = cmd_runner.run(GET_DISK_COMMAND)
    except (OSError, UnicodeDecodeError, subprocess.CalledProcessError) as e:
        raise DiskEnumerationError(f"Could not list disks: {e}")

    return parse_disk_list(result.stdout)


def format_disk_table(disks: List[DiskEntry]) -> str:
    """Render the disk entries as a fixed-width table."""
    lines = [f"{'Disk':>4}  {'Name':<32}  {'Size':>12}  {'Bus':<8}"]
    lines.append("-" * len(lines[0]))
    for disk in disks:
        lines.append(
            f"{disk['number']:>4}  {disk['friendly_name'][:32]:<32}  "
            f"{bytes_to_human_readable(disk['size_bytes']):>12}  {disk['bus_type']:<8}"
        )
    return "\n".join(lines)


def show_disks(cmd_runner: CommandRunner) -> List[DiskEntry]:
    """
    Print the disk list for the operator's reference.

    Failures are logged and swallowed since the listing is informational.

    Args:
        cmd_runner: CommandRunner instance for executing commands

    Returns:
        Disk entries shown, empty if listing failed
    """
    try:
        disks = list_disks(cmd_runner)
    except DiskEnumerationError as e:
        logger.warning(colorize(f"{e}; continuing without a disk list",
                                TermColors.WARNING, cmd_runner.colored_output))
        return []

    if not disks:
        logger.warning("No disks reported by the host")
        return []

    print(colorize("Available disks:", TermColors.INFO, cmd_runner.colored_output))
    print(format_disk_table(disks))
    print()
    return disks
