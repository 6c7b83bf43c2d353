"""
Interactive prompting module.

This module asks the operator for whatever the command line left out and
guards the destructive step behind an explicit acknowledgment.
"""
import logging
from typing import Callable, Optional

from usbreset.core.request import (
    DEFAULT_LABEL, MAX_LABEL_LENGTH, ResetRequest, WipeMode,
    normalize_label, parse_disk, parse_mode
)
from usbreset.utils.format import TermColors, colorize

logger = logging.getLogger('usbreset')

InputFunc = Callable[[str], str]

MODE_WARNINGS = {
    WipeMode.FULL: (
        "FULL wipe: every sector of the disk will be overwritten with zeros.",
        "This is slow (hours on large drives) and the data cannot be recovered.",
    ),
    WipeMode.FAST: (
        "FAST wipe: only the partition table will be removed.",
        "This is quick, but the old data may still be recoverable with forensic tools.",
    ),
}


def acquire_request(
    disk: Optional[str],
    label: Optional[str],
    mode: Optional[str],
    input_func: Optional[InputFunc] = None
) -> ResetRequest:
    """
    Build a reset request, prompting for every value not given as an argument.

    Prompts are issued in the order disk, mode, label. Each value is
    validated as soon as it is known so bad input fails before anything
    else is asked.

    Args:
        disk: Disk number from the command line, or None
        label: Volume label from the command line, or None
        mode: Wipe mode from the command line, or None
        input_func: Function used to read a line from the operator

    Returns:
        Validated ResetRequest

    Raises:
        InvalidDiskError, InvalidModeError, InvalidLabelError: On bad input
    """
    if input_func is None:
        input_func = input

    if disk is None:
        disk = input_func("Disk number to reset: ")
    disk_number = parse_disk(disk)

    if mode is None:
        mode = input_func("Wipe mode [Fast/Full]: ")
    wipe_mode = parse_mode(mode)

    if label is None:
        label = input_func(f"Volume label (max {MAX_LABEL_LENGTH} chars, blank for {DEFAULT_LABEL}): ")
    volume_label = normalize_label(label)

    return ResetRequest(disk=disk_number, label=volume_label, mode=wipe_mode)


def render_warning(request: ResetRequest, colored_output: bool = True) -> str:
    """Return the warning shown before the destructive step."""
    color = TermColors.ERROR if request.mode is WipeMode.FULL else TermColors.WARNING
    lines = [
        colorize("=" * 60, color, colored_output),
        colorize(f"WARNING: ALL DATA ON DISK {request.disk} WILL BE DESTROYED", color + TermColors.BOLD,
                 colored_output),
    ]
    lines.extend(colorize(line, color, colored_output) for line in MODE_WARNINGS[request.mode])
    lines.append(f"The disk will be reformatted as a single FAT32 partition labelled {request.label!r}.")
    lines.append(colorize("=" * 60, color, colored_output))
    return "\n".join(lines)


def confirm_reset(
    request: ResetRequest,
    colored_output: bool = True,
    input_func: Optional[InputFunc] = None
) -> bool:
    """
    Show the warning and block until the operator acknowledges it.

    Args:
        request: The request about to be executed
        colored_output: Whether to use colored output in terminal
        input_func: Function used to read a line from the operator

    Returns:
        True once acknowledged, False if input ended before acknowledgment

    Raises:
        KeyboardInterrupt: If the operator interrupts at the prompt
    """
    if input_func is None:
        input_func = input

    print(render_warning(request, colored_output))
    try:
        input_func("Press Enter to continue, or Ctrl+C to abort... ")
    except EOFError:
        return False
    return True
