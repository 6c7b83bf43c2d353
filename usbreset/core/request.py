"""
Reset request module.

This module holds the parameters of a single reset run and the rules used
to validate them, whether they come from the command line or a prompt.
"""
import logging
from enum import Enum
from typing import NamedTuple, Optional

from usbreset.core.exceptions import InvalidDiskError, InvalidLabelError, InvalidModeError

logger = logging.getLogger('usbreset')

# Constants
DEFAULT_LABEL = "USB"
MAX_LABEL_LENGTH = 11  # FAT32 volume label limit

# Characters FAT does not accept in a volume label
FORBIDDEN_LABEL_CHARS = set('"*/:<>?\\|+,.;=[]')


class WipeMode(Enum):
    """How thoroughly the disk is erased before partitioning"""
    FAST = "Fast"  # Partition table only
    FULL = "Full"  # Every sector overwritten

    @property
    def clean_command(self) -> str:
        return "clean all" if self is WipeMode.FULL else "clean"


class ResetRequest(NamedTuple):
    """Parameters of one reset run"""
    disk: int
    label: str
    mode: WipeMode


def parse_disk(value: Optional[str]) -> int:
    """
    Parse a disk number.

    Args:
        value: Disk number as typed by the operator

    Returns:
        Disk number as a non-negative integer

    Raises:
        InvalidDiskError: If the value is not a non-negative integer
    """
    text = (value or "").strip()
    # int() would also take "+3", "1_0" and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        raise InvalidDiskError(f"Invalid disk number: {value!r} (expected a non-negative integer)")
    return int(text)


def parse_mode(value: Optional[str]) -> WipeMode:
    """
    Parse a wipe mode, ignoring case and surrounding whitespace.

    Raises:
        InvalidModeError: If the value is neither Fast nor Full
    """
    text = (value or "").strip().lower()
    for mode in WipeMode:
        if mode.value.lower() == text:
            return mode
    raise InvalidModeError(f"Invalid mode: {value!r} (expected Fast or Full)")


def normalize_label(value: Optional[str]) -> str:
    """
    Turn operator input into a usable FAT32 volume label.

    Blank input falls back to DEFAULT_LABEL and long input is truncated
    to MAX_LABEL_LENGTH characters.

    Args:
        value: Label as typed by the operator

    Returns:
        A label of 1 to MAX_LABEL_LENGTH characters

    Raises:
        InvalidLabelError: If the label holds characters FAT forbids
    """
    label = (value or "").strip()
    if not label:
        return DEFAULT_LABEL

    bad = sorted({c for c in label if c in FORBIDDEN_LABEL_CHARS or not c.isprintable()})
    if bad:
        raise InvalidLabelError(
            f"Invalid label: {value!r} (characters not allowed on FAT32: {' '.join(repr(c) for c in bad)})"
        )

    if len(label) > MAX_LABEL_LENGTH:
        truncated = label[:MAX_LABEL_LENGTH].rstrip()
        logger.warning(f"Label {label!r} is longer than {MAX_LABEL_LENGTH} characters, using {truncated!r}")
        label = truncated

    return label
