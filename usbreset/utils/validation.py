"""
Validation utilities.

This module provides functions for validating prerequisites.
"""
import ctypes
import os
import shutil
import logging

from usbreset.utils.command import CommandRunner

logger = logging.getLogger('usbreset')

REQUIRED_TOOLS = ["diskpart"]

# Only used for the advisory disk listing
RECOMMENDED_TOOLS = ["powershell"]


def is_admin() -> bool:
    """
    Check whether the process runs with administrator rights.

    Returns:
        True when running elevated (Windows) or as root (POSIX)
    """
    if hasattr(os, "geteuid"):
        return os.geteuid() == 0
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def check_prerequisites(cmd_runner: CommandRunner) -> None:
    """
    Check for required tools and permissions.

    Args:
        cmd_runner: CommandRunner instance for executing commands

    Raises:
        RuntimeError: If prerequisites are not met
    """
    if cmd_runner.simulating:
        logger.info("Checking for required tools (simulated)")
        for tool in REQUIRED_TOOLS + RECOMMENDED_TOOLS:
            logger.info(f"Tool '{tool}' would be checked")
        return

    missing_tools = [tool for tool in REQUIRED_TOOLS if not shutil.which(tool)]
    if missing_tools:
        raise RuntimeError(
            f"Missing required tools: {', '.join(missing_tools)}\n"
            "diskpart ships with Windows; this tool cannot run on other platforms"
        )

    if not is_admin():
        raise RuntimeError("This script must be run from an elevated (administrator) prompt")

    missing_optional = [tool for tool in RECOMMENDED_TOOLS if not shutil.which(tool)]
    if missing_optional:
        logger.warning(
            f"Missing optional tools: {', '.join(missing_optional)}\n"
            "The disk list will not be shown, but the reset will still work."
        )
