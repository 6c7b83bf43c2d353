"""
Console and logging setup.

This module configures log output and prepares the console for the
colored warnings shown before a reset.
"""
import logging

import colorama


def setup_logging(debug: bool = False, colored_output: bool = True) -> None:
    """
    Configure logging and the console for the application.

    Args:
        debug: Whether to enable debug logging, including the full diskpart script
        colored_output: Whether colored output will be written to the console
    """
    if colored_output:
        # Windows consoles only render ANSI codes once VT processing is on
        colorama.just_fix_windows_console()

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    logging.getLogger('usbreset').setLevel(level)
