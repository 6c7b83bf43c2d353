"""
Command-line interface for usbreset.

This module handles argument parsing and orchestrates the reset flow:
list disks, gather parameters, confirm, run diskpart, report.
"""
import argparse
import logging
import sys
from typing import List, Optional

from usbreset.utils.logging import setup_logging
from usbreset.utils.command import CommandRunner, SimulationMode
from usbreset.utils.format import TermColors, colorize, terminal_rule
from usbreset.utils.validation import check_prerequisites
from usbreset.core.disk import show_disks
from usbreset.core.prompt import acquire_request, confirm_reset
from usbreset.core.diskpart import print_report, reset_disk
from usbreset.core.exceptions import DiskpartError, ResetError

logger = logging.getLogger('usbreset')


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:]

    Returns:
        Namespace containing parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Erase a removable drive and reformat it as a single FAT32 partition. "
                    "Any parameter left out is asked for interactively."
    )

    parser.add_argument(
        "disk",
        nargs="?",
        help="Disk number as shown in the disk list (e.g., 2)"
    )

    parser.add_argument(
        "label",
        nargs="?",
        help="Volume label, up to 11 characters (default: USB)"
    )

    parser.add_argument(
        "mode",
        nargs="?",
        help="Wipe mode: Fast (remove partitions) or Full (overwrite every sector)"
    )

    parser.add_argument(
        "-s", "--simulate",
        action="store_true",
        help="Go through the whole flow but only show the commands that would run"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def display_simulation_summary(cmd_runner: CommandRunner) -> None:
    """
    Display a summary of the simulation.

    Args:
        cmd_runner: CommandRunner instance for executing commands
    """
    if not cmd_runner.simulating:
        return

    stars = terminal_rule()
    enabled = cmd_runner.colored_output

    print(f"\n{colorize(stars, TermColors.SIM, enabled)}")
    print(colorize("SIMULATION COMPLETE - NO CHANGES WERE MADE", TermColors.SIM + TermColors.BOLD, enabled))
    print(f"{colorize(stars, TermColors.SIM, enabled)}\n")

    print(colorize("The following operations would have been performed:", TermColors.SUCCESS, enabled))
    print(cmd_runner.get_simulation_report())

    print(f"\n{colorize('To execute these operations for real, run without the --simulate flag.', TermColors.SIM, enabled)}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = None
    try:
        args = parse_arguments(argv)

        setup_logging(args.debug, not args.no_color)

        cmd_runner = CommandRunner(
            SimulationMode.SIMULATE if args.simulate else SimulationMode.DISABLED,
            not args.no_color
        )

        if args.simulate:
            logger.info("Running in simulation mode - NO CHANGES WILL BE MADE")

        try:
            check_prerequisites(cmd_runner)
        except RuntimeError as e:
            logger.error(str(e))
            return 1

        show_disks(cmd_runner)

        try:
            request = acquire_request(args.disk, args.label, args.mode)
        except ResetError as e:
            logger.error(str(e))
            return 1
        except EOFError:
            logger.error("Input ended before all parameters were given, nothing was changed")
            return 1

        if not confirm_reset(request, cmd_runner.colored_output):
            logger.error("No confirmation received, nothing was changed")
            return 1

        try:
            reset_disk(request, cmd_runner)
        except DiskpartError as e:
            logger.error(colorize(str(e), TermColors.ERROR, cmd_runner.colored_output))
            return 1

        print_report(request, cmd_runner.colored_output)
        display_simulation_summary(cmd_runner)
        return 0

    except KeyboardInterrupt:
        logger.error("Operation cancelled by user")
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args is not None and args.debug:
            import traceback
            traceback.print_exc()
        return 1


# For module import compatibility
if __name__ == "__main__":
    sys.exit(main())
