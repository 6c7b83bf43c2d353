"""
Command execution utilities.

This module provides tools for executing external commands with simplified simulation support.
"""
import json
import logging
import os
import subprocess
import uuid
from enum import Enum
from typing import List

from usbreset.utils.format import TermColors, colorize

logger = logging.getLogger('usbreset')

# diskpart and console PowerShell write in the OEM code page
CONSOLE_ENCODING = "oem" if os.name == "nt" else None

# Disks reported by the simulated Get-Disk call
SIMULATED_DISKS = [
    {"Number": 0, "FriendlyName": "SIMULATED NVMe SYSTEM DISK", "Size": 512110190592, "BusType": "NVMe"},
    {"Number": 1, "FriendlyName": "SIMULATED USB FLASH DRIVE", "Size": 15518924800, "BusType": "USB"},
]


class SimulationMode(Enum):
    """Enumeration for simulation modes"""
    DISABLED = 0  # Normal operation
    SIMULATE = 1  # Simulate operations


class CommandRunner:
    """
    Class responsible for command execution with simulation support.
    Acts as a wrapper around subprocess.run with additional functionality.
    """
    def __init__(self, simulation_mode: SimulationMode, colored_output: bool = True):
        """
        Initialize the command runner.

        Args:
            simulation_mode: Simulation mode to operate in
            colored_output: Whether to use colored output in terminal
        """
        self.simulation_mode = simulation_mode
        self.colored_output = colored_output
        self.commands_run = []

        # Generate a unique simulation ID
        self.simulation_id = str(uuid.uuid4())[:8]

    @property
    def simulating(self) -> bool:
        return self.simulation_mode == SimulationMode.SIMULATE

    def run(self, cmd: List[str], check: bool = True, **kwargs) -> subprocess.CompletedProcess:
        """
        Run a command or simulate running it.

        Args:
            cmd: Command to run as list of strings
            check: Whether to check for non-zero return code
            **kwargs: Additional arguments to pass to subprocess.run

        Returns:
            CompletedProcess instance from subprocess.run

        Raises:
            subprocess.CalledProcessError: If check is set and the command fails
            FileNotFoundError: If the executable does not exist
        """
        cmd_str = ' '.join(cmd)
        logger.debug(f"Command requested: {cmd_str}")

        self.commands_run.append({
            "command": cmd.copy(),
            "input": kwargs.get("input"),
            "simulated": self.simulating
        })

        kwargs.setdefault("encoding", CONSOLE_ENCODING)
        kwargs.setdefault("errors", "replace")

        if self.simulating:
            sim_prefix = colorize(f"[SIM:{self.simulation_id}]", TermColors.SIM, self.colored_output)
            logger.info(f"{sim_prefix} Would execute: {cmd_str}")
            return self._simulate_command(cmd, **kwargs)

        try:
            return subprocess.run(
                cmd,
                check=check,
                text=True,
                capture_output=True,
                **kwargs
            )

        except subprocess.CalledProcessError as e:
            logger.error(colorize(f"Command failed: {cmd_str}", TermColors.ERROR, self.colored_output))
            logger.error(f"Return code: {e.returncode}")
            logger.error(f"Stdout: {e.stdout}")
            logger.error(f"Stderr: {e.stderr}")
            raise

    def _simulate_command(self, cmd: List[str], **kwargs) -> subprocess.CompletedProcess:
        """
        Generate simulated output for a command.

        Args:
            cmd: Command to simulate
            **kwargs: Additional arguments passed to the original command

        Returns:
            CompletedProcess with simulated output
        """
        result = subprocess.CompletedProcess(
            args=cmd,
            returncode=0,
            stdout="",
            stderr=""
        )

        cmd_name = os.path.basename(cmd[0]).lower() if cmd else ""
        if cmd_name.endswith(".exe"):
            cmd_name = cmd_name[:-4]

        if cmd_name == "powershell":
            result.stdout = json.dumps(SIMULATED_DISKS, indent=4) + "\n"
        elif cmd_name == "diskpart":
            return self._handle_diskpart_simulation(cmd, result, **kwargs)

        return result

    def _handle_diskpart_simulation(self, cmd: List[str], result: subprocess.CompletedProcess,
                                    **kwargs) -> subprocess.CompletedProcess:
        """Simulate a diskpart session transcript"""
        transcript = ["Microsoft DiskPart version 10.0.19041.3636", ""]
        for line in kwargs.get("input", "").splitlines():
            if not line.strip():
                continue
            transcript.append(f"DISKPART> {line}")
            transcript.append("")
            transcript.append("DiskPart succeeded.")
            transcript.append("")
        transcript.append("Leaving DiskPart...")
        result.stdout = "\n".join(transcript) + "\n"
        return result

    def get_simulation_report(self) -> str:
        """
        Generate a report of all simulated commands.

        Returns:
            Formatted string with report of simulated commands
        """
        if not self.simulating:
            return "Simulation mode is not active."

        report = []
        report.append("=" * 80)
        report.append(f"SIMULATION REPORT [ID: {self.simulation_id}]")
        report.append("=" * 80)
        report.append("")

        for i, cmd_record in enumerate(self.commands_run, 1):
            report.append(f"{i}. {' '.join(cmd_record['command'])}")
            if cmd_record["input"]:
                for line in cmd_record["input"].splitlines():
                    report.append(f"     < {line}")

        report.append("")
        report.append("-" * 80)
        report.append(f"Total commands simulated: {len(self.commands_run)}")
        report.append("=" * 80)

        return "\n".join(report)
