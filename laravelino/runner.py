"""
External command capability.

The core never shells out directly. Anything that needs an external process
goes through a CommandRunner, so tests can substitute an in-memory fake.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from laravelino.config import OPERATION_TIMEOUT

logger = logging.getLogger("laravelino")

EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished external command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner(ABC):
    """Abstract interface for running external commands."""

    @abstractmethod
    def run(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        """
        Run a command to completion.

        Args:
            command: Executable name or path.
            args: Arguments passed to the executable.

        Returns:
            CommandResult with the exit code and captured output. Failures are
            reported through the exit code, never raised.
        """
        ...


class SubprocessRunner(CommandRunner):
    """Runs commands with subprocess, capturing text output."""

    def __init__(self, timeout: Optional[int] = OPERATION_TIMEOUT) -> None:
        self.timeout = timeout

    def run(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        cmd = [command, *args]
        logger.debug(f"Running command: {' '.join(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            return CommandResult(EXIT_NOT_FOUND, "", str(e))
        except subprocess.TimeoutExpired:
            return CommandResult(EXIT_TIMEOUT, "", f"Command timed out after {self.timeout} seconds")
        if proc.returncode != 0:
            logger.debug(f"Command exited with {proc.returncode}: {proc.stderr.strip()}")
        return CommandResult(proc.returncode, proc.stdout, proc.stderr)
