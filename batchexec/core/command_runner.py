"""Synchronous shell command runner.

Runs one command line through the shell and captures its standard output,
the way a shell backtick does. Standard error is left attached to the
caller's terminal.
"""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Exit status reported when the shell itself could not be started.
SPAWN_FAILED_EXIT_CODE = 127


@dataclass
class CommandResult:
    """Result of a single command execution."""

    command: str
    exit_code: Optional[int]
    stdout: str
    timed_out: bool = False
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        """Command succeeded if it completed with exit code 0."""
        return self.exit_code == 0 and not self.timed_out


class CommandRunner:
    """Execute shell commands and capture their stdout.

    No timeout is applied unless one is given: a hung child blocks the
    caller until it exits.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cwd: Optional[Path] = None,
        env: Optional[dict[str, str]] = None,
    ):
        self.timeout = timeout
        self.cwd = cwd
        self.env = env

    def run(self, command: str) -> CommandResult:
        """
        Run a shell command once.

        Args:
            command: Full command line, passed to ``/bin/sh -c``

        Returns:
            CommandResult with exit code and captured stdout
        """
        start = time.monotonic()

        try:
            proc = subprocess.run(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
                cwd=self.cwd,
                env=self.env,
            )
        except subprocess.TimeoutExpired as e:
            duration = time.monotonic() - start
            logger.warning(
                f"Command timed out after {self.timeout}s",
                extra={"command": command, "timeout": self.timeout},
            )
            stdout = e.stdout or ""
            if isinstance(stdout, bytes):
                stdout = stdout.decode(errors="replace")
            return CommandResult(
                command=command,
                exit_code=None,
                stdout=stdout,
                timed_out=True,
                duration_seconds=duration,
            )
        except OSError as e:
            duration = time.monotonic() - start
            logger.error(
                f"Command could not be started: {e}",
                exc_info=True,
                extra={"command": command},
            )
            return CommandResult(
                command=command,
                exit_code=SPAWN_FAILED_EXIT_CODE,
                stdout="",
                duration_seconds=duration,
            )

        duration = time.monotonic() - start
        logger.debug(
            "Command completed",
            extra={
                "command": command,
                "exit_code": proc.returncode,
                "duration": duration,
            },
        )

        return CommandResult(
            command=command,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            duration_seconds=duration,
        )
