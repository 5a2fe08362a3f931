"""Privileged shell command execution.

This is an escape hatch exposed to the agent as ``run_shell_command``: the
command string is handed to the host shell unmodified.  Only an empty
command is rejected.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from newsbrief.exceptions import ToolError

logger = logging.getLogger(__name__)

NO_OUTPUT = "Command completed with no output"


@dataclass(frozen=True)
class CommandOutput:
    """Captured output of a finished command."""

    command: str
    stdout: str
    stderr: str
    returncode: int

    @property
    def text(self) -> str:
        """stdout if non-empty, else stderr, else :data:`NO_OUTPUT`."""
        return self.stdout or self.stderr or NO_OUTPUT


def run_command(
    command: str,
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandOutput:
    """Run ``command`` through the shell and capture its output.

    Raises:
        ToolError: If ``command`` is empty.
        subprocess.CalledProcessError: On a non-zero exit status.
        subprocess.TimeoutExpired: If the command outlives ``timeout``.
        OSError: If the shell cannot be spawned.
    """
    if not isinstance(command, str) or not command.strip():
        raise ToolError("run_shell_command requires a non-empty command")

    logger.warning("Running shell command: %s", command)
    completed = subprocess.run(
        command,
        shell=True,
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=cwd,
        check=True,
    )
    return CommandOutput(
        command=command,
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )
