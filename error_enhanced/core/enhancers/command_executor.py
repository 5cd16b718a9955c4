"""Synchronous shell command execution used for dependency discovery."""

from __future__ import annotations

import shlex
import subprocess
from typing import Protocol, runtime_checkable

from error_enhanced.core.exceptions import CommandExecutionError
from error_enhanced.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


@runtime_checkable
class CommandExecutor(Protocol):
    """Runs a command line and returns its standard output."""

    def execute(self, command: str) -> str: ...


class SubprocessCommandExecutor:
    """:class:`CommandExecutor` backed by :func:`subprocess.run`."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def execute(self, command: str) -> str:
        """Run ``command`` and return its stdout.

        Raises:
            CommandExecutionError: Empty command, missing binary, timeout or
                non-zero exit status (the message is the command's stderr).
        """
        if not isinstance(command, str) or not command.strip():
            raise CommandExecutionError("Invalid command: expected a non-empty string", command=repr(command))

        args = shlex.split(command)
        logger.debug("Executing command: {command}", command=command)
        try:
            result = subprocess.run(args, capture_output=True, text=True, timeout=self.timeout, check=False)
        except FileNotFoundError as e:
            raise CommandExecutionError(f"Command not found: {args[0]}", command=command) from e
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(f"Command timed out after {self.timeout}s", command=command) from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise CommandExecutionError(
                stderr or f"Command exited with status {result.returncode}",
                command=command,
                exit_code=result.returncode,
                stderr=stderr,
            )
        return result.stdout
