"""Shell execution utilities.

Provides safe subprocess execution with proper error handling, and the
CommandRunner interface package managers use to launch their tools.
"""

import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Output is decoded as UTF-8; undecodable bytes become U+FFFD so a
    stray Latin-1 description never aborts the run.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.
        env: Complete environment for the command. If None, inherits ours.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        timeout=timeout,
        env=env,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def run_interactive(args: list[str]) -> int:
    """Execute a command interactively, inheriting the terminal.

    Unlike run_command(), this does NOT capture stdout/stderr,
    allowing the subprocess to interact with the user's terminal
    directly (e.g. to answer a configuration prompt). The caller's
    environment is inherited unchanged.

    Args:
        args: Command and arguments to execute.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If command cannot be executed.
    """
    result = subprocess.run(args, check=False)
    return result.returncode


class CommandRunner(Protocol):
    """Launches external commands on behalf of a package manager.

    Tests substitute a fake runner that returns canned output.
    """

    def run(self, args: list[str], *, env: dict[str, str] | None = None) -> CommandResult:
        """Run a command to completion, capturing its output."""
        ...

    def run_interactive(self, args: list[str]) -> int:
        """Run a command attached to the caller's terminal, returning its exit code."""
        ...


class SubprocessRunner:
    """CommandRunner backed by the subprocess module.

    Commands run to completion; there is no timeout.
    """

    def run(self, args: list[str], *, env: dict[str, str] | None = None) -> CommandResult:
        return run_command(args, timeout=None, env=env)

    def run_interactive(self, args: list[str]) -> int:
        return run_interactive(args)
