"""Unit tests for shell execution utilities."""

import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest
from syspkg.utils.shell import (
    CommandResult,
    SubprocessRunner,
    command_exists,
    run_command,
    run_interactive,
)


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success_on_zero(self) -> None:
        """A zero exit code is a success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True

    def test_failure_on_nonzero(self) -> None:
        """A non-zero exit code is a failure."""
        assert CommandResult(stdout="", stderr="boom", returncode=100).success is False


class TestRunCommand:
    """Tests for run_command function."""

    @patch("syspkg.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns captured stdout, stderr and exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["apt", "update"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert mock_run.call_args.kwargs["capture_output"] is True

    @patch("syspkg.utils.shell.subprocess.run")
    def test_passes_env_unchanged(self, mock_run: MagicMock) -> None:
        """run_command hands the given environment to the child as-is."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)
        env = {"PATH": "/usr/bin", "LC_ALL": "C"}

        run_command(["apt", "list"], env=env)

        assert mock_run.call_args.kwargs["env"] == env

    @patch("syspkg.utils.shell.subprocess.run")
    def test_default_timeout(self, mock_run: MagicMock) -> None:
        """run_command applies a timeout unless told otherwise."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["true"])

        assert mock_run.call_args.kwargs["timeout"] == 60.0

    @patch("syspkg.utils.shell.subprocess.run")
    def test_decodes_leniently(self, mock_run: MagicMock) -> None:
        """run_command asks for UTF-8 with replacement of bad bytes."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["apt", "search", "x"])

        assert mock_run.call_args.kwargs["encoding"] == "utf-8"
        assert mock_run.call_args.kwargs["errors"] == "replace"

    def test_invalid_utf8_is_replaced(self) -> None:
        """Non-UTF-8 bytes from the child do not raise."""
        script = "import sys; sys.stdout.buffer.write(b'Package: caf\\xe9\\n')"

        result = run_command([sys.executable, "-c", script])

        assert result.success
        assert result.stdout == "Package: caf\ufffd\n"

    def test_raises_file_not_found(self) -> None:
        """run_command raises FileNotFoundError for a missing binary."""
        with pytest.raises(FileNotFoundError):
            run_command(["nonexistent-command-xyz-12345"])


class TestRunInteractive:
    """Tests for run_interactive function."""

    @patch("syspkg.utils.shell.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock) -> None:
        """run_interactive returns the subprocess exit code."""
        mock_run.return_value = MagicMock(returncode=1)

        assert run_interactive(["false"]) == 1

    @patch("syspkg.utils.shell.subprocess.run")
    def test_does_not_capture_output(self, mock_run: MagicMock) -> None:
        """run_interactive does not capture stdout/stderr (inherits TTY)."""
        mock_run.return_value = MagicMock(returncode=0)

        run_interactive(["apt", "install", "htop"])

        call_kwargs = mock_run.call_args.kwargs
        assert "capture_output" not in call_kwargs
        assert "stdout" not in call_kwargs
        assert "stderr" not in call_kwargs

    @patch("syspkg.utils.shell.subprocess.run")
    def test_inherits_env(self, mock_run: MagicMock) -> None:
        """run_interactive leaves the caller's environment untouched."""
        mock_run.return_value = MagicMock(returncode=0)

        run_interactive(["apt", "upgrade"])

        assert "env" not in mock_run.call_args.kwargs

    def test_raises_file_not_found(self) -> None:
        """run_interactive raises FileNotFoundError for a missing binary."""
        with pytest.raises(FileNotFoundError):
            run_interactive(["nonexistent-command-xyz-12345"])


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("syspkg.utils.shell.shutil.which", return_value="/usr/bin/apt")
    def test_found(self, mock_which: MagicMock) -> None:
        """command_exists is True when which finds the binary."""
        assert command_exists("apt") is True
        mock_which.assert_called_once_with("apt")

    @patch("syspkg.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        """command_exists is False when which finds nothing."""
        assert command_exists("apt") is False


class TestSubprocessRunner:
    """Tests for SubprocessRunner."""

    @patch("syspkg.utils.shell.run_command")
    def test_run_has_no_timeout(self, mock_run_command: MagicMock) -> None:
        """Captured runs wait for the command to finish."""
        expected = CommandResult(stdout="ok", stderr="", returncode=0)
        mock_run_command.return_value = expected

        result = SubprocessRunner().run(["apt", "update"], env={"LC_ALL": "C"})

        assert result is expected
        mock_run_command.assert_called_once_with(
            ["apt", "update"], timeout=None, env={"LC_ALL": "C"}
        )

    @patch("syspkg.utils.shell.run_interactive", return_value=7)
    def test_run_interactive_delegates(self, mock_interactive: MagicMock) -> None:
        """Interactive runs go through run_interactive."""
        assert SubprocessRunner().run_interactive(["apt", "upgrade"]) == 7
        mock_interactive.assert_called_once_with(["apt", "upgrade"])

    @patch("syspkg.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        """subprocess errors are not swallowed."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="apt", timeout=1)

        with pytest.raises(subprocess.TimeoutExpired):
            SubprocessRunner().run(["apt"])
