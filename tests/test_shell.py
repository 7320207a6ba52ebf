"""Tests for commitment.shell module."""

import subprocess
from unittest.mock import MagicMock

import pytest

from commitment.shell import ShellError, is_command_available, run_command


class TestRunCommand:
    """Tests for run_command function."""

    def test_returns_stdout(self, mocker):
        """Test successful command returns stdout."""
        mock_run = mocker.patch("subprocess.run")
        mock_run.return_value = MagicMock(stdout="hello\n")

        assert run_command(["echo", "hello"]) == "hello\n"

    def test_passes_input_and_timeout(self, mocker):
        """Test stdin text and timeout in seconds are forwarded."""
        mock_run = mocker.patch("subprocess.run")
        mock_run.return_value = MagicMock(stdout="")

        run_command(["claude", "--print"], cwd="/repo", input_text="prompt", timeout_ms=1500)

        kwargs = mock_run.call_args.kwargs
        assert kwargs["input"] == "prompt"
        assert kwargs["timeout"] == 1.5
        assert kwargs["cwd"] == "/repo"
        assert kwargs["check"] is True

    def test_non_zero_exit(self, mocker):
        """Test non-zero exit raises ShellError with the exit code."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.CalledProcessError(2, ["x"], output="out", stderr="bad"),
        )

        with pytest.raises(ShellError) as exc_info:
            run_command(["x"])

        assert exc_info.value.code == 2
        assert exc_info.value.stderr == "bad"
        assert exc_info.value.stdout == "out"

    def test_timeout(self, mocker):
        """Test timeout maps to ETIMEDOUT."""
        mocker.patch("subprocess.run", side_effect=subprocess.TimeoutExpired(["x"], 1))

        with pytest.raises(ShellError) as exc_info:
            run_command(["x"], timeout_ms=1000)

        assert exc_info.value.code == "ETIMEDOUT"

    def test_missing_executable(self, mocker):
        """Test a missing executable maps to ENOENT."""
        mocker.patch("subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(ShellError) as exc_info:
            run_command(["nope"])

        assert exc_info.value.code == "ENOENT"


class TestIsCommandAvailable:
    """Tests for is_command_available function."""

    def test_available(self, mocker):
        """Test a resolved path means available."""
        mock_run = mocker.patch("subprocess.run")
        mock_run.return_value = MagicMock(stdout="/usr/bin/claude\n")

        assert is_command_available("claude") is True
        assert mock_run.call_args.args[0] == ["sh", "-c", "command -v claude"]

    def test_empty_output(self, mocker):
        """Test empty output means not available."""
        mocker.patch("subprocess.run").return_value = MagicMock(stdout="")

        assert is_command_available("claude") is False

    def test_lookup_failure(self, mocker):
        """Test a failing probe means not available."""
        mocker.patch("subprocess.run", side_effect=subprocess.CalledProcessError(1, ["sh"]))

        assert is_command_available("claude") is False
