"""Subprocess helpers shared by agents, providers and git.

Contains:
- ShellError: Raised when a command cannot be run or exits non-zero
- run_command: Run a command and return its stdout
- is_command_available: Probe PATH with ``command -v``
"""

import logging
import shlex
import subprocess
from typing import Optional, Union

logger = logging.getLogger(__name__)


class ShellError(Exception):
    """Raised when a shell command fails.

    ``code`` is "ENOENT" when the executable is missing, "ETIMEDOUT" when
    the command timed out, or the process exit code otherwise.
    """

    def __init__(self, message: str, code: Union[str, int], stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.code = code
        self.stdout = stdout
        self.stderr = stderr


def run_command(
    args: list[str],
    cwd: Optional[str] = None,
    input_text: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> str:
    """Run a command and return its stdout.

    Args:
        args: Executable followed by its arguments.
        cwd: Working directory for the command.
        input_text: Text written to the command's stdin.
        timeout_ms: Kill the command after this many milliseconds.

    Returns:
        The command's stdout.

    Raises:
        ShellError: If the command is missing, times out or exits non-zero.
    """
    command_line = shlex.join(args)
    logger.debug("Running %s in %s", command_line, cwd or ".")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            input=input_text,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout_ms / 1000 if timeout_ms else None,
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        raise ShellError(
            f"Command failed with exit code {e.returncode}: {args[0]}",
            code=e.returncode,
            stdout=e.stdout or "",
            stderr=e.stderr or "",
        )
    except subprocess.TimeoutExpired:
        raise ShellError(f"Command timed out after {timeout_ms}ms: {args[0]}", code="ETIMEDOUT")
    except FileNotFoundError:
        raise ShellError(f"spawn {args[0]} ENOENT: command not found", code="ENOENT")


def is_command_available(command: str, cwd: Optional[str] = None) -> bool:
    """Check whether ``command`` resolves on PATH."""
    try:
        output = run_command(["sh", "-c", f"command -v {shlex.quote(command)}"], cwd=cwd)
    except ShellError:
        return False
    return bool(output.strip())
