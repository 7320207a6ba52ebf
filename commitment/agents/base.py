"""Base class for AI coding assistant agents."""

import logging
import shlex
from abc import ABC, abstractmethod
from typing import Callable, Optional

from commitment.agents.cleaning import (
    clean_ai_response,
    is_cli_not_found_error,
    validate_conventional_commit,
)
from commitment.config import AGENT_TIMEOUT_MS, AgentName
from commitment.errors import AgentError
from commitment.shell import ShellError, run_command

logger = logging.getLogger(__name__)

Cleaner = Callable[[str], str]
Validator = Callable[[str], bool]


class BaseAgent(ABC):
    """Wraps one AI CLI tool that turns a prompt into a commit message.

    ``generate`` is a template method: availability check, then
    ``execute_command``, ``clean_response`` and ``validate_response`` in that
    order, with any failure propagated unchanged. Subclasses implement
    ``execute_command``; cleaning and validation can be replaced either by
    overriding the methods or by passing ``cleaner``/``validator``.
    """

    agent: AgentName
    name: str
    cli_command: str

    def __init__(
        self,
        cleaner: Optional[Cleaner] = None,
        validator: Optional[Validator] = None,
        timeout_ms: int = AGENT_TIMEOUT_MS,
    ):
        self._cleaner = cleaner or clean_ai_response
        self._validator = validator or validate_conventional_commit
        self.timeout_ms = timeout_ms

    def check_availability(self, cli_command: str, workdir: str) -> None:
        """Ensure ``cli_command`` is on PATH.

        Raises:
            AgentError: If the CLI is not installed.
            ShellError: If the probe fails for another reason.
        """
        try:
            output = run_command(["sh", "-c", f"command -v {shlex.quote(cli_command)}"], cwd=workdir)
        except ShellError as e:
            # `command -v` exits 1 with no output when nothing matches
            if is_cli_not_found_error(e) or (e.code == 1 and not e.stdout.strip()):
                raise AgentError.cli_not_found(cli_command, self.name)
            raise

        if not output.strip():
            raise AgentError.cli_not_found(cli_command, self.name)

    @abstractmethod
    def execute_command(self, prompt: str, workdir: str) -> str:
        """Run the CLI with ``prompt`` and return its raw output."""
        pass

    def clean_response(self, raw: str) -> str:
        return self._cleaner(raw)

    def validate_response(self, message: str) -> None:
        """Raise AgentError if ``message`` is not a Conventional Commit."""
        if not self._validator(message):
            raise AgentError.invalid_format(self.name, message)

    def generate(self, prompt: str, workdir: str) -> str:
        """Generate a validated commit message.

        Args:
            prompt: The full generation prompt.
            workdir: Directory the CLI runs in.

        Returns:
            The cleaned, validated commit message.
        """
        self.check_availability(self.cli_command, workdir)
        raw = self.execute_command(prompt, workdir)
        message = self.clean_response(raw)
        self.validate_response(message)
        logger.debug("%s produced a valid message (%d chars)", self.name, len(message))
        return message

    def _run_cli(self, args: list[str], workdir: str, input_text: Optional[str] = None) -> str:
        """Run the agent CLI, translating shell failures into AgentError."""
        try:
            return run_command(args, cwd=workdir, input_text=input_text, timeout_ms=self.timeout_ms)
        except ShellError as e:
            if e.code == "ETIMEDOUT":
                raise AgentError.timed_out(self.name, self.timeout_ms) from e
            if e.code == "ENOENT":
                raise AgentError.cli_not_found(args[0], self.name) from e
            raise AgentError.execution_failed(self.name, e.code, e.stderr, cause=e) from e
