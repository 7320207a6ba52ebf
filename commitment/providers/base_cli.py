"""Shared behaviour for providers backed by a local AI CLI."""

import logging
from typing import Optional

from commitment.providers.base import BaseProvider, ProviderType
from commitment.providers.errors import (
    ProviderError,
    ProviderNotAvailableError,
    ProviderTimeoutError,
)
from commitment.providers.types import CLIProviderConfig, get_default_timeout_ms
from commitment.shell import ShellError, is_command_available, run_command

logger = logging.getLogger(__name__)


class BaseCLIProvider(BaseProvider):
    """Runs an AI CLI with the prompt on stdin.

    Subclasses set ``display_name``, ``default_command`` and
    ``default_args``; the config may override the command and arguments.
    """

    display_name: str = "CLI"
    default_command: str = ""
    default_args: list[str] = []

    def __init__(self, config: CLIProviderConfig):
        self.config = config
        self.command = config.command or self.default_command
        self.args = list(config.args) if config.args is not None else list(self.default_args)
        self.timeout_ms = get_default_timeout_ms(config)

    def get_name(self) -> str:
        return self.display_name

    def get_provider_type(self) -> ProviderType:
        return "cli"

    def is_available(self, workdir: Optional[str] = None) -> bool:
        return is_command_available(self.command, cwd=workdir)

    def execute(self, prompt: str, workdir: Optional[str], timeout_ms: int) -> str:
        """Run the CLI and return its raw output."""
        return self.run_cli([self.command, *self.args], workdir, timeout_ms, input_text=prompt)

    def run_cli(
        self,
        args: list[str],
        workdir: Optional[str],
        timeout_ms: int,
        input_text: Optional[str] = None,
    ) -> str:
        """Run ``args``, translating shell failures into provider errors."""
        try:
            return run_command(args, cwd=workdir, input_text=input_text, timeout_ms=timeout_ms)
        except ShellError as e:
            if e.code == "ETIMEDOUT":
                raise ProviderTimeoutError(self.get_name(), timeout_ms) from e
            if e.code == "ENOENT":
                raise ProviderNotAvailableError(self.get_name(), f"'{args[0]}' not found in PATH") from e
            detail = e.stderr.strip() or str(e)
            raise ProviderError(
                f"{self.get_name()} CLI execution failed (code: {e.code}): {detail}",
                self.get_name(),
                cause=e,
            ) from e

    def generate_commit_message(
        self,
        prompt: str,
        workdir: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> str:
        raw = self.execute(prompt, workdir, timeout_ms or self.timeout_ms)
        return self.finalize_response(raw)
