"""Gemini CLI provider."""

from typing import Optional

from commitment.providers.base_cli import BaseCLIProvider


class GeminiCLIProvider(BaseCLIProvider):
    """Runs ``gemini -p <prompt>``."""

    display_name = "Gemini CLI"
    default_command = "gemini"
    default_args = ["-p"]

    def execute(self, prompt: str, workdir: Optional[str], timeout_ms: int) -> str:
        return self.run_cli([self.command, *self.args, prompt], workdir, timeout_ms)
