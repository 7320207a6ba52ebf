"""OpenAI Codex CLI provider."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from commitment.agents.cleaning import remove_codex_session_log
from commitment.providers.base_cli import BaseCLIProvider


class CodexProvider(BaseCLIProvider):
    """Runs ``codex exec`` and reads the final message from a temp file.

    Falls back to stdout when Codex does not write the file.
    """

    display_name = "Codex CLI"
    default_command = "codex"
    default_args = ["exec"]

    def execute(self, prompt: str, workdir: Optional[str], timeout_ms: int) -> str:
        fd, output_path = tempfile.mkstemp(prefix="commitment-codex-", suffix=".txt")
        os.close(fd)
        output_file = Path(output_path)

        try:
            stdout = self.run_cli(
                [self.command, *self.args, "--output-last-message", str(output_file), prompt],
                workdir,
                timeout_ms,
            )
            last_message = output_file.read_text() if output_file.exists() else ""
        finally:
            output_file.unlink(missing_ok=True)

        return last_message if last_message.strip() else stdout

    def finalize_response(self, raw: str) -> str:
        # Stdout fallback carries the whole session log
        return super().finalize_response(remove_codex_session_log(raw))
