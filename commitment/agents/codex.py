"""OpenAI Codex CLI agent."""

import os
import tempfile
from pathlib import Path

from commitment.agents.base import BaseAgent
from commitment.agents.cleaning import remove_codex_session_log
from commitment.config import AgentName
from commitment.errors import AgentError


class CodexAgent(BaseAgent):
    """Runs ``codex exec`` non-interactively.

    Codex prints its whole session to stdout, so the final answer is taken
    from the file written by ``--output-last-message``. Stdout is only used
    if that file is missing or empty.
    """

    agent = AgentName.CODEX
    name = "Codex"
    cli_command = "codex"

    def execute_command(self, prompt: str, workdir: str) -> str:
        fd, output_path = tempfile.mkstemp(prefix="commitment-codex-", suffix=".txt")
        os.close(fd)
        output_file = Path(output_path)

        try:
            stdout = self._run_cli(
                [self.cli_command, "exec", "--output-last-message", str(output_file), prompt],
                workdir,
            )
            last_message = output_file.read_text() if output_file.exists() else ""
        finally:
            output_file.unlink(missing_ok=True)

        result = last_message.strip() or stdout.strip()
        if not result:
            raise AgentError.malformed_response(self.name, stdout, "a commit message")
        return result

    def clean_response(self, raw: str) -> str:
        return super().clean_response(remove_codex_session_log(raw))
