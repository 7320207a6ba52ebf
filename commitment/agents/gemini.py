"""Gemini CLI agent."""

from commitment.agents.base import BaseAgent
from commitment.config import AgentName


class GeminiAgent(BaseAgent):
    """Runs ``gemini -p <prompt>``."""

    agent = AgentName.GEMINI
    name = "Gemini"
    cli_command = "gemini"

    def execute_command(self, prompt: str, workdir: str) -> str:
        return self._run_cli([self.cli_command, "-p", prompt], workdir)
