"""Claude Code CLI agent."""

from commitment.agents.base import BaseAgent
from commitment.config import AgentName


class ClaudeAgent(BaseAgent):
    """Runs ``claude --print`` with the prompt on stdin."""

    agent = AgentName.CLAUDE
    name = "Claude"
    cli_command = "claude"

    def execute_command(self, prompt: str, workdir: str) -> str:
        return self._run_cli([self.cli_command, "--print"], workdir, input_text=prompt)
