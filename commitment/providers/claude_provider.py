"""Claude Code CLI provider."""

from commitment.providers.base_cli import BaseCLIProvider


class ClaudeProvider(BaseCLIProvider):
    """Runs ``claude --print`` with the prompt on stdin."""

    display_name = "Claude CLI"
    default_command = "claude"
    default_args = ["--print"]
