"""AI coding assistant agents.

Each agent wraps one CLI tool and exposes ``generate(prompt, workdir)``.
"""

from commitment.agents.base import BaseAgent
from commitment.agents.cleaning import (
    CONVENTIONAL_TYPES,
    clean_ai_response,
    is_cli_not_found_error,
    remove_codex_session_log,
    validate_conventional_commit,
)
from commitment.config import AgentName


def create_agent(agent: AgentName | str, **kwargs) -> BaseAgent:
    """Get an agent instance.

    Args:
        agent: The agent to create, as an AgentName or its string value.
        **kwargs: Passed to the agent constructor (cleaner, validator, timeout_ms).

    Returns:
        A new agent instance.

    Raises:
        ValueError: If the agent is not supported.
    """
    agent = AgentName(agent) if isinstance(agent, str) else agent

    if agent == AgentName.CLAUDE:
        from commitment.agents.claude import ClaudeAgent

        return ClaudeAgent(**kwargs)

    elif agent == AgentName.CODEX:
        from commitment.agents.codex import CodexAgent

        return CodexAgent(**kwargs)

    elif agent == AgentName.GEMINI:
        from commitment.agents.gemini import GeminiAgent

        return GeminiAgent(**kwargs)

    else:
        raise ValueError(f"Unsupported agent: {agent}")


__all__ = [
    "BaseAgent",
    "CONVENTIONAL_TYPES",
    "clean_ai_response",
    "create_agent",
    "is_cli_not_found_error",
    "remove_codex_session_log",
    "validate_conventional_commit",
]
