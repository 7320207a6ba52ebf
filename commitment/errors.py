"""Exception classes for agents and the commit message generator.

Contains:
- AgentError: Raised when an AI CLI agent cannot produce a message
- GeneratorError: Raised when the generator is misused or generation fails

Both carry a ``suggested_action`` so the CLI can tell the user what to do next.
"""

from typing import Any, Optional

MAX_OUTPUT_PREVIEW = 100


class CommitmentError(Exception):
    """Base exception carrying context and a suggested fix."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[dict[str, Any]] = None,
        suggested_action: Optional[str] = None,
        cause: Optional[BaseException] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}
        self.suggested_action = suggested_action
        self.cause = cause

    def format_with_suggestion(self) -> str:
        """Return the message followed by the suggested action, if any."""
        if not self.suggested_action:
            return self.message
        return f"{self.message}\n\n{self.suggested_action}"


class AgentError(CommitmentError):
    """Raised when an AI agent fails to produce a usable commit message."""

    def __init__(self, message: str, agent_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.agent_name = agent_name

    @classmethod
    def cli_not_found(cls, command: str, agent_name: str) -> "AgentError":
        """The agent's CLI executable is missing from PATH."""
        return cls(
            f"{agent_name} CLI '{command}' is not installed or not found in PATH",
            agent_name=agent_name,
            code="CLI_NOT_FOUND",
            context={"command": command},
            suggested_action=(
                f"Install the {agent_name} CLI and make sure '{command}' is on your PATH,\n"
                f"or run with --no-ai to use the rule-based generator."
            ),
        )

    @classmethod
    def execution_failed(
        cls,
        agent_name: str,
        exit_code: Any,
        stderr: str = "",
        cause: Optional[BaseException] = None,
    ) -> "AgentError":
        """The agent's CLI exited unsuccessfully."""
        message = f"{agent_name} CLI execution failed (code: {exit_code})"
        if stderr.strip():
            message += f": {stderr.strip()}"
        return cls(
            message,
            agent_name=agent_name,
            code="EXECUTION_FAILED",
            context={"exit_code": exit_code, "stderr": stderr},
            suggested_action=f"Run the {agent_name} CLI manually to check that it is authenticated.",
            cause=cause,
        )

    @classmethod
    def timed_out(cls, agent_name: str, timeout_ms: int) -> "AgentError":
        return cls(
            f"{agent_name} CLI timed out after {timeout_ms}ms",
            agent_name=agent_name,
            code="TIMEOUT",
            context={"timeout_ms": timeout_ms},
            suggested_action="Stage a smaller changeset or retry later.",
        )

    @classmethod
    def malformed_response(cls, agent_name: str, output: str, expected: str) -> "AgentError":
        """The agent answered, but not in a shape we can use."""
        preview = output[:MAX_OUTPUT_PREVIEW]
        if len(output) > MAX_OUTPUT_PREVIEW:
            preview += "..."
        return cls(
            f"{agent_name} returned a malformed response: expected {expected}, got {preview!r}",
            agent_name=agent_name,
            code="MALFORMED_RESPONSE",
            context={"output": preview, "expected": expected},
            suggested_action="Retry the command; if it keeps failing, try another agent.",
        )

    @classmethod
    def invalid_format(cls, agent_name: str, message: str) -> "AgentError":
        # Rejected text lives in context only
        return cls(
            f"Invalid conventional commit format from {agent_name}",
            agent_name=agent_name,
            code="INVALID_FORMAT",
            context={"message": message},
            suggested_action="Retry the command, or run with --no-ai to use the rule-based generator.",
        )


class GeneratorError(CommitmentError):
    """Raised when commit message generation cannot proceed."""

    @classmethod
    def invalid_task(cls, problems: list[str]) -> "GeneratorError":
        return cls(
            "Invalid task: " + "; ".join(problems),
            code="INVALID_TASK",
            context={"problems": problems},
            suggested_action="Provide a task with a title (1-200 chars) and a description (1-1000 chars).",
        )

    @classmethod
    def invalid_options(cls, problems: list[str]) -> "GeneratorError":
        return cls(
            "Invalid generation options: " + "; ".join(problems),
            code="INVALID_OPTIONS",
            context={"problems": problems},
            suggested_action="Pass a non-empty working directory.",
        )

    @classmethod
    def invalid_config(cls, problems: list[str]) -> "GeneratorError":
        return cls(
            "Invalid generator configuration: " + "; ".join(problems),
            code="INVALID_CONFIG",
            context={"problems": problems},
            suggested_action="Check the --agent, --provider and --provider-config values.",
        )

    @classmethod
    def ai_generation_failed(cls, agent_name: str, cause: BaseException) -> "GeneratorError":
        """Wrap a backend failure, keeping the original message visible."""
        return cls(
            f"AI generation with {agent_name} failed: {cause}",
            code="AI_GENERATION_FAILED",
            context={"agent": agent_name},
            suggested_action="Try another agent with --agent, or use --no-ai for a rule-based message.",
            cause=cause,
        )
