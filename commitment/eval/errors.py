"""Evaluation exception classes.

Every message says what went wrong and how to fix it.
"""

from typing import Literal, Optional

EvaluationErrorCode = Literal[
    "META_EVALUATION_FAILED",
    "INVALID_ATTEMPT_COUNT",
    "MISSING_FIXTURE",
    "INVALID_METRICS",
    "API_KEY_MISSING",
]


class EvaluationError(Exception):
    """Raised when an evaluation step cannot complete."""

    def __init__(self, message: str, code: EvaluationErrorCode, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause

    @classmethod
    def meta_evaluation_failed(
        cls, fixture_name: str, cause: BaseException, label: str = "Meta-evaluation"
    ) -> "EvaluationError":
        return cls(
            f'{label} failed for fixture "{fixture_name}".\n\n'
            f"Reason: {cause}\n\n"
            "How to fix:\n"
            "- Check OpenAI API connectivity and credentials\n"
            "- Review the logs for the specific API error\n"
            "- Verify the fixture has a valid diff and status",
            "META_EVALUATION_FAILED",
            cause,
        )

    @classmethod
    def invalid_attempt_count(cls, received: int, expected: int) -> "EvaluationError":
        return cls(
            f"Invalid attempt count: expected {expected} attempts but received {received}.\n\n"
            "How to fix:\n"
            f"- Ensure the attempt runner executes all {expected} attempts\n"
            "- Check that failures don't stop subsequent attempts",
            "INVALID_ATTEMPT_COUNT",
        )

    @classmethod
    def missing_fixture(cls, fixture_name: str, cause: Optional[BaseException] = None) -> "EvaluationError":
        message = f'Fixture not found: "{fixture_name}".'
        if cause is not None:
            message += f"\n\nReason: {cause}"
        message += (
            "\n\nHow to fix:\n"
            "- Check the fixture name spelling\n"
            "- Ensure the fixture directory has metadata.json, mock-diff.txt and mock-status.txt\n"
            "- For live mode, ensure <name>-live is a git repository with staged changes"
        )
        return cls(message, "MISSING_FIXTURE", cause)

    @classmethod
    def invalid_metrics(cls, reason: str, cause: Optional[BaseException] = None) -> "EvaluationError":
        return cls(
            f"Judge returned invalid scores: {reason}\n\n"
            "How to fix:\n"
            "- Ensure every score is between 0 and 10\n"
            "- Retry; the judge occasionally ignores the output schema",
            "INVALID_METRICS",
            cause,
        )

    @classmethod
    def api_key_missing(cls, env_var: str) -> "EvaluationError":
        return cls(
            f"{env_var} is not set.\n\n"
            "How to fix:\n"
            f"- export {env_var}=your_key_here\n"
            "- or run: commitment config set-key openai",
            "API_KEY_MISSING",
        )
