"""Classification of attempt failures into FailureKind values."""

from collections.abc import Mapping

from commitment.eval.models import FailureKind

# Checked in order; the first kind with a matching pattern wins
_PATTERNS: list[tuple[FailureKind, tuple[str, ...]]] = [
    (
        FailureKind.API_ERROR,
        ("command not found", "not found", "network error", "enoent", "econnrefused"),
    ),
    (
        FailureKind.CLEANING,
        ("failed to clean", "thinking", "cot", "markdown code block"),
    ),
    (
        FailureKind.VALIDATION,
        ("invalid conventional commit", "does not follow conventional", "missing type", "invalid format"),
    ),
    (
        FailureKind.GENERATION,
        ("timeout", "timed out", "failed to generate", "execution failed", "malformed", "agent failed"),
    ),
]


def _extract(error: object) -> tuple[str, object]:
    if error is None:
        return "", None
    if isinstance(error, str):
        return error, None
    if isinstance(error, Mapping):
        return str(error.get("message", "") or ""), error.get("code")
    if isinstance(error, FileNotFoundError):
        return str(error), "ENOENT"
    if isinstance(error, BaseException):
        return str(error), getattr(error, "code", None)
    return str(getattr(error, "message", "") or ""), getattr(error, "code", None)


def categorize_error(error: object) -> FailureKind:
    """Classify an error by its message and ``code``.

    Matching is case-insensitive and follows the priority api_error,
    cleaning, validation, generation. Anything unrecognized, including
    None and empty messages, is a generation failure.

    Args:
        error: An exception, a message string, or a mapping with "message"/"code".

    Returns:
        The failure kind. Never raises.
    """
    try:
        message, code = _extract(error)
    except Exception:
        return FailureKind.GENERATION

    if code == "ENOENT":
        return FailureKind.API_ERROR

    lowered = message.lower()
    for kind, patterns in _PATTERNS:
        if any(pattern in lowered for pattern in patterns):
            return kind
    return FailureKind.GENERATION
