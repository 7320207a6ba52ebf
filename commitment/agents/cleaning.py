"""Normalization and validation of raw AI responses.

Contains:
- clean_ai_response: Strip markers, fences, preambles and thinking sections
- remove_codex_session_log: Drop Codex session log lines before cleaning
- validate_conventional_commit: Check the Conventional Commits header
- is_cli_not_found_error: Recognize "executable missing" failures
"""

import re

CONVENTIONAL_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "build",
    "ci",
)

MESSAGE_START_MARKER = "<<<COMMIT_MESSAGE_START>>>"
MESSAGE_END_MARKER = "<<<COMMIT_MESSAGE_END>>>"

_MARKED_BLOCK_RE = re.compile(
    re.escape(MESSAGE_START_MARKER) + r"\s*([\s\S]*?)\s*" + re.escape(MESSAGE_END_MARKER)
)
_STRAY_MARKER_RE = re.compile(
    r"\s*(?:" + re.escape(MESSAGE_START_MARKER) + "|" + re.escape(MESSAGE_END_MARKER) + r")\s*"
)
_CODE_FENCE_RE = re.compile(r"```[\w+-]*\n?([\s\S]*?)```")
_PREAMBLE_RE = re.compile(
    r"^\s*(?:here(?:'s| is) (?:the |a |your )?commit message|commit message)\s*:[ \t]*\n?",
    re.IGNORECASE,
)
_THINKING_BLOCK_RE = re.compile(r"<thinking>[\s\S]*?</thinking>", re.IGNORECASE)
# Unclosed or bare "thinking" sections end at the end of their line
_THINKING_LINE_RE = re.compile(r"^(?:thinking\b|<thinking>)[\s\S]*?(?:</thinking>|$)", re.IGNORECASE | re.MULTILINE)
_THINKING_CLOSE_RE = re.compile(r"</thinking>", re.IGNORECASE)
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

_CONVENTIONAL_RE = re.compile(r"^(" + "|".join(CONVENTIONAL_TYPES) + r")(\(.+\))?:\s*\S+")

_NOT_FOUND_PATTERNS = ("command not found", "not found", "enoent")

# Session log lines Codex prints to stdout around its answer
_CODEX_LOG_LINE_RES = (
    re.compile(r"^\[[\d:.TZ+-]+\].*$", re.MULTILINE),
    re.compile(r"^-{3,}$", re.MULTILINE),
    re.compile(r"^OpenAI Codex.*$", re.MULTILINE),
    re.compile(
        r"^(?:workdir|model|provider|approval|sandbox|reasoning effort|reasoning summaries):.*$",
        re.IGNORECASE | re.MULTILINE,
    ),
)


def _remove_markers(text: str) -> str:
    match = _MARKED_BLOCK_RE.search(text)
    if match:
        return match.group(1)
    return _STRAY_MARKER_RE.sub("\n", text)


def _clean_once(text: str) -> str:
    # Fences go before preambles: the preamble pattern is anchored at the start
    text = _remove_markers(text)
    text = _CODE_FENCE_RE.sub(r"\1", text)
    text = _PREAMBLE_RE.sub("", text, count=1)
    text = _THINKING_BLOCK_RE.sub("", text)
    text = _THINKING_LINE_RE.sub("", text)
    text = _THINKING_CLOSE_RE.sub("", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def clean_ai_response(raw: str) -> str:
    """Clean a raw AI response down to the commit message.

    Steps, in order: commit message markers, markdown code fences (inner
    content kept), a recognized leading preamble such as "Here is the
    commit message:", thinking sections, runs of blank lines, surrounding
    whitespace. The pass is repeated until nothing changes, so cleaning an
    already-clean message is a no-op.

    Args:
        raw: The raw text returned by the AI tool.

    Returns:
        The cleaned message. May be empty if the input was pure noise.
    """
    if not isinstance(raw, str):
        return ""

    text = raw
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def remove_codex_session_log(raw: str) -> str:
    """Remove the session log lines Codex prints around its answer.

    Drops timestamped activity lines, the ``OpenAI Codex`` banner, ``---``
    separators and the ``workdir:``/``model:``/``sandbox:`` style metadata
    Codex prints when run with ``exec``. The result still needs the usual
    cleaning.
    """
    if not isinstance(raw, str):
        return ""
    text = raw
    for pattern in _CODEX_LOG_LINE_RES:
        text = pattern.sub("", text)
    return text


def validate_conventional_commit(message: str) -> bool:
    """Check that ``message`` starts with a Conventional Commits header.

    Only the ``type(scope): description`` header is checked; the type is
    case-sensitive and the description must contain a non-space character.
    """
    if not isinstance(message, str):
        return False
    return _CONVENTIONAL_RE.match(message) is not None


def is_cli_not_found_error(error: object) -> bool:
    """Return True if ``error`` means an executable is missing."""
    if getattr(error, "code", None) == "ENOENT" or isinstance(error, FileNotFoundError):
        return True
    message = str(error).lower()
    return any(pattern in message for pattern in _NOT_FOUND_PATTERNS)
