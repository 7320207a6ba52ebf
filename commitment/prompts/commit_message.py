"""Prompt construction for commit message generation.

Contains:
- build_commit_message_prompt: Assemble the full agent prompt
- analyze_code_changes: Summarize patterns found in a diff
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from commitment.config import MAX_DIFF_CHARS

COMMIT_MESSAGE_PROMPT_TEMPLATE = """Generate a professional commit message based on the actual code changes:

Task Context:
- Title: {title}
- Description: {description}
- Files: {files}

File Changes Summary:
{name_status}

Diff Statistics:
{stat}

Actual Code Changes:
```diff
{diff}
```

Task Execution Output:
{output}

Requirements:
1. ANALYZE THE ACTUAL CODE CHANGES - don't guess based on file names
2. Clear, descriptive title (50 chars or less) following conventional commits
3. Be CONCISE - match detail level to scope of changes:
   - Single file/method: 2-4 bullet points max
   - Multiple files: 4-6 bullet points max
   - Major refactor: 6+ bullet points as needed
4. Use imperative mood ("Add feature" not "Added feature")
5. Format: Title + blank line + bullet point details
6. Focus on the most important changes from the diff:
   - Key functionality added/modified/removed
   - Significant logic or behavior changes
   - Important architectural changes
7. Avoid over-describing implementation details for small changes
8. DO NOT include preamble like "Looking at the changes"
9. Start directly with the action ("Add", "Fix", "Update", etc.)
10. Quality over quantity - fewer, more meaningful bullet points

Example format:
feat: add user authentication system

- Implement JWT-based authentication flow
- Add login/logout endpoints in auth routes
- Create user session management middleware
- Add password hashing with bcrypt

Return ONLY the commit message content between these markers:
<<<COMMIT_MESSAGE_START>>>
(commit message goes here)
<<<COMMIT_MESSAGE_END>>>

Change Analysis:
{analysis}"""

TRUNCATION_NOTICE = "\n... (diff truncated)"

_FUNCTION_RE = re.compile(r"(?:\bdef\s+\w+|\bfunction\b|\bconst\s+\w+\s*=|\bclass\s+\w+)")
_TEST_RE = re.compile(r"(?:\bdef\s+test_\w*|\b(?:test|it|describe)\s*\()")
_MOCK_MARKERS = ("mock", "vi.mock", "jest.mock")
_TYPE_MARKERS = ("interface", "type ", ".d.ts", "TypedDict", "Protocol")


@dataclass
class CommitTask:
    """Minimal task description used in prompts."""

    title: str
    description: str
    produces: Sequence[str] = ()


def truncate_diff(diff: str, max_chars: int = MAX_DIFF_CHARS) -> str:
    if len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_NOTICE


def build_commit_message_prompt(
    task: CommitTask,
    diff_stat: str,
    diff_name_status: str,
    diff_content: str,
    files: Optional[Sequence[str]] = None,
    output: Optional[str] = None,
) -> str:
    """Build the prompt sent to an agent or provider.

    Args:
        task: Title, description and produced files of the change.
        diff_stat: Output of ``git diff --cached --stat``.
        diff_name_status: Output of ``git diff --cached --name-status``.
        diff_content: The staged diff. Truncated to MAX_DIFF_CHARS.
        files: Files involved in the change.
        output: Optional execution output to give the model more context.

    Returns:
        The formatted prompt.
    """
    truncated = truncate_diff(diff_content)
    file_list = list(files or [])

    return COMMIT_MESSAGE_PROMPT_TEMPLATE.format(
        title=task.title,
        description=task.description,
        files=", ".join(file_list) if file_list else "No files specified",
        name_status=diff_name_status,
        stat=diff_stat,
        diff=truncated,
        output=output if output and output.strip() else "No execution output provided",
        analysis=analyze_code_changes(truncated, file_list),
    )


def _split_diff_lines(diff: str) -> tuple[list[str], list[str]]:
    lines = diff.split("\n")
    added = [line for line in lines if line.startswith("+") and not line.startswith("++")]
    removed = [line for line in lines if line.startswith("-") and not line.startswith("---")]
    return added, removed


def _describe_patterns(diff: str, added: list[str], removed: list[str]) -> list[str]:
    new_functions = sum(1 for line in added if _FUNCTION_RE.search(line))
    removed_functions = sum(1 for line in removed if _FUNCTION_RE.search(line))
    new_tests = sum(1 for line in added if _TEST_RE.search(line))
    removed_tests = sum(1 for line in removed if _TEST_RE.search(line))

    notes = []
    if new_functions > removed_functions + 1:
        notes.append(f"Added {new_functions} new functions/methods")
    elif removed_functions > new_functions + 1:
        notes.append(f"Removed {removed_functions} functions/methods")
    elif new_functions or removed_functions:
        notes.append("Modified function definitions")

    if new_tests:
        notes.append(f"Added {new_tests} test cases")
    elif removed_tests:
        notes.append(f"Removed {removed_tests} test cases")

    if any(marker in diff for marker in _MOCK_MARKERS):
        notes.append("Modified mocking/test patterns")
    if any(marker in diff for marker in _TYPE_MARKERS):
        notes.append("Updated type definitions")
    return notes


def _describe_scope(file_count: int) -> list[str]:
    if file_count == 1:
        return ["Single file modification"]
    if file_count > 5:
        return [f"Broad changes across {file_count} files"]
    return []


def _describe_magnitude(added: int, removed: int) -> list[str]:
    total = added + removed
    if total > 100:
        return [f"Substantial changes: {added}+ {removed}- lines"]
    if total > 20:
        return ["Moderate code changes"]
    return []


def analyze_code_changes(diff: str, files: Sequence[str]) -> str:
    """Summarize what kind of change a diff contains.

    Args:
        diff: The (possibly truncated) diff.
        files: Files involved in the change.

    Returns:
        One insight per line, or "Minor code modifications" if none apply.
    """
    added, removed = _split_diff_lines(diff)
    notes = (
        _describe_patterns(diff, added, removed)
        + _describe_scope(len(files))
        + _describe_magnitude(len(added), len(removed))
    )
    if not notes:
        return "Minor code modifications"
    return "\n".join(f"- {note}" for note in notes)
