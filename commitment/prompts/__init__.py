"""Prompt templates for commit message generation."""

from commitment.prompts.commit_message import (
    CommitTask,
    analyze_code_changes,
    build_commit_message_prompt,
    truncate_diff,
)

__all__ = [
    "CommitTask",
    "analyze_code_changes",
    "build_commit_message_prompt",
    "truncate_diff",
]
