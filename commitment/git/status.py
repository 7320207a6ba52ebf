"""Git status utilities.

Contains:
- GitStatus: Parsed view of ``git status --porcelain``
- parse_porcelain_status: Parse porcelain v1 output
- get_git_status: Collect the status of a working tree
- get_staged_diff: Get the staged diff of a working tree
- create_commit: Commit the staged changes with a message
"""

from dataclasses import dataclass, field
from typing import Optional

from commitment.git.exceptions import GitError, NoStagedChangesError
from commitment.git.runner import run_git_command


@dataclass
class GitStatus:
    """Staged, unstaged and untracked files of a working tree."""

    staged_files: list[str] = field(default_factory=list)
    unstaged_files: list[str] = field(default_factory=list)
    untracked_files: list[str] = field(default_factory=list)
    # Raw porcelain lines for staged entries, e.g. "M  src/app.py"
    status_lines: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.staged_files or self.unstaged_files or self.untracked_files)

    @property
    def has_staged_changes(self) -> bool:
        return bool(self.staged_files)


def _path_from_line(line: str) -> str:
    path = line[3:]
    # Renames and copies are reported as "old -> new"
    if " -> " in path:
        path = path.split(" -> ", 1)[1]
    return path.strip().strip('"')


def parse_porcelain_status(output: str) -> GitStatus:
    """Parse ``git status --porcelain`` (v1) output.

    The first column is the index status and the second the worktree
    status; "??" marks untracked files.

    Args:
        output: Porcelain status text.

    Returns:
        The parsed GitStatus.
    """
    status = GitStatus()

    for line in output.splitlines():
        if len(line) < 4 or line.startswith("##"):
            continue

        index_col, worktree_col = line[0], line[1]
        path = _path_from_line(line)

        if index_col == "?" and worktree_col == "?":
            status.untracked_files.append(path)
            continue
        if index_col not in (" ", "?"):
            status.staged_files.append(path)
            status.status_lines.append(line)
        if worktree_col not in (" ", "?"):
            status.unstaged_files.append(path)

    return status


def get_git_status(cwd: Optional[str] = None) -> GitStatus:
    """Collect the status of the working tree at ``cwd``.

    Raises:
        GitError: If git fails (e.g. not a repository).
    """
    return parse_porcelain_status(run_git_command(["status", "--porcelain=v1"], cwd=cwd))


def get_staged_diff(cwd: Optional[str] = None) -> str:
    """Get the staged diff.

    Raises:
        NoStagedChangesError: If nothing is staged.
    """
    diff = run_git_command(["diff", "--cached"], cwd=cwd)
    if not diff.strip():
        raise NoStagedChangesError("No staged changes found. Stage your changes with 'git add' first.")
    return diff


def create_commit(message: str, cwd: Optional[str] = None) -> str:
    """Commit the staged changes.

    Args:
        message: The full commit message.
        cwd: Working tree to commit in.

    Returns:
        Git's commit summary output.

    Raises:
        GitError: If the commit fails.
    """
    if not message.strip():
        raise GitError("Refusing to commit with an empty message.")
    return run_git_command(["commit", "-m", message], cwd=cwd)
