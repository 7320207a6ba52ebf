"""Git access for commitment.

- exceptions: GitError, NoStagedChangesError
- runner: run_git_command, get_repo_root
- status: GitStatus, parse_porcelain_status, get_git_status, get_staged_diff, create_commit
- provider: GitProvider, RealGitProvider, MockGitProvider
"""

from commitment.git.exceptions import (
    GitError,
    NoStagedChangesError,
)

from commitment.git.runner import (
    run_git_command,
    get_repo_root,
)

from commitment.git.status import (
    GitStatus,
    parse_porcelain_status,
    get_git_status,
    get_staged_diff,
    create_commit,
)

from commitment.git.provider import (
    GitProvider,
    RealGitProvider,
    MockGitProvider,
)

__all__ = [
    "GitError",
    "NoStagedChangesError",
    "run_git_command",
    "get_repo_root",
    "GitStatus",
    "parse_porcelain_status",
    "get_git_status",
    "get_staged_diff",
    "create_commit",
    "GitProvider",
    "RealGitProvider",
    "MockGitProvider",
]
