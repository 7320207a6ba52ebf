"""Sources of git data for the commit message generator.

The generator asks a GitProvider for ``git diff --cached`` variants. The
real provider shells out to git; the mock provider answers from a recorded
fixture so evaluations are reproducible.
"""

from abc import ABC, abstractmethod
from typing import Optional

from commitment.git.runner import run_git_command


class GitProvider(ABC):
    """Runs git subcommands for the generator."""

    @abstractmethod
    def exec(self, args: list[str], cwd: Optional[str] = None) -> str:
        """Run ``git <args>`` and return stdout."""
        pass


class RealGitProvider(GitProvider):
    """Runs git against a real working tree."""

    def exec(self, args: list[str], cwd: Optional[str] = None) -> str:
        return run_git_command(args, cwd=cwd)


class MockGitProvider(GitProvider):
    """Answers git queries from a recorded status and diff.

    Supported queries:
    - ``diff --cached --stat``: a synthetic stat built from the status
    - ``diff --cached --name-status``: derived from the status lines
    - ``diff ...``: the recorded diff
    - ``status ...``: the recorded status
    Anything else returns an empty string.
    """

    def __init__(self, diff: str, status: str):
        self.diff = diff
        self.status = status

    def _status_entries(self) -> list[tuple[str, str]]:
        entries = []
        for line in self.status.splitlines():
            if len(line) < 4 or line.startswith("##"):
                continue
            code = line[:2]
            path = line[3:].strip()
            if " -> " in path:
                path = path.split(" -> ", 1)[1]
            letter = "A" if code == "??" else (code.strip() or "M")[0]
            entries.append((letter, path))
        return entries

    def _stat(self) -> str:
        entries = self._status_entries()
        if not entries:
            return ""
        width = max(len(path) for _, path in entries)
        lines = [f" {path.ljust(width)} | changed" for _, path in entries]
        count = len(entries)
        lines.append(f" {count} file{'s' if count != 1 else ''} changed")
        return "\n".join(lines)

    def _name_status(self) -> str:
        return "\n".join(f"{letter}\t{path}" for letter, path in self._status_entries())

    def exec(self, args: list[str], cwd: Optional[str] = None) -> str:
        if not args:
            return ""
        command = args[0]
        if command == "diff":
            if "--stat" in args:
                return self._stat()
            if "--name-status" in args:
                return self._name_status()
            return self.diff
        if command == "status":
            return self.status
        return ""
