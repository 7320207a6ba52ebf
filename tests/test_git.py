"""Tests for commitment.git modules."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from commitment.git import (
    GitError,
    MockGitProvider,
    NoStagedChangesError,
    RealGitProvider,
    create_commit,
    get_git_status,
    get_repo_root,
    get_staged_diff,
    parse_porcelain_status,
    run_git_command,
)


class TestRunGitCommand:
    """Tests for run_git_command function."""

    def test_successful_command(self, mocker):
        """Test successful git command keeps leading whitespace."""
        mock_run = mocker.patch("subprocess.run")
        mock_run.return_value = MagicMock(stdout=" M file.py\n")

        result = run_git_command(["status", "--porcelain"])

        assert result == " M file.py"
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ["git", "status", "--porcelain"]

    def test_failed_command_raises_git_error(self, mocker):
        """Test failed git command raises GitError."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.CalledProcessError(128, ["git"], stderr="fatal: not a git repository"),
        )

        with pytest.raises(GitError, match="not a git repository"):
            run_git_command(["status"])

    def test_git_not_installed(self, mocker):
        """Test missing git raises GitError."""
        mocker.patch("subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(GitError, match="not installed"):
            run_git_command(["status"])


class TestGetRepoRoot:
    """Tests for get_repo_root function."""

    def test_returns_path(self, mocker):
        """Test repo root is returned as a Path."""
        mocker.patch("commitment.git.runner.run_git_command", return_value="/home/me/repo")

        assert get_repo_root() == Path("/home/me/repo")

    def test_not_a_repo(self, mocker):
        """Test a friendly error outside a repository."""
        mocker.patch("commitment.git.runner.run_git_command", side_effect=GitError("fatal"))

        with pytest.raises(GitError, match="Not in a git repository"):
            get_repo_root()


class TestParsePorcelainStatus:
    """Tests for parse_porcelain_status function."""

    def test_staged_unstaged_untracked(self):
        """Test each column is interpreted."""
        status = parse_porcelain_status("## main\nM  staged.py\n M unstaged.py\nMM both.py\n?? new.py\n")

        assert status.staged_files == ["staged.py", "both.py"]
        assert status.unstaged_files == ["unstaged.py", "both.py"]
        assert status.untracked_files == ["new.py"]
        assert status.status_lines == ["M  staged.py", "MM both.py"]
        assert status.has_staged_changes

    def test_rename_uses_new_path(self):
        """Test renames report the destination path."""
        status = parse_porcelain_status("R  old.py -> new.py")
        assert status.staged_files == ["new.py"]

    def test_empty(self):
        """Test empty output has no changes."""
        status = parse_porcelain_status("")
        assert not status.has_changes
        assert not status.has_staged_changes


class TestStatusHelpers:
    """Tests for git status helpers."""

    def test_get_git_status(self, mocker):
        """Test status is read with porcelain v1."""
        mock_git = mocker.patch("commitment.git.status.run_git_command", return_value="A  a.py")

        status = get_git_status("/repo")

        assert status.staged_files == ["a.py"]
        mock_git.assert_called_once_with(["status", "--porcelain=v1"], cwd="/repo")

    def test_get_staged_diff_empty(self, mocker):
        """Test nothing staged raises NoStagedChangesError."""
        mocker.patch("commitment.git.status.run_git_command", return_value="")

        with pytest.raises(NoStagedChangesError):
            get_staged_diff("/repo")

    def test_create_commit(self, mocker):
        """Test commit passes the message with -m."""
        mock_git = mocker.patch("commitment.git.status.run_git_command", return_value="[main abc123] feat: x")

        create_commit("feat: x\n\n- detail", cwd="/repo")

        mock_git.assert_called_once_with(["commit", "-m", "feat: x\n\n- detail"], cwd="/repo")

    def test_create_commit_rejects_empty_message(self, mocker):
        """Test an empty message is never committed."""
        mock_git = mocker.patch("commitment.git.status.run_git_command")

        with pytest.raises(GitError):
            create_commit("   ")

        mock_git.assert_not_called()


class TestGitProviders:
    """Tests for GitProvider implementations."""

    def test_real_provider_runs_git(self, mocker):
        """Test the real provider delegates to run_git_command."""
        mock_git = mocker.patch("commitment.git.provider.run_git_command", return_value="diff")

        assert RealGitProvider().exec(["diff", "--cached"], cwd="/repo") == "diff"
        mock_git.assert_called_once_with(["diff", "--cached"], cwd="/repo")

    def test_mock_provider_diff_and_status(self):
        """Test recorded diff and status are returned."""
        provider = MockGitProvider(diff="the diff", status="M  a.py\n")

        assert provider.exec(["diff", "--cached", "--unified=3"]) == "the diff"
        assert provider.exec(["status", "--porcelain"]) == "M  a.py\n"

    def test_mock_provider_name_status(self):
        """Test name-status is derived from the status lines."""
        provider = MockGitProvider(diff="", status="M  a.py\nA  b.py\n?? c.py\nR  old.py -> new.py\n")

        assert provider.exec(["diff", "--cached", "--name-status"]) == "M\ta.py\nA\tb.py\nA\tc.py\nR\tnew.py"

    def test_mock_provider_stat(self):
        """Test the synthetic stat lists files and a summary."""
        provider = MockGitProvider(diff="", status="M  a.py\nA  bb.py\n")

        stat = provider.exec(["diff", "--cached", "--stat"])

        assert " a.py  | changed" in stat
        assert stat.endswith(" 2 files changed")

    def test_mock_provider_unknown_command(self):
        """Test unsupported commands return an empty string."""
        assert MockGitProvider(diff="d", status="s").exec(["log"]) == ""
