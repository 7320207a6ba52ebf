"""Tests for commitment.cli module."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from commitment.cli import app
from commitment.config import AgentName, CommitmentConfig
from commitment.errors import GeneratorError
from commitment.git import GitError, GitStatus
from commitment.hooks import HookInstallResult


runner = CliRunner()


@pytest.fixture
def staged_status():
    return GitStatus(
        staged_files=["src/parser.py"],
        status_lines=["M  src/parser.py"],
    )


@pytest.fixture
def mock_main(mocker, temp_dir, staged_status):
    """Patch git and the generator used by the main command."""
    mocker.patch("commitment.cli.main.get_repo_root", return_value=temp_dir)
    mocker.patch("commitment.cli.main.get_git_status", return_value=staged_status)
    mocker.patch("commitment.cli.main.load_config", return_value=CommitmentConfig())
    generator_cls = mocker.patch("commitment.cli.main.CommitMessageGenerator")
    generator = generator_cls.return_value
    generator.backend_name = "Claude"
    generator.generate_commit_message.return_value = "fix(parser): handle None input"
    create_commit = mocker.patch("commitment.cli.main.create_commit")
    return generator_cls, generator, create_commit


class TestMainCommand:
    """Tests for the default commitment command."""

    def test_creates_commit(self, mock_main, temp_dir):
        """Test the message is generated and committed."""
        generator_cls, _, create_commit = mock_main

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Staged changes" in result.output
        assert "src/parser.py" in result.output
        assert "Generating commit message with Claude" in result.output
        assert "fix(parser): handle None input" in result.output
        assert "Commit created successfully" in result.output
        create_commit.assert_called_once_with("fix(parser): handle None input", cwd=str(temp_dir))
        kwargs = generator_cls.call_args.kwargs
        assert kwargs["agent"] == AgentName.CLAUDE
        assert kwargs["enable_ai"] is True

    def test_message_only(self, mock_main):
        """Test --message-only prints just the message."""
        _, _, create_commit = mock_main

        result = runner.invoke(app, ["--message-only"])

        assert result.exit_code == 0
        assert result.output.strip() == "fix(parser): handle None input"
        create_commit.assert_not_called()

    def test_dry_run(self, mock_main):
        """Test --dry-run does not commit."""
        _, _, create_commit = mock_main

        result = runner.invoke(app, ["--dry-run"])

        assert result.exit_code == 0
        assert "DRY RUN" in result.output
        create_commit.assert_not_called()

    def test_passes_flags_to_generator(self, mock_main):
        """Test --agent, --no-ai and --signature reach the generator."""
        generator_cls, _, _ = mock_main

        result = runner.invoke(app, ["--agent", "codex", "--no-ai", "--signature", "", "--dry-run"])

        assert result.exit_code == 0
        kwargs = generator_cls.call_args.kwargs
        assert kwargs["agent"] == AgentName.CODEX
        assert kwargs["enable_ai"] is False
        assert kwargs["signature"] == ""

    def test_provider_with_fallback(self, mock_main):
        """Test --provider and --fallback build a provider chain."""
        generator_cls, _, _ = mock_main

        result = runner.invoke(app, ["--provider", "claude", "--fallback", "codex", "--dry-run"])

        assert result.exit_code == 0
        kwargs = generator_cls.call_args.kwargs
        assert kwargs["provider"] is None
        assert kwargs["provider_chain"] == [
            {"type": "cli", "provider": "claude"},
            {"type": "cli", "provider": "codex"},
        ]

    def test_invalid_agent(self, mock_main):
        """Test an unknown agent exits with an error."""
        result = runner.invoke(app, ["--agent", "copilot"])

        assert result.exit_code == 1
        assert "Invalid agent" in result.output

    def test_invalid_provider_config(self, mock_main):
        """Test malformed --provider-config exits with an error."""
        result = runner.invoke(app, ["--provider-config", '{"type": "cli", "provider": "cursor"}'])

        assert result.exit_code == 1
        assert "Invalid provider config" in result.output

    def test_api_provider_without_key(self, mock_main, monkeypatch, config_dir):
        """Test an API provider needs a key."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        result = runner.invoke(app, ["--provider", "openai"])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY is not set" in result.output

    def test_no_staged_changes(self, mock_main, mocker):
        """Test the command fails when nothing is staged."""
        mocker.patch("commitment.cli.main.get_git_status", return_value=GitStatus(unstaged_files=["a.py"]))

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "No staged changes" in result.output

    def test_not_a_repository(self, mock_main, mocker):
        """Test git errors exit with status 1."""
        mocker.patch("commitment.cli.main.get_repo_root", side_effect=GitError("not a git repository"))

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "not a git repository" in result.output

    def test_generation_error(self, mock_main):
        """Test generator errors are reported with a suggestion."""
        _, generator, create_commit = mock_main
        generator.generate_commit_message.side_effect = GeneratorError.ai_generation_failed(
            "Claude", RuntimeError("Agent execution failed")
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Error:" in result.output
        create_commit.assert_not_called()

    def test_commit_failure(self, mock_main):
        """Test a failing git commit exits with status 1."""
        _, _, create_commit = mock_main
        create_commit.side_effect = GitError("hook rejected")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Failed to create commit" in result.output


class TestProviderCommands:
    """Tests for list-providers and check-provider."""

    def test_list_providers(self):
        """Test all providers are listed."""
        result = runner.invoke(app, ["list-providers"])

        assert result.exit_code == 0
        for name in ("claude", "codex", "gemini", "openai", "anthropic"):
            assert name in result.output

    def test_check_provider_available(self, mocker):
        """Test an available provider exits 0."""
        provider = MagicMock()
        provider.is_available.return_value = True
        provider.get_name.return_value = "claude"
        create = mocker.patch("commitment.cli.providers.create_provider", return_value=provider)

        result = runner.invoke(app, ["check-provider"])

        assert result.exit_code == 0
        assert "Provider 'claude' is available" in result.output
        create.assert_called_once_with({"type": "cli", "provider": "claude"})

    def test_check_provider_unavailable(self, mocker):
        """Test an unavailable provider exits 1."""
        provider = MagicMock()
        provider.is_available.return_value = False
        provider.get_name.return_value = "codex"
        mocker.patch("commitment.cli.providers.create_provider", return_value=provider)

        result = runner.invoke(app, ["check-provider", "--provider", "codex"])

        assert result.exit_code == 1
        assert "not available" in result.output


class TestConfigCommands:
    """Tests for commitment config subcommands."""

    def test_show_without_config(self, config_dir):
        """Test show without any configuration."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "No configuration found" in result.output

    def test_set_agent_and_show(self, config_dir):
        """Test set-agent persists and show displays it."""
        result = runner.invoke(app, ["config", "set-agent", "codex"])
        assert result.exit_code == 0
        assert "Default agent set to: codex" in result.output

        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Agent: codex" in result.output

    def test_set_agent_invalid(self, config_dir):
        """Test set-agent rejects unknown agents."""
        result = runner.invoke(app, ["config", "set-agent", "copilot"])

        assert result.exit_code == 1

    def test_set_key(self, config_dir):
        """Test set-key stores the credential and show masks it."""
        result = runner.invoke(app, ["config", "set-key", "openai"], input="sk-1234567890abcdef\n")

        assert result.exit_code == 0
        assert "API key saved for openai" in result.output
        assert "OPENAI_API_KEY=sk-1234567890abcdef" in (config_dir / "credentials").read_text()

        result = runner.invoke(app, ["config", "show"])
        assert "sk-12345...cdef" in result.output

    def test_set_key_invalid_provider(self, config_dir):
        """Test set-key rejects providers without API keys."""
        result = runner.invoke(app, ["config", "set-key", "claude"])

        assert result.exit_code == 1
        assert "Invalid provider" in result.output


class TestInitCommand:
    """Tests for commitment init."""

    def test_installs_plain_hook(self, mocker, temp_dir):
        """Test init falls back to plain git hooks."""
        install = mocker.patch(
            "commitment.cli.init.install_hook",
            return_value=HookInstallResult("plain", temp_dir / ".git" / "hooks" / "prepare-commit-msg"),
        )

        result = runner.invoke(app, ["init", "--cwd", str(temp_dir), "--agent", "codex"])

        assert result.exit_code == 0
        assert "No hook manager detected" in result.output
        assert "Installed prepare-commit-msg hook with plain" in result.output
        assert "Setup complete" in result.output
        install.assert_called_once_with(Path(temp_dir), "plain", AgentName.CODEX)

    def test_shows_next_steps(self, mocker, temp_dir):
        """Test next steps from the installer are printed."""
        mocker.patch(
            "commitment.cli.init.install_hook",
            return_value=HookInstallResult("lefthook", temp_dir / "lefthook.yml", next_steps=["npx lefthook install"]),
        )

        result = runner.invoke(app, ["init", "--cwd", str(temp_dir), "--hook-manager", "lefthook"])

        assert result.exit_code == 0
        assert "npx lefthook install" in result.output

    def test_invalid_hook_manager(self, temp_dir):
        """Test unknown hook managers are rejected."""
        result = runner.invoke(app, ["init", "--cwd", str(temp_dir), "--hook-manager", "pre-commit"])

        assert result.exit_code == 1
        assert "Invalid hook manager" in result.output

    def test_install_error(self, mocker, temp_dir):
        """Test install failures exit with status 1."""
        from commitment.hooks import HookInstallError

        mocker.patch("commitment.cli.init.install_hook", side_effect=HookInstallError("Not a git repository"))

        result = runner.invoke(app, ["init", "--cwd", str(temp_dir)])

        assert result.exit_code == 1
        assert "Failed to initialize hooks" in result.output


class TestEvalCommand:
    """Tests for commitment eval."""

    def test_requires_judge_key(self, mocker, monkeypatch, config_dir):
        """Test eval fails without OPENAI_API_KEY."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        mocker.patch("commitment.cli.eval.load_config", return_value=CommitmentConfig())

        result = runner.invoke(app, ["eval"])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY is not set" in result.output

    def test_rejects_gemini(self):
        """Test only claude and codex can be evaluated."""
        result = runner.invoke(app, ["eval", "--agent", "gemini"])

        assert result.exit_code == 1
        assert "Valid agents: claude, codex" in result.output

    def test_runs_single_fixture(self, mocker, temp_dir):
        """Test --fixture evaluates one fixture."""
        mocker.patch("commitment.cli.eval.load_config", return_value=CommitmentConfig(results_dir=temp_dir))
        eval_runner = MagicMock()
        eval_runner.json_reporter.run_dir = temp_dir / "run-1"
        build = mocker.patch("commitment.cli.eval.build_eval_runner", return_value=eval_runner)

        result = runner.invoke(app, ["eval", "--fixture", "simple", "--agent", "claude"])

        assert result.exit_code == 0
        assert "Evaluated 1 fixture(s)" in result.output
        build.assert_called_once()
        eval_runner.load_fixture.assert_called_once()
        eval_runner.run_fixture.assert_called_once_with(eval_runner.load_fixture.return_value, "claude")
