"""Tests for commitment.eval.categorize module."""

import pytest

from commitment.errors import AgentError, GeneratorError
from commitment.eval.categorize import categorize_error
from commitment.eval.models import FailureKind
from commitment.shell import ShellError


class TestCategorizeError:
    """Tests for categorize_error function."""

    def test_enoent_code_beats_validation_message(self):
        """Test api_error has priority even when the message says validation."""
        error = ShellError("Invalid conventional commit format", code="ENOENT")
        assert categorize_error(error) == FailureKind.API_ERROR

    def test_mapping_with_code(self):
        """Test mapping input with a code."""
        assert categorize_error({"message": "invalid conventional commit", "code": "ENOENT"}) == FailureKind.API_ERROR

    @pytest.mark.parametrize("message,expected", [
        ("sh: claude: command not found", FailureKind.API_ERROR),
        ("Network error while contacting API", FailureKind.API_ERROR),
        ("connect ECONNREFUSED 127.0.0.1", FailureKind.API_ERROR),
        ("Failed to clean response", FailureKind.CLEANING),
        ("Response still contains THINKING tags", FailureKind.CLEANING),
        ("Unbalanced markdown code block", FailureKind.CLEANING),
        ("Invalid conventional commit format from Claude", FailureKind.VALIDATION),
        ("Message does not follow conventional commits", FailureKind.VALIDATION),
        ("Claude CLI timed out after 120000ms", FailureKind.GENERATION),
        ("Codex CLI execution failed (code: 1)", FailureKind.GENERATION),
        ("something completely different", FailureKind.GENERATION),
    ])
    def test_message_patterns(self, message, expected):
        """Test case-insensitive message matching."""
        assert categorize_error(Exception(message)) == expected

    def test_first_match_wins(self):
        """Test cleaning beats validation when both match."""
        assert categorize_error("thinking left in output: invalid format") == FailureKind.CLEANING

    def test_file_not_found(self):
        """Test FileNotFoundError is an api_error."""
        assert categorize_error(FileNotFoundError(2, "No such file")) == FailureKind.API_ERROR

    def test_real_agent_errors(self):
        """Test categorization of the errors agents actually raise."""
        assert categorize_error(AgentError.cli_not_found("claude", "Claude")) == FailureKind.API_ERROR
        assert categorize_error(AgentError.invalid_format("Claude", "thinking...")) == FailureKind.VALIDATION
        assert categorize_error(AgentError.timed_out("Codex", 10)) == FailureKind.GENERATION

    def test_wrapped_generator_error(self):
        """Test the wrapped message still categorizes by its cause."""
        error = GeneratorError.ai_generation_failed("Claude", AgentError.invalid_format("Claude", "x"))
        assert categorize_error(error) == FailureKind.VALIDATION

    @pytest.mark.parametrize("error", [None, Exception(""), "", 42, object()])
    def test_defaults_to_generation(self, error):
        """Test unrecognized and empty inputs default to generation."""
        assert categorize_error(error) == FailureKind.GENERATION
