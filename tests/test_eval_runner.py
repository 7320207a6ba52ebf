"""Tests for commitment.eval.eval_runner module."""

from unittest.mock import MagicMock

import pytest

from commitment.config import AgentName
from commitment.eval.errors import EvaluationError
from commitment.eval.eval_runner import EvalRunner
from commitment.eval.models import EvalResult
from commitment.eval.reporters import JSONReporter, MarkdownReporter
from commitment.eval.scoring import FALLBACK_REASONING


def make_result(attempts, final_score):
    return EvalResult(
        attempts=attempts,
        final_score=final_score,
        consistency_score=8.0,
        error_rate_impact=0.0,
        success_rate="3/3",
        best_attempt=1,
        reasoning="Solid attempts",
    )


@pytest.fixture
def attempts(make_success):
    return [make_success(1), make_success(2), make_success(3)]


@pytest.fixture
def runner_parts(temp_dir, attempts):
    attempt_runner = MagicMock()
    attempt_runner.run_attempts.return_value = attempts
    meta_evaluator = MagicMock()
    meta_evaluator.evaluate.side_effect = [make_result(attempts, 8.5), make_result(attempts, 7.0)]
    json_reporter = JSONReporter(temp_dir, run_dir_name="run-1")
    markdown_reporter = MarkdownReporter(temp_dir)
    reporter = MagicMock()
    runner = EvalRunner(
        attempt_runner,
        meta_evaluator,
        json_reporter,
        markdown_reporter,
        fixtures_dir=temp_dir / "fixtures",
        reporter=reporter,
    )
    return runner, attempt_runner, meta_evaluator, reporter


def write_fixture(fixtures_dir, name):
    path = fixtures_dir / name
    path.mkdir(parents=True)
    (path / "metadata.json").write_text(f'{{"name": "{name}"}}')
    (path / "mock-status.txt").write_text("M  app.py\n")
    (path / "mock-diff.txt").write_text("diff --git a/app.py b/app.py\n")


class TestRunFixture:
    """Tests for EvalRunner.run_fixture."""

    def test_compares_both_agents(self, runner_parts, sample_fixture, temp_dir):
        """Test claude then codex run and the higher score wins."""
        runner, attempt_runner, _, reporter = runner_parts

        comparison = runner.run_fixture(sample_fixture)

        agents = [c.args[0] for c in attempt_runner.run_attempts.call_args_list]
        assert agents == [AgentName.CLAUDE, AgentName.CODEX]
        assert comparison.winner == "claude"
        assert comparison.claude_result.final_score == 8.5
        assert comparison.codex_result.final_score == 7.0
        reporter.report_comparison.assert_called_once_with(comparison)

    def test_saves_results_and_report(self, runner_parts, sample_fixture, temp_dir):
        """Test JSON results and the markdown report are written."""
        runner, _, _, _ = runner_parts

        runner.run_fixture(sample_fixture)

        run_dir = temp_dir / "run-1"
        assert (run_dir / "simple-claude.json").exists()
        assert (run_dir / "simple-codex.json").exists()
        assert (run_dir / "report.md").exists()
        assert (temp_dir / "latest-report.md").is_symlink()

    def test_tie(self, runner_parts, sample_fixture, attempts):
        """Test scores within the threshold tie."""
        runner, _, meta_evaluator, _ = runner_parts
        meta_evaluator.evaluate.side_effect = [make_result(attempts, 8.0), make_result(attempts, 8.05)]

        comparison = runner.run_fixture(sample_fixture)

        assert comparison.winner == "tie"

    def test_meta_failure_uses_fallback(self, runner_parts, sample_fixture, attempts):
        """Test a failing meta-evaluation falls back to simple averaging."""
        runner, _, meta_evaluator, _ = runner_parts
        meta_evaluator.evaluate.side_effect = [
            EvaluationError.meta_evaluation_failed("simple", RuntimeError("503")),
            make_result(attempts, 7.0),
        ]

        comparison = runner.run_fixture(sample_fixture)

        assert comparison.claude_result.reasoning == FALLBACK_REASONING
        assert comparison.claude_result.final_score == 8.0
        assert comparison.claude_result.consistency_score == 0
        assert comparison.winner == "claude"

    def test_single_agent(self, runner_parts, sample_fixture, temp_dir):
        """Test a single agent run has no winner and no report."""
        runner, attempt_runner, _, _ = runner_parts

        comparison = runner.run_fixture(sample_fixture, AgentName.CODEX)

        attempt_runner.run_attempts.assert_called_once_with(AgentName.CODEX, sample_fixture)
        assert comparison.codex_result is not None
        assert comparison.claude_result is None
        assert comparison.winner is None
        assert not (temp_dir / "run-1" / "report.md").exists()

    def test_rejects_other_agents(self, runner_parts, sample_fixture):
        """Test gemini is not an evaluated agent."""
        runner, _, _, _ = runner_parts

        with pytest.raises(ValueError):
            runner.run_fixture(sample_fixture, "gemini")


class TestRun:
    """Tests for EvalRunner.run and run_all."""

    def test_empty_fixtures(self, runner_parts):
        """Test an empty fixture list raises MISSING_FIXTURE."""
        runner, _, _, _ = runner_parts

        with pytest.raises(EvaluationError) as exc_info:
            runner.run([])

        assert exc_info.value.code == "MISSING_FIXTURE"

    def test_runs_first_fixture(self, runner_parts, sample_fixture):
        """Test run evaluates the first fixture."""
        runner, _, _, _ = runner_parts

        comparison = runner.run([sample_fixture])

        assert comparison.fixture == "simple"

    def test_run_all(self, runner_parts, temp_dir, attempts):
        """Test every fixture in the directory is evaluated in order."""
        runner, _, meta_evaluator, _ = runner_parts
        write_fixture(temp_dir / "fixtures", "beta")
        write_fixture(temp_dir / "fixtures", "alpha")
        meta_evaluator.evaluate.side_effect = None
        meta_evaluator.evaluate.return_value = make_result(attempts, 8.0)

        comparisons = runner.run_all()

        assert [c.fixture for c in comparisons] == ["alpha", "beta"]

    def test_run_all_without_fixtures(self, runner_parts):
        """Test run_all with no fixtures raises MISSING_FIXTURE."""
        runner, _, _, _ = runner_parts

        with pytest.raises(EvaluationError) as exc_info:
            runner.run_all()

        assert exc_info.value.code == "MISSING_FIXTURE"
