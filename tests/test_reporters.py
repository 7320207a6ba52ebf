"""Tests for commitment.eval.reporters package."""

import json

from commitment.eval.models import EvalComparison, EvalResult, FailureKind
from commitment.eval.reporters import CLIReporter, JSONReporter, MarkdownReporter, render_report


def make_result(attempts, final_score=7.5, success_rate="2/3", best_attempt=1):
    return EvalResult(
        attempts=attempts,
        final_score=final_score,
        consistency_score=6.0,
        error_rate_impact=-1.0,
        success_rate=success_rate,
        best_attempt=best_attempt,
        reasoning="One failure lowered the score.",
    )


class TestJSONReporter:
    """Tests for JSONReporter."""

    def test_save_results(self, temp_dir, make_success, make_failure):
        """Test the result is written with camelCase keys and linked as latest."""
        reporter = JSONReporter(temp_dir, run_dir_name="2026-01-02T03-04-05")
        result = make_result([make_success(1), make_failure(2), make_success(3)])

        path = reporter.save_results(result, "simple-claude")

        assert path == temp_dir / "2026-01-02T03-04-05" / "simple-claude.json"
        data = json.loads(path.read_text())
        assert data["finalScore"] == 7.5
        assert data["successRate"] == "2/3"
        latest = temp_dir / "latest-simple-claude.json"
        assert latest.is_symlink()
        assert json.loads(latest.read_text()) == data

    def test_latest_link_replaced(self, temp_dir, make_success):
        """Test a second run repoints the latest link."""
        result = make_result([make_success(1), make_success(2), make_success(3)], success_rate="3/3")
        JSONReporter(temp_dir, run_dir_name="run-a").save_results(result, "simple-codex")

        JSONReporter(temp_dir, run_dir_name="run-b").save_results(result, "simple-codex")

        latest = temp_dir / "latest-simple-codex.json"
        assert latest.resolve() == (temp_dir / "run-b" / "simple-codex.json").resolve()

    def test_default_run_dir_name(self, temp_dir):
        """Test the run directory is timestamped."""
        reporter = JSONReporter(temp_dir)
        assert reporter.run_dir_name[4] == "-"
        assert "T" in reporter.run_dir_name


class TestRenderReport:
    """Tests for render_report function."""

    def test_winner_and_sections(self, make_success, make_failure):
        """Test the report includes winner, attempts and meta-evaluation."""
        claude = make_result([make_success(1), make_failure(2, FailureKind.API_ERROR), make_success(3)])
        comparison = EvalComparison(fixture="simple", claude_result=claude, winner="claude")

        report = render_report(comparison)

        assert "# Evaluation Report" in report
        assert "## Fixture: simple" in report
        assert "## Winner: 🏆 Claude" in report
        assert "**Status:** ✗ Failed" in report
        assert "**Failure Type:** api_error" in report
        assert "| Final Score | 7.5 |" in report
        assert "## Codex Results\n\nNo results available." in report

    def test_tie(self, make_success):
        """Test the tie label."""
        result = make_result([make_success(1), make_success(2), make_success(3)], success_rate="3/3")
        comparison = EvalComparison(fixture="simple", claude_result=result, codex_result=result, winner="tie")

        assert "## Winner: 🤝 Tie" in render_report(comparison)

    def test_no_best_attempt(self, make_failure):
        """Test an all-failed result shows None as best attempt."""
        result = make_result(
            [make_failure(1), make_failure(2), make_failure(3)], final_score=0, success_rate="0/3", best_attempt=None
        )

        report = render_report(EvalComparison(fixture="simple", codex_result=result))

        assert "| Best Attempt | None |" in report
        assert "Winner" not in report


class TestMarkdownReporter:
    """Tests for MarkdownReporter."""

    def test_generate_report(self, temp_dir, make_success):
        """Test report.md is written and latest-report.md points to it."""
        result = make_result([make_success(1), make_success(2), make_success(3)], success_rate="3/3")
        comparison = EvalComparison(fixture="simple", claude_result=result, codex_result=result, winner="tie")

        path = MarkdownReporter(temp_dir).generate_report(comparison, "run-1")

        assert path == temp_dir / "run-1" / "report.md"
        assert (temp_dir / "latest-report.md").read_text() == path.read_text()


class TestCLIReporter:
    """Tests for CLIReporter."""

    def test_attempt_success(self, capsys):
        """Test success lines include score and time."""
        CLIReporter().report_attempt_success(1, 8.0, 1234)

        assert "Attempt 1: Success (score: 8.0, 1234ms)" in capsys.readouterr().out

    def test_failure_reason_truncated(self, capsys):
        """Test long failure reasons are cut at 120 characters."""
        CLIReporter().report_attempt_failure(2, FailureKind.GENERATION, 10, "x" * 200)

        out = capsys.readouterr().out
        assert "Attempt 2: Failed (generation, 10ms)" in out
        assert "x" * 120 + "..." in out
        assert "x" * 121 not in out

    def test_summary(self, capsys):
        """Test the summary shows success rate and final score."""
        CLIReporter().report_summary("2/3", 7.46)

        out = capsys.readouterr().out
        assert "Success Rate: 2/3" in out
        assert "Final Score: 7.5" in out

    def test_comparison_without_winner(self, capsys):
        """Test nothing is printed without a winner."""
        CLIReporter().report_comparison(EvalComparison(fixture="simple"))

        assert capsys.readouterr().out == ""
