"""Markdown evaluation reports."""

from pathlib import Path

from commitment.eval.models import AttemptOutcome, EvalComparison, EvalResult, SuccessOutcome
from commitment.eval.reporters.json_reporter import update_symlink

REPORT_FILENAME = "report.md"
LATEST_REPORT = "latest-report.md"


def _format_attempt(attempt: AttemptOutcome) -> str:
    lines = [f"#### Attempt {attempt.attempt_number}\n"]

    if isinstance(attempt, SuccessOutcome):
        m = attempt.metrics
        lines += [
            "**Status:** ✓ Success\n",
            f"**Response Time:** {attempt.response_time_ms:.0f}ms\n",
            "**Commit Message:**",
            "```",
            attempt.commit_message,
            "```\n",
            f"**Score:** {attempt.overall_score:.1f}\n",
            "**Metrics:**",
            "| Metric | Score |",
            "| --- | --- |",
            f"| Clarity | {m.clarity:.1f} |",
            f"| Specificity | {m.specificity:.1f} |",
            f"| Conventional Format | {m.conventional_format:.1f} |",
            f"| Scope | {m.scope:.1f} |\n",
        ]
    else:
        lines += [
            "**Status:** ✗ Failed\n",
            f"**Response Time:** {attempt.response_time_ms:.0f}ms\n",
            f"**Failure Type:** {attempt.failure_type.value}\n",
            f"**Failure Reason:** {attempt.failure_reason}\n",
        ]

    return "\n".join(lines)


def _format_agent_result(result: EvalResult) -> str:
    lines = ["### Attempts\n"]
    lines += [_format_attempt(attempt) for attempt in result.attempts]
    lines += [
        "### Meta-Evaluation\n",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Final Score | {result.final_score:.1f} |",
        f"| Consistency Score | {result.consistency_score:.1f} |",
        f"| Error Rate Impact | {result.error_rate_impact:.1f} |",
        f"| Success Rate | {result.success_rate} |",
        f"| Best Attempt | {result.best_attempt if result.best_attempt is not None else 'None'} |\n",
        "**Reasoning:**\n",
        f"{result.reasoning}\n",
    ]
    return "\n".join(lines)


def render_report(comparison: EvalComparison) -> str:
    """Render a comparison as markdown."""
    sections = ["# Evaluation Report\n", f"## Fixture: {comparison.fixture}\n"]

    if comparison.winner:
        label = {"tie": "🤝 Tie", "claude": "🏆 Claude", "codex": "🏆 Codex"}[comparison.winner]
        sections.append(f"## Winner: {label}\n")

    for title, result in (("Claude", comparison.claude_result), ("Codex", comparison.codex_result)):
        sections.append(f"## {title} Results\n")
        sections.append(_format_agent_result(result) if result else "No results available.\n")

    return "\n".join(sections)


class MarkdownReporter:
    """Writes ``report.md`` into a run directory and updates ``latest-report.md``."""

    def __init__(self, results_dir: Path):
        self.results_dir = Path(results_dir)

    def generate_report(self, comparison: EvalComparison, run_dir_name: str) -> Path:
        run_dir = self.results_dir / run_dir_name
        run_dir.mkdir(parents=True, exist_ok=True)

        path = run_dir / REPORT_FILENAME
        path.write_text(render_report(comparison), encoding="utf-8")

        update_symlink(self.results_dir / LATEST_REPORT, Path(run_dir_name) / REPORT_FILENAME)
        return path
