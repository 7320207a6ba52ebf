"""Console progress reporting for evaluation runs."""

import typer

from commitment.eval.models import EvalComparison, FailureKind

MAX_REASON_LENGTH = 120
RULE = "━" * 34


class CLIReporter:
    """Prints coloured per-attempt progress and run summaries."""

    def report_agent_start(self, agent_name: str, fixture_name: str) -> None:
        typer.secho(f"\n{agent_name} on {fixture_name}", bold=True)

    def report_attempt_start(self, attempt_number: int) -> None:
        typer.secho(f"▶ Attempt {attempt_number}...", fg=typer.colors.BRIGHT_BLACK)

    def report_attempt_success(self, attempt_number: int, score: float, response_time_ms: float) -> None:
        typer.secho(
            f"  ✓ Attempt {attempt_number}: Success (score: {score:.1f}, {response_time_ms:.0f}ms)",
            fg=typer.colors.GREEN,
        )

    def report_attempt_failure(
        self,
        attempt_number: int,
        failure_type: FailureKind,
        response_time_ms: float,
        failure_reason: str = "",
    ) -> None:
        typer.secho(
            f"  ✗ Attempt {attempt_number}: Failed ({failure_type.value}, {response_time_ms:.0f}ms)",
            fg=typer.colors.RED,
        )
        if failure_reason:
            if len(failure_reason) > MAX_REASON_LENGTH:
                failure_reason = failure_reason[:MAX_REASON_LENGTH] + "..."
            typer.secho(f"    {failure_reason}", fg=typer.colors.BRIGHT_BLACK)

    def report_summary(self, success_rate: str, final_score: float) -> None:
        if success_rate == "3/3":
            rate_color = typer.colors.GREEN
        elif success_rate == "0/3":
            rate_color = typer.colors.RED
        else:
            rate_color = typer.colors.YELLOW

        typer.secho(f"\n{RULE}", fg=typer.colors.BRIGHT_BLACK)
        typer.secho("Summary:", bold=True)
        typer.echo("  Success Rate: " + typer.style(success_rate, fg=rate_color))
        typer.echo("  Final Score: " + typer.style(f"{final_score:.1f}", fg=typer.colors.CYAN))
        typer.secho(f"{RULE}\n", fg=typer.colors.BRIGHT_BLACK)

    def report_comparison(self, comparison: EvalComparison) -> None:
        if comparison.winner is None:
            return
        label = "Tie" if comparison.winner == "tie" else comparison.winner.capitalize()
        typer.secho(f"Winner for {comparison.fixture}: {label}", fg=typer.colors.CYAN, bold=True)
