"""CLI command for comparing agents on evaluation fixtures."""

from pathlib import Path
from typing import Optional

import typer

from commitment.cli.utils import fail, setup_logging
from commitment.config import FIXTURES_DIR, EvalMode, load_config
from commitment.eval import (
    AttemptRunner,
    ChatGPTJudge,
    EVAL_AGENTS,
    EvalRunner,
    EvaluationError,
    MetaEvaluator,
    SingleAttemptEvaluator,
    get_judge_api_key,
)
from commitment.eval.reporters import CLIReporter, JSONReporter, MarkdownReporter
from commitment.global_config import GlobalConfigError


def build_eval_runner(
    results_dir: Path,
    fixtures_dir: Path = FIXTURES_DIR,
    judge_model: Optional[str] = None,
) -> EvalRunner:
    """Wire the evaluation pipeline with the OpenAI judge and all reporters."""
    judge = ChatGPTJudge(api_key=get_judge_api_key(), **({"model": judge_model} if judge_model else {}))
    reporter = CLIReporter()

    return EvalRunner(
        attempt_runner=AttemptRunner(SingleAttemptEvaluator(judge), reporter),
        meta_evaluator=MetaEvaluator(judge),
        json_reporter=JSONReporter(results_dir),
        markdown_reporter=MarkdownReporter(results_dir),
        fixtures_dir=fixtures_dir,
        reporter=reporter,
    )


def eval_command(
    agent: Optional[str] = typer.Option(
        None,
        "--agent",
        "-a",
        help="Evaluate only this agent (claude or codex)",
    ),
    fixture: Optional[str] = typer.Option(
        None,
        "--fixture",
        "-f",
        help="Fixture to evaluate (defaults to all fixtures)",
    ),
    mode: EvalMode = typer.Option(
        EvalMode.MOCKED,
        "--mode",
        "-m",
        help="Use recorded git output (mocked) or real fixture repositories (live)",
    ),
    results_dir: Optional[Path] = typer.Option(
        None,
        "--results-dir",
        help="Where results and reports are written",
    ),
    fixtures_dir: Path = typer.Option(
        FIXTURES_DIR,
        "--fixtures-dir",
        help="Directory holding the fixtures",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Run claude and codex three times per fixture and compare them."""
    setup_logging(verbose)

    if agent is not None and agent.lower() not in {a.value for a in EVAL_AGENTS}:
        fail(f"Invalid agent: {agent}", "Valid agents: claude, codex")

    try:
        config = load_config()
    except GlobalConfigError as e:
        fail(str(e))

    try:
        runner = build_eval_runner(results_dir or config.results_dir, fixtures_dir, config.judge_model)
        if fixture:
            comparisons = [runner.run_fixture(runner.load_fixture(fixture, mode), agent)]
        else:
            comparisons = runner.run_all(mode, agent)
    except EvaluationError as e:
        fail(e.message)

    typer.echo()
    typer.secho(
        f"✅ Evaluated {len(comparisons)} fixture(s); results in {runner.json_reporter.run_dir}",
        fg=typer.colors.GREEN,
    )
