"""Evaluation orchestration.

For each fixture: run the attempts for every agent, meta-evaluate them,
save the results and compare the agents.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

from commitment.config import FIXTURES_DIR, AgentName, EvalMode
from commitment.eval.attempt_runner import AttemptRunner
from commitment.eval.errors import EvaluationError
from commitment.eval.evaluators import MetaEvaluator
from commitment.eval.fixture_loader import list_fixture_names
from commitment.eval.fixture_loader import load_fixture as _load_fixture
from commitment.eval.models import EvalComparison, EvalResult, Fixture
from commitment.eval.reporters import JSONReporter, MarkdownReporter
from commitment.eval.scoring import determine_winner, fallback_result

logger = logging.getLogger(__name__)

EVAL_AGENTS = (AgentName.CLAUDE, AgentName.CODEX)


class ProgressReporter(Protocol):
    def report_agent_start(self, agent_name: str, fixture_name: str) -> None: ...

    def report_summary(self, success_rate: str, final_score: float) -> None: ...

    def report_comparison(self, comparison: EvalComparison) -> None: ...


class EvalRunner:
    """Runs claude and codex on fixtures and compares them.

    Args:
        attempt_runner: Runs the attempts for one agent.
        meta_evaluator: Synthesizes the attempts into an EvalResult.
        json_reporter: Persists each EvalResult.
        markdown_reporter: Writes the comparison report.
        fixtures_dir: Directory holding the fixtures.
        reporter: Optional console progress reporter.
    """

    def __init__(
        self,
        attempt_runner: AttemptRunner,
        meta_evaluator: MetaEvaluator,
        json_reporter: JSONReporter,
        markdown_reporter: MarkdownReporter,
        fixtures_dir: Path = FIXTURES_DIR,
        reporter: Optional[ProgressReporter] = None,
    ):
        self.attempt_runner = attempt_runner
        self.meta_evaluator = meta_evaluator
        self.json_reporter = json_reporter
        self.markdown_reporter = markdown_reporter
        self.fixtures_dir = Path(fixtures_dir)
        self.reporter = reporter

    def load_fixture(self, name: str, mode: Union[EvalMode, str] = EvalMode.MOCKED) -> Fixture:
        return _load_fixture(name, mode, self.fixtures_dir)

    def run(self, fixtures: Sequence[Fixture]) -> EvalComparison:
        """Evaluate both agents on the first fixture and write the report.

        Raises:
            EvaluationError: MISSING_FIXTURE if ``fixtures`` is empty.
        """
        if not fixtures:
            raise EvaluationError.missing_fixture("(none)")
        return self.run_fixture(fixtures[0])

    def run_fixture(self, fixture: Fixture, agent: Optional[Union[AgentName, str]] = None) -> EvalComparison:
        """Evaluate one fixture.

        With ``agent`` set only that agent runs, there is no winner and no
        markdown report. Otherwise claude and codex run in that order.
        """
        if agent is not None:
            agent = AgentName(agent)
            if agent not in EVAL_AGENTS:
                raise ValueError(f"Agent {agent.value!r} is not evaluated; choose claude or codex")
            result = self._evaluate_agent(agent, fixture)
            comparison = EvalComparison(fixture=fixture.name, **{f"{agent.value}_result": result})
            if self.reporter:
                self.reporter.report_comparison(comparison)
            return comparison

        claude_result = self._evaluate_agent(AgentName.CLAUDE, fixture)
        codex_result = self._evaluate_agent(AgentName.CODEX, fixture)

        comparison = EvalComparison(
            fixture=fixture.name,
            claude_result=claude_result,
            codex_result=codex_result,
            winner=determine_winner(claude_result.final_score, codex_result.final_score),
        )
        self.markdown_reporter.generate_report(comparison, self.json_reporter.run_dir_name)
        if self.reporter:
            self.reporter.report_comparison(comparison)
        return comparison

    def run_all(
        self,
        mode: Union[EvalMode, str] = EvalMode.MOCKED,
        agent: Optional[Union[AgentName, str]] = None,
    ) -> list[EvalComparison]:
        """Evaluate every fixture available in ``mode``, one after another.

        Raises:
            EvaluationError: MISSING_FIXTURE if there are no fixtures.
        """
        names = list_fixture_names(mode, self.fixtures_dir)
        if not names:
            raise EvaluationError.missing_fixture(f"(no {EvalMode(mode).value} fixtures in {self.fixtures_dir})")

        return [self.run_fixture(self.load_fixture(name, mode), agent) for name in names]

    def _evaluate_agent(self, agent: AgentName, fixture: Fixture) -> EvalResult:
        if self.reporter:
            self.reporter.report_agent_start(agent.value, fixture.name)

        attempts = self.attempt_runner.run_attempts(agent, fixture)

        try:
            result = self.meta_evaluator.evaluate(attempts, fixture.diff, fixture.name)
        except Exception as e:
            logger.warning("Meta-evaluation failed for %s on %s, using fallback scoring: %s", agent.value, fixture.name, e)
            result = fallback_result(attempts)

        if self.reporter:
            self.reporter.report_summary(result.success_rate, result.final_score)

        self.json_reporter.save_results(result, f"{fixture.name}-{agent.value}")
        return result
