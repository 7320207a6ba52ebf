"""Runs the fixed number of generation attempts for one agent."""

import logging
import tempfile
import time
from typing import Callable, Optional, Protocol

from commitment.config import NUM_ATTEMPTS, AgentName
from commitment.eval.categorize import categorize_error
from commitment.eval.evaluators import SingleAttemptEvaluator
from commitment.eval.models import AttemptOutcome, FailureKind, FailureOutcome, Fixture, SuccessOutcome
from commitment.generator import ChangesetTask, CommitMessageGenerator, GenerationOptions
from commitment.git import MockGitProvider

logger = logging.getLogger(__name__)

GeneratorFactory = Callable[[AgentName, Fixture], CommitMessageGenerator]


class AttemptReporter(Protocol):
    def report_attempt_start(self, attempt_number: int) -> None: ...

    def report_attempt_success(self, attempt_number: int, score: float, response_time_ms: float) -> None: ...

    def report_attempt_failure(
        self,
        attempt_number: int,
        failure_type: FailureKind,
        response_time_ms: float,
        failure_reason: str = "",
    ) -> None: ...


def default_generator_factory(agent: AgentName, fixture: Fixture) -> CommitMessageGenerator:
    """Generator answering git queries from the fixture, with no signature and no fallback."""
    return CommitMessageGenerator(
        agent=agent,
        git_provider=MockGitProvider(diff=fixture.diff, status=fixture.status),
        signature="",
        fallback_to_rules=False,
    )


def files_from_status(status: str) -> list[str]:
    """Extract file paths from porcelain status lines."""
    files = []
    for line in status.splitlines():
        if len(line.strip()) == 0 or len(line) <= 3:
            continue
        path = line[3:].strip()
        if path:
            files.append(path)
    return files


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000)


class AttemptRunner:
    """Runs NUM_ATTEMPTS independent generate-then-evaluate attempts.

    A failing attempt, whether in generation or evaluation, is categorized
    and recorded; it never stops the remaining attempts.
    """

    def __init__(
        self,
        evaluator: SingleAttemptEvaluator,
        reporter: AttemptReporter,
        generator_factory: Optional[GeneratorFactory] = None,
        attempts: int = NUM_ATTEMPTS,
    ):
        self.evaluator = evaluator
        self.reporter = reporter
        self.generator_factory = generator_factory or default_generator_factory
        self.attempts = attempts

    def run_attempts(self, agent: AgentName, fixture: Fixture) -> list[AttemptOutcome]:
        """Run every attempt for ``agent`` on ``fixture``.

        Returns:
            One outcome per attempt, numbered 1..N in order. Never raises.
        """
        outcomes: list[AttemptOutcome] = []

        for attempt_number in range(1, self.attempts + 1):
            self.reporter.report_attempt_start(attempt_number)
            start = time.perf_counter()

            try:
                commit_message = self._generate_message(agent, fixture)
                response_time_ms = _elapsed_ms(start)
                score = self.evaluator.evaluate(commit_message, fixture.diff, fixture.name)
            except Exception as e:
                response_time_ms = _elapsed_ms(start)
                failure_type = categorize_error(e)
                failure_reason = str(e) or type(e).__name__
                logger.info("Attempt %d for %s failed (%s): %s", attempt_number, agent.value, failure_type.value, e)

                outcomes.append(
                    FailureOutcome(
                        attempt_number=attempt_number,
                        failure_type=failure_type,
                        failure_reason=failure_reason,
                        response_time_ms=response_time_ms,
                    )
                )
                self.reporter.report_attempt_failure(attempt_number, failure_type, response_time_ms, failure_reason)
                continue

            outcomes.append(
                SuccessOutcome(
                    attempt_number=attempt_number,
                    commit_message=commit_message,
                    metrics=score.metrics,
                    overall_score=score.overall_score,
                    response_time_ms=response_time_ms,
                )
            )
            self.reporter.report_attempt_success(attempt_number, score.overall_score, response_time_ms)

        return outcomes

    def _generate_message(self, agent: AgentName, fixture: Fixture) -> str:
        generator = self.generator_factory(agent, fixture)
        task = ChangesetTask(
            title=f"Changes for {fixture.name}",
            description=f"Implement changes for {fixture.name}",
            produced_files=files_from_status(fixture.status),
        )
        # Mocked git needs no repository, only an existing directory
        options = GenerationOptions(working_directory=tempfile.gettempdir())
        return generator.generate_commit_message(task, options)
