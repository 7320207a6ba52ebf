"""Evaluation harness comparing commit message agents."""

from commitment.eval.attempt_runner import AttemptRunner, default_generator_factory, files_from_status
from commitment.eval.categorize import categorize_error
from commitment.eval.errors import EvaluationError
from commitment.eval.eval_runner import EVAL_AGENTS, EvalRunner
from commitment.eval.evaluators import MetaEvaluator, SingleAttemptEvaluator
from commitment.eval.fixture_loader import list_fixture_names, load_fixture
from commitment.eval.judge import ChatGPTJudge, Judge, get_judge_api_key
from commitment.eval.models import (
    AttemptMetrics,
    AttemptOutcome,
    EvalComparison,
    EvalResult,
    FailureKind,
    FailureOutcome,
    Fixture,
    FixtureMetadata,
    MetaEvaluationOutput,
    SingleAttemptScore,
    SuccessOutcome,
)
from commitment.eval.scoring import determine_winner, fallback_result, get_best_attempt, overall_score

__all__ = [
    "AttemptMetrics",
    "AttemptOutcome",
    "AttemptRunner",
    "ChatGPTJudge",
    "EVAL_AGENTS",
    "EvalComparison",
    "EvalResult",
    "EvalRunner",
    "EvaluationError",
    "FailureKind",
    "FailureOutcome",
    "Fixture",
    "FixtureMetadata",
    "Judge",
    "MetaEvaluationOutput",
    "MetaEvaluator",
    "SingleAttemptEvaluator",
    "SingleAttemptScore",
    "SuccessOutcome",
    "categorize_error",
    "default_generator_factory",
    "determine_winner",
    "fallback_result",
    "files_from_status",
    "get_best_attempt",
    "get_judge_api_key",
    "list_fixture_names",
    "load_fixture",
    "overall_score",
]
