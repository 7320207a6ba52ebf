"""Score aggregation helpers for evaluation results."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from commitment.config import NUM_ATTEMPTS, TIE_THRESHOLD
from commitment.eval.models import AttemptMetrics, AttemptOutcome, EvalResult, SuccessOutcome, Winner

FALLBACK_REASONING = "[FALLBACK] Meta-evaluation failed. Using simple average of successful attempts."


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def overall_score(metrics: AttemptMetrics) -> float:
    """Average of the four metric dimensions, rounded to one decimal."""
    total = metrics.clarity + metrics.specificity + metrics.conventional_format + metrics.scope
    return round1(total / 4)


def successes(attempts: Sequence[AttemptOutcome]) -> list[SuccessOutcome]:
    return [attempt for attempt in attempts if isinstance(attempt, SuccessOutcome)]


def success_rate(attempts: Sequence[AttemptOutcome]) -> str:
    return f"{len(successes(attempts))}/{NUM_ATTEMPTS}"


def get_best_attempt(attempts: Sequence[AttemptOutcome]) -> Optional[int]:
    """Return the attempt number of the highest-scoring success.

    Ties go to the earliest attempt. Returns None when nothing succeeded.
    """
    best: Optional[SuccessOutcome] = None
    for attempt in successes(attempts):
        if best is None or attempt.overall_score > best.overall_score:
            best = attempt
    return best.attempt_number if best else None


def fallback_result(attempts: Sequence[AttemptOutcome]) -> EvalResult:
    """Score attempts without the judge.

    The final score is the mean of successful attempts (0 if none), each
    failure costs one point of error rate impact, and consistency is 0.
    """
    succeeded = successes(attempts)
    failures = len(attempts) - len(succeeded)
    final_score = round1(sum(a.overall_score for a in succeeded) / len(succeeded)) if succeeded else 0.0

    return EvalResult(
        attempts=list(attempts),
        final_score=final_score,
        consistency_score=0,
        error_rate_impact=-1.0 * failures if failures else 0.0,
        success_rate=success_rate(attempts),
        best_attempt=get_best_attempt(attempts),
        reasoning=FALLBACK_REASONING,
    )


def determine_winner(claude_score: float, codex_score: float) -> Winner:
    """Pick the higher score, or "tie" when they are within TIE_THRESHOLD."""
    diff = round(claude_score - codex_score, 6)
    if abs(diff) <= TIE_THRESHOLD:
        return "tie"
    return "claude" if diff > 0 else "codex"
