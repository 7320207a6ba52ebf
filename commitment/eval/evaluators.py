"""Judge-backed evaluators for single attempts and three-attempt runs.

Contains:
- SingleAttemptEvaluator: Score one commit message on four dimensions
- MetaEvaluator: Synthesize a final score across all attempts
"""

import logging
from typing import Sequence

from commitment.config import NUM_ATTEMPTS
from commitment.eval.errors import EvaluationError
from commitment.eval.judge import Judge
from commitment.eval.models import (
    AttemptMetrics,
    AttemptOutcome,
    EvalResult,
    MetaEvaluationOutput,
    SingleAttemptScore,
    SuccessOutcome,
)
from commitment.eval.scoring import get_best_attempt, overall_score, success_rate, successes

logger = logging.getLogger(__name__)

SINGLE_ATTEMPT_INSTRUCTIONS = """You are an expert code reviewer evaluating commit message quality.

Evaluate the commit message across 4 dimensions on a 0-10 scale:

1. **Clarity** (0-10): How clear and understandable is the message?
   - 10: Crystal clear, no ambiguity
   - 5: Somewhat clear but could be improved
   - 0: Confusing or unclear

2. **Specificity** (0-10): Level of detail and precision
   - 10: Perfect level of specificity
   - 5: Too vague or too detailed
   - 0: Missing specifics or overwhelming detail

3. **Conventional Format** (0-10): Adherence to Conventional Commits
   - 10: Perfect format (type: description, proper structure)
   - 5: Correct type but poor structure
   - 0: No conventional format

4. **Scope** (0-10): Appropriate scope and focus
   - 10: Perfect scope definition
   - 5: Scope could be more focused
   - 0: No clear scope or too broad

Provide numeric scores for each dimension."""

SINGLE_ATTEMPT_PROMPT_TEMPLATE = """# Commit Message Evaluation

**Fixture:** {fixture_name}

## Commit Message
```
{commit_message}
```

## Git Diff
```diff
{diff}
```

Evaluate this commit message across all 4 dimensions."""

META_EVALUATION_INSTRUCTIONS = """You are an expert evaluator analyzing the reliability and consistency of an AI commit message generator.

You are evaluating 3 attempts by the same agent on the same fixture. Your job is to:

1. **Calculate Final Score (0-10):**
   - Consider ALL 3 attempts (successes AND failures)
   - Penalize failures: 2/3 success is not the average of 2 scores
   - Examples:
     - 3/3 success with scores 8, 8.5, 9 -> finalScore about 8.5-9.0
     - 2/3 success with scores 8, 9 -> finalScore about 7.0-7.5 (penalized)
     - 1/3 success with score 8 -> finalScore about 4.0-5.0 (heavily penalized)
     - 0/3 success -> finalScore = 0

2. **Calculate Consistency Score (0-10):**
   - How consistent are the successful attempts?
   - 0 if fewer than 2 successes (cannot assess consistency)
   - 10 if all successes have identical or near-identical scores
   - Lower if scores vary significantly

3. **Calculate Error Rate Impact (<= 0):**
   - 0 if 3/3 success
   - -0.5 to -1.0 for 1 failure
   - -2.0 to -3.0 for 2 failures
   - -10.0 for 3 failures

4. **Determine Success Rate:** count successes as "X/3" ("0/3", "1/3", "2/3" or "3/3")

5. **Identify Best Attempt:** attempt number (1, 2 or 3) with the highest score, null if all failed

6. **Provide Reasoning:**
   - Explain the final score calculation
   - Discuss consistency patterns
   - Explain failure impact
   - REQUIRED even for 0/3 success: explain why all failed

Return a structured evaluation following the schema."""

META_EVALUATION_PROMPT_TEMPLATE = """# Meta-Evaluation: 3-Attempt Analysis

**Fixture:** {fixture_name}

## Git Diff Context
```diff
{diff}
```

## All 3 Attempts

{attempt_summaries}

## Task

Evaluate these 3 attempts holistically. Consider:
- How many succeeded vs failed?
- For successes: How consistent are the scores?
- For failures: What types and how severe?
- Overall reliability: Would you trust this agent?

Calculate final score with failure penalties, assess consistency, and provide detailed reasoning."""


class SingleAttemptEvaluator:
    """Scores one commit message with the judge."""

    def __init__(self, judge: Judge):
        self.judge = judge

    def evaluate(self, commit_message: str, diff: str, fixture_name: str) -> SingleAttemptScore:
        """Score a commit message against its diff.

        The overall score is the mean of the four metrics, rounded to one decimal.

        Raises:
            EvaluationError: If the judge call fails or returns invalid scores.
        """
        prompt = SINGLE_ATTEMPT_PROMPT_TEMPLATE.format(
            fixture_name=fixture_name,
            commit_message=commit_message,
            diff=diff,
        )
        metrics = self.judge.evaluate(
            prompt, AttemptMetrics, SINGLE_ATTEMPT_INSTRUCTIONS, fixture_name, label="Attempt evaluation"
        )
        return SingleAttemptScore(metrics=metrics, overall_score=overall_score(metrics))


def _summarize_attempt(attempt: AttemptOutcome) -> str:
    if isinstance(attempt, SuccessOutcome):
        m = attempt.metrics
        return (
            f"**Attempt {attempt.attempt_number}: SUCCESS**\n"
            f"- Commit Message: `{attempt.commit_message}`\n"
            f"- Clarity: {m.clarity}/10\n"
            f"- Specificity: {m.specificity}/10\n"
            f"- Conventional Format: {m.conventional_format}/10\n"
            f"- Scope: {m.scope}/10\n"
            f"- Overall Score: {attempt.overall_score}/10"
        )
    return (
        f"**Attempt {attempt.attempt_number}: FAILURE**\n"
        f"- Failure Type: {attempt.failure_type.value}\n"
        f"- Failure Reason: {attempt.failure_reason}"
    )


class MetaEvaluator:
    """Synthesizes a final score across all attempts of one agent.

    Judge failures are not caught here; callers decide on a fallback.
    """

    def __init__(self, judge: Judge):
        self.judge = judge

    def build_prompt(self, attempts: Sequence[AttemptOutcome], diff: str, fixture_name: str) -> str:
        return META_EVALUATION_PROMPT_TEMPLATE.format(
            fixture_name=fixture_name,
            diff=diff,
            attempt_summaries="\n\n".join(_summarize_attempt(attempt) for attempt in attempts),
        )

    def evaluate(self, attempts: Sequence[AttemptOutcome], diff: str, fixture_name: str) -> EvalResult:
        """Evaluate all attempts of one agent on one fixture.

        Success rate and best attempt are recomputed from the attempts, and
        consistency is 0 when fewer than two attempts succeeded, whatever
        the judge answered.

        Raises:
            EvaluationError: INVALID_ATTEMPT_COUNT before any judge call if
                there are not exactly NUM_ATTEMPTS attempts; any judge error
                is propagated.
        """
        if len(attempts) != NUM_ATTEMPTS:
            raise EvaluationError.invalid_attempt_count(len(attempts), NUM_ATTEMPTS)

        prompt = self.build_prompt(attempts, diff, fixture_name)
        output = self.judge.evaluate(prompt, MetaEvaluationOutput, META_EVALUATION_INSTRUCTIONS, fixture_name)

        rate = success_rate(attempts)
        best = get_best_attempt(attempts)
        if output.success_rate != rate or output.best_attempt != best:
            logger.warning(
                "Judge reported success rate %s / best attempt %s for %s; using %s / %s",
                output.success_rate, output.best_attempt, fixture_name, rate, best,
            )

        consistency = output.consistency_score
        if len(successes(attempts)) < 2:
            consistency = 0

        return EvalResult(
            attempts=list(attempts),
            final_score=output.final_score,
            consistency_score=consistency,
            error_rate_impact=output.error_rate_impact,
            success_rate=rate,
            best_attempt=best,
            reasoning=output.reasoning,
        )
