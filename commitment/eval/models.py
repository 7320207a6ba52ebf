"""Pydantic models for the evaluation system.

Models serialize with camelCase keys (``attemptNumber``, ``overallScore``)
so result files stay stable; Python code uses snake_case attributes.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from commitment.config import NUM_ATTEMPTS

SuccessRate = Literal["0/3", "1/3", "2/3", "3/3"]
AgentLabel = Literal["claude", "codex"]
Winner = Literal["claude", "codex", "tie"]

Score = Annotated[float, Field(ge=0, le=10)]
AttemptNumber = Annotated[int, Field(ge=1, le=NUM_ATTEMPTS)]


class EvalModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FailureKind(str, Enum):
    """Why an attempt failed, in detection priority order."""

    API_ERROR = "api_error"
    CLEANING = "cleaning"
    VALIDATION = "validation"
    GENERATION = "generation"


class AttemptMetrics(EvalModel):
    """Judge scores for one commit message."""

    clarity: Score = Field(description="Clarity and readability score (0-10)")
    specificity: Score = Field(description="Detail and precision score (0-10)")
    conventional_format: Score = Field(description="Conventional Commits compliance score (0-10)")
    scope: Score = Field(description="Scope appropriateness score (0-10)")


class SingleAttemptScore(EvalModel):
    metrics: AttemptMetrics
    overall_score: Score


class SuccessOutcome(EvalModel):
    status: Literal["success"] = "success"
    attempt_number: AttemptNumber
    commit_message: str = Field(min_length=1)
    metrics: AttemptMetrics
    overall_score: Score
    response_time_ms: float = Field(ge=0)


class FailureOutcome(EvalModel):
    status: Literal["failure"] = "failure"
    attempt_number: AttemptNumber
    failure_type: FailureKind
    failure_reason: str = Field(min_length=1)
    response_time_ms: float = Field(ge=0)


AttemptOutcome = Annotated[Union[SuccessOutcome, FailureOutcome], Field(discriminator="status")]


class MetaEvaluationOutput(EvalModel):
    """What the judge returns when synthesizing three attempts."""

    final_score: Score = Field(description="Overall score across all attempts (0-10)")
    consistency_score: Score = Field(
        description="How consistent the successful attempts are (0-10); 0 with fewer than 2 successes"
    )
    error_rate_impact: float = Field(le=0, description="Penalty for failed attempts (0 or negative)")
    success_rate: SuccessRate = Field(description='Successful attempts out of 3, e.g. "2/3"')
    best_attempt: Optional[AttemptNumber] = Field(
        default=None,
        description="Attempt number of the highest-scoring success; null if none succeeded",
    )
    reasoning: str = Field(min_length=1, description="Explanation of the final score")


class EvalResult(MetaEvaluationOutput):
    """Final evaluation of one agent on one fixture."""

    attempts: list[AttemptOutcome] = Field(min_length=NUM_ATTEMPTS, max_length=NUM_ATTEMPTS)

    @model_validator(mode="after")
    def check_attempts(self) -> "EvalResult":
        numbers = [attempt.attempt_number for attempt in self.attempts]
        if numbers != list(range(1, NUM_ATTEMPTS + 1)):
            raise ValueError(f"attempt numbers must be 1..{NUM_ATTEMPTS} in order, got {numbers}")
        if (self.success_rate == "0/3") != (self.best_attempt is None):
            raise ValueError("best_attempt must be set exactly when at least one attempt succeeded")
        return self


class EvalComparison(EvalModel):
    """Side-by-side result for one fixture."""

    fixture: str
    claude_result: Optional[EvalResult] = None
    codex_result: Optional[EvalResult] = None
    winner: Optional[Winner] = None


class FixtureMetadata(EvalModel):
    name: str
    description: str = ""
    expected_type: Optional[str] = None


class Fixture(EvalModel):
    """A recorded or live changeset used as evaluation input."""

    name: str
    status: str
    diff: str
    metadata: Optional[FixtureMetadata] = None
