"""LLM judge backed by the OpenAI API.

The judge receives a prompt, role instructions and a pydantic model. The
model's JSON schema is sent as the structured output format and the reply
is validated against the same model.
"""

import json
import logging
import os
from typing import Any, Optional, Protocol, TypeVar

from openai import OpenAI
from pydantic import BaseModel, ValidationError

from commitment.config import DEFAULT_JUDGE_MODEL
from commitment.eval.errors import EvaluationError

logger = logging.getLogger(__name__)

JUDGE_API_KEY_ENV_VAR = "OPENAI_API_KEY"

T = TypeVar("T", bound=BaseModel)


class Judge(Protocol):
    """Anything that can score a prompt into a pydantic model."""

    def evaluate(
        self,
        prompt: str,
        schema: type[T],
        instructions: str,
        fixture_name: str = "",
        label: str = "Meta-evaluation",
    ) -> T:
        ...


def parse_json_response(raw_response: str) -> dict:
    """Parse the judge response as JSON.

    Args:
        raw_response: The raw text response from the model.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        ValueError: If parsing fails.
    """
    cleaned = raw_response.strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    # Find the first { and last }
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse judge response as JSON: {e}\nRaw response:\n{raw_response}")

    if not isinstance(parsed, dict):
        raise ValueError(f"Judge response is not a JSON object: {raw_response}")
    return parsed


def get_judge_api_key(api_key: Optional[str] = None) -> str:
    """Resolve the judge API key: explicit value, environment, then credentials file.

    Raises:
        EvaluationError: If no key is found.
    """
    if api_key:
        return api_key

    env_key = os.getenv(JUDGE_API_KEY_ENV_VAR)
    if env_key:
        return env_key

    from commitment.global_config import get_credential

    stored = get_credential(JUDGE_API_KEY_ENV_VAR)
    if stored:
        return stored

    raise EvaluationError.api_key_missing(JUDGE_API_KEY_ENV_VAR)


class ChatGPTJudge:
    """Judge that calls OpenAI chat completions with a JSON schema response format."""

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_JUDGE_MODEL, client: Any = None):
        self.model = model
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = OpenAI(api_key=get_judge_api_key(self._api_key))
        return self._client

    def evaluate(
        self,
        prompt: str,
        schema: type[T],
        instructions: str,
        fixture_name: str = "",
        label: str = "Meta-evaluation",
    ) -> T:
        """Ask the judge to score ``prompt``.

        Args:
            prompt: The evaluation prompt.
            schema: Model describing and validating the expected output.
            instructions: System instructions for the judge.
            fixture_name: Fixture being evaluated, for error messages.
            label: Names the evaluation in error messages.

        Returns:
            The validated judge output.

        Raises:
            EvaluationError: META_EVALUATION_FAILED if the call or parsing fails,
                INVALID_METRICS if the output does not match ``schema``,
                API_KEY_MISSING if no key is configured.
        """
        client = self._get_client()

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": instructions},
                    {"role": "user", "content": prompt},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema.__name__,
                        "schema": schema.model_json_schema(by_alias=True),
                        "strict": False,
                    },
                },
            )
            raw_response = response.choices[0].message.content or ""
            parsed = parse_json_response(raw_response)
        except Exception as e:
            logger.debug("Judge call failed for %s: %s", fixture_name or "prompt", e)
            raise EvaluationError.meta_evaluation_failed(fixture_name, e, label=label) from e

        try:
            return schema.model_validate(parsed)
        except ValidationError as e:
            raise EvaluationError.invalid_metrics(str(e), cause=e) from e
