"""OpenAI API provider."""

from openai import OpenAI

from commitment.providers.base import SYSTEM_PROMPT
from commitment.providers.base_api import BaseAPIProvider


class OpenAIProvider(BaseAPIProvider):
    """Generates messages with the OpenAI chat completions API."""

    display_name = "OpenAI API"

    def complete(self, prompt: str, timeout_ms: int) -> str:
        client = OpenAI(
            api_key=self.api_key,
            base_url=self.endpoint,
            timeout=timeout_ms / 1000,
        )

        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )

        return response.choices[0].message.content or ""
