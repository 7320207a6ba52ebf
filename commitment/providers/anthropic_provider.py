"""Anthropic API provider."""

from anthropic import Anthropic

from commitment.config import MAX_TOKENS
from commitment.providers.base import SYSTEM_PROMPT
from commitment.providers.base_api import BaseAPIProvider


class AnthropicProvider(BaseAPIProvider):
    """Generates messages with the Anthropic messages API."""

    display_name = "Anthropic API"

    def complete(self, prompt: str, timeout_ms: int) -> str:
        client = Anthropic(
            api_key=self.api_key,
            base_url=self.endpoint,
            timeout=timeout_ms / 1000,
        )

        message = client.messages.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )

        # Text blocks only; tool-use blocks carry no message text
        return "".join(block.text for block in message.content if getattr(block, "type", None) == "text")
