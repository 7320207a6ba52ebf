"""Google Gemini API provider."""

from google import genai
from google.genai import types

from commitment.config import MAX_TOKENS
from commitment.providers.base import SYSTEM_PROMPT
from commitment.providers.base_api import BaseAPIProvider
from commitment.providers.errors import ProviderAPIError


class GeminiProvider(BaseAPIProvider):
    """Generates messages with the Gemini API via google-genai."""

    display_name = "Gemini API"

    def complete(self, prompt: str, timeout_ms: int) -> str:
        http_options = types.HttpOptions(timeout=timeout_ms, base_url=self.endpoint)
        client = genai.Client(api_key=self.api_key, http_options=http_options)

        response = client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_PROMPT,
                max_output_tokens=MAX_TOKENS,
            ),
        )

        if not response.candidates:
            raise ProviderAPIError(self.get_name(), "no candidates in response")

        candidate = response.candidates[0]
        finish_reason = str(getattr(candidate, "finish_reason", "") or "")
        if "SAFETY" in finish_reason:
            raise ProviderAPIError(self.get_name(), f"response blocked by safety filters: {finish_reason}")

        return response.text or ""
