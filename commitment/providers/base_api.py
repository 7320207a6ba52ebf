"""Shared behaviour for providers backed by a hosted LLM API."""

from abc import abstractmethod
from typing import Optional

from commitment.config import DEFAULT_API_MODELS
from commitment.providers.base import BaseProvider, ProviderType
from commitment.providers.errors import (
    ProviderAPIError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderTimeoutError,
)
from commitment.providers.types import APIProviderConfig, get_default_timeout_ms


class BaseAPIProvider(BaseProvider):
    """Calls a vendor SDK and validates the returned text."""

    display_name: str = "API"

    def __init__(self, config: APIProviderConfig):
        self.config = config
        self.api_key = config.api_key
        self.endpoint = config.endpoint
        self.model = config.model or DEFAULT_API_MODELS[config.provider]
        self.timeout_ms = get_default_timeout_ms(config)

    def get_name(self) -> str:
        return self.display_name

    def get_provider_type(self) -> ProviderType:
        return "api"

    def is_available(self, workdir: Optional[str] = None) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def complete(self, prompt: str, timeout_ms: int) -> str:
        """Send ``prompt`` to the API and return the response text."""
        pass

    def generate_commit_message(
        self,
        prompt: str,
        workdir: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> str:
        if not self.is_available():
            raise ProviderNotAvailableError(self.get_name(), "no API key configured")

        effective_timeout = timeout_ms or self.timeout_ms
        try:
            raw = self.complete(prompt, effective_timeout)
        except ProviderError:
            raise
        except Exception as e:
            if "timeout" in type(e).__name__.lower():
                raise ProviderTimeoutError(self.get_name(), effective_timeout) from e
            raise ProviderAPIError(
                self.get_name(),
                str(e),
                status_code=getattr(e, "status_code", None),
                api_message=getattr(e, "message", None),
                cause=e,
            ) from e

        if not raw or not raw.strip():
            raise ProviderAPIError(self.get_name(), "empty response")
        return self.finalize_response(raw)
