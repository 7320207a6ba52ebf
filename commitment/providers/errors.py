"""Provider exception classes.

Contains:
- ProviderError: Base exception for provider failures
- ProviderNotAvailableError: The provider cannot be used (CLI missing, no key)
- ProviderTimeoutError: The provider did not answer in time
- ProviderAPIError: A hosted API returned an error
- ProviderChainError: Every provider in a chain failed
"""

from typing import Optional


class ProviderError(Exception):
    """Base exception for provider failures."""

    def __init__(self, message: str, provider_name: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.provider_name = provider_name
        self.cause = cause


class ProviderNotAvailableError(ProviderError):
    """Raised when a provider is not installed or not configured."""

    def __init__(self, provider_name: str, reason: Optional[str] = None):
        message = f"Provider '{provider_name}' is not available"
        if reason:
            message += f": {reason}"
        super().__init__(message, provider_name)
        self.reason = reason


class ProviderTimeoutError(ProviderError):
    """Raised when a provider exceeds its timeout."""

    def __init__(self, provider_name: str, timeout_ms: int, operation: str = "generation"):
        super().__init__(
            f"Provider '{provider_name}' timed out after {timeout_ms}ms during {operation}",
            provider_name,
        )
        self.timeout_ms = timeout_ms
        self.operation = operation


class ProviderAPIError(ProviderError):
    """Raised when a hosted API call fails."""

    def __init__(
        self,
        provider_name: str,
        message: str,
        status_code: Optional[int] = None,
        api_message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        full_message = f"Provider '{provider_name}' API error"
        if status_code is not None:
            full_message += f" (status {status_code})"
        full_message += f": {message}"
        super().__init__(full_message, provider_name, cause)
        self.status_code = status_code
        self.api_message = api_message


class ProviderChainError(Exception):
    """Raised when every provider in a chain failed."""

    def __init__(self, message: str, attempted_providers: list[str], errors: list[BaseException]):
        super().__init__(message)
        self.message = message
        self.attempted_providers = attempted_providers
        self.errors = errors


def format_provider_chain_error(attempted_providers: list[str], errors: list[BaseException]) -> str:
    """Build the aggregate failure message, one numbered line per provider."""
    lines = [f"All {len(attempted_providers)} provider(s) failed:"]
    for index, (name, error) in enumerate(zip(attempted_providers, errors), start=1):
        lines.append(f"  {index}. {name}: {error}")
    return "\n".join(lines)
