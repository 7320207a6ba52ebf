"""Provider factory."""

from typing import Any, Union

from commitment.providers.base import BaseProvider
from commitment.providers.types import (
    APIProviderConfig,
    CLIProviderConfig,
    parse_provider_config,
)


def create_provider(config: Union[CLIProviderConfig, APIProviderConfig, dict[str, Any]]) -> BaseProvider:
    """Get a provider instance for a config.

    API providers are imported lazily so their SDKs are only loaded when used.

    Args:
        config: A provider config, or a dict to validate into one.

    Returns:
        An instance of the matching provider.

    Raises:
        ValueError: If the config is invalid or the provider is not supported.
    """
    if isinstance(config, dict):
        config = parse_provider_config(config)

    if isinstance(config, CLIProviderConfig):
        if config.provider == "claude":
            from commitment.providers.claude_provider import ClaudeProvider

            return ClaudeProvider(config)

        elif config.provider == "codex":
            from commitment.providers.codex_provider import CodexProvider

            return CodexProvider(config)

        elif config.provider == "gemini":
            from commitment.providers.gemini_cli_provider import GeminiCLIProvider

            return GeminiCLIProvider(config)

    elif isinstance(config, APIProviderConfig):
        if config.provider == "openai":
            from commitment.providers.openai_provider import OpenAIProvider

            return OpenAIProvider(config)

        elif config.provider == "gemini":
            from commitment.providers.gemini_provider import GeminiProvider

            return GeminiProvider(config)

        elif config.provider == "anthropic":
            from commitment.providers.anthropic_provider import AnthropicProvider

            return AnthropicProvider(config)

    raise ValueError(f"Unsupported provider config: {config!r}")
