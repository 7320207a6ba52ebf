"""Detection of locally installed AI CLIs."""

from typing import Optional

from commitment.providers.factory import create_provider
from commitment.providers.types import CLI_PROVIDERS, CLIProviderConfig


def get_all_available_providers() -> list[CLIProviderConfig]:
    """Return a config for every installed AI CLI, in preference order."""
    available = []
    for name in CLI_PROVIDERS:
        config = CLIProviderConfig(provider=name)
        if create_provider(config).is_available():
            available.append(config)
    return available


def detect_available_provider() -> Optional[CLIProviderConfig]:
    """Return the first installed AI CLI (claude, codex, gemini), or None."""
    for name in CLI_PROVIDERS:
        config = CLIProviderConfig(provider=name)
        if create_provider(config).is_available():
            return config
    return None
