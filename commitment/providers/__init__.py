"""Commit message providers.

A provider is a configured backend, either a local AI CLI or a hosted
API, that turns a prompt into a Conventional Commits message. Providers
can be combined into an ordered fallback chain.
"""

from dotenv import load_dotenv

from commitment.providers.auto_detect import detect_available_provider, get_all_available_providers
from commitment.providers.base import BaseProvider
from commitment.providers.chain import ProviderChain
from commitment.providers.errors import (
    ProviderAPIError,
    ProviderChainError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderTimeoutError,
    format_provider_chain_error,
)
from commitment.providers.factory import create_provider
from commitment.providers.types import (
    API_PROVIDERS,
    CLI_PROVIDERS,
    APIProviderConfig,
    CLIProviderConfig,
    ProviderConfig,
    get_default_timeout_ms,
    parse_provider_config,
)

# Load API keys from a .env file, if present
load_dotenv()

__all__ = [
    "API_PROVIDERS",
    "CLI_PROVIDERS",
    "APIProviderConfig",
    "BaseProvider",
    "CLIProviderConfig",
    "ProviderAPIError",
    "ProviderChain",
    "ProviderChainError",
    "ProviderConfig",
    "ProviderError",
    "ProviderNotAvailableError",
    "ProviderTimeoutError",
    "create_provider",
    "detect_available_provider",
    "format_provider_chain_error",
    "get_all_available_providers",
    "get_default_timeout_ms",
    "parse_provider_config",
]
