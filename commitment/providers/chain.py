"""Ordered provider fallback chain."""

import logging
from typing import Callable, Optional, Sequence, Union

from commitment.providers.base import BaseProvider, ProviderType
from commitment.providers.errors import (
    ProviderChainError,
    ProviderNotAvailableError,
    format_provider_chain_error,
)
from commitment.providers.factory import create_provider
from commitment.providers.types import APIProviderConfig, CLIProviderConfig

logger = logging.getLogger(__name__)

ProviderEntry = Union[CLIProviderConfig, APIProviderConfig, BaseProvider]
ProviderFactory = Callable[[Union[CLIProviderConfig, APIProviderConfig]], BaseProvider]


class ProviderChain(BaseProvider):
    """Tries providers in order and returns the first successful message.

    For each entry the provider is built, checked for availability and asked
    to generate. Any failure is recorded and the next entry is tried; there
    are no retries within a provider. When every entry fails, a
    ProviderChainError lists each provider's failure in order.
    """

    def __init__(self, providers: Sequence[ProviderEntry], factory: ProviderFactory = create_provider):
        if not providers:
            raise ValueError("A provider chain needs at least one provider")
        self._entries = list(providers)
        self._factory = factory
        self.failures: list[tuple[str, BaseException]] = []

    @staticmethod
    def _describe(entry: ProviderEntry) -> str:
        if isinstance(entry, BaseProvider):
            return entry.get_name()
        return f"{entry.provider} ({entry.type})"

    def _resolve(self, entry: ProviderEntry) -> BaseProvider:
        if isinstance(entry, BaseProvider):
            return entry
        return self._factory(entry)

    def get_name(self) -> str:
        return "Provider chain: " + " -> ".join(self._describe(entry) for entry in self._entries)

    def get_provider_type(self) -> ProviderType:
        first = self._entries[0]
        return first.get_provider_type() if isinstance(first, BaseProvider) else first.type

    def is_available(self, workdir: Optional[str] = None) -> bool:
        for entry in self._entries:
            try:
                if self._resolve(entry).is_available(workdir):
                    return True
            except Exception as e:
                logger.debug("Could not build provider %s: %s", self._describe(entry), e)
        return False

    def generate_commit_message(
        self,
        prompt: str,
        workdir: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """Generate with the first provider that succeeds.

        Raises:
            ProviderChainError: If every provider failed.
        """
        attempted: list[str] = []
        errors: list[BaseException] = []
        self.failures = []

        for entry in self._entries:
            name = self._describe(entry)
            try:
                provider = self._resolve(entry)
                name = provider.get_name()
                if not provider.is_available(workdir):
                    raise ProviderNotAvailableError(name)
                message = provider.generate_commit_message(prompt, workdir=workdir, timeout_ms=timeout_ms)
            except Exception as e:
                logger.warning("Provider %s failed, trying next: %s", name, e)
                attempted.append(name)
                errors.append(e)
                self.failures.append((name, e))
                continue

            if attempted:
                logger.info("Provider %s succeeded after %d failure(s)", name, len(attempted))
            return message

        raise ProviderChainError(format_provider_chain_error(attempted, errors), attempted, errors)
