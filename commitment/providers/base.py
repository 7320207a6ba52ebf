"""Base classes for commit message providers."""

import logging
from abc import ABC, abstractmethod
from typing import Literal, Optional

from commitment.agents.cleaning import clean_ai_response, validate_conventional_commit
from commitment.providers.errors import ProviderError

logger = logging.getLogger(__name__)

ProviderType = Literal["cli", "api"]

# Shared by API providers, which need the instruction spelled out
SYSTEM_PROMPT = """You are an expert software engineer writing git commit messages.
Respond with a single Conventional Commits message and nothing else: no preamble,
no markdown fences, no explanation."""


class BaseProvider(ABC):
    """Abstract base class for commit message providers."""

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable provider name used in errors and listings."""
        pass

    @abstractmethod
    def get_provider_type(self) -> ProviderType:
        pass

    @abstractmethod
    def is_available(self, workdir: Optional[str] = None) -> bool:
        """Check whether the provider can be used right now.

        Args:
            workdir: Directory the check runs in (CLI providers only).

        Returns:
            True if the CLI is installed or the API is configured.
        """
        pass

    @abstractmethod
    def generate_commit_message(
        self,
        prompt: str,
        workdir: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """Generate a commit message from a prompt.

        Args:
            prompt: The full generation prompt.
            workdir: Directory to run in (CLI providers only).
            timeout_ms: Override the configured timeout.

        Returns:
            A cleaned, validated Conventional Commits message.

        Raises:
            ProviderError: If generation fails.
        """
        pass

    def finalize_response(self, raw: str) -> str:
        """Clean a raw response and check its format.

        Raises:
            ProviderError: If the cleaned text is not a Conventional Commit.
        """
        message = clean_ai_response(raw)
        if not validate_conventional_commit(message):
            raise ProviderError(
                f"Invalid conventional commit format from {self.get_name()}",
                self.get_name(),
            )
        return message
