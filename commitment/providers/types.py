"""Provider configuration types.

A provider is configured either as a local AI CLI (``type: cli``) or as a
hosted API (``type: api``). Configs are immutable value objects; JSON and
YAML use camelCase keys (``timeoutMs``, ``apiKey``).
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from commitment.config import CODEX_PROVIDER_TIMEOUT_MS, DEFAULT_PROVIDER_TIMEOUT_MS

CLIProviderName = Literal["claude", "codex", "gemini"]
APIProviderName = Literal["openai", "gemini", "anthropic"]

CLI_PROVIDERS: tuple[str, ...] = ("claude", "codex", "gemini")
API_PROVIDERS: tuple[str, ...] = ("openai", "gemini", "anthropic")


class _ProviderConfigBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    timeout_ms: Optional[int] = Field(default=None, gt=0)


class CLIProviderConfig(_ProviderConfigBase):
    """A provider backed by a local AI CLI."""

    type: Literal["cli"] = "cli"
    provider: CLIProviderName
    command: Optional[str] = None
    args: Optional[list[str]] = None


class APIProviderConfig(_ProviderConfigBase):
    """A provider backed by a hosted LLM API."""

    type: Literal["api"] = "api"
    provider: APIProviderName
    api_key: str = Field(min_length=1)
    endpoint: Optional[str] = None
    model: Optional[str] = None

    @field_validator("endpoint")
    @classmethod
    def endpoint_is_http_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return v


ProviderConfig = Annotated[
    Union[CLIProviderConfig, APIProviderConfig],
    Field(discriminator="type"),
]

_provider_config_adapter = TypeAdapter(ProviderConfig)


def parse_provider_config(data: Any) -> Union[CLIProviderConfig, APIProviderConfig]:
    """Validate a provider config from a dict (e.g. parsed JSON or YAML).

    Raises:
        ValueError: If the config is invalid, listing every problem.
    """
    try:
        return _provider_config_adapter.validate_python(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in e.errors()
        ]
        raise ValueError("Invalid provider config: " + "; ".join(problems)) from e


def get_default_timeout_ms(config: Union[CLIProviderConfig, APIProviderConfig]) -> int:
    """Return the configured timeout, or the provider's default."""
    if config.timeout_ms is not None:
        return config.timeout_ms
    if config.type == "cli" and config.provider == "codex":
        return CODEX_PROVIDER_TIMEOUT_MS
    return DEFAULT_PROVIDER_TIMEOUT_MS
