"""Shared utility functions for CLI commands."""

import json
import logging
import os
from typing import Any, Optional

import typer

from commitment import global_config
from commitment.config import API_KEY_ENV_VARS, AgentName
from commitment.providers import API_PROVIDERS, CLI_PROVIDERS, parse_provider_config


def setup_logging(verbose: bool = False) -> None:
    """Configure logging once for the CLI: WARNING by default, DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def fail(message: str, hint: Optional[str] = None) -> None:
    """Print an error to stderr and exit with status 1."""
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.echo(hint, err=True)
    raise typer.Exit(1)


def parse_agent(name: Optional[str]) -> Optional[AgentName]:
    """Validate an agent name from the command line."""
    if name is None:
        return None
    try:
        return AgentName(name.lower())
    except ValueError:
        valid = ", ".join(agent.value for agent in AgentName)
        fail(f"Invalid agent: {name}", f"Valid agents: {valid}")


def provider_config_from_name(name: str) -> dict[str, Any]:
    """Build a provider config dict from a bare provider name.

    CLI names (claude, codex, gemini) map to CLI providers; openai and
    anthropic map to API providers whose key comes from the environment or
    the credentials file.
    """
    name = name.lower()
    if name in CLI_PROVIDERS:
        return {"type": "cli", "provider": name}
    if name in API_PROVIDERS:
        env_var = API_KEY_ENV_VARS[name]
        api_key = os.getenv(env_var) or global_config.get_credential(env_var)
        if not api_key:
            fail(f"{env_var} is not set", f"Run: commitment config set-key {name}")
        return {"type": "api", "provider": name, "api_key": api_key}

    valid = ", ".join(dict.fromkeys(CLI_PROVIDERS + API_PROVIDERS))
    fail(f"Unknown provider: {name}", f"Available providers: {valid}")


def parse_provider_config_json(text: str) -> dict[str, Any]:
    """Parse and validate ``--provider-config`` JSON."""
    example = 'Example: --provider-config \'{"type":"cli","provider":"claude"}\''
    try:
        data = json.loads(text)
    except ValueError as e:
        fail(f"Invalid provider config: not valid JSON ({e})", example)

    try:
        parse_provider_config(data)
    except ValueError as e:
        fail(str(e), example)
    return data


def build_provider_chain(
    main_provider: Optional[dict[str, Any]],
    fallback_names: Optional[list[str]],
) -> Optional[list[dict[str, Any]]]:
    """Build a provider chain from --provider and --fallback flags.

    Returns:
        The chain, or None when no fallback was given.
    """
    if not fallback_names:
        return None

    chain = [main_provider] if main_provider is not None else []
    chain.extend(provider_config_from_name(name) for name in fallback_names)
    return chain
