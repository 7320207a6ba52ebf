"""CLI commands for listing and checking providers."""

from typing import Optional

import typer

from commitment.cli.utils import fail, parse_provider_config_json, provider_config_from_name
from commitment.providers import create_provider

PROVIDER_DESCRIPTIONS = {
    "claude": "Claude CLI (default)",
    "codex": "OpenAI Codex CLI",
    "gemini": "Gemini CLI",
    "openai": "OpenAI API (needs OPENAI_API_KEY)",
    "anthropic": "Anthropic API (needs ANTHROPIC_API_KEY)",
}


def list_providers_command() -> None:
    """List all supported AI providers."""
    typer.secho("📋 Available AI Providers:", fg=typer.colors.CYAN)
    typer.echo()
    for name, description in PROVIDER_DESCRIPTIONS.items():
        typer.echo(f"  {name:<10}- {description}")
    typer.echo()
    typer.echo("Example usage: commitment --provider claude")


def check_provider_command(
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider to check (defaults to claude)",
    ),
    provider_config: Optional[str] = typer.Option(
        None,
        "--provider-config",
        help="Provider configuration as a JSON string",
    ),
) -> None:
    """Check whether a provider is installed and configured. Exits 1 if not."""
    if provider_config is not None:
        config = parse_provider_config_json(provider_config)
    else:
        config = provider_config_from_name(provider or "claude")

    try:
        instance = create_provider(config)
        available = instance.is_available()
    except Exception as e:
        fail(f"Error checking provider: {e}")

    if not available:
        typer.secho(f"❌ Provider '{instance.get_name()}' is not available", fg=typer.colors.RED)
        typer.echo("   Make sure the CLI tool is installed and in your PATH")
        raise typer.Exit(1)

    typer.secho(f"✅ Provider '{instance.get_name()}' is available", fg=typer.colors.GREEN)
