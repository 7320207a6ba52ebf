"""CLI commands for global configuration management."""

import typer

from commitment import global_config
from commitment.cli.utils import fail, parse_agent
from commitment.config import API_KEY_ENV_VARS

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global commitment configuration in ~/.commitment/",
    add_completion=False,
)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        config = global_config.load_global_config()
        credentials = global_config.load_credentials()
    except global_config.GlobalConfigError as e:
        fail(f"Error reading configuration: {e}")

    if not global_config.is_configured() and not credentials:
        typer.echo("No configuration found. Run 'commitment config set-agent <name>' to set up.")
        return

    typer.echo("Current commitment configuration (~/.commitment/config.yaml):")
    typer.echo()
    typer.echo(f"  Agent: {config.get('agent', 'not set')}")
    typer.echo(f"  AI enabled: {config.get('enable_ai', True)}")

    signature = config.get("signature")
    if signature is not None:
        typer.echo(f"  Signature: {signature!r}")

    chain = config.get("provider_chain") or []
    if chain:
        typer.echo()
        typer.echo("  Provider chain:")
        for entry in chain:
            typer.echo(f"    - {entry.get('provider', '?')} ({entry.get('type', '?')})")

    typer.echo()
    for provider, env_var in API_KEY_ENV_VARS.items():
        api_key = credentials.get(env_var)
        typer.echo(f"  API Key ({env_var}): {_mask(api_key) if api_key else 'not set'}")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(
        ...,
        help="Provider name (openai, gemini, anthropic)"
    )
) -> None:
    """Set or update an API key for a provider."""
    env_var = API_KEY_ENV_VARS.get(provider.lower())
    if env_var is None:
        fail(f"Invalid provider: {provider}", f"Valid providers: {', '.join(API_KEY_ENV_VARS)}")

    api_key = typer.prompt(f"Enter your {provider.lower()} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key)
    except global_config.GlobalConfigError as e:
        fail(str(e))

    typer.echo(f"✓ API key saved for {provider.lower()}")


@config_app.command("set-agent")
def config_set_agent(
    agent: str = typer.Argument(
        ...,
        help="Agent name (claude, codex, gemini)"
    )
) -> None:
    """Set the default agent."""
    agent_name = parse_agent(agent)

    try:
        global_config.set_default_agent(agent_name)
    except (OSError, global_config.GlobalConfigError) as e:
        fail(str(e))

    typer.echo(f"✓ Default agent set to: {agent_name.value}")
