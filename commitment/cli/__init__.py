"""CLI entry point for commitment.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from commitment.cli.config import config_app
from commitment.cli.eval import eval_command
from commitment.cli.init import init_command
from commitment.cli.main import main_command
from commitment.cli.providers import check_provider_command, list_providers_command

# Main application
app = typer.Typer(
    name="commitment",
    help="commitment: AI-powered commit message generator with intelligent fallback",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("init")(init_command)
app.command("list-providers")(list_providers_command)
app.command("check-provider")(check_provider_command)
app.command("eval")(eval_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)

__all__ = [
    "app",
    "config_app",
    "init_command",
    "list_providers_command",
    "check_provider_command",
    "eval_command",
    "main_command",
]
