"""CLI command for installing the commitment git hook."""

import os
from pathlib import Path
from typing import Optional

import typer

from commitment.cli.utils import fail, parse_agent
from commitment.hooks import HOOK_MANAGERS, HookInstallError, detect_hook_manager, install_hook


def init_command(
    hook_manager: Optional[str] = typer.Option(
        None,
        "--hook-manager",
        help="Hook manager to configure (husky, simple-git-hooks, lefthook, plain)",
    ),
    agent: Optional[str] = typer.Option(
        None,
        "--agent",
        "-a",
        help="Agent the hook should use (claude, codex, gemini)",
    ),
    cwd: Optional[Path] = typer.Option(
        None,
        "--cwd",
        help="Repository root (defaults to the current directory)",
    ),
) -> None:
    """Install a prepare-commit-msg hook that generates commit messages."""
    repo = Path(cwd) if cwd else Path(os.getcwd())
    agent_name = parse_agent(agent)

    if hook_manager is not None and hook_manager not in HOOK_MANAGERS:
        fail(f"Invalid hook manager: {hook_manager}", f"Valid hook managers: {', '.join(HOOK_MANAGERS)}")

    if hook_manager is None:
        detected = detect_hook_manager(repo)
        if detected:
            typer.secho(f"🔍 Detected {detected} hook manager", fg=typer.colors.CYAN)
        else:
            typer.secho("📝 No hook manager detected, using plain git hooks", fg=typer.colors.CYAN)
        hook_manager = detected or "plain"

    try:
        result = install_hook(repo, hook_manager, agent_name)
    except HookInstallError as e:
        fail(f"Failed to initialize hooks: {e}")

    typer.echo()
    if result.created:
        typer.secho(f"✅ Installed prepare-commit-msg hook with {result.manager}", fg=typer.colors.GREEN)
    else:
        typer.secho(f"⚠️  {result.path.name} already has a prepare-commit-msg hook, skipping", fg=typer.colors.YELLOW)
    typer.echo(f"   Location: {result.path}")

    if result.next_steps:
        typer.echo()
        typer.secho("Run the following to activate hooks:", fg=typer.colors.YELLOW)
        for step in result.next_steps:
            typer.secho(f"   {step}", fg=typer.colors.CYAN)

    typer.echo()
    typer.secho("🎉 Setup complete!", fg=typer.colors.GREEN)
    if agent_name:
        typer.echo(f"   Default agent: {agent_name.value}")
    typer.echo()
    typer.echo("Next steps:")
    typer.echo("  1. Stage your changes: git add .")
    typer.echo("  2. Create a commit:    git commit")
