"""Main CLI command for generating and committing a message."""

import os
from pathlib import Path
from typing import Any, Optional

import typer

from commitment.cli.utils import (
    build_provider_chain,
    fail,
    parse_agent,
    parse_provider_config_json,
    provider_config_from_name,
    setup_logging,
)
from commitment.config import load_config
from commitment.errors import CommitmentError
from commitment.generator import ChangesetTask, CommitMessageGenerator, GenerationOptions
from commitment.git import GitError, create_commit, get_git_status, get_repo_root
from commitment.global_config import GlobalConfigError
from commitment.providers import detect_available_provider


def _resolve_backend(
    provider: Optional[str],
    provider_config: Optional[str],
    fallback: Optional[list[str]],
    auto_detect: bool,
    configured_chain: list[dict[str, Any]],
) -> tuple[Optional[dict[str, Any]], Optional[list[dict[str, Any]]]]:
    """Return (provider, provider_chain) from flags, falling back to the config file."""
    main_provider = None
    if provider_config is not None:
        main_provider = parse_provider_config_json(provider_config)
    elif provider is not None:
        main_provider = provider_config_from_name(provider)
    elif auto_detect:
        detected = detect_available_provider()
        if detected is None:
            fail("No AI CLI found", "Install claude, codex or gemini, or run with --no-ai")
        main_provider = detected.model_dump(by_alias=False, exclude_none=True)

    chain = build_provider_chain(main_provider, fallback)
    if chain is None and main_provider is None and configured_chain:
        chain = configured_chain
    return main_provider, chain


def main_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Generate the message without creating the commit",
    ),
    message_only: bool = typer.Option(
        False,
        "--message-only",
        help="Print only the commit message (used by git hooks)",
    ),
    ai: bool = typer.Option(
        True,
        "--ai/--no-ai",
        help="Use AI generation; --no-ai uses the rule-based generator",
    ),
    cwd: Optional[Path] = typer.Option(
        None,
        "--cwd",
        help="Working directory (defaults to the current directory)",
    ),
    signature: Optional[str] = typer.Option(
        None,
        "--signature",
        help="Custom signature to append (empty string disables it)",
    ),
    agent: Optional[str] = typer.Option(
        None,
        "--agent",
        "-a",
        help="AI agent to use (claude, codex, gemini)",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider to use (claude, codex, gemini, openai, anthropic)",
    ),
    provider_config: Optional[str] = typer.Option(
        None,
        "--provider-config",
        help="Provider configuration as a JSON string",
    ),
    fallback: Optional[list[str]] = typer.Option(
        None,
        "--fallback",
        help="Fallback provider, tried in order (repeatable)",
    ),
    auto_detect: bool = typer.Option(
        False,
        "--auto-detect",
        help="Use the first installed AI CLI",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Generate a commit message for the staged changes and commit it."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    setup_logging(verbose)

    try:
        repo_root = get_repo_root(str(cwd) if cwd else os.getcwd())
    except GitError as e:
        fail(str(e))

    try:
        config = load_config()
    except GlobalConfigError as e:
        fail(str(e))

    agent_name = parse_agent(agent) or config.agent
    main_provider, chain = _resolve_backend(provider, provider_config, fallback, auto_detect, config.provider_chain)

    try:
        status = get_git_status(str(repo_root))
    except GitError as e:
        fail(str(e))

    if not status.has_staged_changes:
        fail("No staged changes to commit", "Run `git add` to stage changes first")

    if not message_only:
        typer.secho("📝 Staged changes:", fg=typer.colors.CYAN)
        for line in status.status_lines:
            typer.echo("  " + typer.style(line[:2], fg=typer.colors.GREEN) + f" {line[3:]}")
        typer.echo()

    try:
        generator = CommitMessageGenerator(
            enable_ai=ai and config.enable_ai,
            agent=agent_name,
            provider=main_provider if chain is None else None,
            provider_chain=chain,
            signature=signature if signature is not None else config.signature,
        )

        if not message_only:
            typer.secho(f"Generating commit message with {generator.backend_name}...", fg=typer.colors.CYAN)

        message = generator.generate_commit_message(
            ChangesetTask(
                title="Code changes",
                description="Analyze git diff to generate appropriate commit message",
                produced_files=status.staged_files,
            ),
            GenerationOptions(working_directory=str(repo_root), files=status.staged_files),
        )
    except CommitmentError as e:
        fail(e.format_with_suggestion())
    except GitError as e:
        fail(str(e))

    if message_only:
        typer.echo(message)
        return

    typer.secho("\n💬 Commit message:", fg=typer.colors.GREEN)
    for line in message.split("\n"):
        typer.echo(f"   {line}")
    typer.echo()

    if dry_run:
        typer.secho("🚀 DRY RUN - No commit created", fg=typer.colors.BLUE)
        typer.echo("   Remove --dry-run to create the commit")
        return

    try:
        create_commit(message, cwd=str(repo_root))
    except GitError as e:
        fail(f"Failed to create commit: {e}")

    typer.secho("✅ Commit created successfully", fg=typer.colors.GREEN)
