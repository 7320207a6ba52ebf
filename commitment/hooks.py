"""Installation of the prepare-commit-msg hook.

Supports husky, simple-git-hooks, lefthook and plain ``.git/hooks``. Every
installed hook only generates a message for regular commits, i.e. when git
passes no commit source (no ``-m``, merge, squash or template).
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Union

from commitment.config import AgentName
from commitment.git import GitError, run_git_command

logger = logging.getLogger(__name__)

HookManager = Literal["husky", "simple-git-hooks", "lefthook", "plain"]
HOOK_MANAGERS: tuple[str, ...] = ("husky", "simple-git-hooks", "lefthook", "plain")

LEFTHOOK_CONFIG_FILES = ("lefthook.yml", ".lefthook.yml", "lefthook.yaml", ".lefthook.yaml")
HOOK_NAME = "prepare-commit-msg"


class HookInstallError(Exception):
    """Raised when the hook cannot be installed."""
    pass


@dataclass
class HookInstallResult:
    """What was installed, and what the user still has to run."""

    manager: str
    path: Path
    created: bool = True
    next_steps: list[str] = field(default_factory=list)


def _command(agent: Optional[AgentName]) -> str:
    agent_flag = f" --agent {agent.value}" if agent else ""
    return f"commitment{agent_flag} --message-only"


def _shell_hook(manager: str, agent: Optional[AgentName]) -> str:
    return (
        "#!/bin/sh\n"
        f"# {manager} prepare-commit-msg hook for commitment\n"
        "# $1 is the message file, $2 the commit source (empty for regular commits)\n"
        'if [ -z "$2" ]; then\n'
        '  echo "🤖 Generating commit message..." > /dev/tty 2>/dev/null || true\n'
        f'  {_command(agent)} > "$1" || true\n'
        "fi\n"
    )


def _lefthook_block(agent: Optional[AgentName]) -> str:
    return (
        f"{HOOK_NAME}:\n"
        "  skip:\n"
        "    - merge\n"
        "    - rebase\n"
        "  commands:\n"
        "    commitment:\n"
        "      # {2} stays unsubstituted for regular commits\n"
        "      run: |\n"
        '        case "{2}" in\n'
        '          *"{"*)\n'
        f'            {_command(agent)} > "{{1}}"\n'
        "            ;;\n"
        "        esac\n"
        "      interactive: true\n"
    )


def _read_package_json(cwd: Path) -> Optional[dict]:
    try:
        data = json.loads((cwd / "package.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def detect_hook_manager(cwd: Union[str, Path]) -> Optional[str]:
    """Detect the hook manager used in ``cwd``.

    Checks lefthook config files, then a ``.husky`` directory, then
    simple-git-hooks in ``package.json``.

    Returns:
        The manager name, or None if none is detected.
    """
    cwd = Path(cwd)

    if any((cwd / name).is_file() for name in LEFTHOOK_CONFIG_FILES):
        return "lefthook"

    if (cwd / ".husky").is_dir():
        return "husky"

    package = _read_package_json(cwd)
    if package is not None:
        if (
            "simpleGitHooks" in package
            or "simple-git-hooks" in (package.get("devDependencies") or {})
            or "simple-git-hooks" in (package.get("dependencies") or {})
        ):
            return "simple-git-hooks"

    return None


def resolve_git_dir(cwd: Path) -> Path:
    """Return the git directory of ``cwd``, following a worktree ``.git`` file."""
    git_path = cwd / ".git"
    if git_path.is_file():
        match = re.search(r"gitdir:\s*(.+)", git_path.read_text(encoding="utf-8"), re.IGNORECASE)
        if match:
            return (cwd / match.group(1).strip()).resolve()
    if git_path.exists():
        return git_path
    raise HookInstallError("Not a git repository (or any of the parent directories)")


def _write_executable(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    path.chmod(0o755)


def _install_husky(cwd: Path, agent: Optional[AgentName]) -> HookInstallResult:
    path = cwd / ".husky" / HOOK_NAME
    _write_executable(path, _shell_hook("Husky", agent))
    return HookInstallResult("husky", path)


def _install_plain(cwd: Path, agent: Optional[AgentName]) -> HookInstallResult:
    path = resolve_git_dir(cwd) / "hooks" / HOOK_NAME
    _write_executable(path, _shell_hook("Git", agent))
    return HookInstallResult("plain", path)


def _install_simple_git_hooks(cwd: Path, agent: Optional[AgentName]) -> HookInstallResult:
    path = cwd / "package.json"
    package = _read_package_json(cwd)
    if package is None:
        raise HookInstallError(f"Failed to configure simple-git-hooks: cannot read {path}")

    hooks = package.setdefault("simpleGitHooks", {})
    hooks[HOOK_NAME] = f'[ -z "$2" ] && {_command(agent)} > $1'
    package.setdefault("scripts", {}).setdefault("prepare", "simple-git-hooks")

    path.write_text(json.dumps(package, indent=2) + "\n", encoding="utf-8")
    return HookInstallResult("simple-git-hooks", path, next_steps=["npm install", "npm run prepare"])


def _install_lefthook(cwd: Path, agent: Optional[AgentName]) -> HookInstallResult:
    path = cwd / "lefthook.yml"
    block = _lefthook_block(agent)
    next_steps = ["npx lefthook install"]

    if path.exists():
        existing = path.read_text(encoding="utf-8")
        if f"{HOOK_NAME}:" in existing:
            logger.warning("%s already has a %s hook, leaving it unchanged", path, HOOK_NAME)
            return HookInstallResult("lefthook", path, created=False)
        path.write_text(f"{existing.rstrip()}\n\n{block}", encoding="utf-8")
    else:
        path.write_text(f"# Lefthook configuration for commitment\n\n{block}", encoding="utf-8")

    return HookInstallResult("lefthook", path, next_steps=next_steps)


_INSTALLERS = {
    "husky": _install_husky,
    "simple-git-hooks": _install_simple_git_hooks,
    "lefthook": _install_lefthook,
    "plain": _install_plain,
}


def install_hook(
    cwd: Union[str, Path],
    manager: Optional[str] = None,
    agent: Optional[Union[AgentName, str]] = None,
) -> HookInstallResult:
    """Install the commitment prepare-commit-msg hook.

    Args:
        cwd: Repository root.
        manager: Hook manager to use. Detected when None, plain git hooks
            if nothing is detected.
        agent: Agent passed to the hook command with ``--agent``.

    Returns:
        A HookInstallResult describing the installed hook.

    Raises:
        HookInstallError: If ``cwd`` is not a git repository, the manager is
            unknown, or the files cannot be written.
    """
    cwd = Path(cwd)

    try:
        run_git_command(["rev-parse", "--git-dir"], cwd=str(cwd))
    except GitError as e:
        raise HookInstallError("Not a git repository. Run `git init` first.") from e

    if manager is None:
        manager = detect_hook_manager(cwd) or "plain"
    if manager not in _INSTALLERS:
        raise HookInstallError(f"Unknown hook manager: {manager}. Valid: {', '.join(HOOK_MANAGERS)}")

    agent_name = AgentName(agent) if agent is not None else None

    try:
        result = _INSTALLERS[manager](cwd, agent_name)
    except OSError as e:
        raise HookInstallError(f"Failed to install {manager} hook: {e}") from e

    logger.debug("Installed %s hook at %s", manager, result.path)
    return result
