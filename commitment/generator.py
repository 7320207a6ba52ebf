"""Commit message generation.

CommitMessageGenerator builds a prompt from the staged changes and asks an
AI agent, a single provider or a provider chain for a Conventional Commits
message. When AI is disabled, or the backend is not installed, it falls
back to a deterministic rule-based message.
"""

import logging
from typing import Any, Callable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from commitment.agents import BaseAgent, create_agent
from commitment.config import AGENT_DISPLAY_NAMES, DEFAULT_AGENT, SIGNATURE_TEMPLATE, AgentName, default_signature
from commitment.errors import AgentError, GeneratorError
from commitment.git import GitError, GitProvider, RealGitProvider
from commitment.prompts import CommitTask, build_commit_message_prompt
from commitment.providers import (
    BaseProvider,
    ProviderChain,
    ProviderChainError,
    ProviderNotAvailableError,
    create_provider,
)

logger = logging.getLogger(__name__)


class ChangesetTask(BaseModel):
    """What changed, as far as the commit message is concerned."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    produced_files: list[str] = Field(default_factory=list)


class GenerationOptions(BaseModel):
    """Per-call generation settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    working_directory: str = Field(min_length=1)
    agent_override: Optional[AgentName] = None
    files: Optional[list[str]] = None
    output: Optional[str] = None


def _validation_problems(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]


# ============================================================
# RULE-BASED FALLBACK
# ============================================================

def categorize_files(files: Sequence[str]) -> dict[str, list[str]]:
    """Group files into components, apis, tests, configs and docs.

    Each file lands in the first matching category; unmatched files are left out.
    """
    categories: dict[str, list[str]] = {
        "components": [],
        "apis": [],
        "tests": [],
        "configs": [],
        "docs": [],
    }

    for file in files:
        lower = file.lower()
        if "component" in lower or lower.endswith((".tsx", ".jsx", ".vue")):
            categories["components"].append(file)
        elif "api" in lower or "endpoint" in lower or "route" in lower:
            categories["apis"].append(file)
        elif "test" in lower or "spec" in lower:
            categories["tests"].append(file)
        elif "config" in lower or lower.endswith((".json", ".yaml", ".yml", ".toml", ".ini", ".cfg")):
            categories["configs"].append(file)
        elif lower.endswith((".md", ".rst")) or "readme" in lower or "doc" in lower:
            categories["docs"].append(file)

    return categories


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _preview(files: list[str]) -> str:
    shown = ", ".join(files[:3])
    return shown + "..." if len(files) > 3 else shown


def rule_based_commit_message(task: Union[ChangesetTask, CommitTask], files: Sequence[str]) -> str:
    """Build a commit message from file names alone.

    Args:
        task: The change being committed.
        files: Files involved in the change.

    Returns:
        A Conventional Commits message with one bullet per file category.
    """
    categories = categorize_files(files)
    components, apis, tests = categories["components"], categories["apis"], categories["tests"]
    configs, docs = categories["configs"], categories["docs"]

    bullets = []
    if components:
        bullets.append(f"- Add {_plural(len(components), 'component')}: {_preview(components)}")
    if apis:
        bullets.append(f"- Implement {_plural(len(apis), 'API endpoint')}: {_preview(apis)}")
    if tests:
        bullets.append(f"- Add {_plural(len(tests), 'test file')} for comprehensive coverage")
    if configs:
        bullets.append(f"- Update {_plural(len(configs), 'configuration file')}")
    if docs:
        bullets.append("- Update documentation and README files")

    uncategorized = len(files) - sum(len(group) for group in categories.values())
    if uncategorized > 0:
        bullets.append(f"- Modify {_plural(uncategorized, 'additional file')}")

    title = task.title.lower()
    produced = getattr(task, "produced_files", None) or getattr(task, "produces", ())
    if len(tests) > len(components) + len(apis):
        header = f"test: add test coverage for {title}"
    elif components:
        header = f"feat: add {title}"
    elif apis:
        header = f"feat: implement {title}"
    elif docs:
        header = f"docs: update {title}"
    elif configs:
        header = f"chore: update {title}"
    else:
        header = f"{'feat' if produced else 'chore'}: {title}"

    if bullets:
        return f"{header}\n\n" + "\n".join(bullets)
    return f"{header}\n\n- {task.description}"


# ============================================================
# GENERATOR
# ============================================================

def _is_unavailable(error: BaseException) -> bool:
    """True if ``error`` only says the backend is not installed or configured."""
    if isinstance(error, ProviderNotAvailableError):
        return True
    if isinstance(error, AgentError):
        return error.code == "CLI_NOT_FOUND"
    if isinstance(error, ProviderChainError):
        return bool(error.errors) and all(_is_unavailable(e) for e in error.errors)
    return False


class CommitMessageGenerator:
    """Generates commit messages with AI and a rule-based fallback.

    Backend priority: ``provider_chain``, then ``provider``, then ``agent``
    (Claude when nothing is configured).

    Args:
        enable_ai: Use the AI backend. When False, always use the rule-based message.
        agent: Agent to use when no provider is configured.
        provider: A provider instance or provider config.
        provider_chain: Provider configs or instances tried in order.
        signature: Text appended after a blank line. None uses the backend's
            default, "" disables it.
        git_provider: Source of diff data. Defaults to the real repository.
        fallback_to_rules: Use the rule-based message when the backend is not
            available. When False, that failure is raised instead.
        agent_factory: Builds agents by name.
    """

    def __init__(
        self,
        enable_ai: bool = True,
        agent: Optional[Union[AgentName, str]] = None,
        provider: Optional[Union[BaseProvider, dict[str, Any], Any]] = None,
        provider_chain: Optional[Sequence[Any]] = None,
        signature: Optional[str] = None,
        git_provider: Optional[GitProvider] = None,
        fallback_to_rules: bool = True,
        agent_factory: Callable[..., BaseAgent] = create_agent,
    ):
        self.enable_ai = enable_ai
        self.git_provider = git_provider or RealGitProvider()
        self.fallback_to_rules = fallback_to_rules
        self._agent_factory = agent_factory
        self._provider: Optional[BaseProvider] = None

        try:
            self._agent_name = AgentName(agent) if agent is not None else DEFAULT_AGENT
        except ValueError:
            raise GeneratorError.invalid_config([f"agent: unsupported agent {agent!r}"])

        try:
            if provider_chain:
                self._provider = ProviderChain(
                    [create_provider(entry) if isinstance(entry, dict) else entry for entry in provider_chain]
                )
            elif provider is not None:
                self._provider = provider if isinstance(provider, BaseProvider) else create_provider(provider)
        except ValueError as e:
            raise GeneratorError.invalid_config([str(e)]) from e

        if signature is not None:
            self.signature = signature
        elif self._provider is not None:
            self.signature = SIGNATURE_TEMPLATE.format(agent=self._provider.get_name())
        else:
            self.signature = default_signature(self._agent_name)

    @property
    def backend_name(self) -> str:
        if self._provider is not None:
            return self._provider.get_name()
        return AGENT_DISPLAY_NAMES[self._agent_name]

    def generate_commit_message(
        self,
        task: Union[ChangesetTask, dict[str, Any]],
        options: Union[GenerationOptions, dict[str, Any]],
    ) -> str:
        """Generate a commit message for the staged changes.

        Args:
            task: The change being committed.
            options: Working directory and per-call overrides.

        Returns:
            The commit message, with the signature appended when set.

        Raises:
            GeneratorError: If the input is invalid or AI generation fails.
            GitError: If the diff cannot be collected.
        """
        task = self._validate_task(task)
        options = self._validate_options(options)
        files = options.files if options.files is not None else list(task.produced_files)

        if not self.enable_ai:
            return self._add_signature(rule_based_commit_message(task, files))

        backend = self._backend_name_for(options)
        try:
            message = self._generate_ai_message(task, options, files)
        except GitError:
            raise
        except Exception as e:
            if not (self.fallback_to_rules and _is_unavailable(e)):
                raise GeneratorError.ai_generation_failed(backend, e) from e
            logger.warning("%s is not available, using rule-based message: %s", backend, e)
            message = rule_based_commit_message(task, files)

        return self._add_signature(message)

    def _backend_name_for(self, options: GenerationOptions) -> str:
        if self._provider is None and options.agent_override is not None:
            return AGENT_DISPLAY_NAMES[options.agent_override]
        return self.backend_name

    def _validate_task(self, task: Union[ChangesetTask, dict[str, Any]]) -> ChangesetTask:
        if isinstance(task, ChangesetTask):
            return task
        try:
            return ChangesetTask.model_validate(task)
        except ValidationError as e:
            raise GeneratorError.invalid_task(_validation_problems(e)) from e

    def _validate_options(self, options: Union[GenerationOptions, dict[str, Any]]) -> GenerationOptions:
        if isinstance(options, GenerationOptions):
            return options
        try:
            return GenerationOptions.model_validate(options)
        except ValidationError as e:
            raise GeneratorError.invalid_options(_validation_problems(e)) from e

    def _generate_ai_message(self, task: ChangesetTask, options: GenerationOptions, files: list[str]) -> str:
        workdir = options.working_directory
        diff_stat = self.git_provider.exec(["diff", "--cached", "--stat"], cwd=workdir)
        diff_name_status = self.git_provider.exec(["diff", "--cached", "--name-status"], cwd=workdir)
        diff_content = self.git_provider.exec(
            ["diff", "--cached", "--unified=3", "--ignore-space-change"], cwd=workdir
        )

        prompt = build_commit_message_prompt(
            CommitTask(title=task.title, description=task.description, produces=task.produced_files),
            diff_stat=diff_stat,
            diff_name_status=diff_name_status,
            diff_content=diff_content,
            files=files,
            output=options.output,
        )

        if self._provider is not None:
            return self._provider.generate_commit_message(prompt, workdir=workdir)

        agent = self._agent_factory(options.agent_override or self._agent_name)
        return agent.generate(prompt, workdir)

    def _add_signature(self, message: str) -> str:
        if not self.signature or not self.signature.strip():
            return message
        return f"{message}\n\n{self.signature}"
