"""Configuration for commitment.

User settings are loaded from ~/.commitment/config.yaml.
Use 'commitment config' commands to modify them.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError


class AgentName(Enum):
    """Supported AI coding assistant CLIs."""

    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"


class EvalMode(Enum):
    """Where evaluation fixtures take their changeset from."""

    MOCKED = "mocked"
    LIVE = "live"


# ============================================================
# GENERATION DEFAULTS
# ============================================================

DEFAULT_AGENT = AgentName.CLAUDE

# Agents run interactive-grade CLIs, so they get a generous budget
AGENT_TIMEOUT_MS = 120_000

DEFAULT_PROVIDER_TIMEOUT_MS = 30_000
CODEX_PROVIDER_TIMEOUT_MS = 45_000

MAX_DIFF_CHARS = 8000

AGENT_DISPLAY_NAMES = {
    AgentName.CLAUDE: "Claude",
    AgentName.CODEX: "Codex",
    AgentName.GEMINI: "Gemini",
}

SIGNATURE_TEMPLATE = "🤖 Generated with {agent} via commitment"

# API providers and their credential variables
API_KEY_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

DEFAULT_API_MODELS = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.0-flash",
    "anthropic": "claude-3-5-haiku-latest",
}

MAX_TOKENS = 1000


# ============================================================
# EVALUATION DEFAULTS
# ============================================================

NUM_ATTEMPTS = 3
TIE_THRESHOLD = 0.5
DEFAULT_JUDGE_MODEL = "gpt-5"
DEFAULT_RESULTS_DIR = Path(".eval-results")
FIXTURES_DIR = Path(__file__).parent / "eval" / "fixtures"


def default_signature(agent: AgentName) -> str:
    """Return the signature appended to messages generated by an agent."""
    return SIGNATURE_TEMPLATE.format(agent=AGENT_DISPLAY_NAMES[agent])


class CommitmentConfig(BaseModel):
    """Effective user configuration."""

    agent: AgentName = DEFAULT_AGENT
    enable_ai: bool = True
    signature: Optional[str] = None
    provider_chain: list[dict[str, Any]] = Field(default_factory=list)
    judge_model: str = DEFAULT_JUDGE_MODEL
    results_dir: Path = DEFAULT_RESULTS_DIR


def load_config() -> CommitmentConfig:
    """Load configuration from the global config file.

    Missing keys fall back to defaults and unknown keys are ignored.

    Returns:
        The validated configuration.

    Raises:
        GlobalConfigError: If the file exists but is invalid.
    """
    # Import here to avoid circular dependency
    from commitment import global_config

    raw = global_config.load_global_config()
    known = {key: value for key, value in raw.items() if key in CommitmentConfig.model_fields}

    try:
        return CommitmentConfig(**known)
    except ValidationError as e:
        raise global_config.GlobalConfigError(
            f"Invalid configuration in {global_config.get_config_file_path()}:\n{e}"
        )
