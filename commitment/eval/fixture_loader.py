"""Loading of evaluation fixtures.

A fixture is a directory holding ``metadata.json`` plus either recorded git
output (``mock-status.txt`` and ``mock-diff.txt``) or, for live mode, a real
git repository with staged changes in ``<name>-live``.
"""

from pathlib import Path
from typing import Union

from pydantic import ValidationError

from commitment.config import FIXTURES_DIR, EvalMode
from commitment.eval.errors import EvaluationError
from commitment.eval.models import Fixture, FixtureMetadata
from commitment.git import GitError, run_git_command

LIVE_SUFFIX = "-live"


def fixture_path(name: str, mode: EvalMode, fixtures_dir: Path = FIXTURES_DIR) -> Path:
    return Path(fixtures_dir) / (f"{name}{LIVE_SUFFIX}" if mode == EvalMode.LIVE else name)


def load_fixture(name: str, mode: Union[EvalMode, str] = EvalMode.MOCKED, fixtures_dir: Path = FIXTURES_DIR) -> Fixture:
    """Load a fixture by name.

    Args:
        name: Fixture name, without the ``-live`` suffix.
        mode: MOCKED reads the recorded files, LIVE runs git in the fixture repo.
        fixtures_dir: Directory containing the fixtures.

    Returns:
        The loaded fixture.

    Raises:
        EvaluationError: MISSING_FIXTURE if any file is missing or git fails.
    """
    mode = EvalMode(mode)
    path = fixture_path(name, mode, fixtures_dir)

    try:
        metadata = FixtureMetadata.model_validate_json((path / "metadata.json").read_text(encoding="utf-8"))

        if mode == EvalMode.MOCKED:
            status = (path / "mock-status.txt").read_text(encoding="utf-8")
            diff = (path / "mock-diff.txt").read_text(encoding="utf-8")
        else:
            status = run_git_command(["status", "--porcelain"], cwd=str(path))
            diff = run_git_command(["diff", "--cached"], cwd=str(path))
    except (OSError, ValidationError, GitError) as e:
        raise EvaluationError.missing_fixture(name, cause=e) from e

    return Fixture(name=metadata.name, status=status, diff=diff, metadata=metadata)


def list_fixture_names(mode: Union[EvalMode, str] = EvalMode.MOCKED, fixtures_dir: Path = FIXTURES_DIR) -> list[str]:
    """List fixture names available in ``mode``, sorted.

    Live fixtures are the ``-live`` directories; names are returned without the suffix.
    """
    mode = EvalMode(mode)
    fixtures_dir = Path(fixtures_dir)
    if not fixtures_dir.is_dir():
        return []

    names = []
    for entry in sorted(fixtures_dir.iterdir()):
        if not entry.is_dir():
            continue
        is_live = entry.name.endswith(LIVE_SUFFIX)
        if mode == EvalMode.LIVE and is_live:
            names.append(entry.name[: -len(LIVE_SUFFIX)])
        elif mode == EvalMode.MOCKED and not is_live:
            names.append(entry.name)
    return names
