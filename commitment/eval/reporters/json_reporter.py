"""JSON persistence for evaluation results."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Union

from commitment.eval.models import EvalResult

logger = logging.getLogger(__name__)


def make_run_dir_name() -> str:
    """Timestamped directory name for one evaluation run."""
    return datetime.now().strftime("%Y-%m-%dT%H-%M-%S")


def update_symlink(link: Path, target: Union[str, Path]) -> None:
    """Point ``link`` at ``target`` (relative to the link's directory)."""
    link.unlink(missing_ok=True)
    link.symlink_to(target)


class JSONReporter:
    """Writes each EvalResult into a timestamped run directory.

    All results saved by one reporter share the same run directory, so the
    markdown report can be written next to them.
    """

    def __init__(self, results_dir: Path, run_dir_name: str | None = None):
        self.results_dir = Path(results_dir)
        self.run_dir_name = run_dir_name or make_run_dir_name()

    @property
    def run_dir(self) -> Path:
        return self.results_dir / self.run_dir_name

    def save_results(self, result: EvalResult, key: str) -> Path:
        """Save ``result`` as ``<run>/<key>.json`` and update ``latest-<key>.json``.

        Returns:
            Path of the written file.
        """
        self.run_dir.mkdir(parents=True, exist_ok=True)

        path = self.run_dir / f"{key}.json"
        path.write_text(result.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

        update_symlink(self.results_dir / f"latest-{key}.json", Path(self.run_dir_name) / path.name)
        logger.debug("Saved %s", path)
        return path
