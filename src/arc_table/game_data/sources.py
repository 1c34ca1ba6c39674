"""
Corpus sources for the item data repository.

A source makes the raw corpus available on disk and returns its root
directory. ``GitCorpusSource`` keeps a shallow clone of the upstream data
repository up to date; ``LocalCorpusSource`` points at a directory that is
already present.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Sequence

from .models import ITEMS_DIR, CorpusAcquisitionError

CommandRunner = Callable[..., "subprocess.CompletedProcess[bytes]"]


class LocalCorpusSource:
    """Corpus that already exists on disk."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def ensure(self) -> Path:
        """Return the corpus root.

        Raises:
            CorpusAcquisitionError: If the items directory is missing
        """
        if not (self.root / ITEMS_DIR).is_dir():
            raise CorpusAcquisitionError(
                f"No '{ITEMS_DIR}' directory in local corpus: {self.root}"
            )
        self.logger.info(f"Using local corpus at {self.root}")
        return self.root


class GitCorpusSource:
    """Shallow git clone of the upstream data repository."""

    def __init__(
        self,
        repo_url: str,
        repo_dir: str | Path,
        runner: CommandRunner = subprocess.run,
    ):
        self.repo_url = repo_url
        self.repo_dir = Path(repo_dir)
        self._runner = runner
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _run(self, cmd: Sequence[str], cwd: Path | None = None) -> None:
        self.logger.debug(f"Running: {' '.join(cmd)}")
        try:
            completed = self._runner(list(cmd), cwd=cwd, check=False)
        except FileNotFoundError as e:
            raise CorpusAcquisitionError(f"git is not available: {e}") from e
        if completed.returncode != 0:
            raise CorpusAcquisitionError(
                f"{' '.join(cmd[:2])} failed with exit code {completed.returncode}"
            )

    def ensure(self) -> Path:
        """Clone the repository, or fast-forward an existing clone.

        Raises:
            CorpusAcquisitionError: If git is missing or the command fails
        """
        if (self.repo_dir / ITEMS_DIR).is_dir():
            self.logger.info(f"Updating data repository in {self.repo_dir}...")
            self._run(["git", "pull", "--ff-only"], cwd=self.repo_dir)
            return self.repo_dir

        self.logger.info(f"Cloning {self.repo_url} into {self.repo_dir}...")
        self.repo_dir.parent.mkdir(parents=True, exist_ok=True)
        cmd: List[str] = ["git", "clone", "--depth", "1", self.repo_url, str(self.repo_dir)]
        self._run(cmd)
        return self.repo_dir
