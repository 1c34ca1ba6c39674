"""
Main service for reading the item data repository.

Provides a high-level API that acquires the corpus and loads the item and
hideout (craft bench) documents.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol

from .loaders import GameDataFileLoader
from .models import HIDEOUT_DIR, ITEMS_DIR, CorpusLoadResult


class CorpusSource(Protocol):
    """Anything that can make the corpus available and return its root."""

    def ensure(self) -> Path: ...


class GameDataService:
    """Service for working with the item data repository.

    Responsible for acquiring the corpus once and reading its ``items`` and
    ``hideout`` directories. Reading is parallel (see GameDataFileLoader);
    results are always ordered by file name.
    """

    def __init__(self, source: CorpusSource, max_workers: int = 32):
        """Initialize the service.

        Args:
            source: Corpus source (git clone or local directory)
            max_workers: Thread pool size used for reading files
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.source = source
        self.loader = GameDataFileLoader(max_workers=max_workers)
        self._root: Optional[Path] = None

    @property
    def root(self) -> Path:
        """Corpus root directory, acquiring the corpus on first access."""
        if self._root is None:
            self._root = self.source.ensure()
        return self._root

    def load_items(self) -> CorpusLoadResult:
        """Load all item documents.

        Raises:
            CorpusAcquisitionError: If the items directory cannot be found
        """
        result = self.loader.load_directory(self.root / ITEMS_DIR)
        self.logger.info(
            f"Loaded {len(result.documents)} item files ({len(result.failures)} unreadable)"
        )
        return result

    def load_hideout(self) -> CorpusLoadResult:
        """Load craft bench documents; a missing hideout directory yields none."""
        hideout_path = self.root / HIDEOUT_DIR
        if not hideout_path.is_dir():
            self.logger.info("No hideout directory found, craft bench index will be empty")
            return CorpusLoadResult()

        result = self.loader.load_directory(hideout_path)
        self.logger.info(
            f"Loaded {len(result.documents)} hideout files ({len(result.failures)} unreadable)"
        )
        return result
