"""
File loaders for item game data.

Handles reading and parsing JSON files with parallel processing using
ThreadPoolExecutor and orjson for performance.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List

import orjson

from .models import CorpusAcquisitionError, CorpusLoadResult, LoadFailure, SourceDocument


class GameDataFileLoader:
    """Loads and parses one-object-per-file JSON corpora in parallel."""

    def __init__(self, max_workers: int = 32):
        self.max_workers = max_workers
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug("GameDataFileLoader initialized")

    @staticmethod
    def list_json_files(directory: Path) -> List[Path]:
        """Return the JSON files directly inside ``directory``, sorted by name."""
        return sorted(
            (entry for entry in directory.iterdir() if entry.is_file() and entry.suffix == ".json"),
            key=lambda p: p.name,
        )

    @staticmethod
    def read_json_file(json_file: Path) -> SourceDocument:
        """Read and parse a single JSON file.

        The document identifier is the file name, which is stable across
        clones of the data repository.

        Raises:
            OSError: If the file cannot be read
            orjson.JSONDecodeError: If the content is not valid JSON
        """
        with json_file.open("rb") as f:  # orjson works with bytes
            data = orjson.loads(f.read())
        return SourceDocument(identifier=json_file.name, data=data)

    def load_directory(self, directory: Path) -> CorpusLoadResult:
        """Read every JSON file in ``directory``.

        Files that fail to read or parse are reported as failures and do
        not stop the load. Documents come back ordered by identifier no
        matter in which order the worker threads finish.

        Raises:
            CorpusAcquisitionError: If the directory does not exist
        """
        if not directory.is_dir():
            raise CorpusAcquisitionError(f"Corpus directory not found: {directory}")

        json_files = self.list_json_files(directory)
        result = CorpusLoadResult()
        if not json_files:
            self.logger.warning(f"No JSON files found in {directory}")
            return result

        self.logger.info(f"Found {len(json_files)} JSON files in {directory}")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_file = {
                executor.submit(self.read_json_file, json_file): json_file
                for json_file in json_files
            }

            processed_count = 0
            total_files = len(future_to_file)

            for future in as_completed(future_to_file):
                json_file = future_to_file[future]
                try:
                    result.documents.append(future.result())
                except (OSError, orjson.JSONDecodeError) as e:
                    self.logger.warning(f"Skip {json_file.name}: {e}")
                    result.failures.append(LoadFailure(json_file.name, str(e)))

                processed_count += 1
                if processed_count % 250 == 0:
                    self.logger.debug(f"Read {processed_count}/{total_files} files")

        result.documents.sort(key=lambda doc: doc.identifier)
        result.failures.sort(key=lambda failure: failure.identifier)
        return result
