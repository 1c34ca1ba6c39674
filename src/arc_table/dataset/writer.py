"""
Writes the generated dataset artifacts.

Every artifact is written to a temporary file next to its target and then
moved over it, so a reader never sees a half-written file.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import orjson

from ..game_data.models import NameIndex, NormalizedRow

ROWS_FILE = "items.json"
COLUMNS_FILE = "columns.json"
ITEM_INDEX_FILE = "itemIdToName.json"
BENCH_INDEX_FILE = "craftBenchIdToName.json"
META_FILE = "meta.json"


@dataclass
class DatasetArtifacts:
    """Everything a build produces."""

    rows: List[NormalizedRow]
    columns: List[str]
    item_index: NameIndex
    bench_index: NameIndex
    meta: Dict[str, Any]


class DatasetWriter:
    """Serializes dataset artifacts into an output directory."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _write_json(self, filename: str, data: Any, option: int = 0) -> Path:
        target = self.output_dir / filename
        payload = orjson.dumps(data, option=option)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{filename}.", dir=self.output_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self.logger.debug(f"Wrote {target} ({len(payload)} bytes)")
        return target

    def write(self, artifacts: DatasetArtifacts) -> List[Path]:
        """Write all artifacts, replacing previous ones.

        Returns:
            Paths of the written files
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return [
            self._write_json(ROWS_FILE, artifacts.rows),
            self._write_json(COLUMNS_FILE, artifacts.columns),
            self._write_json(ITEM_INDEX_FILE, dict(artifacts.item_index)),
            self._write_json(BENCH_INDEX_FILE, dict(artifacts.bench_index)),
            self._write_json(META_FILE, artifacts.meta, option=orjson.OPT_INDENT_2),
        ]
