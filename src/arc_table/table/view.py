"""
Table view state over a built dataset.

Loads the dataset artifacts and keeps the search keyword and sort state the
way the browser table does, so the same behavior can be exercised from
Python. When artifacts are missing or unreadable the table holds a single
error row telling the operator to run the data build.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set

import orjson

from ..dataset.writer import BENCH_INDEX_FILE, COLUMNS_FILE, ITEM_INDEX_FILE, ROWS_FILE
from .search import filter_rows
from .sorting import ASCENDING, DESCENDING, detect_numeric_columns, sort_rows

logger = logging.getLogger(__name__)

ERROR_COLUMN = "error"
BUILD_HINT = "Run `python -m arc_table` first."


@dataclass
class TableView:
    """Rows and columns plus the current keyword and sort state."""

    rows: List[Mapping[str, Any]]
    columns: List[str]
    id_to_name: Dict[str, str] = field(default_factory=dict)
    benches: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    search_term: str = ""
    sort_column: Optional[str] = None
    sort_direction: str = ASCENDING
    numeric_columns: Set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.numeric_columns = detect_numeric_columns(self.rows, self.columns)
        if self.sort_column is None and self.columns:
            self.sort_column = self.columns[0]

    @classmethod
    def failed(cls, message: str) -> "TableView":
        """A table with one row explaining why the data could not load."""
        return cls(
            rows=[{ERROR_COLUMN: f"{message}. {BUILD_HINT}"}],
            columns=[ERROR_COLUMN],
            error=message,
        )

    def toggle_sort(self, col: str) -> None:
        """Sort by ``col``; picking the current column flips the direction."""
        if col == self.sort_column:
            self.sort_direction = DESCENDING if self.sort_direction == ASCENDING else ASCENDING
        else:
            self.sort_column = col
            self.sort_direction = ASCENDING

    def visible_rows(self) -> List[Mapping[str, Any]]:
        """Rows matching the keyword, in the current sort order."""
        filtered = filter_rows(self.rows, self.columns, self.search_term)
        return sort_rows(
            filtered, self.sort_column, self.sort_direction, self.columns, self.numeric_columns
        )


def _read_json(path: Path) -> Any:
    with path.open("rb") as f:
        return orjson.loads(f.read())


def load_table(data_dir: str | Path) -> TableView:
    """Load the dataset artifacts from ``data_dir`` into a TableView."""
    data_dir = Path(data_dir)
    try:
        rows = _read_json(data_dir / ROWS_FILE)
        columns = _read_json(data_dir / COLUMNS_FILE)
        id_to_name = _read_json(data_dir / ITEM_INDEX_FILE)
        benches = _read_json(data_dir / BENCH_INDEX_FILE)
    except (OSError, orjson.JSONDecodeError) as e:
        logger.error(f"Failed to load data from {data_dir}: {e}")
        return TableView.failed("Failed to load data")

    if not isinstance(rows, list) or not isinstance(columns, list):
        logger.error(f"Unexpected dataset layout in {data_dir}")
        return TableView.failed("Failed to load data")

    return TableView(rows=rows, columns=columns, id_to_name=id_to_name, benches=benches)
