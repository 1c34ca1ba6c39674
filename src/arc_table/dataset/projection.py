"""
Row projection: type exclusion, required-field policy and column selection.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from ..game_data.models import PRIORITY_COLUMNS, NormalizedRow

logger = logging.getLogger(__name__)


class ProjectionOutcome(Enum):
    """What happened to a row offered to the projector."""
    KEPT = "kept"
    SKIPPED_BY_TYPE = "skipped_by_type"
    SKIPPED_BY_REQUIRED_FIELD = "skipped_by_required_field"


class RequiredFieldsPredicate:
    """Keeps only rows where every required field is present and not null.

    An empty field list accepts every row.
    """

    def __init__(self, fields: Iterable[str] = ("value",)):
        self.fields: Tuple[str, ...] = tuple(fields)

    def __call__(self, row: NormalizedRow) -> bool:
        return all(row.get(name) is not None for name in self.fields)

    def missing(self, row: NormalizedRow) -> List[str]:
        """Return required fields the row lacks."""
        return [name for name in self.fields if row.get(name) is None]

    def __repr__(self) -> str:
        return f"RequiredFieldsPredicate(fields={list(self.fields)!r})"


def sort_discovered_columns(keys: Iterable[str]) -> List[str]:
    """Order discovered columns: priority prefix first, then alphabetical."""
    key_set = set(keys)
    leading = [name for name in PRIORITY_COLUMNS if name in key_set]
    rest = sorted(key_set.difference(PRIORITY_COLUMNS))
    return leading + rest


def select_columns(row: NormalizedRow, columns: Sequence[str]) -> NormalizedRow:
    """Copy the fields of ``row`` named by ``columns``, in column order."""
    return {name: row[name] for name in columns if name in row}


@dataclass
class RowProjector:
    """Decides which rows survive and which of their fields are emitted.

    With ``columns`` set, every kept row is reduced to those columns in
    that order; absent fields are omitted, never null-filled. Without
    ``columns`` the projector runs in discovery mode: it remembers every
    key it sees and ``finalize`` derives the column list from them.
    """

    columns: Optional[Sequence[str]] = None
    exclude_types: FrozenSet[str] = frozenset()
    required: RequiredFieldsPredicate = field(default_factory=RequiredFieldsPredicate)
    rows: List[NormalizedRow] = field(default_factory=list)
    skipped_by_type: int = 0
    skipped_by_required_field: int = 0
    _seen_keys: Set[str] = field(default_factory=set, repr=False)

    @property
    def discovers_columns(self) -> bool:
        return self.columns is None

    def is_excluded_type(self, row: NormalizedRow) -> bool:
        item_type: Any = row.get("type")
        if item_type is None or isinstance(item_type, (dict, list)):
            return False
        return item_type in self.exclude_types

    def project(self, row: NormalizedRow) -> ProjectionOutcome:
        """Offer one normalized row; kept rows are collected in order."""
        if self.is_excluded_type(row):
            self.skipped_by_type += 1
            return ProjectionOutcome.SKIPPED_BY_TYPE

        if not self.required(row):
            self.skipped_by_required_field += 1
            logger.debug(
                f"Skip row '{row.get('id')}': missing {', '.join(self.required.missing(row))}"
            )
            return ProjectionOutcome.SKIPPED_BY_REQUIRED_FIELD

        if self.columns is None:
            self._seen_keys.update(row)
            self.rows.append(dict(row))
        else:
            self.rows.append(select_columns(row, self.columns))
        return ProjectionOutcome.KEPT

    def finalize(self) -> Tuple[List[NormalizedRow], List[str]]:
        """Return the kept rows and the final column list.

        In discovery mode rows are re-keyed so their key order follows the
        discovered column order.
        """
        if self.columns is not None:
            return self.rows, list(self.columns)

        columns = sort_discovered_columns(self._seen_keys)
        rows = [select_columns(row, columns) for row in self.rows]
        return rows, columns
