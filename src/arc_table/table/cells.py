"""
Display formatting for single table cells.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import orjson

from ..dataset.locale import display_text

DEFAULT_TEXT = "-"
CRAFT_BENCH_COLUMN = "craftBench"

# Shown instead of the placeholder when a column has no value
SUBSTITUTIONS: Dict[str, Any] = {
    "stackSize": 1,
    "foundIn": "Unknown",
}


@dataclass(frozen=True)
class CellText:
    """Display text of a cell and whether it stands for a missing value."""

    text: str
    is_empty: bool


def _plain(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return orjson.dumps(value).decode("utf-8")
    return value if isinstance(value, str) else display_text(value)


def _bench_names(value: Any, benches: Optional[Mapping[str, str]]) -> List[str]:
    if isinstance(value, list):
        raw_ids = value
    elif isinstance(value, str) and "," in value:
        raw_ids = value.split(",")
    else:
        raw_ids = [value]

    names = []
    for raw in raw_ids:
        key = _plain(raw).strip()
        if not key or key in ("undefined", "null"):
            continue
        names.append(benches[key] if benches and benches.get(key) is not None else key)
    return names


def format_cell_value(
    row: Mapping[str, Any],
    col: str,
    id_to_name: Optional[Mapping[str, str]] = None,
    benches: Optional[Mapping[str, str]] = None,
    expanded: bool = False,
) -> CellText:
    """Format one cell for display.

    Args:
        row: Row data keyed by column name
        col: Column name
        id_to_name: Item ID -> display name
        benches: Craft bench ID -> display name
        expanded: Put list entries on separate lines instead of comma separating them
    """
    separator = "\n" if expanded else ", "
    value = row.get(col)

    if value is None or value == "":
        substitution = SUBSTITUTIONS.get(col)
        if substitution:
            return CellText(str(substitution), False)
        return CellText(DEFAULT_TEXT, True)

    if col == CRAFT_BENCH_COLUMN:
        names = _bench_names(value, benches)
        if not names:
            return CellText(DEFAULT_TEXT, True)
        return CellText(separator.join(names), False)

    if isinstance(value, list):
        return CellText(separator.join(sorted(_plain(v) for v in value)), False)

    if isinstance(value, dict):
        if not value:
            return CellText(DEFAULT_TEXT, True)
        pairs = []
        for raw_key, raw_value in value.items():
            display_key = str(raw_key)
            if id_to_name and id_to_name.get(display_key) is not None:
                display_key = id_to_name[display_key]
            pairs.append(f"{display_key}: {_plain(raw_value)}")
        return CellText(separator.join(pairs), False)

    return CellText(_plain(value), False)
