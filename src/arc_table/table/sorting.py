"""
Column sorting for dataset rows.

A column sorts numerically when every non-empty value in it parses as a
finite number, otherwise by case- and accent-insensitive text. Empty
values (null or "") always end up last, whichever direction is chosen.
"""

import math
import unicodedata
from functools import cmp_to_key
from typing import Any, List, Mapping, Optional, Sequence, Set

import orjson

from ..dataset.locale import display_text

ASCENDING = "asc"
DESCENDING = "desc"


def is_empty_value(value: Any) -> bool:
    return value is None or value == ""


def to_number(value: Any) -> Optional[float]:
    """Parse ``value`` as a finite number, or return None."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts digit separators, JSON numbers do not
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_numeric_value(value: Any) -> bool:
    """True for empty values and values that parse as finite numbers."""
    return is_empty_value(value) or to_number(value) is not None


def detect_numeric_columns(
    rows: Sequence[Mapping[str, Any]], columns: Sequence[str]
) -> Set[str]:
    """Return the columns whose non-empty values are all numeric."""
    return {
        col for col in columns if all(is_numeric_value(row.get(col)) for row in rows)
    }


def _text_key(value: Any) -> str:
    if isinstance(value, (dict, list)):
        text = orjson.dumps(value).decode("utf-8")
    else:
        text = value if isinstance(value, str) else display_text(value)
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def compare_values(a: Any, b: Any, col: str, numeric_columns: Set[str]) -> int:
    """Three-way comparison of two cell values; empties sort after values."""
    empty_a = is_empty_value(a)
    empty_b = is_empty_value(b)
    if empty_a and empty_b:
        return 0
    if empty_a:
        return 1
    if empty_b:
        return -1

    if col in numeric_columns:
        left, right = to_number(a), to_number(b)
        if left is not None and right is not None:
            return (left > right) - (left < right)

    key_a, key_b = _text_key(a), _text_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_rows(
    rows: Sequence[Mapping[str, Any]],
    sort_column: Optional[str],
    sort_direction: str,
    columns: Sequence[str],
    numeric_columns: Optional[Set[str]] = None,
) -> List[Mapping[str, Any]]:
    """Return rows sorted by one column.

    Rows are returned unchanged when ``sort_column`` is not one of
    ``columns``. The sort is stable in both directions.
    """
    if not sort_column or sort_column not in columns:
        return list(rows)
    if numeric_columns is None:
        numeric_columns = detect_numeric_columns(rows, [sort_column])

    filled = [row for row in rows if not is_empty_value(row.get(sort_column))]
    empty = [row for row in rows if is_empty_value(row.get(sort_column))]

    filled.sort(
        key=cmp_to_key(
            lambda a, b: compare_values(
                a.get(sort_column), b.get(sort_column), sort_column, numeric_columns
            )
        ),
        reverse=sort_direction == DESCENDING,
    )
    return filled + empty
