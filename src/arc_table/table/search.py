"""
Keyword search over dataset rows.
"""

from typing import Any, List, Mapping, Sequence

import orjson

from ..dataset.locale import display_text


def _search_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(_search_value(v) for v in value)
    if isinstance(value, dict):
        return orjson.dumps(value).decode("utf-8")
    return value if isinstance(value, str) else display_text(value)


def row_search_text(row: Mapping[str, Any], columns: Sequence[str]) -> str:
    """Lowercased concatenation of a row's column values."""
    return " ".join(_search_value(row.get(col)) for col in columns).lower()


def filter_rows(
    rows: Sequence[Mapping[str, Any]], columns: Sequence[str], keyword: str
) -> List[Mapping[str, Any]]:
    """Return rows containing every whitespace-separated term of ``keyword``.

    Matching is a case-insensitive substring test against the row's
    concatenated column values. An empty keyword matches every row.
    """
    terms = keyword.lower().split()
    if not terms:
        return list(rows)

    matched = []
    for row in rows:
        text = row_search_text(row, columns)
        if all(term in text for term in terms):
            matched.append(row)
    return matched
