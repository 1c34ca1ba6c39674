"""
Search, sort and cell formatting over a built dataset.

These helpers follow the contract the browser table relies on: AND keyword
search across all columns, numeric-or-text column sorting with empty values
last, and per-cell display text that resolves IDs through the indices.
"""

from .search import filter_rows, row_search_text
from .sorting import (
    ASCENDING,
    DESCENDING,
    compare_values,
    detect_numeric_columns,
    is_numeric_value,
    sort_rows,
)
from .cells import CellText, format_cell_value
from .view import TableView, load_table

__all__ = [
    "filter_rows",
    "row_search_text",
    "ASCENDING",
    "DESCENDING",
    "compare_values",
    "detect_numeric_columns",
    "is_numeric_value",
    "sort_rows",
    "CellText",
    "format_cell_value",
    "TableView",
    "load_table",
]
