"""
Loaders for the operator-facing JSON build configuration files.

``columns.json`` holds the ordered column allow-list and
``exclude_types.json`` the item types that never become rows. Both are
read before any item data is touched; a missing or malformed file is a
configuration error and aborts the build.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, List, Optional, Tuple

import orjson

from .types import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildConfig:
    """Column allow-list and exclude-types set for one build."""

    columns: Optional[Tuple[str, ...]]
    exclude_types: FrozenSet[str]
    columns_path: Optional[Path] = None
    exclude_types_path: Optional[Path] = None

    @property
    def discovers_columns(self) -> bool:
        """True when no allow-list is configured and columns are discovered."""
        return self.columns is None


def _read_string_list(path: Path, hint: str) -> List[str]:
    if not path.exists():
        raise ConfigError(f"Missing {path}. {hint}")

    try:
        with path.open("rb") as f:
            data: Any = orjson.loads(f.read())
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ConfigError(f"{path} must contain a JSON array of strings")

    return list(data)


def load_columns(path: Path) -> Tuple[str, ...]:
    """Load the ordered column allow-list, dropping repeated names."""
    raw = _read_string_list(
        path, "Create it with an array of column names to include."
    )
    columns: List[str] = []
    for name in raw:
        if name in columns:
            logger.warning(f"Duplicate column '{name}' in {path}, keeping first occurrence")
            continue
        columns.append(name)
    return tuple(columns)


def load_exclude_types(path: Path) -> FrozenSet[str]:
    """Load the set of item types excluded from the dataset."""
    return frozenset(
        _read_string_list(
            path,
            "Create it with an array of item type strings to exclude, "
            "or provide an empty array if none.",
        )
    )


def load_build_config(
    columns_path: Path,
    exclude_types_path: Path,
    discover_columns: bool = False,
) -> BuildConfig:
    """Load both build configuration files.

    Args:
        columns_path: Path to columns.json
        exclude_types_path: Path to exclude_types.json
        discover_columns: When True the column file is not read and the
            column list is derived from the data instead

    Raises:
        ConfigError: If a required file is missing, unreadable or malformed
    """
    columns = None if discover_columns else load_columns(columns_path)
    exclude_types = load_exclude_types(exclude_types_path)

    if columns is None:
        logger.info("Column discovery enabled, column list will be derived from items")
    else:
        logger.info(f"Loaded {len(columns)} columns from {columns_path}")
    logger.info(f"Loaded {len(exclude_types)} excluded types from {exclude_types_path}")

    return BuildConfig(
        columns=columns,
        exclude_types=exclude_types,
        columns_path=None if discover_columns else columns_path,
        exclude_types_path=exclude_types_path,
    )
