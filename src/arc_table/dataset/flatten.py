"""
Flattening strategies that turn raw item records into column-keyed rows.

Two disciplines exist and exactly one is used for a whole build:

- ``ShallowFlattener`` (default) keeps one column per top-level field.
  Nested objects are rendered to display strings in place.
- ``DottedFlattener`` recurses through nested objects and emits one column
  per leaf, named by its dot-joined path (``stats.damage.value``).

Column names produced by one strategy are stable from run to run but are
not interchangeable with the other strategy's names. In both strategies
top-level reference fields stay structured dicts so that ID keys can be
resolved afterwards.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

import orjson

from ..game_data.models import (
    EFFECTS_FIELD,
    LOCALE_VALUE_KEY,
    REFERENCE_FIELDS,
    NormalizationError,
    NormalizedRow,
    RawRecord,
)
from ..settings.types import FlattenMode
from .locale import FALLBACK_LANGUAGE, display_text, is_locale_map, pick_locale

logger = logging.getLogger(__name__)


def render_value(value: Any) -> str:
    """Render a value inside a formatted list; objects become canonical JSON."""
    if isinstance(value, (dict, list)):
        return orjson.dumps(value, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    return display_text(value)


class FlattenStrategy(ABC):
    """Base class for record flattening strategies."""

    mode: FlattenMode

    def __init__(
        self,
        language: str = FALLBACK_LANGUAGE,
        reference_fields: Optional[Iterable[str]] = None,
    ):
        self.language = language
        self.reference_fields = frozenset(
            REFERENCE_FIELDS if reference_fields is None else reference_fields
        )

    def flatten(self, record: RawRecord, identifier: str = "") -> NormalizedRow:
        """Flatten one raw record into a fresh row.

        Args:
            record: Parsed JSON document
            identifier: Source file name, carried on errors

        Raises:
            NormalizationError: If the record is not a JSON object
        """
        if not isinstance(record, dict):
            raise NormalizationError(
                f"Expected a JSON object, got {type(record).__name__}", identifier
            )
        row: NormalizedRow = {}
        for key, value in record.items():
            self._flatten_field(row, key, value)
        return row

    def is_reference_value(self, key: str, value: Any) -> bool:
        return key in self.reference_fields and isinstance(value, dict)

    @abstractmethod
    def _flatten_field(self, row: NormalizedRow, key: str, value: Any) -> None:
        """Write the column(s) for one top-level field into ``row``."""


class ShallowFlattener(FlattenStrategy):
    """One column per top-level field, nested objects formatted as text."""

    mode = FlattenMode.SHALLOW

    def _flatten_field(self, row: NormalizedRow, key: str, value: Any) -> None:
        # Scalars, nulls and arrays pass through untouched
        if not isinstance(value, dict):
            row[key] = value
        elif is_locale_map(value):
            row[key] = pick_locale(value, self.language)
        elif key in self.reference_fields:
            row[key] = value
        elif key == EFFECTS_FIELD:
            row[key] = self.format_effects(value)
        else:
            row[key] = self.format_key_value_list(value)

    def format_effects(self, effects: Dict[str, Any]) -> str:
        """Format effects as ``"<label>: <value>"`` lines.

        The label is the entry's localized text when the entry is a locale
        map, otherwise the raw key. The value comes from the entry's
        ``value`` sub-key; a scalar entry is its own value.
        """
        lines = []
        for key, entry in effects.items():
            if isinstance(entry, dict):
                label = pick_locale(entry, self.language) if is_locale_map(entry) else key
                payload = entry.get(LOCALE_VALUE_KEY, "")
            else:
                label, payload = key, entry
            payload_text = "" if payload is None else render_value(payload)
            lines.append(f"{render_value(label)}: {payload_text}")
        return "\n".join(lines)

    @staticmethod
    def format_key_value_list(obj: Dict[str, Any]) -> str:
        """Format an object as ``"key: value"`` pairs, one level deep."""
        return ", ".join(f"{k}: {render_value(v)}" for k, v in obj.items())


class DottedFlattener(FlattenStrategy):
    """One column per leaf, named by its dot-joined path."""

    mode = FlattenMode.DOTTED

    def _flatten_field(self, row: NormalizedRow, key: str, value: Any) -> None:
        if self.is_reference_value(key, value) and not is_locale_map(value):
            row[key] = value
            return
        self._flatten_path(row, key, value)

    def _flatten_path(self, row: NormalizedRow, path: str, value: Any) -> None:
        if not isinstance(value, dict):
            row[path] = value
            return

        if is_locale_map(value):
            row[path] = pick_locale(value, self.language)
            if LOCALE_VALUE_KEY in value:
                row[f"{path}.{LOCALE_VALUE_KEY}"] = value[LOCALE_VALUE_KEY]
            return

        if not value:
            row[path] = ""
            return

        for key, nested in value.items():
            self._flatten_path(row, f"{path}.{key}", nested)


_STRATEGIES = {
    FlattenMode.SHALLOW: ShallowFlattener,
    FlattenMode.DOTTED: DottedFlattener,
}


def create_flattener(
    mode: FlattenMode = FlattenMode.SHALLOW,
    language: str = FALLBACK_LANGUAGE,
    reference_fields: Optional[Iterable[str]] = None,
) -> FlattenStrategy:
    """Create the flattening strategy for a build."""
    strategy_class = _STRATEGIES[mode]
    logger.debug(f"Using {strategy_class.__name__} (language: {language})")
    return strategy_class(language=language, reference_fields=reference_fields)
