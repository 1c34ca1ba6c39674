"""
Reference index construction and ID resolution.

Resolution needs knowledge of the whole corpus, so it runs in two phases:
``build_name_index`` scans every record once and returns a read-only
mapping, then ``resolve_references`` rewrites the reference fields of each
row against that finished index.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Optional

from ..game_data.models import (
    REFERENCE_FIELDS,
    NameIndex,
    NormalizedRow,
    SourceDocument,
)
from .locale import FALLBACK_LANGUAGE, display_text, resolve_display_name

logger = logging.getLogger(__name__)


def index_key(object_id: Any) -> Optional[str]:
    """Stringify an object ID the same way for indexing and lookups."""
    if object_id is None or isinstance(object_id, (dict, list)):
        return None
    return object_id if isinstance(object_id, str) else display_text(object_id)


class ReferenceIndexBuilder:
    """Builds ``id -> display name`` indices over a corpus."""

    def __init__(self, language: str = FALLBACK_LANGUAGE):
        self.language = language
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build_name_index(
        self, documents: Iterable[SourceDocument], label: str = "item"
    ) -> NameIndex:
        """Scan all documents and return a read-only name index.

        Documents that are not objects, or that lack an ID or a usable name,
        are left out without affecting the rest of the index.
        """
        index: Dict[str, str] = {}
        for document in documents:
            record = document.data
            if not isinstance(record, dict):
                self.logger.warning(
                    f"Skip {label} {document.identifier}: expected a JSON object"
                )
                continue

            key = index_key(record.get("id"))
            name = resolve_display_name(record.get("name"), self.language)
            if key is None or name is None:
                continue

            if key in index and index[key] != name:
                self.logger.debug(
                    f"Duplicate {label} id '{key}' in {document.identifier}, "
                    f"'{index[key]}' replaced by '{name}'"
                )
            index[key] = name

        self.logger.info(f"Built {label} name index with {len(index)} entries")
        return MappingProxyType(index)


class ReferenceResolver:
    """Rewrites reference fields so their ID keys become display names."""

    def __init__(self, index: NameIndex, reference_fields: Iterable[str] = REFERENCE_FIELDS):
        self.index = index
        self.reference_fields = tuple(reference_fields)

    def resolve_mapping(self, mapping: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``mapping`` with keys resolved through the index.

        Unknown IDs keep their raw key. A name that is already taken, either
        by an earlier resolved entry or by another raw key of the same
        mapping, is not substituted and the raw ID is kept, so no entry is
        lost.
        """
        raw_keys = set(mapping)
        resolved: Dict[str, Any] = {}
        for raw_key, value in mapping.items():
            name = self.index.get(str(raw_key), raw_key)
            if name != raw_key and (name in resolved or name in raw_keys):
                name = raw_key
            resolved[name] = value
        return resolved

    def resolve(self, row: NormalizedRow) -> NormalizedRow:
        """Return a new row with every dict-valued reference field resolved."""
        resolved_row = dict(row)
        for field_name in self.reference_fields:
            value = row.get(field_name)
            if isinstance(value, dict):
                resolved_row[field_name] = self.resolve_mapping(value)
        return resolved_row


def resolve_references(
    row: NormalizedRow,
    index: NameIndex,
    reference_fields: Iterable[str] = REFERENCE_FIELDS,
) -> NormalizedRow:
    """Resolve the reference fields of one row against a finished index."""
    return ReferenceResolver(index, reference_fields).resolve(row)
