"""
Data models for item game data.

Contains type definitions, constants and small data structures used
throughout the game_data and dataset packages. Keeps a dict-based approach
for records while providing clear type hints.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple, TypeAlias

# Type aliases for clarity
RawRecord: TypeAlias = Dict[str, Any]
"""A single item (or hideout structure) as read from one JSON file."""

NormalizedRow: TypeAlias = Dict[str, Any]
"""A record reduced to column-keyed display values."""

NameIndex: TypeAlias = Mapping[str, str]
"""Read-only mapping of stringified object ID to display name."""


# Corpus layout inside the data repository
ITEMS_DIR = "items"
HIDEOUT_DIR = "hideout"

# Fields whose object values map item IDs to quantities
REFERENCE_FIELDS: Tuple[str, ...] = (
    "recipe",
    "recyclesInto",
    "salvagesInto",
    "upgradeCost",
    "repairCost",
)

EFFECTS_FIELD = "effects"

# Literal key carried by locale maps that also hold a raw value
LOCALE_VALUE_KEY = "value"

# Closed set of locale codes used by the data repository (compared lowercased)
LOCALE_CODES: FrozenSet[str] = frozenset(
    {
        "en", "de", "fr", "es", "it", "pt", "pt-br", "pl", "ru", "uk", "tr",
        "ja", "ko", "zh", "zh-cn", "zh-tw", "zh-hans", "zh-hant", "da", "no",
        "nb", "sv", "fi", "nl", "cs", "hu", "hr", "sr", "ro", "el", "bg",
        "sk", "sl", "th", "vi", "id", "ar", "he",
    }
)

# Discovered columns start with these, in this order
PRIORITY_COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "type",
    "rarity",
    "value",
    "weightKg",
    "stackSize",
)


class NormalizationError(Exception):
    """Error during normalization of a specific record."""

    def __init__(self, message: str, identifier: str = ""):
        super().__init__(message)
        self.identifier = identifier


class CorpusAcquisitionError(Exception):
    """Raised when the raw item corpus cannot be fetched or located."""
    pass


@dataclass(frozen=True)
class SourceDocument:
    """One parsed JSON document and the identifier it was read from."""

    identifier: str
    data: Any


@dataclass(frozen=True)
class LoadFailure:
    """A document that could not be read or parsed."""

    identifier: str
    error: str


@dataclass
class CorpusLoadResult:
    """Documents of one corpus directory, ordered by identifier."""

    documents: List[SourceDocument] = field(default_factory=list)
    failures: List[LoadFailure] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.documents)
