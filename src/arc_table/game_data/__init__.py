"""
Module for working with the item data repository.

Provides corpus sources (git clone or local directory), parallel JSON
loading and the shared data models used by the dataset pipeline.
"""

from .service import GameDataService
from .models import (
    RawRecord,
    NormalizedRow,
    NameIndex,
    SourceDocument,
    LoadFailure,
    CorpusLoadResult,
    NormalizationError,
    CorpusAcquisitionError,
    REFERENCE_FIELDS,
    LOCALE_CODES,
    PRIORITY_COLUMNS,
)
from .loaders import GameDataFileLoader
from .sources import GitCorpusSource, LocalCorpusSource

__all__ = [
    # Main service
    "GameDataService",
    # Type aliases
    "RawRecord",
    "NormalizedRow",
    "NameIndex",
    # Data structures
    "SourceDocument",
    "LoadFailure",
    "CorpusLoadResult",
    # Errors
    "NormalizationError",
    "CorpusAcquisitionError",
    # Constants
    "REFERENCE_FIELDS",
    "LOCALE_CODES",
    "PRIORITY_COLUMNS",
    # Component classes
    "GameDataFileLoader",
    "GitCorpusSource",
    "LocalCorpusSource",
]
