"""
Dataset construction: locale resolution, flattening, reference resolution,
row projection and the build pipeline that ties them together.
"""

from .locale import is_locale_map, pick_locale, resolve_display_name
from .flatten import (
    FlattenStrategy,
    ShallowFlattener,
    DottedFlattener,
    create_flattener,
)
from .references import ReferenceIndexBuilder, ReferenceResolver, resolve_references
from .projection import (
    ProjectionOutcome,
    RequiredFieldsPredicate,
    RowProjector,
    sort_discovered_columns,
)
from .writer import DatasetArtifacts, DatasetWriter
from .pipeline import BuildSummary, DatasetPipeline, create_source

__all__ = [
    "is_locale_map",
    "pick_locale",
    "resolve_display_name",
    "FlattenStrategy",
    "ShallowFlattener",
    "DottedFlattener",
    "create_flattener",
    "ReferenceIndexBuilder",
    "ReferenceResolver",
    "resolve_references",
    "ProjectionOutcome",
    "RequiredFieldsPredicate",
    "RowProjector",
    "sort_discovered_columns",
    "DatasetArtifacts",
    "DatasetWriter",
    "BuildSummary",
    "DatasetPipeline",
    "create_source",
]
