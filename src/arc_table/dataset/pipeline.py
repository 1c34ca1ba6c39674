"""
Dataset build pipeline.

Runs the whole build in two passes over the corpus:

1. Index pass: item and craft bench name indices are built from every
   document and frozen.
2. Row pass: each item is flattened, its reference fields are resolved
   against the finished item index and the row is projected onto the
   configured columns.

A record that fails in the row pass is logged, counted and left out; only
configuration and corpus acquisition errors abort a build.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from ..game_data.models import (
    REFERENCE_FIELDS,
    NameIndex,
    NormalizationError,
    NormalizedRow,
    SourceDocument,
)
from ..game_data.service import CorpusSource, GameDataService
from ..game_data.sources import GitCorpusSource, LocalCorpusSource
from ..settings.build_config import BuildConfig, load_build_config
from ..settings.types import FlattenMode
from .flatten import FlattenStrategy, create_flattener
from .locale import FALLBACK_LANGUAGE
from .projection import RequiredFieldsPredicate, RowProjector
from .references import ReferenceIndexBuilder, ReferenceResolver
from .writer import DatasetArtifacts, DatasetWriter

if TYPE_CHECKING:
    from ..settings import BuildSettings

PROGRESS_INTERVAL = 100


@dataclass
class BuildSummary:
    """Result of one build run."""

    language: str
    output_dir: Path
    row_count: int = 0
    column_count: int = 0
    item_index_count: int = 0
    bench_count: int = 0
    skipped_by_type: int = 0
    skipped_by_required_field: int = 0
    failed_records: List[str] = field(default_factory=list)

    @property
    def failed_record_count(self) -> int:
        return len(self.failed_records)

    def to_meta(self) -> Dict[str, Any]:
        """Run metadata as written to meta.json."""
        return {
            "language": self.language,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "benchCount": self.bench_count,
            "skippedByType": self.skipped_by_type,
            "skippedByRequiredField": self.skipped_by_required_field,
            "failedRecordCount": self.failed_record_count,
        }


def create_source(settings: "BuildSettings") -> CorpusSource:
    """Pick the corpus source configured in settings."""
    if settings.source_dir is not None:
        return LocalCorpusSource(settings.source_dir)
    return GitCorpusSource(settings.repo_url, settings.repo_dir)


class DatasetPipeline:
    """Builds the item dataset from the raw corpus."""

    def __init__(
        self,
        service: GameDataService,
        output_dir: str | Path,
        columns_file: Path,
        exclude_types_file: Path,
        *,
        language: str = FALLBACK_LANGUAGE,
        flatten_mode: FlattenMode = FlattenMode.SHALLOW,
        required_fields: Sequence[str] = ("value",),
        discover_columns: bool = False,
        reference_fields: Sequence[str] = REFERENCE_FIELDS,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.service = service
        self.writer = DatasetWriter(output_dir)
        self.columns_file = Path(columns_file)
        self.exclude_types_file = Path(exclude_types_file)
        self.language = language
        self.discover_columns = discover_columns
        self.reference_fields = tuple(reference_fields)
        self.required = RequiredFieldsPredicate(required_fields)
        self.flattener: FlattenStrategy = create_flattener(
            flatten_mode, language, self.reference_fields
        )
        self.index_builder = ReferenceIndexBuilder(language)

    @classmethod
    def from_settings(
        cls, settings: "BuildSettings", source: Optional[CorpusSource] = None
    ) -> "DatasetPipeline":
        """Create a pipeline configured from BuildSettings."""
        service = GameDataService(
            source if source is not None else create_source(settings),
            max_workers=settings.max_workers,
        )
        return cls(
            service,
            settings.output_dir,
            settings.columns_file,
            settings.exclude_types_file,
            language=settings.language,
            flatten_mode=settings.flatten_mode,
            required_fields=settings.required_fields,
            discover_columns=settings.discover_columns,
        )

    def load_config(self) -> BuildConfig:
        """Load columns and excluded types (raises ConfigError)."""
        return load_build_config(
            self.columns_file, self.exclude_types_file, self.discover_columns
        )

    def build_indices(
        self, items: Sequence[SourceDocument], hideout: Sequence[SourceDocument]
    ) -> Tuple[NameIndex, NameIndex]:
        """Index pass: item and craft bench name indices."""
        item_index = self.index_builder.build_name_index(items, label="item")
        bench_index = self.index_builder.build_name_index(hideout, label="craft bench")
        return item_index, bench_index

    def normalize_record(
        self, document: SourceDocument, resolver: ReferenceResolver
    ) -> NormalizedRow:
        """Flatten one record and resolve its reference fields.

        Raises:
            NormalizationError: If the record cannot be turned into a row,
                with the document identifier set
        """
        try:
            return resolver.resolve(
                self.flattener.flatten(document.data, document.identifier)
            )
        except NormalizationError:
            raise
        except Exception as e:
            raise NormalizationError(str(e), document.identifier) from e

    def build_rows(
        self,
        items: Sequence[SourceDocument],
        config: BuildConfig,
        item_index: NameIndex,
    ) -> Tuple[List[NormalizedRow], List[str], RowProjector, List[str]]:
        """Row pass: flatten, resolve and project every item.

        Returns:
            Tuple of (rows, columns, projector with skip counters, failed identifiers)
        """
        resolver = ReferenceResolver(item_index, self.reference_fields)
        projector = RowProjector(
            columns=config.columns,
            exclude_types=config.exclude_types,
            required=self.required,
        )
        failed: List[str] = []
        total = len(items)

        for i, document in enumerate(items, start=1):
            try:
                row = self.normalize_record(document, resolver)
            except NormalizationError as e:
                self.logger.warning(f"Skip {e.identifier}: {e}")
                failed.append(e.identifier)
            else:
                projector.project(row)

            if i % PROGRESS_INTERVAL == 0:
                self.logger.info(f"  Parsed {i}/{total}...")

        rows, columns = projector.finalize()
        return rows, columns, projector, failed

    def run(self) -> BuildSummary:
        """Run the full build and write all artifacts.

        Raises:
            ConfigError: If build configuration is missing or invalid
            CorpusAcquisitionError: If the corpus cannot be fetched
        """
        config = self.load_config()

        items = self.service.load_items()
        hideout = self.service.load_hideout()

        item_index, bench_index = self.build_indices(items.documents, hideout.documents)

        rows, columns, projector, failed = self.build_rows(
            items.documents, config, item_index
        )

        summary = BuildSummary(
            language=self.language,
            output_dir=self.writer.output_dir,
            row_count=len(rows),
            column_count=len(columns),
            item_index_count=len(item_index),
            bench_count=len(bench_index),
            skipped_by_type=projector.skipped_by_type,
            skipped_by_required_field=projector.skipped_by_required_field,
            failed_records=sorted(
                [failure.identifier for failure in items.failures] + failed
            ),
        )

        self.writer.write(
            DatasetArtifacts(
                rows=rows,
                columns=columns,
                item_index=item_index,
                bench_index=bench_index,
                meta=summary.to_meta(),
            )
        )

        self.logger.info(
            f"Wrote {summary.row_count} items and {summary.column_count} columns "
            f"to {summary.output_dir} (lang: {summary.language})"
        )
        if summary.skipped_by_type:
            source = config.exclude_types_path or "exclude types"
            self.logger.info(
                f"Skipped {summary.skipped_by_type} items by type filter (from {source})."
            )
        if summary.skipped_by_required_field:
            self.logger.info(
                f"Skipped {summary.skipped_by_required_field} items missing "
                f"{', '.join(self.required.fields)}."
            )
        if summary.failed_record_count:
            self.logger.warning(
                f"Skipped {summary.failed_record_count} unreadable or malformed item files."
            )
        return summary
