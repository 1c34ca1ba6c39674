"""
End-to-end dataset builds over a small on-disk corpus.

Runs the full pipeline (load, index pass, row pass, write) and checks the
generated artifacts.
"""

from pathlib import Path
from typing import Dict

import orjson
import pytest

from arc_table.__main__ import main
from arc_table.dataset import DatasetPipeline
from arc_table.dataset.writer import (
    BENCH_INDEX_FILE,
    COLUMNS_FILE,
    ITEM_INDEX_FILE,
    META_FILE,
    ROWS_FILE,
)
from arc_table.dataset.references import ReferenceResolver
from arc_table.game_data import (
    CorpusAcquisitionError,
    GameDataService,
    LocalCorpusSource,
    NormalizationError,
    SourceDocument,
)
from arc_table.settings import BuildSettings, ConfigError, FlattenMode
from arc_table.table import load_table

ARTIFACTS = [ROWS_FILE, COLUMNS_FILE, ITEM_INDEX_FILE, BENCH_INDEX_FILE, META_FILE]


def _read(path: Path):
    return orjson.loads(path.read_bytes())


def _pipeline(corpus: Path, config: Dict[str, Path], output_dir: Path, **kwargs) -> DatasetPipeline:
    service = GameDataService(LocalCorpusSource(corpus), max_workers=4)
    return DatasetPipeline(service, output_dir, config["columns"], config["exclude_types"], **kwargs)


class TestDatasetBuild:
    """Full builds of the sample corpus."""

    def test_english_build(self, sample_corpus: Path, sample_config, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        summary = _pipeline(sample_corpus, sample_config, output_dir).run()

        rows = _read(output_dir / ROWS_FILE)
        assert rows == [
            {
                "id": "anvil",
                "name": "Anvil",
                "type": "Weapon",
                "value": 500,
                "recipe": {"Metal Parts": 3, "unknown_part": 1},
                "effects": "Damage: 40",
                "craftBench": "weapon_bench",
            },
            {
                "id": "metal_parts",
                "name": "Metal Parts",
                "type": "Basic Material",
                "value": 75,
                "recyclesInto": {"Anvil": 1},
            },
        ]
        assert list(rows[0]) == ["id", "name", "type", "value", "recipe", "effects", "craftBench"]
        assert _read(output_dir / COLUMNS_FILE) == [
            "id", "name", "type", "value", "recipe", "recyclesInto", "effects", "craftBench",
        ]
        assert _read(output_dir / ITEM_INDEX_FILE) == {
            "anvil": "Anvil",
            "metal_parts": "Metal Parts",
            "outfit": "Outfit",
            "quest_note": "Quest Note",
        }
        assert _read(output_dir / BENCH_INDEX_FILE) == {"weapon_bench": "Gunsmith"}
        assert _read(output_dir / META_FILE) == {
            "language": "en",
            "rowCount": 2,
            "columnCount": 8,
            "benchCount": 1,
            "skippedByType": 1,
            "skippedByRequiredField": 1,
            "failedRecordCount": 2,
        }
        assert summary.failed_records == ["broken.json", "list.json"]

    def test_french_build(self, sample_corpus: Path, sample_config, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        _pipeline(sample_corpus, sample_config, output_dir, language="fr").run()

        rows = {row["id"]: row for row in _read(output_dir / ROWS_FILE)}
        assert rows["anvil"]["name"] == "Enclume"
        assert rows["anvil"]["recipe"] == {"Pièces métalliques": 3, "unknown_part": 1}
        assert rows["anvil"]["effects"] == "Dégâts: 40"
        assert rows["metal_parts"]["recyclesInto"] == {"Enclume": 1}
        assert _read(output_dir / BENCH_INDEX_FILE) == {"weapon_bench": "Armurier"}
        assert _read(output_dir / META_FILE)["language"] == "fr"

    def test_rebuild_is_byte_identical(self, sample_corpus: Path, sample_config, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        _pipeline(sample_corpus, sample_config, output_dir).run()
        first = {name: (output_dir / name).read_bytes() for name in ARTIFACTS}
        _pipeline(sample_corpus, sample_config, output_dir).run()
        second = {name: (output_dir / name).read_bytes() for name in ARTIFACTS}
        assert first == second
        assert sorted(p.name for p in output_dir.iterdir()) == sorted(ARTIFACTS)

    def test_discovery_and_dotted_mode(self, sample_corpus: Path, sample_config, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        _pipeline(
            sample_corpus,
            sample_config,
            output_dir,
            flatten_mode=FlattenMode.DOTTED,
            discover_columns=True,
            required_fields=[],
        ).run()

        columns = _read(output_dir / COLUMNS_FILE)
        assert columns[:5] == ["id", "name", "type", "rarity", "value"]
        assert "effects.dmg" in columns
        assert "effects.dmg.value" in columns
        meta = _read(output_dir / META_FILE)
        assert meta["rowCount"] == 3
        assert meta["skippedByRequiredField"] == 0

    def test_built_dataset_loads_into_table(self, sample_corpus: Path, sample_config, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        _pipeline(sample_corpus, sample_config, output_dir).run()
        view = load_table(output_dir)
        view.search_term = "metal"
        assert [row["id"] for row in view.visible_rows()] == ["anvil", "metal_parts"]


class TestNormalizeRecord:
    """Per-record failures carry the source file name."""

    def test_non_object_record(self, sample_config, tmp_path: Path) -> None:
        pipeline = _pipeline(tmp_path, sample_config, tmp_path / "out")
        with pytest.raises(NormalizationError) as excinfo:
            pipeline.normalize_record(SourceDocument("list.json", [1, 2, 3]), ReferenceResolver({}))
        assert excinfo.value.identifier == "list.json"


class TestBuildFailures:
    """Aborting conditions."""

    def test_missing_columns_file_fails_before_corpus(self, write_build_config, tmp_path: Path) -> None:
        config = write_build_config(["id"], [])
        config["columns"].unlink()
        pipeline = _pipeline(tmp_path / "no_corpus", config, tmp_path / "out")
        with pytest.raises(ConfigError, match="columns.json"):
            pipeline.run()
        assert not (tmp_path / "out").exists()

    def test_missing_corpus(self, sample_config, tmp_path: Path) -> None:
        pipeline = _pipeline(tmp_path / "no_corpus", sample_config, tmp_path / "out")
        with pytest.raises(CorpusAcquisitionError):
            pipeline.run()


class TestMain:
    """The ``python -m arc_table`` entry point."""

    def _configure(self, settings_file: Path, corpus: Path, config: Dict[str, Path], output_dir: Path) -> None:
        settings = BuildSettings(settings_file=settings_file)
        settings.source_dir = corpus
        settings.output_dir = output_dir
        settings.columns_file = config["columns"]
        settings.exclude_types_file = config["exclude_types"]
        settings.sync()

    def test_main_builds_dataset(
        self, sample_corpus: Path, sample_config, settings_file: Path, tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        output_dir = tmp_path / "out"
        self._configure(settings_file, sample_corpus, sample_config, output_dir)
        monkeypatch.setenv("ARC_TABLE_SETTINGS", str(settings_file))
        monkeypatch.setenv("ARC_DATA_LANG", "fr")

        assert main() == 0
        assert _read(output_dir / META_FILE)["language"] == "fr"

    def test_main_rejects_invalid_configuration(
        self, sample_config, settings_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        self._configure(settings_file, tmp_path / "missing", sample_config, tmp_path / "out")
        monkeypatch.setenv("ARC_TABLE_SETTINGS", str(settings_file))

        assert main() == 1
        assert not (tmp_path / "out").exists()
