"""Basic unit tests for arc_table modules."""

import logging
from pathlib import Path
from typing import Any

from arc_table.settings import BuildSettings


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_build_settings_init(self, settings_file: Path) -> None:
        """Test BuildSettings can be initialized."""
        settings_obj = BuildSettings(settings_file=settings_file)
        assert settings_obj is not None
        assert settings_obj.version == "1.0"

    def test_build_settings_validation(self, settings: BuildSettings) -> None:
        """Test settings validation returns result."""
        validation = settings.validate()
        assert validation is not None
        assert isinstance(validation.errors, list)


class TestGameDataModels:
    """Test game data model creation."""

    def test_raw_record_dict_creation(self) -> None:
        """Test RawRecord (dict) can be created."""
        obj: dict[str, Any] = {
            "id": "test_id",
            "type": "Basic Material",
            "name": {"en": "Test Item"},
        }
        assert obj["id"] == "test_id"
        assert obj["type"] == "Basic Material"

    def test_source_document_creation(self) -> None:
        """Test SourceDocument can be created."""
        from arc_table.game_data.models import SourceDocument

        doc = SourceDocument(identifier="test.json", data={"id": "test"})
        assert doc.identifier == "test.json"
        assert doc.data["id"] == "test"

    def test_corpus_load_result_len(self) -> None:
        """Test CorpusLoadResult counts documents only."""
        from arc_table.game_data.models import CorpusLoadResult, LoadFailure, SourceDocument

        result = CorpusLoadResult(
            documents=[SourceDocument("a.json", {})],
            failures=[LoadFailure("b.json", "bad")],
        )
        assert len(result) == 1


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, settings: BuildSettings) -> None:
        """Test logging setup works with settings."""
        from arc_table.utils.logging_config import setup_logging

        settings.console_use_colors = False
        setup_logging(settings=settings)

        logger = logging.getLogger("arc_table")
        assert logger is not None
        assert logger.level == logging.DEBUG

    def test_csv_formatter_escapes_quotes(self) -> None:
        """Test CSV formatter doubles quotes inside messages."""
        from arc_table.utils.logging_config import CSVFormatter

        record = logging.LogRecord(
            "arc_table.test", logging.WARNING, __file__, 10, 'Skip "x.json"', None, None
        )
        line = CSVFormatter(datefmt="%Y-%m-%d").format(record)
        assert '"Skip ""x.json"""' in line
        assert "WARNING" in line

    def test_colored_formatter_wraps_level(self) -> None:
        """Test colored formatter adds ANSI codes around the level name."""
        from arc_table.utils.logging_config import ColoredFormatter

        record = logging.LogRecord(
            "arc_table.test", logging.ERROR, __file__, 10, "boom", None, None
        )
        line = ColoredFormatter(fmt="%(levelname)s : %(message)s").format(record)
        assert line.startswith("\033[31mERROR\033[0m")
