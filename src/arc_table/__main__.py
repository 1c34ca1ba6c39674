"""
Main entry point for the arc_table dataset build.
Usage: python -m arc_table

The target language comes from ARC_DATA_LANG; ARC_TABLE_SETTINGS may point
at an INI settings file to use instead of the per-user store.
"""

import logging
import os
import sys

from .dataset import DatasetPipeline
from .game_data.models import CorpusAcquisitionError
from .settings import BuildSettings, ConfigError
from .utils.logging_config import setup_logging

SETTINGS_ENV_VAR = "ARC_TABLE_SETTINGS"


def main() -> int:
    """Run one dataset build and return the process exit code."""
    logger = logging.getLogger(f"{__name__}.main")

    settings = BuildSettings(settings_file=os.environ.get(SETTINGS_ENV_VAR) or None)
    setup_logging(settings)

    logger.info("Starting arc_table dataset build")
    logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    if validation.warnings:
        logger.warning("Configuration warnings detected:")
        for warning in validation.warnings:
            logger.warning(f"  {warning}")

    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    try:
        pipeline = DatasetPipeline.from_settings(settings)
        summary = pipeline.run()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except CorpusAcquisitionError as e:
        logger.error(f"Could not acquire item data: {e}")
        return 1

    logger.info(
        f"Build finished: {summary.row_count} rows, {summary.column_count} columns, "
        f"{summary.bench_count} craft benches"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
