"""
arc_table: item dataset builder for the ARC Raiders item table

Turns the per-item JSON files of the community data repository into a flat
dataset (rows, columns, name indices) for the item table front end.
"""

__version__ = "0.1.0"
__author__ = "arc_table Contributors"

# Core service imports
from .game_data import GameDataService
from .dataset import DatasetPipeline, BuildSummary
from .settings import BuildSettings
from .utils.logging_config import setup_logging

__all__ = [
    # Services
    "GameDataService",
    "DatasetPipeline",
    "BuildSummary",

    # Settings
    "BuildSettings",

    # Logging
    "setup_logging",
]
