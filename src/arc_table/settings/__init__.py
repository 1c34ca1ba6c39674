"""
Settings package for arc_table.

This package provides a type-safe configuration management system using
Qt's QSettings for storage, plus loaders for the JSON build config files.

Usage:
    from arc_table.settings import BuildSettings, ValidationResult

    settings = BuildSettings()
    result = settings.validate()
"""

from .core import BuildSettings
from .types import ConfigVersion, ConfigError, FlattenMode, ValidationResult
from .build_config import BuildConfig, load_build_config

__all__ = [
    "BuildSettings",
    "ConfigVersion",
    "ConfigError",
    "FlattenMode",
    "ValidationResult",
    "BuildConfig",
    "load_build_config",
]
