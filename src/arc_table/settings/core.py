"""
Core settings management for arc_table.
"""

import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QSettings

from .types import ConfigVersion, FlattenMode, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .build import BuildOptions
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class BuildSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to build settings. Values live either in the
    native per-user store or, when ``settings_file`` is given, in an INI file.
    """

    def __init__(
        self, settings_file: Optional[str | Path] = None, profile: str = "default"
    ):
        """Initialize settings storage and profile.

        Args:
            settings_file: Optional INI file to read/write instead of the native store
            profile: Settings profile name (default: "default")
        """
        if settings_file:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("arc_table", "arc_table")
        self.profile = profile

        # Profile group: arc_table/arc_table/default/...
        self.settings.beginGroup(profile)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._build = BuildOptions(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def build(self) -> BuildOptions:
        """Access build options subsystem."""
        return self._build

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def repo_url(self) -> str:
        """Get upstream data repository URL."""
        return self._paths.repo_url

    @property
    def repo_dir(self) -> Path:
        """Get local clone directory."""
        return self._paths.repo_dir

    @property
    def source_dir(self) -> Optional[Path]:
        """Get local corpus directory, if configured."""
        return self._paths.source_dir

    @source_dir.setter
    def source_dir(self, value: Optional[Path]) -> None:
        """Set local corpus directory."""
        self._paths.source_dir = value

    @property
    def output_dir(self) -> Path:
        """Get dataset output directory."""
        return self._paths.output_dir

    @output_dir.setter
    def output_dir(self, value: Path) -> None:
        """Set dataset output directory."""
        self._paths.output_dir = value

    @property
    def columns_file(self) -> Path:
        """Get column allow-list path."""
        return self._paths.columns_file

    @columns_file.setter
    def columns_file(self, value: Path) -> None:
        """Set column allow-list path."""
        self._paths.columns_file = value

    @property
    def exclude_types_file(self) -> Path:
        """Get excluded types list path."""
        return self._paths.exclude_types_file

    @exclude_types_file.setter
    def exclude_types_file(self, value: Path) -> None:
        """Set excluded types list path."""
        self._paths.exclude_types_file = value

    # === BUILD OPTIONS (DELEGATED) ===

    @property
    def language(self) -> str:
        """Get target language."""
        return self._build.language

    @language.setter
    def language(self, value: str) -> None:
        """Set target language."""
        self._build.language = value

    @property
    def flatten_mode(self) -> FlattenMode:
        """Get flatten mode."""
        return self._build.flatten_mode

    @flatten_mode.setter
    def flatten_mode(self, value: FlattenMode) -> None:
        """Set flatten mode."""
        self._build.flatten_mode = value

    @property
    def required_fields(self) -> List[str]:
        """Get required row fields."""
        return self._build.required_fields

    @required_fields.setter
    def required_fields(self, value: List[str]) -> None:
        """Set required row fields."""
        self._build.required_fields = value

    @property
    def discover_columns(self) -> bool:
        """Whether columns are discovered from the data."""
        return self._build.discover_columns

    @discover_columns.setter
    def discover_columns(self, value: bool) -> None:
        """Set column discovery mode."""
        self._build.discover_columns = value

    @property
    def max_workers(self) -> int:
        """Get file reader thread count."""
        return self._build.max_workers

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        """Set file reader thread count."""
        self._build.max_workers = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path (read-only)."""
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
