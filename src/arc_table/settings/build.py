"""
Dataset build options for arc_table.
"""

import logging
import os
from typing import TYPE_CHECKING, List, cast

from .types import FlattenMode

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

LANGUAGE_ENV_VAR = "ARC_DATA_LANG"
DEFAULT_LANGUAGE = "en"
DEFAULT_REQUIRED_FIELDS = "value"


class BuildOptions:
    """Manages options that shape the generated dataset."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            return default

    @property
    def language(self) -> str:
        """Get target language; the ARC_DATA_LANG environment variable wins."""
        env_lang = os.environ.get(LANGUAGE_ENV_VAR, "").strip()
        if env_lang:
            return env_lang
        return self._get_str("build/language", DEFAULT_LANGUAGE).strip() or DEFAULT_LANGUAGE

    @language.setter
    def language(self, value: str) -> None:
        """Set stored target language."""
        self.settings.setValue("build/language", value.strip())
        self.settings.sync()

    @property
    def flatten_mode_name(self) -> str:
        """Get the raw flatten mode string as stored."""
        return self._get_str("build/flatten_mode", FlattenMode.SHALLOW.value).strip().lower()

    @property
    def flatten_mode(self) -> FlattenMode:
        """Get flatten mode, falling back to shallow for unknown values."""
        try:
            return FlattenMode(self.flatten_mode_name)
        except ValueError:
            return FlattenMode.SHALLOW

    @flatten_mode.setter
    def flatten_mode(self, value: FlattenMode) -> None:
        """Set flatten mode."""
        self.settings.setValue("build/flatten_mode", value.value)
        self.settings.sync()

    @property
    def required_fields(self) -> List[str]:
        """Get fields every emitted row must carry (stored comma separated)."""
        value = self.settings.value("build/required_fields", DEFAULT_REQUIRED_FIELDS)
        # Hand-edited INI files turn unquoted "a, b" into a string list
        if isinstance(value, (list, tuple)):
            parts = [str(part) for part in value]
        else:
            parts = ("" if value is None else str(value)).split(",")
        return [part.strip() for part in parts if part.strip()]

    @required_fields.setter
    def required_fields(self, value: List[str]) -> None:
        """Set required fields; an empty list disables the check."""
        self.settings.setValue("build/required_fields", ",".join(value))
        self.settings.sync()

    @property
    def discover_columns(self) -> bool:
        """Whether the column list is discovered instead of read from config."""
        return self._get_bool("build/discover_columns", False)

    @discover_columns.setter
    def discover_columns(self, value: bool) -> None:
        """Set column discovery mode."""
        self.settings.setValue("build/discover_columns", value)
        self.settings.sync()

    @property
    def max_workers(self) -> int:
        """Get thread pool size for reading item files (1-64)."""
        value = self._get_int("build/max_workers", 32)
        return max(1, min(64, value))

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        """Set thread pool size for reading item files (1-64)."""
        validated = max(1, min(64, value))
        self.settings.setValue("build/max_workers", validated)
        self.settings.sync()
