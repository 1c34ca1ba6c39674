"""
Path-related settings for arc_table.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

DEFAULT_REPO_URL = "https://github.com/RaidTheory/arcraiders-data.git"
DEFAULT_REPO_DIR = "repos/arcraiders-data"
DEFAULT_OUTPUT_DIR = "public/data"
DEFAULT_COLUMNS_FILE = "config/columns.json"
DEFAULT_EXCLUDE_TYPES_FILE = "config/exclude_types.json"


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _set_path(self, key: str, value: Optional[Path | str]) -> None:
        self.settings.setValue(key, str(value) if value else "")
        self.settings.sync()

    @property
    def repo_url(self) -> str:
        """Get git URL of the upstream item data repository."""
        return self._get_str("paths/repo_url", DEFAULT_REPO_URL) or DEFAULT_REPO_URL

    @repo_url.setter
    def repo_url(self, value: str) -> None:
        """Set git URL of the upstream item data repository."""
        self.settings.setValue("paths/repo_url", value)
        self.settings.sync()

    @property
    def repo_dir(self) -> Path:
        """Get local clone directory of the item data repository."""
        return Path(self._get_str("paths/repo_dir", DEFAULT_REPO_DIR) or DEFAULT_REPO_DIR)

    @repo_dir.setter
    def repo_dir(self, value: Optional[Path | str]) -> None:
        """Set local clone directory."""
        self._set_path("paths/repo_dir", value)

    @property
    def source_dir(self) -> Optional[Path]:
        """Get an already-present corpus directory (disables git when set)."""
        path_str = self._get_str("paths/source_dir", "")
        return Path(path_str) if path_str else None

    @source_dir.setter
    def source_dir(self, value: Optional[Path | str]) -> None:
        """Set local corpus directory."""
        self._set_path("paths/source_dir", value)

    @property
    def output_dir(self) -> Path:
        """Get directory receiving the generated dataset."""
        return Path(self._get_str("paths/output_dir", DEFAULT_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR)

    @output_dir.setter
    def output_dir(self, value: Optional[Path | str]) -> None:
        """Set dataset output directory."""
        self._set_path("paths/output_dir", value)

    @property
    def columns_file(self) -> Path:
        """Get path of the column allow-list file."""
        return Path(
            self._get_str("paths/columns_file", DEFAULT_COLUMNS_FILE) or DEFAULT_COLUMNS_FILE
        )

    @columns_file.setter
    def columns_file(self, value: Optional[Path | str]) -> None:
        """Set path of the column allow-list file."""
        self._set_path("paths/columns_file", value)

    @property
    def exclude_types_file(self) -> Path:
        """Get path of the excluded item types file."""
        return Path(
            self._get_str("paths/exclude_types_file", DEFAULT_EXCLUDE_TYPES_FILE)
            or DEFAULT_EXCLUDE_TYPES_FILE
        )

    @exclude_types_file.setter
    def exclude_types_file(self, value: Optional[Path | str]) -> None:
        """Set path of the excluded item types file."""
        self._set_path("paths/exclude_types_file", value)
