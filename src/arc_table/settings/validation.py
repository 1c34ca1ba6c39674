"""
Settings validation system for arc_table.
"""

import logging
from typing import List, TYPE_CHECKING

from ..game_data.models import LOCALE_CODES
from .types import FlattenMode, ValidationResult

if TYPE_CHECKING:
    from .core import BuildSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "BuildSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        language = self.settings.language
        if language.lower() not in LOCALE_CODES:
            warnings.append(
                f"Unknown language '{language}', localized text will fall back to 'en'"
            )

        valid_modes = [mode.value for mode in FlattenMode]
        if self.settings.build.flatten_mode_name not in valid_modes:
            errors.append(
                f"Invalid flatten mode '{self.settings.build.flatten_mode_name}' "
                f"(expected one of: {', '.join(valid_modes)})"
            )

        if not self.settings.discover_columns and not self.settings.columns_file.exists():
            errors.append(f"Columns file does not exist: {self.settings.columns_file}")

        if not self.settings.exclude_types_file.exists():
            errors.append(
                f"Exclude types file does not exist: {self.settings.exclude_types_file}"
            )

        source_dir = self.settings.source_dir
        if source_dir is not None:
            if not source_dir.exists():
                errors.append(f"Source directory does not exist: {source_dir}")
            elif not (source_dir / "items").exists():
                warnings.append(
                    f"Source directory might be invalid (no 'items' directory): {source_dir}"
                )

        if not self.settings.required_fields:
            warnings.append("No required fields configured, rows without 'value' are kept")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
