"""
Settings validation system for gd_codec.
"""

import logging
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        level = self.settings.logging.console_log_level
        if level.upper() not in VALID_LEVELS:
            errors.append(f"Invalid console log level: {level}")

        if self.settings.logging.file_logging:
            log_dir = self.settings.logging.log_file_absolute_path.parent
            if not log_dir.exists():
                warnings.append(f"Log directory does not exist and will be created: {log_dir}")

        if self.settings.codec.strict_objects:
            logger.debug("Strict object decoding enabled")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
