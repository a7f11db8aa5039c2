"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables (and a .env file, if
    present) and provides validated access to the values.

    Attributes:
        data_dir: Directory holding students.json, courses.json, fees.json
        output_dir: Directory for CSV exports
        recent_fees: Number of fees shown in the earnings overview
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Data stored in: {config.data_dir}")
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        self._data_dir = Path(os.getenv("CLASS_MANAGER_DATA_DIR", "data"))
        self._output_dir = Path(os.getenv("CLASS_MANAGER_OUTPUT_DIR", "output"))
        self._recent_fees_raw = os.getenv("CLASS_MANAGER_RECENT_FEES", "5")

        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def data_dir(self) -> Path:
        """Get the storage directory."""
        return self._data_dir

    @property
    def output_dir(self) -> Path:
        """Get the export directory."""
        return self._output_dir

    @property
    def recent_fees(self) -> int:
        """
        Get the number of fees in the earnings overview.

        Raises:
            ValueError: If CLASS_MANAGER_RECENT_FEES is not an integer
        """
        try:
            return int(self._recent_fees_raw)
        except ValueError:
            raise ValueError(
                f"CLASS_MANAGER_RECENT_FEES must be an integer, got: {self._recent_fees_raw}"
            )

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get the log file path, if file logging is enabled."""
        return self._log_file

    def validate(self, check_data_dir: bool = True) -> bool:
        """
        Validate configuration values.

        Args:
            check_data_dir: Whether to check CLASS_MANAGER_DATA_DIR; skip it
                when the storage directory comes from somewhere else

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails, listing every problem
        """
        errors = []

        try:
            if self.recent_fees <= 0:
                errors.append("CLASS_MANAGER_RECENT_FEES must be positive")
        except ValueError as e:
            errors.append(str(e))

        if check_data_dir and self._data_dir.exists() and not self._data_dir.is_dir():
            errors.append(f"CLASS_MANAGER_DATA_DIR is not a directory: {self._data_dir}")

        if self._log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True


# Singleton instance
config = Config()
