"""Persistence of the report configuration between runs."""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from tagdelta.models import ViewerConfig

logger = structlog.get_logger(__name__)

CONFIG_FILENAME = "config.json"


class ConfigStore:
    """Loads and saves the ViewerConfig record.

    The record is stored as config.json in a per-user directory
    (~/.tagdelta/ by default).
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize the config store.

        Args:
            config_dir: Directory to store the config file. Defaults to ~/.tagdelta/
        """
        if config_dir is None:
            config_dir = Path.home() / ".tagdelta"

        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / CONFIG_FILENAME

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> ViewerConfig:
        """Load the stored configuration.

        Fields missing from the file take their defaults, and so do fields
        whose stored value is invalid; the remaining fields are kept. A
        missing, unreadable or corrupted file yields the default configuration.

        Returns:
            ViewerConfig object
        """
        if not self.config_file.exists():
            logger.debug("config_not_found", path=str(self.config_file))
            return ViewerConfig()

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("config_unreadable", path=str(self.config_file), error=str(e))
            return ViewerConfig()

        if not isinstance(data, dict):
            logger.warning("config_unreadable", path=str(self.config_file), error="not a JSON object")
            return ViewerConfig()

        try:
            return ViewerConfig.model_validate(data)
        except ValidationError:
            return ViewerConfig.model_validate(self._valid_fields(data))

    def _valid_fields(self, data: dict) -> dict:
        """Drop the stored fields that fail validation on their own."""
        kept = {}
        for key, value in data.items():
            try:
                ViewerConfig.model_validate({key: value})
            except ValidationError as e:
                logger.warning("config_field_dropped", path=str(self.config_file), field=key, error=str(e))
                continue
            kept[key] = value
        return kept

    def save(self, config: ViewerConfig) -> None:
        """Save the configuration using an atomic write.

        Uses a temporary file and rename so a crash never leaves a partial file.

        Args:
            config: Configuration to store
        """
        self._ensure_config_dir()

        fd, temp_path = tempfile.mkstemp(
            dir=self.config_dir, prefix=".config_", suffix=".json.tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config.to_json_dict(), f, indent=2)

            os.replace(temp_path, self.config_file)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        logger.debug("config_saved", path=str(self.config_file))

    def reset(self) -> bool:
        """Delete the stored configuration.

        Returns:
            True if a file was deleted, False if none existed
        """
        if not self.config_file.exists():
            return False
        self.config_file.unlink()
        return True
