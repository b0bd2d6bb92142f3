"""
Configuration loading infrastructure.
Reads the optional YAML settings file and validates it.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from ..domain.entities import ConcatSettings

DEFAULT_CONFIG_NAME = ".concat.yml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


class YamlConfigLoader:
    """Loads concatenator settings from a YAML file."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize with optional custom config path."""
        self.config_path = config_path or Path(DEFAULT_CONFIG_NAME)

    def load_configuration(self) -> ConcatSettings:
        """Load and parse the settings file."""
        if not self.config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}"
            )

        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                raw_config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration: {e}") from e

        return self._parse_configuration(raw_config)

    def _parse_configuration(self, raw_config) -> ConcatSettings:
        """Parse the raw mapping into settings."""
        # An empty file means defaults
        if raw_config is None:
            return ConcatSettings()

        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(raw_config).__name__}"
            )

        bad_keys = [repr(k) for k in raw_config if not isinstance(k, str)]
        if bad_keys:
            raise ConfigurationError(
                f"Configuration keys must be strings, got {', '.join(bad_keys)}"
            )

        try:
            return ConcatSettings(**{k.replace('-', '_'): v for k, v in raw_config.items()})
        except ValidationError as e:
            issues = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"- {issue}" for issue in issues)
            ) from e


class ConfigurationValidator:
    """Validates settings for issues pydantic cannot see."""

    def validate_configuration(self, settings: ConcatSettings) -> List[str]:
        """Validate settings and return list of issues found."""
        issues = []

        if not settings.default_output.strip():
            issues.append("default_output must not be empty")
        elif settings.default_output.endswith(("/", os.sep)):
            issues.append(
                f"default_output must name a file, not a directory: {settings.default_output}"
            )

        if settings.log_level.upper() not in LOG_LEVELS:
            issues.append(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {settings.log_level}"
            )

        return issues


def load_settings(config_path: Optional[Path] = None) -> ConcatSettings:
    """Load and validate settings.

    An explicit path must exist. Without one, ``.concat.yml`` in the working
    directory is used when present and built-in defaults otherwise.
    """
    if config_path is None and not Path(DEFAULT_CONFIG_NAME).exists():
        logger.debug("No %s found, using default settings", DEFAULT_CONFIG_NAME)
        return ConcatSettings()

    loader = YamlConfigLoader(config_path)
    settings = loader.load_configuration()

    # Validate configuration
    validator = ConfigurationValidator()
    issues = validator.validate_configuration(settings)

    if issues:
        raise ConfigurationError(
            "Configuration validation failed:\n" + "\n".join(f"- {issue}" for issue in issues)
        )

    logger.debug("Loaded settings from %s", loader.config_path)
    return settings
