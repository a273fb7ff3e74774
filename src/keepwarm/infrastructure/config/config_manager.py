"""Configuration manager for loading and validating .keepwarm.yml and the environment"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from keepwarm.domain.config import AppConfig, RetryConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".keepwarm.yml"


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .keepwarm.yml and environment variables

    Loads configuration with validation using Pydantic models. Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .keepwarm.yml file (searched from current directory)
    3. Environment variables (API_LIST, MAX_RETRIES, RETRY_INTERVAL, ...)
    4. CLI arguments (handled by CLI layer)

    Malformed values are never replaced with defaults: they raise
    ConfigurationError before any target is pinged.
    """

    DEFAULT_CONFIG = {
        "targets": {
            "urls": [],
        },
        "retry": {
            "max_attempts": 3,
            "retry_interval_ms": 10000,
            "timeout_ms": 10000,
        },
        "schedule": {
            "interval_seconds": 600,
        },
    }

    # Environment variable -> (section, key); values are integer strings
    ENV_NUMBER_OVERRIDES = {
        "MAX_RETRIES": ("retry", "max_attempts"),
        "RETRY_INTERVAL": ("retry", "retry_interval_ms"),
        "REQUEST_TIMEOUT": ("retry", "timeout_ms"),
        "SCHEDULE_INTERVAL": ("schedule", "interval_seconds"),
    }

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize config manager

        Args:
            config_path: Path to .keepwarm.yml (searches from current dir if None)
            environ: Environment mapping supplied by the host (os.environ if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        # Convert to Path if string
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.environ = os.environ if environ is None else environ
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            # Format validation errors for user
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                msg = error["msg"]
                errors.append(f"  - {field}: {msg}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .keepwarm.yml file starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, validate with Pydantic

        Returns:
            Validated AppConfig instance

        Raises:
            ValidationError: If configuration is invalid
            ConfigurationError: If the file or API_LIST cannot be parsed
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file {self.config_path} must contain a mapping, "
                    f"got {type(file_config).__name__}"
                )
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        # Override with environment variables
        config_dict = self._apply_env_overrides(config_dict)

        # Validate and create AppConfig
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Merged configuration
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides

        Absent or empty ("") variables leave the current value untouched.
        Whitespace-only values are not treated as empty: they fail validation.

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with env overrides applied
        """
        api_list = self.environ.get("API_LIST")
        if api_list:
            if not isinstance(config.get("targets"), dict):
                config["targets"] = {}
            config["targets"]["urls"] = parse_api_list(api_list)

        for env_name, (section, key) in self.ENV_NUMBER_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                if not isinstance(config.get(section), dict):
                    config[section] = {}
                # Pydantic parses the integer string and rejects anything else
                config[section][key] = value.strip()

        return config

    def get_retry_config(self) -> RetryConfig:
        """Get retry configuration

        Returns:
            Retry configuration model
        """
        return self.config.retry


def parse_api_list(raw: str) -> Any:
    """Decode the JSON-encoded API_LIST variable

    Only JSON syntax is checked here; the shape (a list of strings) is
    validated by TargetsConfig.

    Raises:
        ConfigurationError: If the value is not valid JSON
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"API_LIST is not valid JSON: {e}") from e
