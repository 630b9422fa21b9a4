"""
Configuration management utilities.

This module provides centralized configuration loading and validation.
JSON documents (the default ``config.json``) and TOML documents (selected
by a ``.toml`` suffix) are both accepted and validated against
:class:`~action_to_qiniu.models.config.AppConfig`.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..exceptions import ConfigInvalid
from ..models.config import AppConfig
from .constants import DEFAULT_CONFIG_PATH


def format_validation_errors(error: ValidationError) -> List[str]:
    """
    Turn a pydantic validation error into field-level messages.

    Args:
        error: Validation error raised by the schema

    Returns:
        List of ``"<dotted.location>: <message>"`` strings

    Example:
        >>> format_validation_errors(exc)
        ['qiniu.accessKey: Field required']
    """
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        messages.append(f"{location}: {item['msg']}")
    return messages


class ConfigManager:
    """
    Manages configuration loading and access.

    This class provides a centralized way to load and access configuration
    from JSON or TOML files with proper error handling and validation.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load the raw configuration document from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigInvalid: If config file cannot be read or decoded
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            if self.config_path.suffix == ".toml":
                with open(self.config_path, "rb") as f:
                    document = tomllib.load(f)
            else:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    document = json.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigInvalid([f"Invalid TOML: {e}"], source=str(self.config_path)) from e
        except json.JSONDecodeError as e:
            raise ConfigInvalid([f"Invalid JSON: {e}"], source=str(self.config_path)) from e
        except OSError as e:
            raise ConfigInvalid([f"Could not read file: {e}"], source=str(self.config_path)) from e

        if not isinstance(document, dict):
            raise ConfigInvalid(["<root>: must be an object"], source=str(self.config_path))

        logging.debug("Loaded configuration from %s", self.config_path)
        self._config = document
        return self._config

    def validate(self) -> AppConfig:
        """
        Load and validate the configuration document.

        Returns:
            Validated AppConfig

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigInvalid: If the document is unreadable or fails validation
        """
        document = self.load()
        try:
            config = AppConfig.model_validate(document)
        except ValidationError as e:
            raise ConfigInvalid(format_validation_errors(e), source=str(self.config_path)) from e

        logging.debug("Configuration validated successfully")
        return config


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load and validate configuration in one call.

    Args:
        config_path: Path to configuration file

    Returns:
        Validated AppConfig
    """
    return ConfigManager(config_path).validate()


__all__ = ["ConfigManager", "format_validation_errors", "load_config"]
