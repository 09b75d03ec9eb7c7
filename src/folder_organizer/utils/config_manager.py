"""
Configuration management for the folder organizer.
Handles loading, validation, and merging of configurations from multiple sources.
"""

import os
import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional
import argparse

from dotenv import load_dotenv

from folder_organizer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FOLDER_ORGANIZER_"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigManager:
    """Manage configuration from environment variables, files, and command line."""

    def __init__(
        self,
        config_file: Optional[Path] = None,
        cli_args: Optional[argparse.Namespace] = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
            cli_args: Optional command line arguments
        """
        self.config = self._load_default_config()

        if config_file is not None:
            config_file = Path(config_file)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
            self._load_from_file(config_file)

        self._load_from_env()

        if cli_args:
            self._load_from_cli(cli_args)

        self._validate_config()

        logger.debug("Configuration loaded successfully")

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration."""
        return {
            "organization": {
                "dry_run": False,
                "report_file": None,
            },
            "logging": {
                "level": "WARNING",
                "file": None,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        }

    def _load_from_file(self, config_file: Path):
        """Load configuration from a JSON or YAML file."""
        logger.info(f"Loading configuration from {config_file}")

        if config_file.suffix not in (".json", ".yaml", ".yml"):
            raise ConfigurationError(f"Unsupported config file format: {config_file}")

        try:
            with open(config_file, "r") as f:
                if config_file.suffix == ".json":
                    file_config = json.load(f)
                else:
                    file_config = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Error loading config file: {e}") from e

        if file_config is None:
            return
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping at the top level: {config_file}"
            )

        self._deep_merge(self.config, file_config)

    def _load_from_env(self):
        """Load configuration from environment variables.

        Variables look like FOLDER_ORGANIZER_LOGGING__LEVEL=DEBUG. A .env file
        is read first without overriding variables that are already set.
        """
        load_dotenv()

        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                config_path = key[len(ENV_PREFIX):].lower().split("__")
                self._set_nested_config(self.config, config_path, value)

    def _load_from_cli(self, cli_args: argparse.Namespace):
        """Load configuration from command line arguments."""
        cli_mappings = {
            "report": ["organization", "report_file"],
            "log_level": ["logging", "level"],
        }

        for arg_name, config_path in cli_mappings.items():
            if getattr(cli_args, arg_name, None) is not None:
                self._set_nested_config(
                    self.config, config_path, getattr(cli_args, arg_name)
                )

        # Flags only ever switch these on.
        if getattr(cli_args, "dry_run", False):
            self.config["organization"]["dry_run"] = True
        if getattr(cli_args, "verbose", False):
            self.config["logging"]["level"] = "DEBUG"

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]):
        """Deep merge update dictionary into base dictionary."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested_config(
        self, config_dict: Dict[str, Any], path: List[str], value: Any
    ):
        """Set a value in a nested dictionary using a path."""
        # Only booleans are coerced.
        if isinstance(value, str) and value.lower() in ("true", "false"):
            value = value.lower() == "true"

        current = config_dict
        for part in path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    def _validate_config(self):
        """Validate configuration values."""
        errors = []

        organization = self.config.get("organization")
        logging_config = self.config.get("logging")
        if not isinstance(organization, dict) or not isinstance(logging_config, dict):
            raise ConfigurationError(
                "Configuration validation failed: "
                "'organization' and 'logging' must be sections"
            )

        if not isinstance(organization.get("dry_run"), bool):
            errors.append("organization dry_run must be true or false")

        for path in ("organization.report_file", "logging.file"):
            value = self.get(path)
            if value is not None and not isinstance(value, str):
                errors.append(f"{path} must be a path string")

        level = logging_config.get("level")
        if isinstance(level, str):
            level = level.upper()
            logging_config["level"] = level
        if level not in VALID_LOG_LEVELS:
            errors.append(f"logging level must be one of {VALID_LOG_LEVELS}")

        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}"
            )

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            path: Configuration path (e.g., 'logging.level')
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        parts = path.split(".")
        current = self.config

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def set(self, path: str, value: Any):
        """
        Set configuration value using dot notation.

        Args:
            path: Configuration path (e.g., 'organization.dry_run')
            value: Value to set
        """
        self._set_nested_config(self.config, path.split("."), value)
