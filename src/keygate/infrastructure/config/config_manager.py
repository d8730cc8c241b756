"""Configuration manager for loading and validating .keygate.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from keygate.domain.config import (
    AppConfig,
    CheckConfig,
    MarkerConfig,
    StoreConfig,
    parse_hosts,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".keygate.yml"

# Environment variable -> (section, field). Names match the init container contract.
ENV_VARIABLES = {
    "REDIS_PORT": ("store", "port"),
    "REDIS_PASSWORD": ("store", "password"),
    "REDIS_DB": ("store", "db"),
    "KEYGATE_CLIENT": ("store", "client"),
    "KEYGATE_TIMEOUT": ("store", "timeout"),
    "KEYGATE_REDIS_CLI": ("store", "binary"),
    "KEY": ("check", "key"),
    "EXPECTED": ("check", "expected"),
    "RETRIES": ("check", "retries"),
    "INTERVAL": ("check", "interval"),
    "CONFIG_MAP_PATH": ("marker", "path"),
    "KEYGATE_MARKER_PREFIX": ("marker", "prefix"),
}


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .keygate.yml, environment variables and CLI overrides

    Configuration priority (later wins):
    1. Default values (defined in Pydantic models)
    2. .keygate.yml file (searched from current directory upwards)
    3. Environment variables (REDIS_*, KEY, EXPECTED, RETRIES, INTERVAL, ...)
    4. CLI overrides passed to the constructor
    """

    DEFAULT_CONFIG = {
        "store": {
            "client": "redis-cli",
            "hosts": ["127.0.0.1"],
            "port": 6379,
            "password": None,
            "db": 0,
            "timeout": 10.0,
            "binary": "redis-cli",
        },
        "check": {
            "key": None,
            "expected": None,
            "retries": 1,
            "interval": 1.0,
        },
        "marker": {
            "enabled": True,
            "path": "/etc/flink-cluster-config",
            "prefix": "executionPlan-",
        },
    }

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """Initialize config manager

        Args:
            config_path: Path to .keygate.yml (searches from current dir if None)
            overrides: Section -> field -> value overrides (None values are ignored)
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.environ = os.environ if environ is None else environ
        self.overrides = overrides or {}
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                msg = error["msg"]
                errors.append(f"  - {field}: {msg}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .keygate.yml starting from current directory

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
        """Load configuration from all sources and validate with Pydantic

        Returns:
            Validated AppConfig instance

        Raises:
            ValidationError: If configuration is invalid
            ConfigurationError: If the config file cannot be parsed
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Config file {self.config_path} must contain a mapping")
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        config_dict = self._apply_cli_overrides(config_dict)

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

        Empty variables are treated as unset, as the init script did.

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with env overrides applied
        """
        # REDIS_HOSTS wins over REDIS_HOST, but only if it names at least one host
        hosts = parse_hosts(self.environ.get("REDIS_HOSTS"))
        if not hosts:
            hosts = parse_hosts(self.environ.get("REDIS_HOST"))
        if hosts:
            config["store"]["hosts"] = hosts

        for name, (section, field) in ENV_VARIABLES.items():
            value = self.environ.get(name)
            if value:
                config[section][field] = value
        return config

    def _apply_cli_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply CLI overrides, skipping options that were not given"""
        for section, values in self.overrides.items():
            for field, value in values.items():
                if value is not None:
                    config.setdefault(section, {})[field] = value
        return config

    def get_store_config(self) -> StoreConfig:
        """Get store configuration

        Returns:
            Store configuration model
        """
        return self.config.store

    def get_check_config(self) -> CheckConfig:
        """Get check configuration

        Returns:
            Check configuration model
        """
        return self.config.check

    def get_marker_config(self) -> MarkerConfig:
        """Get marker configuration

        Returns:
            Marker configuration model
        """
        return self.config.marker

    def redacted_dump(self) -> Dict[str, Any]:
        """Configuration as a plain dict with the password masked"""
        data = self.config.model_dump()
        if data["store"].get("password"):
            data["store"]["password"] = "***"
        return data
