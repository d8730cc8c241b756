"""Configuration models with Pydantic validation."""

from keygate.domain.config.app import AppConfig
from keygate.domain.config.check import CheckConfig
from keygate.domain.config.marker import MarkerConfig
from keygate.domain.config.store import StoreConfig, parse_hosts

__all__ = [
    "AppConfig",
    "StoreConfig",
    "CheckConfig",
    "MarkerConfig",
    "parse_hosts",
]
