"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from keygate.domain.config.check import CheckConfig
from keygate.domain.config.marker import MarkerConfig
from keygate.domain.config.store import StoreConfig


class AppConfig(BaseModel):
    """Main application configuration.

    Root model aggregating all configuration sections. Validation runs at
    load time so that a bad setting fails the init container immediately.

    Attributes:
        store: Key-value store connection configuration
        check: Key, expected value and retry budget
        marker: Marker path gate configuration
    """

    store: StoreConfig = Field(default_factory=StoreConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)
    marker: MarkerConfig = Field(default_factory=MarkerConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "store": {
                    "client": "redis-cli",
                    "hosts": ["redis-0.redis", "redis-1.redis"],
                    "port": 6379,
                    "password": None,
                    "db": 0,
                    "timeout": 10.0,
                    "binary": "redis-cli",
                },
                "check": {
                    "key": "jobmanager-ready",
                    "expected": "ready",
                    "retries": 30,
                    "interval": 2.0,
                },
                "marker": {
                    "enabled": True,
                    "path": "/etc/flink-cluster-config",
                    "prefix": "executionPlan-",
                },
            }
        },
    )
