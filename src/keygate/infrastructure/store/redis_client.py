"""Store client backed by the redis Python library"""

import logging
from typing import Any, Dict, Optional

import redis

from keygate.infrastructure.store.base import StoreClient, StoreError

logger = logging.getLogger(__name__)


class RedisClient(StoreClient):
    """In-process client; one short-lived connection per lookup"""

    name = "redis"

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize redis client

        Args:
            config: Optional configuration with:
                - timeout: Socket connect/read timeout in seconds (default: 5)
        """
        if config is None:
            config = {}
        super().__init__(config)
        self.timeout = config.get("timeout", 5.0)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate redis client configuration"""
        if "timeout" in config:
            if not isinstance(config["timeout"], (int, float)) or config["timeout"] <= 0:
                raise ValueError("timeout must be a positive number")

    def _connect(self, host: str, port: int, db: int, password: Optional[str]) -> redis.Redis:
        return redis.Redis(
            host=host,
            port=port,
            db=db,
            password=password or None,
            socket_timeout=self.timeout,
            socket_connect_timeout=self.timeout,
            decode_responses=True,
        )

    def get(
        self,
        host: str,
        port: int,
        db: int,
        key: str,
        password: Optional[str] = None,
    ) -> str:
        connection = self._connect(host, port, db, password)
        try:
            value = connection.get(key)
        except redis.exceptions.RedisError as e:
            raise StoreError(
                f"redis lookup failed: {e.__class__.__name__}",
                host=host,
                port=port,
                db=db,
                stderr=str(e),
            ) from e
        finally:
            connection.close()

        if value is None:
            return ""
        return str(value)
