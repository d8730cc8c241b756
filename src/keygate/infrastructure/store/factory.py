"""Factory for creating store clients"""

import logging
from typing import Any, Dict

from keygate.infrastructure.store.base import StoreClient
from keygate.infrastructure.store.mock import MockStoreClient
from keygate.infrastructure.store.redis_cli import RedisCliClient
from keygate.infrastructure.store.redis_client import RedisClient

logger = logging.getLogger(__name__)


class StoreClientFactory:
    """Factory for creating store client instances"""

    CLIENTS = {
        "redis-cli": RedisCliClient,
        "redis": RedisClient,
        "mock": MockStoreClient,
    }

    @classmethod
    def create(cls, client_type: str, config: Dict[str, Any] = None) -> StoreClient:
        """Create store client instance

        Args:
            client_type: Type of client (redis-cli, redis, mock)
            config: Client configuration

        Returns:
            StoreClient instance

        Raises:
            ValueError: If client type is not supported
        """
        if config is None:
            config = {}

        client_type_lower = client_type.lower()

        if client_type_lower not in cls.CLIENTS:
            available = ", ".join(cls.CLIENTS.keys())
            raise ValueError(
                f"Unknown store client: {client_type}. "
                f"Available clients: {available}"
            )

        client_class = cls.CLIENTS[client_type_lower]
        logger.debug(f"Creating {client_type_lower} store client")
        return client_class(config)
