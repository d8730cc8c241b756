"""Key-value store clients"""

from keygate.infrastructure.store.base import StoreClient, StoreError
from keygate.infrastructure.store.mock import MockStoreClient
from keygate.infrastructure.store.redis_cli import RedisCliClient
from keygate.infrastructure.store.redis_client import RedisClient

__all__ = ["StoreClient", "StoreError", "MockStoreClient", "RedisCliClient", "RedisClient"]
