"""Base store client interface"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StoreError(Exception):
    """Lookup against the store failed (transport or auth error)"""

    def __init__(
        self,
        message: str,
        host: str,
        port: int,
        db: int,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.host = host
        self.port = port
        self.db = db
        self.returncode = returncode
        self.stderr = stderr


class StoreClient(ABC):
    """Abstract base class for key-value store clients"""

    name = "base"

    def __init__(self, config: Dict[str, Any]):
        """Initialize client with configuration

        Args:
            config: Client configuration dictionary

        Raises:
            ValueError: If configuration is invalid
        """
        self.config = config
        self._validate_config(config)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate client configuration

        Args:
            config: Configuration dictionary

        Raises:
            ValueError: If configuration is invalid
        """
        # Override in subclasses for specific validation
        pass

    def is_available(self) -> bool:
        """Check whether the client's external dependency is present"""
        return True

    def unavailable_reason(self) -> str:
        """Describe why is_available returned False"""
        return f"{self.name} client is not available"

    @abstractmethod
    def get(
        self,
        host: str,
        port: int,
        db: int,
        key: str,
        password: Optional[str] = None,
    ) -> str:
        """Read a key's value

        Args:
            host: Store host
            port: Store port
            db: Database index
            key: Key to read
            password: Optional password

        Returns:
            The value, or "" when the key does not exist

        Raises:
            StoreError: If the lookup fails
        """
        pass
