"""Mock store client for testing and dry runs"""

from typing import Any, Dict, List, Optional, Tuple

from keygate.infrastructure.store.base import StoreClient, StoreError


class MockStoreClient(StoreClient):
    """Store client that replays scripted responses

    Each lookup consumes the next entry of ``responses``. An entry is either a
    value (``None`` meaning the key is absent) or an exception instance, which
    is raised. Once the script runs out, ``default`` is returned.
    """

    name = "mock"

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize mock client

        Args:
            config: Optional configuration with:
                - responses: List of values or exceptions, consumed in order
                - default: Value returned once responses are exhausted (default: None)
                - available: Value reported by is_available (default: True)
        """
        if config is None:
            config = {}
        super().__init__(config)
        self.responses = list(config.get("responses", []))
        self.default = config.get("default")
        self.available = config.get("available", True)
        self.calls: List[Tuple[str, int, int, str]] = []

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate mock client configuration"""
        if "responses" in config and not isinstance(config["responses"], (list, tuple)):
            raise ValueError("responses must be a list")

    def is_available(self) -> bool:
        return bool(self.available)

    def get(
        self,
        host: str,
        port: int,
        db: int,
        key: str,
        password: Optional[str] = None,
    ) -> str:
        self.calls.append((host, port, db, key))
        response = self.responses.pop(0) if self.responses else self.default

        if isinstance(response, StoreError):
            raise response
        if isinstance(response, Exception):
            raise StoreError(str(response), host=host, port=port, db=db, stderr=str(response))
        if response is None:
            return ""
        return str(response)
