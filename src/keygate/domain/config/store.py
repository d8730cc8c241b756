"""Store connection configuration model."""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


def parse_hosts(raw: Union[str, List[str], None]) -> List[str]:
    """Split a host specification into a clean list of hosts

    Args:
        raw: Single host, comma-separated hosts, or a list of either

    Returns:
        List of host names in their original order (may be empty)
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]

    hosts = []
    for item in raw:
        for part in str(item).split(","):
            part = part.strip()
            if part:
                hosts.append(part)
    return hosts


class StoreConfig(BaseModel):
    """Configuration for the key-value store connection.

    Attributes:
        client: Store client backend (redis-cli, redis, mock)
        hosts: Candidate hosts, tried round-robin across attempts
        port: Store port
        password: Optional password (None = no auth)
        db: Database index
        timeout: Seconds before a single lookup is abandoned
        binary: redis-cli executable name or path (redis-cli client only)
    """

    client: Literal["redis-cli", "redis", "mock"] = "redis-cli"
    hosts: List[str] = Field(default_factory=lambda: ["127.0.0.1"])
    port: int = Field(6379, gt=0, le=65535)
    password: Optional[str] = None
    db: int = Field(0, ge=0)
    timeout: float = Field(10.0, gt=0.0)
    binary: str = Field("redis-cli", min_length=1)

    @field_validator("client", mode="before")
    @classmethod
    def _lower_client(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("hosts", mode="before")
    @classmethod
    def _split_hosts(cls, value):
        hosts = parse_hosts(value)
        if not hosts:
            raise ValueError("at least one host is required")
        return hosts
