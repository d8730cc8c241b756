"""CheckTarget model - everything one readiness check needs"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from keygate.domain.config.check import CheckConfig
from keygate.domain.config.store import StoreConfig


@dataclass(frozen=True)
class CheckTarget:
    """Resolved parameters of a single readiness check"""

    hosts: Tuple[str, ...] = field(default_factory=lambda: ("127.0.0.1",))
    port: int = 6379
    password: Optional[str] = None
    db: int = 0
    key: str = ""
    expected: str = ""
    retries: int = 1
    interval: float = 1.0

    def __post_init__(self):
        """Validate target data"""
        object.__setattr__(self, "hosts", tuple(self.hosts))
        if not self.hosts:
            raise ValueError("At least one host is required")
        if self.retries < 1:
            raise ValueError("Retries must be >= 1")
        if self.interval < 0:
            raise ValueError("Interval must be >= 0")

    @classmethod
    def from_config(cls, store: StoreConfig, check: CheckConfig) -> "CheckTarget":
        """Build a target from validated store and check configuration"""
        return cls(
            hosts=tuple(store.hosts),
            port=store.port,
            password=store.password,
            db=store.db,
            key=check.key or "",
            expected=check.expected or "",
            retries=check.retries,
            interval=check.interval,
        )

    def select_host(self, attempt: int) -> str:
        """Pick the host for a 1-indexed attempt (round-robin)"""
        return select_host(self.hosts, attempt)

    def missing_fields(self) -> List[str]:
        """Names of required inputs that are empty"""
        missing = []
        if not self.key:
            missing.append("key")
        if not self.expected:
            missing.append("expected")
        return missing


def select_host(hosts: Sequence[str], attempt: int) -> str:
    """Select a host for the given attempt

    Args:
        hosts: Candidate hosts
        attempt: Attempt number, starting at 1

    Returns:
        Host at position (attempt - 1) modulo the host count
    """
    if not hosts:
        raise ValueError("At least one host is required")
    if attempt < 1:
        raise ValueError("Attempt number must be >= 1")
    return hosts[(attempt - 1) % len(hosts)]
