"""AttemptRecord model - outcome of one lookup against the store"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AttemptOutcome(str, Enum):
    """What happened during a single attempt"""

    MATCH = "match"
    MISMATCH = "mismatch"
    CONNECTION_ERROR = "connection_error"


@dataclass
class AttemptRecord:
    """Represents one attempt of the poll loop"""

    number: int
    host: str
    outcome: AttemptOutcome
    value: str = ""  # Observed value, nil normalized to ""
    error: Optional[str] = None  # Captured error text for connection errors
    returncode: Optional[int] = None

    @property
    def matched(self) -> bool:
        return self.outcome == AttemptOutcome.MATCH
