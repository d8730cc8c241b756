"""PollResult model - final result of a readiness check"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from keygate.domain.models.attempt import AttemptRecord


class PollOutcome(str, Enum):
    """Terminal state of a readiness check"""

    MATCHED = "matched"
    SKIPPED = "skipped"
    EXHAUSTED = "exhausted"
    MISSING_CONFIG = "missing_config"
    MISSING_DEPENDENCY = "missing_dependency"


@dataclass
class PollResult:
    """Result of a readiness check"""

    outcome: PollOutcome
    reason: str = ""
    attempts: List[AttemptRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Matched or skipped as not applicable"""
        return self.outcome in (PollOutcome.MATCHED, PollOutcome.SKIPPED)

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
