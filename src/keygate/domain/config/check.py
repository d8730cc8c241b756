"""Readiness check configuration model."""

from typing import Optional

from pydantic import BaseModel, Field


class CheckConfig(BaseModel):
    """Configuration for the key check itself.

    Attributes:
        key: Key to look up (required when the check runs)
        expected: Value the key must hold (required when the check runs)
        retries: Number of attempts
        interval: Seconds to wait between attempts
    """

    key: Optional[str] = None
    expected: Optional[str] = None
    retries: int = Field(1, ge=1)
    interval: float = Field(1.0, ge=0.0)
