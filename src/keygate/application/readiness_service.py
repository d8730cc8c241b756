"""Readiness service - orchestrates gate, input checks and polling"""

from __future__ import annotations

import logging
from typing import Optional

from keygate.application.poller import ReadinessPoller
from keygate.domain.models.poll_result import PollOutcome, PollResult
from keygate.domain.models.target import CheckTarget
from keygate.infrastructure.marker_gate import MarkerGate
from keygate.infrastructure.store.base import StoreClient

logger = logging.getLogger(__name__)


class ReadinessService:
    """Service for running a readiness check end to end"""

    def __init__(
        self,
        client: StoreClient,
        marker_gate: Optional[MarkerGate] = None,
        poller: Optional[ReadinessPoller] = None,
    ):
        """Initialize readiness service

        Args:
            client: Store client
            marker_gate: Optional gate (if None, the check always runs)
            poller: Optional poller (defaults to one built on ``client``)
        """
        self.client = client
        self.marker_gate = marker_gate
        self.poller = poller or ReadinessPoller(client)

    def check(self, target: CheckTarget) -> PollResult:
        """Run the readiness check

        Args:
            target: Check parameters

        Returns:
            PollResult describing the terminal state
        """
        if self.marker_gate is not None:
            required, reason = self.marker_gate.is_required()
            if not required:
                logger.info(f"{reason} - skipping check and succeeding.")
                return PollResult(outcome=PollOutcome.SKIPPED, reason=reason)
            logger.info(f"{reason} - proceeding to key check.")

        missing = target.missing_fields()
        if missing:
            reason = f"{' and '.join(m.upper() for m in missing)} must be set (via env or flags)"
            logger.error(reason)
            return PollResult(outcome=PollOutcome.MISSING_CONFIG, reason=reason)

        if not self.client.is_available():
            reason = self.client.unavailable_reason()
            logger.error(reason)
            return PollResult(outcome=PollOutcome.MISSING_DEPENDENCY, reason=reason)

        return self.poller.poll(target)
