"""Readiness poller - bounded, round-robin lookup loop"""

from __future__ import annotations

import logging
import time
from typing import Callable, List

from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from keygate.domain.models.attempt import AttemptOutcome, AttemptRecord
from keygate.domain.models.poll_result import PollOutcome, PollResult
from keygate.domain.models.target import CheckTarget
from keygate.infrastructure.store.base import StoreClient, StoreError

logger = logging.getLogger(__name__)


class ReadinessPoller:
    """Polls a store until a key holds the expected value"""

    def __init__(self, client: StoreClient, sleep: Callable[[float], None] = time.sleep):
        """Initialize poller

        Args:
            client: Store client used for lookups
            sleep: Blocking sleep used between attempts
        """
        self.client = client
        self.sleep = sleep

    def poll(self, target: CheckTarget) -> PollResult:
        """Run up to ``target.retries`` attempts

        Attempts stop at the first exact match. Connection errors and
        mismatches are logged and retried. No sleep follows the last attempt.

        Args:
            target: Check parameters

        Returns:
            PollResult with outcome MATCHED or EXHAUSTED
        """
        attempts: List[AttemptRecord] = []

        def _attempt() -> AttemptRecord:
            record = self._attempt(target, len(attempts) + 1)
            attempts.append(record)
            return record

        def _before_sleep(retry_state: RetryCallState) -> None:
            logger.debug(f"Sleeping {target.interval}s before attempt {retry_state.attempt_number + 1}")

        retrying = Retrying(
            stop=stop_after_attempt(target.retries),
            wait=wait_fixed(target.interval),
            retry=retry_if_result(lambda record: not record.matched),
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
            before_sleep=_before_sleep,
            sleep=self.sleep,
        )
        last = retrying(_attempt)

        if last.matched:
            return PollResult(
                outcome=PollOutcome.MATCHED,
                reason=f"Key '{target.key}' has expected value (host '{last.host}')",
                attempts=attempts,
            )

        logger.error(f"Giving up after {len(attempts)} attempt(s).")
        return PollResult(
            outcome=PollOutcome.EXHAUSTED,
            reason=f"Giving up after {len(attempts)} attempt(s).",
            attempts=attempts,
        )

    def _attempt(self, target: CheckTarget, number: int) -> AttemptRecord:
        """Perform a single lookup and classify it"""
        host = target.select_host(number)
        logger.info(
            f"Attempt {number}/{target.retries}: checking key '{target.key}' "
            f"on host '{host}' (db={target.db})"
        )

        try:
            value = self.client.get(host, target.port, target.db, target.key, target.password)
        except StoreError as e:
            logger.warning(
                f"Attempt {number}/{target.retries}: lookup failed on host='{host}' "
                f"port={target.port} db={target.db} rc={e.returncode}: {e}"
            )
            if e.stderr:
                logger.warning(f"{self.client.name} stderr: {e.stderr}")
            else:
                logger.warning(f"{self.client.name} produced no stderr output.")
            return AttemptRecord(
                number=number,
                host=host,
                outcome=AttemptOutcome.CONNECTION_ERROR,
                error=e.stderr or str(e),
                returncode=e.returncode,
            )

        value = value or ""
        if value == target.expected:
            logger.info(f"MATCH: key '{target.key}' has expected value.")
            return AttemptRecord(number=number, host=host, outcome=AttemptOutcome.MATCH, value=value)

        logger.warning(
            f"Attempt {number}/{target.retries}: value mismatch for key '{target.key}' "
            f"(got: '{value}' expected: '{target.expected}')"
        )
        return AttemptRecord(number=number, host=host, outcome=AttemptOutcome.MISMATCH, value=value)
