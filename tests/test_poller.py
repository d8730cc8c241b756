"""Tests for ReadinessPoller"""

from __future__ import annotations

from typing import List

import pytest

from keygate.application.poller import ReadinessPoller
from keygate.domain.models.attempt import AttemptOutcome
from keygate.domain.models.poll_result import PollOutcome
from keygate.domain.models.target import CheckTarget
from keygate.infrastructure.store.base import StoreError
from keygate.infrastructure.store.mock import MockStoreClient


class RecordingSleep:
    """Collects requested sleep durations instead of blocking"""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def _target(**kwargs) -> CheckTarget:
    params = {"hosts": ["redis"], "key": "mykey", "expected": "ready", "retries": 3, "interval": 2.0}
    params.update(kwargs)
    return CheckTarget(**params)


class TestPollAttempts:
    """Tests for the number of attempts performed"""

    def test_never_matching_store_uses_all_retries(self):
        """Test that N retries against a wrong value give N attempts and a failure"""
        client = MockStoreClient({"default": "not-yet"})
        sleep = RecordingSleep()
        poller = ReadinessPoller(client, sleep=sleep)

        result = poller.poll(_target(retries=5))

        assert result.outcome == PollOutcome.EXHAUSTED
        assert not result.success
        assert result.attempt_count == 5
        assert len(client.calls) == 5
        assert all(a.outcome == AttemptOutcome.MISMATCH for a in result.attempts)
        assert "Giving up after 5 attempt(s)." in result.reason

    def test_stops_at_first_match(self):
        """Test that a match on attempt K stops after exactly K attempts"""
        client = MockStoreClient({"responses": ["no", "no", "ready"], "default": "ready"})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(retries=6))

        assert result.outcome == PollOutcome.MATCHED
        assert result.success
        assert result.attempt_count == 3
        assert len(client.calls) == 3
        assert result.attempts[-1].matched

    def test_match_on_first_attempt(self):
        """Test immediate success performs a single lookup"""
        client = MockStoreClient({"default": "ready"})
        sleep = RecordingSleep()
        poller = ReadinessPoller(client, sleep=sleep)

        result = poller.poll(_target(retries=10))

        assert result.success
        assert result.attempt_count == 1
        assert sleep.calls == []

    def test_single_retry_budget(self):
        """Test retries=1 performs one attempt and never sleeps"""
        client = MockStoreClient({"default": "nope"})
        sleep = RecordingSleep()
        poller = ReadinessPoller(client, sleep=sleep)

        result = poller.poll(_target(retries=1))

        assert result.outcome == PollOutcome.EXHAUSTED
        assert result.attempt_count == 1
        assert sleep.calls == []


class TestSleeping:
    """Tests for the inter-attempt delay"""

    def test_sleeps_between_attempts_only(self):
        """Test no sleep follows the last attempt"""
        client = MockStoreClient({"default": "nope"})
        sleep = RecordingSleep()
        poller = ReadinessPoller(client, sleep=sleep)

        poller.poll(_target(retries=4, interval=2.0))

        assert sleep.calls == [2.0, 2.0, 2.0]

    def test_fractional_interval(self):
        """Test fractional intervals are passed through unchanged"""
        client = MockStoreClient({"responses": ["nope"], "default": "ready"})
        sleep = RecordingSleep()
        poller = ReadinessPoller(client, sleep=sleep)

        poller.poll(_target(retries=3, interval=0.25))

        assert sleep.calls == [0.25]


class TestHostCycling:
    """Tests for round-robin host selection"""

    def test_hosts_cycle_in_order(self):
        """Test hosts [A,B,C] over six attempts select A,B,C,A,B,C"""
        client = MockStoreClient({"default": "nope"})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(hosts=["A", "B", "C"], retries=6))

        assert [a.host for a in result.attempts] == ["A", "B", "C", "A", "B", "C"]
        assert [call[0] for call in client.calls] == ["A", "B", "C", "A", "B", "C"]

    def test_port_and_db_passed_to_client(self):
        """Test lookups use the target's port, db and key"""
        client = MockStoreClient({"default": "ready"})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        poller.poll(_target(port=6380, db=3, key="k"))

        assert client.calls == [("redis", 6380, 3, "k")]


class TestErrorsAndValues:
    """Tests for connection errors and value normalization"""

    def test_connection_error_does_not_abort(self):
        """Test a StoreError is recorded and the loop continues"""
        error = StoreError("boom", host="A", port=6379, db=0, returncode=1, stderr="Connection refused")
        client = MockStoreClient({"responses": [error], "default": "ready"})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(hosts=["A", "B"], retries=3))

        assert result.success
        assert result.attempt_count == 2
        first = result.attempts[0]
        assert first.outcome == AttemptOutcome.CONNECTION_ERROR
        assert first.returncode == 1
        assert first.error == "Connection refused"
        assert result.attempts[1].host == "B"

    def test_all_attempts_fail_with_errors(self):
        """Test persistent connection errors exhaust the budget"""
        client = MockStoreClient({"default": ConnectionError("refused")})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(retries=3))

        assert result.outcome == PollOutcome.EXHAUSTED
        assert all(a.outcome == AttemptOutcome.CONNECTION_ERROR for a in result.attempts)

    def test_missing_key_is_empty_string(self):
        """Test a nil value is normalized to an empty string"""
        client = MockStoreClient({"default": None})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(retries=2))

        assert not result.success
        assert result.attempts[0].value == ""

    def test_missing_key_matches_empty_expected(self):
        """Test a nil value only matches when the expected value is empty"""
        client = MockStoreClient({"default": None})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(expected="", retries=2))

        assert result.success
        assert result.attempt_count == 1

    def test_comparison_is_exact(self):
        """Test values differing in case or whitespace do not match"""
        client = MockStoreClient({"responses": ["Ready", "ready "], "default": "x"})
        poller = ReadinessPoller(client, sleep=RecordingSleep())

        result = poller.poll(_target(retries=2))

        assert not result.success
        assert [a.value for a in result.attempts] == ["Ready", "ready "]

    def test_unexpected_exception_propagates(self):
        """Test errors other than StoreError are not swallowed"""

        class BrokenClient(MockStoreClient):
            def get(self, host, port, db, key, password=None):
                raise KeyError("bug")

        poller = ReadinessPoller(BrokenClient(), sleep=RecordingSleep())

        with pytest.raises(KeyError):
            poller.poll(_target(retries=3))
