"""Tests for the retry decorator."""

import pytest

from jobflow.retry import retry


def test_retries_until_success():
    calls = []

    @retry(max_attempts=3, base_delay=0, jitter=False, retryable=(ValueError,))
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ValueError("not yet")
        return "ok"

    assert flaky() == "ok"
    assert len(calls) == 3


def test_non_retryable_errors_propagate_immediately():
    calls = []

    @retry(max_attempts=3, base_delay=0, retryable=(ValueError,))
    def broken():
        calls.append(1)
        raise KeyError("nope")

    with pytest.raises(KeyError):
        broken()
    assert len(calls) == 1


def test_gives_up_after_max_attempts():
    calls = []

    @retry(max_attempts=2, base_delay=0, jitter=False)
    def always_fails():
        calls.append(1)
        raise RuntimeError("down")

    with pytest.raises(RuntimeError):
        always_fails()
    assert len(calls) == 2


def test_budget_abandons_retry_that_would_overrun():
    calls = []

    @retry(max_attempts=5, base_delay=10.0, jitter=False, budget=1.0)
    def slow():
        calls.append(1)
        raise RuntimeError("down")

    with pytest.raises(RuntimeError):
        slow()
    assert len(calls) == 1


def test_budget_read_from_instance_attribute():
    class Client:
        timeout = 0.5
        calls = 0

        @retry(max_attempts=3, base_delay=1.0, jitter=False, budget_attr="timeout")
        def fetch(self):
            self.calls += 1
            raise ConnectionError("refused")

    client = Client()
    with pytest.raises(ConnectionError):
        client.fetch()
    assert client.calls == 1
