import asyncio

import pytest

from hungerzhub.config import AppConfig
from hungerzhub.errors import RemoteUnavailableError
from hungerzhub.sync.retry import RetryPolicy, call_with_retry

FAST = RetryPolicy(attempts=3, backoff_s=0, timeout_s=0.5)


def flaky(failures, result="ok"):
    state = {"calls": 0}

    async def operation():
        state["calls"] += 1
        if state["calls"] <= failures:
            raise ConnectionError(f"failure {state['calls']}")
        return result

    return operation, state


@pytest.mark.asyncio
async def test_succeeds_on_third_attempt():
    operation, state = flaky(2)
    assert await call_with_retry(operation, FAST) == "ok"
    assert state["calls"] == 3


@pytest.mark.asyncio
async def test_gives_up_after_attempts():
    operation, state = flaky(10)
    with pytest.raises(RemoteUnavailableError) as exc_info:
        await call_with_retry(operation, FAST, "fetch tables")
    assert state["calls"] == 3
    assert exc_info.value.attempts == 3
    assert isinstance(exc_info.value.last_error, ConnectionError)
    assert "fetch tables" in str(exc_info.value)


@pytest.mark.asyncio
async def test_slow_attempt_times_out_and_is_retried():
    calls = []

    async def operation():
        calls.append(1)
        if len(calls) == 1:
            await asyncio.sleep(5)
        return "late"

    policy = RetryPolicy(attempts=2, backoff_s=0, timeout_s=0.05)
    assert await call_with_retry(operation, policy) == "late"
    assert len(calls) == 2


def test_policy_validation():
    with pytest.raises(ValueError):
        RetryPolicy(attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(backoff_s=-1)
    with pytest.raises(ValueError):
        RetryPolicy(timeout_s=0)


def test_policy_from_config():
    config = AppConfig(retry_attempts=4, retry_backoff_s=0.5, request_timeout_s=2.0)
    assert RetryPolicy.from_config(config) == RetryPolicy(attempts=4, backoff_s=0.5, timeout_s=2.0)
