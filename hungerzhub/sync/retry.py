"""
Bounded retry for calls to the remote data source.

Fixed backoff between attempts, no jitter, and a timeout on each attempt.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from ..config import AppConfig
from ..errors import RemoteUnavailableError
from ..logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.

    Attributes:
        attempts: Total attempts including the first one (default: 3).
        backoff_s: Pause between attempts in seconds (default: 1.0).
        timeout_s: Limit for a single attempt in seconds (default: 5.0).
    """

    attempts: int = 3
    backoff_s: float = 1.0
    timeout_s: float = 5.0

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")
        if self.backoff_s < 0:
            raise ValueError("backoff_s must be >= 0")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")

    @classmethod
    def from_config(cls, config: AppConfig) -> "RetryPolicy":
        return cls(
            attempts=config.retry_attempts,
            backoff_s=config.retry_backoff_s,
            timeout_s=config.request_timeout_s,
        )


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: Optional[RetryPolicy] = None,
    description: str = "remote call",
) -> T:
    """
    Await `operation()` until it succeeds or the attempts run out.

    `operation` is a factory so each attempt gets a fresh coroutine.

    Raises:
        RemoteUnavailableError: every attempt raised or timed out.
    """
    if policy is None:
        policy = RetryPolicy()

    last_error: Optional[BaseException] = None
    for attempt in range(1, policy.attempts + 1):
        try:
            return await asyncio.wait_for(operation(), timeout=policy.timeout_s)
        except Exception as e:
            last_error = e
            logger.warning(f"{description}: attempt {attempt}/{policy.attempts} failed: {e!r}")
            if attempt < policy.attempts and policy.backoff_s > 0:
                await asyncio.sleep(policy.backoff_s)

    raise RemoteUnavailableError(description, policy.attempts, last_error) from last_error
