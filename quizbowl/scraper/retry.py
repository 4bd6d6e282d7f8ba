"""Bounded retry with jitter and linear-step backoff for one fetch+parse attempt.

Every attempt, including the first, is preceded by a random jitter so the
crawler does not hit the origin in lock-step bursts.  Retries additionally
wait ``attempt * backoff_step`` seconds (2 s, then 4 s with the defaults).
When the budget is spent the caller's *default* is returned: one bad topic
must never abort a batch.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from quizbowl.config import Settings

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 2
    jitter_min: float = 0.5
    jitter_max: float = 1.5
    backoff_step: float = 2.0

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_retries=settings.max_retries,
            jitter_min=settings.jitter_min,
            jitter_max=settings.jitter_max,
            backoff_step=settings.backoff_step,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int, rng: random.Random) -> float:
        """Seconds to wait before *attempt* (0 is the first try)."""
        jitter = rng.uniform(self.jitter_min, self.jitter_max)
        return jitter + attempt * self.backoff_step


async def with_retries(
    operation: Callable[[], Awaitable[T]],
    *,
    default: T,
    policy: RetryPolicy | None = None,
    label: str = "",
    sleep: Sleep = asyncio.sleep,
    rng: random.Random | None = None,
) -> T:
    """Run *operation* until it succeeds or the retry budget is exhausted.

    Any failure (connection error, timeout, non-2xx status, or a page that
    does not parse) consumes one attempt.  Cancellation is not caught.
    """
    policy = policy or RetryPolicy()
    rng = rng or random.Random()

    for attempt in range(policy.max_attempts):
        await sleep(policy.delay_for(attempt, rng))
        try:
            return await operation()
        except Exception as exc:
            left = policy.max_retries - attempt
            if left > 0:
                print(f"[RETRY] {label} failed: {exc!r:.120} ({left} attempt(s) left)")
            else:
                print(f"[RETRY] ✗ {label} failed after {policy.max_attempts} attempt(s): {exc!r:.120}")

    return default
