"""
Retry with exponential backoff for idempotent provider reads.

The gateway wraps its ``GET`` path with :func:`retry`; writes are never
wrapped, a create or delete is sent at most once per invocation.
"""

from __future__ import annotations

import time
import logging
from functools import wraps
from typing import Callable, Any, Iterator, NamedTuple

logger = logging.getLogger("instancectl")


class RetryPolicy(NamedTuple):
    """How many times to try and how long to wait in between."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry (``max_attempts - 1`` values)."""
        delay = self.base_delay
        for _ in range(self.max_attempts - 1):
            yield delay
            delay = min(delay * self.backoff_factor, self.max_delay)


def retry(
    policy: RetryPolicy,
    retryable_exceptions: tuple[type[BaseException], ...],
) -> Callable:
    """Decorator: retry a function on *retryable_exceptions* following *policy*.

    The last exception is re-raised unchanged once attempts run out.
    Anything not in *retryable_exceptions* propagates on the first failure.
    """

    def decorator(fn: Callable) -> Callable:
        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delays = policy.delays()
            attempt = 0
            while True:
                attempt += 1
                try:
                    return fn(*args, **kwargs)
                except retryable_exceptions as exc:
                    delay = next(delays, None)
                    if delay is None:
                        logger.error(
                            "Giving up on %s after %d attempts: %s",
                            fn.__qualname__, attempt, exc,
                        )
                        raise
                    logger.warning(
                        "Attempt %d/%d for %s failed (%s), retrying in %.1fs",
                        attempt, policy.max_attempts, fn.__qualname__, exc, delay,
                    )
                    time.sleep(delay)

        return wrapper

    return decorator
