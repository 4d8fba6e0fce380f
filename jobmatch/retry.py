"""Retry decorator for the HTTP job sources — stdlib only."""
from __future__ import annotations

import functools
import logging
import random
import time
from typing import Any, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


def backoff_delay(
    attempt: int,
    base_delay: float,
    backoff_factor: float = 2.0,
    max_delay: float = 30.0,
    jitter: bool = True,
) -> float:
    """Seconds to wait after failed *attempt* (1-based)."""
    delay = min(base_delay * backoff_factor ** (attempt - 1), max_delay)
    if jitter:
        delay *= 0.5 + random.random()
    return delay


def is_client_error(exc: BaseException) -> bool:
    """True for HTTP 4xx responses other than 429 (rate limited)."""
    status = getattr(getattr(exc, "response", None), "status_code", None)
    return status is not None and 400 <= status < 500 and status != 429


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Optional[Callable[[BaseException], bool]] = None,
) -> Callable:
    """Retry the wrapped call on *retryable* errors with exponential backoff.

    ``giveup`` short-circuits errors that will not heal on a retry, such
    as a 401 from an upstream API. The last error is re-raised.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    if giveup is not None and giveup(exc):
                        logger.warning("%s not retried: %s", fn.__qualname__, exc)
                        raise
                    if attempt >= max_attempts:
                        logger.error(
                            "%s failed after %d attempts: %s", fn.__qualname__, attempt, exc,
                        )
                        raise
                    delay = backoff_delay(attempt, base_delay, backoff_factor, max_delay, jitter)
                    logger.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__, attempt, max_attempts, exc, delay,
                    )
                    time.sleep(delay)
                    attempt += 1

        return wrapper

    return decorator
