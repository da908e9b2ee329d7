"""Retry decorator with exponential backoff and an optional time budget — stdlib only."""
from __future__ import annotations

import functools
import logging
import random
import time
from typing import Any, Callable, Tuple, Type

logger = logging.getLogger(__name__)


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    budget: float | None = None,
    budget_attr: str | None = None,
) -> Callable:
    """Decorator: retries the wrapped function with exponential backoff.

    ``budget`` caps the total wall time (seconds) spent across attempts; a
    retry whose backoff would overrun it is abandoned and the last error is
    raised. ``budget_attr`` reads the budget from the bound instance
    instead (e.g. a job source's ``timeout``), so one decorator can serve
    sources configured with different time limits.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            limit = budget
            if budget_attr and args:
                limit = getattr(args[0], budget_attr, None) or budget
            started = time.monotonic()
            last_exc: BaseException | None = None
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    last_exc = exc
                    if attempt == max_attempts:
                        logger.error(
                            "%s failed after %d attempts: %s",
                            fn.__qualname__,
                            max_attempts,
                            exc,
                        )
                        raise
                    delay = min(
                        base_delay * (backoff_factor ** (attempt - 1)), max_delay
                    )
                    if jitter:
                        delay *= 0.5 + random.random()
                    if limit is not None and time.monotonic() - started + delay >= limit:
                        logger.warning(
                            "%s attempt %d/%d failed (%s), no time left to retry",
                            fn.__qualname__,
                            attempt,
                            max_attempts,
                            exc,
                        )
                        raise
                    logger.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__,
                        attempt,
                        max_attempts,
                        exc,
                        delay,
                    )
                    time.sleep(delay)
            raise last_exc  # type: ignore[misc]

        return wrapper

    return decorator
