"""Retry wrapper for outbound API calls."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from prguard.exceptions import HttpError, is_transient_status

logger = logging.getLogger("prguard.retry")

T = TypeVar("T")

DEFAULT_DELAY = 0.5


def is_transient(exc: BaseException) -> bool:
    """HTTP 429 and 5xx are worth another attempt; everything else is not."""
    return isinstance(exc, HttpError) and is_transient_status(exc.status)


def with_retry(
    fn: Callable[[], T],
    retries: int,
    transient: Callable[[BaseException], bool] = is_transient,
    delay: float = DEFAULT_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call `fn`, retrying transient failures up to `retries` extra times.

    The wait before retry k (1-based) is `delay * k`. A non-transient
    failure, or the failure of the last allowed attempt, is raised at once.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except Exception as e:
            if not transient(e) or attempt >= retries:
                raise
            attempt += 1
            wait = delay * attempt
            logger.info(f"Transient failure ({e}); retry {attempt}/{retries} in {wait:.1f}s")
            sleep(wait)
