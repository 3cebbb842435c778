"""Retry logic with a fixed delay between attempts."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from glacier_uploader.core.config import RETRIES, RETRY_DELAY

logger = logging.getLogger(__name__)


def retry_with_fixed_delay(
    func: Callable[[], Any],
    max_retries: int = RETRIES,
    delay: float = RETRY_DELAY,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    sleep: Callable[[float], None] | None = None,
    description: str = "Operation",
) -> Any:
    """Execute a function, retrying with a fixed delay.

    Args:
        func: Function to execute.
        max_retries: Additional attempts after the first failure.
        delay: Seconds to wait between attempts.
        retryable_exceptions: Tuple of exception types to retry on.
        sleep: Function used to wait between attempts.
        description: Label used in log messages.

    Returns:
        Result of the function.

    Raises:
        The last exception if all attempts fail.
    """
    for attempt in range(max_retries + 1):
        try:
            return func()
        except retryable_exceptions as e:
            if attempt == max_retries:
                logger.error(f"{description} failed after {max_retries + 1} attempts: {e}")
                raise

            logger.warning(
                f"{description} attempt {attempt + 1}/{max_retries + 1} failed: {e}. "
                f"Retrying in {delay:.0f}s..."
            )
            (sleep or time.sleep)(delay)

    raise RuntimeError("Unexpected retry loop exit")
