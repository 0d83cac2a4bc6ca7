"""Exponential backoff with jitter for SDK retries."""

import random
from collections.abc import Callable

__all__ = ["calculate_backoff", "JITTER_RATIO"]

# Jitter spans +/- 25% of the capped delay.
JITTER_RATIO = 0.25


def calculate_backoff(
    attempt: int,
    base_ms: int = 1000,
    max_ms: int = 30000,
    random_source: Callable[[], float] = random.random,
) -> int:
    """Return the delay before the next retry, in milliseconds.

    Args:
        attempt: Zero-based attempt number that just failed.
        base_ms: Delay for attempt 0 before jitter.
        max_ms: Upper bound for the delay, jitter included.
        random_source: Returns a float in [0, 1). 0.5 means no jitter.

    Returns:
        Delay in milliseconds, within [0, max_ms].
    """
    delay = min(base_ms * (2**attempt), max_ms)
    jitter = delay * JITTER_RATIO * (2 * random_source() - 1)
    return min(max(round(delay + jitter), 0), max_ms)
