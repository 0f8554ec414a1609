"""
Retry bookkeeping for the audit invoker: attempt counter and backoff delays.
"""

import random
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class RetryState:
    """
    Per-invocation retry counter.

    ``attempt`` counts retryable failures seen so far, so it is also the
    zero-based index of the attempt currently in flight.
    """
    max_retries: int = 3
    base_delay_ms: int = 2000
    max_jitter_ms: int = 500
    attempt: int = 0
    delays_ms: list[float] = field(default_factory=list)

    def can_retry(self) -> bool:
        return self.attempt < self.max_retries

    def next_delay_ms(self, rand: Callable[[], float] = random.random) -> float:
        """Exponential backoff for the current attempt plus a random jitter."""
        return compute_backoff_ms(self.attempt, self.base_delay_ms, self.max_jitter_ms, rand)

    def record_retry(self, delay_ms: float) -> None:
        self.delays_ms.append(delay_ms)
        self.attempt += 1


def compute_backoff_ms(attempt: int, base_delay_ms: int, max_jitter_ms: int,
                       rand: Callable[[], float] = random.random) -> float:
    """``base * 2**attempt`` plus uniform jitter in ``[0, max_jitter_ms)``."""
    delay = base_delay_ms * (2 ** max(0, attempt))
    jitter = max_jitter_ms * rand()
    return delay + jitter
