"""Token bucket limiting how often frames are written to the device."""

from __future__ import annotations

import time
from collections.abc import Callable


class RateLimiter:
    """Admit at most max_rate sends per second.

    The bucket holds max_rate tokens and regains one token every
    1 / max_rate seconds. Refill is counted in whole tokens, and the refill
    timestamp only moves when at least one token was added.
    """

    def __init__(self, max_rate: int, clock: Callable[[], float] = time.monotonic):
        """Initialize rate limiter.

        Args:
            max_rate: Maximum sends per second, also the burst size
            clock: Monotonic time source in seconds (default: time.monotonic)
        """
        if max_rate <= 0:
            raise ValueError(f"max_rate must be positive, got {max_rate}")

        self.max_rate = max_rate
        self._refill_interval = 1.0 / max_rate
        self._clock = clock
        self._tokens = max_rate
        self._last_refill = clock()

    @property
    def tokens(self) -> int:
        """Tokens currently available (without refilling)."""
        return self._tokens

    def okay_to_send(self) -> bool:
        """Consume a token if one is available.

        Returns:
            True if the send may go ahead, False if it should be dropped
        """
        now = self._clock()
        refill = int((now - self._last_refill) / self._refill_interval)
        if refill > 0:
            self._last_refill = now
            self._tokens = min(self.max_rate, self._tokens + refill)

        if self._tokens > 0:
            self._tokens -= 1
            return True
        return False
