"""Request pacing for the remote contents API."""

from __future__ import annotations

import asyncio
import time


class RequestThrottle:
    """Fixed delay before every request, plus an optional sliding-window quota.

    Args:
        request_delay: Seconds to sleep before each request.
        max_requests: Maximum requests allowed within the window, or ``None``
            for no quota.
        window_seconds: Size of the sliding window in seconds.
    """

    def __init__(
        self,
        request_delay: float = 0.5,
        max_requests: int | None = None,
        window_seconds: float = 3600,
    ):
        if max_requests is not None and max_requests < 1:
            raise ValueError(f"max_requests must be at least 1, got {max_requests}")
        self.request_delay = request_delay
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._timestamps: list[float] = []

    def check(self) -> tuple[bool, float]:
        """Record a request if the window has room.

        Returns:
            ``(allowed, retry_after)``; if not allowed, ``retry_after``
            is the number of seconds until the next slot opens.
        """
        if self.max_requests is None:
            return True, 0.0

        now = time.monotonic()

        cutoff = now - self.window_seconds
        self._timestamps = ts = [t for t in self._timestamps if t > cutoff]
        if len(ts) < self.max_requests:
            ts.append(now)
            return True, 0.0

        retry_after = ts[0] - cutoff
        return False, max(0.0, retry_after)

    def remaining(self) -> int | None:
        """Requests left in the current window (``None`` without a quota)."""
        if self.max_requests is None:
            return None
        cutoff = time.monotonic() - self.window_seconds
        return max(0, self.max_requests - sum(1 for t in self._timestamps if t > cutoff))

    async def acquire(self) -> None:
        """Wait until the next request may be sent."""
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)
        while True:
            allowed, retry_after = self.check()
            if allowed:
                return
            await asyncio.sleep(retry_after)
