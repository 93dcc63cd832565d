"""Per-client sliding window rate limiter."""

import asyncio
import time
from collections import defaultdict, deque
from typing import Callable

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimiter:
    """
    Allows at most ``max_requests`` per client within ``window_seconds``.

    Example:
        limiter = RateLimiter(50, 900)
        if not await limiter.hit(request.client.host):
            ...  # reject
    """

    def __init__(
        self,
        max_requests: int = 50,
        window_seconds: float = 900,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: dict[str, deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()

    def _drop_idle(self, cutoff: float) -> None:
        idle = [client for client, bucket in self._buckets.items() if not bucket or bucket[-1] <= cutoff]
        for client in idle:
            del self._buckets[client]

    async def hit(self, client_id: str) -> bool:
        """
        Record a request from a client.

        Returns:
            True if the request is within quota, False if it must be rejected
        """
        now = self._clock()
        cutoff = now - self.window_seconds
        async with self._lock:
            self._drop_idle(cutoff)
            bucket = self._buckets[client_id]
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if len(bucket) >= self.max_requests:
                return False
            bucket.append(now)
            return True

    async def reset(self) -> None:
        """Forget all recorded requests."""
        async with self._lock:
            self._buckets.clear()
