"""Unit tests for the per-client rate limiter."""

import pytest

from code360stats.ratelimit import RateLimiter


class FakeClock:

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestRateLimiter:

    @pytest.mark.asyncio
    async def test_quota_enforced(self):
        limiter = RateLimiter(max_requests=3, window_seconds=900, clock=FakeClock())

        results = [await limiter.hit("1.2.3.4") for _ in range(4)]
        assert results == [True, True, True, False]

    @pytest.mark.asyncio
    async def test_window_slides(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=2, window_seconds=900, clock=clock)

        assert await limiter.hit("1.2.3.4")
        clock.now = 100
        assert await limiter.hit("1.2.3.4")
        assert not await limiter.hit("1.2.3.4")

        clock.now = 900
        assert await limiter.hit("1.2.3.4")
        assert not await limiter.hit("1.2.3.4")

    @pytest.mark.asyncio
    async def test_clients_are_independent(self):
        limiter = RateLimiter(max_requests=1, window_seconds=900, clock=FakeClock())

        assert await limiter.hit("1.1.1.1")
        assert await limiter.hit("2.2.2.2")
        assert not await limiter.hit("1.1.1.1")

    @pytest.mark.asyncio
    async def test_reset(self):
        limiter = RateLimiter(max_requests=1, window_seconds=900, clock=FakeClock())

        assert await limiter.hit("1.1.1.1")
        await limiter.reset()
        assert await limiter.hit("1.1.1.1")

    @pytest.mark.asyncio
    async def test_idle_clients_dropped(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=5, window_seconds=900, clock=clock)

        for i in range(1000):
            await limiter.hit(f"10.0.{i // 256}.{i % 256}")
        assert len(limiter._buckets) == 1000

        clock.now = 900
        assert await limiter.hit("192.168.0.1")
        assert list(limiter._buckets) == ["192.168.0.1"]

    @pytest.mark.asyncio
    async def test_active_client_kept_while_others_expire(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=2, window_seconds=900, clock=clock)

        await limiter.hit("old")
        clock.now = 500
        await limiter.hit("active")
        clock.now = 950
        assert await limiter.hit("new")

        assert set(limiter._buckets) == {"active", "new"}
        assert await limiter.hit("active")
        assert not await limiter.hit("active")
