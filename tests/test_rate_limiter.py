from conftest import FakeClock
from storefront.utils.rate_limiter import RateLimiter


def test_sliding_window_blocks_then_recovers():
    clock = FakeClock(now=100.0)
    limiter = RateLimiter(3, window_seconds=60, clock=clock)

    results = [limiter.hit("ip:1") for _ in range(4)]

    assert [r.success for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert results[-1].reset == 160.0

    clock.advance(59.9)
    assert limiter.hit("ip:1").success is False

    clock.advance(0.2)
    assert limiter.hit("ip:1").success is True


def test_identifiers_are_limited_independently():
    limiter = RateLimiter(1, window_seconds=60, clock=FakeClock())

    assert limiter.hit("ip:1").success is True
    assert limiter.hit("ip:1").success is False
    assert limiter.hit("user:42").success is True


def test_get_stats():
    clock = FakeClock()
    limiter = RateLimiter(5, window_seconds=10, clock=clock)
    limiter.hit("ip:1")
    limiter.hit("ip:1")

    assert limiter.get_stats("ip:1") == {"requests_in_window": 2, "limit": 5, "window_seconds": 10}
    clock.advance(10)
    assert limiter.get_stats("ip:1")["requests_in_window"] == 0
    assert limiter.get_stats("ip:unknown")["requests_in_window"] == 0


def test_idle_identifiers_are_evicted():
    clock = FakeClock(now=100.0)
    limiter = RateLimiter(5, window_seconds=60, clock=clock)

    for i in range(1000):
        limiter.hit(f"10.0.{i // 256}.{i % 256}")
    assert len(limiter.request_times) == 1000

    clock.advance(3600)
    assert limiter.hit("198.51.100.2").success is True

    assert list(limiter.request_times) == ["198.51.100.2"]
