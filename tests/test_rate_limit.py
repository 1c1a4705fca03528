from santadraft.services.rate_limit import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_blocks_after_max_calls():
    clock = FakeClock()
    limiter = RateLimiter(max_calls=2, period_seconds=10, clock=clock)
    assert limiter.allow("u:draft").allowed
    assert limiter.allow("u:draft").allowed
    result = limiter.allow("u:draft")
    assert not result.allowed
    assert result.retry_after == 10


def test_window_slides():
    clock = FakeClock()
    limiter = RateLimiter(max_calls=1, period_seconds=10, clock=clock)
    assert limiter.allow("u:draft").allowed
    clock.now += 4
    assert limiter.allow("u:draft").retry_after == 6
    clock.now += 6
    assert limiter.allow("u:draft").allowed


def test_keys_are_independent():
    limiter = RateLimiter(max_calls=1, period_seconds=10, clock=FakeClock())
    assert limiter.allow("u:draft").allowed
    assert limiter.allow("u:ticket").allowed
    assert not limiter.allow("u:draft").allowed


def test_configure_resets_windows():
    limiter = RateLimiter(max_calls=1, period_seconds=10, clock=FakeClock())
    limiter.allow("u:draft")
    limiter.configure(max_calls=3, period_seconds=5)
    assert limiter.allow("u:draft").allowed
    assert limiter.max_calls == 3
