import pytest

from delicli.infrastructure.resilience.rate_limiter import RateLimiter


class FakeClock:
    """Monotonic clock whose sleep just advances time."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(min_interval=1.0, clock=clock, sleep=clock.sleep)


def test_first_request_does_not_wait(limiter, clock):
    assert limiter.wait_for_permission() == 0.0
    assert clock.sleeps == []
    assert limiter.last_request == 100.0


def test_back_to_back_requests_are_spaced_one_second_apart(limiter, clock):
    limiter.wait_for_permission()
    waited = limiter.wait_for_permission()
    assert waited == pytest.approx(1.0)
    assert clock.sleeps == [pytest.approx(1.0)]
    assert limiter.last_request == pytest.approx(101.0)


def test_only_the_remaining_interval_is_waited(limiter, clock):
    limiter.wait_for_permission()
    clock.now += 0.4
    assert limiter.get_wait_time() == pytest.approx(0.6)
    limiter.wait_for_permission()
    assert clock.sleeps == [pytest.approx(0.6)]


def test_no_wait_once_the_interval_has_passed(limiter, clock):
    limiter.wait_for_permission()
    clock.now += 2.5
    assert limiter.get_wait_time() == 0.0
    assert limiter.wait_for_permission() == 0.0
    assert clock.sleeps == []


def test_zero_interval_never_sleeps(clock):
    limiter = RateLimiter(min_interval=0.0, clock=clock, sleep=clock.sleep)
    for _ in range(3):
        limiter.wait_for_permission()
    assert clock.sleeps == []
