"""Tests for the sliding-window RateLimiter."""

from __future__ import annotations

import threading

from screensight.vision.rate_limiter import RateLimiter
from tests.conftest import FakeClock


def test_single_slot_boundary():
    clock = FakeClock()
    limiter = RateLimiter(max_per_minute=1, max_per_hour=50, clock=clock)

    assert limiter.can_proceed() is True
    limiter.record_request()
    assert limiter.can_proceed() is False
    wait = limiter.wait_time_ms()
    assert 0 < wait <= 60_000


def test_wait_time_zero_when_free(limiter):
    assert limiter.wait_time_ms() == 0


def test_wait_time_tracks_oldest_in_minute_window():
    clock = FakeClock()
    limiter = RateLimiter(max_per_minute=2, max_per_hour=50, clock=clock)
    limiter.record_request()
    clock.advance(10)
    limiter.record_request()
    clock.advance(5)

    # Oldest entry leaves the window 60s after it was recorded: 45s from now
    assert limiter.wait_time_ms() == 45_000


def test_minute_window_slides():
    clock = FakeClock()
    limiter = RateLimiter(max_per_minute=1, max_per_hour=50, clock=clock)
    limiter.record_request()
    clock.advance(59)
    assert not limiter.can_proceed()
    clock.advance(1.5)
    assert limiter.can_proceed()


def test_hourly_cap_returns_full_minute_wait():
    clock = FakeClock()
    limiter = RateLimiter(max_per_minute=10, max_per_hour=3, clock=clock)
    for _ in range(3):
        limiter.record_request()
        clock.advance(61)

    assert not limiter.can_proceed()
    assert limiter.wait_time_ms() == 60_000


def test_hour_old_entries_are_purged():
    clock = FakeClock()
    limiter = RateLimiter(max_per_minute=10, max_per_hour=2, clock=clock)
    limiter.record_request()
    limiter.record_request()
    clock.advance(3601)

    assert limiter.can_proceed()
    assert limiter.request_count == 0


def test_try_acquire_records_only_when_allowed(clock):
    limiter = RateLimiter(max_per_minute=2, max_per_hour=50, clock=clock)
    assert limiter.try_acquire()
    assert limiter.try_acquire()
    assert not limiter.try_acquire()
    assert limiter.request_count == 2


def test_try_acquire_never_overshoots_under_threads():
    limiter = RateLimiter(max_per_minute=5, max_per_hour=50, clock=FakeClock())
    granted = []

    def worker():
        if limiter.try_acquire():
            granted.append(1)

    threads = [threading.Thread(target=worker) for _ in range(40)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(granted) == 5
    assert limiter.request_count == 5


def test_status(limiter):
    assert limiter.status() == {"can_proceed": True, "wait_time_ms": 0}
