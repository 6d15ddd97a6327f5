"""Tests for the in-process view rate gate."""

import threading

from hypothesis import given, settings, strategies as st

from lyrics_api.repositories.rate_limits import InMemoryRateGate


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_second_attempt_within_window_is_rejected():
    clock = FakeClock()
    gate = InMemoryRateGate(window_seconds=3600, clock=clock)

    assert gate.check_and_record("song-a", "1.2.3.4") is True
    clock.now += 10
    assert gate.check_and_record("song-a", "1.2.3.4") is False


def test_attempt_after_window_is_accepted():
    clock = FakeClock()
    gate = InMemoryRateGate(window_seconds=3600, clock=clock)

    gate.check_and_record("song-a", "1.2.3.4")
    clock.now += 3600

    assert gate.check_and_record("song-a", "1.2.3.4") is True


def test_rejection_does_not_refresh_the_window():
    clock = FakeClock()
    gate = InMemoryRateGate(window_seconds=100, clock=clock)

    gate.check_and_record("song-a", "client")
    clock.now += 90
    assert gate.check_and_record("song-a", "client") is False
    clock.now += 10

    assert gate.check_and_record("song-a", "client") is True


def test_keys_are_independent_per_resource_and_client():
    gate = InMemoryRateGate(clock=FakeClock())

    assert gate.check_and_record("song-a", "client-1") is True
    assert gate.check_and_record("song-b", "client-1") is True
    assert gate.check_and_record("song-a", "client-2") is True
    assert gate.check_and_record("song-a", "client-1") is False


def test_sweep_drops_expired_entries_once_over_capacity():
    clock = FakeClock()
    gate = InMemoryRateGate(window_seconds=60, max_entries=3, clock=clock)

    for client in ("a", "b", "c"):
        gate.check_and_record("song", client)
    clock.now += 61
    gate.check_and_record("song", "d")

    assert len(gate) == 1


def test_sweep_keeps_live_entries():
    clock = FakeClock()
    gate = InMemoryRateGate(window_seconds=60, max_entries=2, clock=clock)

    for client in ("a", "b", "c"):
        gate.check_and_record("song", client)

    assert len(gate) == 3
    assert gate.check_and_record("song", "a") is False


@settings(max_examples=50)
@given(offsets=st.lists(st.floats(min_value=0, max_value=10_000), min_size=1, max_size=30))
def test_accepted_attempts_are_at_least_one_window_apart(offsets):
    clock = FakeClock(0.0)
    gate = InMemoryRateGate(window_seconds=3600, clock=clock)
    accepted: list[float] = []

    for now in sorted(offsets):
        clock.now = now
        if gate.check_and_record("song", "client"):
            accepted.append(now)

    assert accepted[0] == sorted(offsets)[0]
    for earlier, later in zip(accepted, accepted[1:]):
        assert later - earlier >= 3600


def test_concurrent_threads_accept_exactly_once():
    gate = InMemoryRateGate()
    results: list[bool] = []
    lock = threading.Lock()

    def attempt():
        outcome = gate.check_and_record("song", "same-client")
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=attempt) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
