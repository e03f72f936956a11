import math

import pytest

from sketchengine.timer import Timer


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeps():
    return []


def make_timer(frequency, clock, sleeps):
    return Timer(frequency, clock=clock, sleep=sleeps.append)


def test_interval_is_inverse_of_frequency(clock, sleeps):
    timer = make_timer(4, clock, sleeps)
    assert timer.interval == 0.25
    timer.set_frequency(2)
    assert timer.interval == 0.5


def test_starts_with_zero_dt_and_fps(clock, sleeps):
    timer = make_timer(60, clock, sleeps)
    assert timer.dt == 0.0
    assert timer.fps == 0.0


def test_tick_measures_elapsed_time(clock, sleeps):
    timer = make_timer(60, clock, sleeps)
    clock.now = 0.5
    timer.tick()
    assert timer.dt == 0.5
    assert timer.fps == 2.0
    clock.now = 0.75
    timer.tick()
    assert timer.dt == 0.25


def test_tick_with_no_elapsed_time_gives_infinite_fps(clock, sleeps):
    timer = make_timer(60, clock, sleeps)
    timer.tick()
    assert timer.dt == 0.0
    assert timer.fps == math.inf


def test_wait_sleeps_remaining_interval(clock, sleeps):
    timer = make_timer(2, clock, sleeps)
    clock.now = 0.25
    timer.wait_for_interval()
    assert sleeps == [0.25]


def test_wait_does_not_sleep_when_interval_passed(clock, sleeps):
    timer = make_timer(2, clock, sleeps)
    clock.now = 0.75
    timer.wait_for_interval()
    assert sleeps == []


def test_wait_measures_from_last_tick(clock, sleeps):
    timer = make_timer(2, clock, sleeps)
    clock.now = 1.0
    timer.tick()
    timer.wait_for_interval()
    assert sleeps == [0.5]


@pytest.mark.parametrize("frequency", [0, -5])
def test_non_positive_frequency_rejected(clock, sleeps, frequency):
    with pytest.raises(ValueError):
        make_timer(frequency, clock, sleeps)
    timer = make_timer(10, clock, sleeps)
    with pytest.raises(ValueError):
        timer.set_frequency(frequency)