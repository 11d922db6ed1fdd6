import random

import pytest

from task_scheduler import TaskScheduler


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return TaskScheduler(clock)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def drain(clock):
    """Jump the clock from task to task until nothing is left scheduled."""
    def _drain(conversation, limit: int = 50) -> None:
        for _ in range(limit):
            due = conversation.scheduler.next_due()
            if due is None:
                return
            clock.now = max(clock.now, due)
            conversation.pump()
        raise AssertionError("scheduler never drained")
    return _drain
