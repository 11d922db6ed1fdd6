import pytest


def test_tasks_wait_for_their_due_time(scheduler, clock):
    ran = []
    scheduler.call_later(1.0, ran.append, "a")
    assert scheduler.run_due() == 0
    clock.advance(0.5)
    assert scheduler.run_due() == 0
    clock.advance(0.5)
    assert scheduler.run_due() == 1
    assert ran == ["a"]
    assert scheduler.pending == 0


def test_tasks_run_in_due_then_scheduling_order(scheduler, clock):
    ran = []
    scheduler.call_later(2.0, ran.append, "late")
    scheduler.call_later(1.0, ran.append, "first")
    scheduler.call_later(1.0, ran.append, "second")
    clock.advance(5)
    scheduler.run_due()
    assert ran == ["first", "second", "late"]


def test_callbacks_can_schedule_due_work(scheduler, clock):
    ran = []

    def outer():
        ran.append("outer")
        scheduler.call_later(0, ran.append, "inner")
        scheduler.call_later(10, ran.append, "later")

    scheduler.call_later(1, outer)
    clock.advance(1)
    assert scheduler.run_due() == 2
    assert ran == ["outer", "inner"]
    assert scheduler.pending == 1
    assert scheduler.next_due() == clock.now + 10


def test_cancelled_tasks_are_skipped(scheduler, clock):
    ran = []
    task = scheduler.call_later(1, ran.append, "x")
    task.cancel()
    assert scheduler.pending == 0
    assert scheduler.next_due() is None
    clock.advance(2)
    assert scheduler.run_due() == 0
    assert ran == []


def test_negative_delay_rejected(scheduler):
    with pytest.raises(ValueError):
        scheduler.call_later(-0.1, print)


def test_next_due_empty(scheduler):
    assert scheduler.next_due() is None


def test_follow_ups_are_anchored_to_the_fired_task(scheduler, clock):
    seen = []

    def outer():
        seen.append(("outer", scheduler.now(), scheduler.lag()))
        scheduler.call_later(2, inner)

    def inner():
        seen.append(("inner", scheduler.now(), scheduler.lag()))

    scheduler.call_later(1, outer)
    clock.advance(10)
    assert scheduler.run_due() == 2
    assert seen == [("outer", 101.0, 9.0), ("inner", 103.0, 7.0)]
    assert scheduler.now() == clock.now
    assert scheduler.lag() == 0.0
