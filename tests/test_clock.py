import pytest

from stroop_experiment.utils.clock import ManualScheduler


def test_manual_scheduler_order():
    sched = ManualScheduler()
    calls = []
    sched.schedule_after(1.0, lambda: calls.append(("b", sched.now())))
    sched.schedule_after(0.5, lambda: calls.append(("a", sched.now())))
    sched.schedule_after(1.0, lambda: calls.append(("c", sched.now())))

    sched.advance(0.4)
    assert calls == []

    sched.advance(1.0)
    assert calls == [("a", 0.5), ("b", 1.0), ("c", 1.0)]
    assert sched.now() == pytest.approx(1.4)


def test_manual_scheduler_cancel():
    sched = ManualScheduler()
    calls = []
    call = sched.schedule_after(1.0, lambda: calls.append(1))
    assert sched.n_pending == 1

    call.cancel()
    assert not call.pending
    assert sched.n_pending == 0

    sched.advance(2.0)
    assert calls == []
    assert not sched.advance_to_next()


def test_manual_scheduler_nested_calls():
    sched = ManualScheduler()
    calls = []

    def first():
        calls.append(("first", sched.now()))
        sched.schedule_after(0.25, lambda: calls.append(("second", sched.now())))

    sched.schedule_after(0.5, first)
    sched.advance(1.0)

    assert calls == [("first", 0.5), ("second", 0.75)]


def test_advance_to_next():
    sched = ManualScheduler()
    calls = []
    sched.schedule_after(3.0, lambda: calls.append(sched.now()))

    assert sched.advance_to_next()
    assert calls == [3.0]
    assert not sched.advance_to_next()
