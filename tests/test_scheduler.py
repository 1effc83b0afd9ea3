import threading

import pytest

from services.scheduler import Debouncer, ManualScheduler, ThreadScheduler


def test_manual_scheduler_runs_callbacks_in_due_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.schedule_once(0.3, lambda: calls.append("c"))
    scheduler.schedule_once(0.1, lambda: calls.append("a"))
    scheduler.schedule_once(0.1, lambda: calls.append("b"))

    assert scheduler.advance(0.2) == 2
    assert calls == ["a", "b"]
    scheduler.advance(0.2)
    assert calls == ["a", "b", "c"]


def test_manual_scheduler_periodic_and_cancel():
    scheduler = ManualScheduler()
    ticks = []
    handle = scheduler.schedule_periodic(1.0, lambda: ticks.append(scheduler.now))

    scheduler.advance(3.5)
    assert ticks == [1.0, 2.0, 3.0]

    scheduler.cancel(handle)
    scheduler.advance(3.0)
    assert len(ticks) == 3


def test_callbacks_scheduled_while_running_use_callback_time():
    scheduler = ManualScheduler()
    seen = []
    scheduler.schedule_once(1.0, lambda: scheduler.schedule_once(0.5, lambda: seen.append(scheduler.now)))

    scheduler.advance(2.0)
    assert seen == [1.5]


def test_failing_callback_does_not_stop_others():
    scheduler = ManualScheduler()
    calls = []

    def broken():
        raise RuntimeError("boom")

    scheduler.call_soon(broken)
    scheduler.call_soon(lambda: calls.append("ok"))
    scheduler.run_pending()
    assert calls == ["ok"]


def test_periodic_interval_must_be_positive():
    with pytest.raises(ValueError):
        ManualScheduler().schedule_periodic(0, lambda: None)


def test_debouncer_restarts_on_trigger():
    scheduler = ManualScheduler()
    fired = []
    debouncer = Debouncer(scheduler, 1.0, lambda: fired.append(scheduler.now))

    debouncer.trigger()
    scheduler.advance(0.5)
    debouncer.trigger()
    scheduler.advance(0.75)
    assert fired == []
    assert debouncer.pending

    scheduler.advance(0.5)
    assert fired == [1.5]
    assert not debouncer.pending


def test_debouncer_cancel():
    scheduler = ManualScheduler()
    fired = []
    debouncer = Debouncer(scheduler, 1.0, lambda: fired.append(True))

    debouncer.trigger()
    debouncer.cancel()
    scheduler.advance(2.0)
    assert fired == []


def test_thread_scheduler_serialises_callbacks_on_one_thread():
    done = threading.Event()
    threads = set()
    order = []

    with ThreadScheduler() as scheduler:
        for i in range(5):
            scheduler.schedule_once(0.01 * (5 - i), lambda i=i: (threads.add(threading.get_ident()), order.append(i)))
        scheduler.schedule_once(0.1, done.set)
        assert done.wait(timeout=2.0)

    assert len(threads) == 1
    assert order == [4, 3, 2, 1, 0]
    assert not scheduler.is_running


def test_thread_scheduler_periodic_and_cancel():
    ticked = threading.Event()
    count = []

    def tick():
        count.append(1)
        if len(count) >= 3:
            ticked.set()

    with ThreadScheduler() as scheduler:
        handle = scheduler.schedule_periodic(0.01, tick)
        assert ticked.wait(timeout=2.0)
        scheduler.cancel(handle)
        seen = len(count)
        cancelled = threading.Event()
        scheduler.schedule_once(0.05, cancelled.set)
        assert cancelled.wait(timeout=2.0)

    assert len(count) <= seen + 1
