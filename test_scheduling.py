"""
Test script for the manual tick scheduler
"""

from engine.scheduling import ManualScheduler, TickQueue


def test_fires_in_time_order():
    s = ManualScheduler()
    fired = []
    s.call_later(0.3, lambda: fired.append('c'))
    s.call_later(0.1, lambda: fired.append('a'))
    s.call_later(0.2, lambda: fired.append('b'))
    assert s.advance(0.25) == 2
    assert fired == ['a', 'b']
    assert s.now() == 0.25
    s.advance(1.0)
    assert fired == ['a', 'b', 'c']


def test_cancel_is_idempotent():
    s = ManualScheduler()
    fired = []
    handle = s.call_later(0.1, lambda: fired.append(1))
    handle.cancel()
    handle.cancel()
    assert s.pending() == 0
    s.advance(1.0)
    assert fired == []


def test_callbacks_scheduled_inside_window_fire():
    s = ManualScheduler()
    times = []

    def tick():
        times.append(s.now())
        if len(times) < 5:
            s.call_later(0.1, tick)

    s.call_later(0.1, tick)
    s.advance(0.55)
    assert len(times) == 5
    assert s.pending() == 0


def test_run_until_idle():
    s = ManualScheduler()
    count = []

    def tick():
        count.append(1)
        if len(count) < 3:
            s.call_later(0.5, tick)

    s.call_later(0.5, tick)
    assert s.run_until_idle(step=0.25) == 3
    assert s.pending() == 0


def test_queue_skips_cancelled_and_respects_deadline():
    q = TickQueue()
    early = q.push(1.0, lambda: None)
    late = q.push(2.0, lambda: None)
    q.push(0.5, lambda: None).cancel()
    assert q.pending() == 2

    due, call = q.pop_due(1.5)
    assert due == 1.0 and call is early
    assert q.pop_due(1.5) is None
    assert q.pop_due(2.0)[1] is late
    assert q.pending() == 0


if __name__ == "__main__":
    test_fires_in_time_order()
    test_cancel_is_idempotent()
    test_callbacks_scheduled_inside_window_fire()
    test_run_until_idle()
    test_queue_skips_cancelled_and_respects_deadline()
    print("\n✓ All scheduler tests passed!")
