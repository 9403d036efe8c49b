"""
Test script for lab switching and session-end teardown
"""

from engine.crash_engine import CrashEngine, CrashPhase
from engine.scheduling import ManualScheduler
from ui.lab_host import LabHost


class FakeClient:
    """Only session-end hooks exist; a reconnect hook would raise AttributeError."""

    def __init__(self, client_id='c1'):
        self.id = client_id
        self.delete_handlers = []

    def on_delete(self, handler):
        self.delete_handlers.append(handler)

    def end_session(self):
        for handler in self.delete_handlers:
            handler()


class FakeContent:
    def __init__(self):
        self.cleared = 0

    def clear(self):
        self.cleared += 1

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class CountingLab:
    def __init__(self):
        self.teardowns = 0

    def build(self):
        return self.teardown

    def teardown(self):
        self.teardowns += 1


def test_switching_twice_keeps_one_handler():
    client = FakeClient()
    host = LabHost(FakeContent())
    host.attach(client)
    host.attach(client)

    kelly, crash = CountingLab(), CountingLab()
    host.switch(kelly.build)
    host.switch(crash.build)
    host.switch(kelly.build)

    assert len(client.delete_handlers) == 1
    assert kelly.teardowns == 1
    assert crash.teardowns == 1
    assert host.content.cleared == 3

    client.end_session()
    assert kelly.teardowns == 2
    assert crash.teardowns == 1
    client.end_session()
    assert kelly.teardowns == 2
    print("✓ One session-end handler, only the current lab is torn down")


def test_switch_cancels_previous_engine_only():
    scheduler = ManualScheduler()
    engines = []

    def build_crash():
        engine = CrashEngine(scheduler, bankroll=1000.0, bet_amount=50.0, target_multiplier=2.0)
        engines.append(engine)
        return engine.teardown

    host = LabHost(FakeContent())
    host.switch(build_crash)
    engines[0].start()
    assert scheduler.pending() == 1

    host.switch(build_crash)
    assert scheduler.pending() == 0

    # The lab now on screen still plays normally
    assert engines[1].start()
    scheduler.run_until_idle(step=0.25)
    assert engines[1].phase in (CrashPhase.CRASHED, CrashPhase.CASHED)
    assert engines[1].can_start()


def test_lab_without_teardown():
    host = LabHost(FakeContent())
    host.switch(lambda: None)
    host.teardown()
    assert host.active_teardown is None


if __name__ == "__main__":
    test_switching_twice_keeps_one_handler()
    test_switch_cancels_previous_engine_only()
    test_lab_without_teardown()
    print("\n✓ All lab host tests passed!")
