"""
Test script for the Playback Controller
Drives the auto-advance loop with a manual clock
"""

import random

from engine.lab_params import SimulationParameters
from engine.playback import PlaybackController, PlaybackCursor, step_forward, reset_cursor
from engine.round_simulator import simulate
from engine.scheduling import ManualScheduler


def make_controller(rounds=4):
    traj = simulate(SimulationParameters(0.6, 2.0, rounds, 1000.0), rng=random.Random(5))
    scheduler = ManualScheduler()
    return PlaybackController(traj, scheduler, interval=0.2), scheduler


def test_pure_step_and_reset():
    c = PlaybackCursor()
    c = step_forward(c, 3)
    c = step_forward(c, 3)
    assert c.current_index == 2
    c = PlaybackCursor(current_index=2, is_playing=True)
    c = step_forward(c, 3)
    assert c.current_index == 2 and not c.is_playing
    assert reset_cursor(c) == PlaybackCursor(0, False)


def test_step_to_end_then_noop():
    controller, _ = make_controller(rounds=4)
    length = len(controller.trajectory)
    for _ in range(length - 1):
        controller.step_forward()
    assert controller.current_index == length - 1

    controller.step_forward()  # no wraparound, no error
    assert controller.current_index == length - 1
    assert not controller.is_playing
    print("✓ Step forward stops at the last round")


def test_visible_prefix_length():
    controller, _ = make_controller(rounds=6)
    for k in range(7):
        prefix = controller.visible_prefix()
        assert len(prefix) == k + 1
        assert prefix[-1].round == k
        assert controller.current_snapshot() == prefix[-1]
        controller.step_forward()


def test_auto_advance_cadence():
    controller, scheduler = make_controller(rounds=4)
    controller.set_playing(True)
    assert scheduler.pending() == 1

    scheduler.advance(0.1)
    assert controller.current_index == 0

    scheduler.advance(0.15)  # t = 0.25
    assert controller.current_index == 1
    assert controller.is_playing

    scheduler.advance(2.0)
    assert controller.current_index == 4
    assert not controller.is_playing
    assert scheduler.pending() == 0
    print("✓ Auto-advance stops by itself at the end")


def test_pause_cancels_tick():
    controller, scheduler = make_controller()
    controller.set_playing(True)
    scheduler.advance(0.25)
    controller.set_playing(False)
    assert scheduler.pending() == 0
    scheduler.advance(5.0)
    assert controller.current_index == 1


def test_single_loop_only():
    controller, scheduler = make_controller(rounds=20)
    controller.set_playing(True)
    controller.set_playing(True)
    controller.toggle()
    controller.toggle()
    assert scheduler.pending() == 1
    controller.step_forward()
    assert scheduler.pending() == 1
    scheduler.advance(0.25)
    assert controller.current_index == 2


def test_reset_stops_and_rewinds():
    controller, scheduler = make_controller()
    controller.set_playing(True)
    scheduler.advance(0.45)
    assert controller.current_index == 2
    controller.reset()
    assert controller.current_index == 0
    assert not controller.is_playing
    assert scheduler.pending() == 0


def test_load_cancels_stale_loop():
    """A shorter trajectory must never be stepped by the old timer"""
    controller, scheduler = make_controller(rounds=50)
    controller.set_playing(True)
    scheduler.advance(1.05)
    assert controller.current_index == 5

    short = simulate(SimulationParameters(0.6, 2.0, 2, 1000.0), rng=random.Random(1))
    controller.load(short)
    assert controller.current_index == 0
    assert not controller.is_playing
    assert scheduler.pending() == 0

    scheduler.advance(10.0)
    assert controller.current_index == 0
    assert len(controller.visible_prefix()) == 1


def test_on_change_and_teardown():
    calls = []
    controller, scheduler = make_controller()
    controller.on_change = lambda: calls.append(controller.current_index)
    controller.set_playing(True)
    scheduler.advance(0.25)
    assert calls == [0, 1]
    controller.teardown()
    assert scheduler.pending() == 0
    assert not controller.is_playing


def test_play_at_end_stops_on_next_tick():
    controller, scheduler = make_controller(rounds=1)
    controller.step_forward()
    controller.set_playing(True)
    scheduler.advance(0.25)
    assert controller.current_index == 1
    assert not controller.is_playing
    assert scheduler.pending() == 0


if __name__ == "__main__":
    test_pure_step_and_reset()
    test_step_to_end_then_noop()
    test_visible_prefix_length()
    test_auto_advance_cadence()
    test_pause_cancels_tick()
    test_single_loop_only()
    test_reset_stops_and_rewinds()
    test_load_cancels_stale_loop()
    test_on_change_and_teardown()
    test_play_at_end_stops_on_next_tick()
    print("\n✓ All playback tests passed!")
