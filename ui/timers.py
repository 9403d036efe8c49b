import time
from typing import Callable

from nicegui import ui

from engine.lab_params import FRAME_INTERVAL
from engine.scheduling import ScheduledCall, TickQueue


class NiceGuiScheduler:
    """
    Implements engine.scheduling.TickScheduler on top of ONE repeating
    ui.timer parented to the page. The timer only runs while calls are
    pending, and each pump fires whatever is due on the monotonic clock.
    """

    def __init__(self, container: ui.element, resolution: float = FRAME_INTERVAL):
        self.container = container
        self.resolution = resolution
        self._calls = TickQueue()
        self._timer = None

    def _create_timer(self):
        with self.container:
            return ui.timer(self.resolution, self._pump, active=False)

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = self._calls.push(self.now() + max(0.0, delay), callback)
        if self._timer is None:
            self._timer = self._create_timer()
        if not self._timer.active:
            self._timer.activate()
        return call

    def pending(self) -> int:
        return self._calls.pending()

    def _pump(self):
        deadline = self.now()
        while True:
            item = self._calls.pop_due(deadline)
            if item is None:
                break
            _, call = item
            call.callback()
        if not self._calls.pending():
            self._timer.deactivate()
