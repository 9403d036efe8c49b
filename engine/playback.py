import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from engine.lab_params import PLAYBACK_INTERVAL
from engine.round_simulator import RoundSnapshot
from engine.scheduling import TickHandle, TickScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackCursor:
    current_index: int = 0
    is_playing: bool = False


# --- PURE TRANSITIONS ---

def step_forward(cursor: PlaybackCursor, length: int) -> PlaybackCursor:
    """Advance one round; at the last index just stop playing (no wraparound)."""
    if cursor.current_index < length - 1:
        return replace(cursor, current_index=cursor.current_index + 1)
    return replace(cursor, is_playing=False)


def reset_cursor(cursor: PlaybackCursor) -> PlaybackCursor:
    return PlaybackCursor(current_index=0, is_playing=False)


def at_end(cursor: PlaybackCursor, length: int) -> bool:
    return cursor.current_index >= length - 1


class PlaybackController:
    """
    Cursor over a precomputed trajectory with play/pause/step/reset.
    Owns at most one pending auto-advance tick.
    """

    def __init__(self, trajectory: List[RoundSnapshot], scheduler: TickScheduler,
                 interval: float = PLAYBACK_INTERVAL, on_change: Optional[Callable[[], None]] = None):
        self.trajectory = list(trajectory)
        self.scheduler = scheduler
        self.interval = interval
        self.on_change = on_change
        self.cursor = PlaybackCursor()
        self._pending: Optional[TickHandle] = None

    @property
    def current_index(self) -> int:
        return self.cursor.current_index

    @property
    def is_playing(self) -> bool:
        return self.cursor.is_playing

    @property
    def last_index(self) -> int:
        return len(self.trajectory) - 1

    def _notify(self):
        if self.on_change:
            self.on_change()

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule(self):
        self._cancel_pending()
        self._pending = self.scheduler.call_later(self.interval, self._tick)

    def _tick(self):
        self._pending = None
        if not self.cursor.is_playing:
            return
        self.cursor = step_forward(self.cursor, len(self.trajectory))
        if at_end(self.cursor, len(self.trajectory)):
            self.cursor = replace(self.cursor, is_playing=False)
        if self.cursor.is_playing:
            self._schedule()
        self._notify()

    # --- USER ACTIONS ---

    def step_forward(self):
        self.cursor = step_forward(self.cursor, len(self.trajectory))
        if not self.cursor.is_playing:
            self._cancel_pending()
        self._notify()

    def reset(self):
        self._cancel_pending()
        self.cursor = reset_cursor(self.cursor)
        self._notify()

    def set_playing(self, playing: bool):
        if playing == self.cursor.is_playing:
            return
        if playing:
            self.cursor = replace(self.cursor, is_playing=True)
            self._schedule()
        else:
            self._cancel_pending()
            self.cursor = replace(self.cursor, is_playing=False)
        self._notify()

    def toggle(self):
        self.set_playing(not self.cursor.is_playing)

    def load(self, trajectory: List[RoundSnapshot]):
        """Swap in a freshly generated trajectory; any running loop is cancelled first."""
        self._cancel_pending()
        self.trajectory = list(trajectory)
        self.cursor = PlaybackCursor()
        logger.debug("Playback loaded %d snapshots", len(self.trajectory))
        self._notify()

    def teardown(self):
        self._cancel_pending()
        self.cursor = replace(self.cursor, is_playing=False)

    # --- READ SIDE ---

    def visible_prefix(self) -> List[RoundSnapshot]:
        return self.trajectory[:self.cursor.current_index + 1]

    def current_snapshot(self) -> Optional[RoundSnapshot]:
        if not self.trajectory:
            return None
        return self.trajectory[self.cursor.current_index]
