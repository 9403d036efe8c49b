"""
Kelly Lab - Crash Engine
========================
Continuous-time "rocket" game:
  IDLE -> RUNNING -> CRASHED | CASHED -> (next round) RUNNING ...

The crash point is drawn once per round from the inverse CDF
    crash = max(1, E / (1 - u)),  u ~ U[0, 1)
so that P(crash >= m) = E / m, where E is the house edge factor.
The displayed multiplier follows a fixed curve in elapsed time and is
compared against the crash point first, then the auto cash-out target.

The transitions below are pure (state, event) -> state. CrashEngine wraps
them with a frame scheduler for hosts.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from engine.crash_advisor import CrashAnalysis, analyze
from engine.lab_params import (
    HOUSE_EDGE_FACTOR, DEFAULT_BANKROLL, DEFAULT_BET_AMOUNT,
    DEFAULT_TARGET_MULTIPLIER, FRAME_INTERVAL, HISTORY_LIMIT,
)
from engine.scheduling import TickHandle, TickScheduler

logger = logging.getLogger(__name__)


class CrashPhase(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    CRASHED = "CRASHED"
    CASHED = "CASHED"


@dataclass(frozen=True)
class CrashHistoryEntry:
    id: int
    crash_point: float
    target: float
    bet: float
    profit: float
    result: CrashPhase  # CRASHED or CASHED


@dataclass(frozen=True)
class CrashRoundState:
    bankroll: float = DEFAULT_BANKROLL
    bet_amount: float = DEFAULT_BET_AMOUNT
    target_multiplier: float = DEFAULT_TARGET_MULTIPLIER
    current_multiplier: float = 1.0
    phase: CrashPhase = CrashPhase.IDLE
    crash_point: float = 1.0           # hidden until the round resolves
    started_at: Optional[float] = None
    history: Tuple[CrashHistoryEntry, ...] = ()  # newest first
    next_id: int = 1


# ============================================================================
# PURE MATH
# ============================================================================

def sample_crash_point(u: float, house_edge_factor: float = HOUSE_EDGE_FACTOR) -> float:
    return max(1.0, house_edge_factor / (1.0 - u))


def multiplier_at(elapsed: float) -> float:
    """Quadratic-plus-linear growth: 1.6x after 1s, 2.4x after 2s, 3.4x after 3s."""
    t = max(0.0, elapsed)
    return 1.0 + 0.1 * t * t + t / 2.0


# ============================================================================
# PURE TRANSITIONS
# ============================================================================

def can_start(state: CrashRoundState) -> bool:
    return (state.phase != CrashPhase.RUNNING
            and state.bet_amount > 0
            and state.bankroll >= state.bet_amount)


def configure(state: CrashRoundState, bet_amount: Optional[float] = None,
              target_multiplier: Optional[float] = None) -> CrashRoundState:
    """Stake and target are locked while a round is running."""
    if state.phase == CrashPhase.RUNNING:
        return state
    changes = {}
    if bet_amount is not None:
        changes['bet_amount'] = bet_amount
    if target_multiplier is not None:
        changes['target_multiplier'] = target_multiplier
    return replace(state, **changes) if changes else state


def start_round(state: CrashRoundState, crash_point: float, now: float) -> CrashRoundState:
    """Deducts the stake up front. Insufficient funds is a silent no-op."""
    if not can_start(state):
        return state
    return replace(
        state,
        bankroll=state.bankroll - state.bet_amount,
        phase=CrashPhase.RUNNING,
        current_multiplier=1.0,
        crash_point=crash_point,
        started_at=now,
    )


def _record(state: CrashRoundState, result: CrashPhase, profit: float) -> Tuple[Tuple[CrashHistoryEntry, ...], int]:
    entry = CrashHistoryEntry(
        id=state.next_id,
        crash_point=state.crash_point,
        target=state.target_multiplier,
        bet=state.bet_amount,
        profit=profit,
        result=result,
    )
    return (entry,) + state.history[:HISTORY_LIMIT - 1], state.next_id + 1


def advance(state: CrashRoundState, now: float) -> CrashRoundState:
    """
    One animation frame. Crash is checked before cash-out, so a crash
    point at or below the target always loses.
    """
    if state.phase != CrashPhase.RUNNING:
        return state

    candidate = multiplier_at(now - state.started_at)

    if candidate >= state.crash_point:
        history, next_id = _record(state, CrashPhase.CRASHED, -state.bet_amount)
        return replace(state, phase=CrashPhase.CRASHED, current_multiplier=state.crash_point,
                       history=history, next_id=next_id)

    if candidate >= state.target_multiplier:
        payout = state.bet_amount * state.target_multiplier
        history, next_id = _record(state, CrashPhase.CASHED, payout - state.bet_amount)
        return replace(state, phase=CrashPhase.CASHED, current_multiplier=state.target_multiplier,
                       bankroll=state.bankroll + payout, history=history, next_id=next_id)

    return replace(state, current_multiplier=candidate)


# ============================================================================
# HOST ADAPTER
# ============================================================================

class CrashEngine:
    """
    Drives the pure transitions from a frame scheduler.
    At most one frame tick is outstanding; teardown() cancels it.
    """

    def __init__(self, scheduler: TickScheduler, bankroll: float = DEFAULT_BANKROLL,
                 bet_amount: float = DEFAULT_BET_AMOUNT, target_multiplier: float = DEFAULT_TARGET_MULTIPLIER,
                 rng=None, frame_interval: float = FRAME_INTERVAL,
                 house_edge_factor: float = HOUSE_EDGE_FACTOR,
                 on_change: Optional[Callable[[], None]] = None):
        self.scheduler = scheduler
        self.rng = rng or random
        self.frame_interval = frame_interval
        self.house_edge_factor = house_edge_factor
        self.on_change = on_change
        self.state = CrashRoundState(bankroll=bankroll, bet_amount=bet_amount,
                                     target_multiplier=target_multiplier)
        self._pending: Optional[TickHandle] = None

    @property
    def phase(self) -> CrashPhase:
        return self.state.phase

    @property
    def history(self):
        return self.state.history

    def _notify(self):
        if self.on_change:
            self.on_change()

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_frame(self):
        self._cancel_pending()
        self._pending = self.scheduler.call_later(self.frame_interval, self._tick)

    def set_bet_amount(self, bet_amount: float):
        self.state = configure(self.state, bet_amount=bet_amount)
        self._notify()

    def set_target_multiplier(self, target_multiplier: float):
        self.state = configure(self.state, target_multiplier=target_multiplier)
        self._notify()

    def can_start(self) -> bool:
        return can_start(self.state)

    def start(self) -> bool:
        if not can_start(self.state):
            logger.debug("Start rejected: phase=%s bankroll=%.2f bet=%.2f",
                         self.state.phase.name, self.state.bankroll, self.state.bet_amount)
            return False
        crash_point = sample_crash_point(self.rng.random(), self.house_edge_factor)
        self.state = start_round(self.state, crash_point, self.scheduler.now())
        self._schedule_frame()
        self._notify()
        return True

    def _tick(self):
        self._pending = None
        self.state = advance(self.state, self.scheduler.now())
        if self.state.phase == CrashPhase.RUNNING:
            self._schedule_frame()
        else:
            last = self.state.history[0]
            logger.info("Crash round %d %s at %.2fx (target %.2fx, profit %+.2f)",
                        last.id, last.result.name, last.crash_point, last.target, last.profit)
        self._notify()

    def teardown(self):
        """
        Cancels the pending frame. A RUNNING round is abandoned unresolved:
        the stake stays deducted and no history entry is written.
        """
        self._cancel_pending()
        if self.state.phase == CrashPhase.RUNNING:
            logger.warning("Crash round abandoned while running; stake %.2f not returned",
                           self.state.bet_amount)

    def analysis(self) -> CrashAnalysis:
        return analyze(self.state.target_multiplier, self.state.bankroll, self.house_edge_factor)
