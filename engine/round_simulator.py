"""
Kelly Lab - Round Simulator
===========================
Pre-computes a full wealth path for four competing wagering policies:
- FULL KELLY   (f*)
- HALF KELLY   (f* / 2)
- DOUBLE KELLY (2 f*, capped at 100% leverage)
- FIXED BET    (flat 5% of the starting bankroll)

Every policy sees the SAME coin flip each round, so the paths compare
sizing rules on one identical outcome sequence.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

import numpy as np

from engine.kelly_math import compute_metrics, stake_fraction
from engine.lab_params import (
    SimulationParameters, RUIN_THRESHOLD, FIXED_BET_PCT,
    HALF_KELLY_SCALE, DOUBLE_KELLY_SCALE, MAX_LEVERAGE,
)

logger = logging.getLogger(__name__)

STRATEGY_KEYS = ('full_kelly', 'half_kelly', 'double_kelly', 'fixed_bet')


class Outcome(Enum):
    WIN = "WIN"
    LOSS = "LOSS"


@dataclass(frozen=True)
class RoundSnapshot:
    round: int
    full_kelly: float
    half_kelly: float
    double_kelly: float
    fixed_bet: float
    outcome: Optional[Outcome] = None  # None only for round 0

    def wealth(self, strategy: str) -> float:
        return getattr(self, strategy)


@dataclass(frozen=True)
class StrategySummary:
    final_wealth: float
    peak_wealth: float
    max_drawdown: float          # fraction of peak, 0..1
    ruined: bool
    ruin_round: Optional[int] = None


def settle(wealth: float, stake: float, won: bool, net_odds: float) -> float:
    """One bet: win pays stake * b, loss forfeits the stake. Ruin is absorbing."""
    if wealth < RUIN_THRESHOLD:
        return wealth
    return wealth + (stake * net_odds if won else -stake)


def simulate(params: SimulationParameters, rng=None) -> List[RoundSnapshot]:
    """
    Generates the whole trajectory in one pass: totalRounds + 1 snapshots.
    Fresh randomness on every call unless a seeded rng is supplied.
    """
    rng = rng or random
    metrics = compute_metrics(params.win_probability, params.decimal_odds)
    b = metrics.net_odds

    f = stake_fraction(metrics.optimal_fraction)
    f_full = f
    f_half = f * HALF_KELLY_SCALE
    f_double = min(MAX_LEVERAGE, f * DOUBLE_KELLY_SCALE)
    fixed_amount = params.initial_wealth * FIXED_BET_PCT

    w_full = w_half = w_double = w_fixed = params.initial_wealth
    trajectory = [RoundSnapshot(0, w_full, w_half, w_double, w_fixed)]

    for i in range(1, params.total_rounds + 1):
        # One draw per round, threaded into every strategy
        won = rng.random() < params.win_probability

        w_full = settle(w_full, w_full * f_full, won, b)
        w_half = settle(w_half, w_half * f_half, won, b)
        w_double = settle(w_double, w_double * f_double, won, b)
        w_fixed = settle(w_fixed, min(w_fixed, fixed_amount), won, b)

        w_full, w_half, w_double, w_fixed = (max(0.0, w) for w in (w_full, w_half, w_double, w_fixed))

        trajectory.append(RoundSnapshot(
            round=i,
            full_kelly=w_full,
            half_kelly=w_half,
            double_kelly=w_double,
            fixed_bet=w_fixed,
            outcome=Outcome.WIN if won else Outcome.LOSS,
        ))

    logger.debug("Simulated %d rounds (p=%.2f, odds=%.2f, f*=%.4f)",
                 params.total_rounds, params.win_probability, params.decimal_odds, metrics.optimal_fraction)
    return trajectory


def summarize_trajectory(trajectory: List[RoundSnapshot]) -> Dict[str, StrategySummary]:
    """Per-strategy stats for a single generated path."""
    summary = {}
    if not trajectory:
        return summary

    for key in STRATEGY_KEYS:
        path = np.array([s.wealth(key) for s in trajectory], dtype=float)
        peaks = np.maximum.accumulate(path)
        with np.errstate(divide='ignore', invalid='ignore'):
            drawdowns = np.where(peaks > 0, 1.0 - path / peaks, 0.0)

        ruined_mask = path < RUIN_THRESHOLD
        ruin_round = int(np.argmax(ruined_mask)) if ruined_mask.any() else None

        summary[key] = StrategySummary(
            final_wealth=float(path[-1]),
            peak_wealth=float(np.max(path)),
            max_drawdown=float(np.max(drawdowns)),
            ruined=bool(ruined_mask[-1]),
            ruin_round=ruin_round,
        )
    return summary
