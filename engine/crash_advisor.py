from dataclasses import dataclass

from engine.kelly_math import kelly_fraction, stake_fraction
from engine.lab_params import HOUSE_EDGE_FACTOR


@dataclass(frozen=True)
class CrashAnalysis:
    implied_win_probability: float
    net_odds: float
    optimal_fraction: float
    suggested_bet: float


def analyze(target_multiplier: float, bankroll: float,
            house_edge_factor: float = HOUSE_EDGE_FACTOR) -> CrashAnalysis:
    """
    Kelly sizing for a crash cash-out target.
    P(win) = edge_factor / target, b = target - 1.
    With any house edge f* < 0, so the suggested bet is 0.
    """
    p = house_edge_factor / target_multiplier
    b = target_multiplier - 1.0
    f_star = kelly_fraction(p, b)
    return CrashAnalysis(
        implied_win_probability=p,
        net_odds=b,
        optimal_fraction=f_star,
        suggested_bet=bankroll * stake_fraction(f_star),
    )
