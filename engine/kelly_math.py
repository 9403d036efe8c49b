import math
from dataclasses import dataclass


@dataclass(frozen=True)
class KellyMetrics:
    optimal_fraction: float  # f*, negative means "do not bet"
    edge: float              # expected profit per unit staked
    net_odds: float          # b = decimal odds - 1


def kelly_fraction(win_probability: float, net_odds: float) -> float:
    """
    Full Kelly fraction f* = (b*p - q) / b for a binary bet.
    Returns nan for b == 0 instead of raising.
    """
    q = 1.0 - win_probability
    if net_odds == 0:
        return float('nan')
    return (net_odds * win_probability - q) / net_odds


def compute_metrics(win_probability: float, decimal_odds: float) -> KellyMetrics:
    b = decimal_odds - 1.0
    q = 1.0 - win_probability
    return KellyMetrics(
        optimal_fraction=kelly_fraction(win_probability, b),
        edge=win_probability * b - q,
        net_odds=b,
    )


def stake_fraction(optimal_fraction: float) -> float:
    """Clamps f* to a bettable fraction: negative or undefined means 0."""
    if math.isnan(optimal_fraction) or optimal_fraction < 0:
        return 0.0
    return optimal_fraction
