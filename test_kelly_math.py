"""
Test script for the Kelly Metrics Calculator
Validates f*, edge and net odds against the closed-form formula
"""

import math
import pytest

from engine.kelly_math import compute_metrics, kelly_fraction, stake_fraction


def test_reference_example():
    """p=0.6, odds=2.0 -> b=1, f*=0.2, edge=0.2"""
    print("=" * 60)
    print("TEST: Reference Example (p=0.60, odds=2.00)")
    print("=" * 60)

    m = compute_metrics(0.6, 2.0)
    print(f"  b={m.net_odds:.4f} | f*={m.optimal_fraction:.4f} | edge={m.edge:.4f}")

    assert m.net_odds == pytest.approx(1.0)
    assert m.optimal_fraction == pytest.approx(0.2)
    assert m.edge == pytest.approx(0.2)
    print("✓ Reference example matches")


def test_formula_across_grid():
    """f* and edge follow the closed form for a spread of inputs"""
    for p in (0.05, 0.3, 0.5, 0.55, 0.8, 0.95):
        for d in (1.05, 1.5, 2.0, 3.7, 10.0):
            b = d - 1
            m = compute_metrics(p, d)
            assert m.optimal_fraction == pytest.approx((p * b - (1 - p)) / b)
            assert m.edge == pytest.approx(p * b - (1 - p))
            assert m.net_odds == pytest.approx(b)
    print("✓ Closed form holds across the grid")


def test_negative_edge_means_no_bet():
    m = compute_metrics(0.4, 2.0)
    print(f"  p=0.40 odds=2.00 -> f*={m.optimal_fraction:.4f}")
    assert m.optimal_fraction < 0
    assert m.edge < 0
    assert stake_fraction(m.optimal_fraction) == 0.0


def test_degenerate_odds_do_not_raise():
    """b = 0 yields nan, which the stake clamp turns into 'do not bet'"""
    m = compute_metrics(0.6, 1.0)
    assert m.net_odds == 0
    assert math.isnan(m.optimal_fraction)
    assert math.isnan(kelly_fraction(0.6, 0.0))
    assert stake_fraction(m.optimal_fraction) == 0.0
    print("✓ Degenerate odds guarded")


def test_stake_fraction_passes_positive_values():
    assert stake_fraction(0.25) == 0.25
    assert stake_fraction(0.0) == 0.0


if __name__ == "__main__":
    test_reference_example()
    test_formula_across_grid()
    test_negative_edge_means_no_bet()
    test_degenerate_odds_do_not_raise()
    test_stake_fraction_passes_positive_values()
    print("\n✓ All Kelly math tests passed!")
