"""
Test script for input-boundary clamping
"""

from engine.lab_params import (
    build_parameters, clamp_bet_amount, clamp_decimal_odds, clamp_target_multiplier,
    clamp_total_rounds, clamp_win_probability,
    DEFAULT_BET_AMOUNT, DEFAULT_DECIMAL_ODDS, DEFAULT_TARGET_MULTIPLIER,
    DEFAULT_TOTAL_ROUNDS, DEFAULT_WIN_PROBABILITY, MAX_TOTAL_ROUNDS,
)


def test_win_probability_bounds():
    assert clamp_win_probability(0.0) == 0.01
    assert clamp_win_probability(1.0) == 0.99
    assert clamp_win_probability(0.42) == 0.42
    assert clamp_win_probability("0.7") == 0.7
    assert clamp_win_probability("abc") == DEFAULT_WIN_PROBABILITY
    assert clamp_win_probability(float('nan')) == DEFAULT_WIN_PROBABILITY


def test_decimal_odds_never_reach_one():
    assert clamp_decimal_odds(1.0) == 1.05
    assert clamp_decimal_odds(0.5) == 1.05
    assert clamp_decimal_odds(25) == 10.0
    assert clamp_decimal_odds(None) == DEFAULT_DECIMAL_ODDS


def test_total_rounds():
    assert clamp_total_rounds(-5) == 0
    assert clamp_total_rounds(12.9) == 12
    assert clamp_total_rounds(10**9) == MAX_TOTAL_ROUNDS
    assert clamp_total_rounds(float('inf')) == MAX_TOTAL_ROUNDS
    assert clamp_total_rounds(None) == DEFAULT_TOTAL_ROUNDS


def test_crash_inputs():
    assert clamp_target_multiplier(1.0) == 1.01
    assert clamp_target_multiplier(3.5) == 3.5
    assert clamp_target_multiplier(None) == DEFAULT_TARGET_MULTIPLIER
    assert clamp_bet_amount(0) == DEFAULT_BET_AMOUNT
    assert clamp_bet_amount(-10) == DEFAULT_BET_AMOUNT
    assert clamp_bet_amount(75) == 75.0


def test_build_parameters():
    params = build_parameters(1.5, 1.0, "100", initial_wealth=-1)
    print(f"  {params}")
    assert params.win_probability == 0.99
    assert params.decimal_odds == 1.05
    assert params.total_rounds == 100
    assert params.initial_wealth == 1000.0

    defaults = build_parameters()
    assert defaults.win_probability == DEFAULT_WIN_PROBABILITY
    assert defaults.decimal_odds == DEFAULT_DECIMAL_ODDS


if __name__ == "__main__":
    test_win_probability_bounds()
    test_decimal_odds_never_reach_one()
    test_total_rounds()
    test_crash_inputs()
    test_build_parameters()
    print("\n✓ All parameter tests passed!")
