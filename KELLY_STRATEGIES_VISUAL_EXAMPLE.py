#!/usr/bin/env python3
"""
Visual Example: Four Sizing Rules on One Coin
Full, half and double Kelly against a flat bet, all fed the same flips,
followed by a few crash rounds played on a virtual clock.
"""

import random

from engine.crash_engine import CrashEngine
from engine.kelly_math import compute_metrics
from engine.lab_params import build_parameters
from engine.round_simulator import STRATEGY_KEYS, simulate, summarize_trajectory
from engine.scheduling import ManualScheduler

print("=" * 70)
print("KELLY STRATEGIES - VISUAL DEMONSTRATION")
print("=" * 70)
print()

params = build_parameters(0.60, 2.0, 40)
metrics = compute_metrics(params.win_probability, params.decimal_odds)
print(f"p = {params.win_probability:.2f} | odds = {params.decimal_odds:.2f} | b = {metrics.net_odds:.2f}")
print(f"f* = {metrics.optimal_fraction * 100:.1f}% | edge = {metrics.edge * 100:+.1f}% per unit")
print()

# Scenario 1: one shared path
print("SCENARIO 1: Same flips, different bet sizes")
print("-" * 70)
trajectory = simulate(params, rng=random.Random(7))
print(f"{'Round':>5} {'Flip':>5} {'Full':>10} {'Half':>10} {'Double':>10} {'Fixed':>10}")
for snap in trajectory[::5]:
    flip = snap.outcome.value if snap.outcome else "-"
    print(f"{snap.round:>5} {flip:>5} {snap.full_kelly:>10.2f} {snap.half_kelly:>10.2f} "
          f"{snap.double_kelly:>10.2f} {snap.fixed_bet:>10.2f}")
print()

print("SUMMARY")
print("-" * 70)
for key, stats in summarize_trajectory(trajectory).items():
    ruin = f"ruined at round {stats.ruin_round}" if stats.ruin_round is not None else "alive"
    print(f"{key:<13} final ${stats.final_wealth:>9.2f} | peak ${stats.peak_wealth:>9.2f} "
          f"| max DD {stats.max_drawdown * 100:>5.1f}% | {ruin}")
print()

# Scenario 2: crash rounds on a manual clock
print("SCENARIO 2: Crash rounds, auto cash-out at 2.00x")
print("-" * 70)
clock = ManualScheduler()
engine = CrashEngine(clock, bankroll=1000.0, bet_amount=50.0, target_multiplier=2.0, rng=random.Random(3))
advice = engine.analysis()
print(f"Implied p = {advice.implied_win_probability:.3f} | f* = {advice.optimal_fraction * 100:+.2f}% "
      f"| suggested bet ${advice.suggested_bet:.2f}")
for _ in range(6):
    engine.start()
    clock.run_until_idle(step=0.25)
    last = engine.history[0]
    print(f"Round {last.id}: crash {last.crash_point:>6.2f}x → {last.result.value:<7} "
          f"| profit ${last.profit:>+7.2f} | bankroll ${engine.state.bankroll:.2f}")

print()
print("=" * 70)
print("KEY TAKEAWAYS:")
print("=" * 70)
print("✓ Full Kelly maximises long-run growth but swings hard")
print("✓ Half Kelly gives up a little growth for much smaller drawdowns")
print("✓ Double Kelly over-bets: same flips, worse outcome, often ruin")
print("✓ Crash game: the 1% house edge makes f* negative at every target")
print(f"  Strategies compared: {', '.join(STRATEGY_KEYS)}")
print("=" * 70)
