import math
from dataclasses import dataclass

# ==========================================
# ⚙️ LAB CONFIGURATION
# ==========================================

# 1. Round Simulator Defaults
DEFAULT_WIN_PROBABILITY = 0.60
DEFAULT_DECIMAL_ODDS = 2.0
DEFAULT_TOTAL_ROUNDS = 100
DEFAULT_INITIAL_WEALTH = 1000.0

# 2. Input Bounds (slider limits)
MIN_WIN_PROBABILITY = 0.01
MAX_WIN_PROBABILITY = 0.99
MIN_DECIMAL_ODDS = 1.05         # b must stay strictly positive
MAX_DECIMAL_ODDS = 10.0
MAX_TOTAL_ROUNDS = 1000

# 3. Strategy Rules
RUIN_THRESHOLD = 0.01           # below one cent a strategy stops betting
FIXED_BET_PCT = 0.05            # flat stake as a share of the STARTING wealth
HALF_KELLY_SCALE = 0.5
DOUBLE_KELLY_SCALE = 2.0
MAX_LEVERAGE = 1.0              # never stake more than 100% of current wealth

# 4. Playback
PLAYBACK_INTERVAL = 0.2         # seconds per revealed round

# 5. Crash Game
HOUSE_EDGE_FACTOR = 0.99        # 1% house edge
DEFAULT_BANKROLL = 1000.0
DEFAULT_BET_AMOUNT = 50.0
DEFAULT_TARGET_MULTIPLIER = 2.0
MIN_TARGET_MULTIPLIER = 1.01
FRAME_INTERVAL = 1 / 60         # one animation frame
HISTORY_LIMIT = 10


@dataclass(frozen=True)
class SimulationParameters:
    """
    Inputs for one Round Simulator run.
    Assumed valid: build them with build_parameters() at the input boundary.
    """
    win_probability: float = DEFAULT_WIN_PROBABILITY
    decimal_odds: float = DEFAULT_DECIMAL_ODDS
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    initial_wealth: float = DEFAULT_INITIAL_WEALTH


def _as_float(value, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return number


def clamp_win_probability(value) -> float:
    p = _as_float(value, DEFAULT_WIN_PROBABILITY)
    return min(MAX_WIN_PROBABILITY, max(MIN_WIN_PROBABILITY, p))


def clamp_decimal_odds(value) -> float:
    d = _as_float(value, DEFAULT_DECIMAL_ODDS)
    return min(MAX_DECIMAL_ODDS, max(MIN_DECIMAL_ODDS, d))


def clamp_total_rounds(value) -> int:
    n = _as_float(value, DEFAULT_TOTAL_ROUNDS)
    if math.isinf(n):
        n = MAX_TOTAL_ROUNDS if n > 0 else 0
    return min(MAX_TOTAL_ROUNDS, max(0, int(n)))


def clamp_target_multiplier(value) -> float:
    m = _as_float(value, DEFAULT_TARGET_MULTIPLIER)
    if math.isinf(m):
        return DEFAULT_TARGET_MULTIPLIER
    return max(MIN_TARGET_MULTIPLIER, m)


def clamp_bet_amount(value) -> float:
    """Non-positive or non-numeric bets fall back to the default stake."""
    bet = _as_float(value, DEFAULT_BET_AMOUNT)
    if bet <= 0 or math.isinf(bet):
        return DEFAULT_BET_AMOUNT
    return bet


def build_parameters(win_probability=None, decimal_odds=None, total_rounds=None,
                     initial_wealth: float = DEFAULT_INITIAL_WEALTH) -> SimulationParameters:
    """
    Builds SimulationParameters from raw UI values.
    Every field is clamped into range so the engine never sees b <= 0.
    """
    wealth = _as_float(initial_wealth, DEFAULT_INITIAL_WEALTH)
    if wealth <= 0 or math.isinf(wealth):
        wealth = DEFAULT_INITIAL_WEALTH
    return SimulationParameters(
        win_probability=clamp_win_probability(win_probability),
        decimal_odds=clamp_decimal_odds(decimal_odds),
        total_rounds=clamp_total_rounds(total_rounds),
        initial_wealth=wealth,
    )
