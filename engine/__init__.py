from .lab_params import SimulationParameters, build_parameters
from .kelly_math import KellyMetrics, compute_metrics
from .round_simulator import RoundSnapshot, Outcome, simulate, summarize_trajectory
from .playback import PlaybackCursor, PlaybackController
from .crash_engine import CrashEngine, CrashPhase, CrashRoundState, CrashHistoryEntry
from .crash_advisor import CrashAnalysis, analyze
from .scheduling import ManualScheduler
