"""Timer package."""

from .engine import (
    WorkoutTimerEngine,
    Phase,
    SignalKind,
    TimerSignal,
    DEFAULT_ROUNDS,
    DEFAULT_REST_SECONDS,
    NUDGE_SECONDS,
)
from .summary import WorkoutSummary, CUSTOM_LABEL

__all__ = [
    "WorkoutTimerEngine",
    "Phase",
    "SignalKind",
    "TimerSignal",
    "WorkoutSummary",
    "CUSTOM_LABEL",
    "DEFAULT_ROUNDS",
    "DEFAULT_REST_SECONDS",
    "NUDGE_SECONDS",
]
