"""Interval workout state machine for IntervalWatch.

Phases
------
IDLE       Configured (or empty) and waiting for ``start()``.
WORKING    Work countdown for the current round.
RESTING    Rest countdown for the gap between two rounds.
FINISHED   Every round done; a ``WorkoutSummary`` is available.

Transitions
-----------
IDLE → WORKING                         (start, work remaining > 0)
WORKING → RESTING                      (work hits 0, more rounds, rest > 0)
WORKING → WORKING (next round)         (work hits 0, more rounds, no rest)
RESTING → WORKING (next round)         (rest hits 0)
WORKING → FINISHED                     (work hits 0 on the last round)
Any → IDLE                             (set_timer / reset)

The engine owns no clock.  Something outside (see ``driver.TickDriver``)
calls ``tick()`` once per elapsed second while ``is_running`` is True.
Each tick returns the ``TimerSignal`` values it raised; registered
listeners receive the same values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from .summary import WorkoutSummary, CUSTOM_LABEL

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    WORKING = "working"
    RESTING = "resting"
    FINISHED = "finished"


class SignalKind(Enum):
    ROUND_COMPLETED = "round_completed"
    HALFWAY = "halfway"
    ROUND_START = "round_start"
    REST_BEGIN = "rest_begin"
    WORKOUT_COMPLETE = "workout_complete"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_ROUNDS = 1
DEFAULT_REST_SECONDS = 20
NUDGE_SECONDS = 10  # the -10s / +10s buttons


@dataclass(frozen=True)
class TimerSignal:
    """One event raised by ``tick()``."""

    kind: SignalKind
    round_number: int
    timestamp: datetime | None = None
    summary: WorkoutSummary | None = None


Listener = Callable[[TimerSignal], None]
Observer = Callable[["WorkoutTimerEngine"], None]


# ── engine ────────────────────────────────────────────────────────────────


class WorkoutTimerEngine:
    """Work/rest round countdown with halfway alerts and nudging.

    All inputs are clamped rather than rejected, so no intent raises.
    """

    def __init__(
        self,
        *,
        rounds_total: int = DEFAULT_ROUNDS,
        rest_seconds: int = DEFAULT_REST_SECONDS,
        halfway_enabled: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        # ── configuration ─────────────────────────────────────────────
        self._configured_seconds: int = 0  # last set_timer value
        self._work_seconds: int = 0        # grows with nudge()
        self._rounds_total: int = max(1, int(rounds_total))
        self._rest_seconds: int = max(0, int(rest_seconds))
        self._halfway_enabled: bool = bool(halfway_enabled)
        self._preset_label: str | None = None

        # ── run state ─────────────────────────────────────────────────
        self._phase: Phase = Phase.IDLE
        self._remaining_work: int = 0
        self._remaining_rest: int = 0
        self._round: int = 1
        self._halfway_fired: bool = False
        self._running: bool = False
        self._summary: WorkoutSummary | None = None

        self._clock = clock
        self._listeners: list[Listener] = []
        self._observers: list[Observer] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_resting(self) -> bool:
        return self._phase == Phase.RESTING

    @property
    def remaining_work_seconds(self) -> int:
        return self._remaining_work

    @property
    def remaining_rest_seconds(self) -> int:
        return self._remaining_rest

    @property
    def active_remaining(self) -> int:
        """Countdown the display should show right now."""
        return self._remaining_rest if self.is_resting else self._remaining_work

    @property
    def work_seconds_per_round(self) -> int:
        return self._work_seconds

    @property
    def current_round(self) -> int:
        return self._round

    @property
    def preset_label(self) -> str | None:
        return self._preset_label

    @property
    def summary(self) -> WorkoutSummary | None:
        """Set at the FINISHED transition, cleared by set_timer/reset/start."""
        return self._summary

    @property
    def rounds_total(self) -> int:
        return self._rounds_total

    @rounds_total.setter
    def rounds_total(self, value: int) -> None:
        self.set_rounds_total(value)

    @property
    def rest_seconds_per_gap(self) -> int:
        return self._rest_seconds

    @rest_seconds_per_gap.setter
    def rest_seconds_per_gap(self, value: int) -> None:
        self.set_rest_seconds(value)

    @property
    def halfway_enabled(self) -> bool:
        return self._halfway_enabled

    @halfway_enabled.setter
    def halfway_enabled(self, value: bool) -> None:
        self.set_halfway_enabled(value)

    @property
    def progress_remaining(self) -> float:
        """1.0 → 0.0 fraction of the active phase still to go."""
        if self.is_resting:
            total, left = self._rest_seconds, self._remaining_rest
        else:
            total, left = self._work_seconds, self._remaining_work
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, left / total))

    @property
    def is_effectively_zero(self) -> bool:
        """True when the active countdown is at 0 (Start has nothing to do)."""
        return self.active_remaining == 0

    # ══════════════════════════════════════════════════════════════════
    #  OBSERVERS
    # ══════════════════════════════════════════════════════════════════

    def add_listener(self, fn: Listener) -> None:
        """Receive every ``TimerSignal`` raised by ``tick()``."""
        self._listeners.append(fn)

    def remove_listener(self, fn: Listener) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def add_observer(self, fn: Observer) -> None:
        """Called with the engine after every intent or tick that changes state."""
        self._observers.append(fn)

    def remove_observer(self, fn: Observer) -> None:
        if fn in self._observers:
            self._observers.remove(fn)

    # ══════════════════════════════════════════════════════════════════
    #  CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    def set_rounds_total(self, rounds: int) -> None:
        """Never drops below the round already reached."""
        self._rounds_total = max(1, self._round, int(rounds))
        self._notify()

    def set_rest_seconds(self, seconds: int) -> None:
        self._rest_seconds = max(0, int(seconds))
        self._notify()

    def set_halfway_enabled(self, enabled: bool) -> None:
        self._halfway_enabled = bool(enabled)
        self._notify()

    # ══════════════════════════════════════════════════════════════════
    #  INTENTS
    # ══════════════════════════════════════════════════════════════════

    def set_timer(self, seconds: int, label: str | None = None) -> None:
        """Configure a fresh workout of *seconds* per round.  Valid anytime."""
        self._running = False
        clamped = max(0, int(seconds))
        self._configured_seconds = clamped
        self._work_seconds = clamped
        self._remaining_work = clamped
        self._remaining_rest = 0
        self._preset_label = label
        self._round = 1
        self._halfway_fired = False
        self._summary = None
        self._phase = Phase.IDLE
        logger.debug("Timer set to %ds (label=%r)", clamped, label)
        self._notify()

    def start(self) -> None:
        """Begin or resume counting.  No-op with nothing to run or if running."""
        if self._running or self.is_effectively_zero:
            return
        self._running = True
        if self._phase == Phase.FINISHED:
            self._summary = None
        if self._phase != Phase.RESTING:
            self._phase = Phase.WORKING
        logger.debug("Started in %s, round %d", self._phase.value, self._round)
        self._notify()

    def pause(self) -> None:
        """Stop consuming ticks; all countdowns and the phase are kept."""
        if not self._running:
            return
        self._running = False
        logger.debug("Paused with %ds left", self.active_remaining)
        self._notify()

    def stop(self) -> None:
        self.pause()

    def reset(self) -> None:
        """Back to IDLE with the last configured duration and round 1."""
        self._running = False
        self._remaining_rest = 0
        self._summary = None
        self._work_seconds = self._configured_seconds
        self._remaining_work = self._configured_seconds
        self._round = 1
        self._halfway_fired = False
        self._phase = Phase.IDLE
        self._notify()

    def nudge(self, delta: int = NUDGE_SECONDS) -> None:
        """Add (or with a negative *delta*, remove) work time.  Ignored while resting."""
        if self.is_resting:
            return
        self._remaining_work = max(0, self._remaining_work + int(delta))
        if self._remaining_work > self._work_seconds:
            self._work_seconds = self._remaining_work
        if (
            self._work_seconds > 0
            and self._remaining_work / self._work_seconds > 0.5
        ):
            self._halfway_fired = False
        logger.debug(
            "Nudged %+ds → %d/%ds", delta, self._remaining_work, self._work_seconds,
        )
        self._notify()

    def tick(self) -> list[TimerSignal]:
        """Advance one second.  Returns the signals raised (maybe none)."""
        if not self._running:
            return []

        signals: list[TimerSignal] = []
        if self._phase == Phase.RESTING:
            self._tick_rest(signals)
        else:
            self._tick_work(signals)

        for signal in signals:
            for fn in list(self._listeners):
                fn(signal)
        self._notify()
        return signals

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _tick_rest(self, signals: list[TimerSignal]) -> None:
        if self._remaining_rest > 0:
            self._remaining_rest -= 1
        if self._remaining_rest > 0:
            return

        if self._round < self._rounds_total:
            self._begin_next_round(signals)
        else:
            # Rounds were lowered while resting; nothing left to run.
            logger.warning(
                "Rest ended on round %d of %d; stopping",
                self._round, self._rounds_total,
            )
            self._running = False
            self._phase = Phase.IDLE

    def _tick_work(self, signals: list[TimerSignal]) -> None:
        if self._remaining_work > 0:
            self._remaining_work -= 1

            half = self._work_seconds // 2
            if (
                self._halfway_enabled
                and self._work_seconds > 0
                and not self._halfway_fired
                and self._remaining_work == half
            ):
                self._halfway_fired = True
                signals.append(TimerSignal(SignalKind.HALFWAY, self._round))

        if self._remaining_work > 0:
            return

        now = self._clock()
        signals.append(
            TimerSignal(SignalKind.ROUND_COMPLETED, self._round, timestamp=now)
        )

        if self._round < self._rounds_total:
            if self._rest_seconds > 0:
                self._phase = Phase.RESTING
                self._remaining_rest = self._rest_seconds
                signals.append(TimerSignal(SignalKind.REST_BEGIN, self._round))
            else:
                self._begin_next_round(signals)
            return

        self._finish(now, signals)

    def _begin_next_round(self, signals: list[TimerSignal]) -> None:
        self._round += 1
        self._remaining_rest = 0
        self._remaining_work = self._work_seconds
        self._halfway_fired = False
        self._phase = Phase.WORKING
        signals.append(TimerSignal(SignalKind.ROUND_START, self._round))

    def _finish(self, now: datetime, signals: list[TimerSignal]) -> None:
        self._running = False
        self._phase = Phase.FINISHED
        self._summary = WorkoutSummary(
            date=now,
            preset_name=self._preset_label or CUSTOM_LABEL,
            work_seconds_per_round=self._work_seconds,
            rounds=self._rounds_total,
            rest_seconds_per_gap=self._rest_seconds,
        )
        logger.info(
            "Workout finished: %s (%ds total)",
            self._summary.history_label(), self._summary.total_seconds,
        )
        signals.append(TimerSignal(
            SignalKind.WORKOUT_COMPLETE,
            self._round,
            timestamp=now,
            summary=self._summary,
        ))

    def _notify(self) -> None:
        for fn in list(self._observers):
            fn(self)
