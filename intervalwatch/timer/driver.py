"""Qt wall-clock driver for ``WorkoutTimerEngine``.

The engine only knows about ticks.  ``TickDriver`` owns a 1 s ``QTimer``,
runs it exactly while the engine is running, and re-publishes engine
signals as pyqtSignals so widgets and services can connect to them.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .engine import WorkoutTimerEngine, TimerSignal, SignalKind

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TickDriver(QObject):
    """Drives a ``WorkoutTimerEngine`` from the Qt event loop.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every consumed tick with the active countdown.
    state_changed(phase: Phase)
        Emitted after every intent or tick.
    round_completed(when: datetime)
        A work round reached zero (final round included).
    halfway(round_number: int)
        Half of the work round is left.
    round_started(round_number: int)
        A new work round began after a rest or straight after work.
    rest_began(round_number: int)
        Rest after *round_number* started.
    workout_completed(summary: WorkoutSummary)
        The last round finished.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    round_completed = pyqtSignal(object)
    halfway = pyqtSignal(int)
    round_started = pyqtSignal(int)
    rest_began = pyqtSignal(int)
    workout_completed = pyqtSignal(object)

    def __init__(
        self,
        engine: WorkoutTimerEngine | None = None,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._engine = engine or WorkoutTimerEngine()
        self._engine.add_listener(self._dispatch)
        self._engine.add_observer(self._on_engine_changed)

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    @property
    def engine(self) -> WorkoutTimerEngine:
        return self._engine

    @property
    def is_ticking(self) -> bool:
        """True while the QTimer is active."""
        return self._qt_timer.isActive()

    # ── intents ───────────────────────────────────────────────────────

    def set_timer(self, seconds: int, label: str | None = None) -> None:
        self._engine.set_timer(seconds, label)

    def start(self) -> None:
        self._engine.start()

    def pause(self) -> None:
        self._engine.pause()

    def reset(self) -> None:
        self._engine.reset()

    def nudge(self, delta: int) -> None:
        self._engine.nudge(delta)

    def shutdown(self) -> None:
        """Stop the clock and detach from the engine."""
        self._qt_timer.stop()
        self._engine.remove_listener(self._dispatch)
        self._engine.remove_observer(self._on_engine_changed)

    # ── internal ──────────────────────────────────────────────────────

    def _on_tick(self) -> None:
        self._engine.tick()
        self.tick.emit(self._engine.active_remaining)

    def _on_engine_changed(self, engine: WorkoutTimerEngine) -> None:
        # The QTimer is the subscription; keep it in step with the engine.
        if engine.is_running and not self._qt_timer.isActive():
            self._qt_timer.start()
        elif not engine.is_running and self._qt_timer.isActive():
            self._qt_timer.stop()
        self.state_changed.emit(engine.phase)

    def _dispatch(self, signal: TimerSignal) -> None:
        kind = signal.kind
        if kind == SignalKind.ROUND_COMPLETED:
            self.round_completed.emit(signal.timestamp)
        elif kind == SignalKind.HALFWAY:
            self.halfway.emit(signal.round_number)
        elif kind == SignalKind.ROUND_START:
            self.round_started.emit(signal.round_number)
        elif kind == SignalKind.REST_BEGIN:
            self.rest_began.emit(signal.round_number)
        elif kind == SignalKind.WORKOUT_COMPLETE:
            self.workout_completed.emit(signal.summary)
        else:
            logger.warning("Unhandled timer signal %r", kind)
