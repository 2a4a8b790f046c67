"""Workout history and custom presets.

History keeps the 20 most recent saved workouts; custom presets keep the
6 most recently saved durations.  Both live in the SQLite database.

``HistoryRecorder`` hooks a ``WorkoutTimerEngine`` and turns its
``WORKOUT_COMPLETE`` signal into a history entry, either straight away
(``auto_save=True``) or when the user confirms with ``save()``.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .database.db import get_session
from .database.models import HistoryItem, CustomPreset
from .timer.engine import WorkoutTimerEngine, TimerSignal, SignalKind
from .timer.summary import WorkoutSummary

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20
CUSTOM_PRESET_LIMIT = 6


# ══════════════════════════════════════════════════════════════════════
#  HISTORY
# ══════════════════════════════════════════════════════════════════════


def append_history(
    label: str, seconds: int, when: datetime | None = None,
) -> HistoryItem:
    """Insert an entry at the front and drop anything past the limit."""
    with get_session() as db:
        item = HistoryItem(
            when=when or datetime.now(),
            label=label,
            seconds=max(0, int(seconds)),
        )
        db.add(item)
        db.flush()

        stale = (
            db.query(HistoryItem)
            .order_by(HistoryItem.when.desc(), HistoryItem.id.desc())
            .offset(HISTORY_LIMIT)
            .all()
        )
        for old in stale:
            db.delete(old)

    logger.info("History: %s (%ds)", label, seconds)
    return item


def save_summary(summary: WorkoutSummary) -> HistoryItem:
    return append_history(
        summary.history_label(), summary.total_seconds, when=summary.date,
    )


def recent_history(limit: int = 5) -> list[HistoryItem]:
    """Newest first."""
    with get_session() as db:
        return (
            db.query(HistoryItem)
            .order_by(HistoryItem.when.desc(), HistoryItem.id.desc())
            .limit(limit)
            .all()
        )


def clear_history() -> int:
    with get_session() as db:
        count = db.query(HistoryItem).delete()
    logger.info("History cleared (%d entries)", count)
    return count


# ══════════════════════════════════════════════════════════════════════
#  CUSTOM PRESETS
# ══════════════════════════════════════════════════════════════════════


def save_custom_preset(name: str, seconds: int) -> CustomPreset | None:
    """Remember a custom duration.  Zero-length presets are ignored."""
    if seconds <= 0:
        return None
    with get_session() as db:
        preset = CustomPreset(name=name, seconds=int(seconds))
        db.add(preset)
        db.flush()

        stale = (
            db.query(CustomPreset)
            .order_by(CustomPreset.created_at.desc(), CustomPreset.id.desc())
            .offset(CUSTOM_PRESET_LIMIT)
            .all()
        )
        for old in stale:
            db.delete(old)
    return preset


def list_custom_presets() -> list[CustomPreset]:
    with get_session() as db:
        return (
            db.query(CustomPreset)
            .order_by(CustomPreset.created_at.desc(), CustomPreset.id.desc())
            .all()
        )


def delete_custom_preset(preset_id: int) -> bool:
    with get_session() as db:
        preset = db.get(CustomPreset, preset_id)
        if preset is None:
            return False
        db.delete(preset)
    return True


# ══════════════════════════════════════════════════════════════════════
#  RECORDER
# ══════════════════════════════════════════════════════════════════════


class HistoryRecorder:
    """Collects the summary of each finished workout for the history list."""

    def __init__(self, engine: WorkoutTimerEngine, *, auto_save: bool = False) -> None:
        self._engine = engine
        self.auto_save = auto_save
        self.pending: WorkoutSummary | None = None
        engine.add_listener(self._on_signal)

    def detach(self) -> None:
        self._engine.remove_listener(self._on_signal)

    def save(self) -> HistoryItem | None:
        """Persist the pending summary ("Save to History")."""
        if self.pending is None:
            return None
        item = save_summary(self.pending)
        self.pending = None
        return item

    def discard(self) -> None:
        self.pending = None

    def _on_signal(self, signal: TimerSignal) -> None:
        if signal.kind != SignalKind.WORKOUT_COMPLETE or signal.summary is None:
            return
        self.pending = signal.summary
        if self.auto_save:
            self.save()
