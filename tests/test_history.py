"""Tests for workout history, custom presets and the history recorder."""

from datetime import datetime, timedelta

import pytest

from intervalwatch.database.db import configure_engine, get_session, init_db
from intervalwatch.database.models import HistoryItem, CustomPreset
from intervalwatch.history import (
    HISTORY_LIMIT,
    CUSTOM_PRESET_LIMIT,
    HistoryRecorder,
    append_history,
    clear_history,
    delete_custom_preset,
    list_custom_presets,
    recent_history,
    save_custom_preset,
    save_summary,
)
from intervalwatch.timer.summary import WorkoutSummary

from helpers import FIXED_NOW, run_ticks


# ═══════════════════════════════════════════════════════════════════════
#  HISTORY
# ═══════════════════════════════════════════════════════════════════════


class TestHistory:

    def test_append_and_read(self):
        append_history("1 min ×1", 60)
        items = recent_history()
        assert len(items) == 1
        assert items[0].label == "1 min ×1"
        assert items[0].seconds == 60

    def test_newest_first(self):
        base = datetime(2026, 1, 1, 8, 0)
        for i in range(3):
            append_history(f"w{i}", 10, when=base + timedelta(minutes=i))
        assert [h.label for h in recent_history()] == ["w2", "w1", "w0"]

    def test_recent_limit(self):
        for i in range(8):
            append_history(f"w{i}", 10)
        assert len(recent_history()) == 5
        assert len(recent_history(limit=7)) == 7

    def test_history_capped(self):
        base = datetime(2026, 1, 1, 8, 0)
        for i in range(HISTORY_LIMIT + 5):
            append_history(f"w{i}", 10, when=base + timedelta(minutes=i))
        with get_session() as db:
            assert db.query(HistoryItem).count() == HISTORY_LIMIT
        newest = recent_history(limit=HISTORY_LIMIT)
        assert newest[0].label == f"w{HISTORY_LIMIT + 4}"
        assert newest[-1].label == "w5"

    def test_clear_history(self):
        append_history("a", 1)
        append_history("b", 2)
        assert clear_history() == 2
        assert recent_history() == []

    def test_save_summary(self):
        summary = WorkoutSummary(FIXED_NOW, "1 min", 60, 3, 20)
        save_summary(summary)
        item = recent_history()[0]
        assert item.label == "1 min ×3 + rest 20s"
        assert item.seconds == 220
        assert item.when == FIXED_NOW


# ═══════════════════════════════════════════════════════════════════════
#  CUSTOM PRESETS
# ═══════════════════════════════════════════════════════════════════════


class TestCustomPresets:

    def test_save_and_list(self):
        save_custom_preset("Tabata", 20)
        presets = list_custom_presets()
        assert [(p.name, p.seconds) for p in presets] == [("Tabata", 20)]

    def test_zero_seconds_ignored(self):
        assert save_custom_preset("Empty", 0) is None
        assert list_custom_presets() == []

    def test_capped_to_newest(self):
        for i in range(CUSTOM_PRESET_LIMIT + 2):
            save_custom_preset(f"p{i}", 10 + i)
        presets = list_custom_presets()
        assert len(presets) == CUSTOM_PRESET_LIMIT
        assert presets[0].name == f"p{CUSTOM_PRESET_LIMIT + 1}"

    def test_delete(self):
        preset = save_custom_preset("Gone", 30)
        assert delete_custom_preset(preset.id) is True
        with get_session() as db:
            assert db.query(CustomPreset).count() == 0

    def test_delete_missing(self):
        assert delete_custom_preset(999) is False


# ═══════════════════════════════════════════════════════════════════════
#  RECORDER
# ═══════════════════════════════════════════════════════════════════════


class TestHistoryRecorder:

    def _finish(self, engine, seconds=3):
        engine.set_timer(seconds, "20 sec")
        engine.start()
        run_ticks(engine, seconds)

    def test_pending_until_saved(self, engine):
        recorder = HistoryRecorder(engine)
        self._finish(engine)
        assert recorder.pending is engine.summary
        assert recent_history() == []

        item = recorder.save()
        assert item.label == "20 sec ×1"
        assert recorder.pending is None
        assert len(recent_history()) == 1

    def test_auto_save(self, engine):
        HistoryRecorder(engine, auto_save=True)
        self._finish(engine)
        assert [h.seconds for h in recent_history()] == [3]

    def test_save_without_pending(self, engine):
        recorder = HistoryRecorder(engine)
        assert recorder.save() is None

    def test_discard(self, engine):
        recorder = HistoryRecorder(engine)
        self._finish(engine)
        recorder.discard()
        assert recorder.save() is None
        assert recent_history() == []

    def test_round_completion_alone_not_recorded(self, engine):
        recorder = HistoryRecorder(engine, auto_save=True)
        engine.rounds_total = 2
        engine.set_timer(2)
        engine.start()
        run_ticks(engine, 2)
        assert recorder.pending is None
        assert recent_history() == []

    def test_detach(self, engine):
        recorder = HistoryRecorder(engine, auto_save=True)
        recorder.detach()
        self._finish(engine)
        assert recent_history() == []


class TestDatabase:

    def test_configure_engine_points_at_new_url(self, tmp_path):
        path = tmp_path / "history.db"
        configure_engine(f"sqlite:///{path}")
        init_db()
        append_history("file", 30)
        assert path.exists()
        assert [h.label for h in recent_history()] == ["file"]

        configure_engine("sqlite:///:memory:")
        init_db()
        assert recent_history() == []

    def test_failed_write_rolls_back(self):
        with pytest.raises(RuntimeError):
            with get_session() as db:
                db.add(HistoryItem(label="lost", seconds=1))
                db.flush()
                raise RuntimeError("boom")
        assert recent_history() == []
