"""Shared test helpers for IntervalWatch."""

from datetime import datetime

from intervalwatch.timer.engine import WorkoutTimerEngine, SignalKind

FIXED_NOW = datetime(2026, 3, 14, 9, 30, 0)


class SignalCollector:
    """Utility to capture pyqtSignal emissions (or engine signals) into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def of_kind(self, kind: SignalKind) -> list:
        return [s for s in self.items if getattr(s, "kind", None) == kind]

    def clear(self):
        self.items.clear()


def run_ticks(engine: WorkoutTimerEngine, count: int) -> list:
    """Tick *count* times and return every signal raised, in order."""
    raised = []
    for _ in range(count):
        raised.extend(engine.tick())
    return raised
