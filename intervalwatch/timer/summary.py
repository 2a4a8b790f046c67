"""End-of-workout summary record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

CUSTOM_LABEL = "Custom"


@dataclass(frozen=True)
class WorkoutSummary:
    """Snapshot taken when the last round's work reaches zero.

    Rest is only counted between rounds, never after the final one.
    """

    date: datetime
    preset_name: str
    work_seconds_per_round: int
    rounds: int
    rest_seconds_per_gap: int

    @property
    def total_work_seconds(self) -> int:
        return self.work_seconds_per_round * self.rounds

    @property
    def total_rest_seconds(self) -> int:
        return max(0, self.rounds - 1) * self.rest_seconds_per_gap

    @property
    def total_seconds(self) -> int:
        return self.total_work_seconds + self.total_rest_seconds

    def history_label(self) -> str:
        """e.g. ``"1 min ×3 + rest 20s"``."""
        rest = (
            f" + rest {self.rest_seconds_per_gap}s"
            if self.rest_seconds_per_gap > 0 else ""
        )
        return f"{self.preset_name} ×{self.rounds}{rest}"
