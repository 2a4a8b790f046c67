"""Texts for the completion notifications.

Delivery (banner, sound, haptics) is up to the platform layer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notice:
    title: str
    body: str


ROUND_FINISHED = Notice("Round Finished", "Nice! Rest up or start next round.")
WORKOUT_COMPLETE = Notice("Workout Complete", "Great job! All rounds are done.")


def completion_notice(is_final: bool) -> Notice:
    return WORKOUT_COMPLETE if is_final else ROUND_FINISHED
