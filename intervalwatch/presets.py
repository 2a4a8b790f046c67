"""Built-in presets, the custom h/m/s picker and clock formatting."""

from __future__ import annotations

from dataclasses import dataclass

from .timer.summary import CUSTOM_LABEL


@dataclass(frozen=True)
class Preset:
    name: str
    seconds: int


BUILTIN_PRESETS: tuple[Preset, ...] = (
    Preset("20 sec", 20),
    Preset("1 min", 60),
    Preset("5 min", 5 * 60),
    Preset("10 min", 10 * 60),
)

# Picker ranges of the custom-duration sheet
MAX_CUSTOM_HOURS = 5
MAX_CUSTOM_MINUTES = 59
MAX_CUSTOM_SECONDS = 59


def find_preset(name: str) -> Preset | None:
    """Case-insensitive lookup among the built-ins."""
    wanted = name.strip().lower()
    for preset in BUILTIN_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None


def custom_seconds(hours: int, minutes: int, seconds: int) -> int:
    """Total seconds for a custom timer, each field clamped to its picker."""
    h = max(0, min(MAX_CUSTOM_HOURS, int(hours)))
    m = max(0, min(MAX_CUSTOM_MINUTES, int(minutes)))
    s = max(0, min(MAX_CUSTOM_SECONDS, int(seconds)))
    return h * 3600 + m * 60 + s


def format_clock(seconds: int) -> str:
    """``75`` → ``"1:15"``, ``3725`` → ``"1:02:05"``."""
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


__all__ = [
    "Preset",
    "BUILTIN_PRESETS",
    "CUSTOM_LABEL",
    "find_preset",
    "custom_seconds",
    "format_clock",
]
