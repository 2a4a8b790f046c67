"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/IntervalWatch/settings.json

Usage::

    settings = load_settings()
    settings.rounds_total = 3
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .presets import custom_seconds

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalWatch"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── custom duration sheet ─────────────────────────────────────────
    custom_hours: int = 0
    custom_minutes: int = 0
    custom_seconds: int = 20

    # ── workout ───────────────────────────────────────────────────────
    rounds_total: int = 1
    rest_seconds: int = 20
    halfway_enabled: bool = False
    last_preset: str | None = None

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    def __post_init__(self) -> None:
        self.rounds_total = max(1, int(self.rounds_total))
        self.rest_seconds = max(0, int(self.rest_seconds))

    @property
    def custom_total_seconds(self) -> int:
        return custom_seconds(
            self.custom_hours, self.custom_minutes, self.custom_seconds,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
    logger.debug("Settings saved to %s", SETTINGS_PATH)
