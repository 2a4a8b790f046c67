"""Allow running IntervalWatch as a module: python -m intervalwatch.

Headless runner: drives one workout from the Qt event loop and prints
progress to the terminal.
"""

from __future__ import annotations

import argparse
import logging
import sys

from PyQt6.QtCore import QCoreApplication

from .database.db import init_db
from .history import HistoryRecorder, recent_history
from .notices import completion_notice
from .presets import BUILTIN_PRESETS, CUSTOM_LABEL, find_preset, format_clock
from .settings import Settings, load_settings, save_settings
from .timer.driver import TickDriver, TICK_INTERVAL_MS
from .timer.engine import WorkoutTimerEngine

logger = logging.getLogger("intervalwatch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intervalwatch", description="Interval workout timer.",
    )
    duration = parser.add_mutually_exclusive_group()
    duration.add_argument("--seconds", type=int, help="work seconds per round")
    duration.add_argument(
        "--preset",
        help="built-in preset: " + ", ".join(p.name for p in BUILTIN_PRESETS),
    )
    parser.add_argument("--rounds", type=int, help="number of work rounds")
    parser.add_argument("--rest", type=int, help="rest seconds between rounds")
    parser.add_argument(
        "--halfway", action="store_true", default=None, help="alert at halfway",
    )
    parser.add_argument("--save", action="store_true", help="save to history when done")
    parser.add_argument("--history", action="store_true", help="show recent workouts and exit")
    parser.add_argument("--fast", action="store_true", help="tick every 10 ms (for demos)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def resolve_duration(args: argparse.Namespace, settings: Settings) -> tuple[int, str] | None:
    """Pick seconds and label from the arguments, then the last preset,
    then the custom duration.  Updates ``settings.last_preset``.

    Returns None when ``--preset`` names no built-in preset.
    """
    if args.preset:
        preset = find_preset(args.preset)
        if preset is None:
            return None
        settings.last_preset = preset.name
        return preset.seconds, preset.name

    if args.seconds is not None:
        settings.last_preset = None
        return args.seconds, CUSTOM_LABEL

    if settings.last_preset:
        preset = find_preset(settings.last_preset)
        if preset is not None:
            return preset.seconds, preset.name
        logger.warning("Saved preset %r no longer exists", settings.last_preset)
        settings.last_preset = None

    return settings.custom_total_seconds, CUSTOM_LABEL


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    init_db()

    if args.history:
        for item in recent_history():
            print(f"{item.when:%Y-%m-%d %H:%M}  {item.label}  {format_clock(item.seconds)}")
        return 0

    settings = load_settings()
    duration = resolve_duration(args, settings)
    if duration is None:
        print(f"Unknown preset: {args.preset}", file=sys.stderr)
        return 2
    seconds, label = duration

    if args.rounds is not None:
        settings.rounds_total = max(1, args.rounds)
    if args.rest is not None:
        settings.rest_seconds = max(0, args.rest)
    if args.halfway is not None:
        settings.halfway_enabled = args.halfway
    save_settings(settings)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    engine = WorkoutTimerEngine(
        rounds_total=settings.rounds_total,
        rest_seconds=settings.rest_seconds,
        halfway_enabled=settings.halfway_enabled,
    )
    driver = TickDriver(engine, interval_ms=10 if args.fast else TICK_INTERVAL_MS)
    recorder = HistoryRecorder(engine, auto_save=args.save)

    def on_tick(remaining: int) -> None:
        tag = "REST" if engine.is_resting else "WORK"
        print(
            f"\r{tag} {format_clock(remaining):>8}  "
            f"round {engine.current_round}/{engine.rounds_total}",
            end="", flush=True,
        )

    def on_round_completed(_when) -> None:
        if settings.notifications_enabled:
            notice = completion_notice(is_final=engine.summary is not None)
            print(f"\n{notice.title}: {notice.body}")

    def on_workout_completed(summary) -> None:
        print(
            f"{summary.history_label()}  "
            f"work {format_clock(summary.total_work_seconds)}  "
            f"rest {format_clock(summary.total_rest_seconds)}  "
            f"total {format_clock(summary.total_seconds)}"
        )
        app.quit()

    driver.tick.connect(on_tick)
    driver.halfway.connect(lambda n: print(f"\nHalfway through round {n}"))
    driver.rest_began.connect(lambda n: print(f"\nRest after round {n}"))
    driver.round_started.connect(lambda n: print(f"\nRound {n} go!"))
    driver.round_completed.connect(on_round_completed)
    driver.workout_completed.connect(on_workout_completed)

    driver.set_timer(seconds, label)
    driver.start()
    if engine.is_running:
        app.exec()
        status = 0
    else:
        print("Nothing to run: duration is 0.", file=sys.stderr)
        status = 1

    driver.shutdown()
    recorder.detach()
    return status


if __name__ == "__main__":
    sys.exit(main())
