"""Terminal CLI entrypoint for Bicep Blaster."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Sequence

from blaster.config import Settings
from blaster.core.engine import WorkoutEngine
from blaster.core.state import SessionState
from blaster.workout.effects import CueKind, EffectsDispatcher, EffectToggles
from blaster.workout.model import CatalogFailed, CatalogLoaded, active_catalog
from blaster.workout.parser import resolve_catalog
from blaster.workout.session_store import (
    JsonlSessionStore,
    clear_history,
    load_recent_sessions,
    workout_stats,
)
from blaster.workout.summary import SummaryEmitter
from blaster.workout.user_catalogs import (
    list_user_catalogs,
    load_user_catalog,
    save_user_catalog,
)

logger = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class ConsoleEffectsSink:
    """Terminal bell for cues; terminals have no haptics."""

    def play_cue(self, kind: CueKind) -> None:
        label = "Next exercise!" if kind == "exercise-change" else "Workout complete!"
        print(f"\a*** {label} ***")

    def vibrate(self, pattern: Sequence[int]) -> None:
        logger.debug("vibrate %s (unsupported in terminal)", list(pattern))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bicep Blaster interval workout timer")
    parser.add_argument(
        "--catalog",
        default=None,
        help="Exercise catalog (.json/.csv path or saved catalog key)",
    )
    parser.add_argument("--weight", type=float, default=None, help="Dumbbell weight in kg")
    parser.add_argument("--no-sound", action="store_true", help="Disable audio cues")
    parser.add_argument(
        "--no-vibration", action="store_true", help="Disable haptic cues"
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=None,
        help="Seconds per countdown tick (default 1.0)",
    )
    parser.add_argument(
        "--history", action="store_true", help="Show workout stats and recent sessions"
    )
    parser.add_argument(
        "--clear-history", action="store_true", help="Delete saved workout history"
    )
    parser.add_argument(
        "--list-catalogs", action="store_true", help="List saved exercise catalogs"
    )
    parser.add_argument(
        "--save-catalog",
        metavar="NAME",
        default=None,
        help="Save the --catalog selection as a named catalog and exit",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) instead of the terminal timer",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8089, help="Port for --ui-web")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_catalog_arg(raw: str | None, settings: Settings) -> CatalogLoaded | CatalogFailed:
    """Resolve --catalog as a file path, or as the key of a saved catalog."""
    if raw is None:
        return resolve_catalog(settings.catalog_path)
    candidate = Path(raw).expanduser()
    if candidate.exists() or candidate.suffix:
        return resolve_catalog(candidate)
    return load_user_catalog(raw, base_dir=settings.catalogs_dir)


def build_engine(args: argparse.Namespace, settings: Settings) -> WorkoutEngine:
    resolved = load_catalog_arg(args.catalog, settings)
    if isinstance(resolved, CatalogFailed):
        print(f"Warning: catalog unusable ({resolved.error}); using built-in fallback")
    toggles = EffectToggles(
        sound_enabled=settings.sound_enabled and not args.no_sound,
        vibration_enabled=settings.vibration_enabled and not args.no_vibration,
    )
    return WorkoutEngine(
        active_catalog(resolved),
        effects=EffectsDispatcher(ConsoleEffectsSink(), toggles),
        summary=SummaryEmitter(JsonlSessionStore(settings.history_path)),
        tick_interval_sec=args.tick if args.tick is not None else settings.tick_interval_sec,
        weight=args.weight if args.weight is not None else settings.weight,
    )


def _print_status_line(engine: WorkoutEngine, state: SessionState) -> None:
    exercise = engine.current_exercise
    if exercise is None:
        return
    print(
        f"[{state.current_index + 1}/{state.exercise_count}] {exercise.name:<20} "
        f"{format_time(state.seconds_remaining)}"
    )


async def run_workout(engine: WorkoutEngine) -> int:
    finished = asyncio.Event()

    def on_state(state: SessionState) -> None:
        if state.is_complete:
            finished.set()
            return
        _print_status_line(engine, state)

    engine.subscribe(on_state)
    catalog = engine.catalog
    print(f"{catalog.name}: {len(catalog)} exercises, {format_time(catalog.total_duration_sec)}")
    engine.start()
    try:
        await finished.wait()
    finally:
        engine.close()

    record = engine.last_record
    if record is not None:
        print(f"Session saved ({record.record_id}) at {record.saved_at_utc}")
    else:
        print("Session finished (not saved)")
    return 0


def run_history(settings: Settings) -> int:
    stats = workout_stats(settings.history_path)
    print(f"Sessions: {stats.total_sessions}")
    print(f"Average weight: {stats.avg_weight:.1f} kg")
    print(f"Total time: {format_time(stats.total_duration_sec)}")
    print(f"Total repetitions: {stats.total_repetitions}")
    for record in load_recent_sessions(limit=7, path=settings.history_path):
        print(
            f"{record.date}  {record.weight:>5.1f} kg  x{record.repetitions}  "
            f"{len(record.exercises)} exercises"
        )
    return 0


def run_list_catalogs(settings: Settings) -> int:
    catalogs = list_user_catalogs(base_dir=settings.catalogs_dir)
    if not catalogs:
        print("No saved catalogs")
        return 0
    for item in catalogs:
        if item.usable:
            print(
                f"{item.key:<24} {item.name} ({item.exercise_count} exercises, "
                f"{format_time(item.total_duration_sec)})"
            )
        else:
            print(f"{item.key:<24} unusable: {item.error}")
    return 0


def run_save_catalog(args: argparse.Namespace, settings: Settings) -> int:
    resolved = load_catalog_arg(args.catalog, settings)
    if isinstance(resolved, CatalogFailed):
        print(f"Catalog not saved: {resolved.error}")
        return 1
    try:
        path = save_user_catalog(
            resolved.catalog, base_dir=settings.catalogs_dir, name=args.save_catalog
        )
    except (ValueError, OSError) as exc:
        print(f"Catalog not saved: {exc}")
        return 1
    print(f"Saved catalog '{path.stem}' ({len(resolved.catalog)} exercises) to {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.tick is not None and not args.tick > 0:
        parser.error("--tick must be > 0")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = Settings()

    if args.history:
        return run_history(settings)
    if args.clear_history:
        clear_history(settings.history_path)
        print("Workout history cleared")
        return 0
    if args.list_catalogs:
        return run_list_catalogs(settings)
    if args.save_catalog is not None:
        return run_save_catalog(args, settings)
    if args.ui_web:
        from blaster.ui.web_app import run_web_ui

        return run_web_ui(settings=settings, host=args.web_host, port=args.web_port)

    engine = build_engine(args, settings)
    try:
        return asyncio.run(run_workout(engine))
    except KeyboardInterrupt:
        print("\nWorkout stopped")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
