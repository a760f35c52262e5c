"""NiceGUI single-screen web UI for Bicep Blaster."""

from __future__ import annotations

import json
from typing import Callable, Sequence

from nicegui import ui

from blaster.config import Settings
from blaster.core.engine import WorkoutEngine
from blaster.core.state import WorkoutStatus
from blaster.workout.effects import CueKind, EffectsDispatcher, EffectToggles
from blaster.workout.model import CatalogFailed, active_catalog
from blaster.workout.parser import resolve_catalog
from blaster.workout.session_store import JsonlSessionStore, workout_stats
from blaster.workout.summary import SummaryEmitter

REFRESH_SEC = 0.25

_CUE_FREQUENCIES = {"exercise-change": 880, "workout-complete": 660}


def _fmt_duration(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, total_seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


def _preview(text: str, limit: int = 60) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def _beep_js(frequency: int) -> str:
    return f"""
    (() => {{
      const ctx = new (window.AudioContext || window.webkitAudioContext)();
      const osc = ctx.createOscillator();
      const gain = ctx.createGain();
      osc.type = 'sine';
      osc.frequency.value = {frequency};
      gain.gain.value = 0.05;
      osc.connect(gain);
      gain.connect(ctx.destination);
      osc.start();
      setTimeout(() => {{ osc.stop(); ctx.close(); }}, 250);
    }})();
    """


def _vibrate_js(pattern: Sequence[int]) -> str:
    return (
        "if ('vibrate' in navigator) { try { navigator.vibrate("
        + json.dumps(list(pattern))
        + "); } catch (e) {} }"
    )


class BrowserEffectsSink:
    """Queue browser-side cues; the page timer flushes them in a client context."""

    def __init__(self) -> None:
        self.pending: list[str] = []

    def play_cue(self, kind: CueKind) -> None:
        self.pending.append(_beep_js(_CUE_FREQUENCIES.get(kind, 880)))

    def vibrate(self, pattern: Sequence[int]) -> None:
        self.pending.append(_vibrate_js(pattern))

    def drain(self) -> list[str]:
        out, self.pending = self.pending, []
        return out


def run_web_ui(
    *,
    settings: Settings | None = None,
    host: str = "127.0.0.1",
    port: int = 8089,
) -> int:
    settings = settings or Settings()
    resolved = resolve_catalog(settings.catalog_path)
    catalog = active_catalog(resolved)
    sink = BrowserEffectsSink()
    toggles = EffectToggles(
        sound_enabled=settings.sound_enabled,
        vibration_enabled=settings.vibration_enabled,
    )
    engine = WorkoutEngine(
        catalog,
        effects=EffectsDispatcher(sink, toggles),
        summary=SummaryEmitter(JsonlSessionStore(settings.history_path)),
        tick_interval_sec=settings.tick_interval_sec,
        weight=settings.weight,
    )

    ui.add_head_html(
        """
        <style>
          body { background: #0b1220; color: #e5e7eb; font-family: Arial, sans-serif; }
          .bb-card { background: #0f1b35; border: 1px solid rgba(148,163,184,0.22); border-radius: 14px; }
          .bb-timer { font-size: 4rem; font-weight: 700; font-variant-numeric: tabular-nums; }
          .bb-current { border-color: #38bdf8 !important; }
          .bb-done { opacity: 0.5; }
        </style>
        """
    )

    with ui.column().classes("w-full max-w-md mx-auto gap-3 p-4"):
        ui.label(catalog.name).classes("text-2xl font-bold self-center")
        ui.label("Complete all exercises in one flow").classes("self-center text-sm")
        if isinstance(resolved, CatalogFailed):
            ui.label(f"Catalog unusable, using fallback: {resolved.error}").classes(
                "text-orange-500"
            )

        with ui.card().classes("w-full bb-card"):
            progress_bar = ui.linear_progress(value=0.0, show_value=False)
            exercise_label = ui.label().classes("text-xl font-semibold")
            timer_label = ui.label().classes("bb-timer self-center")
            instruction_label = ui.label().classes("text-sm")
            next_label = ui.label().classes("text-sm text-gray-400")
            with ui.row().classes("w-full justify-center gap-2"):
                start_btn = ui.button("Start")
                pause_btn = ui.button("Pause")
                reset_btn = ui.button("Reset").props("outline")
                skip_btn = ui.button("Skip").props("outline")
                again_btn = ui.button("Start Again")
            with ui.row().classes("w-full items-center gap-2"):
                sound_toggle = ui.switch("Sound", value=toggles.sound_enabled)
                vibration_toggle = ui.switch("Vibration", value=toggles.vibration_enabled)
                weight_input = ui.number("Weight (kg)", value=engine.weight, min=0, step=0.5)
            repetitions_label = ui.label().classes("text-sm")

        ui.label("Exercise List").classes("text-lg font-bold")
        exercise_cards: list[ui.card] = []
        for index, exercise in enumerate(catalog.exercises):
            with ui.card().classes("w-full bb-card cursor-pointer") as card:
                ui.label(exercise.name).classes("font-bold")
                ui.label(_preview(exercise.instruction)).classes("text-xs truncate")
                ui.label(_fmt_duration(exercise.duration_sec)).classes("text-xs")
            card.on("click", lambda _e, i=index: on_select(i))
            exercise_cards.append(card)

        history_label = ui.label().classes("text-sm text-gray-400")

    def refresh_history() -> None:
        stats = workout_stats(settings.history_path)
        history_label.text = (
            f"History: {stats.total_sessions} sessions | "
            f"avg {stats.avg_weight:.1f} kg | {stats.total_repetitions} reps"
        )

    def refresh_ui() -> None:
        for snippet in sink.drain():
            ui.run_javascript(snippet)

        state = engine.state
        status = state.status
        exercise = engine.current_exercise
        following = engine.next_exercise
        progress_bar.value = engine.progress_pct / 100.0
        if exercise is None:
            exercise_label.text = "Workout Complete"
            timer_label.text = "DONE!"
            instruction_label.text = "Great job! You've completed all exercises."
        else:
            exercise_label.text = exercise.name
            timer_label.text = _fmt_duration(state.seconds_remaining)
            instruction_label.text = exercise.instruction
        next_label.text = f"Next: {following.name}" if following and exercise else ""
        repetitions_label.text = f"Repetition {engine.repetitions}"

        start_btn.text = "Resume" if status == WorkoutStatus.PAUSED else "Start"
        start_btn.set_visibility(status in {WorkoutStatus.IDLE, WorkoutStatus.PAUSED})
        pause_btn.set_visibility(status == WorkoutStatus.RUNNING)
        skip_btn.set_visibility(status in {WorkoutStatus.RUNNING, WorkoutStatus.PAUSED})
        skip_btn.set_enabled(state.current_index < state.exercise_count - 1)
        again_btn.set_visibility(status == WorkoutStatus.COMPLETE)
        weight_input.set_enabled(status != WorkoutStatus.RUNNING)

        for index, card in enumerate(exercise_cards):
            card.classes(remove="bb-current bb-done")
            if index == state.current_index:
                card.classes(add="bb-current")
            elif index < state.current_index:
                card.classes(add="bb-done")

    def on_select(index: int) -> None:
        if engine.select_exercise(index):
            refresh_ui()

    def on_weight_change() -> None:
        engine.weight = float(weight_input.value or 0.0)

    def on_sound_toggle() -> None:
        toggles.sound_enabled = bool(sound_toggle.value)

    def on_vibration_toggle() -> None:
        toggles.vibration_enabled = bool(vibration_toggle.value)

    def on_state(_state: object) -> None:
        if engine.status == WorkoutStatus.COMPLETE and engine.last_record is not None:
            refresh_history()

    def with_refresh(action: Callable[[], object]) -> None:
        action()
        refresh_ui()

    engine.subscribe(on_state)
    start_btn.on_click(lambda: with_refresh(engine.start))
    pause_btn.on_click(lambda: with_refresh(engine.pause))
    reset_btn.on_click(lambda: with_refresh(engine.reset))
    skip_btn.on_click(lambda: with_refresh(engine.skip))
    again_btn.on_click(lambda: with_refresh(engine.repeat))
    weight_input.on_value_change(lambda _: on_weight_change())
    sound_toggle.on_value_change(lambda _: on_sound_toggle())
    vibration_toggle.on_value_change(lambda _: on_vibration_toggle())

    refresh_history()
    refresh_ui()
    ui.timer(REFRESH_SEC, refresh_ui)
    ui.run(host=host, port=port, reload=False, title="Bicep Blaster")
    return 0
