"""Workout engine: runs the state machine against a live countdown."""

from __future__ import annotations

import logging
from typing import Callable

from blaster.core.countdown import Countdown
from blaster.core.machine import (
    CountdownWarning,
    Effect,
    Event,
    ExerciseChanged,
    Pause,
    Reset,
    SelectExercise,
    Skip,
    Start,
    Tick,
    Transition,
    WorkoutCompleted,
    reduce,
)
from blaster.core.state import SessionState, WorkoutStatus, initial_state
from blaster.workout.effects import EffectsDispatcher, SilentEffectsSink
from blaster.workout.model import Exercise, SavedRecord, WorkoutCatalog
from blaster.workout.session_store import now_utc_iso
from blaster.workout.summary import SummaryEmitter

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


class WorkoutEngine:
    """Single owner of the session state.

    Events are applied one at a time on the event loop thread.  After each
    applied transition the countdown is synced with ``state.running`` and the
    transition's effects are executed, in that order.
    """

    def __init__(
        self,
        catalog: WorkoutCatalog,
        *,
        effects: EffectsDispatcher | None = None,
        summary: SummaryEmitter | None = None,
        tick_interval_sec: float = 1.0,
        weight: float = 0.0,
    ) -> None:
        self._catalog = catalog
        self._state = initial_state(catalog)
        self._effects = effects or EffectsDispatcher(SilentEffectsSink())
        self._summary = summary or SummaryEmitter()
        self._countdown = Countdown(self._on_tick, interval_sec=tick_interval_sec)
        self._listeners: list[StateListener] = []
        self._repetitions = 1
        self._started_at_utc: str | None = None
        self.weight = weight
        self.last_record: SavedRecord | None = None

    # -- read side -------------------------------------------------------------

    @property
    def catalog(self) -> WorkoutCatalog:
        return self._catalog

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> WorkoutStatus:
        return self._state.status

    @property
    def repetitions(self) -> int:
        return self._repetitions

    @property
    def ticking(self) -> bool:
        return self._countdown.is_active

    @property
    def current_exercise(self) -> Exercise | None:
        if self._state.is_complete:
            return None
        return self._catalog[self._state.current_index]

    @property
    def next_exercise(self) -> Exercise | None:
        index = self._state.current_index + 1
        if index >= len(self._catalog):
            return None
        return self._catalog[index]

    @property
    def progress_pct(self) -> float:
        exercise = self.current_exercise
        if exercise is None:
            return 100.0
        elapsed = exercise.duration_sec - self._state.seconds_remaining
        return (elapsed / exercise.duration_sec) * 100.0

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    # -- operations ------------------------------------------------------------

    def start(self) -> bool:
        if self._state.status == WorkoutStatus.IDLE:
            self._started_at_utc = now_utc_iso()
        return self._dispatch(Start())

    def pause(self) -> bool:
        return self._dispatch(Pause())

    def skip(self) -> bool:
        return self._dispatch(Skip())

    def reset(self) -> bool:
        return self._dispatch(Reset())

    def select_exercise(self, index: int) -> bool:
        return self._dispatch(SelectExercise(index))

    def repeat(self) -> bool:
        """Begin another repetition once the catalog has been completed."""
        if self._state.status != WorkoutStatus.COMPLETE:
            logger.debug("repeat() ignored from %s", self._state.status.value)
            return False
        self._repetitions += 1
        self.reset()
        return self.start()

    def close(self) -> None:
        self._countdown.stop()

    # -- internals -------------------------------------------------------------

    def _on_tick(self) -> None:
        self._dispatch(Tick())

    def _dispatch(self, event: Event) -> bool:
        transition = reduce(self._state, event, self._catalog)
        if not transition.accepted:
            logger.debug(
                "%s ignored from %s", type(event).__name__, self._state.status.value
            )
            return False

        self._state = transition.state
        self._sync_countdown(transition)
        for effect in transition.effects:
            self._run_effect(effect)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed")
        return True

    def _sync_countdown(self, transition: Transition) -> None:
        if not transition.state.running:
            self._countdown.stop()
        elif transition.rearm:
            self._countdown.restart()
        else:
            self._countdown.start()

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, ExerciseChanged):
            logger.info(
                "Exercise %d/%d: %s",
                effect.index + 1,
                len(self._catalog),
                self._catalog[effect.index].name,
            )
            self._effects.exercise_changed()
        elif isinstance(effect, CountdownWarning):
            self._effects.countdown_warning()
        elif isinstance(effect, WorkoutCompleted):
            logger.info("Workout complete (repetition %d)", self._repetitions)
            self._effects.workout_completed()
            self.last_record = self._summary.emit(
                self._catalog,
                weight=self.weight,
                repetitions=self._repetitions,
                started_at_utc=self._started_at_utc,
            )
