"""Workout state machine as a pure reducer.

Every user action and every countdown tick is an event.  ``reduce`` maps
``(state, event)`` to a :class:`Transition` holding the next state and the
side effects an outer driver has to run.  The reducer never performs I/O, so
an exercise boundary is consumed inside the very tick that reaches it and a
``Skip`` handled afterwards sees the already-advanced index.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from blaster.core.state import SessionState, WorkoutStatus, initial_state
from blaster.workout.model import WorkoutCatalog

WARNING_SECONDS = 3


# -- events -------------------------------------------------------------------


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Skip:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class SelectExercise:
    index: int


Event = Union[Start, Pause, Tick, Skip, Reset, SelectExercise]


# -- effects ------------------------------------------------------------------


@dataclass(frozen=True)
class ExerciseChanged:
    previous_index: int
    index: int


@dataclass(frozen=True)
class WorkoutCompleted:
    exercise_count: int


@dataclass(frozen=True)
class CountdownWarning:
    seconds_remaining: int


Effect = Union[ExerciseChanged, WorkoutCompleted, CountdownWarning]


@dataclass(frozen=True)
class Transition:
    state: SessionState
    effects: tuple[Effect, ...] = ()
    accepted: bool = True
    # The countdown must restart its cadence for a freshly entered exercise.
    rearm: bool = False


def reject(state: SessionState) -> Transition:
    return Transition(state=state, accepted=False)


def reduce(state: SessionState, event: Event, catalog: WorkoutCatalog) -> Transition:
    status = state.status

    if isinstance(event, Start):
        if status not in {WorkoutStatus.IDLE, WorkoutStatus.PAUSED}:
            return reject(state)
        return Transition(state=replace(state, running=True, started=True))

    if isinstance(event, Pause):
        if status != WorkoutStatus.RUNNING:
            return reject(state)
        return Transition(state=replace(state, running=False))

    if isinstance(event, Tick):
        if status != WorkoutStatus.RUNNING:
            return reject(state)
        if state.seconds_remaining <= 1:
            return _advance(state, catalog)
        remaining = state.seconds_remaining - 1
        effects: tuple[Effect, ...] = ()
        if remaining <= WARNING_SECONDS:
            effects = (CountdownWarning(seconds_remaining=remaining),)
        return Transition(state=replace(state, seconds_remaining=remaining), effects=effects)

    if isinstance(event, Skip):
        if status not in {WorkoutStatus.RUNNING, WorkoutStatus.PAUSED}:
            return reject(state)
        if state.current_index >= state.exercise_count - 1:
            return reject(state)
        return _advance(state, catalog)

    if isinstance(event, Reset):
        return Transition(state=initial_state(catalog))

    if isinstance(event, SelectExercise):
        if status == WorkoutStatus.RUNNING:
            return reject(state)
        if not 0 <= event.index < state.exercise_count:
            return reject(state)
        return Transition(
            state=replace(
                state,
                current_index=event.index,
                seconds_remaining=catalog[event.index].duration_sec,
                # Leaving the completion sentinel starts a fresh, unstarted session.
                started=state.started and not state.is_complete,
            )
        )

    raise TypeError(f"Unknown event {event!r}")


def _advance(state: SessionState, catalog: WorkoutCatalog) -> Transition:
    next_index = state.current_index + 1
    if next_index < state.exercise_count:
        return Transition(
            state=replace(
                state,
                current_index=next_index,
                seconds_remaining=catalog[next_index].duration_sec,
            ),
            effects=(ExerciseChanged(previous_index=state.current_index, index=next_index),),
            rearm=state.running,
        )
    return Transition(
        state=replace(
            state,
            current_index=state.exercise_count,
            seconds_remaining=0,
            running=False,
            started=False,
        ),
        effects=(WorkoutCompleted(exercise_count=state.exercise_count),),
    )
