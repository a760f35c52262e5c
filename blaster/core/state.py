"""Session state for a single workout traversal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from blaster.workout.model import WorkoutCatalog


class WorkoutStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot; ``current_index == exercise_count`` marks completion."""

    current_index: int
    seconds_remaining: int
    running: bool
    started: bool
    exercise_count: int

    @property
    def is_complete(self) -> bool:
        return self.current_index >= self.exercise_count

    @property
    def status(self) -> WorkoutStatus:
        if self.is_complete:
            return WorkoutStatus.COMPLETE
        if self.running:
            return WorkoutStatus.RUNNING
        if self.started:
            return WorkoutStatus.PAUSED
        return WorkoutStatus.IDLE


def initial_state(catalog: WorkoutCatalog) -> SessionState:
    if len(catalog) == 0:
        raise ValueError("Catalog must contain at least one exercise")
    return SessionState(
        current_index=0,
        seconds_remaining=catalog[0].duration_sec,
        running=False,
        started=False,
        exercise_count=len(catalog),
    )
