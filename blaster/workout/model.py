"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    duration_sec: int
    instruction: str = ""


@dataclass(frozen=True)
class WorkoutCatalog:
    name: str
    exercises: tuple[Exercise, ...]

    def __len__(self) -> int:
        return len(self.exercises)

    def __getitem__(self, index: int) -> Exercise:
        return self.exercises[index]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(exercise.name for exercise in self.exercises)

    @property
    def total_duration_sec(self) -> int:
        return sum(exercise.duration_sec for exercise in self.exercises)


@dataclass(frozen=True)
class CatalogPending:
    """Catalog requested but not resolved yet."""


@dataclass(frozen=True)
class CatalogLoaded:
    catalog: WorkoutCatalog
    source: str = "builtin"


@dataclass(frozen=True)
class CatalogFailed:
    error: str
    fallback: WorkoutCatalog


CatalogState = Union[CatalogPending, CatalogLoaded, CatalogFailed]


def active_catalog(state: CatalogState) -> WorkoutCatalog:
    if isinstance(state, CatalogLoaded):
        return state.catalog
    if isinstance(state, CatalogFailed):
        return state.fallback
    raise RuntimeError("Catalog not loaded yet")


@dataclass(frozen=True)
class SessionSummary:
    weight: float
    exercises: tuple[str, ...]
    duration_sec: int
    repetitions: int
    started_at_utc: str | None
    completed_at_utc: str


@dataclass(frozen=True)
class SavedRecord:
    record_id: int
    saved_at_utc: str
