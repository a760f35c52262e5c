"""Session summary assembly and hand-off to persistence."""

from __future__ import annotations

import logging
from typing import Protocol

from blaster.workout.model import SavedRecord, SessionSummary, WorkoutCatalog
from blaster.workout.session_store import now_utc_iso

logger = logging.getLogger(__name__)


class SummarySink(Protocol):
    def save(self, summary: SessionSummary) -> SavedRecord: ...


def build_summary(
    catalog: WorkoutCatalog,
    *,
    weight: float,
    repetitions: int,
    started_at_utc: str | None,
    completed_at_utc: str | None = None,
) -> SessionSummary:
    if repetitions < 1:
        raise ValueError("Repetitions must be >= 1")
    return SessionSummary(
        weight=float(weight),
        exercises=catalog.names,
        duration_sec=catalog.total_duration_sec,
        repetitions=repetitions,
        started_at_utc=started_at_utc,
        completed_at_utc=completed_at_utc or now_utc_iso(),
    )


class SummaryEmitter:
    def __init__(self, sink: SummarySink | None = None) -> None:
        self._sink = sink
        self.last_summary: SessionSummary | None = None

    def emit(
        self,
        catalog: WorkoutCatalog,
        *,
        weight: float,
        repetitions: int,
        started_at_utc: str | None,
    ) -> SavedRecord | None:
        summary = build_summary(
            catalog,
            weight=weight,
            repetitions=repetitions,
            started_at_utc=started_at_utc,
        )
        self.last_summary = summary
        if self._sink is None:
            return None
        try:
            record = self._sink.save(summary)
        except Exception:
            logger.exception("Saving workout session failed")
            return None
        logger.info("Workout session saved as %s", record.record_id)
        return record
