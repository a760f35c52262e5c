"""Local persistence for completed workout sessions."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from blaster.workout.model import SavedRecord, SessionSummary


def _default_sessions_path() -> Path:
    return Path.home() / ".bicep-blaster" / "sessions.jsonl"


@dataclass(frozen=True)
class SessionRecord:
    id: int
    date: str
    weight: float
    exercises: tuple[str, ...]
    duration: int
    repetitions: int
    started_at_utc: str | None = None


@dataclass(frozen=True)
class WorkoutStats:
    total_sessions: int
    avg_weight: float
    total_duration_sec: int
    total_repetitions: int
    recent_sessions: tuple[SessionRecord, ...]


def now_utc_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def append_session(record: SessionRecord, path: Path | None = None) -> None:
    target = path or _default_sessions_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(record)
    payload["exercises"] = list(record.exercises)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, ensure_ascii=True) + "\n")


def load_sessions(path: Path | None = None) -> list[SessionRecord]:
    """Return all readable records, oldest first."""
    target = path or _default_sessions_path()
    if not target.exists():
        return []

    out: list[SessionRecord] = []
    for raw in target.read_text(encoding="utf-8").splitlines():
        if not raw.strip():
            continue
        try:
            item = json.loads(raw)
            item["exercises"] = tuple(item.get("exercises", ()))
            out.append(SessionRecord(**item))
        except (ValueError, TypeError, AttributeError):
            continue
    return out


def load_recent_sessions(limit: int = 20, path: Path | None = None) -> list[SessionRecord]:
    return list(reversed(load_sessions(path)))[:limit]


def workout_stats(path: Path | None = None) -> WorkoutStats:
    history = load_sessions(path)
    if not history:
        return WorkoutStats(
            total_sessions=0,
            avg_weight=0.0,
            total_duration_sec=0,
            total_repetitions=0,
            recent_sessions=(),
        )

    total_weight = sum(item.weight for item in history)
    return WorkoutStats(
        total_sessions=len(history),
        avg_weight=round(total_weight / len(history), 1),
        total_duration_sec=sum(item.duration for item in history),
        total_repetitions=sum(item.repetitions or 1 for item in history),
        recent_sessions=tuple(history[-7:]),
    )


def clear_history(path: Path | None = None) -> None:
    target = path or _default_sessions_path()
    target.unlink(missing_ok=True)


class JsonlSessionStore:
    """Summary sink appending one JSON line per completed workout."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _default_sessions_path()
        self._last_id = 0

    def save(self, summary: SessionSummary) -> SavedRecord:
        # Millisecond timestamps, bumped when two saves land in the same ms.
        record_id = max(time.time_ns() // 1_000_000, self._last_id + 1)
        self._last_id = record_id
        record = SessionRecord(
            id=record_id,
            date=summary.completed_at_utc,
            weight=summary.weight,
            exercises=summary.exercises,
            duration=summary.duration_sec,
            repetitions=summary.repetitions,
            started_at_utc=summary.started_at_utc,
        )
        append_session(record, path=self.path)
        return SavedRecord(record_id=record.id, saved_at_utc=record.date)
