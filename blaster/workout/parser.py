"""Exercise catalog parser (CSV/JSON)."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

from blaster.workout.library import default_catalog, fallback_catalog
from blaster.workout.model import (
    CatalogFailed,
    CatalogLoaded,
    Exercise,
    WorkoutCatalog,
)

logger = logging.getLogger(__name__)


class CatalogParseError(ValueError):
    """Raised when a catalog file is invalid."""


def load_catalog(path: str | Path) -> WorkoutCatalog:
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return _load_json(file_path)
    if suffix == ".csv":
        return _load_csv(file_path)
    raise CatalogParseError(
        f"Unsupported catalog format '{file_path.suffix}'. Use .json or .csv"
    )


def resolve_catalog(path: str | Path | None) -> CatalogLoaded | CatalogFailed:
    """Load *path* or fall back to a built-in catalog; never raises."""
    if path is None:
        return CatalogLoaded(catalog=default_catalog())
    try:
        catalog = load_catalog(path)
    except (CatalogParseError, OSError) as exc:
        logger.warning("Catalog %s unusable, using fallback: %s", path, exc)
        return CatalogFailed(error=str(exc), fallback=fallback_catalog())
    return CatalogLoaded(catalog=catalog, source=str(path))


def parse_catalog_payload(data: object, default_name: str) -> WorkoutCatalog:
    if isinstance(data, list):
        name_obj: object = default_name
        items_obj: object = data
    elif isinstance(data, dict):
        name_obj = data.get("name", default_name)
        items_obj = data.get("exercises")
    else:
        raise CatalogParseError("Catalog JSON must be an array or an object")

    if not isinstance(name_obj, str):
        raise CatalogParseError("Catalog field 'name' must be a string")
    if not isinstance(items_obj, list):
        raise CatalogParseError("Catalog field 'exercises' must be an array")

    exercises: list[Exercise] = []
    for i, raw in enumerate(items_obj):
        if not isinstance(raw, dict):
            raise CatalogParseError(f"Exercise {i + 1}: must be an object")
        for field_name in ("id", "name", "instruction"):
            if raw.get(field_name) is not None and not isinstance(raw[field_name], str):
                raise CatalogParseError(f"Exercise {i + 1}: {field_name} must be a string")
        duration_obj = raw.get("duration", raw.get("duration_sec"))
        exercises.append(
            _build_exercise(
                id_obj=raw.get("id"),
                name_obj=raw.get("name"),
                duration_obj=duration_obj,
                instruction_obj=raw.get("instruction"),
                index=i,
            )
        )

    return _build_catalog(name=name_obj.strip() or default_name, exercises=exercises)


def _load_json(path: Path) -> WorkoutCatalog:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise CatalogParseError(f"Catalog is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogParseError(f"Invalid JSON: {exc}") from exc
    return parse_catalog_payload(data, default_name=path.stem)


def _load_csv(path: Path) -> WorkoutCatalog:
    try:
        rows = _read_csv_rows(path)
    except UnicodeDecodeError as exc:
        raise CatalogParseError(f"Catalog is not valid UTF-8: {exc}") from exc
    except csv.Error as exc:
        raise CatalogParseError(f"Invalid CSV: {exc}") from exc

    return _build_catalog(name=path.stem, exercises=rows)


def _read_csv_rows(path: Path) -> list[Exercise]:
    rows: list[Exercise] = []
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        headers = {h.strip().lower() for h in (reader.fieldnames or []) if h}
        if not {"name", "duration"} <= headers:
            raise CatalogParseError("CSV must contain headers: name,duration[,id,instruction]")

        for i, raw in enumerate(reader):
            row = {(k or "").strip().lower(): v for k, v in raw.items()}
            rows.append(
                _build_exercise(
                    id_obj=row.get("id"),
                    name_obj=row.get("name"),
                    duration_obj=row.get("duration"),
                    instruction_obj=row.get("instruction"),
                    index=i,
                )
            )
    return rows


def _build_exercise(
    *,
    id_obj: object,
    name_obj: object,
    duration_obj: object,
    instruction_obj: object,
    index: int,
) -> Exercise:
    if name_obj is None or not str(name_obj).strip():
        raise CatalogParseError(f"Exercise {index + 1}: name is required")

    duration_sec = _parse_int_field(raw=duration_obj, field_name="duration", index=index)
    if duration_sec <= 0:
        raise CatalogParseError(f"Exercise {index + 1}: duration must be > 0")

    exercise_id = str(id_obj).strip() if id_obj is not None else ""
    instruction = str(instruction_obj).strip() if instruction_obj is not None else ""

    return Exercise(
        id=exercise_id or f"ex-{index + 1}",
        name=str(name_obj).strip(),
        duration_sec=duration_sec,
        instruction=instruction,
    )


def _build_catalog(*, name: str, exercises: list[Exercise]) -> WorkoutCatalog:
    if not exercises:
        raise CatalogParseError("Catalog must contain at least one exercise")
    seen: set[str] = set()
    for exercise in exercises:
        if exercise.id in seen:
            raise CatalogParseError(f"Duplicate exercise id '{exercise.id}'")
        seen.add(exercise.id)
    return WorkoutCatalog(name=name, exercises=tuple(exercises))


def _parse_int_field(*, raw: object, field_name: str, index: int) -> int:
    if raw is None or isinstance(raw, bool):
        raise CatalogParseError(f"Exercise {index + 1}: invalid {field_name}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise CatalogParseError(f"Exercise {index + 1}: invalid {field_name}")
        return int(raw)
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise CatalogParseError(f"Exercise {index + 1}: invalid {field_name}") from exc
