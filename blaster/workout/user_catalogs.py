"""Saved exercise catalogs kept under the app home directory.

Each catalog lives in ``<catalogs_dir>/<key>.json`` where *key* is a slug of
the catalog name. Files are written in the same ``{name, exercises}`` shape
that :func:`blaster.workout.parser.parse_catalog_payload` reads back.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path

from blaster.workout.library import fallback_catalog
from blaster.workout.model import CatalogFailed, CatalogLoaded, WorkoutCatalog
from blaster.workout.parser import CatalogParseError, load_catalog, resolve_catalog

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"[^a-z0-9]+")


def catalog_key(name: str) -> str:
    key = _KEY_RE.sub("-", name.strip().lower()).strip("-")
    if not key:
        raise ValueError(f"Cannot derive a catalog key from {name!r}")
    return key


def user_catalog_path(key: str, base_dir: Path) -> Path:
    if not key or key.startswith(".") or Path(key).name != key:
        raise ValueError(f"Invalid catalog key {key!r}")
    return base_dir / f"{key}.json"


@dataclass(frozen=True)
class SavedCatalogEntry:
    key: str
    path: Path
    name: str
    exercise_count: int = 0
    total_duration_sec: int = 0
    error: str | None = None

    @property
    def usable(self) -> bool:
        return self.error is None


def list_user_catalogs(base_dir: Path) -> list[SavedCatalogEntry]:
    """Every ``*.json`` file under *base_dir*, broken ones included with their error."""
    if not base_dir.is_dir():
        return []
    entries: list[SavedCatalogEntry] = []
    for file in sorted(base_dir.glob("*.json")):
        try:
            catalog = load_catalog(file)
        except (CatalogParseError, OSError) as exc:
            entries.append(SavedCatalogEntry(key=file.stem, path=file, name=file.stem, error=str(exc)))
            continue
        entries.append(
            SavedCatalogEntry(
                key=file.stem,
                path=file,
                name=catalog.name,
                exercise_count=len(catalog),
                total_duration_sec=catalog.total_duration_sec,
            )
        )
    return entries


def load_user_catalog(key: str, base_dir: Path) -> CatalogLoaded | CatalogFailed:
    try:
        path = user_catalog_path(key, base_dir)
    except ValueError as exc:
        return _missing(str(exc))
    if not path.exists():
        return _missing(f"No saved catalog named '{key}' in {base_dir}")
    return resolve_catalog(path)


def _missing(error: str) -> CatalogFailed:
    logger.warning("Saved catalog unusable, using fallback: %s", error)
    return CatalogFailed(error=error, fallback=fallback_catalog())


def save_user_catalog(
    catalog: WorkoutCatalog,
    *,
    base_dir: Path,
    name: str | None = None,
) -> Path:
    """Write *catalog* (optionally renamed) and return the file path."""
    if len(catalog) == 0:
        raise ValueError("Catalog must include at least one exercise")
    if name is not None:
        catalog = replace(catalog, name=name.strip())
    out = user_catalog_path(catalog_key(catalog.name), base_dir)
    base_dir.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(catalog_payload(catalog), indent=2) + "\n", encoding="utf-8")
    logger.info("Saved catalog %r to %s", catalog.name, out)
    return out


def catalog_payload(catalog: WorkoutCatalog) -> dict[str, object]:
    return {
        "name": catalog.name,
        "exercises": [
            {
                "id": exercise.id,
                "name": exercise.name,
                "duration": exercise.duration_sec,
                **({"instruction": exercise.instruction} if exercise.instruction else {}),
            }
            for exercise in catalog.exercises
        ],
    }
