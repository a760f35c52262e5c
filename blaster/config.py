"""Environment-driven runtime settings for Bicep Blaster."""

from __future__ import annotations

import os
from pathlib import Path

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


class Settings:
    """Runtime configuration read from ``BLASTER_*`` environment variables."""

    def __init__(self) -> None:
        self.home: Path = Path(
            os.environ.get("BLASTER_HOME", Path.home() / ".bicep-blaster")
        ).expanduser()
        catalog = os.environ.get("BLASTER_CATALOG", "").strip()
        self.catalog_path: Path | None = Path(catalog).expanduser() if catalog else None
        self.weight: float = float(os.environ.get("BLASTER_WEIGHT", "0"))
        self.sound_enabled: bool = _env_bool("BLASTER_SOUND", True)
        self.vibration_enabled: bool = _env_bool("BLASTER_VIBRATION", True)
        self.tick_interval_sec: float = float(os.environ.get("BLASTER_TICK_SEC", "1.0"))
        if self.tick_interval_sec <= 0:
            raise ValueError("BLASTER_TICK_SEC must be > 0")

    @property
    def history_path(self) -> Path:
        return self.home / "sessions.jsonl"

    @property
    def catalogs_dir(self) -> Path:
        return self.home / "catalogs"
