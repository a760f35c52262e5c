from __future__ import annotations

from pathlib import Path

import pytest

from blaster.cli.main import build_engine, build_parser, format_time, main
from blaster.config import Settings
from blaster.workout.model import Exercise, WorkoutCatalog
from blaster.workout.session_store import SessionRecord, append_session
from blaster.workout.user_catalogs import save_user_catalog


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Settings:
    monkeypatch.setenv("BLASTER_HOME", str(tmp_path))
    monkeypatch.delenv("BLASTER_CATALOG", raising=False)
    monkeypatch.delenv("BLASTER_SOUND", raising=False)
    monkeypatch.delenv("BLASTER_VIBRATION", raising=False)
    monkeypatch.delenv("BLASTER_TICK_SEC", raising=False)
    monkeypatch.delenv("BLASTER_WEIGHT", raising=False)
    return Settings()


def test_format_time() -> None:
    assert format_time(0) == "00:00"
    assert format_time(75) == "01:15"
    assert format_time(-3) == "00:00"


def test_run_workout_to_completion(settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    catalog_file = settings.home / "tiny.json"
    catalog_file.write_text(
        '[{"id":"a","name":"Curl","duration":2},{"id":"b","name":"Hammer","duration":1}]',
        encoding="utf-8",
    )

    code = main(
        ["--catalog", str(catalog_file), "--tick", "0.01", "--weight", "6", "--no-vibration"]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "tiny: 2 exercises" in out
    assert "Next exercise!" in out
    assert "Workout complete!" in out
    assert "Session saved" in out
    assert settings.history_path.exists()

    code = main(["--history"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Sessions: 1" in out
    assert "Average weight: 6.0 kg" in out


def test_bad_catalog_falls_back(settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    bad = settings.home / "bad.json"
    bad.write_text("[]", encoding="utf-8")

    engine = build_engine(build_parser().parse_args(["--catalog", str(bad)]), settings)

    assert "using built-in fallback" in capsys.readouterr().out
    assert len(engine.catalog) >= 1


def test_saved_catalog_key_and_listing(
    settings: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    save_user_catalog(
        WorkoutCatalog(
            name="Forearms",
            exercises=(Exercise(id="f1", name="Wrist Curl", duration_sec=30),),
        ),
        base_dir=settings.catalogs_dir,
    )

    assert main(["--list-catalogs"]) == 0
    assert "forearms" in capsys.readouterr().out

    engine = build_engine(build_parser().parse_args(["--catalog", "forearms"]), settings)
    assert engine.catalog.names == ("Wrist Curl",)


def test_clear_history(settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    append_session(
        SessionRecord(
            id=1,
            date="2026-01-01T00:00:00+00:00",
            weight=5.0,
            exercises=("Curl",),
            duration=60,
            repetitions=1,
        ),
        path=settings.history_path,
    )

    assert main(["--clear-history"]) == 0
    assert "cleared" in capsys.readouterr().out
    assert not settings.history_path.exists()


def test_save_catalog_from_file_then_run_by_key(
    settings: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    source = settings.home / "import.csv"
    source.write_text("name,duration\nWrist Curl,20\nPinch Hold,15\n", encoding="utf-8")

    assert main(["--catalog", str(source), "--save-catalog", "Grip Work"]) == 0
    out = capsys.readouterr().out
    assert "Saved catalog 'grip-work' (2 exercises)" in out
    assert (settings.catalogs_dir / "grip-work.json").exists()

    assert main(["--list-catalogs"]) == 0
    assert "Grip Work (2 exercises, 00:35)" in capsys.readouterr().out

    engine = build_engine(build_parser().parse_args(["--catalog", "grip-work"]), settings)
    assert engine.catalog.name == "Grip Work"
    assert engine.catalog.names == ("Wrist Curl", "Pinch Hold")


def test_save_catalog_refuses_unusable_source(
    settings: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    bad = settings.home / "bad.json"
    bad.write_text('[{"name":"Curl","duration":0}]', encoding="utf-8")

    assert main(["--catalog", str(bad), "--save-catalog", "Nope"]) == 1
    assert "Catalog not saved" in capsys.readouterr().out
    assert not (settings.catalogs_dir / "nope.json").exists()


def test_unknown_catalog_key_falls_back(
    settings: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    engine = build_engine(build_parser().parse_args(["--catalog", "never-saved"]), settings)

    assert "No saved catalog named 'never-saved'" in capsys.readouterr().out
    assert len(engine.catalog) >= 1


@pytest.mark.parametrize("tick", ["0", "-1", "nan"])
def test_non_positive_tick_is_a_usage_error(
    settings: Settings, capsys: pytest.CaptureFixture[str], tick: str
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--tick", tick])

    assert excinfo.value.code == 2
    assert "--tick must be > 0" in capsys.readouterr().err
