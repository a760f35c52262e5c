from __future__ import annotations

from typing import Sequence

from blaster.workout.effects import (
    EXERCISE_CHANGE_PATTERN,
    WORKOUT_COMPLETE_PATTERN,
    EffectsDispatcher,
    EffectToggles,
)


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def play_cue(self, kind: str) -> None:
        self.calls.append(("cue", kind))

    def vibrate(self, pattern: Sequence[int]) -> None:
        self.calls.append(("vibrate", list(pattern)))


class BrokenSink:
    def play_cue(self, kind: str) -> None:
        raise RuntimeError("no audio device")

    def vibrate(self, pattern: Sequence[int]) -> None:
        raise NotImplementedError("no haptics")


def test_exercise_change_and_completion_cues() -> None:
    sink = RecordingSink()
    dispatcher = EffectsDispatcher(sink)

    dispatcher.exercise_changed()
    dispatcher.workout_completed()

    assert sink.calls == [
        ("cue", "exercise-change"),
        ("vibrate", list(EXERCISE_CHANGE_PATTERN)),
        ("cue", "workout-complete"),
        ("vibrate", list(WORKOUT_COMPLETE_PATTERN)),
    ]


def test_warning_is_haptic_only() -> None:
    sink = RecordingSink()
    EffectsDispatcher(sink).countdown_warning()

    assert sink.calls == [("vibrate", [200])]


def test_toggles_are_read_at_dispatch_time() -> None:
    sink = RecordingSink()
    toggles = EffectToggles()
    dispatcher = EffectsDispatcher(sink, toggles)

    toggles.sound_enabled = False
    dispatcher.exercise_changed()
    assert sink.calls == [("vibrate", list(EXERCISE_CHANGE_PATTERN))]

    toggles.vibration_enabled = False
    dispatcher.workout_completed()
    assert len(sink.calls) == 1

    toggles.sound_enabled = True
    dispatcher.workout_completed()
    assert sink.calls[-1] == ("cue", "workout-complete")


def test_sink_failures_are_swallowed() -> None:
    dispatcher = EffectsDispatcher(BrokenSink())

    dispatcher.exercise_changed()
    dispatcher.workout_completed()
    dispatcher.countdown_warning()
