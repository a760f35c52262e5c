"""Audio and haptic cues fired on workout transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Protocol, Sequence

logger = logging.getLogger(__name__)


CueKind = Literal["exercise-change", "workout-complete"]

EXERCISE_CHANGE_PATTERN: tuple[int, ...] = (300, 100, 300)
WORKOUT_COMPLETE_PATTERN: tuple[int, ...] = (500, 200, 500, 200, 500)
COUNTDOWN_WARNING_PATTERN: tuple[int, ...] = (200,)


class EffectsSink(Protocol):
    def play_cue(self, kind: CueKind) -> None: ...

    def vibrate(self, pattern: Sequence[int]) -> None: ...


class SilentEffectsSink:
    def play_cue(self, kind: CueKind) -> None:
        return None

    def vibrate(self, pattern: Sequence[int]) -> None:
        return None


@dataclass
class EffectToggles:
    sound_enabled: bool = True
    vibration_enabled: bool = True


class EffectsDispatcher:
    """Fire-and-forget bridge between transitions and an :class:`EffectsSink`.

    Toggles are read on every dispatch so they can be flipped mid-workout.
    Sink failures are swallowed here and never reach the state machine.
    """

    def __init__(self, sink: EffectsSink, toggles: EffectToggles | None = None) -> None:
        self._sink = sink
        self.toggles = toggles or EffectToggles()

    def exercise_changed(self) -> None:
        self._cue("exercise-change")
        self._vibrate(EXERCISE_CHANGE_PATTERN)

    def workout_completed(self) -> None:
        self._cue("workout-complete")
        self._vibrate(WORKOUT_COMPLETE_PATTERN)

    def countdown_warning(self) -> None:
        self._vibrate(COUNTDOWN_WARNING_PATTERN)

    def _cue(self, kind: CueKind) -> None:
        if not self.toggles.sound_enabled:
            return
        self._attempt(lambda: self._sink.play_cue(kind), f"cue {kind}")

    def _vibrate(self, pattern: Sequence[int]) -> None:
        if not self.toggles.vibration_enabled:
            return
        self._attempt(lambda: self._sink.vibrate(list(pattern)), f"vibrate {list(pattern)}")

    @staticmethod
    def _attempt(action: Callable[[], None], label: str) -> None:
        try:
            action()
        except Exception as exc:
            logger.debug("Effect %s failed: %s", label, exc)
