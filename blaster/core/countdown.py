"""One-second tick source driven by an asyncio task."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

TickCallback = Callable[[], None]


class Countdown:
    """Deliver ``on_tick`` once per interval while armed.

    Only one tick task exists at a time.  ``stop`` cancels the pending sleep
    and bumps the generation, so a task woken in the same loop iteration
    still sees a stale generation and returns without calling back.
    """

    def __init__(self, on_tick: TickCallback, interval_sec: float = 1.0) -> None:
        if interval_sec <= 0:
            raise ValueError("Tick interval must be > 0")
        self._on_tick = on_tick
        self._interval_sec = interval_sec
        self._task: Optional[asyncio.Task[None]] = None
        self._generation = 0

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def generation(self) -> int:
        return self._generation

    def start(self) -> None:
        if self.is_active:
            return
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(self._run(self._generation))

    def stop(self) -> None:
        self._generation += 1
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    def restart(self) -> None:
        self.stop()
        self.start()

    async def _run(self, generation: int) -> None:
        while generation == self._generation:
            await asyncio.sleep(self._interval_sec)
            if generation != self._generation:
                return
            self._on_tick()
