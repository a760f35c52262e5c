from __future__ import annotations

import asyncio

import pytest

from blaster.core.countdown import Countdown


def test_countdown_ticks_until_stopped() -> None:
    async def _run() -> None:
        ticks: list[int] = []
        countdown = Countdown(lambda: ticks.append(1), interval_sec=0.01)

        countdown.start()
        assert countdown.is_active
        await asyncio.sleep(0.08)
        countdown.stop()
        seen = len(ticks)
        await asyncio.sleep(0.05)

        assert seen >= 2
        assert len(ticks) == seen
        assert not countdown.is_active

    asyncio.run(_run())


def test_start_is_idempotent() -> None:
    async def _run() -> None:
        countdown = Countdown(lambda: None, interval_sec=0.01)
        countdown.start()
        generation = countdown.generation
        countdown.start()
        assert countdown.generation == generation
        countdown.stop()

    asyncio.run(_run())


def test_stop_inside_tick_prevents_further_ticks() -> None:
    async def _run() -> None:
        ticks: list[int] = []

        def on_tick() -> None:
            ticks.append(1)
            countdown.stop()

        countdown = Countdown(on_tick, interval_sec=0.01)
        countdown.start()
        await asyncio.sleep(0.08)
        assert ticks == [1]

    asyncio.run(_run())


def test_restart_keeps_a_single_tick_source() -> None:
    async def _run() -> None:
        ticks: list[int] = []
        countdown = Countdown(lambda: ticks.append(1), interval_sec=0.02)
        countdown.start()
        for _ in range(5):
            countdown.restart()
        await asyncio.sleep(0.05)
        countdown.stop()

        # One source at 20ms cadence yields at most two ticks in 50ms.
        assert 1 <= len(ticks) <= 2

    asyncio.run(_run())


def test_invalid_interval() -> None:
    with pytest.raises(ValueError):
        Countdown(lambda: None, interval_sec=0)
