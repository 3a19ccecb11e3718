"""Tests for the midnight countdown and rollover purge."""

from __future__ import annotations

import asyncio
import datetime as dt
from pathlib import Path

import pytest

from todaystrash.trash.kv import KeyValueStore
from todaystrash.trash.lifecycle import DATE_KEY, LifecycleManager
from todaystrash.ui.countdown import CountdownTimer


@pytest.fixture
def lifecycle(tmp_path: Path, clock) -> LifecycleManager:
    clock.now = dt.datetime(2024, 1, 1, 23, 59, 58)
    manager = LifecycleManager(KeyValueStore(tmp_path / "storage.json"), clock=clock)
    manager.load()
    manager.store.add_entry("milk")
    return manager


def test_tick_before_midnight_keeps_entries(lifecycle: LifecycleManager, clock) -> None:
    timer = CountdownTimer(lifecycle, clock=clock)
    assert timer.tick() == "00:00:02"
    assert len(lifecycle.store) == 1
    assert timer.rollovers == 0


def test_crossing_midnight_purges_once(lifecycle: LifecycleManager, clock, tmp_path: Path) -> None:
    timer = CountdownTimer(lifecycle, clock=clock)
    rolled: list[str] = []
    timer.on_rollover(rolled.append)

    timer.tick()
    clock.advance(seconds=3)
    assert timer.tick() == "23:59:59"

    assert len(lifecycle.store) == 0
    assert rolled == ["2024-01-02"]
    assert KeyValueStore(tmp_path / "storage.json").get(DATE_KEY) == "2024-01-02"

    for _ in range(5):
        clock.advance(seconds=1)
        timer.tick()
    assert timer.rollovers == 1


def test_entries_added_after_rollover_survive(lifecycle: LifecycleManager, clock) -> None:
    timer = CountdownTimer(lifecycle, clock=clock)
    clock.advance(seconds=3)
    timer.tick()
    lifecycle.store.add_entry("new day")
    clock.advance(seconds=1)
    timer.tick()
    assert [e.text for e in lifecycle.store] == ["new day"]


def test_display_never_negative(lifecycle: LifecycleManager, clock) -> None:
    clock.now = dt.datetime(2024, 1, 1, 23, 59, 59, 999000)
    timer = CountdownTimer(lifecycle, clock=clock)
    assert timer.tick() == "00:00:00"


def test_tick_hooks_receive_display(lifecycle: LifecycleManager, clock) -> None:
    timer = CountdownTimer(lifecycle, clock=clock)
    shown: list[str] = []
    timer.on_tick(shown.append)
    timer.tick()
    assert shown == ["00:00:02"]
    assert timer.display == "00:00:02"


@pytest.mark.asyncio
async def test_run_stops_when_event_set(lifecycle: LifecycleManager, clock) -> None:
    timer = CountdownTimer(lifecycle, clock=clock, tick_seconds=0.01)
    shown: list[str] = []
    timer.on_tick(shown.append)
    stop = asyncio.Event()

    task = asyncio.create_task(timer.run(stop))
    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(task, timeout=1)

    assert shown
    assert task.done()


def test_tick_after_add_rolled_over_keeps_new_entry(lifecycle: LifecycleManager, clock) -> None:
    timer = CountdownTimer(lifecycle, clock=clock)
    timer.tick()
    clock.advance(seconds=3)

    lifecycle.add_entry("eggs")
    timer.tick()

    assert [e.text for e in lifecycle.store] == ["eggs"]
    assert timer.rollovers == 0
