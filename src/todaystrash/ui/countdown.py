"""Time-to-midnight countdown that also performs the daily purge."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from todaystrash.core.console import get_logger
from todaystrash.core.daytime import Clock, date_key, format_hms, local_now, seconds_until_midnight
from todaystrash.trash.lifecycle import LifecycleManager

logger = get_logger(__name__)


class CountdownTimer:
    """Ticks once per period, rendering HH:MM:SS until the next local midnight.

    The store's own day key is the reference: the first tick that sees a
    different calendar day purges, which re-keys the store, so each boundary
    purges once.
    """

    def __init__(
        self,
        lifecycle: LifecycleManager,
        *,
        clock: Clock = local_now,
        tick_seconds: float = 1.0,
    ) -> None:
        self._lifecycle = lifecycle
        self._clock = clock
        self._tick_seconds = tick_seconds
        self._tick_hooks: list[Callable[[str], None]] = []
        self._rollover_hooks: list[Callable[[str], None]] = []
        self.display = "--:--:--"
        self.rollovers = 0

    def on_tick(self, hook: Callable[[str], None]) -> None:
        self._tick_hooks.append(hook)

    def on_rollover(self, hook: Callable[[str], None]) -> None:
        self._rollover_hooks.append(hook)

    def tick(self) -> str:
        now = self._clock()
        today = date_key(now)
        if today != self._lifecycle.date_key:
            self._rollover(today)

        self.display = format_hms(seconds_until_midnight(now))
        for hook in self._tick_hooks:
            hook(self.display)
        return self.display

    def _rollover(self, today: str) -> None:
        logger.info("Midnight passed (%s -> %s); emptying the trash", self._lifecycle.date_key, today)
        result = self._lifecycle.purge()
        if result.is_err():
            logger.warning("%s", result.error)
        self.rollovers += 1
        for hook in self._rollover_hooks:
            hook(today)

    async def run(self, stop: asyncio.Event | None = None) -> None:
        """Tick until stop is set or the task is cancelled."""
        stop = stop or asyncio.Event()
        while not stop.is_set():
            self.tick()
            try:
                await asyncio.wait_for(stop.wait(), timeout=self._tick_seconds)
            except asyncio.TimeoutError:
                continue


__all__ = ["CountdownTimer"]
