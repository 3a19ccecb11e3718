"""Interactive terminal session.

Wires the lifecycle manager, submission controller, countdown and particle
burst onto one asyncio loop. Blocking prompts run in a worker thread so the
countdown keeps ticking (and purging at midnight) while the user types.
"""

from __future__ import annotations

import asyncio
import random
import threading
from collections.abc import Callable
from typing import TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from todaystrash.core.config import UIConfig
from todaystrash.core.console import get_logger
from todaystrash.core.daytime import Clock, local_now
from todaystrash.i18n.locales import LocaleBundle, plain_text
from todaystrash.trash.lifecycle import LifecycleManager
from todaystrash.trash.models import Entry
from todaystrash.ui.controller import FlowState, SubmissionController
from todaystrash.ui.countdown import CountdownTimer
from todaystrash.ui.particles import ParticleEffect, burst_for
from todaystrash.ui.render import render_dashboard, render_modal

logger = get_logger(__name__)

AskText = Callable[[str], str]
AskConfirm = Callable[[str], bool]

T = TypeVar("T")


def _settle(future: asyncio.Future[T], value: T | None, error: BaseException | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(value)  # type: ignore[arg-type]


async def ask_in_thread(ask: Callable[[str], T], prompt: str) -> T:
    """Run a blocking prompt on a daemon thread and await its answer.

    Cancelling the await abandons the thread instead of joining it, so Ctrl-C
    does not wait for a pending input() to return.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def worker() -> None:
        try:
            value = ask(prompt)
        except BaseException as exc:
            outcome: tuple[T | None, BaseException | None] = (None, exc)
        else:
            outcome = (value, None)
        try:
            loop.call_soon_threadsafe(_settle, future, *outcome)
        except RuntimeError:
            # loop already closed; nobody is waiting
            pass

    threading.Thread(target=worker, name="trash-prompt", daemon=True).start()
    return await future


class TrashSession:
    def __init__(
        self,
        lifecycle: LifecycleManager,
        bundle: LocaleBundle,
        ui: UIConfig,
        *,
        console: Console,
        clock: Clock = local_now,
        ask_text: AskText | None = None,
        ask_confirm: AskConfirm | None = None,
        rng: random.Random | None = None,
        animate: bool = True,
    ) -> None:
        self._lifecycle = lifecycle
        self._bundle = bundle
        self._ui = ui
        self._console = console
        self._rng = rng
        self._animate = animate
        self._ask_text = ask_text or (lambda prompt: Prompt.ask(prompt, console=console))
        self._ask_confirm = ask_confirm or (
            lambda prompt: Confirm.ask(prompt, console=console, default=False)
        )
        self._pending_burst: ParticleEffect | None = None

        self.controller = SubmissionController(
            lifecycle, max_chars=ui.max_chars, warn_threshold=ui.warn_threshold
        )
        self.countdown = CountdownTimer(lifecycle, clock=clock, tick_seconds=ui.tick_seconds)
        self.controller.on_commit(self._queue_burst)
        self.controller.on_render(self.show)
        self.countdown.on_rollover(self._announce_rollover)

    def _queue_burst(self, entry: Entry) -> None:
        if self._animate and self._ui.particle_count > 0:
            self._pending_burst = burst_for(self._console, self._ui.particle_count, self._rng)

    def _announce_rollover(self, today: str) -> None:
        self._console.print(f"[magenta]{escape(plain_text(self._bundle.empty_state))}[/magenta]")

    def show(self) -> None:
        self._console.print(
            render_dashboard(
                self._bundle,
                self._lifecycle.store,
                self.countdown.display,
                self.controller.status(),
            )
        )

    async def handle(self, text: str) -> Entry | None:
        """Run one submission through the confirm modal."""
        status = self.controller.update_input(text)
        if len(text) > status.max_chars:
            self._console.print(f"[yellow]Trimmed to {status.max_chars} characters.[/yellow]")
        if not self.controller.request_submit():
            return None

        self._console.print(render_modal(self._bundle, self.controller.draft))
        prompt = escape(plain_text(self._bundle.modal_confirm))
        confirmed = await ask_in_thread(self._ask_confirm, prompt)
        if not confirmed:
            self.controller.cancel()
            return None

        entry = self.controller.confirm()
        if self._pending_burst is not None:
            burst, self._pending_burst = self._pending_burst, None
            await burst.play(self._console, self._ui.frame_rate)
        return entry

    async def run(self) -> int:
        """Loop until EOF or Ctrl-C. Returns how many entries were thrown away.

        Ctrl-C cancels this task while a prompt thread may still sit in input();
        the cancellation ends the loop like EOF does.
        """
        self._lifecycle.load()
        self.countdown.tick()
        stop = asyncio.Event()
        timer = asyncio.create_task(self.countdown.run(stop))
        committed = 0
        prompt = escape(plain_text(self._bundle.placeholder))
        self.show()
        try:
            while True:
                try:
                    text = await ask_in_thread(self._ask_text, prompt)
                    entry = await self.handle(text)
                except (EOFError, KeyboardInterrupt, asyncio.CancelledError):
                    if self.controller.state is FlowState.CONFIRM_PENDING:
                        self.controller.cancel()
                    break
                if entry is None:
                    self.show()
                else:
                    committed += 1
        finally:
            stop.set()
            await timer
        logger.debug("Session ended after %d entries", committed)
        return committed


__all__ = ["TrashSession"]
