"""Submission flow: input validation and the confirm modal.

    IDLE --request_submit()--> CONFIRM_PENDING --cancel()--> IDLE
                                               --confirm()--> COMMITTED --> IDLE
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from todaystrash.core.console import get_logger
from todaystrash.core.result import InvalidTransitionError
from todaystrash.trash.lifecycle import LifecycleManager
from todaystrash.trash.models import MAX_ENTRY_CHARS, Entry

logger = get_logger(__name__)

CommitHook = Callable[[Entry], None]


class FlowState(str, Enum):
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    COMMITTED = "committed"


@dataclass(frozen=True, slots=True)
class InputStatus:
    """What the input area should show for the current draft."""

    length: int
    max_chars: int
    near_limit: bool
    submit_enabled: bool

    @property
    def counter(self) -> str:
        return f"{self.length} / {self.max_chars}"


class SubmissionController:
    def __init__(
        self,
        lifecycle: LifecycleManager,
        *,
        max_chars: int = MAX_ENTRY_CHARS,
        warn_threshold: int = 280,
    ) -> None:
        self._lifecycle = lifecycle
        self._max_chars = min(max_chars, MAX_ENTRY_CHARS)
        self._warn_threshold = warn_threshold
        self._draft = ""
        self._state = FlowState.IDLE
        self._commit_hooks: list[CommitHook] = []
        self._render_hooks: list[Callable[[], None]] = []

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def draft(self) -> str:
        return self._draft

    def on_commit(self, hook: CommitHook) -> None:
        self._commit_hooks.append(hook)

    def on_render(self, hook: Callable[[], None]) -> None:
        self._render_hooks.append(hook)

    def _render(self) -> None:
        for hook in self._render_hooks:
            hook()

    def status(self) -> InputStatus:
        length = len(self._draft)
        return InputStatus(
            length=length,
            max_chars=self._max_chars,
            near_limit=length >= self._warn_threshold,
            submit_enabled=length > 0,
        )

    def update_input(self, text: str) -> InputStatus:
        """Replace the draft, cut at the character cap."""
        self._draft = text[: self._max_chars]
        return self.status()

    def request_submit(self) -> bool:
        """Open the confirm modal; ignored while the draft is blank."""
        if self._state is not FlowState.IDLE:
            raise InvalidTransitionError(
                "Submission already pending", context={"state": self._state.value}
            )
        if not self._draft.strip():
            return False
        self._state = FlowState.CONFIRM_PENDING
        return True

    def cancel(self) -> None:
        self._require_pending("cancel")
        self._state = FlowState.IDLE

    def confirm(self) -> Entry | None:
        """Commit the draft: store it, fire effects, reset the input."""
        self._require_pending("confirm")
        self._state = FlowState.COMMITTED
        try:
            entry = self._lifecycle.add_entry(self._draft)
            if entry is not None:
                logger.debug("Committed entry %s (%d chars)", entry.id, len(entry.text))
                for hook in self._commit_hooks:
                    hook(entry)
            self._draft = ""
            self._render()
            return entry
        finally:
            self._state = FlowState.IDLE

    def _require_pending(self, action: str) -> None:
        if self._state is not FlowState.CONFIRM_PENDING:
            raise InvalidTransitionError(
                f"Cannot {action} without an open confirmation",
                context={"state": self._state.value},
            )


__all__ = ["FlowState", "InputStatus", "SubmissionController"]
