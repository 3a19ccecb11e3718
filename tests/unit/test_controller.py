"""Tests for the submission flow state machine."""

from __future__ import annotations

from pathlib import Path

import pytest

from todaystrash.core.result import InvalidTransitionError
from todaystrash.trash.kv import KeyValueStore
from todaystrash.trash.lifecycle import LifecycleManager
from todaystrash.trash.models import Entry
from todaystrash.ui.controller import FlowState, SubmissionController


@pytest.fixture
def lifecycle(tmp_path: Path, clock) -> LifecycleManager:
    manager = LifecycleManager(KeyValueStore(tmp_path / "storage.json"), clock=clock)
    manager.load()
    return manager


@pytest.fixture
def controller(lifecycle: LifecycleManager) -> SubmissionController:
    return SubmissionController(lifecycle)


class TestInputStatus:
    def test_empty_draft_disables_submit(self, controller: SubmissionController) -> None:
        status = controller.status()
        assert status.counter == "0 / 300"
        assert not status.submit_enabled
        assert not status.near_limit

    def test_whitespace_enables_submit(self, controller: SubmissionController) -> None:
        assert controller.update_input("   ").submit_enabled

    def test_near_limit_at_threshold(self, controller: SubmissionController) -> None:
        assert not controller.update_input("x" * 279).near_limit
        status = controller.update_input("x" * 280)
        assert status.near_limit
        assert status.counter == "280 / 300"

    def test_input_is_cut_at_cap(self, controller: SubmissionController) -> None:
        status = controller.update_input("x" * 350)
        assert status.length == 300
        assert controller.draft == "x" * 300


class TestTransitions:
    def test_confirm_commits_and_resets(
        self, controller: SubmissionController, lifecycle: LifecycleManager
    ) -> None:
        seen: list[tuple[Entry, FlowState]] = []
        renders: list[int] = []
        controller.on_commit(lambda entry: seen.append((entry, controller.state)))
        controller.on_render(lambda: renders.append(1))

        controller.update_input("milk")
        assert controller.request_submit()
        assert controller.state is FlowState.CONFIRM_PENDING

        entry = controller.confirm()

        assert entry is not None
        assert entry.text == "milk"
        assert seen == [(entry, FlowState.COMMITTED)]
        assert renders == [1]
        assert controller.state is FlowState.IDLE
        assert controller.draft == ""
        assert [e.text for e in lifecycle.store] == ["milk"]

    def test_blank_submit_stays_idle(
        self, controller: SubmissionController, lifecycle: LifecycleManager
    ) -> None:
        controller.update_input("  \n ")
        assert controller.request_submit() is False
        assert controller.state is FlowState.IDLE
        assert len(lifecycle.store) == 0

    def test_cancel_keeps_draft(
        self, controller: SubmissionController, lifecycle: LifecycleManager
    ) -> None:
        controller.update_input("milk")
        controller.request_submit()
        controller.cancel()
        assert controller.state is FlowState.IDLE
        assert controller.draft == "milk"
        assert len(lifecycle.store) == 0

    def test_confirm_without_pending_raises(self, controller: SubmissionController) -> None:
        with pytest.raises(InvalidTransitionError):
            controller.confirm()
        with pytest.raises(InvalidTransitionError):
            controller.cancel()

    def test_double_submit_raises(self, controller: SubmissionController) -> None:
        controller.update_input("milk")
        controller.request_submit()
        with pytest.raises(InvalidTransitionError):
            controller.request_submit()

    def test_failing_hook_still_returns_to_idle(self, controller: SubmissionController) -> None:
        def broken(entry: Entry) -> None:
            raise RuntimeError("render failed")

        controller.on_commit(broken)
        controller.update_input("milk")
        controller.request_submit()
        with pytest.raises(RuntimeError):
            controller.confirm()
        assert controller.state is FlowState.IDLE


def test_configured_cap_never_exceeds_entry_limit(lifecycle: LifecycleManager) -> None:
    controller = SubmissionController(lifecycle, max_chars=500, warn_threshold=480)
    assert controller.update_input("x" * 400).length == 300


def test_confirm_after_midnight_lands_in_the_new_day(
    lifecycle: LifecycleManager, controller: SubmissionController, clock
) -> None:
    controller.update_input("yesterday")
    controller.request_submit()
    controller.confirm()
    clock.now = clock.now.replace(day=2, hour=0, minute=0, second=1)

    controller.update_input("today")
    controller.request_submit()
    entry = controller.confirm()

    assert entry is not None
    assert [e.text for e in lifecycle.store] == ["today"]
    assert lifecycle.date_key == "2024-01-02"
