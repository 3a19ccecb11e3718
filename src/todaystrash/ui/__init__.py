"""Terminal widget: submission flow, countdown, particle burst and session loop."""

from todaystrash.ui.controller import FlowState, InputStatus, SubmissionController
from todaystrash.ui.countdown import CountdownTimer
from todaystrash.ui.particles import ParticleEffect
from todaystrash.ui.session import TrashSession

__all__ = [
    "CountdownTimer",
    "FlowState",
    "InputStatus",
    "ParticleEffect",
    "SubmissionController",
    "TrashSession",
]
