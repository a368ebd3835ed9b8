"""
engine/
-------
Replay, playback & run orchestration layer.

    from engine import VisualizationSession, Stepper, derive_trace
"""

from engine.timers    import ManualClock, Scheduler, TimerHandle, TimerSlot
from engine.trace     import EdgeFlags, NodeFlags, TraceFlags, apply_step, apply_steps, derive_trace, edge_key
from engine.animation import AnimationController, animate_sequence
from engine.stepper   import DEFAULT_SPEED, MIN_SPEED, SPEED_PRESETS, StepHistory, Stepper, StepperState
from engine.recorder  import ComparisonResult, RunSummary, compare, record_run, summarize
from engine.session   import (
    ALGORITHMS_NO_NEGATIVE_WEIGHTS,
    RunOutcome,
    UnknownAlgorithmError,
    VisualizationMode,
    VisualizationSession,
    VisualizationState,
)

__all__ = [
    "ALGORITHMS_NO_NEGATIVE_WEIGHTS",
    "AnimationController",
    "ComparisonResult",
    "DEFAULT_SPEED",
    "EdgeFlags",
    "MIN_SPEED",
    "ManualClock",
    "NodeFlags",
    "RunOutcome",
    "RunSummary",
    "SPEED_PRESETS",
    "Scheduler",
    "StepHistory",
    "Stepper",
    "StepperState",
    "TimerHandle",
    "TimerSlot",
    "TraceFlags",
    "UnknownAlgorithmError",
    "VisualizationMode",
    "VisualizationSession",
    "VisualizationState",
    "animate_sequence",
    "apply_step",
    "apply_steps",
    "compare",
    "derive_trace",
    "edge_key",
    "record_run",
    "summarize",
]
