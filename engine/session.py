"""
session.py — Visualization Session
===================================
The caller side of the engine: takes a graph snapshot and an algorithm id,
decides whether the run may start, and then either animates it (auto mode)
or hands the steps to a Stepper (manual mode).

    session = VisualizationSession()
    outcome = session.run("dijkstra", graph.to_snapshot(0, 5))
    if not outcome.ok:
        show(outcome.message)
    session.scheduler.run_pending()          # drive animation / auto-play

Run sequence:
  1. Cancel whatever the previous run left scheduled, clear its flags.
  2. Refuse negative weights for algorithms that cannot take them.
  3. execute() the adapter.  An error aborts here, before any stepping.
  4. MANUAL: drain the generator into the Stepper (index -1).
     AUTO:   animate visited edges, then result edges, then state DONE.

Every annotation, in either mode, goes through engine.trace.apply_step.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Union

from algorithms import (
    AlgorithmAdapter,
    AlgorithmRegistry,
    AlgorithmResult,
    AlgorithmStep,
    EdgeRef,
    StepType,
    registry as default_registry,
)
from graph import GraphSnapshot
from engine.animation import AnimationController, animate_sequence
from engine.recorder import RunSummary, summarize
from engine.stepper import DEFAULT_SPEED, MIN_SPEED, SPEED_PRESETS, Stepper
from engine.timers import Scheduler
from engine.trace import TraceFlags, apply_step

logger = logging.getLogger(__name__)

ALGORITHMS_NO_NEGATIVE_WEIGHTS: FrozenSet[str] = frozenset({"dijkstra"})


class UnknownAlgorithmError(KeyError):
    """Raised when an algorithm id is not in the registry."""


class VisualizationMode(Enum):
    AUTO   = "auto"
    MANUAL = "manual"


class VisualizationState(Enum):
    IDLE    = "idle"
    RUNNING = "running"
    DONE    = "done"


@dataclass
class RunOutcome:
    """What the UI should tell the user after run()."""
    ok:      bool
    message: Optional[str]             = None
    level:   str                       = "info"     # "info" | "warning" | "error"
    result:  Optional[AlgorithmResult] = None
    steps:   List[AlgorithmStep]       = field(default_factory=list)


class VisualizationSession:

    def __init__(
        self,
        registry: Optional[AlgorithmRegistry] = None,
        scheduler: Optional[Scheduler] = None,
        mode: VisualizationMode = VisualizationMode.AUTO,
        speed: float = DEFAULT_SPEED,
    ):
        self.registry:     AlgorithmRegistry       = registry or default_registry
        self.scheduler:    Scheduler               = scheduler or Scheduler()
        self.mode:         VisualizationMode       = mode
        self.state:        VisualizationState      = VisualizationState.IDLE
        self.speed:        float                   = max(MIN_SPEED, speed)
        self.algorithm_id: Optional[str]           = None
        self.snapshot:     Optional[GraphSnapshot] = None
        self.summary:      Optional[RunSummary]    = None
        self.stepper:      Stepper                 = Stepper(self.scheduler)

        self.stepper.speed = self.speed
        self._trace = TraceFlags()
        self._animation: Optional[AnimationController] = None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_algorithm(self, algorithm_id: str) -> AlgorithmAdapter:
        adapter = self._adapter(algorithm_id)
        if algorithm_id != self.algorithm_id:
            self.reset()
        self.algorithm_id = algorithm_id
        return adapter

    @property
    def adapter(self) -> Optional[AlgorithmAdapter]:
        return self.registry.get(self.algorithm_id) if self.algorithm_id else None

    def _adapter(self, algorithm_id: str) -> AlgorithmAdapter:
        adapter = self.registry.get(algorithm_id)
        if adapter is None:
            raise UnknownAlgorithmError(algorithm_id)
        return adapter

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------
    def run(self, algorithm_id: str, snapshot: GraphSnapshot) -> RunOutcome:
        adapter = self._adapter(algorithm_id)
        self.reset()
        self.algorithm_id = algorithm_id
        self.snapshot = snapshot
        name = adapter.metadata.name

        if algorithm_id in ALGORITHMS_NO_NEGATIVE_WEIGHTS and snapshot.has_negative_weights():
            message = f"{name} doesn't support negative edge weights. Use Bellman-Ford instead."
            logger.warning("Rejected %s run: negative edge weights", algorithm_id)
            return RunOutcome(ok=False, message=message, level="warning")

        logger.info(
            "Running %s (start=%s, end=%s, mode=%s)",
            algorithm_id, snapshot.start_node_id, snapshot.end_node_id, self.mode.value,
        )
        started = time.monotonic()
        result = adapter.execute(snapshot)
        wall_ms = (time.monotonic() - started) * 1000

        if result.error:
            logger.info("Run of %s aborted: %s", algorithm_id, result.error)
            self.summary = summarize(adapter, snapshot, [], error=result.error, wall_time_ms=wall_ms)
            return RunOutcome(
                ok=False,
                message=self.registry.get_failure_message(algorithm_id),
                level="error",
                result=result,
            )

        steps = list(adapter.generator(snapshot))
        self.summary = summarize(adapter, snapshot, steps, wall_time_ms=wall_ms)
        self.state = VisualizationState.RUNNING

        if self.mode is VisualizationMode.MANUAL:
            self.stepper.speed = self.speed
            self.stepper.load(steps, snapshot)
            logger.debug("Manual run of %s: %d steps", algorithm_id, len(steps))
        else:
            self._animate(result)

        return RunOutcome(ok=True, result=result, steps=steps)

    def _animate(self, result: AlgorithmResult) -> None:
        result_type = result.result_step_type or StepType.RESULT
        result_edges = result.result_edges or []

        def mark(step_type: StepType):
            def on_step(edge: EdgeRef, _index: int) -> None:
                apply_step(self._trace, AlgorithmStep(step_type, edge), self.snapshot)
            return on_step

        def finish() -> None:
            self._animation = None
            self.state = VisualizationState.DONE
            logger.debug("Animation of %s finished", self.algorithm_id)

        def animate_result() -> None:
            self._animation = animate_sequence(
                self.scheduler, result_edges, self.speed, mark(result_type), finish,
            )

        self._animation = animate_sequence(
            self.scheduler, result.visited_edges, self.speed, mark(StepType.VISIT), animate_result,
        )

    def cancel(self) -> None:
        """Stop every pending timer.  Flags stay as they are."""
        if self._animation is not None:
            self._animation.cancel()
            self._animation = None
        self.stepper.pause()
        if self.state is VisualizationState.RUNNING and self.mode is VisualizationMode.AUTO:
            self.state = VisualizationState.IDLE

    def reset(self) -> None:
        """cancel() and clear every annotation."""
        self.cancel()
        self.stepper.reset()
        self._trace = TraceFlags()
        self.state = VisualizationState.IDLE
        self.summary = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_mode(self, mode: Union[VisualizationMode, str]) -> None:
        mode = VisualizationMode(mode)
        if mode is not self.mode:
            self.reset()
            self.mode = mode

    def set_speed(self, speed: Union[float, str]) -> float:
        """Seconds per step, or a preset name such as "2x"."""
        if isinstance(speed, str):
            seconds = SPEED_PRESETS.get(speed, DEFAULT_SPEED)
        else:
            seconds = float(speed)
        self.speed = max(MIN_SPEED, seconds)
        self.stepper.set_speed_value(self.speed)
        return self.speed

    # ------------------------------------------------------------------
    # Manual-mode navigation (no-ops in auto mode)
    # ------------------------------------------------------------------
    def _manual(self) -> bool:
        return self.mode is VisualizationMode.MANUAL and self.stepper.is_loaded

    def step_forward(self) -> bool:
        return self._manual() and self.stepper.step_forward()

    def step_backward(self) -> bool:
        return self._manual() and self.stepper.step_backward()

    def jump_to_step(self, index: int) -> int:
        if not self._manual():
            return self.stepper.index
        return self.stepper.jump_to_step(index)

    def play(self) -> bool:
        return self._manual() and self.stepper.play()

    def pause(self) -> None:
        self.stepper.pause()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> TraceFlags:
        if self._manual():
            return self.stepper.trace
        return self._trace

    @property
    def is_visualizing(self) -> bool:
        return self.state is VisualizationState.RUNNING

    def to_dict(self) -> dict:
        d = {
            "algorithm": self.algorithm_id,
            "mode":      self.mode.value,
            "state":     self.state.value,
            "speed":     self.speed,
            "trace":     self.trace.to_dict(),
        }
        if self._manual():
            history = self.stepper.history
            current = history.current
            d["step"] = {
                "index":         history.index,
                "total":         len(history.steps),
                "isComplete":    history.is_complete,
                "isAutoPlaying": history.is_auto_playing,
                "current":       current.to_dict() if current else None,
            }
        if self.summary is not None:
            d["summary"] = self.summary.to_dict()
        return d
