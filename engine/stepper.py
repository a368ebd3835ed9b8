"""
stepper.py — Step-Through Replay Engine
========================================
The Stepper is the ONLY object the UI interacts with during a manual run.
It owns the step history, the current index, the trace flags derived from
them, and the auto-play timer.

    stepper = Stepper(scheduler)
    stepper.load(adapter.generator(snapshot), snapshot)   # index = -1
    stepper.step_forward()                                 # index = 0
    stepper.jump_to_step(7)
    stepper.play()                                         # ticks on the scheduler

State (derived, never stored separately):
    IDLE      nothing loaded
    PAUSED    loaded, not auto-playing, not at the end
    PLAYING   auto-play timer armed
    FINISHED  generator exhausted and index on the last step

Design decisions:
  - Navigation only ever moves `index`.  `steps` is append-only.
  - Every index change re-derives TraceFlags from scratch over
    steps[0..index] (engine.trace.derive_trace).  Nothing is patched
    incrementally, so seeking in any order reproduces a forward walk.
  - `load(..., eager=True)` drains the generator up front, as manual mode
    does.  With eager=False steps are pulled one at a time as the index
    reaches the end of the buffer.
  - Auto-play lives in a TimerSlot.  Every transition that clears
    `is_auto_playing` also cancels the timer, so no tick fires after it.

Thread safety:
  This class is NOT thread-safe.  Drive it and its Scheduler from a single
  thread.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from algorithms.step import AlgorithmStep
from graph import GraphSnapshot
from engine.timers import Scheduler, TimerSlot
from engine.trace import TraceFlags, derive_trace

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, float] = {
    "0.5x": 0.8,
    "1x":   0.4,
    "2x":   0.2,
    "4x":   0.1,
}
DEFAULT_SPEED = SPEED_PRESETS["1x"]
MIN_SPEED     = 0.02


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------
@dataclass
class StepHistory:
    steps:           List[AlgorithmStep] = field(default_factory=list)
    index:           int                 = -1
    is_complete:     bool                = False
    is_auto_playing: bool                = False

    @property
    def current(self) -> Optional[AlgorithmStep]:
        if 0 <= self.index < len(self.steps):
            return self.steps[self.index]
        return None

    def to_dict(self) -> dict:
        return {
            "steps":         [s.to_dict() for s in self.steps],
            "index":         self.index,
            "isComplete":    self.is_complete,
            "isAutoPlaying": self.is_auto_playing,
        }


StepSource = Union[Iterable[AlgorithmStep], Iterator[AlgorithmStep]]


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        history   : StepHistory (steps, index, completion, auto-play flag).
        trace     : TraceFlags for steps[0..index], re-derived on every move.
        snapshot  : Graph the steps came from; lets the trace mark both
                    directions of undirected edges.  Optional.
        speed     : Seconds between auto-play ticks.
        on_change : Optional callback(Stepper) fired after every index change
                    and auto-play transition.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[["Stepper"], None]] = None,
    ):
        self.history:   StepHistory             = StepHistory()
        self.trace:     TraceFlags              = TraceFlags()
        self.snapshot:  Optional[GraphSnapshot] = None
        self.speed:     float                   = DEFAULT_SPEED
        self.on_change: Optional[Callable[["Stepper"], None]] = on_change

        self.scheduler = scheduler or Scheduler()
        self._autoplay = TimerSlot()
        self._generator: Optional[Iterator[AlgorithmStep]] = None
        self._loaded    = False
        self._exhausted = True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(
        self,
        steps: StepSource,
        snapshot: Optional[GraphSnapshot] = None,
        eager: bool = True,
    ) -> None:
        """Attach a step source.  The index starts at -1 (nothing shown)."""
        self._stop_autoplay()
        self.history   = StepHistory()
        self.trace     = TraceFlags()
        self.snapshot  = snapshot
        self._loaded   = True
        self._generator = iter(steps)
        self._exhausted = False
        if eager:
            self.history.steps.extend(self._generator)
            self._generator = None
            self._exhausted = True
        self.history.is_complete = (
            self._exhausted and self.history.index == len(self.history.steps) - 1
        )
        logger.debug("Stepper loaded %d steps (eager=%s)", len(self.history.steps), eager)
        self._notify()

    def reset(self) -> None:
        """Back to IDLE; caller must load() again."""
        self._stop_autoplay()
        self.history    = StepHistory()
        self.trace      = TraceFlags()
        self.snapshot   = None
        self._generator = None
        self._loaded    = False
        self._exhausted = True
        self._notify()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  Returns False if already on the last step."""
        if not self._loaded:
            return False
        target = self.history.index + 1
        if not self._ensure(target):
            return False
        self._goto(target)
        return True

    def step_backward(self) -> bool:
        """Rewind one step.  Never goes below index 0."""
        if not self._loaded or self.history.index <= 0:
            return False
        self._goto(self.history.index - 1)
        return True

    def jump_to_step(self, index: int) -> int:
        """Seek to `index`, clamped to [-1, len(steps) - 1].  Returns the new index."""
        if not self._loaded:
            return self.history.index
        self._ensure(index)
        clamped = max(-1, min(index, len(self.history.steps) - 1))
        self._goto(clamped)
        return clamped

    def rewind(self) -> None:
        self.jump_to_step(-1)

    def jump_to_end(self) -> None:
        """Exhaust the source and show the final step."""
        if not self._loaded:
            return
        self._drain()
        self._goto(len(self.history.steps) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> bool:
        """Start auto-play.  Returns False if there is nothing left to play."""
        if not self.can_step_forward():
            return False
        self.history.is_auto_playing = True
        self._arm()
        self._notify()
        return True

    def pause(self) -> None:
        if self.history.is_auto_playing or self._autoplay.active:
            self._stop_autoplay()
            self._notify()

    def toggle_play(self) -> None:
        if self.history.is_auto_playing:
            self.pause()
        else:
            self.play()

    def tick(self) -> bool:
        """
        One auto-play tick: stop if nothing is loaded or the end has been
        reached, otherwise advance.  Returns True if a step was taken.
        """
        if not self.history.is_auto_playing:
            self._autoplay.cancel()
            return False
        if not self._loaded or self.history.is_complete or not self.can_step_forward():
            self.pause()
            return False
        moved = self.step_forward()
        if self.history.is_complete:
            self.pause()
        return moved

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.set_speed_value(SPEED_PRESETS.get(preset, DEFAULT_SPEED))

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_SPEED, seconds)
        if self.history.is_auto_playing:
            self._arm()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> StepperState:
        if not self._loaded:
            return StepperState.IDLE
        if self.history.is_auto_playing:
            return StepperState.PLAYING
        if self.history.is_complete:
            return StepperState.FINISHED
        return StepperState.PAUSED

    @property
    def current_step(self) -> Optional[AlgorithmStep]:
        return self.history.current

    @property
    def index(self) -> int:
        return self.history.index

    @property
    def steps(self) -> List[AlgorithmStep]:
        return self.history.steps

    @property
    def total_steps_fetched(self) -> int:
        return len(self.history.steps)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_complete(self) -> bool:
        return self.history.is_complete

    @property
    def is_playing(self) -> bool:
        return self.history.is_auto_playing

    def can_step_forward(self) -> bool:
        return self._loaded and self._ensure(self.history.index + 1)

    def can_step_backward(self) -> bool:
        return self._loaded and self.history.index > 0

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Pull one step from the source into the buffer."""
        if self._generator is None:
            return False
        try:
            step = next(self._generator)
        except StopIteration:
            self._generator = None
            self._exhausted = True
            return False
        self.history.steps.append(step)
        return True

    def _ensure(self, index: int) -> bool:
        """Fetch until `index` is buffered.  False if the source runs out first."""
        while index >= len(self.history.steps):
            if not self._fetch_next():
                return False
        return index >= 0

    def _drain(self) -> None:
        while self._fetch_next():
            pass

    def _goto(self, index: int) -> None:
        last = len(self.history.steps) - 1
        if index == last and not self._exhausted:
            # peek so completion is known the moment the last step shows
            self._ensure(index + 1)
            last = len(self.history.steps) - 1
        self.history.index = index
        self.history.is_complete = self._exhausted and index == last
        self.trace = derive_trace(self.history.steps, index, self.snapshot)
        self._notify()

    def _arm(self) -> None:
        self._autoplay.set(self.scheduler.call_every(self.speed, self.tick))

    def _stop_autoplay(self) -> None:
        self.history.is_auto_playing = False
        self._autoplay.cancel()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
