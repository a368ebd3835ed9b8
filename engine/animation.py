"""
animation.py — Auto-mode Sequencer
===================================
Plays a list of items one at a time on a Scheduler:

    ctrl = animate_sequence(sched, edges, delay=0.4,
                            on_step=mark, on_complete=done)
    ...
    ctrl.cancel()

The first item is handled synchronously, inside animate_sequence().  Each
later item is a chained one-shot timer, `delay` seconds after the
previous one.  `on_complete` runs one delay after the last item (at once
for an empty list).  After cancel() neither callback runs again.
"""

from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from engine.timers import Scheduler, TimerHandle

T = TypeVar("T")


class AnimationController(Generic[T]):

    def __init__(
        self,
        scheduler: Scheduler,
        items: Sequence[T],
        delay: float,
        on_step: Callable[[T, int], None],
        on_complete: Optional[Callable[[], None]] = None,
    ):
        self.items:       List[T]                           = list(items)
        self.delay:       float                             = delay
        self.on_step:     Callable[[T, int], None]          = on_step
        self.on_complete: Optional[Callable[[], None]]      = on_complete
        self.cancelled:   bool                              = False
        self.finished:    bool                              = False
        self.position:    int                               = 0

        self._scheduler = scheduler
        self._timer: Optional[TimerHandle] = None

    def start(self) -> "AnimationController[T]":
        self._step(0)
        return self

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def running(self) -> bool:
        return not self.cancelled and not self.finished

    def _step(self, index: int) -> None:
        self._timer = None
        if self.cancelled:
            return
        if index >= len(self.items):
            self.finished = True
            if self.on_complete is not None:
                self.on_complete()
            return

        self.position = index
        self.on_step(self.items[index], index)
        if self.cancelled:
            return
        self._timer = self._scheduler.call_later(self.delay, lambda: self._step(index + 1))


def animate_sequence(
    scheduler: Scheduler,
    items: Sequence[T],
    delay: float,
    on_step: Callable[[T, int], None],
    on_complete: Optional[Callable[[], None]] = None,
) -> AnimationController[T]:
    return AnimationController(scheduler, items, delay, on_step, on_complete).start()
