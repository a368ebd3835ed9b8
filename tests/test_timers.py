"""Tests for the cooperative scheduler."""

import pytest

from engine import ManualClock, Scheduler, TimerSlot


class TestScheduler:

    def test_call_later_fires_once_when_due(self, clock, scheduler):
        fired = []
        scheduler.call_later(0.5, lambda: fired.append(clock()))

        clock.advance(0.4)
        assert scheduler.run_pending() == 0
        clock.advance(0.1)
        assert scheduler.run_pending() == 1
        clock.advance(5)
        assert scheduler.run_pending() == 0
        assert fired == [pytest.approx(0.5)]

    def test_due_order_then_insertion_order(self, clock, scheduler):
        order = []
        scheduler.call_later(0.2, lambda: order.append("b"))
        scheduler.call_later(0.1, lambda: order.append("a"))
        scheduler.call_later(0.2, lambda: order.append("c"))

        clock.advance(1)
        scheduler.run_pending()

        assert order == ["a", "b", "c"]

    def test_call_every_repeats_until_cancelled(self, clock, scheduler):
        ticks = []
        handle = scheduler.call_every(0.25, lambda: ticks.append(1))

        for _ in range(4):
            clock.advance(0.25)
            scheduler.run_pending()
        handle.cancel()
        clock.advance(1)
        scheduler.run_pending()

        assert len(ticks) == 4
        assert scheduler.pending() == 0

    def test_overdue_interval_fires_once_per_pass(self, clock, scheduler):
        ticks = []
        scheduler.call_every(0.25, lambda: ticks.append(clock()))

        clock.advance(1.0)
        assert scheduler.run_pending() == 1
        assert scheduler.next_deadline() == pytest.approx(1.25)

        clock.advance(0.25)
        scheduler.run_pending()
        assert len(ticks) == 2

    def test_cancel_inside_same_pass(self, clock, scheduler):
        fired = []
        later = scheduler.call_later(0.1, lambda: fired.append("later"))
        scheduler.call_later(0.1 - 1e-9, later.cancel)

        clock.advance(1)
        scheduler.run_pending()

        assert fired == []

    def test_callback_cancelling_its_own_interval(self, clock, scheduler):
        ticks = []
        handle = None

        def tick():
            ticks.append(1)
            if len(ticks) == 2:
                handle.cancel()

        handle = scheduler.call_every(0.1, tick)
        for _ in range(5):
            clock.advance(0.1)
            scheduler.run_pending()

        assert len(ticks) == 2

    def test_interval_has_floor(self, clock, scheduler):
        handle = scheduler.call_every(0, lambda: None)

        assert handle.interval > 0
        assert handle.repeating

    def test_run_until_idle_advances_manual_clock(self, clock, scheduler):
        fired = []
        scheduler.call_later(0.3, lambda: fired.append(clock()))
        scheduler.call_later(0.7, lambda: fired.append(clock()))

        count = scheduler.run_until_idle(sleep=clock.advance)

        assert count == 2
        assert fired == [pytest.approx(0.3), pytest.approx(0.7)]

    def test_run_until_idle_timeout_stops_intervals(self, clock, scheduler):
        scheduler.call_every(0.25, lambda: None)

        scheduler.run_until_idle(sleep=clock.advance, timeout=1.0)

        assert clock() == pytest.approx(1.0)
        assert scheduler.pending() == 1

    def test_cancel_all_and_next_deadline(self, clock, scheduler):
        first = scheduler.call_later(2, lambda: None)
        scheduler.call_later(3, lambda: None)

        assert scheduler.next_deadline() == 2
        first.cancel()
        assert scheduler.next_deadline() == 3
        scheduler.cancel_all()
        assert scheduler.next_deadline() is None
        assert scheduler.pending() == 0


class TestTimerSlot:

    def test_set_cancels_previous(self, clock, scheduler):
        slot = TimerSlot()
        fired = []
        first = scheduler.call_every(0.1, lambda: fired.append("first"))
        slot.set(first)
        slot.set(scheduler.call_every(0.1, lambda: fired.append("second")))

        clock.advance(0.1)
        scheduler.run_pending()

        assert first.cancelled
        assert fired == ["second"]
        assert slot.active

    def test_cancel_is_idempotent(self, scheduler):
        slot = TimerSlot()
        slot.set(scheduler.call_later(1, lambda: None))

        slot.cancel()
        slot.cancel()

        assert not slot.active
        assert scheduler.pending() == 0


def test_manual_clock():
    clock = ManualClock(10.0)
    clock.advance(2.5)

    assert clock() == 12.5
