"""Tests for the chained-timer animation sequencer."""

import pytest

from engine import animate_sequence


class TestAnimateSequence:

    def test_first_item_is_synchronous(self, scheduler):
        seen = []

        animate_sequence(scheduler, ["a", "b"], 0.4, lambda item, i: seen.append(item))

        assert seen == ["a"]

    def test_items_are_chained_by_delay(self, clock, scheduler):
        seen = []
        done = []

        ctrl = animate_sequence(
            scheduler, ["a", "b", "c"], 0.4,
            on_step=lambda item, i: seen.append((item, i, clock())),
            on_complete=lambda: done.append(clock()),
        )
        scheduler.run_until_idle(sleep=clock.advance)

        assert [(item, i) for item, i, _ in seen] == [("a", 0), ("b", 1), ("c", 2)]
        assert [t for *_, t in seen] == [0, pytest.approx(0.4), pytest.approx(0.8)]
        assert done == [pytest.approx(1.2)]
        assert ctrl.finished
        assert not ctrl.running

    def test_empty_sequence_completes_at_once(self, scheduler):
        done = []

        ctrl = animate_sequence(scheduler, [], 0.4, lambda item, i: None, lambda: done.append(True))

        assert done == [True]
        assert ctrl.finished
        assert scheduler.pending() == 0

    def test_cancel_stops_everything(self, clock, scheduler):
        seen = []
        done = []
        ctrl = animate_sequence(scheduler, [1, 2, 3], 0.4, lambda item, i: seen.append(item), lambda: done.append(True))

        clock.advance(0.4)
        scheduler.run_pending()
        ctrl.cancel()
        scheduler.run_until_idle(sleep=clock.advance)

        assert seen == [1, 2]
        assert done == []
        assert ctrl.position == 1
        assert not ctrl.running

    def test_cancel_from_inside_on_step(self, clock, scheduler):
        seen = []
        ctrl = None

        def on_step(item, i):
            seen.append(item)
            if item == 2:
                ctrl.cancel()

        ctrl = animate_sequence(scheduler, [1, 2, 3], 0.1, on_step)
        scheduler.run_until_idle(sleep=clock.advance)

        assert seen == [1, 2]
        assert scheduler.pending() == 0
