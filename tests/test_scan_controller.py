"""Tests for the scan controller state machine.

The Tk timer is replaced by `FakeScheduler` (see conftest), so every tick
is fired explicitly and nothing depends on wall-clock time.
"""

from __future__ import annotations

from hypothesis import given, strategies as st

from conftest import FakeScheduler
from conv_explorer.services.scan import SCAN_MIN_INTERVAL_MS, ScanController


def test_initial_selection_is_origin_when_output_exists(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=4, height=3)
    state = controller.state
    assert state.selected == (0, 0)
    assert not state.running
    assert scheduler.pending == {}


def test_initial_selection_is_none_without_output(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=0, height=3)
    assert controller.state.selected is None


def test_start_resets_to_origin_and_schedules_tick(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=4, height=3)
    controller.select(2, 2)

    state = controller.start(200)

    assert state.running
    assert state.selected == (0, 0)
    assert state.interval_ms == 200
    assert scheduler.delays == [200]


def test_period_never_drops_below_minimum(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=2, height=2)
    controller.start(10)
    assert controller.period_ms == SCAN_MIN_INTERVAL_MS
    assert scheduler.delays == [SCAN_MIN_INTERVAL_MS]


def test_start_is_noop_without_output(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=-1)
    state = controller.start(100)
    assert not state.running
    assert state.selected is None
    assert scheduler.calls == []


def test_ticks_walk_row_major(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=2)
    controller.start(100)

    seen = []
    for _ in range(6):
        scheduler.fire()
        seen.append(controller.state.selected)

    assert seen == [(1, 0), (2, 0), (0, 1), (1, 1), (2, 1), (0, 0)]


@given(width=st.integers(min_value=1, max_value=7), height=st.integers(min_value=1, max_value=7))
def test_cycle_closes_after_width_times_height_ticks(width: int, height: int) -> None:
    scheduler = FakeScheduler()
    controller = ScanController(scheduler, width=width, height=height)
    controller.start(100)

    for _ in range(width * height):
        scheduler.fire()

    assert controller.state.selected == (0, 0)
    assert controller.state.running
    # One tick pending at any time: exactly one after(...) per tick plus the start.
    assert len(scheduler.pending) == 1
    assert len(scheduler.delays) == width * height + 1


def test_stop_cancels_pending_tick(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=3)
    controller.start(100)
    scheduler.fire()

    state = controller.stop()

    assert not state.running
    assert state.selected == (1, 0)
    assert scheduler.pending == {}
    assert scheduler.calls[-1][0] == "cancel"


def test_tick_after_stop_does_not_move_selection(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=3)
    controller.start(100)
    controller.stop()
    # A late callback (already dequeued by the host) must be harmless.
    state = controller.tick()
    assert state.selected == (0, 0)
    assert scheduler.pending == {}


def test_restart_while_running_replaces_pending_tick(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=3)
    controller.start(100)
    scheduler.fire()
    scheduler.fire()

    controller.start(300)

    assert controller.state.selected == (0, 0)
    assert len(scheduler.pending) == 1
    assert scheduler.delays[-1] == 300


def test_shrinking_width_clamps_selection(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=5, height=3)
    controller.select(4, 0)

    state = controller.resize(2, 3)

    assert state.selected == (1, 0)


def test_each_axis_is_clamped_independently(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=6, height=6)
    controller.select(2, 5)
    assert controller.resize(8, 4).selected == (2, 3)


def test_resize_to_no_output_clears_selection_and_stops(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=4, height=4)
    controller.start(100)

    state = controller.resize(0, 4)

    assert state.selected is None
    assert not state.running
    assert scheduler.pending == {}


def test_output_returning_restarts_selection_at_origin(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=4, height=4)
    controller.resize(-2, 4)
    assert controller.resize(3, 3).selected == (0, 0)


def test_scan_continues_after_growing_grid(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=2, height=2)
    controller.start(100)
    scheduler.fire()  # (1, 0)

    controller.resize(4, 4)
    scheduler.fire()

    assert controller.state.selected == (2, 0)
    assert controller.state.running


def test_select_clamps_into_grid(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=2)
    assert controller.select(10, -4).selected == (2, 0)
    assert controller.select(1, 1).selected == (1, 1)


def test_select_while_scanning_continues_from_new_cell(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=3)
    controller.start(100)
    controller.select(2, 1)
    scheduler.fire()
    assert controller.state.selected == (0, 2)


def test_select_without_output_is_ignored(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=0, height=0)
    assert controller.select(1, 1).selected is None


def test_on_tick_receives_each_new_state(scheduler: FakeScheduler) -> None:
    received = []
    controller = ScanController(scheduler, width=2, height=1, on_tick=received.append)
    controller.start(100)
    scheduler.fire()
    scheduler.fire()
    assert [s.selected for s in received] == [(1, 0), (0, 0)]


def test_close_cancels_and_ignores_later_requests(scheduler: FakeScheduler) -> None:
    controller = ScanController(scheduler, width=3, height=3)
    controller.start(100)

    controller.close()

    assert scheduler.pending == {}
    assert not controller.start(100).running
    assert controller.tick().selected == (0, 0)
    assert scheduler.pending == {}


_operations = st.lists(
    st.one_of(
        st.tuples(st.just("start"), st.integers(min_value=0, max_value=500)),
        st.tuples(st.just("stop"), st.just(0)),
        st.tuples(st.just("tick"), st.just(0)),
        st.tuples(st.just("select"), st.tuples(st.integers(-3, 9), st.integers(-3, 9))),
        st.tuples(st.just("resize"), st.tuples(st.integers(-2, 6), st.integers(-2, 6))),
    ),
    max_size=40,
)


@given(ops=_operations)
def test_pending_tick_always_has_valid_selection(ops: list) -> None:
    scheduler = FakeScheduler()
    controller = ScanController(scheduler, width=3, height=3)
    width, height = 3, 3

    for name, arg in ops:
        if name == "start":
            controller.start(arg)
        elif name == "stop":
            controller.stop()
        elif name == "tick":
            if scheduler.pending:
                scheduler.fire()
        elif name == "select":
            controller.select(*arg)
        else:
            width, height = arg
            controller.resize(width, height)

        state = controller.state
        assert len(scheduler.pending) <= 1
        if width > 0 and height > 0:
            assert state.selected is not None
            x, y = state.selected
            assert 0 <= x < width and 0 <= y < height
        else:
            assert state.selected is None
            assert not state.running
        if scheduler.pending:
            assert state.running and state.selected is not None
