from __future__ import annotations

import pytest

from recipeflow.cadence import ManualCadence
from recipeflow.errors import TimerError
from recipeflow.events import TimerCompleted, TimerStarted
from recipeflow.timers import (
    STATUS_ACTIVE,
    STATUS_COMPLETE,
    STATUS_WARNING,
    TimerEngine,
    format_clock,
    progress_fraction,
    timer_status,
)


def _engine_with_events(**kwargs) -> tuple[TimerEngine, list]:
    engine = TimerEngine(**kwargs)
    events: list = []
    engine.subscribe(events.append)
    return engine, events


# Purpose: verify create initialises a running, full timer and emits a start event.
def test_create_initial_state() -> None:
    engine, events = _engine_with_events()
    timer_id = engine.create("Step 1: Boil", 1, 300, linked_ingredient="potatoes")
    timer = engine.get(timer_id)
    assert timer.total_seconds == 300
    assert timer.remaining_seconds == 300
    assert timer.running is True
    assert timer.step_index == 1
    assert timer.linked_ingredient == "potatoes"
    assert events == [TimerStarted(timer_id=timer_id, name="Step 1: Boil", total_seconds=300)]


# Purpose: verify timer ids are unique and never reused after removal.
def test_ids_never_reused() -> None:
    engine = TimerEngine()
    first = engine.create("a", 1, 10)
    engine.remove(first)
    second = engine.create("b", 1, 10)
    assert first != second
    assert engine.get(first) is None


@pytest.mark.parametrize("duration", [0, -5, 1.5, True, "60"])
# Purpose: verify create rejects non-positive or non-integer durations.
def test_create_rejects_bad_duration(duration) -> None:
    engine = TimerEngine()
    with pytest.raises(TimerError):
        engine.create("bad", 1, duration)
    assert len(engine) == 0


# Purpose: verify three ticks count down and complete exactly once.
def test_completion_event_exactly_once() -> None:
    engine, events = _engine_with_events()
    timer_id = engine.create("Step 2: Temper", 2, 3)
    events.clear()

    seen = []
    for _ in range(3):
        engine.tick(timer_id)
        seen.append(engine.get(timer_id).remaining_seconds)
    assert seen == [2, 1, 0]
    assert events == [TimerCompleted(timer_id=timer_id, name="Step 2: Temper")]

    assert engine.tick(timer_id) is False
    assert engine.get(timer_id).remaining_seconds == 0
    assert len(events) == 1


# Purpose: verify completion leaves the running flag untouched.
def test_completion_keeps_running_flag() -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 1)
    engine.tick(timer_id)
    assert engine.get(timer_id).running is True
    assert engine.status(timer_id) == STATUS_COMPLETE


# Purpose: verify ticks on a paused timer do nothing.
def test_tick_paused_is_noop() -> None:
    engine, events = _engine_with_events()
    timer_id = engine.create("a", 1, 5)
    engine.set_running(timer_id, False)
    assert engine.tick(timer_id) is False
    assert engine.get(timer_id).remaining_seconds == 5


# Purpose: verify remaining is non-increasing and never negative across mixed operations.
def test_monotonic_countdown() -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 4)
    previous = engine.get(timer_id).remaining_seconds
    for step in range(12):
        if step == 3:
            engine.set_running(timer_id, False)
        if step == 5:
            engine.set_running(timer_id, True)
        running_before = engine.get(timer_id).running
        remaining_before = engine.get(timer_id).remaining_seconds
        engine.tick(timer_id)
        current = engine.get(timer_id).remaining_seconds
        assert 0 <= current <= previous
        if current < remaining_before:
            assert running_before and remaining_before > 0
        previous = current
    assert previous == 0


# Purpose: verify unknown timer ids are silently ignored.
def test_unknown_ids_are_noops() -> None:
    engine = TimerEngine()
    assert engine.tick("missing") is False
    assert engine.set_running("missing", True) is False
    assert engine.toggle("missing") is False
    assert engine.reset("missing") is False
    assert engine.remove("missing") is False
    assert engine.status("missing") is None


# Purpose: verify a finished timer cannot be resumed or paused.
def test_set_running_disallowed_when_exhausted() -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 1)
    engine.set_running(timer_id, False)
    engine.set_running(timer_id, True)
    engine.tick(timer_id)
    assert engine.set_running(timer_id, False) is False
    assert engine.get(timer_id).running is True


# Purpose: verify toggle flips pause/resume.
def test_toggle_pause_resume() -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 10)
    engine.toggle(timer_id)
    assert engine.get(timer_id).running is False
    engine.toggle(timer_id)
    assert engine.get(timer_id).running is True


# Purpose: verify reset restores the full duration and pauses.
@pytest.mark.parametrize("running", [True, False])
def test_reset_restores_origin(running: bool) -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 5)
    for _ in range(5):
        engine.tick(timer_id)
    engine.reset(timer_id)
    timer = engine.get(timer_id)
    assert timer.remaining_seconds == 5
    assert timer.running is False

    engine.set_running(timer_id, True)
    engine.tick(timer_id)
    engine.set_running(timer_id, running)
    engine.reset(timer_id)
    assert timer.remaining_seconds == 5
    assert timer.running is False


# Purpose: verify a reset timer can complete again and re-emit completion.
def test_reset_then_complete_again() -> None:
    engine, events = _engine_with_events()
    timer_id = engine.create("a", 1, 1)
    engine.tick(timer_id)
    engine.reset(timer_id)
    engine.set_running(timer_id, True)
    engine.tick(timer_id)
    completed = [event for event in events if isinstance(event, TimerCompleted)]
    assert len(completed) == 2


# Purpose: verify remove is idempotent.
def test_remove_idempotent() -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 5)
    assert engine.remove(timer_id) is True
    assert engine.remove(timer_id) is False
    assert engine.timers() == []


# Purpose: verify advance ticks every qualifying timer once and skips the rest.
def test_advance_ticks_each_running_timer_once() -> None:
    engine = TimerEngine()
    a = engine.create("a", 1, 5)
    b = engine.create("b", 2, 2)
    c = engine.create("c", 3, 5)
    engine.set_running(c, False)

    advanced = engine.advance(1)
    assert sorted(advanced) == sorted([a, b])
    assert engine.get(a).remaining_seconds == 4
    assert engine.get(b).remaining_seconds == 1
    assert engine.get(c).remaining_seconds == 5

    engine.advance(2)
    assert engine.advance(3) == [a]
    assert engine.get(b).remaining_seconds == 0


# Purpose: verify duplicate or stale beats are ignored.
def test_advance_ignores_duplicate_beats() -> None:
    engine = TimerEngine()
    timer_id = engine.create("a", 1, 10)
    engine.advance(1)
    assert engine.advance(1) == []
    assert engine.advance(0) == []
    assert engine.get(timer_id).remaining_seconds == 9
    engine.advance(2)
    assert engine.get(timer_id).remaining_seconds == 8


# Purpose: verify the per-step guard only counts unfinished timers.
def test_has_running_timer_for_step() -> None:
    engine = TimerEngine()
    assert engine.has_running_timer_for_step(2) is False
    timer_id = engine.create("a", 2, 1)
    assert engine.has_running_timer_for_step(2) is True
    assert engine.has_running_timer_for_step(3) is False
    engine.set_running(timer_id, False)
    assert engine.has_running_timer_for_step(2) is True
    engine.set_running(timer_id, True)
    engine.tick(timer_id)
    assert engine.has_running_timer_for_step(2) is False


# Purpose: verify the engine arms and disarms its cadence with the timer set.
def test_cadence_follows_timer_set() -> None:
    cadence = ManualCadence()
    engine = TimerEngine(cadence=cadence)
    assert cadence.active is False

    a = engine.create("a", 1, 3)
    b = engine.create("b", 2, 3)
    assert cadence.active is True
    assert cadence.starts == 1

    cadence.fire(2)
    assert engine.get(a).remaining_seconds == 1
    assert engine.get(b).remaining_seconds == 1

    engine.remove(a)
    assert cadence.active is True
    engine.remove(b)
    assert cadence.active is False
    assert cadence.stops == 1

    c = engine.create("c", 1, 3)
    assert cadence.active is True
    cadence.fire()
    assert engine.get(c).remaining_seconds == 2


# Purpose: verify a re-delivered cadence beat does not double-tick.
def test_cadence_double_delivery() -> None:
    cadence = ManualCadence()
    engine = TimerEngine(cadence=cadence)
    timer_id = engine.create("a", 1, 10)
    cadence.fire()
    cadence.deliver(cadence.beat)
    assert engine.get(timer_id).remaining_seconds == 9


# Purpose: verify clear removes everything and stops the cadence.
def test_clear() -> None:
    cadence = ManualCadence()
    engine = TimerEngine(cadence=cadence)
    engine.create("a", 1, 3)
    engine.create("b", 2, 3)
    engine.clear()
    assert len(engine) == 0
    assert cadence.active is False
    assert cadence.fire() == 0


# Purpose: verify listeners can be removed.
def test_unsubscribe() -> None:
    engine, events = _engine_with_events()
    engine.unsubscribe(events.append)
    engine.create("a", 1, 3)
    assert events == []


# Purpose: verify status classification thresholds.
def test_timer_status_thresholds() -> None:
    assert timer_status(0, 60) == STATUS_COMPLETE
    assert timer_status(1, 60) == STATUS_WARNING
    assert timer_status(30, 60) == STATUS_WARNING
    assert timer_status(31, 60) == STATUS_ACTIVE
    assert timer_status(10, 60, warning_seconds=5) == STATUS_ACTIVE


# Purpose: verify clock formatting and progress fraction.
def test_format_clock_and_progress() -> None:
    assert format_clock(300) == "05:00"
    assert format_clock(61) == "01:01"
    assert format_clock(0) == "00:00"
    assert progress_fraction(300, 300) == 0.0
    assert progress_fraction(150, 300) == 0.5
    assert progress_fraction(0, 300) == 1.0


# Purpose: verify snapshot views carry derived status.
def test_snapshot_views() -> None:
    engine = TimerEngine(warning_seconds=30)
    a = engine.create("a", 1, 31)
    engine.tick(a)
    (view,) = engine.snapshot()
    assert view.timer_id == a
    assert view.remaining_seconds == 30
    assert view.status == STATUS_WARNING
    assert view.clock == "00:30"
    assert view.running is True
