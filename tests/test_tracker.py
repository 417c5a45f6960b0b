from __future__ import annotations

from recipeflow.tracker import CompletionState, CompletionTracker


# Purpose: verify toggles flip marks independently for prerequisites and steps.
def test_toggle_marks() -> None:
    tracker = CompletionTracker()
    assert tracker.toggle_step(1) is True
    assert tracker.toggle_prerequisite(1) is True
    assert tracker.snapshot() == CompletionState(prerequisites=frozenset({1}), steps=frozenset({1}))
    assert tracker.toggle_step(1) is False
    assert tracker.snapshot().steps == frozenset()
    assert tracker.snapshot().prerequisites == frozenset({1})


# Purpose: verify snapshots are detached from later changes.
def test_snapshot_is_frozen() -> None:
    tracker = CompletionTracker()
    tracker.toggle_step(2)
    snap = tracker.snapshot()
    tracker.toggle_step(3)
    assert snap == CompletionState(steps=frozenset({2}))
    tracker.clear()
    assert tracker.snapshot() == CompletionState()


# Purpose: verify progress handles empty recipes.
def test_progress() -> None:
    tracker = CompletionTracker()
    assert tracker.progress(0) == 0.0
    tracker.toggle_step(1)
    tracker.toggle_step(2)
    assert tracker.progress(4) == 0.5
