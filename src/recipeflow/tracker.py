from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionState:
    prerequisites: frozenset[int] = frozenset()
    steps: frozenset[int] = frozenset()


class CompletionTracker:
    """Done-marks for the open recipe's prerequisites and steps."""

    def __init__(self) -> None:
        self._prerequisites: set[int] = set()
        self._steps: set[int] = set()

    def toggle_prerequisite(self, index: int) -> bool:
        return _toggle(self._prerequisites, index)

    def toggle_step(self, index: int) -> bool:
        return _toggle(self._steps, index)

    def clear(self) -> None:
        self._prerequisites.clear()
        self._steps.clear()

    def snapshot(self) -> CompletionState:
        return CompletionState(
            prerequisites=frozenset(self._prerequisites),
            steps=frozenset(self._steps),
        )

    def progress(self, total_steps: int) -> float:
        if total_steps <= 0:
            return 0.0
        return len(self._steps) / total_steps


def _toggle(marks: set[int], index: int) -> bool:
    if index in marks:
        marks.remove(index)
        return False
    marks.add(index)
    return True
