"""Beat sources that drive the timer engine.

Every cadence calls its callback with an increasing beat number, one per
interval. The engine uses the number to apply each beat at most once.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, Protocol

BeatCallback = Callable[[int], None]


class Cadence(Protocol):
    @property
    def active(self) -> bool: ...

    def start(self, callback: BeatCallback) -> None: ...

    def stop(self) -> None: ...


class ManualCadence:
    """Deterministic cadence for tests and scripted runs."""

    def __init__(self) -> None:
        self._callback: BeatCallback | None = None
        self.beat = 0
        self.starts = 0
        self.stops = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: BeatCallback) -> None:
        if self._callback is None:
            self.starts += 1
        self._callback = callback

    def stop(self) -> None:
        if self._callback is not None:
            self.stops += 1
        self._callback = None

    def fire(self, count: int = 1) -> int:
        fired = 0
        for _ in range(count):
            if self._callback is None:
                break
            self.beat += 1
            self._callback(self.beat)
            fired += 1
        return fired

    def deliver(self, beat: int) -> None:
        if self._callback is not None:
            self._callback(beat)


class IntervalCadence:
    """Adapts a scheduler such as Textual's ``set_interval``.

    ``schedule(interval, callback)`` must return a handle with ``stop()``.
    """

    def __init__(self, schedule: Callable[[float, Callable[[], None]], Any], interval: float = 1.0) -> None:
        self._schedule = schedule
        self.interval = interval
        self._handle: Any = None
        self._callback: BeatCallback | None = None
        self.beat = 0

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, callback: BeatCallback) -> None:
        self._callback = callback
        if self._handle is None:
            self._handle = self._schedule(self.interval, self._on_interval)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.stop()
            self._handle = None
        self._callback = None

    def _on_interval(self) -> None:
        if self._callback is None:
            return
        self.beat += 1
        self._callback(self.beat)


class ClockCadence:
    """Blocking wall-clock cadence for the headless ``cook`` command."""

    def __init__(self, interval: float = 1.0, sleep: Callable[[float], None] = time.sleep) -> None:
        self.interval = interval
        self._sleep = sleep
        self._callback: BeatCallback | None = None
        self.beat = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: BeatCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def run(
        self,
        max_beats: int | None = None,
        until: Callable[[], bool] | None = None,
        on_beat: BeatCallback | None = None,
    ) -> int:
        fired = 0
        while self._callback is not None:
            if until is not None and until():
                break
            if max_beats is not None and fired >= max_beats:
                break
            self._sleep(self.interval)
            callback = self._callback
            if callback is None:
                break
            self.beat += 1
            callback(self.beat)
            if on_beat is not None:
                on_beat(self.beat)
            fired += 1
        return fired
