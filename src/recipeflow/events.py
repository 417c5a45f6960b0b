from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class TimerStarted:
    timer_id: str
    name: str
    total_seconds: int

    @property
    def kind(self) -> str:
        return "timer_started"

    def message(self) -> str:
        return f"{self.name} - {self.total_seconds // 60} minutes"


@dataclass(frozen=True)
class TimerCompleted:
    timer_id: str
    name: str

    @property
    def kind(self) -> str:
        return "timer_completed"

    def message(self) -> str:
        return f"{self.name} is ready!"


TimerEvent = TimerStarted | TimerCompleted
EventListener = Callable[[TimerEvent], None]
