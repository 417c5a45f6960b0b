from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import itertools
import logging

from .cadence import Cadence
from .errors import TimerError
from .events import EventListener, TimerCompleted, TimerEvent, TimerStarted

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "active"
STATUS_WARNING = "warning"
STATUS_COMPLETE = "complete"
DEFAULT_WARNING_SECONDS = 30


@dataclass
class ActiveTimer:
    timer_id: str
    name: str
    total_seconds: int
    remaining_seconds: int
    running: bool
    step_index: int
    linked_ingredient: str | None = None
    recipe_id: str | None = None

    @property
    def exhausted(self) -> bool:
        return self.remaining_seconds == 0


@dataclass(frozen=True)
class TimerView:
    timer_id: str
    name: str
    total_seconds: int
    remaining_seconds: int
    running: bool
    step_index: int
    linked_ingredient: str | None
    recipe_id: str | None
    status: str
    progress: float
    clock: str


def timer_status(remaining: int, total: int, warning_seconds: int = DEFAULT_WARNING_SECONDS) -> str:
    if remaining <= 0:
        return STATUS_COMPLETE
    if remaining <= warning_seconds:
        return STATUS_WARNING
    return STATUS_ACTIVE


def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def progress_fraction(remaining: int, total: int) -> float:
    if total <= 0:
        return 1.0
    return min(1.0, max(0.0, (total - remaining) / total))


def _default_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"timer-{next(counter)}"


class TimerEngine:
    """Owns the active countdown timers and advances them once per beat."""

    def __init__(
        self,
        cadence: Cadence | None = None,
        warning_seconds: int = DEFAULT_WARNING_SECONDS,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._timers: dict[str, ActiveTimer] = {}
        self._cadence = cadence
        self._listeners: list[EventListener] = []
        self._next_id = id_factory or _default_ids()
        self._last_beat: int | None = None
        self.warning_seconds = warning_seconds

    def __len__(self) -> int:
        return len(self._timers)

    def subscribe(self, listener: EventListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def create(
        self,
        name: str,
        step_index: int,
        total_seconds: int,
        linked_ingredient: str | None = None,
        recipe_id: str | None = None,
    ) -> str:
        if isinstance(total_seconds, bool) or not isinstance(total_seconds, int) or total_seconds <= 0:
            raise TimerError(f"Timer duration must be a positive number of seconds, got {total_seconds!r}")

        timer_id = self._next_id()
        while timer_id in self._timers:
            timer_id = self._next_id()
        self._timers[timer_id] = ActiveTimer(
            timer_id=timer_id,
            name=name,
            total_seconds=total_seconds,
            remaining_seconds=total_seconds,
            running=True,
            step_index=step_index,
            linked_ingredient=linked_ingredient,
            recipe_id=recipe_id,
        )
        logger.info("Started %s (%s, %ss)", timer_id, name, total_seconds)
        self._emit(TimerStarted(timer_id=timer_id, name=name, total_seconds=total_seconds))
        self._sync_cadence()
        return timer_id

    def tick(self, timer_id: str) -> bool:
        timer = self._timers.get(timer_id)
        if timer is None or not timer.running or timer.remaining_seconds <= 0:
            return False
        timer.remaining_seconds = max(0, timer.remaining_seconds - 1)
        if timer.remaining_seconds == 0:
            logger.info("Completed %s (%s)", timer_id, timer.name)
            self._emit(TimerCompleted(timer_id=timer_id, name=timer.name))
        return True

    def advance(self, beat: int | None = None) -> list[str]:
        """Apply one cadence beat to every running, unfinished timer.

        A beat number at or below the last applied one is a duplicate
        delivery and is ignored.
        """
        if beat is not None:
            if self._last_beat is not None and beat <= self._last_beat:
                logger.debug("Ignoring duplicate beat %s (last %s)", beat, self._last_beat)
                return []
            self._last_beat = beat
        due = [
            timer.timer_id
            for timer in self._timers.values()
            if timer.running and timer.remaining_seconds > 0
        ]
        return [timer_id for timer_id in due if self.tick(timer_id)]

    def set_running(self, timer_id: str, running: bool) -> bool:
        timer = self._timers.get(timer_id)
        if timer is None or timer.exhausted:
            logger.debug("Ignoring set_running(%s, %s)", timer_id, running)
            return False
        timer.running = bool(running)
        return True

    def toggle(self, timer_id: str) -> bool:
        timer = self._timers.get(timer_id)
        if timer is None:
            return False
        return self.set_running(timer_id, not timer.running)

    def reset(self, timer_id: str) -> bool:
        timer = self._timers.get(timer_id)
        if timer is None:
            return False
        timer.remaining_seconds = timer.total_seconds
        timer.running = False
        return True

    def remove(self, timer_id: str) -> bool:
        removed = self._timers.pop(timer_id, None) is not None
        if removed:
            logger.info("Removed %s", timer_id)
            self._sync_cadence()
        return removed

    def clear(self) -> None:
        self._timers.clear()
        self._sync_cadence()

    def get(self, timer_id: str) -> ActiveTimer | None:
        return self._timers.get(timer_id)

    def timers(self) -> list[ActiveTimer]:
        return list(self._timers.values())

    def has_running_timer_for_step(self, step_index: int) -> bool:
        return any(
            timer.step_index == step_index and timer.remaining_seconds > 0
            for timer in self._timers.values()
        )

    def status(self, timer_id: str) -> str | None:
        timer = self._timers.get(timer_id)
        if timer is None:
            return None
        return timer_status(timer.remaining_seconds, timer.total_seconds, self.warning_seconds)

    def snapshot(self) -> tuple[TimerView, ...]:
        return tuple(self._view(timer) for timer in self._timers.values())

    def _view(self, timer: ActiveTimer) -> TimerView:
        return TimerView(
            timer_id=timer.timer_id,
            name=timer.name,
            total_seconds=timer.total_seconds,
            remaining_seconds=timer.remaining_seconds,
            running=timer.running,
            step_index=timer.step_index,
            linked_ingredient=timer.linked_ingredient,
            recipe_id=timer.recipe_id,
            status=timer_status(timer.remaining_seconds, timer.total_seconds, self.warning_seconds),
            progress=progress_fraction(timer.remaining_seconds, timer.total_seconds),
            clock=format_clock(timer.remaining_seconds),
        )

    def _sync_cadence(self) -> None:
        if self._cadence is None:
            return
        if self._timers and not self._cadence.active:
            self._cadence.start(self.advance)
        elif not self._timers and self._cadence.active:
            self._cadence.stop()

    def _emit(self, event: TimerEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
