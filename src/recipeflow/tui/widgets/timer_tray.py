from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Label, ListItem, ListView, Static

from ...session import Session
from ...timers import STATUS_COMPLETE, STATUS_WARNING
from ..common import set_hidden, size_timer_tray
from ..state import timer_display
from .list_utils import highlighted_value

REFRESH_SECONDS = 0.5


class TimerTray(Vertical):
    """Side panel listing every active timer with its clock and progress."""

    def __init__(self, session: Session, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session
        self._ids: tuple[str, ...] = ()
        self._busy = False

    def compose(self) -> ComposeResult:
        yield Static("", id="timer-title")
        yield ListView(id="timer-list")
        yield Static("p pause/resume · r reset · x remove", id="timer-help")

    async def on_mount(self) -> None:
        self.set_interval(REFRESH_SECONDS, self.refresh_timers)
        await self.refresh_timers()

    def selected_timer_id(self) -> str | None:
        list_view = self.query_one("#timer-list", ListView)
        timer_id = highlighted_value(list_view, "timer_id")
        if timer_id is None and self._ids:
            return self._ids[0]
        return timer_id

    async def refresh_timers(self) -> None:
        if self._busy:
            return
        self._busy = True
        try:
            await self._render()
        finally:
            self._busy = False

    async def _render(self) -> None:
        views = self.session.timers()
        set_hidden(self, not views)
        self.query_one("#timer-title", Static).update(f"⏲ Active Timers ({len(views)})")

        list_view = self.query_one("#timer-list", ListView)
        bar_width = size_timer_tray(self)
        ids = tuple(view.timer_id for view in views)

        if ids != self._ids:
            previous = list_view.index
            await list_view.clear()
            items: list[ListItem] = []
            for view in views:
                label = Label(timer_display(view, bar_width))
                item = ListItem(label)
                item.timer_id = view.timer_id
                item.label_widget = label
                items.append(item)
            if items:
                await list_view.extend(items)
                list_view.index = min(previous or 0, len(items) - 1)
            self._ids = ids

        for item, view in zip(list(list_view.children), views):
            label = getattr(item, "label_widget", None)
            if label is not None:
                label.update(timer_display(view, bar_width))
            item.set_class(view.status == STATUS_WARNING, "timer-warning")
            item.set_class(view.status == STATUS_COMPLETE, "timer-complete")
