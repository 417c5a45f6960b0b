from __future__ import annotations

from textual.app import App

from ..cadence import IntervalCadence
from ..catalog import RecipeCatalog
from ..config import EffectiveConfig
from ..events import TimerCompleted, TimerEvent, TimerStarted
from ..session import Session
from .common import install_theme, refresh_layout
from .layout import normalize_density
from .screens.browse import BrowseScreen
from .theme import APP_CSS
from .widgets import TimerTray


class RecipeflowApp(App):
    TITLE = "recipeflow"
    SUB_TITLE = "Cuisine-guided cooking"
    CSS = APP_CSS
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("p", "toggle_timer", "Pause/Resume"),
        ("r", "reset_timer", "Reset"),
        ("x", "remove_timer", "Remove"),
    ]

    def __init__(self, cfg: EffectiveConfig, catalog: RecipeCatalog) -> None:
        super().__init__(ansi_color=True)
        self.cfg = cfg
        self.catalog = catalog
        self.tui_layout_mode = "normal"
        self.tui_density = normalize_density(cfg.tui.density)
        cadence = IntervalCadence(self.set_interval, interval=cfg.timers.tick_seconds)
        self.session = Session(catalog, cadence=cadence, warning_seconds=cfg.timers.warning_seconds)
        self.session.subscribe(self._on_timer_event)

    def on_mount(self) -> None:
        install_theme(self)
        refresh_layout(self)
        self.push_screen(BrowseScreen())

    def on_resize(self, event) -> None:
        refresh_layout(self)

    async def action_toggle_timer(self) -> None:
        await self._apply_to_selected_timer(self.session.toggle_timer)

    async def action_reset_timer(self) -> None:
        await self._apply_to_selected_timer(self.session.reset_timer)

    async def action_remove_timer(self) -> None:
        await self._apply_to_selected_timer(self.session.remove_timer)

    async def _apply_to_selected_timer(self, operation) -> None:
        trays = list(self.screen.query(TimerTray))
        if not trays:
            return
        tray = trays[0]
        timer_id = tray.selected_timer_id()
        if timer_id is None:
            return
        operation(timer_id)
        await tray.refresh_timers()

    def _on_timer_event(self, event: TimerEvent) -> None:
        if isinstance(event, TimerStarted):
            self.notify(event.message(), title="Timer Started! ⏰")
        elif isinstance(event, TimerCompleted):
            self.notify(event.message(), title="Timer Complete! 🎉", timeout=10)
            self.bell()
