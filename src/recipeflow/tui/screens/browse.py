from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, ListItem, ListView, Static

from ..common import header_icon, style_screen
from ..state import cuisine_choices, recipe_display
from ..widgets import TimerTray
from ..widgets.list_utils import replace_items
from .recipe import RecipeScreen


class BrowseScreen(Screen):
    BINDINGS = [
        ("escape", "clear_filters", "Clear filters"),
        ("slash", "focus_search", "Search"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._moods: dict[str, str] = {}

    @property
    def session(self):
        return self.app.session

    def compose(self) -> ComposeResult:
        yield Header(icon=header_icon(self))
        with Horizontal(id="browse-body"):
            with Vertical(id="cuisine-pane"):
                yield Label("Cuisines", classes="section-label")
                yield ListView(id="cuisine-list")
            with Vertical(id="recipe-pane"):
                yield Static("", id="heading")
                yield Static("", id="summary")
                yield Input(placeholder="Search recipes, ingredients...", id="search-input")
                with Horizontal(id="mood-bar"):
                    for idx, tag in enumerate(self.app.catalog.mood_tags()):
                        button_id = f"mood-{idx}"
                        self._moods[button_id] = tag
                        yield Button(self.app.catalog.mood_label(tag), id=button_id)
                yield Static("", id="filters")
                yield ListView(id="recipe-list")
            yield TimerTray(self.session, id="timer-tray")
        yield Footer()

    async def on_mount(self) -> None:
        style_screen(self)
        await self._populate_cuisines()
        await self._refresh_recipes()
        self.query_one("#recipe-list", ListView).focus()

    def on_resize(self, event) -> None:
        style_screen(self)

    async def on_screen_resume(self, event=None) -> None:
        await self._refresh_recipes()
        await self.query_one(TimerTray).refresh_timers()

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.session.set_search(event.value)
            await self._refresh_recipes()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        tag = self._moods.get(event.button.id or "")
        if tag is None:
            return
        self.session.toggle_mood(tag)
        await self._refresh_recipes()

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        list_view = event.list_view
        if list_view.id == "cuisine-list":
            choice = getattr(event.item, "choice", None)
            if choice is None:
                return
            self.session.select_cuisine(choice.region, choice.subregion)
            self._mark_cuisine_selection()
            await self._refresh_recipes()
        elif list_view.id == "recipe-list":
            recipe = getattr(event.item, "recipe", None)
            if recipe is None:
                return
            self.session.select_recipe(recipe.recipe_id)
            self.app.push_screen(RecipeScreen())

    async def action_clear_filters(self) -> None:
        self.session.clear_filters()
        self.query_one("#search-input", Input).value = ""
        self._mark_cuisine_selection()
        await self._refresh_recipes()

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    async def _populate_cuisines(self) -> None:
        items: list[ListItem] = []
        for choice in cuisine_choices(self.app.catalog):
            item = ListItem(Label(choice.label))
            item.choice = choice
            items.append(item)
        await replace_items(self.query_one("#cuisine-list", ListView), items, "No cuisines")
        self._mark_cuisine_selection()

    def _mark_cuisine_selection(self) -> None:
        selection = self.session.selection
        for item in self.query_one("#cuisine-list", ListView).children:
            choice = getattr(item, "choice", None)
            if choice is not None:
                item.set_class(choice.is_selected(selection.region, selection.subregion), "is-selected")

    async def _refresh_recipes(self) -> None:
        self.query_one("#heading", Static).update(self.session.heading())
        self.query_one("#summary", Static).update(self.session.result_summary())
        chips = self.session.active_filters()
        filters = "Filters: " + "  ".join(chips) + "   (esc clears)" if chips else ""
        self.query_one("#filters", Static).update(filters)

        mood = self.session.selection.mood
        for button_id, tag in self._moods.items():
            self.query_one(f"#{button_id}", Button).variant = "primary" if tag == mood else "default"

        items: list[ListItem] = []
        for recipe in self.session.visible_recipes():
            item = ListItem(Label(recipe_display(recipe)))
            item.recipe = recipe
            items.append(item)
        await replace_items(
            self.query_one("#recipe-list", ListView),
            items,
            "No recipes found. Try adjusting your filters or search terms.",
        )
