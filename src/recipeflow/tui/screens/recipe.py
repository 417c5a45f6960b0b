from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ListItem, ListView, Static

from ..common import header_icon, style_screen
from ..state import nutrition_text, prerequisite_display, recipe_meta, step_display, steps_heading
from ..widgets import TimerTray
from ..widgets.list_utils import highlighted_item, replace_items


class RecipeScreen(Screen):
    BINDINGS = [
        ("escape", "back", "Back to recipes"),
        ("space", "toggle_done", "Mark complete"),
        ("t", "start_timer", "Start step timer"),
    ]

    @property
    def session(self):
        return self.app.session

    def compose(self) -> ComposeResult:
        recipe = self.session.open_recipe()
        yield Header(icon=header_icon(self))
        with Horizontal(id="recipe-shell"):
            with VerticalScroll(id="recipe-pane"):
                if recipe is None:
                    yield Static("Recipe not found.", id="recipe-title")
                else:
                    yield Static(f"{recipe.title}  ({recipe.cuisine.subregion})", id="recipe-title")
                    yield Static(recipe_meta(recipe), id="recipe-meta")
                    if recipe.description:
                        yield Static(recipe.description, id="recipe-description")
                    if recipe.prerequisites:
                        yield Label("Prerequisites", classes="section-label")
                        yield ListView(id="prereq-list")
                    yield Label("Ingredients", classes="section-label")
                    yield Static(_ingredients_text(recipe), id="ingredients")
                    if recipe.nutrition is not None and recipe.nutrition.facts():
                        yield Label("Nutrition (per serving)", classes="section-label")
                        yield Static(nutrition_text(recipe.nutrition), id="nutrition")
                    yield Label(steps_heading(len(recipe.steps), 0.0), id="steps-label", classes="section-label")
                    yield ListView(id="step-list")
                yield Static("", id="status")
            yield TimerTray(self.session, id="timer-tray")
        yield Footer()

    async def on_mount(self) -> None:
        style_screen(self)
        recipe = self.session.open_recipe()
        if recipe is None:
            return
        if recipe.prerequisites:
            items = []
            for idx, text in enumerate(recipe.prerequisites):
                label = Label(prerequisite_display(text, False))
                item = ListItem(label)
                item.prerequisite_index = idx
                item.label_widget = label
                items.append(item)
            await replace_items(self.query_one("#prereq-list", ListView), items, "")
        items = []
        for step in recipe.steps:
            label = Label("")
            item = ListItem(label)
            item.step = step
            item.label_widget = label
            items.append(item)
        await replace_items(self.query_one("#step-list", ListView), items, "No steps")
        self._refresh_marks()
        self.set_interval(1.0, self._refresh_marks)
        self.query_one("#step-list", ListView).focus()

    def on_resize(self, event) -> None:
        style_screen(self)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        self._toggle_item(event.item)

    def action_back(self) -> None:
        self.session.back_to_list()
        self.app.pop_screen()

    def action_toggle_done(self) -> None:
        focused = self.app.focused
        if isinstance(focused, ListView):
            self._toggle_item(highlighted_item(focused))

    async def action_start_timer(self) -> None:
        step_lists = self.query("#step-list")
        if not step_lists:
            return
        item = highlighted_item(step_lists.first(ListView))
        step = getattr(item, "step", None)
        if step is None:
            return
        if not step.has_timer:
            self._set_status(f"Step {step.index} has no timer.")
            return
        if self.session.start_step_timer(step.index) is None:
            self._set_status(f"A timer is already running for step {step.index}.")
            return
        self._set_status("")
        self._refresh_marks()
        await self.query_one(TimerTray).refresh_timers()

    def _toggle_item(self, item) -> None:
        if item is None:
            return
        step = getattr(item, "step", None)
        if step is not None:
            self.session.toggle_step(step.index)
        elif hasattr(item, "prerequisite_index"):
            self.session.toggle_prerequisite(item.prerequisite_index)
        self._refresh_marks()

    def _refresh_marks(self) -> None:
        recipe = self.session.open_recipe()
        if recipe is None:
            return
        completion = self.session.completion()
        self.query_one("#steps-label", Label).update(steps_heading(len(recipe.steps), self.session.step_progress()))
        for list_view in self.query("#prereq-list, #step-list").results(ListView):
            for item in list_view.children:
                label = getattr(item, "label_widget", None)
                if label is None:
                    continue
                step = getattr(item, "step", None)
                if step is not None:
                    done = step.index in completion.steps
                    running = self.session.step_timer_running(step.index)
                    label.update(step_display(step, done, running))
                else:
                    idx = item.prerequisite_index
                    done = idx in completion.prerequisites
                    label.update(prerequisite_display(recipe.prerequisites[idx], done))
                item.set_class(done, "is-done")

    def _set_status(self, message: str) -> None:
        self.query_one("#status", Static).update(message)


def _ingredients_text(recipe) -> str:
    lines = []
    for ing in recipe.ingredients:
        amount = ing.amount()
        line = f"• {ing.name}" + (f"  {amount}" if amount else "")
        if ing.substitutions:
            line += f"\n    Alt: {', '.join(ing.substitutions)}"
        lines.append(line)
    return "\n".join(lines)
