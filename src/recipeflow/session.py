from __future__ import annotations

from dataclasses import replace
import logging

from .cadence import Cadence
from .catalog import RecipeCatalog
from .domain import RecipeRecord, SelectionState
from .events import EventListener
from .filtering import active_filters, visible_recipes
from .timers import DEFAULT_WARNING_SECONDS, TimerEngine, TimerView
from .tracker import CompletionState, CompletionTracker

logger = logging.getLogger(__name__)


class Session:
    """Single owner of browse selection, completion marks and timers.

    Presentation code reads the derived views and changes state only through
    the methods below.
    """

    def __init__(
        self,
        catalog: RecipeCatalog,
        engine: TimerEngine | None = None,
        cadence: Cadence | None = None,
        warning_seconds: int | None = None,
    ) -> None:
        self.catalog = catalog
        if engine is None:
            if warning_seconds is None:
                warning_seconds = DEFAULT_WARNING_SECONDS
            engine = TimerEngine(cadence=cadence, warning_seconds=warning_seconds)
        elif cadence is not None or warning_seconds is not None:
            raise TypeError("Pass cadence and warning_seconds to the TimerEngine, not alongside it")
        self.engine = engine
        self._selection = SelectionState()
        self._completion = CompletionTracker()

    @property
    def selection(self) -> SelectionState:
        return self._selection

    def subscribe(self, listener: EventListener) -> None:
        self.engine.subscribe(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        self.engine.unsubscribe(listener)

    # Browsing

    def select_cuisine(self, region: str | None, subregion: str | None = None) -> None:
        self._selection = self._selection.with_cuisine(region, subregion)
        self._completion.clear()

    def view_all(self) -> None:
        self.select_cuisine("", None)

    def select_recipe(self, recipe_id: str) -> None:
        if recipe_id != self._selection.recipe_id:
            self._completion.clear()
        self._selection = replace(self._selection, recipe_id=recipe_id)

    def back_to_list(self) -> None:
        self._selection = replace(self._selection, recipe_id=None)
        self._completion.clear()

    def set_search(self, text: str) -> None:
        self._selection = replace(self._selection, search=text)

    def clear_search(self) -> None:
        self.set_search("")

    def toggle_mood(self, tag: str) -> None:
        self._selection = self._selection.with_mood_toggled(tag)

    def clear_mood(self) -> None:
        self._selection = replace(self._selection, mood=None)

    def clear_filters(self) -> None:
        self.clear_search()
        self.clear_mood()
        self.view_all()

    def visible_recipes(self) -> list[RecipeRecord]:
        return visible_recipes(self.catalog.recipes, self._selection)

    def open_recipe(self) -> RecipeRecord | None:
        return self.catalog.get(self._selection.recipe_id)

    def active_filters(self) -> list[str]:
        return active_filters(self._selection)

    def heading(self) -> str:
        if self._selection.cuisine_active:
            return f"{self._selection.subregion} Recipes"
        return "Discover Recipes"

    def result_summary(self) -> str:
        count = len(self.visible_recipes())
        return f"{count} recipe{'' if count == 1 else 's'} found"

    # Completion marks

    def toggle_prerequisite(self, index: int) -> bool:
        if self.open_recipe() is None:
            return False
        return self._completion.toggle_prerequisite(index)

    def toggle_step(self, index: int) -> bool:
        if self.open_recipe() is None:
            return False
        return self._completion.toggle_step(index)

    def completion(self) -> CompletionState:
        return self._completion.snapshot()

    def step_progress(self) -> float:
        recipe = self.open_recipe()
        if recipe is None:
            return 0.0
        return self._completion.progress(len(recipe.steps))

    # Timers

    def step_timer_running(self, step_index: int) -> bool:
        return self.engine.has_running_timer_for_step(step_index)

    def can_start_timer(self, step_index: int) -> bool:
        recipe = self.open_recipe()
        if recipe is None:
            return False
        step = recipe.step(step_index)
        if step is None or not step.has_timer:
            return False
        return not self.step_timer_running(step_index)

    def start_step_timer(self, step_index: int) -> str | None:
        if not self.can_start_timer(step_index):
            logger.debug("Not starting timer for step %s", step_index)
            return None
        recipe = self.open_recipe()
        step = recipe.step(step_index)
        linked = step.linked_ingredients[0] if step.linked_ingredients else None
        return self.engine.create(
            step.timer_label,
            step.index,
            step.timer_min * 60,
            linked_ingredient=linked,
            recipe_id=recipe.recipe_id,
        )

    def pause_timer(self, timer_id: str) -> bool:
        return self.engine.set_running(timer_id, False)

    def resume_timer(self, timer_id: str) -> bool:
        return self.engine.set_running(timer_id, True)

    def toggle_timer(self, timer_id: str) -> bool:
        return self.engine.toggle(timer_id)

    def reset_timer(self, timer_id: str) -> bool:
        return self.engine.reset(timer_id)

    def remove_timer(self, timer_id: str) -> bool:
        return self.engine.remove(timer_id)

    def timers(self) -> tuple[TimerView, ...]:
        return self.engine.snapshot()
