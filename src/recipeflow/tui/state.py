from __future__ import annotations

from dataclasses import dataclass

from ..catalog import RecipeCatalog
from ..domain import NutritionInfo, RecipeRecord, StepRecord
from ..timers import STATUS_COMPLETE, STATUS_WARNING, TimerView
from .layout import render_bar


@dataclass(frozen=True)
class CuisineChoice:
    region: str
    subregion: str | None
    label: str

    def is_selected(self, region: str | None, subregion: str | None) -> bool:
        if not self.region:
            return not region
        return self.region == region and self.subregion == subregion


def cuisine_choices(catalog: RecipeCatalog) -> list[CuisineChoice]:
    choices = [CuisineChoice(region="", subregion=None, label="🌍 View All Recipes")]
    for region in catalog.regions():
        for name in catalog.subregions(region):
            choices.append(CuisineChoice(region=region, subregion=name, label=f"{region} / {name}"))
    return choices


def recipe_display(recipe: RecipeRecord) -> str:
    facts = [recipe.cuisine.subregion]
    if recipe.total_time_min is not None:
        facts.append(f"{recipe.total_time_min} min")
    if recipe.difficulty:
        facts.append(recipe.difficulty)
    return f"{recipe.title}  ·  {'  ·  '.join(fact for fact in facts if fact)}"


def recipe_meta(recipe: RecipeRecord) -> str:
    parts = []
    if recipe.total_time_min is not None:
        parts.append(f"⏱ {recipe.total_time_min} min")
    if recipe.serves is not None:
        parts.append(f"Serves {recipe.serves}")
    if recipe.difficulty:
        parts.append(recipe.difficulty)
    tags = list(recipe.diet) + list(recipe.mood_tags)
    if tags:
        parts.append(", ".join(tags))
    return "   ".join(parts)


def prerequisite_display(text: str, done: bool) -> str:
    marker = "[x]" if done else "[ ]"
    return f"{marker} {text}"


def step_display(step: StepRecord, done: bool, timer_running: bool) -> str:
    marker = "[x]" if done else f"[{step.index}]"
    title = f"{step.emoji} {step.title}" if step.emoji else step.title
    line = f"{marker} {title}"
    if step.has_timer:
        line += "  (timer running)" if timer_running else f"  (t: start {step.timer_min}m timer)"
    if step.text:
        line += f"\n     {step.text}"
    if step.linked_ingredients:
        line += f"\n     Key ingredients: {', '.join(step.linked_ingredients)}"
    if step.youtube:
        line += f"\n     ▶ Video: {step.youtube}"
    return line


def steps_heading(total: int, progress: float) -> str:
    return f"Cooking Steps ({total} steps, {round(progress * 100)}% done)"


def nutrition_text(nutrition: NutritionInfo) -> str:
    return "   ".join(f"{label} {value}" for label, value in nutrition.facts())


def timer_display(view: TimerView, bar_width: int) -> str:
    state = "▶" if view.running else "⏸"
    if view.status == STATUS_COMPLETE:
        state = "Done! 🎉"
    elif view.status == STATUS_WARNING:
        state = f"{state} !"
    line = f"{view.clock}  {view.name}  {state}"
    if view.linked_ingredient:
        line += f"\n       🥘 {view.linked_ingredient}"
    line += f"\n       {render_bar(view.progress, bar_width)}"
    return line
