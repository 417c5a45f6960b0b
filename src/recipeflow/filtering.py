from __future__ import annotations

from typing import Iterable

from .domain import RecipeRecord, SelectionState


def visible_recipes(recipes: Iterable[RecipeRecord], selection: SelectionState) -> list[RecipeRecord]:
    """Return the recipes passing every active filter, in catalog order."""
    return [
        recipe
        for recipe in recipes
        if matches_cuisine(recipe, selection)
        and matches_search(recipe, selection.search)
        and matches_mood(recipe, selection.mood)
    ]


def matches_cuisine(recipe: RecipeRecord, selection: SelectionState) -> bool:
    if not selection.cuisine_active:
        return True
    return (
        recipe.cuisine.region == selection.region
        and recipe.cuisine.subregion == selection.subregion
    )


def matches_search(recipe: RecipeRecord, query: str) -> bool:
    needle = (query or "").strip().lower()
    if not needle:
        return True
    if needle in recipe.title.lower():
        return True
    if needle in recipe.description.lower():
        return True
    return any(needle in ingredient.name.lower() for ingredient in recipe.ingredients)


def matches_mood(recipe: RecipeRecord, mood: str | None) -> bool:
    if not mood:
        return True
    return mood in recipe.mood_tags


def active_filters(selection: SelectionState) -> list[str]:
    chips: list[str] = []
    if selection.cuisine_active:
        chips.append(str(selection.subregion))
    if selection.mood:
        chips.append(selection.mood)
    if selection.search:
        chips.append(f'"{selection.search}"')
    return chips
