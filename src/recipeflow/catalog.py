from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from .domain import (
    Cuisine,
    CuisineRegion,
    IngredientRecord,
    NutritionInfo,
    RecipeRecord,
    StepRecord,
    Subregion,
)
from .errors import CatalogError, MissingFileError

logger = logging.getLogger(__name__)


class RecipeCatalog:
    """Read-only view over the recipes loaded at start-up."""

    def __init__(
        self,
        recipes: Iterable[RecipeRecord],
        cuisines: Iterable[CuisineRegion] | None = None,
        moods: Mapping[str, str] | None = None,
    ) -> None:
        self._recipes = tuple(recipes)
        self._by_id = {recipe.recipe_id: recipe for recipe in self._recipes}
        if len(self._by_id) != len(self._recipes):
            raise CatalogError("Duplicate recipe ids in catalog")
        declared = tuple(cuisines or ())
        self._cuisines = declared or _derive_cuisines(self._recipes)
        self._moods = dict(moods or {})

    @property
    def recipes(self) -> tuple[RecipeRecord, ...]:
        return self._recipes

    @property
    def cuisines(self) -> tuple[CuisineRegion, ...]:
        return self._cuisines

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self):
        return iter(self._recipes)

    def get(self, recipe_id: str | None) -> RecipeRecord | None:
        if recipe_id is None:
            return None
        return self._by_id.get(recipe_id)

    def regions(self) -> list[str]:
        return [entry.region for entry in self._cuisines]

    def subregions(self, region: str) -> list[str]:
        for entry in self._cuisines:
            if entry.region == region:
                return entry.subregion_names()
        return []

    def mood_tags(self) -> list[str]:
        if self._moods:
            return list(self._moods.keys())
        found: set[str] = set()
        for recipe in self._recipes:
            found.update(recipe.mood_tags)
        return sorted(tag for tag in found if tag)

    def mood_label(self, tag: str) -> str:
        emoji = self._moods.get(tag, "")
        return f"{emoji} {tag}" if emoji else tag


def load_catalog(path: str | Path) -> RecipeCatalog:
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise MissingFileError(f"Catalog not found: {catalog_path}")
    try:
        text = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Failed to read catalog: {catalog_path}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in catalog: {catalog_path}") from exc

    catalog = parse_catalog(data)
    logger.info("Loaded %d recipes from %s", len(catalog), catalog_path)
    return catalog


def parse_catalog(data: Any) -> RecipeCatalog:
    if not isinstance(data, dict):
        raise CatalogError("Catalog root must be a mapping")
    raw_recipes = data.get("recipes") or []
    if not isinstance(raw_recipes, list):
        raise CatalogError("'recipes' must be a list")

    recipes = [parse_recipe(raw) for raw in raw_recipes]
    cuisines = [_parse_cuisine_region(raw) for raw in _as_list(data.get("cuisines"))]
    moods = dict(_parse_mood(raw) for raw in _as_list(data.get("moods")))
    moods.pop("", None)
    return RecipeCatalog(recipes, cuisines=cuisines, moods=moods)


def parse_recipe(raw: Any) -> RecipeRecord:
    if not isinstance(raw, dict):
        raise CatalogError("Recipe entries must be mappings")
    recipe_id = raw.get("id")
    if recipe_id in (None, ""):
        raise CatalogError("Recipe entry missing 'id'")
    recipe_id = str(recipe_id)
    title = raw.get("title")
    if not title:
        raise CatalogError(f"Recipe {recipe_id!r} missing 'title'")

    cuisine = raw.get("cuisine") or {}
    if not isinstance(cuisine, dict):
        raise CatalogError(f"Recipe {recipe_id!r}: 'cuisine' must be a mapping")

    steps = tuple(_parse_step(recipe_id, step) for step in _as_list(raw.get("steps")))
    _check_step_indices(recipe_id, steps)

    return RecipeRecord(
        recipe_id=recipe_id,
        title=str(title),
        cuisine=Cuisine(
            region=str(cuisine.get("region", "")),
            subregion=str(cuisine.get("subregion", "")),
        ),
        description=str(raw.get("description") or ""),
        difficulty=str(raw.get("difficulty") or ""),
        serves=_optional_int(raw.get("serves")),
        total_time_min=_optional_int(raw.get("total_time_min")),
        steps=steps,
        ingredients=tuple(_parse_ingredient(recipe_id, ing) for ing in _as_list(raw.get("ingredients"))),
        diet=_str_tuple(raw.get("diet")),
        mood_tags=_str_tuple(raw.get("mood_tags")),
        prerequisites=_str_tuple(raw.get("prerequisites")),
        hero_image=str(raw.get("hero_image") or ""),
        nutrition=_parse_nutrition(raw.get("nutritional_info")),
    )


def _parse_step(recipe_id: str, raw: Any) -> StepRecord:
    if not isinstance(raw, dict):
        raise CatalogError(f"Recipe {recipe_id!r}: steps must be mappings")
    index = _optional_int(raw.get("index"))
    if index is None:
        raise CatalogError(f"Recipe {recipe_id!r}: step missing 'index'")
    timer_min = _optional_int(raw.get("timer_min")) or 0
    if timer_min < 0:
        raise CatalogError(f"Recipe {recipe_id!r}: step {index} has negative timer_min")
    youtube = raw.get("youtube")
    return StepRecord(
        index=index,
        title=str(raw.get("title") or f"Step {index}"),
        text=str(raw.get("text") or ""),
        emoji=str(raw.get("emoji") or ""),
        image=str(raw.get("image") or ""),
        timer_min=timer_min,
        linked_ingredients=_str_tuple(raw.get("linked_ingredients")),
        youtube=str(youtube) if youtube else None,
    )


def _check_step_indices(recipe_id: str, steps: tuple[StepRecord, ...]) -> None:
    expected = list(range(1, len(steps) + 1))
    actual = [step.index for step in steps]
    if actual != expected:
        raise CatalogError(
            f"Recipe {recipe_id!r}: step indices must run 1..{len(steps)} in order, got {actual}"
        )


def _parse_ingredient(recipe_id: str, raw: Any) -> IngredientRecord:
    if isinstance(raw, str):
        return IngredientRecord(name=raw)
    if not isinstance(raw, dict) or not raw.get("name"):
        raise CatalogError(f"Recipe {recipe_id!r}: ingredient entries need a 'name'")
    return IngredientRecord(
        name=str(raw["name"]),
        qty=raw.get("qty"),
        unit=str(raw.get("unit") or ""),
        substitutions=_str_tuple(raw.get("substitutions")),
    )


def _parse_nutrition(raw: Any) -> NutritionInfo | None:
    if not isinstance(raw, dict):
        return None
    return NutritionInfo(
        calories=raw.get("calories"),
        protein=str(raw.get("protein") or ""),
        carbs=str(raw.get("carbs") or ""),
        fat=str(raw.get("fat") or ""),
    )


def _parse_cuisine_region(raw: Any) -> CuisineRegion:
    if not isinstance(raw, dict) or not raw.get("region"):
        raise CatalogError("Cuisine entries need a 'region'")
    subregions = []
    for sub in _as_list(raw.get("subregions")):
        if isinstance(sub, str):
            subregions.append(Subregion(name=sub))
        elif isinstance(sub, dict) and sub.get("name"):
            subregions.append(
                Subregion(
                    name=str(sub["name"]),
                    description=str(sub.get("description") or ""),
                    color=str(sub.get("color") or ""),
                )
            )
        else:
            raise CatalogError(f"Cuisine {raw['region']!r}: subregions need a 'name'")
    return CuisineRegion(region=str(raw["region"]), subregions=tuple(subregions))


def _derive_cuisines(recipes: tuple[RecipeRecord, ...]) -> tuple[CuisineRegion, ...]:
    order: dict[str, list[str]] = {}
    for recipe in recipes:
        region = recipe.cuisine.region
        if not region:
            continue
        subs = order.setdefault(region, [])
        if recipe.cuisine.subregion and recipe.cuisine.subregion not in subs:
            subs.append(recipe.cuisine.subregion)
    return tuple(
        CuisineRegion(region=region, subregions=tuple(Subregion(name=name) for name in subs))
        for region, subs in order.items()
    )


def _parse_mood(raw: Any) -> tuple[str, str]:
    if isinstance(raw, dict):
        return str(raw.get("name") or ""), str(raw.get("emoji") or "")
    return str(raw or ""), ""


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise CatalogError(f"Expected a list, got {type(value).__name__}")


def _str_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    if isinstance(value, str):
        return (value,)
    return ()


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
