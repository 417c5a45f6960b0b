from __future__ import annotations

from pathlib import Path

from recipeflow.domain import Cuisine, IngredientRecord, RecipeRecord, StepRecord


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "recipeflow"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def write_profile(home: Path, name: str, catalog: str) -> Path:
    dir_path = home / ".config" / "recipeflow" / "profiles.d"
    dir_path.mkdir(parents=True, exist_ok=True)
    path = dir_path / f"{name}.toml"
    path.write_text(f"catalog = {catalog!r}\n", encoding="utf-8")
    return path


def make_step(index: int, timer_min: int = 0, title: str | None = None, linked: tuple[str, ...] = ()) -> StepRecord:
    return StepRecord(
        index=index,
        title=title or f"Step title {index}",
        text=f"Do thing {index}",
        timer_min=timer_min,
        linked_ingredients=linked,
    )


def make_recipe(
    recipe_id: str,
    title: str = "Recipe",
    region: str = "Indian",
    subregion: str = "South Indian",
    description: str = "",
    ingredients: tuple[str, ...] = (),
    moods: tuple[str, ...] = (),
    steps: tuple[StepRecord, ...] = (),
    prerequisites: tuple[str, ...] = (),
) -> RecipeRecord:
    return RecipeRecord(
        recipe_id=recipe_id,
        title=title,
        cuisine=Cuisine(region=region, subregion=subregion),
        description=description,
        ingredients=tuple(IngredientRecord(name=name) for name in ingredients),
        mood_tags=moods,
        steps=steps,
        prerequisites=prerequisites,
    )
