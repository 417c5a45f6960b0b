from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cuisine:
    region: str
    subregion: str


@dataclass(frozen=True)
class Subregion:
    name: str
    description: str = ""
    color: str = ""


@dataclass(frozen=True)
class CuisineRegion:
    region: str
    subregions: tuple[Subregion, ...]

    def subregion_names(self) -> list[str]:
        return [sub.name for sub in self.subregions]


@dataclass(frozen=True)
class IngredientRecord:
    name: str
    qty: float | int | str | None = None
    unit: str = ""
    substitutions: tuple[str, ...] = ()

    def amount(self) -> str:
        qty = "" if self.qty is None else str(self.qty)
        return " ".join(part for part in (qty, self.unit) if part)


@dataclass(frozen=True)
class StepRecord:
    index: int
    title: str
    text: str = ""
    emoji: str = ""
    image: str = ""
    timer_min: int = 0
    linked_ingredients: tuple[str, ...] = ()
    youtube: str | None = None

    @property
    def has_timer(self) -> bool:
        return self.timer_min > 0

    @property
    def timer_label(self) -> str:
        return f"Step {self.index}: {self.title}"


@dataclass(frozen=True)
class NutritionInfo:
    calories: int | float | None = None
    protein: str = ""
    carbs: str = ""
    fat: str = ""

    def facts(self) -> list[tuple[str, str]]:
        """Label/value pairs for the fields that are set, in display order."""
        pairs = [
            ("Calories", "" if self.calories is None else str(self.calories)),
            ("Protein", self.protein),
            ("Carbs", self.carbs),
            ("Fat", self.fat),
        ]
        return [(label, value) for label, value in pairs if value]


@dataclass(frozen=True)
class RecipeRecord:
    recipe_id: str
    title: str
    cuisine: Cuisine
    description: str = ""
    difficulty: str = ""
    serves: int | None = None
    total_time_min: int | None = None
    steps: tuple[StepRecord, ...] = ()
    ingredients: tuple[IngredientRecord, ...] = ()
    diet: tuple[str, ...] = ()
    mood_tags: tuple[str, ...] = ()
    prerequisites: tuple[str, ...] = ()
    hero_image: str = ""
    nutrition: NutritionInfo | None = None

    def step(self, index: int) -> StepRecord | None:
        for step in self.steps:
            if step.index == index:
                return step
        return None
