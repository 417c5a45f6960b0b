from .models import (
    Cuisine,
    CuisineRegion,
    IngredientRecord,
    NutritionInfo,
    RecipeRecord,
    StepRecord,
    Subregion,
)
from .selection import SelectionState

__all__ = [
    "Cuisine",
    "CuisineRegion",
    "IngredientRecord",
    "NutritionInfo",
    "RecipeRecord",
    "SelectionState",
    "StepRecord",
    "Subregion",
]
