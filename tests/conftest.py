from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from recipeflow.catalog import RecipeCatalog  # noqa: E402
from recipeflow.cadence import ManualCadence  # noqa: E402
from recipeflow.session import Session  # noqa: E402
from tests.utils import make_recipe, make_step  # noqa: E402

CATALOG_YAML = """
moods:
  - {name: fast, emoji: "⚡"}
  - lazy
recipes:
  - id: r1
    title: Masala Dosa
    description: Crisp rice crepe
    cuisine: {region: Indian, subregion: South Indian}
    difficulty: Medium
    serves: 4
    total_time_min: 45
    mood_tags: [enjoy]
    prerequisites: [Soak rice]
    ingredients:
      - {name: potatoes, qty: 4, unit: medium, substitutions: [sweet potatoes]}
      - mustard seeds
    steps:
      - {index: 1, title: Boil, text: Boil potatoes, timer_min: 5, linked_ingredients: [potatoes]}
      - {index: 2, title: Fold, text: Fold the dosa, youtube: "https://youtu.be/dosa-fold"}
    nutritional_info: {calories: 320, protein: 8g, carbs: 52g, fat: 9g}
  - id: r2
    title: Paneer Tikka
    cuisine: {region: Indian, subregion: North Indian}
    mood_tags: [fast]
    steps:
      - {index: 1, title: Grill, timer_min: 10}
"""


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture()
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "recipes.yaml"
    path.write_text(CATALOG_YAML, encoding="utf-8")
    return path


@pytest.fixture()
def sample_catalog() -> RecipeCatalog:
    return RecipeCatalog(
        [
            make_recipe(
                "r1",
                title="Masala Dosa",
                subregion="South Indian",
                description="Crisp fermented crepe",
                ingredients=("potatoes", "mustard seeds"),
                moods=("enjoy", "relax"),
                steps=(
                    make_step(1, timer_min=5, title="Boil potatoes", linked=("potatoes", "salt")),
                    make_step(2, timer_min=2, title="Temper"),
                    make_step(3, timer_min=0, title="Fold"),
                ),
                prerequisites=("Soak rice", "Ferment batter"),
            ),
            make_recipe(
                "r2",
                title="Paneer Butter Masala",
                subregion="North Indian",
                description="Rich tomato gravy",
                ingredients=("paneer", "butter"),
                moods=("enjoy",),
                steps=(make_step(1, timer_min=10, title="Simmer"),),
            ),
            make_recipe(
                "r3",
                title="Lemon Rice",
                subregion="South Indian",
                description="Quick tangy rice",
                ingredients=("rice", "lemon"),
                moods=("fast", "lazy"),
                steps=(make_step(1, timer_min=3, title="Roast peanuts"), make_step(2, title="Toss")),
            ),
            make_recipe(
                "r4",
                title="Aglio e Olio",
                region="Global",
                subregion="Italian",
                description="Garlic pasta with paneer-free sauce",
                ingredients=("spaghetti", "garlic"),
                moods=("fast",),
                steps=(make_step(1, timer_min=9, title="Boil pasta"),),
            ),
        ]
    )


@pytest.fixture()
def cadence() -> ManualCadence:
    return ManualCadence()


@pytest.fixture()
def session(sample_catalog: RecipeCatalog, cadence: ManualCadence) -> Session:
    return Session(sample_catalog, cadence=cadence)
