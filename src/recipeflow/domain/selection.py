from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SelectionState:
    """Browse filters plus the open recipe.

    A subregion is only kept together with a region; an empty region is the
    "view all" selection and clears both.
    """

    region: str | None = None
    subregion: str | None = None
    recipe_id: str | None = None
    search: str = ""
    mood: str | None = None

    def with_cuisine(self, region: str | None, subregion: str | None) -> SelectionState:
        if not region:
            return replace(self, region=None, subregion=None, recipe_id=None)
        return replace(self, region=region, subregion=subregion or None, recipe_id=None)

    def with_mood_toggled(self, tag: str) -> SelectionState:
        if self.mood == tag:
            return replace(self, mood=None)
        return replace(self, mood=tag)

    @property
    def cuisine_active(self) -> bool:
        return bool(self.region) and bool(self.subregion)
