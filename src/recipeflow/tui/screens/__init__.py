from .browse import BrowseScreen
from .recipe import RecipeScreen

__all__ = ["BrowseScreen", "RecipeScreen"]
