"""Provider abstraction layer for the recipe persistence collaborator.

RecipeEditor.submit() depends only on RecipeDispatcher; concrete
dispatchers decide where finished recipes end up.
"""

from recipe_nutrition.providers.recipe_dispatcher import (
    RecipeDispatcher,
    InMemoryRecipeDispatcher,
)

__all__ = [
    "RecipeDispatcher",
    "InMemoryRecipeDispatcher",
]
