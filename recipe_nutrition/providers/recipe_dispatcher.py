"""Abstract base class for persisting finished recipes.

The engine never stores recipes itself. RecipeEditor.submit() hands a
finished Recipe to a dispatcher, which creates it when it has no id yet and
updates it otherwise.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from recipe_nutrition.data_layer.exceptions import RecipeNotFoundError
from recipe_nutrition.data_layer.models import Recipe


class RecipeDispatcher(ABC):
    """Abstraction for the recipe persistence collaborator."""

    @abstractmethod
    def create(self, recipe: Recipe) -> Recipe:
        """Persist a new recipe.

        Args:
            recipe: Recipe without an id

        Returns:
            The stored recipe, carrying its assigned id
        """
        ...

    @abstractmethod
    def update(self, recipe: Recipe) -> Recipe:
        """Replace a previously persisted recipe.

        Args:
            recipe: Recipe whose id was assigned by create()

        Returns:
            The stored recipe
        """
        ...


class InMemoryRecipeDispatcher(RecipeDispatcher):
    """Dispatcher keeping recipes in a dict, for tests and embedding callers."""

    def __init__(self, id_factory: Callable[[], str] = lambda: str(uuid4())) -> None:
        self._id_factory = id_factory
        self._recipes: Dict[str, Recipe] = {}

    def create(self, recipe: Recipe) -> Recipe:
        stored = replace(recipe, id=self._id_factory())
        self._recipes[stored.id] = stored
        return stored

    def update(self, recipe: Recipe) -> Recipe:
        """Replace an existing recipe.

        Raises:
            RecipeNotFoundError: If recipe.id was never created here
        """
        if recipe.id not in self._recipes:
            raise RecipeNotFoundError(recipe.id)
        self._recipes[recipe.id] = recipe
        return recipe

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)

    def all(self) -> List[Recipe]:
        return list(self._recipes.values())
