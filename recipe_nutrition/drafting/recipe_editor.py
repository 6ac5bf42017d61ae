"""Recipe draft editing: ingredient add/remove/update and recomputation.

Every operation takes a Recipe and returns a new one. Totals, additives
and the score are recomputed after removals and quantity updates; adding
an ingredient leaves them alone until the user enters a quantity.
"""

import logging
from dataclasses import replace
from typing import Callable, Mapping, Optional
from uuid import uuid4

from recipe_nutrition.data_layer.exceptions import (
    EmptyRecipeError,
    IngredientNotInRecipeError,
)
from recipe_nutrition.data_layer.models import Recipe, RecipeIngredient, RecipeNutrientTotals
from recipe_nutrition.ingestion.ingredient_normalizer import IngredientNormalizer
from recipe_nutrition.ingestion.nutrition_scaler import IngredientScaler
from recipe_nutrition.nutrition.aggregator import RecipeAggregator
from recipe_nutrition.providers.recipe_dispatcher import RecipeDispatcher
from recipe_nutrition.scoring.nutriscore import NutriScoreClassifier, NutriScoreTable

logger = logging.getLogger(__name__)


class RecipeEditor:
    """Edits recipe drafts and keeps their derived values current.

    Usage:
        editor = RecipeEditor()
        recipe = editor.new_recipe("Salad")
        recipe = editor.add_ingredient(recipe, catalog.require_record("Tomato"))
        tomato_id = recipe.ingredients[-1].id
        recipe = editor.update_quantity(recipe, tomato_id, 150)
        recipe.nutrient_totals.total_calories
    """

    def __init__(
        self,
        scaler: Optional[IngredientScaler] = None,
        classifier: Optional[NutriScoreClassifier] = None,
        normalizer: Optional[IngredientNormalizer] = None,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        """Initialize recipe editor.

        Args:
            scaler: IngredientScaler instance (default settings when omitted)
            classifier: Nutri-Score classifier (NutriScoreTable when omitted)
            normalizer: IngredientNormalizer for source records
            id_factory: Callable producing new ingredient ids
        """
        self.scaler = scaler or IngredientScaler()
        self.classifier = classifier or NutriScoreTable()
        self.normalizer = normalizer or IngredientNormalizer()
        self.id_factory = id_factory

    def new_recipe(self, name: str = "") -> Recipe:
        return Recipe(name=name)

    def rename(self, recipe: Recipe, name: str) -> Recipe:
        return replace(recipe, name=name)

    def add_ingredient(self, recipe: Recipe, record: Mapping) -> Recipe:
        """Append an ingredient built from a source record.

        The new ingredient has no quantity, so derived recipe values are
        not recomputed.

        Args:
            recipe: Current draft
            record: Ingredient record from the ingredient source

        Returns:
            Draft with the ingredient appended
        """
        ingredient = self.normalizer.normalize(record, ingredient_id=self.id_factory())
        ingredient = self.scaler.scale(ingredient, None)
        logger.debug("Adding ingredient %s (%s)", ingredient.id, ingredient.product_name)
        return replace(recipe, ingredients=recipe.ingredients + (ingredient,))

    def remove_ingredient(self, recipe: Recipe, ingredient_id: str) -> Recipe:
        """Remove an ingredient by id and recompute derived values.

        Removing an id the draft does not contain leaves the ingredient list
        unchanged.
        """
        remaining = tuple(item for item in recipe.ingredients if item.id != ingredient_id)
        logger.debug("Removing ingredient %s", ingredient_id)
        return self.recalculate(replace(recipe, ingredients=remaining))

    def update_quantity(self, recipe: Recipe, ingredient_id: str, quantity) -> Recipe:
        """Rescale one ingredient in place and recompute derived values.

        Args:
            recipe: Current draft
            ingredient_id: Id of the ingredient to rescale
            quantity: New amount (non-finite values count as unset)

        Returns:
            Draft with the rescaled ingredient at its original position

        Raises:
            IngredientNotInRecipeError: If no ingredient has ingredient_id
        """
        updated = []
        found = False
        for item in recipe.ingredients:
            if item.id == ingredient_id:
                item = self.scaler.scale(item, quantity)
                found = True
            updated.append(item)

        if not found:
            raise IngredientNotInRecipeError(ingredient_id)

        logger.debug("Set quantity of ingredient %s to %r", ingredient_id, quantity)
        return self.recalculate(replace(recipe, ingredients=tuple(updated)))

    def recalculate(self, recipe: Recipe) -> Recipe:
        """Recompute totals, additives and score from the ingredient list."""
        ingredients = recipe.ingredients
        if not ingredients:
            return replace(
                recipe,
                nutrient_totals=RecipeNutrientTotals.zero(),
                additives=(),
                score=None,
            )

        return replace(
            recipe,
            nutrient_totals=RecipeAggregator.compute_totals(ingredients),
            additives=RecipeAggregator.compute_additives(ingredients),
            score=RecipeAggregator.compute_score(ingredients, self.classifier),
        )

    def find_ingredient(self, recipe: Recipe, ingredient_id: str) -> Optional[RecipeIngredient]:
        for item in recipe.ingredients:
            if item.id == ingredient_id:
                return item
        return None

    def submit(self, recipe: Recipe, dispatcher: RecipeDispatcher) -> Recipe:
        """Hand a finished recipe to the persistence collaborator.

        Recipes with an id are updated, the rest are created.

        Raises:
            EmptyRecipeError: If the recipe has no ingredients
        """
        if not recipe.ingredients:
            raise EmptyRecipeError(recipe.name)
        if recipe.id:
            return dispatcher.update(recipe)
        return dispatcher.create(recipe)
