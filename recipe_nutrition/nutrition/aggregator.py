"""Nutrition aggregator for rolling recipe ingredients up into totals."""
import logging
from typing import Iterable, Optional, Sequence

from recipe_nutrition.data_layer.models import (
    NutriScoreInput,
    RecipeIngredient,
    RecipeNutrientTotals,
)
from recipe_nutrition.nutrition.numeric import find_scaled, or_zero, round2
from recipe_nutrition.scoring.nutriscore import NutriScoreClassifier

logger = logging.getLogger(__name__)

# Nutrient keys exactly as the ingredient source emits them.
# Note the mix of hyphenated and plain keys; a wrong key sums to 0.
FAT_KEY = "fat"
SATURATED_FAT_KEY = "saturated-fat"
CARBOHYDRATES_KEY = "carbohydrates"
SUGARS_KEY = "sugars"
PROTEINS_KEY = "proteins"
SALT_KEY = "salt"
ENERGY_KCAL_KEY = "energy-kcal"
FIBERS_KEY = "fibers"

KCAL_TO_KJ = 4.184
SALT_TO_SODIUM_MG = 400.0  # 1g salt ~ 0.4g sodium = 400mg
ADDITIVE_PREFIX_LENGTH = 3  # e.g. "en:" in "en:e330"


class RecipeAggregator:
    """Aggregator for combining scaled ingredient nutrition into recipe totals."""

    @staticmethod
    def sum_nutrient(ingredients: Iterable[RecipeIngredient], nutrient_name: str) -> float:
        """Sum one nutrient across ingredients.

        The running total is rounded to 2 decimals after every addition,
        not once at the end.

        Args:
            ingredients: Scaled recipe ingredients
            nutrient_name: Exact (case-sensitive) nutrient key

        Returns:
            Rounded sum, 0 for an empty list
        """
        total = 0.0
        for ingredient in ingredients:
            if not ingredient.scaled_nutrients:
                continue
            entry = find_scaled(ingredient.scaled_nutrients, nutrient_name)
            if entry is None:
                logger.debug(
                    "Ingredient %s (%s) has no '%s' entry; contributing 0",
                    ingredient.id,
                    ingredient.product_name,
                    nutrient_name,
                )
                contribution = 0.0
            else:
                contribution = or_zero(entry.quantity_at_current_amount)
            total = round2(total + contribution)
        return total

    @staticmethod
    def compute_totals(ingredients: Sequence[RecipeIngredient]) -> RecipeNutrientTotals:
        """Compute recipe totals from scaled ingredients.

        Args:
            ingredients: Scaled recipe ingredients

        Returns:
            RecipeNutrientTotals; total_quantity is a plain (unrounded) sum
        """
        total_quantity = 0.0
        total_calories = 0.0
        for ingredient in ingredients:
            total_quantity = or_zero(total_quantity + or_zero(ingredient.quantity))
            total_calories = round2(total_calories + or_zero(ingredient.calories_for_quantity))

        sum_nutrient = RecipeAggregator.sum_nutrient
        return RecipeNutrientTotals(
            total_quantity=total_quantity,
            total_calories=total_calories,
            fat=sum_nutrient(ingredients, FAT_KEY),
            saturated_fat=sum_nutrient(ingredients, SATURATED_FAT_KEY),
            carbohydrates=sum_nutrient(ingredients, CARBOHYDRATES_KEY),
            sugars=sum_nutrient(ingredients, SUGARS_KEY),
            proteins=sum_nutrient(ingredients, PROTEINS_KEY),
            salt=sum_nutrient(ingredients, SALT_KEY),
        )

    @staticmethod
    def compute_additives(ingredients: Iterable[RecipeIngredient]) -> tuple:
        """Collect additive codes across ingredients.

        Each tag loses its 3-character prefix and gains one trailing space
        (the legacy display format). Duplicates are dropped, keeping the
        order of first appearance.
        """
        seen = {}
        for ingredient in ingredients:
            for tag in ingredient.additive_tags or ():
                seen.setdefault(str(tag)[ADDITIVE_PREFIX_LENGTH:] + " ", None)
        return tuple(seen)

    @staticmethod
    def build_score_input(ingredients: Sequence[RecipeIngredient]) -> NutriScoreInput:
        """Build the classifier vector from recipe sums.

        Fruit/vegetable share is not tracked, so it is always 0.
        """
        sum_nutrient = RecipeAggregator.sum_nutrient
        return NutriScoreInput(
            energy=or_zero(sum_nutrient(ingredients, ENERGY_KCAL_KEY) * KCAL_TO_KJ),
            fibers=sum_nutrient(ingredients, FIBERS_KEY),
            fruit_percentage=0.0,
            proteins=sum_nutrient(ingredients, PROTEINS_KEY),
            saturated_fats=sum_nutrient(ingredients, SATURATED_FAT_KEY),
            sodium=or_zero(sum_nutrient(ingredients, SALT_KEY) * SALT_TO_SODIUM_MG),
            sugar=sum_nutrient(ingredients, SUGARS_KEY),
        )

    @staticmethod
    def compute_score(
        ingredients: Sequence[RecipeIngredient], classifier: NutriScoreClassifier
    ) -> Optional[str]:
        """Classify the recipe, or None for a recipe without ingredients.

        An empty recipe never reaches the classifier.
        """
        if not ingredients:
            return None
        return classifier.classify(RecipeAggregator.build_score_input(ingredients))

