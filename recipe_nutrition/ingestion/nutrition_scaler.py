"""Nutrition scaling of a single recipe ingredient by quantity.

Nutrient samples arrive per 100 units of the ingredient. Scaling multiplies
each sample by quantity / 100 in whatever unit basis the caller uses; the
scaler never converts units and never validates the sign of a quantity.

DESIGN DECISIONS:
- Scale factor = quantity / 100 (samples and calories are per-100 values)
- Unset or non-finite quantities scale to 0.0, never NaN
- Ingredients without samples whose product name looks like salt get a
  single synthetic "salt" entry equal to the full quantity
"""

import logging
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from recipe_nutrition.data_layer.models import RecipeIngredient, ScaledNutrient
from recipe_nutrition.data_layer.settings import DEFAULT_SALT_NAME_TOKENS
from recipe_nutrition.nutrition.numeric import or_zero, to_quantity

logger = logging.getLogger(__name__)

BASE_QUANTITY = 100.0
SALT_NUTRIENT_NAME = "salt"


class IngredientScaler:
    """Scales an ingredient's per-100 nutrition to a chosen quantity.

    Usage:
        scaler = IngredientScaler()

        # 50g of an ingredient with 200 kcal and 10g fat per 100g
        scaled = scaler.scale(ingredient, 50)
        scaled.calories_for_quantity   # 100.0
        scaled.scaled_nutrients        # (ScaledNutrient("fat", 5.0),)
    """

    def __init__(self, salt_name_tokens: Iterable[str] = DEFAULT_SALT_NAME_TOKENS):
        """Initialize scaler.

        Args:
            salt_name_tokens: Product-name fragments that trigger the salt fallback
        """
        self.salt_name_tokens = tuple(token.lower() for token in salt_name_tokens if token)

    def scale(self, ingredient: RecipeIngredient, quantity) -> RecipeIngredient:
        """Return a copy of ingredient scaled to quantity.

        Args:
            ingredient: Ingredient to rescale (left untouched)
            quantity: New amount; None, NaN or non-numeric values count as unset

        Returns:
            New RecipeIngredient with quantity, calories_for_quantity and
            scaled_nutrients recomputed
        """
        amount = to_quantity(quantity)
        if amount is None and quantity is not None:
            logger.debug(
                "Ignoring non-finite quantity %r for ingredient %s", quantity, ingredient.id
            )

        return replace(
            ingredient,
            quantity=amount,
            calories_for_quantity=self._scale_value(ingredient.calories_per_100, amount),
            scaled_nutrients=self._scale_nutrients(ingredient, amount),
        )

    def is_salt_product(self, product_name: Optional[str]) -> bool:
        """Check whether a product name contains one of the salt tokens."""
        name_lower = (product_name or "").lower()
        return any(token in name_lower for token in self.salt_name_tokens)

    def _scale_nutrients(
        self, ingredient: RecipeIngredient, amount: Optional[float]
    ) -> Tuple[ScaledNutrient, ...]:
        if ingredient.nutrient_samples:
            return tuple(
                ScaledNutrient(
                    name=sample.name,
                    quantity_at_current_amount=self._scale_value(sample.quantity_per_100, amount),
                )
                for sample in ingredient.nutrient_samples
            )

        if self.is_salt_product(ingredient.product_name):
            return (ScaledNutrient(name=SALT_NUTRIENT_NAME, quantity_at_current_amount=or_zero(amount)),)

        return ()

    @staticmethod
    def _scale_value(per_100, amount: Optional[float]) -> float:
        if amount is None:
            return 0.0
        # Overflow to inf collapses to 0.0
        return or_zero(or_zero(per_100) / BASE_QUANTITY * amount)
