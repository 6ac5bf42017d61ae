"""Ingestion layer for normalizing and scaling ingredient records."""

from recipe_nutrition.ingestion.ingredient_normalizer import (
    IngredientNormalizer,
    normalize_nutrients,
    normalize_additives,
    RECORD_FIELD_ALIASES,
)

from recipe_nutrition.ingestion.nutrition_scaler import (
    IngredientScaler,
    BASE_QUANTITY,
    SALT_NUTRIENT_NAME,
)

__all__ = [
    # Record normalization
    "IngredientNormalizer",
    "normalize_nutrients",
    "normalize_additives",
    "RECORD_FIELD_ALIASES",
    # Quantity scaling
    "IngredientScaler",
    "BASE_QUANTITY",
    "SALT_NUTRIENT_NAME",
]
