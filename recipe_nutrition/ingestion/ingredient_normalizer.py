"""Normalization of ingredient source records into RecipeIngredient values.

The ingredient search service hands back loosely shaped records. Nutriments
may be an ordered list of {"name", "quantity_100"} objects or a mapping
(either of such objects or of plain numbers keyed by nutrient name). This
module settles that ambiguity once, at ingestion, so the scaler and the
aggregator only ever see an ordered tuple of NutrientSample.
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Tuple

from recipe_nutrition.data_layer.models import NutrientSample, RecipeIngredient
from recipe_nutrition.nutrition.numeric import or_zero

logger = logging.getLogger(__name__)

# Accepted spellings per field, first match wins
RECORD_FIELD_ALIASES = {
    "product_name": ("product_name", "productName"),
    "brand": ("brands", "brand"),
    "calories": ("calories", "calories_100"),
    "source": ("source", "sursa"),
    "additives": ("additives_tags", "additiveTags"),
}


def _first_present(record: Mapping, field: str, default: Any = None) -> Any:
    for key in RECORD_FIELD_ALIASES[field]:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _sample_from_entry(entry: Any, fallback_name: str = "") -> NutrientSample:
    if isinstance(entry, Mapping):
        name = entry.get("name") or fallback_name
        quantity = entry.get("quantity_100", entry.get("quantityPer100"))
        return NutrientSample(name=str(name), quantity_per_100=or_zero(quantity))
    # Plain number keyed by nutrient name
    return NutrientSample(name=fallback_name, quantity_per_100=or_zero(entry))


def normalize_nutrients(nutriments: Any) -> Tuple[NutrientSample, ...]:
    """Normalize nutriments (list, mapping or None) to ordered samples.

    Args:
        nutriments: Raw nutriments value from an ingredient record

    Returns:
        Tuple of NutrientSample in source order; empty when nothing usable
    """
    if not nutriments:
        return ()

    samples: List[NutrientSample] = []
    if isinstance(nutriments, Mapping):
        for key, entry in nutriments.items():
            samples.append(_sample_from_entry(entry, fallback_name=str(key)))
    elif isinstance(nutriments, (list, tuple)):
        for entry in nutriments:
            samples.append(_sample_from_entry(entry))
    else:
        logger.warning("Ignoring nutriments of unsupported type %s", type(nutriments).__name__)
        return ()

    return tuple(sample for sample in samples if sample.name)


def normalize_additives(tags: Any) -> Tuple[str, ...]:
    """Normalize additive tags to a tuple of strings."""
    if not tags:
        return ()
    if isinstance(tags, str):
        return (tags,)
    return tuple(str(tag) for tag in tags)


class IngredientNormalizer:
    """Turns ingredient source records into RecipeIngredient values.

    The resulting ingredient has no quantity yet; callers run it through
    IngredientScaler to derive calories_for_quantity and scaled_nutrients.
    """

    def normalize(self, record: Mapping, ingredient_id: str) -> RecipeIngredient:
        """Build a RecipeIngredient from a source record.

        Args:
            record: Ingredient record from the ingredient source
            ingredient_id: Identifier to assign to the new ingredient

        Returns:
            RecipeIngredient with quantity unset
        """
        return RecipeIngredient(
            id=ingredient_id,
            product_name=str(_first_present(record, "product_name", "")),
            brand=str(_first_present(record, "brand", "")),
            source=str(_first_present(record, "source", "")),
            calories_per_100=or_zero(_first_present(record, "calories")),
            nutrient_samples=normalize_nutrients(record.get("nutriments")),
            additive_tags=normalize_additives(_first_present(record, "additives")),
        )
