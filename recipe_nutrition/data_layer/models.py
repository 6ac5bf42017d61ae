"""Data models for the recipe nutrition engine."""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class NutrientSample:
    """One nutrient's amount per 100 units of an ingredient."""

    name: str  # Key as emitted by the ingredient source (e.g., "saturated-fat")
    quantity_per_100: float


@dataclass(frozen=True)
class ScaledNutrient:
    """One nutrient's amount at the ingredient's current quantity."""

    name: str
    quantity_at_current_amount: float


@dataclass(frozen=True)
class RecipeIngredient:
    """One ingredient instance within a recipe draft.

    scaled_nutrients and calories_for_quantity are derived values. They are
    only ever produced by IngredientScaler.scale() from nutrient_samples and
    quantity, so a new quantity always means a new RecipeIngredient.
    """

    id: str
    product_name: str
    brand: str = ""
    source: str = ""
    calories_per_100: float = 0.0
    quantity: Optional[float] = None  # None while the user has not entered an amount
    calories_for_quantity: float = 0.0
    nutrient_samples: Tuple[NutrientSample, ...] = ()
    scaled_nutrients: Tuple[ScaledNutrient, ...] = ()
    additive_tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecipeNutrientTotals:
    """Aggregate nutrition over every ingredient in a recipe."""

    total_quantity: float
    total_calories: float
    fat: float
    saturated_fat: float
    carbohydrates: float
    sugars: float
    proteins: float
    salt: float

    @classmethod
    def zero(cls) -> "RecipeNutrientTotals":
        """Totals of a recipe without ingredients."""
        return cls(
            total_quantity=0.0,
            total_calories=0.0,
            fat=0.0,
            saturated_fat=0.0,
            carbohydrates=0.0,
            sugars=0.0,
            proteins=0.0,
            salt=0.0,
        )


@dataclass(frozen=True)
class NutriScoreInput:
    """Input vector handed to a Nutri-Score classifier."""

    energy: float  # kJ
    fibers: float
    fruit_percentage: float
    proteins: float
    saturated_fats: float
    sodium: float  # mg
    sugar: float

    def as_dict(self) -> dict:
        return {
            "energy": self.energy,
            "fibers": self.fibers,
            "fruit_percentage": self.fruit_percentage,
            "proteins": self.proteins,
            "saturated_fats": self.saturated_fats,
            "sodium": self.sodium,
            "sugar": self.sugar,
        }


@dataclass(frozen=True)
class Recipe:
    """A recipe draft: ingredients plus everything derived from them.

    Edits never mutate a Recipe; RecipeEditor returns a replacement.
    """

    id: Optional[str] = None  # None until persisted by a dispatcher
    name: str = ""
    ingredients: Tuple[RecipeIngredient, ...] = ()
    nutrient_totals: RecipeNutrientTotals = field(default_factory=RecipeNutrientTotals.zero)
    additives: Tuple[str, ...] = ()
    score: Optional[str] = None  # Nutri-Score grade, None when not computable

    @property
    def quantity(self) -> float:
        return self.nutrient_totals.total_quantity
