"""Tests for recipe nutrition aggregation."""
import math

import pytest
from unittest.mock import Mock

from recipe_nutrition.data_layer.models import (
    NutrientSample,
    NutriScoreInput,
    RecipeIngredient,
    RecipeNutrientTotals,
    ScaledNutrient,
)
from recipe_nutrition.ingestion.nutrition_scaler import IngredientScaler
from recipe_nutrition.nutrition.aggregator import RecipeAggregator
from recipe_nutrition.scoring.nutriscore import NutriScoreClassifier


def make_scaled(ingredient_id, quantity=None, calories=0.0, **nutrients):
    """Build an ingredient with precomputed scaled entries (plain keys only)."""
    return RecipeIngredient(
        id=ingredient_id,
        product_name=ingredient_id,
        quantity=quantity,
        calories_for_quantity=calories,
        scaled_nutrients=tuple(ScaledNutrient(name, value) for name, value in nutrients.items()),
    )


def make_with(ingredient_id, entries, quantity=None, calories=0.0, tags=()):
    return RecipeIngredient(
        id=ingredient_id,
        product_name=ingredient_id,
        quantity=quantity,
        calories_for_quantity=calories,
        scaled_nutrients=tuple(ScaledNutrient(name, value) for name, value in entries.items()),
        additive_tags=tuple(tags),
    )


class TestSumNutrient:
    """Tests for RecipeAggregator.sum_nutrient."""

    def test_empty_list_returns_zero(self):
        """Test summing over no ingredients returns exactly 0."""
        assert RecipeAggregator.sum_nutrient([], "fat") == 0

    def test_salt_from_two_ingredients(self):
        """Test scaled salt 1.2 + 0.3 sums to 1.5."""
        ingredients = [make_scaled("a", salt=1.2), make_scaled("b", salt=0.3)]

        assert RecipeAggregator.sum_nutrient(ingredients, "salt") == 1.5

    def test_missing_nutrient_contributes_zero(self):
        """Test an ingredient without the requested entry adds nothing."""
        ingredients = [make_scaled("a", fat=2.0), make_scaled("b", proteins=7.0)]

        assert RecipeAggregator.sum_nutrient(ingredients, "fat") == 2.0

    def test_name_match_is_case_sensitive(self):
        """Test 'Fat' does not match 'fat'."""
        ingredients = [make_scaled("a", Fat=2.0)]

        assert RecipeAggregator.sum_nutrient(ingredients, "fat") == 0

    def test_ingredients_without_entries_skipped(self):
        """Test ingredients without scaled entries are ignored."""
        ingredients = [make_scaled("a"), make_scaled("b", fat=1.25)]

        assert RecipeAggregator.sum_nutrient(ingredients, "fat") == 1.25

    def test_rounds_after_every_addition(self):
        """Test the running total is rounded at each step, not once at the end."""
        ingredients = [make_scaled(f"i{n}", fat=0.004) for n in range(3)]

        # 0.004 rounds away at every step; rounding once would give 0.01
        assert RecipeAggregator.sum_nutrient(ingredients, "fat") == 0.0

    def test_result_rounded_to_two_decimals(self):
        """Test the result carries at most 2 decimals."""
        ingredients = [make_scaled("a", sugars=1.236), make_scaled("b", sugars=2.0)]

        assert RecipeAggregator.sum_nutrient(ingredients, "sugars") == 3.24

    def test_salt_fallback_ingredient_is_summed(self):
        """Test the synthetic salt entry of a salt product is counted."""
        scaler = IngredientScaler()
        salt = scaler.scale(RecipeIngredient(id="s", product_name="Sare de mare"), 4)
        cheese = scaler.scale(
            RecipeIngredient(
                id="c",
                product_name="Telemea",
                nutrient_samples=(NutrientSample("salt", 2.0),),
            ),
            50,
        )

        assert RecipeAggregator.sum_nutrient([salt, cheese], "salt") == 5.0


class TestComputeTotals:
    """Tests for RecipeAggregator.compute_totals."""

    def test_empty_list(self):
        """Test an empty recipe has all-zero totals."""
        assert RecipeAggregator.compute_totals([]) == RecipeNutrientTotals.zero()

    def test_totals_from_scaled_ingredients(self):
        """Test every total field is filled from its nutrient key."""
        ingredients = [
            make_with(
                "flour",
                {
                    "fat": 2.0,
                    "saturated-fat": 0.4,
                    "carbohydrates": 152.0,
                    "sugars": 0.6,
                    "proteins": 20.0,
                    "salt": 0.02,
                },
                quantity=200.0,
                calories=728.0,
            ),
            make_with(
                "milk",
                {
                    "fat": 10.5,
                    "saturated-fat": 6.9,
                    "carbohydrates": 14.1,
                    "sugars": 14.1,
                    "proteins": 9.6,
                    "salt": 0.3,
                },
                quantity=300.0,
                calories=192.0,
            ),
        ]

        totals = RecipeAggregator.compute_totals(ingredients)

        assert totals.total_quantity == 500.0
        assert totals.total_calories == 920.0
        assert totals.fat == 12.5
        assert totals.saturated_fat == 7.3
        assert totals.carbohydrates == 166.1
        assert totals.sugars == 14.7
        assert totals.proteins == 29.6
        assert totals.salt == 0.32

    def test_total_quantity_not_rounded(self):
        """Test total_quantity is a plain sum while nutrient sums are rounded."""
        ingredients = [
            make_with("a", {"fat": 0.001}, quantity=10.125),
            make_with("b", {"fat": 0.001}, quantity=0.001),
        ]

        totals = RecipeAggregator.compute_totals(ingredients)

        assert totals.total_quantity == pytest.approx(10.126)
        assert totals.total_quantity != 10.13
        assert totals.fat == 0.0

    def test_unset_quantity_counts_as_zero(self):
        """Test ingredients without quantity add nothing to totals."""
        ingredients = [
            make_with("a", {"fat": 1.0}, quantity=100.0, calories=50.0),
            make_with("b", {}, quantity=None, calories=0.0),
        ]

        totals = RecipeAggregator.compute_totals(ingredients)

        assert totals.total_quantity == 100.0
        assert totals.total_calories == 50.0

    def test_huge_quantity_does_not_raise(self):
        """Test quantities beyond the default decimal precision still aggregate."""
        flour = RecipeIngredient(
            id="flour",
            product_name="Flour",
            calories_per_100=364.0,
            nutrient_samples=(NutrientSample("fat", 10.0),),
        )
        scaled = IngredientScaler().scale(flour, 1e27)

        totals = RecipeAggregator.compute_totals([scaled])

        assert totals.total_quantity == 1e27
        assert totals.total_calories == pytest.approx(3.64e27)
        assert totals.fat == pytest.approx(1e26)

    def test_overflowing_values_stay_finite(self):
        """Test ingredients whose values overflow contribute 0 instead of inf."""
        paste = RecipeIngredient(
            id="paste",
            product_name="Dense paste",
            calories_per_100=1e300,
            nutrient_samples=(NutrientSample("fat", 1e300),),
        )
        ingredients = [
            IngredientScaler().scale(paste, 1e300),
            make_with("a", {"fat": 1.5e308}, quantity=1.5e308),
            make_with("b", {}, quantity=1.5e308),
        ]

        totals = RecipeAggregator.compute_totals(ingredients)

        assert totals.total_calories == 0.0
        assert totals.fat == 1.5e308
        assert math.isfinite(totals.total_quantity)

    def test_calories_rounded_stepwise(self):
        """Test calories use the same running 2-decimal rounding."""
        ingredients = [
            make_with("a", {}, quantity=1.0, calories=0.004),
            make_with("b", {}, quantity=1.0, calories=0.004),
        ]

        assert RecipeAggregator.compute_totals(ingredients).total_calories == 0.0

    def test_saturated_fat_uses_hyphenated_key(self):
        """Test saturated fat is read from 'saturated-fat', not 'saturated_fat'."""
        hyphenated = make_with("a", {"saturated-fat": 3.0})
        underscored = make_with("b", {"saturated_fat": 5.0})

        totals = RecipeAggregator.compute_totals([hyphenated, underscored])

        assert totals.saturated_fat == 3.0

    def test_remove_and_readd_reproduces_totals(self):
        """Test summation does not depend on ingredient order."""
        a = make_with("a", {"fat": 1.5, "salt": 0.25}, quantity=30.0, calories=120.0)
        b = make_with("b", {"fat": 2.25, "salt": 0.5}, quantity=70.0, calories=80.5)
        c = make_with("c", {"fat": 0.75}, quantity=10.0, calories=9.0)

        before = RecipeAggregator.compute_totals([a, b, c])
        after = RecipeAggregator.compute_totals([a, c, b])

        assert after == before


class TestComputeAdditives:
    """Tests for RecipeAggregator.compute_additives."""

    def test_strips_prefix_and_appends_space(self):
        """Test the 3-character prefix is removed and a space appended."""
        ingredients = [make_with("a", {}, tags=["en:e330", "en:e300"])]

        assert RecipeAggregator.compute_additives(ingredients) == ("e330 ", "e300 ")

    def test_deduplicates_in_first_seen_order(self):
        """Test two ingredients tagging the same additive yield one entry."""
        ingredients = [
            make_with("a", {}, tags=["en:e330", "en:e300"]),
            make_with("b", {}, tags=["en:e322", "en:e330"]),
        ]

        assert RecipeAggregator.compute_additives(ingredients) == ("e330 ", "e300 ", "e322 ")

    def test_idempotent(self):
        """Test rerunning on the same list gives the same result."""
        ingredients = [
            make_with("a", {}, tags=["en:e330"]),
            make_with("b", {}, tags=["en:e330", "en:e202"]),
        ]

        first = RecipeAggregator.compute_additives(ingredients)
        second = RecipeAggregator.compute_additives(ingredients)

        assert first == second == ("e330 ", "e202 ")

    def test_ingredients_without_tags(self):
        """Test ingredients without tags contribute nothing."""
        ingredients = [make_with("a", {}), make_with("b", {}, tags=["en:e471"])]

        assert RecipeAggregator.compute_additives(ingredients) == ("e471 ",)

    def test_empty_list(self):
        """Test an empty recipe has no additives."""
        assert RecipeAggregator.compute_additives([]) == ()


class TestScoring:
    """Tests for classifier input and score computation."""

    @pytest.fixture
    def ingredients(self):
        """Create ingredients covering every classifier input key."""
        return [
            make_with(
                "a",
                {
                    "energy-kcal": 100.0,
                    "fibers": 2.0,
                    "proteins": 6.0,
                    "saturated-fat": 1.5,
                    "salt": 1.0,
                    "sugars": 8.0,
                },
                quantity=50.0,
            ),
            make_with("b", {"salt": 0.5, "sugars": 2.0}, quantity=10.0),
        ]

    def test_build_score_input(self, ingredients):
        """Test vector construction from recipe sums."""
        vector = RecipeAggregator.build_score_input(ingredients)

        assert vector.energy == pytest.approx(418.4)
        assert vector.fibers == 2.0
        assert vector.fruit_percentage == 0.0
        assert vector.proteins == 6.0
        assert vector.saturated_fats == 1.5
        assert vector.sodium == pytest.approx(600.0)
        assert vector.sugar == 10.0

    def test_missing_fibers_default_to_zero(self):
        """Test a recipe without fibre entries sends fibers=0."""
        vector = RecipeAggregator.build_score_input([make_with("a", {"fat": 1.0})])

        assert vector.fibers == 0.0

    def test_compute_score_returns_classifier_label(self, ingredients):
        """Test the classifier's label is returned unmodified."""
        classifier = Mock(spec=NutriScoreClassifier)
        classifier.classify.return_value = "C"

        assert RecipeAggregator.compute_score(ingredients, classifier) == "C"
        classifier.classify.assert_called_once()
        vector = classifier.classify.call_args[0][0]
        assert isinstance(vector, NutriScoreInput)

    def test_compute_score_empty_skips_classifier(self):
        """Test an empty recipe is unscored and the classifier is never called."""
        classifier = Mock(spec=NutriScoreClassifier)

        assert RecipeAggregator.compute_score([], classifier) is None
        classifier.classify.assert_not_called()

    def test_compute_score_passes_through_unset(self, ingredients):
        """Test an unavailable classifier result stays unset."""
        classifier = Mock(spec=NutriScoreClassifier)
        classifier.classify.return_value = None

        assert RecipeAggregator.compute_score(ingredients, classifier) is None
