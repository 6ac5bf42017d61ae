"""Formatters for recipe output (JSON and Markdown)."""

import json
from typing import Any, Dict

from recipe_nutrition.data_layer.models import Recipe, RecipeIngredient, RecipeNutrientTotals


def _format_number(value: float) -> str:
    # Drop ".0" on whole numbers
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_ingredient_line(ingredient: RecipeIngredient) -> str:
    """Format an ingredient as a string (e.g., "50 x Butter (Brand) - 370.5 kcal").

    Args:
        ingredient: Scaled RecipeIngredient

    Returns:
        Formatted string; ingredients without a quantity show "?"
    """
    qty_str = "?" if ingredient.quantity is None else _format_number(ingredient.quantity)
    name = ingredient.product_name
    if ingredient.brand:
        name = f"{name} ({ingredient.brand})"
    return f"{qty_str} x {name} - {_format_number(ingredient.calories_for_quantity)} kcal"


def format_totals_json(totals: RecipeNutrientTotals) -> Dict[str, float]:
    return {
        "total_quantity": totals.total_quantity,
        "total_calories": totals.total_calories,
        "fat": totals.fat,
        "saturated_fat": totals.saturated_fat,
        "carbohydrates": totals.carbohydrates,
        "sugars": totals.sugars,
        "proteins": totals.proteins,
        "salt": totals.salt,
    }


def format_recipe_json(recipe: Recipe) -> Dict[str, Any]:
    """Format a Recipe as a JSON-serializable dict.

    Args:
        recipe: Recipe draft

    Returns:
        Dictionary with ingredients, totals, additives and score
    """
    ingredients_json = []
    for ingredient in recipe.ingredients:
        ingredients_json.append({
            "id": ingredient.id,
            "product_name": ingredient.product_name,
            "brand": ingredient.brand,
            "source": ingredient.source,
            "quantity": ingredient.quantity,
            "calories_per_100": ingredient.calories_per_100,
            "calories_for_quantity": ingredient.calories_for_quantity,
            "nutrients": [
                {"name": entry.name, "quantity": entry.quantity_at_current_amount}
                for entry in ingredient.scaled_nutrients
            ],
            "additives": list(ingredient.additive_tags),
        })

    return {
        "id": recipe.id,
        "name": recipe.name,
        "quantity": recipe.quantity,
        "ingredients": ingredients_json,
        "nutriments": format_totals_json(recipe.nutrient_totals),
        "additives": list(recipe.additives),
        "nutriscore": recipe.score,
    }


def format_recipe_json_string(recipe: Recipe, indent: int = 2) -> str:
    """Format a Recipe as a JSON string.

    Args:
        recipe: Recipe draft
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return json.dumps(format_recipe_json(recipe), indent=indent, ensure_ascii=False)


def format_recipe_markdown(recipe: Recipe) -> str:
    """Format a Recipe as Markdown.

    Args:
        recipe: Recipe draft

    Returns:
        Formatted Markdown string
    """
    totals = recipe.nutrient_totals
    lines = [f"# {recipe.name or 'Untitled recipe'}\n"]

    lines.append("## Ingredients\n")
    if recipe.ingredients:
        for ingredient in recipe.ingredients:
            lines.append(f"- {format_ingredient_line(ingredient)}")
    else:
        lines.append("_No ingredients yet._")
    lines.append("")

    lines.append("## Nutrition\n")
    lines.append(f"**Total quantity:** {_format_number(totals.total_quantity)}")
    lines.append(f"**Calories:** {totals.total_calories:.2f} kcal")
    lines.append(f"**Fat:** {totals.fat:.2f}g (saturated {totals.saturated_fat:.2f}g)")
    lines.append(f"**Carbohydrates:** {totals.carbohydrates:.2f}g (sugars {totals.sugars:.2f}g)")
    lines.append(f"**Proteins:** {totals.proteins:.2f}g")
    lines.append(f"**Salt:** {totals.salt:.2f}g")
    lines.append("")

    if recipe.additives:
        lines.append("## Additives\n")
        lines.append("".join(recipe.additives).strip())
        lines.append("")

    lines.append(f"**Nutri-Score:** {recipe.score or 'n/a'}")
    return "\n".join(lines)
