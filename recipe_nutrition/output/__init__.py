"""Output formatting for recipes."""

from recipe_nutrition.output.formatters import (
    format_recipe_json,
    format_recipe_json_string,
    format_recipe_markdown,
    format_ingredient_line,
)

__all__ = [
    "format_recipe_json",
    "format_recipe_json_string",
    "format_recipe_markdown",
    "format_ingredient_line",
]
