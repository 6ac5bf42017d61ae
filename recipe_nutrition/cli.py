#!/usr/bin/env python3
"""Command-line interface for the recipe nutrition engine."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

from recipe_nutrition.app_logging import configure_logging
from recipe_nutrition.data_layer.exceptions import ConfigurationError, IngredientNotFoundError
from recipe_nutrition.data_layer.ingredient_catalog import IngredientCatalog
from recipe_nutrition.data_layer.models import Recipe
from recipe_nutrition.data_layer.settings import EngineSettings, EngineSettingsLoader
from recipe_nutrition.drafting.recipe_editor import RecipeEditor
from recipe_nutrition.ingestion.nutrition_scaler import IngredientScaler
from recipe_nutrition.output.formatters import format_recipe_json_string, format_recipe_markdown
from recipe_nutrition.scoring.nutriscore import build_classifier

logger = logging.getLogger(__name__)


def load_recipe_file(path: Path) -> Dict[str, Any]:
    """Load a recipe description from YAML.

    Expected shape::

        name: Pancakes
        ingredients:
          - product: Wheat flour
            quantity: 200

    Raises:
        ValueError: If the file is not a mapping or ingredients are malformed
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping with 'name' and 'ingredients'")

    entries = data.get("ingredients") or []
    if not isinstance(entries, list):
        raise ValueError(f"'ingredients' in {path} must be a list")
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("product"):
            raise ValueError(f"Every ingredient in {path} needs a 'product' name, got {entry!r}")
    return data


def build_recipe(
    editor: RecipeEditor, catalog: IngredientCatalog, name: str, entries: List[Dict[str, Any]]
) -> Recipe:
    """Assemble a recipe draft through the editor, one ingredient at a time.

    Raises:
        IngredientNotFoundError: If a product is missing from the catalogue
    """
    recipe = editor.new_recipe(name)
    for entry in entries:
        record = catalog.require_record(str(entry["product"]))
        recipe = editor.add_ingredient(recipe, record)
        ingredient_id = recipe.ingredients[-1].id
        recipe = editor.update_quantity(recipe, ingredient_id, entry.get("quantity"))
    return recipe


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Compute nutrition totals, additives and Nutri-Score for a recipe"
    )
    parser.add_argument(
        "--recipe",
        type=str,
        required=True,
        help="Path to recipe YAML file (name + ingredients with product and quantity)"
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default="data/ingredients/catalog.json",
        help="Path to ingredient catalogue JSON (default: data/ingredients/catalog.json)"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Optional path to engine settings YAML (e.g. config/engine.yaml)"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json", "both"],
        default="markdown",
        help="Output format: markdown (default), json, or both"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)"
    )

    args = parser.parse_args(argv)

    recipe_path = Path(args.recipe)
    if not recipe_path.exists():
        print(f"Error: Recipe file not found: {recipe_path}", file=sys.stderr)
        sys.exit(1)

    catalog_path = Path(args.catalog)
    if not catalog_path.exists():
        print(f"Error: Ingredient catalogue not found: {catalog_path}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.config:
            settings = EngineSettingsLoader(args.config).load()
        else:
            settings = EngineSettings()
    except (OSError, ConfigurationError, yaml.YAMLError) as e:
        print(f"Error: Invalid engine settings: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        recipe_data = load_recipe_file(recipe_path)
        catalog = IngredientCatalog(str(catalog_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    editor = RecipeEditor(
        scaler=IngredientScaler(settings.salt_name_tokens),
        classifier=build_classifier(settings),
    )

    try:
        recipe = build_recipe(
            editor,
            catalog,
            name=str(recipe_data.get("name", "")),
            entries=recipe_data.get("ingredients") or [],
        )
    except IngredientNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    logger.info(
        "Built recipe '%s' with %d ingredients", recipe.name, len(recipe.ingredients)
    )

    outputs = []
    if args.output in ["markdown", "both"]:
        outputs.append((".md", format_recipe_markdown(recipe)))
    if args.output in ["json", "both"]:
        outputs.append((".json", format_recipe_json_string(recipe, indent=2)))

    for suffix, text in outputs:
        if args.output_file:
            output_path = Path(args.output_file)
            if args.output == "both":
                output_path = output_path.with_suffix(suffix)
            output_path.write_text(text)
            print(f"Output saved to {output_path}", file=sys.stderr)
        else:
            print(text)


if __name__ == "__main__":
    main()
