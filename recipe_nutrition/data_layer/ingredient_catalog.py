"""Ingredient catalogue for loading ingredient source records from JSON."""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from recipe_nutrition.data_layer.exceptions import IngredientNotFoundError


class IngredientCatalog:
    """Catalogue of raw ingredient records loaded from JSON.

    Records keep the shape the ingredient search service emits
    (product_name, brands, calories, nutriments, additives_tags, source);
    IngredientNormalizer turns them into RecipeIngredient values.
    """

    def __init__(self, json_path: str):
        """Initialize catalogue from JSON file.

        Args:
            json_path: Path to JSON file containing {"ingredients": [...]}
        """
        self.json_path = Path(json_path)
        self._records: List[Dict[str, Any]] = []
        self._load_records()

    def _load_records(self):
        """Load ingredient records from JSON file."""
        with open(self.json_path, "r") as f:
            data = json.load(f)

        self._records = data.get("ingredients", [])

    def get_all_records(self) -> List[Dict[str, Any]]:
        """Get all ingredient records in the catalogue.

        Returns:
            List of all ingredient record dictionaries
        """
        return self._records.copy()

    def get_record_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """Get a record by its product name or alias (case-insensitive).

        Args:
            name: Product name to search for

        Returns:
            Ingredient record if found, None otherwise
        """
        name_lower = name.strip().lower()
        for record in self._records:
            product_name = record.get("product_name") or record.get("productName") or ""
            if product_name.lower() == name_lower:
                return record
            aliases = record.get("aliases", [])
            if any(alias.lower() == name_lower for alias in aliases):
                return record
        return None

    def require_record(self, name: str) -> Dict[str, Any]:
        """Get a record by name, failing loudly when it is missing.

        Raises:
            IngredientNotFoundError: If no record matches name
        """
        record = self.get_record_by_name(name)
        if record is None:
            raise IngredientNotFoundError(name)
        return record
