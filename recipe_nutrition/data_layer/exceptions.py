"""Custom exceptions for the recipe nutrition engine."""


class IngredientNotFoundError(Exception):
    """Raised when a product is not found in the ingredient catalogue."""

    def __init__(self, product_name: str):
        """Initialize exception with product name.

        Args:
            product_name: Name of the product that was not found
        """
        self.product_name = product_name
        super().__init__(f"Ingredient '{product_name}' not found in ingredient catalogue")


class IngredientNotInRecipeError(Exception):
    """Raised when an edit targets an ingredient id the draft does not contain."""

    def __init__(self, ingredient_id: str):
        self.ingredient_id = ingredient_id
        super().__init__(f"Recipe has no ingredient with id '{ingredient_id}'")


class EmptyRecipeError(Exception):
    """Raised when a recipe without ingredients is submitted."""

    def __init__(self, recipe_name: str = ""):
        self.recipe_name = recipe_name
        label = f"'{recipe_name}'" if recipe_name else "(unnamed)"
        super().__init__(f"Recipe {label} has no ingredients and cannot be submitted")


class RecipeNotFoundError(Exception):
    """Raised when a dispatcher is asked to update a recipe it never stored."""

    def __init__(self, recipe_id: str):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe '{recipe_id}' does not exist")


class ConfigurationError(Exception):
    """Raised when engine settings are invalid."""
