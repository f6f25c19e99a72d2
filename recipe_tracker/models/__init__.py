from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.recipe import Recipe, RecipeIngredient, RecipeInstruction
from recipe_tracker.models.shopping_list import ShoppingListItem
from recipe_tracker.models.user import User

__all__ = [
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "RecipeInstruction",
    "ShoppingListItem",
    "User",
]
