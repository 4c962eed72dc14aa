"""
Linear recipe scaling.
"""

import logging

from recipe_assistant.exceptions import RecipeValidationError
from recipe_assistant.models.recipe import Recipe
from recipe_assistant.utils.helpers import round_half_up

logger = logging.getLogger(__name__)


def scale(recipe: Recipe, factor: float) -> Recipe:
    """
    Scale a recipe's servings and ingredient quantities by a factor.

    Servings are rounded to the nearest whole number and never drop below
    one. Ingredient names and units, the title and the steps are unchanged.
    The input recipe is not modified.

    Args:
        recipe: Recipe to scale
        factor: Positive multiplier

    Returns:
        Recipe: New scaled recipe

    Raises:
        RecipeValidationError: If factor is not positive
    """
    if factor <= 0:
        raise RecipeValidationError("Scale factor must be greater than 0")

    servings = max(1, int(round_half_up(recipe.servings * factor)))
    ingredients = [
        ingredient.model_copy(update={"quantity": ingredient.quantity * factor})
        for ingredient in recipe.ingredients
    ]

    logger.debug(
        f"Scaled '{recipe.title}' by {factor}: servings {recipe.servings} -> {servings}"
    )
    return recipe.model_copy(update={"servings": servings, "ingredients": ingredients})
