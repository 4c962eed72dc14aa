"""
Input validation utilities.

This module provides validation functions for request values that the
Pydantic models do not cover, raising RecipeValidationError so the API
reports them as bad requests.
"""

import logging
from typing import Optional

from recipe_assistant.exceptions import RecipeValidationError, UnauthorizedError

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_SCALE_FACTOR = 1.0
MAX_RECIPE_ID_LENGTH = 100


def validate_scale_factor(
    factor: Optional[float],
    min_val: float = 0.5,
    max_val: float = 10.0
) -> float:
    """
    Validate the caller-supplied scale factor.

    An omitted factor means "no scaling".

    Args:
        factor: Requested multiplier, or None
        min_val: Smallest accepted factor (default: 0.5)
        max_val: Largest accepted factor (default: 10.0)

    Returns:
        float: The factor to scale by

    Raises:
        RecipeValidationError: If the factor is outside [min_val, max_val]
    """
    if factor is None:
        return DEFAULT_SCALE_FACTOR

    if factor < min_val or factor > max_val:
        raise RecipeValidationError(
            f"Scale factor must be between {min_val:g} and {max_val:g}, got {factor:g}"
        )

    return float(factor)


def validate_recipe_id(recipe_id: str) -> bool:
    """
    Validate recipe ID shape.

    Only empty or over-long ids are rejected; any other id is looked up
    and reported as not found when the store has no such recipe.

    Args:
        recipe_id: Recipe identifier string

    Returns:
        bool: True if valid

    Raises:
        RecipeValidationError: If validation fails
    """
    if not recipe_id or not recipe_id.strip():
        raise RecipeValidationError("Recipe ID cannot be empty")

    if len(recipe_id) > MAX_RECIPE_ID_LENGTH:
        raise RecipeValidationError(
            f"Recipe ID cannot exceed {MAX_RECIPE_ID_LENGTH} characters"
        )

    return True


def validate_user_id(user_id: Optional[str]) -> str:
    """
    Validate the caller identity forwarded by the auth gateway.

    Raises:
        UnauthorizedError: If no identity was forwarded
    """
    if user_id is None or not user_id.strip():
        logger.debug("Request without caller identity rejected")
        raise UnauthorizedError()
    return user_id.strip()
