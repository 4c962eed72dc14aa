"""
Common utility helper functions.

This module provides reusable utility functions for rounding, formatting,
and ingredient-name matching used throughout the application.
"""

import math
import re
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from recipe_assistant.utils.constants import ALLERGEN_KEYWORDS, UNIT_SUFFIXES

# Configure logging
logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round a number to the given number of decimal places, ties away from zero.

    Python's built-in round() uses banker's rounding (round(0.25, 1) == 0.2);
    nutrient values are rounded the way they are presented to users instead.
    The value goes through its shortest decimal repr so that 0.15 rounds to
    0.2 rather than to the nearest binary neighbour.

    Args:
        value: Number to round
        digits: Decimal places to keep (0 for whole numbers)

    Returns:
        float: Rounded value

    Example:
        >>> round_half_up(2.45, 1)
        2.5
        >>> round_half_up(0.5)
        1.0
    """
    # Floats this large carry no fractional digits; quantizing them would
    # exceed the decimal context precision
    if not math.isfinite(value) or abs(value) >= 2 ** 52:
        return float(value)
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def nutrient_unit(key: str) -> Optional[str]:
    """
    Classify a nutrient key by its mass suffix.

    Args:
        key: Nutrient key such as "protein_g" or "iron_mg"

    Returns:
        "g", "mg" or "μg", or None when the key carries no mass suffix
        (for example "calories")
    """
    for suffix, unit in UNIT_SUFFIXES:
        if key.endswith(suffix):
            return unit
    return None


def format_quantity(quantity: float) -> str:
    """Render a quantity without a trailing ".0" for whole numbers."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


def format_ingredient_line(name: str, quantity: float, unit: str) -> str:
    """Format one ingredient as a bullet line, e.g. "- 200 g oats"."""
    return f"- {format_quantity(quantity)} {unit} {name}"


def name_tokens(name: str) -> List[str]:
    """Split an ingredient name into lowercase word tokens."""
    return [t for t in re.split(r"[\s_\-]+", name.lower()) if t]


def matching_allergies(ingredient: str, allergies: Iterable[str]) -> List[str]:
    """
    Find the declared allergies an ingredient name appears to contain.

    Each allergy is expanded through ALLERGEN_KEYWORDS (unknown allergies
    match on their own name). Names explicitly marked free of the allergy,
    such as "gluten_free_pasta" for "gluten", do not match.

    Args:
        ingredient: Ingredient name as used in the catalog
        allergies: Allergy names declared in the user profile

    Returns:
        List[str]: Allergies the ingredient matches, in declaration order
    """
    lowered = ingredient.lower()
    tokens = set(name_tokens(ingredient))
    tokens |= {t.rstrip("s") for t in tokens}
    matches = []
    for allergy in allergies:
        allergy_key = allergy.strip().lower().replace(" ", "_")
        if not allergy_key:
            continue
        if f"{allergy_key}_free" in lowered.replace(" ", "_"):
            continue
        keywords = ALLERGEN_KEYWORDS.get(allergy_key, [allergy_key])
        for keyword in keywords:
            if keyword in tokens or keyword.rstrip("s") in tokens:
                matches.append(allergy)
                logger.debug(
                    f"Ingredient '{ingredient}' matches allergy '{allergy}' "
                    f"(keyword: '{keyword}')"
                )
                break
    return matches
