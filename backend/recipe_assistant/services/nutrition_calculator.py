"""
Recipe nutrition aggregation and target comparison.

Turns a recipe plus a nutrient catalog snapshot into a NutritionReport,
and compares the per-serving values against a condition's daily targets.

Both functions are pure: they never raise for unmatched ingredients or
missing target keys, which simply contribute nothing.
"""

import logging
import math
from typing import Dict, Mapping, Optional

from recipe_assistant.exceptions import RecipeValidationError
from recipe_assistant.models.nutrition import NutrientCatalog, NutritionReport, empty_vector
from recipe_assistant.models.recipe import Recipe
from recipe_assistant.utils.constants import CATALOG_BASIS, NUTRIENT_KEYS
from recipe_assistant.utils.helpers import nutrient_unit, round_half_up

logger = logging.getLogger(__name__)


def aggregate(recipe: Recipe, catalog: NutrientCatalog) -> NutritionReport:
    """
    Sum the nutrient contributions of a recipe's ingredients.

    Each ingredient found in the catalog (exact name match) contributes
    ``entry[k] * quantity / 100`` to every nutrient total; ingredients
    missing from the catalog contribute nothing. Totals are rounded to one
    decimal, then divided by the serving count and rounded again.

    Args:
        recipe: Recipe to analyse (servings must be >= 1)
        catalog: Nutrient catalog snapshot

    Returns:
        NutritionReport: Totals and per-serving values

    Raises:
        RecipeValidationError: If the recipe has fewer than one serving
    """
    if recipe.servings < 1:
        raise RecipeValidationError("Servings must be greater than 0")

    totals = empty_vector()
    unmatched = []

    for ingredient in recipe.ingredients:
        entry = catalog.lookup(ingredient.name)
        if entry is None:
            unmatched.append(ingredient.name)
            continue
        factor = ingredient.quantity / CATALOG_BASIS
        for key, value in entry.nutrient_values().items():
            totals[key] += value * factor

    if unmatched:
        logger.debug(f"Ingredients not in catalog (no contribution): {unmatched}")

    total = {key: round_half_up(totals[key], 1) for key in NUTRIENT_KEYS}
    per_serving = {
        key: round_half_up(total[key] / recipe.servings, 1) for key in NUTRIENT_KEYS
    }
    return NutritionReport(total=total, per_serving=per_serving)


def _usable_target(value: object) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return float(value)


def percentages_of(
    nutrition: NutritionReport,
    targets: Mapping[str, Optional[float]]
) -> Dict[str, int]:
    """
    Express per-serving nutrients as whole percentages of daily targets.

    Only target keys with a mass suffix (_g, _mg, _μg) are considered.
    A key produces no entry when the report has no such nutrient or the
    target is zero, missing or not a number, or the ratio is not finite.

    Args:
        nutrition: Report whose per-serving values are compared
        targets: Daily targets by nutrient key

    Returns:
        Dict[str, int]: Percent of target per qualifying key

    Example:
        >>> percentages_of(report_with_13g_protein, {"protein_g": 50})
        {"protein_g": 26}
    """
    per_serving = nutrition.per_serving
    percentages: Dict[str, int] = {}

    for key, raw_target in targets.items():
        if nutrient_unit(key) is None:
            continue
        if key not in per_serving:
            continue
        target = _usable_target(raw_target)
        if target is None:
            continue
        percent = round_half_up(per_serving[key] / target * 100)
        if not math.isfinite(percent):
            continue
        percentages[key] = int(percent)

    return percentages
