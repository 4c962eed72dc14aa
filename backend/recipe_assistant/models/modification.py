"""
Pydantic models for the recipe modification endpoint.

This module defines the operation request and the ModificationResult every
operation (map_nutrients, scale, substitute) returns.
"""

from pydantic import BaseModel, Field, model_serializer
from typing import Dict, List, Literal, Optional

from recipe_assistant.models.nutrition import NutritionReport
from recipe_assistant.models.profile import UserProfile
from recipe_assistant.models.recipe import Recipe
from recipe_assistant.models.swap import Substitution

Operation = Literal["map_nutrients", "scale", "substitute"]


class ModifyRequest(BaseModel):
    """
    Request model for the /modify endpoint.

    Exactly one recipe source is used: ``recipeId`` (looked up in the record
    store) takes precedence over an inline ``recipePayload``.

    Attributes:
        recipe_id: Stored recipe to operate on
        recipe_payload: Inline recipe to operate on
        operation: map_nutrients, scale or substitute
        user_profile: Health profile of the caller
        scale_factor: Multiplier for the scale operation (defaults to 1)
    """
    recipe_id: Optional[str] = Field(None, alias="recipeId", description="Stored recipe id")
    recipe_payload: Optional[Recipe] = Field(None, alias="recipePayload", description="Inline recipe")
    operation: Operation = Field(..., description="Operation to run")
    user_profile: UserProfile = Field(..., alias="userProfile", description="Caller health profile")
    scale_factor: Optional[float] = Field(
        None,
        alias="scaleFactor",
        allow_inf_nan=False,
        description="Scale multiplier (scale operation only)"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "recipeId": "3f0e5a9e-8d0b-4d7c-9a53-2d3f3b1f0c11",
                "operation": "scale",
                "userProfile": {"disease": "type1_diabetes", "allergies": []},
                "scaleFactor": 2
            }
        }
    }


class ModificationResult(BaseModel):
    """
    Result of any modification operation.

    Attributes:
        recipe: The recipe the nutrition was computed for (scaled or
                substituted when the operation transforms it)
        nutrition: Totals and per-serving values
        targets: Daily targets of the user's condition
        percentages: Per-serving value as a whole percent of each target
        substitutions: Suggested swaps (substitute operation only)
    """
    recipe: Recipe
    nutrition: NutritionReport
    targets: Dict[str, Optional[float]] = Field(default_factory=dict)
    percentages: Dict[str, int] = Field(default_factory=dict)
    substitutions: Optional[List[Substitution]] = None

    model_config = {"populate_by_name": True}

    @model_serializer(mode="wrap")
    def _omit_absent_substitutions(self, handler):
        data = handler(self)
        if self.substitutions is None:
            data.pop("substitutions", None)
        return data
