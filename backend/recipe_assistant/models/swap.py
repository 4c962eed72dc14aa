"""
Pydantic models for ingredient substitutions.

Defines the advisory substitution triple returned to callers and the
structured shape the reasoning service is asked to reply with. Every field
of the proposal is optional so a partial reply still decodes; the agent
decides what an absent field means.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from recipe_assistant.models.recipe import Recipe


class Substitution(BaseModel):
    """
    A single ingredient replacement suggestion.

    Substitutions are advisory: they are never applied to the stored recipe.

    Attributes:
        original: Ingredient being replaced
        substitute: Suggested catalog ingredient
        reason: Why the substitute suits the user's condition
    """
    original: str = Field(..., description="Original ingredient")
    substitute: str = Field(..., description="Suggested substitute")
    reason: str = Field("", description="Explanation for the swap")

    @field_validator('reason', mode='before')
    @classmethod
    def default_reason(cls, v):
        return "" if v is None else v

    model_config = {
        "json_schema_extra": {
            "example": {
                "original": "wheat_flour",
                "substitute": "rice_flour",
                "reason": "Rice flour is naturally gluten free"
            }
        }
    }


class SubstitutionProposal(BaseModel):
    """
    Structured reply expected from the reasoning service.

    Attributes:
        substitutions: Suggested swaps (null or missing means none)
        modified_recipe: Full recipe with the swaps applied, if provided
    """
    substitutions: List[Substitution] = Field(default_factory=list)
    modified_recipe: Optional[Recipe] = Field(None, alias="modifiedRecipe")

    model_config = {"populate_by_name": True}

    @field_validator('substitutions', mode='before')
    @classmethod
    def default_substitutions(cls, v):
        return [] if v is None else v
