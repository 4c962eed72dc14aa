"""
Pydantic models for recipe data.

This module defines the recipe and ingredient models shared by the record
store, the nutrition engine and the API. All models use Pydantic for
automatic validation, serialization, and type safety; a recipe that fails
validation never reaches the nutrition computation.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

MIN_STEP_LENGTH = 10
MAX_STEP_LENGTH = 500
MAX_INGREDIENT_QUANTITY = 1_000_000


class Ingredient(BaseModel):
    """
    One ingredient line of a recipe.

    The quantity is expressed on the same basis as the catalog entry for
    ``name`` (per 100 units).

    Attributes:
        name: Ingredient name, the join key into the nutrient catalog
        quantity: Amount of the ingredient (0 to MAX_INGREDIENT_QUANTITY)
        unit: Unit label shown to the user (e.g. "g", "ml")
    """
    name: str = Field(..., min_length=1, description="Ingredient name (catalog key)")
    quantity: float = Field(
        ...,
        ge=0,
        le=MAX_INGREDIENT_QUANTITY,
        allow_inf_nan=False,
        description="Ingredient amount"
    )
    unit: str = Field(..., min_length=1, description="Unit label")

    @field_validator('name', 'unit')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Each ingredient must have name, quantity, and unit')
        return v

    model_config = {
        "json_schema_extra": {
            "example": {"name": "oats", "quantity": 200, "unit": "g"}
        }
    }


class Recipe(BaseModel):
    """
    Recipe model.

    Recipes are immutable from the engine's point of view: scaling and
    substitution always produce a new Recipe value.

    Attributes:
        id: Record store identifier (absent for ad-hoc payloads)
        title: Recipe title
        servings: Number of servings (>= 1)
        ingredients: Ordered ingredient lines
        steps: Ordered cooking steps, each 10-500 characters
    """
    id: Optional[str] = Field(None, description="Recipe identifier")
    title: str = Field(..., max_length=200, description="Recipe title")
    servings: int = Field(..., ge=1, description="Number of servings")
    ingredients: List[Ingredient] = Field(
        default_factory=list,
        description="Ingredient lines"
    )
    steps: List[str] = Field(
        default_factory=list,
        description="Cooking steps"
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title is not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError('Title is required')
        return v.strip()

    @field_validator('steps')
    @classmethod
    def validate_steps(cls, v: List[str]) -> List[str]:
        """Ensure every step is between 10 and 500 characters."""
        for step in v:
            if len(step) < MIN_STEP_LENGTH or len(step) > MAX_STEP_LENGTH:
                raise ValueError(
                    f'Each step must be between {MIN_STEP_LENGTH} and '
                    f'{MAX_STEP_LENGTH} characters'
                )
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Oats",
                "servings": 2,
                "ingredients": [{"name": "oats", "quantity": 200, "unit": "g"}],
                "steps": ["Cook oats thoroughly in water for five minutes."]
            }
        }
    }


class StoredRecipe(Recipe):
    """A recipe as persisted in the record store, owned by one user."""
    id: str = Field(..., description="Recipe identifier")
    user_id: str = Field(..., description="Owning user")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    def to_recipe(self) -> Recipe:
        """Drop ownership metadata, keeping the recipe value."""
        return Recipe.model_validate(
            self.model_dump(include=set(Recipe.model_fields))
        )
