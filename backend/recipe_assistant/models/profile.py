"""
Pydantic model for the user health profile.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional


class UserProfile(BaseModel):
    """
    Health profile used to personalize recipes.

    Attributes:
        disease: Health condition, the join key into the disease targets
        age: Age in years (optional)
        sex: "male", "female" or "other" (optional)
        allergies: Declared allergies, e.g. ["nuts", "shellfish"]
    """
    disease: str = Field(..., min_length=1, max_length=100, description="Health condition")
    age: Optional[int] = Field(None, ge=1, le=150, description="Age in years")
    sex: Optional[Literal["male", "female", "other"]] = Field(None, description="Sex")
    allergies: List[str] = Field(default_factory=list, description="Declared allergies")

    @field_validator('disease')
    @classmethod
    def validate_disease(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Disease cannot be empty')
        return v.strip()

    @field_validator('allergies', mode='before')
    @classmethod
    def validate_allergies(cls, v):
        if v is None:
            return []
        return [a.strip() for a in v if isinstance(a, str) and a.strip()]

    model_config = {
        "json_schema_extra": {
            "example": {
                "disease": "celiac",
                "age": 34,
                "sex": "female",
                "allergies": ["nuts"]
            }
        }
    }
