"""
Pydantic models for nutrition data.

This module defines the nutrient catalog, disease target and nutrition
report models. Nutrient vectors are plain mappings keyed by NUTRIENT_KEYS
so the same keys flow through the catalog, the reports and the targets.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Tuple

from recipe_assistant.utils.constants import NUTRIENT_KEYS, VITAMIN_D_KEY

NutrientVector = Dict[str, float]


def empty_vector() -> NutrientVector:
    """Nutrient vector with every key at zero."""
    return {key: 0.0 for key in NUTRIENT_KEYS}


class NutrientCatalogEntry(BaseModel):
    """
    Per-100-unit nutrient values for one ingredient.

    Missing nutrient values default to zero. The micrograms key is exposed
    on the wire as ``vitamin_d_μg``.

    Attributes:
        name: Ingredient name (join key)
        calories: Energy in kcal
        protein_g: Protein in grams
        carbs_g: Carbohydrates in grams
        fat_g: Total fat in grams
        fiber_g: Dietary fiber in grams
        calcium_mg: Calcium in milligrams
        iron_mg: Iron in milligrams
        vitamin_d_ug: Vitamin D in micrograms
        omega3_g: Omega-3 fatty acids in grams
    """
    name: str = Field(..., min_length=1, description="Ingredient name")
    calories: float = Field(0.0, ge=0, description="Energy (kcal)")
    protein_g: float = Field(0.0, ge=0, description="Protein (g)")
    carbs_g: float = Field(0.0, ge=0, description="Carbohydrates (g)")
    fat_g: float = Field(0.0, ge=0, description="Total fat (g)")
    fiber_g: float = Field(0.0, ge=0, description="Dietary fiber (g)")
    calcium_mg: float = Field(0.0, ge=0, description="Calcium (mg)")
    iron_mg: float = Field(0.0, ge=0, description="Iron (mg)")
    vitamin_d_ug: float = Field(0.0, ge=0, alias=VITAMIN_D_KEY, description="Vitamin D (μg)")
    omega3_g: float = Field(0.0, ge=0, description="Omega-3 (g)")

    model_config = {"populate_by_name": True}

    def nutrient_values(self) -> NutrientVector:
        """Nutrient vector keyed by NUTRIENT_KEYS."""
        values = self.model_dump(by_alias=True, exclude={"name"})
        return {key: float(values[key]) for key in NUTRIENT_KEYS}


class NutrientCatalog:
    """
    Read-only snapshot of the nutrient catalog.

    Lookups are exact, case-sensitive name matches; when two entries share
    a name the first one wins.
    """

    def __init__(self, entries: List[NutrientCatalogEntry]):
        self._entries: Tuple[NutrientCatalogEntry, ...] = tuple(entries)
        self._by_name: Dict[str, NutrientCatalogEntry] = {}
        for entry in self._entries:
            self._by_name.setdefault(entry.name, entry)

    def lookup(self, name: str) -> Optional[NutrientCatalogEntry]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def entries(self) -> List[NutrientCatalogEntry]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._entries)


class DiseaseTargets(BaseModel):
    """
    Daily nutrient targets for one health condition.

    Attributes:
        disease: Condition name (join key)
        targets: Nutrient key -> daily target
    """
    disease: str = Field(..., min_length=1, description="Condition name")
    targets: Dict[str, Optional[float]] = Field(
        default_factory=dict,
        description="Daily targets by nutrient key"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "disease": "type1_diabetes",
                "targets": {"calories": 2000, "carbs_g": 200, "fiber_g": 30}
            }
        }
    }


class NutritionReport(BaseModel):
    """
    Recipe nutrition totals and per-serving values.

    Attributes:
        total: Whole-recipe nutrient totals, rounded to 1 decimal
        per_serving: total / servings, rounded to 1 decimal
    """
    total: NutrientVector = Field(default_factory=empty_vector)
    per_serving: NutrientVector = Field(default_factory=empty_vector, alias="perServing")

    model_config = {"populate_by_name": True}
