"""
Centralized constants and reference data.

This module contains the nutrient key set shared by the catalog, nutrition
reports and disease targets, plus the default reference data the record
store is seeded with when no SEED_DATA_PATH is configured.

Categories:
- Nutrient keys and unit suffixes
- Default nutrient catalog (per 100 units)
- Default disease daily targets
- Allergen keywords for substitution checks
"""

from typing import Dict, List, Tuple

# ==============================================================================
# NUTRIENT KEYS
# ==============================================================================

VITAMIN_D_KEY: str = "vitamin_d_μg"

# Order is the order of every NutrientVector the engine emits
NUTRIENT_KEYS: Tuple[str, ...] = (
    "calories",
    "protein_g",
    "carbs_g",
    "fat_g",
    "fiber_g",
    "calcium_mg",
    "iron_mg",
    VITAMIN_D_KEY,
    "omega3_g",
)

# Mass suffix -> unit label; longest suffixes first so "_mg" wins over "_g"
UNIT_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("_mg", "mg"),
    ("_μg", "μg"),
    ("_g", "g"),
)

# Basis of every catalog entry and ingredient quantity
CATALOG_BASIS: float = 100.0


# ==============================================================================
# DEFAULT NUTRIENT CATALOG
# ==============================================================================

# (name, calories, protein_g, carbs_g, fat_g, fiber_g, calcium_mg, iron_mg,
#  vitamin_d_μg, omega3_g), all per 100 g
_CATALOG_ROWS: List[Tuple] = [
    ("oats", 380, 13, 67, 7, 10, 50, 4, 0, 0.1),
    ("quinoa", 368, 14.1, 64.2, 6.1, 7, 47, 4.6, 0, 0.3),
    ("brown_rice", 370, 7.9, 77.2, 2.9, 3.5, 23, 1.5, 0, 0),
    ("white_rice", 365, 7.1, 80, 0.7, 1.3, 28, 0.8, 0, 0),
    ("wheat_flour", 364, 10.3, 76.3, 1, 2.7, 15, 1.2, 0, 0),
    ("almond_flour", 571, 21.4, 21.4, 50, 10.7, 236, 3.7, 0, 0),
    ("rice_flour", 366, 6, 80.1, 1.4, 2.4, 10, 0.4, 0, 0),
    ("pasta", 371, 13, 75, 1.5, 3.2, 21, 3.3, 0, 0),
    ("gluten_free_pasta", 357, 7.1, 78.6, 1.8, 2.7, 14, 0.9, 0, 0),
    ("chicken_breast", 165, 31, 0, 3.6, 0, 15, 1, 0.1, 0),
    ("salmon", 208, 20, 0, 13, 0, 9, 0.3, 11, 2.3),
    ("tofu", 76, 8, 1.9, 4.8, 0.3, 350, 5.4, 0, 0.6),
    ("lentils", 116, 9, 20, 0.4, 7.9, 19, 3.3, 0, 0),
    ("eggs", 155, 13, 1.1, 11, 0, 56, 1.2, 2, 0.1),
    ("milk", 42, 3.4, 5, 1, 0, 125, 0, 1.3, 0),
    ("lactose_free_milk", 42, 3.4, 5, 1, 0, 125, 0, 1.3, 0),
    ("almond_milk", 17, 0.6, 0.6, 1.1, 0.2, 184, 0.3, 1, 0),
    ("cheddar_cheese", 403, 25, 1.3, 33, 0, 721, 0.7, 0.6, 0.4),
    ("greek_yogurt", 59, 10, 3.6, 0.4, 0, 110, 0.1, 0, 0),
    ("butter", 717, 0.9, 0.1, 81, 0, 24, 0, 1.5, 0.3),
    ("olive_oil", 884, 0, 0, 100, 0, 1, 0.6, 0, 0.8),
    ("sugar", 387, 0, 100, 0, 0, 1, 0.1, 0, 0),
    ("honey", 304, 0.3, 82, 0, 0.2, 6, 0.4, 0, 0),
    ("stevia", 0, 0, 0, 0, 0, 0, 0, 0, 0),
    ("spinach", 23, 2.9, 3.6, 0.4, 2.2, 99, 2.7, 0, 0.1),
    ("broccoli", 34, 2.8, 7, 0.4, 2.6, 47, 0.7, 0, 0),
    ("sweet_potato", 86, 1.6, 20, 0.1, 3, 30, 0.6, 0, 0),
    ("potato", 77, 2, 17, 0.1, 2.2, 12, 0.8, 0, 0),
    ("tomato", 18, 0.9, 3.9, 0.2, 1.2, 10, 0.3, 0, 0),
    ("banana", 89, 1.1, 23, 0.3, 2.6, 5, 0.3, 0, 0),
    ("blueberries", 57, 0.7, 14, 0.3, 2.4, 6, 0.3, 0, 0.1),
    ("walnuts", 654, 15, 14, 65, 6.7, 98, 2.9, 0, 9.1),
    ("chia_seeds", 486, 17, 42, 31, 34, 631, 7.7, 0, 17.8),
    ("flaxseed", 534, 18, 29, 42, 27, 255, 5.7, 0, 22.8),
]

DEFAULT_NUTRIENT_CATALOG: List[Dict] = [
    dict(zip(("name",) + NUTRIENT_KEYS, row)) for row in _CATALOG_ROWS
]


# ==============================================================================
# DEFAULT DISEASE TARGETS
# ==============================================================================

# Daily targets per condition; "calories" has no mass suffix and is reported
# alongside the percentages but never converted into one
DEFAULT_DISEASE_TARGETS: List[Dict] = [
    {
        "disease": "type1_diabetes",
        "targets": {
            "calories": 2000,
            "carbs_g": 200,
            "fiber_g": 30,
            "protein_g": 60,
            "fat_g": 70,
        },
    },
    {
        "disease": "celiac",
        "targets": {
            "calories": 2000,
            "fiber_g": 25,
            "iron_mg": 18,
            "calcium_mg": 1000,
            VITAMIN_D_KEY: 15,
        },
    },
    {
        "disease": "lactose_intolerance",
        "targets": {
            "calories": 2000,
            "protein_g": 50,
            "calcium_mg": 1000,
            VITAMIN_D_KEY: 15,
            "omega3_g": 1.6,
        },
    },
]


# ==============================================================================
# ALLERGEN DATABASE
# ==============================================================================

# Allergy names a profile may declare, expanded to ingredient keywords when
# checking proposed substitutes
ALLERGEN_KEYWORDS: Dict[str, List[str]] = {
    "milk": [
        "milk", "cream", "butter", "cheese", "yogurt", "whey", "casein",
        "lactose", "dairy", "ghee"
    ],
    "eggs": [
        "egg", "eggs", "albumin", "mayonnaise", "meringue"
    ],
    "peanuts": [
        "peanut", "peanuts", "groundnut"
    ],
    "nuts": [
        "almond", "walnut", "cashew", "pecan", "pistachio", "hazelnut",
        "macadamia", "peanut"
    ],
    "tree_nuts": [
        "almond", "walnut", "cashew", "pecan", "pistachio", "hazelnut",
        "macadamia"
    ],
    "soy": [
        "soy", "soya", "tofu", "tempeh", "edamame", "miso"
    ],
    "wheat": [
        "wheat", "flour", "bread", "pasta", "couscous", "semolina", "spelt"
    ],
    "gluten": [
        "wheat", "barley", "rye", "bread", "pasta", "couscous", "semolina"
    ],
    "fish": [
        "fish", "salmon", "tuna", "cod", "trout", "mackerel", "sardine"
    ],
    "shellfish": [
        "shrimp", "prawn", "crab", "lobster", "clam", "oyster", "mussel",
        "scallop"
    ],
}
