"""
In-memory record store for recipes, profiles and reference data.

Holds user recipes and profiles (lost on restart), plus the nutrient
catalog and disease targets, seeded from utils/constants.py or from a JSON
seed file. Reference data is handed out as read-only snapshots so a request
never observes a half-updated catalog.
"""

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from recipe_assistant.models.nutrition import DiseaseTargets, NutrientCatalog, NutrientCatalogEntry
from recipe_assistant.models.profile import UserProfile
from recipe_assistant.models.recipe import Recipe, StoredRecipe
from recipe_assistant.utils.constants import DEFAULT_DISEASE_TARGETS, DEFAULT_NUTRIENT_CATALOG

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Thread-safe in-memory store.

    Attributes:
        catalog: Current nutrient catalog snapshot
    """

    def __init__(
        self,
        catalog: Optional[List[Dict]] = None,
        disease_targets: Optional[List[Dict]] = None,
    ):
        self._lock = threading.Lock()
        self._recipes: Dict[str, StoredRecipe] = {}
        self._profiles: Dict[str, UserProfile] = {}

        rows = DEFAULT_NUTRIENT_CATALOG if catalog is None else catalog
        self.catalog = NutrientCatalog([NutrientCatalogEntry.model_validate(r) for r in rows])

        target_rows = DEFAULT_DISEASE_TARGETS if disease_targets is None else disease_targets
        self._targets: Dict[str, DiseaseTargets] = {}
        for row in target_rows:
            targets = DiseaseTargets.model_validate(row)
            self._targets[targets.disease] = targets

        logger.info(
            f"Record store initialized with {len(self.catalog)} catalog entries "
            f"and {len(self._targets)} disease target sets"
        )

    @classmethod
    def from_seed_file(cls, path: str) -> "RecordStore":
        """
        Build a store from a JSON seed file.

        The file holds {"catalog": [...], "disease_targets": [...]}; a missing
        section falls back to the built-in defaults.
        """
        with Path(path).open(encoding="utf-8") as fh:
            data = json.load(fh)
        logger.info(f"Loading reference data from {path}")
        return cls(
            catalog=data.get("catalog"),
            disease_targets=data.get("disease_targets"),
        )

    # ─── Recipes ───────────────────────────────────────────────────────────

    def save_recipe(self, user_id: str, recipe: Recipe) -> StoredRecipe:
        """Store a new recipe owned by user_id and return the stored record."""
        stored = StoredRecipe(
            **recipe.model_dump(exclude={"id"}),
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._recipes[stored.id] = stored
        logger.info(f"Saved recipe '{stored.title}' (ID: {stored.id})")
        return stored

    def get_recipe(self, recipe_id: str, user_id: Optional[str] = None) -> Optional[StoredRecipe]:
        """
        Fetch a recipe by id.

        When user_id is given, recipes owned by someone else are reported
        as absent.
        """
        with self._lock:
            stored = self._recipes.get(recipe_id)
        if stored is None:
            return None
        if user_id is not None and stored.user_id != user_id:
            return None
        return stored

    def list_recipes(self, user_id: str) -> List[StoredRecipe]:
        """User's recipes, newest first."""
        with self._lock:
            owned = [r for r in self._recipes.values() if r.user_id == user_id]
        return sorted(owned, key=lambda r: r.created_at, reverse=True)

    # ─── Profiles ──────────────────────────────────────────────────────────

    def save_profile(self, user_id: str, profile: UserProfile) -> UserProfile:
        """Create or replace the user's profile."""
        with self._lock:
            self._profiles[user_id] = profile
        logger.info(f"Saved profile for user {user_id} (disease: {profile.disease})")
        return profile

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        with self._lock:
            return self._profiles.get(user_id)

    # ─── Reference data ────────────────────────────────────────────────────

    def get_catalog(self) -> NutrientCatalog:
        return self.catalog

    def get_disease_targets(self, disease: str) -> Optional[DiseaseTargets]:
        return self._targets.get(disease)

    def list_diseases(self) -> List[str]:
        return sorted(self._targets)
