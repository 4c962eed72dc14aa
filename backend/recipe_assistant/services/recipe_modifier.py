"""
Recipe modification workflow.

Resolves the recipe a request refers to, loads the reference data, and runs
the selected operation. Every operation ends the same way: the (possibly
transformed) recipe goes through the nutrition aggregator and the target
percentage calculator to build a ModificationResult.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional

from recipe_assistant.config import Settings
from recipe_assistant.exceptions import NotFoundError, RecipeValidationError
from recipe_assistant.models.modification import ModificationResult, ModifyRequest
from recipe_assistant.models.nutrition import NutrientCatalog
from recipe_assistant.models.recipe import Recipe
from recipe_assistant.models.swap import Substitution
from recipe_assistant.services.nutrition_calculator import aggregate, percentages_of
from recipe_assistant.services.reasoning_client import ReasoningClient, build_reasoning_client
from recipe_assistant.services.recipe_scaler import scale
from recipe_assistant.services.record_store import RecordStore
from recipe_assistant.services.substitution_agent import SubstitutionAgent
from recipe_assistant.utils.validators import validate_recipe_id, validate_scale_factor

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], ReasoningClient]


def build_result(
    recipe: Recipe,
    catalog: NutrientCatalog,
    targets: Mapping[str, Optional[float]],
    substitutions: Optional[List[Substitution]] = None,
) -> ModificationResult:
    """Compute nutrition and percentages for a recipe and wrap them up."""
    nutrition = aggregate(recipe, catalog)
    return ModificationResult(
        recipe=recipe,
        nutrition=nutrition,
        targets=dict(targets),
        percentages=percentages_of(nutrition, targets),
        substitutions=substitutions,
    )


class RecipeModifier:
    """
    Service running map_nutrients, scale and substitute operations.

    Attributes:
        store: Record store for recipes and reference data
        settings: Application settings (scale range, reasoning provider)
        client_factory: Builds the reasoning client for substitute requests
    """

    def __init__(
        self,
        store: RecordStore,
        settings: Settings,
        client_factory: ClientFactory = build_reasoning_client,
    ):
        self.store = store
        self.settings = settings
        self.client_factory = client_factory

    def modify(self, request: ModifyRequest, user_id: str) -> ModificationResult:
        """
        Run the requested operation.

        Args:
            request: Operation request
            user_id: Caller identity (recipes are looked up within it)

        Returns:
            ModificationResult: Recipe, nutrition, targets and percentages

        Raises:
            RecipeValidationError: Missing recipe source or bad scale factor
            NotFoundError: recipeId does not exist for this user
            ConfigurationError: Substitute requested without credentials
            AIServiceUnavailable: Reasoning service failed
        """
        logger.info(f"Running '{request.operation}' for user {user_id}")

        recipe = self._resolve_recipe(request, user_id)
        catalog = self.store.get_catalog()
        targets = self._targets_for(request.user_profile.disease)

        if request.operation == "map_nutrients":
            return build_result(recipe, catalog, targets)

        if request.operation == "scale":
            factor = validate_scale_factor(
                request.scale_factor,
                self.settings.MIN_SCALE_FACTOR,
                self.settings.MAX_SCALE_FACTOR,
            )
            return build_result(scale(recipe, factor), catalog, targets)

        if request.operation == "substitute":
            client = self.client_factory(self.settings)
            agent = SubstitutionAgent(client)
            outcome = agent.run(recipe, request.user_profile, catalog, targets)
            return build_result(outcome.recipe, catalog, targets, outcome.substitutions)

        raise RecipeValidationError("Invalid operation")

    def _resolve_recipe(self, request: ModifyRequest, user_id: str) -> Recipe:
        if request.recipe_id:
            validate_recipe_id(request.recipe_id)
            stored = self.store.get_recipe(request.recipe_id, user_id=user_id)
            if stored is None:
                raise NotFoundError("Recipe not found")
            return stored.to_recipe()
        if request.recipe_payload is not None:
            return request.recipe_payload
        raise RecipeValidationError("Either recipeId or recipePayload is required")

    def _targets_for(self, disease: str) -> Dict[str, Optional[float]]:
        disease_targets = self.store.get_disease_targets(disease)
        if disease_targets is None:
            logger.warning(f"No disease targets for '{disease}', percentages will be empty")
            return {}
        return dict(disease_targets.targets)
