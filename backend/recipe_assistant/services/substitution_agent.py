"""
Substitution agent: reasoning-service-driven ingredient substitution.

Builds a prompt constrained to the nutrient catalog and the user's
allergies, makes one call to the reasoning service, and tolerantly parses
the free-text reply into substitutions and an optional modified recipe.

A reply that cannot be parsed never fails the request: the agent degrades
to "no substitutions, original recipe".
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from pydantic import ValidationError

from recipe_assistant.exceptions import MalformedAIOutput
from recipe_assistant.models.nutrition import NutrientCatalog
from recipe_assistant.models.profile import UserProfile
from recipe_assistant.models.recipe import Recipe
from recipe_assistant.models.swap import Substitution, SubstitutionProposal
from recipe_assistant.services.reasoning_client import ReasoningClient
from recipe_assistant.utils.helpers import format_ingredient_line, matching_allergies

logger = logging.getLogger(__name__)

# ─── Prompt ────────────────────────────────────────────────────────────────────

REPLY_FORMAT = """{
  "substitutions": [
    {"original": "ingredient_name", "substitute": "new_ingredient_name", "reason": "explanation"}
  ],
  "modifiedRecipe": {
    "title": "new title",
    "servings": number,
    "ingredients": [{"name": "...", "quantity": number, "unit": "..."}],
    "steps": ["..."]
  }
}"""


def build_substitution_prompt(
    recipe: Recipe,
    profile: UserProfile,
    catalog: NutrientCatalog,
    targets: Mapping[str, Optional[float]],
) -> str:
    """
    Build the instruction sent to the reasoning service.

    The catalog names are the only ingredients the service may suggest.
    """
    ingredient_lines = "\n".join(
        format_ingredient_line(i.name, i.quantity, i.unit) for i in recipe.ingredients
    )
    allergies = ", ".join(profile.allergies) if profile.allergies else "none"

    return (
        "You are a nutrition expert. Given this recipe and user health profile, "
        "suggest ingredient substitutions.\n\n"
        "Recipe:\n"
        f"Title: {recipe.title}\n"
        f"Servings: {recipe.servings}\n"
        "Ingredients:\n"
        f"{ingredient_lines}\n\n"
        "User Profile:\n"
        f"Disease: {profile.disease}\n"
        f"Allergies: {allergies}\n\n"
        f"Disease Targets: {json.dumps(dict(targets), ensure_ascii=False)}\n\n"
        f"Available ingredients in our database: {', '.join(catalog.names())}\n\n"
        "Please suggest substitutions that:\n"
        f"1. Are suitable for {profile.disease}\n"
        f"2. Avoid allergens: {allergies}\n"
        "3. Use only ingredients from our database, spelled exactly as listed\n"
        "4. Maintain similar culinary purpose\n\n"
        "Respond with a JSON object containing:\n"
        f"{REPLY_FORMAT}"
    )


# ─── Reply parsing ─────────────────────────────────────────────────────────────

def extract_json_block(text: str) -> Optional[str]:
    """
    Return the first balanced top-level {...} block in text.

    Braces inside JSON string literals (including escaped quotes) do not
    count towards the nesting depth. Returns None when no block closes.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start: i + 1]
    return None


def decode_proposal(text: str) -> SubstitutionProposal:
    """
    Decode a reasoning reply into a SubstitutionProposal.

    Raises:
        MalformedAIOutput: If no JSON object can be extracted, decoded or
                           validated against the proposal shape
    """
    block = extract_json_block(text)
    if block is None:
        raise MalformedAIOutput("No JSON object found in reply")
    try:
        data = json.loads(block)
    except (ValueError, RecursionError) as e:
        # ValueError also covers oversized integer literals
        raise MalformedAIOutput(f"JSON parse error: {e}") from e
    try:
        return SubstitutionProposal.model_validate(data)
    except ValidationError as e:
        raise MalformedAIOutput(f"Reply does not match the expected shape: {e}") from e


@dataclass
class SubstitutionOutcome:
    """
    Parsed result of one substitution call.

    Attributes:
        substitutions: Suggested swaps, in reply order
        recipe: Modified recipe, or the original when none was usable
        parsed: False when the reply was malformed and the fallback was used
    """
    recipe: Recipe
    substitutions: List[Substitution] = field(default_factory=list)
    parsed: bool = True


def parse_substitution_reply(text: str, original: Recipe) -> SubstitutionOutcome:
    """
    Interpret a reasoning reply, falling back to the original recipe.

    A malformed reply yields no substitutions and the original recipe; a
    well-formed reply without ``modifiedRecipe`` keeps the original recipe.
    """
    try:
        proposal = decode_proposal(text)
    except MalformedAIOutput as e:
        logger.warning(f"Could not parse substitution reply, keeping original recipe: {e}")
        return SubstitutionOutcome(recipe=original, substitutions=[], parsed=False)

    recipe = original
    if proposal.modified_recipe is not None:
        recipe = proposal.modified_recipe.model_copy(update={"id": original.id})
    return SubstitutionOutcome(recipe=recipe, substitutions=proposal.substitutions)


# ─── Agent ─────────────────────────────────────────────────────────────────────

class SubstitutionAgent:
    """Single-pass substitution orchestrator over a reasoning client."""

    def __init__(self, client: ReasoningClient):
        self.client = client

    def run(
        self,
        recipe: Recipe,
        profile: UserProfile,
        catalog: NutrientCatalog,
        targets: Mapping[str, Optional[float]],
    ) -> SubstitutionOutcome:
        """
        Ask the reasoning service for substitutions and parse its reply.

        Raises:
            AIServiceUnavailable: If the reasoning call fails
        """
        logger.info(
            f"Requesting substitutions for '{recipe.title}' "
            f"(disease: {profile.disease}, allergies: {len(profile.allergies)})"
        )
        prompt = build_substitution_prompt(recipe, profile, catalog, targets)
        reply = self.client.complete(prompt)

        outcome = parse_substitution_reply(reply, recipe)
        self._check_substitutions(outcome.substitutions, profile, catalog)

        logger.info(
            f"Substitution agent done: {len(outcome.substitutions)} subs, "
            f"parsed={outcome.parsed}, "
            f"recipe {'modified' if outcome.recipe is not recipe else 'unchanged'}"
        )
        return outcome

    def _check_substitutions(
        self,
        substitutions: List[Substitution],
        profile: UserProfile,
        catalog: NutrientCatalog,
    ) -> None:
        """Log suggestions that break the prompt's constraints; they are kept."""
        for sub in substitutions:
            if sub.substitute not in catalog:
                logger.warning(
                    f"Substitute '{sub.substitute}' for '{sub.original}' is not in the catalog"
                )
            allergies = matching_allergies(sub.substitute, profile.allergies)
            if allergies:
                logger.warning(
                    f"Substitute '{sub.substitute}' matches declared allergies: {allergies}"
                )
