"""Shared fixtures: sample recipes, reference data and a wired-up test client."""

import pytest
from fastapi.testclient import TestClient

from recipe_assistant.config import Settings, get_settings
from recipe_assistant.deps import get_modifier, get_store
from recipe_assistant.main import app
from recipe_assistant.models.profile import UserProfile
from recipe_assistant.models.recipe import Ingredient, Recipe
from recipe_assistant.services.reasoning_client import ReasoningClient
from recipe_assistant.services.recipe_modifier import RecipeModifier
from recipe_assistant.services.record_store import RecordStore

OATS_ENTRY = {
    "name": "oats",
    "calories": 380,
    "protein_g": 13,
    "carbs_g": 67,
    "fat_g": 7,
    "fiber_g": 10,
    "calcium_mg": 50,
    "iron_mg": 4,
    "vitamin_d_μg": 0,
    "omega3_g": 0.1,
}

OATS_STEP = "Cook oats thoroughly in water for five minutes."


class FakeReasoningClient(ReasoningClient):
    """Returns a canned reply and records every prompt it receives."""

    provider = "fake"

    def __init__(self, reply: str = "{}", error: Exception = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def oats_recipe() -> Recipe:
    return Recipe(
        title="Oats",
        servings=2,
        ingredients=[Ingredient(name="oats", quantity=200, unit="g")],
        steps=[OATS_STEP],
    )


@pytest.fixture
def oats_payload() -> dict:
    return {
        "title": "Oats",
        "servings": 2,
        "ingredients": [{"name": "oats", "quantity": 200, "unit": "g"}],
        "steps": [OATS_STEP],
    }


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(disease="lactose_intolerance", allergies=["nuts"])


@pytest.fixture
def store() -> RecordStore:
    """Store with the default catalog and disease targets."""
    return RecordStore()


@pytest.fixture
def catalog(store):
    return store.get_catalog()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        REASONING_PROVIDER="openrouter",
        OPENROUTER_API_KEY="test-key",
        MIN_SCALE_FACTOR=0.5,
        MAX_SCALE_FACTOR=10,
    )


@pytest.fixture
def fake_client() -> FakeReasoningClient:
    return FakeReasoningClient()


@pytest.fixture
def modifier(store, test_settings, fake_client) -> RecipeModifier:
    return RecipeModifier(store, test_settings, client_factory=lambda _settings: fake_client)


@pytest.fixture
def client(store, test_settings, modifier):
    """TestClient with a fresh store and the fake reasoning client."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_modifier] = lambda: modifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    return {"X-User-Id": "user-1"}
