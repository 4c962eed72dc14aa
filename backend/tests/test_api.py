"""API tests through FastAPI's TestClient with an in-memory store and a fake reasoning client."""

import json

import pytest

from recipe_assistant.exceptions import AIServiceUnavailable, ConfigurationError

from conftest import OATS_STEP


def _modify(client, headers, **body):
    body.setdefault("userProfile", {"disease": "lactose_intolerance", "allergies": ["nuts"]})
    return client.post("/modify", json=body, headers=headers)


class TestServiceEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["reasoning"]["api_key_configured"] is True
        assert data["reference_data"]["catalog_entries"] > 0
        assert data["warnings"] is None


class TestRecipeEndpoints:
    """Tests for saving and fetching recipes."""

    def test_create_and_fetch(self, client, auth_headers, oats_payload):
        created = client.post("/recipes", json=oats_payload, headers=auth_headers)
        assert created.status_code == 201
        recipe_id = created.json()["id"]

        fetched = client.get(f"/recipes/{recipe_id}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Oats"

        listed = client.get("/recipes", headers=auth_headers).json()
        assert [r["id"] for r in listed] == [recipe_id]

    def test_missing_identity_is_unauthorized(self, client, oats_payload):
        response = client.post("/recipes", json=oats_payload)
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_invalid_recipe_rejected(self, client, auth_headers, oats_payload):
        """Test a too-short step is a 400 with an error message."""
        payload = dict(oats_payload, steps=["Boil."])
        response = client.post("/recipes", json=payload, headers=auth_headers)
        assert response.status_code == 400
        assert "between 10 and 500 characters" in response.json()["error"]

    def test_ingredient_missing_field_rejected(self, client, auth_headers, oats_payload):
        payload = dict(oats_payload, ingredients=[{"name": "oats", "quantity": 200}])
        response = client.post("/recipes", json=payload, headers=auth_headers)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_other_users_recipe_not_found(self, client, auth_headers, oats_payload):
        recipe_id = client.post("/recipes", json=oats_payload, headers=auth_headers).json()["id"]
        response = client.get(f"/recipes/{recipe_id}", headers={"X-User-Id": "someone-else"})
        assert response.status_code == 404
        assert response.json() == {"error": "Recipe not found"}


class TestProfileEndpoints:
    """Tests for the caller's health profile."""

    def test_put_then_get(self, client, auth_headers):
        body = {"disease": "celiac", "age": 30, "sex": "female", "allergies": ["milk"]}
        assert client.put("/profile", json=body, headers=auth_headers).status_code == 200
        assert client.get("/profile", headers=auth_headers).json()["disease"] == "celiac"

    def test_missing_profile(self, client, auth_headers):
        response = client.get("/profile", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Profile not found"}


class TestReferenceEndpoints:
    """Tests for catalog and disease targets."""

    def test_catalog_uses_micrograms_key(self, client):
        entries = client.get("/catalog").json()
        oats = next(e for e in entries if e["name"] == "oats")
        assert oats["vitamin_d_μg"] == 0
        assert oats["calories"] == 380

    def test_disease_targets(self, client):
        data = client.get("/diseases/celiac/targets").json()
        assert data["targets"]["iron_mg"] == 18

    def test_unknown_disease(self, client):
        response = client.get("/diseases/scurvy/targets")
        assert response.status_code == 404
        assert "scurvy" in response.json()["error"]


class TestModifyEndpoint:
    """Tests for map_nutrients, scale and substitute."""

    def test_map_nutrients_inline_payload(self, client, auth_headers, oats_payload):
        response = _modify(client, auth_headers, operation="map_nutrients", recipePayload=oats_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["nutrition"]["total"]["calories"] == 760.0
        assert data["nutrition"]["perServing"]["protein_g"] == 13.0
        assert data["percentages"]["protein_g"] == 26
        assert "calories" not in data["percentages"]
        assert data["targets"]["protein_g"] == 50
        assert "substitutions" not in data

    def test_map_nutrients_stored_recipe(self, client, auth_headers, oats_payload):
        recipe_id = client.post("/recipes", json=oats_payload, headers=auth_headers).json()["id"]
        data = _modify(client, auth_headers, operation="map_nutrients", recipeId=recipe_id).json()
        assert data["recipe"]["id"] == recipe_id
        assert data["nutrition"]["total"]["protein_g"] == 26.0

    def test_scale(self, client, auth_headers, oats_payload):
        data = _modify(
            client, auth_headers, operation="scale", recipePayload=oats_payload, scaleFactor=0.5
        ).json()
        assert data["recipe"]["servings"] == 1
        assert data["recipe"]["ingredients"][0]["quantity"] == 100
        assert data["nutrition"]["total"]["calories"] == 380.0

    def test_scale_out_of_range(self, client, auth_headers, oats_payload):
        response = _modify(
            client, auth_headers, operation="scale", recipePayload=oats_payload, scaleFactor=25
        )
        assert response.status_code == 400
        assert "Scale factor must be between" in response.json()["error"]

    def test_unknown_disease_gives_empty_percentages(self, client, auth_headers, oats_payload):
        response = _modify(
            client, auth_headers,
            operation="map_nutrients",
            recipePayload=oats_payload,
            userProfile={"disease": "scurvy"},
        )
        assert response.status_code == 200
        assert response.json()["targets"] == {}
        assert response.json()["percentages"] == {}

    def test_no_recipe_source(self, client, auth_headers):
        response = _modify(client, auth_headers, operation="map_nutrients")
        assert response.status_code == 400
        assert response.json() == {"error": "Either recipeId or recipePayload is required"}

    def test_unknown_recipe_id(self, client, auth_headers):
        response = _modify(client, auth_headers, operation="map_nutrients", recipeId="does-not-exist")
        assert response.status_code == 404

    @pytest.mark.parametrize("recipe_id", ["recipe#1", "../etc/passwd", "ăn sáng"])
    def test_unusual_recipe_id_not_found(self, client, auth_headers, recipe_id):
        """Test ids outside the generated format are looked up like any other."""
        response = _modify(client, auth_headers, operation="map_nutrients", recipeId=recipe_id)
        assert response.status_code == 404
        assert response.json() == {"error": "Recipe not found"}

    def test_overlong_recipe_id_rejected(self, client, auth_headers):
        response = _modify(client, auth_headers, operation="map_nutrients", recipeId="x" * 101)
        assert response.status_code == 400

    def test_huge_quantity_rejected(self, client, auth_headers, oats_payload):
        """Test an out-of-range quantity is a 400 before any computation."""
        payload = dict(oats_payload, ingredients=[{"name": "oats", "quantity": 1e308, "unit": "g"}])
        response = _modify(client, auth_headers, operation="map_nutrients", recipePayload=payload)
        assert response.status_code == 400
        assert "quantity" in response.json()["error"]

    @pytest.mark.parametrize("reply", [
        '{"substitutions": [], "x": ' + "9" * 5000 + "}",
        '{"a":' * 100000 + "1" + "}" * 100000,
        json.dumps({"substitutions": [], "modifiedRecipe": {
            "title": "Huge", "servings": 1,
            "ingredients": [{"name": "oats", "quantity": 1e308, "unit": "g"}],
            "steps": [OATS_STEP],
        }}),
    ])
    def test_substitute_hostile_reply_falls_back(self, client, auth_headers, oats_payload,
                                                 fake_client, reply):
        """Test replies the decoder or validator rejects degrade to the original recipe."""
        fake_client.reply = reply
        response = _modify(client, auth_headers, operation="substitute", recipePayload=oats_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["substitutions"] == []
        assert data["recipe"]["title"] == "Oats"

    def test_requires_identity(self, client, oats_payload):
        response = client.post("/modify", json={
            "operation": "map_nutrients",
            "recipePayload": oats_payload,
            "userProfile": {"disease": "celiac"},
        })
        assert response.status_code == 401

    def test_substitute(self, client, auth_headers, oats_payload, fake_client):
        fake_client.reply = "Sure! " + json.dumps({
            "substitutions": [{"original": "oats", "substitute": "quinoa", "reason": "More protein"}],
            "modifiedRecipe": {
                "title": "Quinoa porridge",
                "servings": 2,
                "ingredients": [{"name": "quinoa", "quantity": 200, "unit": "g"}],
                "steps": [OATS_STEP],
            },
        })
        data = _modify(client, auth_headers, operation="substitute", recipePayload=oats_payload).json()

        assert data["substitutions"] == [
            {"original": "oats", "substitute": "quinoa", "reason": "More protein"}
        ]
        assert data["recipe"]["title"] == "Quinoa porridge"
        assert data["nutrition"]["total"]["protein_g"] == 28.2
        assert len(fake_client.prompts) == 1

    def test_substitute_malformed_reply_falls_back(self, client, auth_headers, oats_payload, fake_client):
        fake_client.reply = "I'd suggest quinoa, it is great."
        response = _modify(client, auth_headers, operation="substitute", recipePayload=oats_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["substitutions"] == []
        assert data["recipe"]["title"] == "Oats"
        assert data["nutrition"]["total"]["calories"] == 760.0

    @pytest.mark.parametrize("error,status_code,message", [
        (AIServiceUnavailable("AI service error"), 503, "AI service error"),
        (ConfigurationError("OpenRouter API key not configured"), 500, "OpenRouter API key not configured"),
    ])
    def test_substitute_errors(self, client, auth_headers, oats_payload, fake_client,
                               error, status_code, message):
        fake_client.error = error
        response = _modify(client, auth_headers, operation="substitute", recipePayload=oats_payload)
        assert response.status_code == status_code
        assert response.json() == {"error": message}

    def test_invalid_operation(self, client, auth_headers, oats_payload):
        response = _modify(client, auth_headers, operation="deep_fry", recipePayload=oats_payload)
        assert response.status_code == 400
