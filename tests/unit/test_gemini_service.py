"""Unit tests for the Gemini recipe service client.

The google-genai client is replaced with a MagicMock, so no network calls are made.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from google.genai import types

from pantry_chef.models.errors import GENERIC_GENERATION_ERROR, GenerationError
from pantry_chef.models.models import GenerationMode, IngredientList, Recipe, RecipeOptions
from pantry_chef.prompts.prompts import RECIPE_SCHEMA, compile_prompt
from pantry_chef.services.gemini import RecipeServiceClient, parse_recipes_response


@pytest.fixture
def compiled():
    ingredients = IngredientList()
    ingredients.add("egg", "2")
    return compile_prompt(GenerationMode.FROM_INGREDIENTS, ingredients, RecipeOptions(cuisine="french"))


def _mock_genai_client(text=None, side_effect=None):
    client = MagicMock()
    if side_effect is not None:
        client.models.generate_content.side_effect = side_effect
    else:
        client.models.generate_content.return_value = MagicMock(text=text)
    return client


class TestParseRecipesResponse:
    """Test strict parsing of the JSON reply."""

    def test_valid_array(self, recipe_payload):
        recipes = parse_recipes_response(json.dumps([recipe_payload, recipe_payload]))

        assert len(recipes) == 2
        assert all(isinstance(recipe, Recipe) for recipe in recipes)
        assert recipes[0].recipe_name == "Spinach Omelette"

    def test_surrounding_whitespace_ignored(self, recipe_payload):
        recipes = parse_recipes_response("\n  " + json.dumps([recipe_payload]) + "  \n")

        assert len(recipes) == 1

    def test_empty_array_accepted(self):
        assert parse_recipes_response("[]") == []

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_response(self, text):
        with pytest.raises(GenerationError):
            parse_recipes_response(text)

    def test_non_json(self):
        with pytest.raises(GenerationError) as exc:
            parse_recipes_response("Here are some recipes: pancakes!")
        assert exc.value.message == GENERIC_GENERATION_ERROR

    def test_object_instead_of_array(self, recipe_payload):
        with pytest.raises(GenerationError):
            parse_recipes_response(json.dumps(recipe_payload))

    def test_schema_violation_rejects_whole_payload(self, recipe_payload):
        broken = dict(recipe_payload)
        del broken["instructions"]

        with pytest.raises(GenerationError):
            parse_recipes_response(json.dumps([recipe_payload, broken]))

    def test_rating_out_of_range(self, recipe_payload):
        recipe_payload["rating"] = 9

        with pytest.raises(GenerationError):
            parse_recipes_response(json.dumps([recipe_payload]))

    def test_long_quantity_accepted(self, recipe_payload):
        quantity = "2 tablespoons, " + "finely chopped " * 10
        recipe_payload["ingredients"][0]["quantity"] = quantity
        assert len(quantity) >= 150

        recipes = parse_recipes_response(json.dumps([recipe_payload]))

        assert recipes[0].ingredients[0].quantity == quantity


class TestRecipeServiceClient:
    """Test RecipeServiceClient.generate."""

    @pytest.mark.asyncio
    async def test_successful_generation(self, compiled, recipe_payload):
        genai_client = _mock_genai_client(text=json.dumps([recipe_payload] * 3))
        client = RecipeServiceClient(model="test-model", client=genai_client)

        recipes = await client.generate(compiled)

        assert len(recipes) == 3
        assert recipes[0].ingredients[0].item == "egg"

    @pytest.mark.asyncio
    async def test_request_uses_prompt_and_schema(self, compiled, recipe_payload):
        genai_client = _mock_genai_client(text=json.dumps([recipe_payload]))
        client = RecipeServiceClient(model="test-model", client=genai_client)

        await client.generate(compiled)

        genai_client.models.generate_content.assert_called_once()
        kwargs = genai_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["contents"] == compiled.prompt
        generation_config = kwargs["config"]
        assert isinstance(generation_config, types.GenerateContentConfig)
        assert generation_config.response_mime_type == "application/json"
        assert generation_config.response_schema == RECIPE_SCHEMA

    @pytest.mark.asyncio
    async def test_transport_failure_maps_to_generation_error(self, compiled):
        genai_client = _mock_genai_client(side_effect=ConnectionError("connection reset"))
        client = RecipeServiceClient(client=genai_client)

        with pytest.raises(GenerationError) as exc:
            await client.generate(compiled)

        assert exc.value.message == GENERIC_GENERATION_ERROR
        assert isinstance(exc.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_malformed_body_maps_to_generation_error(self, compiled):
        client = RecipeServiceClient(client=_mock_genai_client(text="{not json"))

        with pytest.raises(GenerationError):
            await client.generate(compiled)

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, compiled):
        genai_client = _mock_genai_client(side_effect=RuntimeError("503 unavailable"))
        client = RecipeServiceClient(client=genai_client)

        with pytest.raises(GenerationError):
            await client.generate(compiled)

        assert genai_client.models.generate_content.call_count == 1

    @pytest.mark.asyncio
    async def test_no_caching_between_calls(self, compiled, recipe_payload):
        genai_client = _mock_genai_client(text=json.dumps([recipe_payload]))
        client = RecipeServiceClient(client=genai_client)

        await client.generate(compiled)
        await client.generate(compiled)

        assert genai_client.models.generate_content.call_count == 2

    def test_defaults_from_config(self):
        from pantry_chef.utils.config import config

        client = RecipeServiceClient(client=MagicMock())

        assert client.model == config.GEMINI_MODEL
        assert client.api_key == config.GEMINI_API_KEY

    @patch("pantry_chef.services.gemini.genai.Client")
    def test_genai_client_created_lazily(self, mock_client_cls):
        client = RecipeServiceClient(api_key="abc")
        mock_client_cls.assert_not_called()

        first = client.client
        second = client.client

        mock_client_cls.assert_called_once()
        assert mock_client_cls.call_args.kwargs["api_key"] == "abc"
        assert first is second
