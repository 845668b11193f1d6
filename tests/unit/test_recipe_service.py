"""Unit tests for the recipe service and the in-memory repository."""

import json
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from recipe_generator.generation.errors import ProviderUnavailable, RetriesExhausted, SchemaValidationError
from recipe_generator.generation.orchestrator import RetryOrchestrator
from recipe_generator.models.constraints import ConstraintSet
from recipe_generator.models.generation import GenerationConfig
from recipe_generator.models.recipe import GeneratedRecipe
from recipe_generator.services.recipe_service import GenerationResponse, RecipeService
from recipe_generator.storage.repository import InMemoryRecipeRepository


def _service(provider, repository=None) -> RecipeService:
    orchestrator = RetryOrchestrator(
        provider,
        generation_config=GenerationConfig(temperature=0.7, top_p=0.95, top_k=40, max_output_tokens=8192),
        max_attempts=2,
        retry_delay=0,
    )
    return RecipeService(orchestrator, repository or InMemoryRecipeRepository())


class TestGenerateRecipe:
    """Test generation through the service."""

    @pytest.mark.asyncio
    async def test_stores_recipe_with_generation_params(self, scripted_provider, valid_recipe_json):
        repository = InMemoryRecipeRepository()
        service = _service(scripted_provider(valid_recipe_json), repository)
        constraints = ConstraintSet(allergies=["Peanuts"], cuisineType="Thai")

        response = await service.generate_recipe(constraints, user_id="user-1")

        assert isinstance(response, GenerationResponse)
        assert response.model == "stub-model"
        assert response.attempts == 1

        stored = await repository.get(response.generation_id)
        assert stored.user_id == "user-1"
        assert stored.recipe == response.recipe
        assert stored.generation_params["allergies"] == ["Peanuts"]
        assert stored.generation_params["cuisineType"] == "Thai"

    @pytest.mark.asyncio
    async def test_attempt_count_reported(self, scripted_provider, valid_recipe_json):
        service = _service(scripted_provider("not json", valid_recipe_json))

        response = await service.generate_recipe(ConstraintSet(), user_id="user-1")

        assert response.attempts == 2

    @pytest.mark.asyncio
    async def test_response_payload_is_camel_case(self, scripted_provider, valid_recipe_json):
        service = _service(scripted_provider(valid_recipe_json))

        payload = (await service.generate_recipe(ConstraintSet(), user_id="user-1")).to_dict()

        assert set(payload) == {"recipe", "generationId", "model", "attempts"}
        assert payload["recipe"]["prepTime"] == "15 min"
        json.dumps(payload)

    @pytest.mark.asyncio
    async def test_exhaustion_raised_and_nothing_stored(self, scripted_provider):
        repository = InMemoryRecipeRepository()
        repository.save = AsyncMock(wraps=repository.save)
        service = _service(scripted_provider("not json"), repository)

        with pytest.raises(RetriesExhausted) as exc_info:
            await service.generate_recipe(ConstraintSet(), user_id="user-1")

        assert exc_info.value.code == "INVALID_RESPONSE_FORMAT"
        repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_configuration_error_raised(self, scripted_provider):
        service = _service(scripted_provider(ProviderUnavailable("GEMINI_API_KEY environment variable is required")))

        with pytest.raises(ProviderUnavailable):
            await service.generate_recipe(ConstraintSet(), user_id="user-1")

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, scripted_provider, valid_recipe_json):
        repository = InMemoryRecipeRepository()
        repository.save = AsyncMock(side_effect=OSError("disk full"))
        service = _service(scripted_provider(valid_recipe_json), repository)

        with pytest.raises(OSError, match="disk full"):
            await service.generate_recipe(ConstraintSet(), user_id="user-1")


class TestCreateRecipe:
    """Test the manual-authoring path."""

    @pytest.mark.asyncio
    async def test_authored_recipe_stored(self, scripted_provider, valid_recipe_data):
        del valid_recipe_data["isGenerated"]
        service = _service(scripted_provider("unused"))

        stored = await service.create_recipe(valid_recipe_data, user_id="user-2")

        assert stored.recipe.is_generated is False
        assert stored.generation_params is None
        assert stored.user_id == "user-2"

    @pytest.mark.asyncio
    async def test_invalid_authored_recipe_rejected(self, scripted_provider, valid_recipe_data):
        valid_recipe_data["ingredients"] = []
        service = _service(scripted_provider("unused"))

        with pytest.raises(SchemaValidationError) as exc_info:
            await service.create_recipe(valid_recipe_data, user_id="user-2")

        assert exc_info.value.code == "SCHEMA_VALIDATION_FAILED"


class TestInMemoryRecipeRepository:
    """Test the process-local repository."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, valid_recipe_data):
        repository = InMemoryRecipeRepository()
        recipe = GeneratedRecipe.model_validate(valid_recipe_data)

        recipe_id = await repository.save(recipe, user_id="user-1")

        stored = await repository.get(recipe_id)
        assert stored.id == recipe_id
        assert stored.recipe == recipe

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self):
        assert await InMemoryRecipeRepository().get("missing") is None

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, valid_recipe_data):
        repository = InMemoryRecipeRepository()
        recipe = GeneratedRecipe.model_validate(valid_recipe_data)

        ids = {await repository.save(recipe, user_id="user-1") for _ in range(5)}

        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_list_for_user_newest_first(self, valid_recipe_data):
        repository = InMemoryRecipeRepository()
        recipe = GeneratedRecipe.model_validate(valid_recipe_data)
        first = await repository.save(recipe, user_id="user-1")
        second = await repository.save(recipe, user_id="user-1")
        await repository.save(recipe, user_id="user-2")
        repository._recipes[first].created_at -= timedelta(minutes=5)

        owned = await repository.list_for_user("user-1")

        assert [stored.id for stored in owned] == [second, first]
