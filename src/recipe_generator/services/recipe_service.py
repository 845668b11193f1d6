"""Recipe service: the typed entry points the surrounding application calls.

Two ways a recipe enters the system, both through the same validator:
- generate_recipe(): constraints → orchestrated generation → storage
- create_recipe(): manually authored recipe → validation → storage

Errors are raised as GenerationError subclasses; the transport layer maps them
with http_status_for(). Storage errors propagate unchanged.
"""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from recipe_generator.generation.orchestrator import RetryOrchestrator
from recipe_generator.generation.validator import validate_authored_recipe
from recipe_generator.models.constraints import ConstraintSet
from recipe_generator.models.recipe import GeneratedRecipe
from recipe_generator.storage.repository import RecipeRepository, StoredRecipe
from recipe_generator.utils.logger import logger


class GenerationResponse(BaseModel):
    """Successful generation: stored recipe plus generation metadata."""

    recipe: GeneratedRecipe
    generation_id: Annotated[str, Field(description="Identifier of the stored recipe")]
    model: Annotated[str, Field(description="Model that produced the recipe")]
    attempts: Annotated[int, Field(ge=1, description="Provider calls used")]

    def to_dict(self) -> dict[str, Any]:
        """camelCase payload for the transport layer."""
        return {
            "recipe": self.recipe.model_dump(mode="json", by_alias=True),
            "generationId": self.generation_id,
            "model": self.model,
            "attempts": self.attempts,
        }


class RecipeService:
    """Coordinate generation, validation and persistence for one application."""

    def __init__(self, orchestrator: RetryOrchestrator, repository: RecipeRepository) -> None:
        self.orchestrator = orchestrator
        self.repository = repository

    async def generate_recipe(self, constraints: ConstraintSet, user_id: str) -> GenerationResponse:
        """Generate, validate and store a recipe.

        Args:
            constraints: Validated constraints (stored alongside the recipe).
            user_id: Caller identity, already authenticated upstream.

        Returns:
            GenerationResponse: The stored recipe, its id and the model used.

        Raises:
            ConfigurationError: Provider is not configured.
            RetriesExhausted: No valid recipe within the retry budget.
            GenerationFailed: Unexpected generation failure.
        """
        result = await self.orchestrator.run(constraints)
        recipe = result.unwrap()

        generation_id = await self.repository.save(recipe, user_id=user_id, constraints=constraints)
        logger.info(f"✓ Stored generated recipe {generation_id} for user {user_id}")

        return GenerationResponse(
            recipe=recipe,
            generation_id=generation_id,
            model=self.orchestrator.provider.model_name,
            attempts=len(result.attempts),
        )

    async def create_recipe(self, candidate: dict[str, Any], user_id: str) -> StoredRecipe:
        """Validate and store a manually authored recipe.

        Raises:
            SchemaValidationError: If the recipe does not satisfy the schema.
        """
        recipe = validate_authored_recipe(candidate)
        recipe_id = await self.repository.save(recipe, user_id=user_id)
        logger.info(f"✓ Stored authored recipe {recipe_id} for user {user_id}")
        return await self.repository.get(recipe_id)
