"""Persistence collaborator for validated recipes.

The generation core never writes storage itself; the service layer hands a
validated recipe to a RecipeRepository. Storage errors propagate to the caller
and are never retried here.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Protocol

from pydantic import BaseModel, Field

from recipe_generator.models.constraints import ConstraintSet
from recipe_generator.models.recipe import GeneratedRecipe


class StoredRecipe(BaseModel):
    """A persisted recipe with its owner and the constraints that produced it."""

    id: Annotated[str, Field(description="Stored recipe identifier")]
    user_id: Annotated[str, Field(min_length=1, description="Owner identity supplied by the caller")]
    recipe: GeneratedRecipe
    generation_params: Annotated[
        Optional[dict[str, Any]],
        Field(None, description="ConstraintSet used for generation (camelCase), None for authored recipes"),
    ]
    created_at: Annotated[datetime, Field(default_factory=lambda: datetime.now(timezone.utc))]


class RecipeRepository(Protocol):
    async def save(
        self,
        recipe: GeneratedRecipe,
        *,
        user_id: str,
        constraints: Optional[ConstraintSet] = None,
    ) -> str:
        raise NotImplementedError

    async def get(self, recipe_id: str) -> Optional[StoredRecipe]:
        raise NotImplementedError


class InMemoryRecipeRepository:
    """Process-local repository for tests, the CLI and single-node deployments."""

    def __init__(self) -> None:
        self._recipes: dict[str, StoredRecipe] = {}
        self._lock = asyncio.Lock()

    async def save(
        self,
        recipe: GeneratedRecipe,
        *,
        user_id: str,
        constraints: Optional[ConstraintSet] = None,
    ) -> str:
        """Store a validated recipe and return its new identifier."""
        generation_params = constraints.model_dump(mode="json", by_alias=True) if constraints else None
        stored = StoredRecipe(
            id=uuid.uuid4().hex,
            user_id=user_id,
            recipe=recipe,
            generation_params=generation_params,
        )
        async with self._lock:
            self._recipes[stored.id] = stored
        return stored.id

    async def get(self, recipe_id: str) -> Optional[StoredRecipe]:
        async with self._lock:
            return self._recipes.get(recipe_id)

    async def list_for_user(self, user_id: str) -> list[StoredRecipe]:
        """Return a user's recipes, newest first."""
        async with self._lock:
            owned = [stored for stored in self._recipes.values() if stored.user_id == user_id]
        return sorted(owned, key=lambda stored: stored.created_at, reverse=True)
