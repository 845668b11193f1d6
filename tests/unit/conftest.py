"""Shared fixtures for unit tests.

Provides a well-formed recipe payload and a scripted generation provider so
orchestration tests never touch the network.
"""

import copy
import json

import pytest

from recipe_generator.models.generation import GenerationConfig


VALID_RECIPE = {
    "title": "Coconut Lime Chickpea Curry",
    "subtitle": "Bright, creamy weeknight curry",
    "description": "Tender chickpeas simmered in coconut milk with lime, ginger and fresh herbs for a bright, creamy curry.",
    "prepTime": "15 min",
    "cookTime": "25 min",
    "servings": 4,
    "calories": 420,
    "difficulty": "Medium",
    "tags": ["vegan", "gluten-free"],
    "cuisine": "Thai",
    "imageUrl": "",
    "nutrition": {
        "protein": "14g",
        "carbs": "48g",
        "fat": "19g",
        "fiber": "11g",
        "sodium": "520mg",
        "sugar": "7g",
    },
    "ingredients": [
        {"amount": "2 cans", "item": "chickpeas"},
        {"amount": "1 can", "item": "coconut milk"},
        {"amount": "1", "item": "lime"},
    ],
    "dressingIngredients": [],
    "steps": [
        {"number": 1, "title": "Prep", "description": "Rinse the chickpeas and zest the lime.", "duration": "5 min"},
        {"number": 2, "title": "Simmer", "description": "Simmer everything in coconut milk for 20 minutes.", "tip": "Stir often."},
    ],
    "shoppingList": [
        {"category": "Produce", "items": ["lime"]},
        {"category": "Pantry", "items": ["chickpeas", "coconut milk"]},
    ],
    "youtubeId": "",
    "videoUrl": "",
    "isGenerated": True,
}


class ScriptedProvider:
    """Generation provider stub that replays a script of responses.

    Each script entry is either a string (returned as raw text) or an
    exception instance (raised). The last entry repeats once the script runs out.
    """

    model_name = "stub-model"

    def __init__(self, *script):
        self.script = list(script)
        self.calls: list[tuple[str, GenerationConfig]] = []

    async def generate(self, prompt: str, generation_config: GenerationConfig) -> str:
        self.calls.append((prompt, generation_config))
        index = min(len(self.calls) - 1, len(self.script) - 1)
        entry = self.script[index]
        if isinstance(entry, BaseException):
            raise entry
        return entry


@pytest.fixture
def valid_recipe_data() -> dict:
    """A fresh, well-formed recipe payload (safe to mutate)."""
    return copy.deepcopy(VALID_RECIPE)


@pytest.fixture
def valid_recipe_json() -> str:
    return json.dumps(VALID_RECIPE)


@pytest.fixture
def scripted_provider():
    """Factory: scripted_provider(response_or_exception, ...) -> ScriptedProvider."""
    return ScriptedProvider
