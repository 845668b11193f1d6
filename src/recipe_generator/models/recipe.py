"""Recipe schema shared by generated and manually authored recipes.

GeneratedRecipe is the single definition of a valid recipe. Every optional
field has a concrete default so a validated recipe never has undefined values.
Serialize with ``model_dump(by_alias=True)`` to get the camelCase wire format.
"""

from typing import Annotated, List

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

from recipe_generator.models.constraints import Difficulty


def _reject_non_integer(value):
    """Refuse strings and booleans where a JSON integer is expected."""
    if isinstance(value, (bool, str)):
        raise ValueError("must be an integer")
    return value


JsonInt = Annotated[int, BeforeValidator(_reject_non_integer)]


class _RecipeModel(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Nutrition(_RecipeModel):
    """Per-serving nutrition facts. Macros are required, extras default."""

    protein: Annotated[str, Field(min_length=1, description="e.g. 25g")]
    carbs: Annotated[str, Field(min_length=1, description="e.g. 40g")]
    fat: Annotated[str, Field(min_length=1, description="e.g. 12g")]
    fiber: Annotated[str, Field(min_length=1, description="e.g. 6g")]
    sodium: Annotated[str, Field("0mg", description="e.g. 450mg")]
    sugar: Annotated[str, Field("0g", description="e.g. 8g")]
    saturated_fat: Annotated[str, Field("", description="e.g. 3g")]
    cholesterol: Annotated[str, Field("", description="e.g. 60mg")]


class Ingredient(_RecipeModel):
    amount: Annotated[str, Field(min_length=1, description="e.g. 1 cup")]
    item: Annotated[str, Field(min_length=1, description="Ingredient name")]
    id: Annotated[str, Field("", description="Optional client-side identifier")]


class RecipeStep(_RecipeModel):
    number: Annotated[JsonInt, Field(gt=0, description="1-based step position")]
    title: Annotated[str, Field(min_length=1)]
    description: Annotated[str, Field(min_length=1)]
    tip: Annotated[str, Field("")]
    duration: Annotated[str, Field("", description="e.g. 5 min")]
    image_url: Annotated[str, Field("")]


class ShoppingCategory(_RecipeModel):
    category: Annotated[str, Field(min_length=1, description="e.g. Produce")]
    items: Annotated[List[str], Field(min_length=1)]


class GeneratedRecipe(_RecipeModel):
    """A complete, schema-valid recipe.

    Bounds:
    - title 3-200 chars, description 10-2000 chars
    - servings 1-100, calories 0-5000 (per serving), both JSON integers
    - at least one ingredient and one step; every shopping category has items
    """

    title: Annotated[str, Field(min_length=3, max_length=200)]
    subtitle: Annotated[str, Field("")]
    description: Annotated[str, Field(min_length=10, max_length=2000)]
    prep_time: Annotated[str, Field(min_length=1, description="e.g. 15 min")]
    cook_time: Annotated[str, Field(min_length=1, description="e.g. 30 min")]
    servings: Annotated[JsonInt, Field(ge=1, le=100)]
    calories: Annotated[JsonInt, Field(ge=0, le=5000, description="Calories per serving")]
    difficulty: Difficulty
    tags: Annotated[List[str], Field(default_factory=list)]
    cuisine: Annotated[str, Field("International")]
    image_url: Annotated[str, Field("")]
    nutrition: Nutrition
    ingredients: Annotated[List[Ingredient], Field(min_length=1)]
    dressing_ingredients: Annotated[List[Ingredient], Field(default_factory=list)]
    steps: Annotated[List[RecipeStep], Field(min_length=1)]
    shopping_list: Annotated[List[ShoppingCategory], Field(default_factory=list)]
    youtube_id: Annotated[str, Field("")]
    video_url: Annotated[str, Field("")]
    is_generated: Annotated[StrictBool, Field(True)]
