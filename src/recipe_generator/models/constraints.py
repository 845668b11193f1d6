"""Generation constraints accepted by the recipe generator.

A ConstraintSet is built once from already-validated request input and is
immutable afterwards. Field aliases match the camelCase wire format; snake_case
names are accepted too.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Difficulty(str, Enum):
    """Recipe difficulty level."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class MealType(str, Enum):
    """Meal slot the recipe is meant for."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DESSERT = "Dessert"


class ConstraintSet(BaseModel):
    """User constraints shaping one recipe generation run.

    String collections behave as sets (duplicates and blanks are dropped) but
    keep their first-seen order so the rendered prompt is stable across runs.
    Allergies are hard constraints: they are always rendered into the prompt.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    dietary_preferences: Annotated[
        tuple[str, ...],
        Field(default=(), description="Dietary preferences, e.g. vegetarian, keto"),
    ]
    allergies: Annotated[
        tuple[str, ...],
        Field(default=(), description="Allergens that must never appear in the recipe"),
    ]
    nutritional_focus: Annotated[
        Optional[str],
        Field(None, description="Nutritional goal, e.g. high-protein"),
    ]
    cuisine_type: Annotated[Optional[str], Field(None, description="Cuisine, e.g. Italian")]
    max_prep_time: Annotated[
        Optional[int],
        Field(None, gt=0, description="Maximum prep time in minutes"),
    ]
    max_cook_time: Annotated[
        Optional[int],
        Field(None, gt=0, description="Maximum cook time in minutes"),
    ]
    max_calories: Annotated[
        Optional[int],
        Field(None, gt=0, le=5000, description="Maximum calories per serving (1-5000)"),
    ]
    servings: Annotated[int, Field(4, ge=1, le=20, description="Number of servings (1-20)")]
    difficulty: Annotated[Difficulty, Field(Difficulty.MEDIUM, description="Easy, Medium or Hard")]
    available_ingredients: Annotated[
        tuple[str, ...],
        Field(default=(), description="Ingredients the recipe should prefer"),
    ]
    exclude_ingredients: Annotated[
        tuple[str, ...],
        Field(default=(), description="Ingredients the recipe must not use"),
    ]
    meal_type: Annotated[Optional[MealType], Field(None, description="Breakfast, Lunch, Dinner, Snack or Dessert")]

    @field_validator(
        "dietary_preferences",
        "allergies",
        "available_ingredients",
        "exclude_ingredients",
        mode="before",
    )
    @classmethod
    def normalize_terms(cls, value) -> tuple[str, ...]:
        """Strip, drop blanks and de-duplicate while preserving order.

        Raises:
            ValueError: If the value is not a list, or an entry is not a string.
        """
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple)):
            raise ValueError(f"must be a list of strings, got {type(value).__name__}")
        terms = []
        for term in value:
            if not isinstance(term, str):
                raise ValueError(f"each entry must be a string, got {type(term).__name__}")
            if term.strip():
                terms.append(term.strip())
        return tuple(dict.fromkeys(terms))

    @field_validator("nutritional_focus", "cuisine_type", mode="before")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        """Treat empty strings as absent."""
        if isinstance(value, str) and not value.strip():
            return None
        return value
