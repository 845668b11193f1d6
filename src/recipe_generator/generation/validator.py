"""Schema validation for recipes.

One validator for every entry path: recipes produced by the model and recipes
authored by hand both go through validate_recipe(), so there is a single
definition of what counts as a valid recipe (GeneratedRecipe).
"""

from typing import Any

from pydantic import ValidationError

from recipe_generator.generation.errors import SchemaValidationError
from recipe_generator.models.recipe import GeneratedRecipe


def _format_errors(exc: ValidationError) -> list[tuple[str, str]]:
    """Flatten pydantic errors into (dotted wire path, reason) pairs."""
    errors = []
    for error in exc.errors(include_url=False):
        path = ".".join(str(part) for part in error["loc"]) or "<root>"
        errors.append((path, error["msg"]))
    return errors


def validate_recipe(candidate: Any, *, generated: bool = True) -> GeneratedRecipe:
    """Validate an extracted candidate against the recipe schema.

    Missing optional fields receive their documented defaults. ``isGenerated``
    defaults to ``generated`` when the candidate does not set it.

    Args:
        candidate: Untyped structured value, normally the dict from extract_json().
        generated: Default for isGenerated when absent.

    Returns:
        GeneratedRecipe: Fully populated, schema-valid recipe.

    Raises:
        SchemaValidationError: With one (field_path, reason) pair per violation.
    """
    if not isinstance(candidate, dict):
        raise SchemaValidationError([("<root>", f"expected an object, got {type(candidate).__name__}")])

    if "isGenerated" not in candidate and "is_generated" not in candidate:
        candidate = {**candidate, "isGenerated": generated}

    try:
        return GeneratedRecipe.model_validate(candidate)
    except ValidationError as e:
        raise SchemaValidationError(_format_errors(e)) from e


def validate_authored_recipe(candidate: Any) -> GeneratedRecipe:
    """Validate a manually authored recipe (isGenerated defaults to False)."""
    return validate_recipe(candidate, generated=False)
