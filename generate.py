#!/usr/bin/env python3
"""Ad hoc recipe generation runner.

Generate a recipe directly from the command line without the surrounding API.

Usage:
    python generate.py '{"cuisineType": "Thai", "allergies": ["Peanuts"], "servings": 2}'
    python generate.py --debug '{"mealType": "Dinner"}'   # Show full JSON and attempts
    python generate.py                                    # Default constraints

Features:
- Constraints as camelCase JSON (same shape as the generation request body)
- Gemini provider with the configured retry budget
- Markdown rendering of the generated recipe
- Exit code 1 with the error code when generation fails
"""

import asyncio
import json
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from recipe_generator.generation.errors import GenerationError, http_status_for
from recipe_generator.generation.orchestrator import RetryOrchestrator
from recipe_generator.models.constraints import ConstraintSet
from recipe_generator.models.generation import GenerationResult
from recipe_generator.models.recipe import GeneratedRecipe
from recipe_generator.providers.gemini import GeminiProvider
from recipe_generator.utils.logger import logger

console = Console()


def render_recipe_markdown(recipe: GeneratedRecipe) -> str:
    """Render a validated recipe as markdown for terminal display."""
    lines = [f"# {recipe.title}"]
    if recipe.subtitle:
        lines.append(f"*{recipe.subtitle}*")
    lines.append("")
    lines.append(recipe.description)
    lines.append("")
    lines.append(
        f"**Prep:** {recipe.prep_time} · **Cook:** {recipe.cook_time} · "
        f"**Serves:** {recipe.servings} · **Calories:** {recipe.calories} · "
        f"**Difficulty:** {recipe.difficulty.value} · **Cuisine:** {recipe.cuisine}"
    )
    if recipe.tags:
        lines.append(f"**Tags:** {', '.join(recipe.tags)}")

    nutrition = recipe.nutrition
    lines.append("")
    lines.append(
        f"**Nutrition (per serving):** protein {nutrition.protein}, carbs {nutrition.carbs}, "
        f"fat {nutrition.fat}, fiber {nutrition.fiber}, sodium {nutrition.sodium}, sugar {nutrition.sugar}"
    )

    lines.append("")
    lines.append("## Ingredients")
    lines.extend(f"- {ingredient.amount} {ingredient.item}" for ingredient in recipe.ingredients)
    if recipe.dressing_ingredients:
        lines.append("")
        lines.append("### Dressing")
        lines.extend(f"- {ingredient.amount} {ingredient.item}" for ingredient in recipe.dressing_ingredients)

    lines.append("")
    lines.append("## Steps")
    for step in recipe.steps:
        duration = f" ({step.duration})" if step.duration else ""
        lines.append(f"{step.number}. **{step.title}**{duration}: {step.description}")
        if step.tip:
            lines.append(f"   - Tip: {step.tip}")

    if recipe.shopping_list:
        lines.append("")
        lines.append("## Shopping List")
        for category in recipe.shopping_list:
            lines.append(f"- **{category.category}:** {', '.join(category.items)}")

    return "\n".join(lines)


def run_generation(raw_constraints: str, debug: bool = False) -> None:
    """Generate one recipe and print it.

    Args:
        raw_constraints: Constraints as a JSON object string (empty for defaults).
        debug: If True, display the full recipe JSON and per-attempt outcomes.
    """
    try:
        constraints = ConstraintSet.model_validate(json.loads(raw_constraints) if raw_constraints else {})
    except json.JSONDecodeError as e:
        console.print(f"[red]✗ Constraints must be a JSON object: {escape(str(e))}[/red]")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"[red]✗ Invalid constraints:[/red]\n{escape(str(e))}")
        sys.exit(1)

    provider = GeminiProvider()
    orchestrator = RetryOrchestrator(provider)

    try:
        logger.info(f"Generating recipe with constraints: {constraints.model_dump_json(by_alias=True, exclude_defaults=True)}")
        result: GenerationResult = asyncio.run(orchestrator.run(constraints))
    except KeyboardInterrupt:
        logger.info("\nGeneration interrupted by user.")
        sys.exit(0)

    console.print()

    if debug:
        console.print("[bold cyan]Debug Mode: Attempts[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        for attempt in result.attempts:
            reason = f" [{attempt.failure_reason}]" if attempt.failure_reason else ""
            console.print(f"#{attempt.index + 1}: {attempt.outcome.value}{escape(reason)}")
        if result.recipe is not None:
            console.print_json(data=result.recipe.model_dump(mode="json", by_alias=True))
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print()

    if not result.success:
        error: GenerationError = result.error
        console.print(f"[red]✗ {error.code} (HTTP {http_status_for(error)}): {escape(error.message)}[/red]")
        sys.exit(1)

    console.print(Markdown(render_recipe_markdown(result.recipe)))


if __name__ == "__main__":
    debug_mode = False
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] == "--debug":
            debug_mode = True
            argv_start += 1
        else:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            print("Usage: python generate.py [--debug] '<constraints JSON>'")
            sys.exit(1)

    # Join remaining arguments so unquoted JSON with spaces still works
    constraints_json = " ".join(sys.argv[argv_start:]).strip()

    run_generation(constraints_json, debug=debug_mode)
