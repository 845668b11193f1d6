"""Prompt construction for recipe generation.

Renders a ConstraintSet into a single text prompt: role framing, the
requirement lines, hard rules and a literal JSON output template matching the
GeneratedRecipe schema. Rendering is a pure function of the constraints, so the
same ConstraintSet always produces a byte-identical prompt.

Sampling parameters (temperature, top_p, top_k, max output tokens) are not part
of the prompt; they are passed to the provider as GenerationConfig.
"""

from recipe_generator.models.constraints import ConstraintSet


ROLE_PREAMBLE = (
    "You are a professional chef and certified nutritionist. "
    "Generate an ORIGINAL, creative, and realistic recipe."
)

CRITICAL_RULES = """CRITICAL RULES:
1. Create an ORIGINAL recipe, never a copy of an existing published recipe
2. Every ingredient must be safe to eat and realistic to buy
3. Respect ALL dietary restrictions and NEVER include an allergen listed above
4. Nutritional information must be accurate for one serving
5. Cooking instructions must be practical and in order
6. Time estimates must be realistic"""


def _join(terms: tuple[str, ...]) -> str:
    return ", ".join(terms)


def _constraint_lines(constraints: ConstraintSet) -> list[str]:
    """Build one line per non-empty optional constraint, in fixed order.

    Order: dietary preferences, allergies, nutritional focus, cuisine,
    prep-time cap, cook-time cap, calorie cap, preferred ingredients,
    excluded ingredients. Absent constraints produce no line.

    Args:
        constraints: The generation constraints.

    Returns:
        list[str]: Requirement lines without the leading bullet.
    """
    lines = []

    if constraints.dietary_preferences:
        lines.append(f"Dietary preferences: {_join(constraints.dietary_preferences)}")

    # Allergies are a safety requirement and always carry the strict qualifier
    if constraints.allergies:
        lines.append(f"STRICT ALLERGIES (must avoid): {_join(constraints.allergies)}")

    if constraints.nutritional_focus:
        lines.append(f"Nutritional focus: {constraints.nutritional_focus}")

    if constraints.cuisine_type:
        lines.append(f"Cuisine type: {constraints.cuisine_type}")

    if constraints.max_prep_time:
        lines.append(f"Maximum prep time: {constraints.max_prep_time} minutes")

    if constraints.max_cook_time:
        lines.append(f"Maximum cook time: {constraints.max_cook_time} minutes")

    if constraints.max_calories:
        lines.append(f"Maximum calories per serving: {constraints.max_calories}")

    if constraints.available_ingredients:
        lines.append(f"Prefer using these ingredients: {_join(constraints.available_ingredients)}")

    if constraints.exclude_ingredients:
        lines.append(f"Must NOT use: {_join(constraints.exclude_ingredients)}")

    return lines


def _requirements_section(constraints: ConstraintSet) -> str:
    """Render the REQUIREMENTS block (servings, difficulty, meal type, constraints)."""
    lines = [
        f"- Servings: {constraints.servings}",
        f"- Difficulty level: {constraints.difficulty.value}",
    ]
    if constraints.meal_type:
        lines.append(f"- Meal type: {constraints.meal_type.value}")
    lines.extend(f"- {line}" for line in _constraint_lines(constraints))
    return "REQUIREMENTS:\n" + "\n".join(lines)


def _output_format_section(constraints: ConstraintSet) -> str:
    """Render the literal JSON template the model must fill in.

    The template mirrors GeneratedRecipe field for field. Servings, difficulty
    and cuisine are pre-filled from the constraints.
    """
    cuisine = constraints.cuisine_type or "International"
    return f"""OUTPUT FORMAT:
Return ONLY valid JSON matching this EXACT structure. Do not add explanations, markdown or code fences.

{{
  "title": "Creative Recipe Name (3-200 characters)",
  "subtitle": "Brief catchy description",
  "description": "Detailed 2-3 sentence description highlighting key flavors and appeal (10-2000 characters)",
  "prepTime": "XX min",
  "cookTime": "XX min",
  "servings": {constraints.servings},
  "calories": number (integer, per serving, 0-5000),
  "difficulty": "{constraints.difficulty.value}",
  "tags": ["tag1", "tag2", "tag3"],
  "cuisine": "{cuisine}",
  "imageUrl": "",
  "nutrition": {{
    "protein": "XXg",
    "carbs": "XXg",
    "fat": "XXg",
    "fiber": "XXg",
    "sodium": "XXXmg",
    "sugar": "XXg"
  }},
  "ingredients": [
    {{ "amount": "1 cup", "item": "ingredient name" }}
  ],
  "dressingIngredients": [],
  "steps": [
    {{
      "number": 1,
      "title": "Step Title",
      "description": "Detailed instructions for this step",
      "tip": "Optional helpful tip",
      "duration": "X min"
    }}
  ],
  "shoppingList": [
    {{ "category": "Produce", "items": ["item1", "item2"] }},
    {{ "category": "Protein", "items": ["item1"] }},
    {{ "category": "Pantry", "items": ["item1", "item2"] }}
  ],
  "youtubeId": "",
  "videoUrl": "",
  "isGenerated": true
}}"""


def build_recipe_prompt(constraints: ConstraintSet) -> str:
    """Render the full generation prompt for a ConstraintSet.

    Args:
        constraints: Validated generation constraints.

    Returns:
        str: Prompt text. Identical constraints always yield an identical string.
    """
    sections = [
        ROLE_PREAMBLE,
        _requirements_section(constraints),
        CRITICAL_RULES,
        _output_format_section(constraints),
        "Generate the recipe now:",
    ]
    return "\n\n".join(sections)
