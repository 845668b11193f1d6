"""Unit tests for prompt construction."""

from recipe_generator.models.constraints import ConstraintSet
from recipe_generator.prompts.prompts import build_recipe_prompt


class TestBuildRecipePromptDeterminism:
    """Identical constraints must yield identical prompts."""

    def test_same_constraints_same_prompt(self):
        """Test that two calls with the same constraints are byte-identical."""
        constraints = ConstraintSet(
            dietaryPreferences=["vegan", "gluten-free"],
            allergies=["Peanuts", "Shellfish"],
            cuisineType="Thai",
            maxCalories=600,
        )
        assert build_recipe_prompt(constraints) == build_recipe_prompt(constraints)

    def test_equal_constraint_objects_same_prompt(self):
        """Test that separately built but equal ConstraintSets render the same prompt."""
        first = ConstraintSet(allergies=["Peanuts"], servings=2)
        second = ConstraintSet(allergies=["Peanuts"], servings=2)
        assert build_recipe_prompt(first) == build_recipe_prompt(second)


class TestBuildRecipePromptAllergies:
    """Allergies are a safety requirement and must always be rendered strictly."""

    def test_every_allergy_rendered_with_strict_qualifier(self):
        """Test that all allergy terms appear verbatim on the strict line."""
        constraints = ConstraintSet(allergies=["Peanuts", "Tree Nuts", "Sesame"])
        prompt = build_recipe_prompt(constraints)

        assert "STRICT ALLERGIES (must avoid): Peanuts, Tree Nuts, Sesame" in prompt

    def test_no_allergy_line_when_absent(self):
        """Test that no allergy line is emitted without allergies."""
        prompt = build_recipe_prompt(ConstraintSet())
        assert "STRICT ALLERGIES" not in prompt


class TestBuildRecipePromptContent:
    """Test prompt sections and constraint line ordering."""

    def test_role_preamble_requests_original_recipe(self):
        """Test that the prompt frames the model as a chef producing an original recipe."""
        prompt = build_recipe_prompt(ConstraintSet())
        assert prompt.startswith("You are a professional chef and certified nutritionist.")
        assert "ORIGINAL" in prompt

    def test_constraint_lines_in_declared_order(self):
        """Test that constraint lines follow the fixed declared order."""
        constraints = ConstraintSet(
            excludeIngredients=["cilantro"],
            availableIngredients=["tofu"],
            maxCalories=500,
            maxCookTime=40,
            maxPrepTime=20,
            cuisineType="Korean",
            nutritionalFocus="high-protein",
            allergies=["Peanuts"],
            dietaryPreferences=["vegetarian"],
        )
        prompt = build_recipe_prompt(constraints)

        markers = [
            "- Dietary preferences: vegetarian",
            "- STRICT ALLERGIES (must avoid): Peanuts",
            "- Nutritional focus: high-protein",
            "- Cuisine type: Korean",
            "- Maximum prep time: 20 minutes",
            "- Maximum cook time: 40 minutes",
            "- Maximum calories per serving: 500",
            "- Prefer using these ingredients: tofu",
            "- Must NOT use: cilantro",
        ]
        positions = [prompt.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_absent_fields_produce_no_lines(self):
        """Test that only servings and difficulty are required lines."""
        prompt = build_recipe_prompt(ConstraintSet())
        requirements = prompt.split("REQUIREMENTS:\n")[1].split("\n\n")[0]

        assert requirements.splitlines() == ["- Servings: 4", "- Difficulty level: Medium"]

    def test_meal_type_rendered_when_present(self):
        """Test that meal type is rendered in the requirements."""
        prompt = build_recipe_prompt(ConstraintSet(mealType="Dinner"))
        assert "- Meal type: Dinner" in prompt

    def test_output_template_prefilled_from_constraints(self):
        """Test that servings, difficulty and cuisine are pre-filled in the JSON template."""
        prompt = build_recipe_prompt(ConstraintSet(servings=6, difficulty="Hard", cuisineType="Mexican"))

        assert '"servings": 6,' in prompt
        assert '"difficulty": "Hard",' in prompt
        assert '"cuisine": "Mexican",' in prompt

    def test_output_template_default_cuisine(self):
        """Test that cuisine defaults to International in the template."""
        prompt = build_recipe_prompt(ConstraintSet())
        assert '"cuisine": "International",' in prompt

    def test_output_template_lists_schema_fields(self):
        """Test that every top-level recipe field appears in the template."""
        prompt = build_recipe_prompt(ConstraintSet())
        for field in (
            "title", "subtitle", "description", "prepTime", "cookTime", "servings",
            "calories", "difficulty", "tags", "cuisine", "imageUrl", "nutrition",
            "ingredients", "dressingIngredients", "steps", "shoppingList",
            "youtubeId", "videoUrl", "isGenerated",
        ):
            assert f'"{field}":' in prompt

    def test_instructs_json_only_without_fences(self):
        """Test that the prompt asks for bare JSON."""
        prompt = build_recipe_prompt(ConstraintSet())
        assert "Return ONLY valid JSON" in prompt
        assert "code fences" in prompt

    def test_sampling_parameters_not_in_prompt(self):
        """Test that generation parameters never leak into the prompt text."""
        prompt = build_recipe_prompt(ConstraintSet()).lower()
        for term in ("temperature", "top_p", "top_k", "max_output_tokens"):
            assert term not in prompt
