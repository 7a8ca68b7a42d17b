"""Prompt compiler for recipe generation.

Turns the ingredient list, the option set and the generation mode into the
natural-language instruction sent to Gemini, together with the structured
output schema that makes Gemini answer with a JSON array of recipes instead
of prose.

Prompt layout:
    <request sentence>
    [\\nPlease adhere to the following constraints: <sentences>]
    \\n<closing sentence>
"""

from typing import Iterable, List

from google.genai import types
from pydantic import BaseModel, ConfigDict

from pantry_chef.models.errors import ValidationError
from pantry_chef.models.models import GenerationMode, Ingredient, RecipeOptions


RECIPES_FROM_INGREDIENTS = 3
RANDOM_RECIPES = 1

RECIPE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "recipeName": types.Schema(
                type=types.Type.STRING,
                description="The name of the recipe.",
            ),
            "description": types.Schema(
                type=types.Type.STRING,
                description="A short, enticing description of the dish.",
            ),
            "rating": types.Schema(
                type=types.Type.NUMBER,
                description=(
                    "A rating for the recipe from 1 to 5, where 5 is best, "
                    "based on general appeal and ease of preparation."
                ),
            ),
            "ingredients": types.Schema(
                type=types.Type.ARRAY,
                description=(
                    "The list of ingredients for the recipe. "
                    "Include both provided and any additional ingredients needed."
                ),
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "item": types.Schema(
                            type=types.Type.STRING,
                            description="The name of the ingredient.",
                        ),
                        "quantity": types.Schema(
                            type=types.Type.STRING,
                            description="The amount of the ingredient, e.g., '1 cup', '2 tbsp'.",
                        ),
                    },
                    required=["item", "quantity"],
                ),
            ),
            "instructions": types.Schema(
                type=types.Type.ARRAY,
                description="Step-by-step instructions to prepare the dish.",
                items=types.Schema(type=types.Type.STRING),
            ),
            "notes": types.Schema(
                type=types.Type.STRING,
                description="Optional notes or tips for the recipe, like variations or serving suggestions.",
            ),
        },
        required=["recipeName", "description", "rating", "ingredients", "instructions"],
    ),
)


class CompiledPrompt(BaseModel):
    """Everything the recipe client needs for one request."""

    model_config = ConfigDict(frozen=True)

    mode: GenerationMode
    prompt: str
    response_schema: types.Schema
    recipe_count: int


def build_prompt_constraints(options: RecipeOptions) -> str:
    """Build the constraint clause for the set options.

    Sentences follow a fixed order: dietary, cuisine, difficulty, cooking time,
    language. The language sentence is only added for a language other than
    English, which is what the model writes in anyway.

    Returns:
        The clause with a leading newline, or "" when no option is set.
    """
    constraints: List[str] = []
    if options.dietary_preferences:
        constraints.append(f"It must be {options.dietary_preferences}.")
    if options.cuisine:
        constraints.append(f"The cuisine should be {options.cuisine}.")
    if options.difficulty:
        constraints.append(f"The difficulty level should be {options.difficulty}.")
    if options.cooking_time:
        constraints.append(f"The total cooking time should be {options.cooking_time}.")
    if options.language and options.language.lower() != "english":
        constraints.append(
            "The entire recipe, including names, descriptions, and all text, "
            f"must be written in {options.language}."
        )

    if constraints:
        return "\nPlease adhere to the following constraints: " + " ".join(constraints)
    return ""


def _ingredients_prompt(ingredients: List[Ingredient], options: RecipeOptions) -> str:
    formatted = ", ".join(ingredient.display_text() for ingredient in ingredients)
    prompt = (
        f"You are an expert chef. Create {RECIPES_FROM_INGREDIENTS} diverse and delicious recipes "
        f"based on the following ingredients: {formatted}."
    )
    prompt += build_prompt_constraints(options)
    prompt += (
        "\nYou can suggest a few common pantry items (like oil, salt, pepper, flour) if needed, "
        "but the main focus should be the provided ingredients. "
        "For each recipe, provide a short, enticing description and a rating from 1 to 5."
    )
    return prompt


def _random_prompt(options: RecipeOptions) -> str:
    prompt = f"You are an expert chef. Create {RANDOM_RECIPES} unique and delicious recipe."
    prompt += build_prompt_constraints(options)
    prompt += "\nProvide a short, enticing description and a rating from 1 to 5 for the recipe."
    return prompt


def compile_prompt(
    mode: GenerationMode,
    ingredients: Iterable[Ingredient],
    options: RecipeOptions | None = None,
) -> CompiledPrompt:
    """Compile a generation request.

    Args:
        mode: FROM_INGREDIENTS asks for three recipes built around the
            ingredients; RANDOM asks for one recipe and ignores them.
        ingredients: The user's ingredients (any iterable, e.g. IngredientList).
        options: Soft constraints. Defaults to no constraints.

    Returns:
        CompiledPrompt with the prompt text, RECIPE_SCHEMA and the number of
        recipes requested.

    Raises:
        ValidationError: FROM_INGREDIENTS with no ingredients.
    """
    options = options or RecipeOptions()
    mode = GenerationMode(mode)

    if mode is GenerationMode.FROM_INGREDIENTS:
        items = list(ingredients)
        if not items:
            raise ValidationError()
        return CompiledPrompt(
            mode=mode,
            prompt=_ingredients_prompt(items, options),
            response_schema=RECIPE_SCHEMA,
            recipe_count=RECIPES_FROM_INGREDIENTS,
        )

    return CompiledPrompt(
        mode=mode,
        prompt=_random_prompt(options),
        response_schema=RECIPE_SCHEMA,
        recipe_count=RANDOM_RECIPES,
    )
