"""Data models for the recipe generator.

Defines Pydantic models for the ingredient list, the generation options and
the recipes returned by the generative API. Field aliases match the camelCase
JSON the API sends back, so responses validate directly into these models.
"""

from enum import Enum
from typing import Annotated, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


DEFAULT_LANGUAGE = "English"

# Choices offered by the front end. The models accept any string (see RecipeOptions).
DIETARY_CHOICES = ["Any", "Vegetarian", "Vegan", "Gluten-Free", "Keto"]
CUISINE_CHOICES = ["Any", "Italian", "Mexican", "Indian", "Chinese", "American"]
DIFFICULTY_CHOICES = ["Any", "Easy", "Medium", "Hard"]
COOKING_TIME_CHOICES = ["Any", "Under 30 mins", "30-60 mins", "Over 60 mins"]
LANGUAGE_CHOICES = [
    "English",
    "Hinglish",
    "Hindi",
    "Spanish",
    "French",
    "German",
    "Mandarin",
    "Japanese",
    "Bengali",
    "Tamil",
    "Telugu",
    "Marathi",
    "Gujarati",
    "Kannada",
    "Malayalam",
]


class GenerationMode(str, Enum):
    """Which kind of request the user triggered."""

    FROM_INGREDIENTS = "from_ingredients"
    RANDOM = "random"


class Ingredient(BaseModel):
    """A named pantry item with an optional quantity string."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    item: Annotated[str, Field(min_length=1, description="Ingredient name")]
    quantity: Annotated[str, Field("", description="Free-form amount, e.g. '1 cup' (may be empty)")]

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_defaults_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    def display_text(self) -> str:
        """Return 'quantity item', or just the item when no quantity is given."""
        return f"{self.quantity} {self.item}".strip()


class IngredientList(RootModel[List[Ingredient]]):
    """Ordered ingredient collection with case-insensitive unique names.

    Order is insertion order. It only matters for presentation; the prompt
    lists ingredients in the same order but the model is free to ignore it.
    """

    root: List[Ingredient] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def drop_duplicate_items(cls, items: List[Ingredient]) -> List[Ingredient]:
        """Keep the first occurrence of each name (case-insensitive)."""
        seen = set()
        unique = []
        for ingredient in items:
            key = ingredient.item.lower()
            if key in seen:
                continue
            seen.add(key)
            unique.append(ingredient)
        return unique

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Ingredient:
        return self.root[index]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Ingredient):
            item = item.item
        if not isinstance(item, str):
            return False
        key = item.strip().lower()
        return any(ingredient.item.lower() == key for ingredient in self.root)

    def add(self, item: str, quantity: str = "") -> bool:
        """Append an ingredient.

        Returns:
            False (and leaves the list untouched) when the name is blank or
            already present under case-insensitive comparison.
        """
        name = (item or "").strip()
        if not name or name in self:
            return False
        self.root.append(Ingredient(item=name, quantity=(quantity or "").strip()))
        return True

    def remove(self, item: str) -> bool:
        """Remove the ingredient with this name (case-insensitive)."""
        key = (item or "").strip().lower()
        for index, ingredient in enumerate(self.root):
            if ingredient.item.lower() == key:
                del self.root[index]
                return True
        return False

    def clear(self) -> None:
        self.root.clear()

    def formatted(self) -> List[str]:
        """Display texts in insertion order, e.g. ['2 egg', 'rice']."""
        return [ingredient.display_text() for ingredient in self.root]


class RecipeOptions(BaseModel):
    """Soft constraints applied to generation.

    Every field is a free-form string; "" means unset. The value "Any" (any
    case) is what the front end offers for "no preference" and is normalised
    to "". Values are not checked against the *_CHOICES lists.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, frozen=True)

    dietary_preferences: Annotated[
        str, Field("", alias="dietaryPreferences", description="e.g. vegetarian, vegan, keto")
    ]
    cuisine: Annotated[str, Field("", description="e.g. italian, mexican")]
    difficulty: Annotated[str, Field("", description="e.g. easy, medium, hard")]
    cooking_time: Annotated[str, Field("", alias="cookingTime", description="e.g. under 30 mins")]
    language: Annotated[str, Field(DEFAULT_LANGUAGE, description="Language the recipe is written in")]

    @field_validator("dietary_preferences", "cuisine", "difficulty", "cooking_time", mode="before")
    @classmethod
    def any_means_unset(cls, v: Optional[str]) -> str:
        if v is None:
            return ""
        if isinstance(v, str) and v.strip().lower() == "any":
            return ""
        return v

    @field_validator("language", mode="before")
    @classmethod
    def language_none_means_unset(cls, v: Optional[str]) -> str:
        return "" if v is None else v


class RecipeIngredient(BaseModel):
    """An ingredient line of a generated recipe, kept exactly as received."""

    model_config = ConfigDict(frozen=True)

    item: Annotated[str, Field(description="The name of the ingredient")]
    quantity: Annotated[str, Field(description="The amount of the ingredient, e.g. '1 cup'")]

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_defaults_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v


class Recipe(BaseModel):
    """A generated recipe. Immutable once received, text is not normalised."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    recipe_name: Annotated[str, Field(alias="recipeName", min_length=1, description="The name of the recipe")]
    description: Annotated[str, Field(description="A short, enticing description of the dish")]
    ingredients: Annotated[List[RecipeIngredient], Field(description="Ingredients with quantities")]
    instructions: Annotated[List[str], Field(description="Step-by-step instructions in order")]
    rating: Annotated[float, Field(ge=1, le=5, description="Rating from 1 to 5, 5 is best")]
    notes: Annotated[Optional[str], Field(None, description="Optional tips, variations or serving suggestions")]
