"""Application state and the session controller that mutates it.

AppState is the whole UI state: ingredients, options, the latest result and
the theme. RecipeSession is the only writer. It serialises generation with a
loading flag: a request made while another is outstanding is refused with a
"busy" outcome, never queued. Validation and generation errors are turned
into GenerationOutcome values instead of propagating to the front end.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pantry_chef.models.errors import RecipeGeneratorError
from pantry_chef.models.models import GenerationMode, IngredientList, Recipe, RecipeOptions
from pantry_chef.prompts.prompts import compile_prompt
from pantry_chef.services.gemini import RecipeServiceClient
from pantry_chef.session.theme import DEFAULT_THEME, Theme, ThemeStore
from pantry_chef.utils.logger import logger


class AppState(BaseModel):
    """Everything the front end renders."""

    model_config = ConfigDict(validate_assignment=True)

    ingredients: IngredientList = Field(default_factory=IngredientList)
    options: RecipeOptions = Field(default_factory=RecipeOptions)
    recipes: Optional[List[Recipe]] = None
    error: Optional[str] = None
    loading: bool = False
    theme: Theme = DEFAULT_THEME


class GenerationOutcome(BaseModel):
    """Result of one generate action."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success", "error", "busy"]
    recipes: Optional[List[Recipe]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class RecipeSession:
    """Controller for one user session."""

    def __init__(
        self,
        client: Optional[RecipeServiceClient] = None,
        theme_store: Optional[ThemeStore] = None,
        state: Optional[AppState] = None,
    ) -> None:
        self.client = client or RecipeServiceClient()
        self.theme_store = theme_store
        self.state = state or AppState()
        if self.theme_store is not None and state is None:
            self.state.theme = self.theme_store.load()

    # Ingredients and options

    def add_ingredient(self, item: str, quantity: str = "") -> bool:
        return self.state.ingredients.add(item, quantity)

    def remove_ingredient(self, item: str) -> bool:
        return self.state.ingredients.remove(item)

    def update_options(self, **changes: Any) -> RecipeOptions:
        """Replace the option set with a copy carrying the given field changes."""
        merged = {**self.state.options.model_dump(), **changes}
        self.state.options = RecipeOptions.model_validate(merged)
        return self.state.options

    # Theme

    def toggle_theme(self) -> Theme:
        if self.theme_store is not None:
            self.state.theme = self.theme_store.toggle(self.state.theme)
        else:
            self.state.theme = "dark" if self.state.theme == "light" else "light"
        return self.state.theme

    # Generation

    async def generate_from_ingredients(self) -> GenerationOutcome:
        return await self._generate(GenerationMode.FROM_INGREDIENTS)

    async def surprise_me(self) -> GenerationOutcome:
        """Generate one random recipe. Clears the ingredient list first."""
        if self.state.loading:
            return self._busy()
        self.state.ingredients.clear()
        return await self._generate(GenerationMode.RANDOM)

    def _busy(self) -> GenerationOutcome:
        logger.warning("A recipe request is already in progress; ignoring new request")
        return GenerationOutcome(status="busy")

    async def _generate(self, mode: GenerationMode) -> GenerationOutcome:
        if self.state.loading:
            return self._busy()

        self.state.loading = True
        self.state.error = None
        self.state.recipes = None
        logger.debug(f"Generation started ({mode.value})")

        try:
            compiled = compile_prompt(mode, self.state.ingredients, self.state.options)
            recipes = await self.client.generate(compiled)
        except RecipeGeneratorError as e:
            self.state.error = e.message
            logger.debug(f"Generation failed ({mode.value}): {e.message}")
            return GenerationOutcome(status="error", error=e.message)
        finally:
            self.state.loading = False

        self.state.recipes = recipes
        logger.debug(f"Generation finished ({mode.value}): {len(recipes)} recipe(s)")
        return GenerationOutcome(status="success", recipes=recipes)
