"""Error taxonomy for recipe generation.

Both errors carry a message that is shown to the user verbatim.
"""

GENERIC_GENERATION_ERROR = (
    "Failed to generate recipes. The AI model might be busy or there was an issue "
    "with the request. Please try again."
)
EMPTY_INGREDIENTS_ERROR = "Please add at least one ingredient before generating recipes."


class RecipeGeneratorError(Exception):
    """Base class for errors surfaced to the user."""

    default_message = "An unknown error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RecipeGeneratorError):
    """Raised when a generation request is missing required input."""

    default_message = EMPTY_INGREDIENTS_ERROR


class GenerationError(RecipeGeneratorError):
    """Raised for any failure talking to the generative API or reading its reply."""

    default_message = GENERIC_GENERATION_ERROR
