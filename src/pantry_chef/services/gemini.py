"""Recipe service client for the Gemini generative-language API.

One compiled prompt in, one request out, one list of recipes back. The client
makes no retries and keeps no cache: every call is a fresh request, and any
failure (network, API error, malformed JSON, schema mismatch) surfaces as a
single GenerationError carrying the user-facing message. Retrying is left to
the caller, by calling generate() again.
"""

import asyncio
import json
import time
from typing import List, Optional

from google import genai
from google.genai import types
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pantry_chef.models.errors import GenerationError
from pantry_chef.models.models import Recipe
from pantry_chef.prompts.prompts import CompiledPrompt
from pantry_chef.utils.config import config
from pantry_chef.utils.logger import logger


_RECIPE_LIST = TypeAdapter(List[Recipe])


def parse_recipes_response(response_text: Optional[str]) -> List[Recipe]:
    """Parse Gemini's JSON reply into validated Recipe models.

    Parsing is strict: the reply must be a JSON array and every element must
    match the Recipe shape. Nothing is partially accepted.

    Args:
        response_text: Raw response text from the API.

    Returns:
        Recipes in the order the API returned them.

    Raises:
        GenerationError: Empty, non-JSON, non-array or invalid payload.
    """
    if not response_text or not response_text.strip():
        logger.warning("Gemini returned an empty response")
        raise GenerationError()

    try:
        payload = json.loads(response_text.strip())
    except json.JSONDecodeError as e:
        logger.warning(f"Gemini response is not valid JSON: {e}")
        raise GenerationError() from e

    if not isinstance(payload, list):
        logger.warning(f"Gemini response is a {type(payload).__name__}, expected a list of recipes")
        raise GenerationError()

    try:
        return _RECIPE_LIST.validate_python(payload)
    except PydanticValidationError as e:
        logger.warning(f"Gemini response does not match the recipe schema: {e.error_count()} error(s)")
        raise GenerationError() from e


class RecipeServiceClient:
    """Async client that turns a CompiledPrompt into recipes.

    The google-genai client is synchronous here, so each request runs in a
    worker thread via asyncio.to_thread.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        self.api_key = api_key or config.GEMINI_API_KEY
        self.model = model or config.GEMINI_MODEL
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=config.REQUEST_TIMEOUT_SECONDS * 1000),
            )
        return self._client

    def _generation_config(self, compiled: CompiledPrompt) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=compiled.response_schema,
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        )

    async def generate(self, compiled: CompiledPrompt) -> List[Recipe]:
        """Send one request and return the parsed recipes.

        Raises:
            GenerationError: On any transport, API or parsing failure.
        """
        extra = {"mode": compiled.mode.value, "recipe_count": compiled.recipe_count}
        logger.info(
            f"Requesting {compiled.recipe_count} recipe(s) from {self.model} ({compiled.mode.value})",
            extra=extra,
        )
        start = time.perf_counter()

        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=compiled.prompt,
                config=self._generation_config(compiled),
            )
            recipes = parse_recipes_response(response.text)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}", extra=extra)
            raise GenerationError() from e

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"Received {len(recipes)} recipe(s) in {elapsed_ms}ms", extra=extra)
        return recipes
