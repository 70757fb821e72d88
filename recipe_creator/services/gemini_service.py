"""
Gemini REST service for recipe generation.

Key design:
- One generateContent call per attempt, API key passed as the `key` query parameter.
- HTTP errors are mapped to short user-facing messages (400/403/429, generic otherwise).
- The model text is stripped of markdown fences and parsed as JSON; anything that is
  not a complete recipe is rejected. No JSON repair and no retries.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from recipe_creator.config import Settings, settings as default_settings
from recipe_creator.models.recipe import Recipe
from recipe_creator.utils.exceptions import ConfigurationError, GeminiError, RecipeParseError
from recipe_creator.utils.gemini_helpers import (
    build_generate_content_body,
    get_candidate_text,
    get_error_message,
    strip_code_fences,
)

logger = logging.getLogger(__name__)


GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 500,
}

SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]

MISSING_API_KEY_MESSAGE = "Gemini API key is missing. Please set GEMINI_API_KEY in the environment or .env file."
PARSE_FAILED_MESSAGE = "Failed to parse recipe from AI response."

STATUS_MESSAGES: Dict[int, str] = {
    400: "Invalid API key or request.",
    403: "API key access denied.",
    429: "Rate limit exceeded.",
}


class GeminiService:
    """Service for calling the Gemini generateContent endpoint."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or default_settings
        # Tests swap in httpx.MockTransport here
        self._transport = transport

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------

    def ensure_configured(self) -> str:
        """Return the API key, or raise ConfigurationError if it is not set."""
        api_key = (self.settings.gemini_api_key or "").strip()
        if not api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        return api_key

    async def generate_recipe(self, ingredients: List[str]) -> Recipe:
        """
        Generate a recipe that uses the given ingredients.

        Raises:
            ConfigurationError: API key is not configured (no request is made)
            GeminiError: Non-2xx status or transport failure
            RecipeParseError: Response text is not a complete recipe JSON object
        """
        api_key = self.ensure_configured()
        prompt = self.build_prompt(ingredients)
        body = build_generate_content_body(prompt, GENERATION_CONFIG, SAFETY_SETTINGS)

        logger.info("Generating recipe from %d ingredients", len(ingredients))
        payload = await self._post(api_key, body)

        text = get_candidate_text(payload)
        return self.parse_recipe(text)

    # ---------------------------------------------------------------------
    # Prompt
    # ---------------------------------------------------------------------

    @staticmethod
    def build_prompt(ingredients: List[str]) -> str:
        return f"""Create a delicious and practical recipe using primarily these ingredients: {", ".join(ingredients)}.

You must respond with ONLY a valid JSON object in this exact format (no markdown, no extra text):
{{
  "title": "Recipe Name",
  "description": "Brief appetizing description (2-3 sentences)",
  "prep_time": "X minutes",
  "cook_time": "X minutes",
  "servings": "X",
  "ingredients": [
    "specific ingredient with measurements",
    "another ingredient with measurements"
  ],
  "instructions": [
    "Detailed step 1 with specific actions",
    "Detailed step 2 with cooking technique",
    "Detailed step 3 with timing and temperature"
  ]
}}

Make it a realistic, delicious recipe that highlights the provided ingredients. Include common pantry staples with proper measurements. Provide clear, detailed cooking instructions."""

    # ---------------------------------------------------------------------
    # Response parsing
    # ---------------------------------------------------------------------

    @staticmethod
    def parse_recipe(text: Optional[str]) -> Recipe:
        """
        Turn the model text into a Recipe.

        Fences are stripped, then the text must be a JSON object with a
        non-empty title, ingredients and instructions.
        """
        if not text:
            logger.error("Gemini response contained no text")
            raise RecipeParseError(PARSE_FAILED_MESSAGE)

        cleaned = strip_code_fences(text)
        try:
            data = json.loads(cleaned)
            if not isinstance(data, dict):
                raise ValueError("Gemini returned JSON that is not an object")
            return Recipe.model_validate(data)
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(
                "Recipe JSON parse/validation failed: %s",
                str(e),
                extra={"raw_response": text[:2000]},
            )
            raise RecipeParseError(PARSE_FAILED_MESSAGE) from e

    # ---------------------------------------------------------------------
    # HTTP
    # ---------------------------------------------------------------------

    async def _post(self, api_key: str, body: Dict[str, Any]) -> Any:
        url = self.settings.generate_content_url
        try:
            async with httpx.AsyncClient(
                timeout=float(self.settings.http_timeout),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    params={"key": api_key},
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", str(e), exc_info=True)
            raise GeminiError(f"Failed to reach the Gemini API: {str(e)}") from e

        logger.info("Gemini responded with status %d", response.status_code)

        if not response.is_success:
            raise self._status_error(response)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body: %s", response.text[:500])
            raise RecipeParseError(PARSE_FAILED_MESSAGE) from e

    @staticmethod
    def _status_error(response: httpx.Response) -> GeminiError:
        status_code = response.status_code
        try:
            provider_message = get_error_message(response.json())
        except ValueError:
            provider_message = None

        logger.warning(
            "Gemini API error %d: %s",
            status_code,
            provider_message or "no error message",
        )

        message = STATUS_MESSAGES.get(status_code)
        if message is None:
            message = f"API Error: {status_code} - {provider_message or 'Unknown error'}"
        return GeminiError(message, status_code=status_code)
