"""Runs one recipe generation attempt against a session."""

from __future__ import annotations

import logging
from typing import Optional

from recipe_creator.models.recipe import Recipe
from recipe_creator.models.session import SessionState
from recipe_creator.services.gemini_service import GeminiService
from recipe_creator.utils.exceptions import RecipeCreatorException
from recipe_creator.utils.validators import validate_ingredients_list

logger = logging.getLogger(__name__)


class RecipeGenerator:
    """Validates, calls Gemini and stores the recipe or the error on the session."""

    def __init__(self, gemini_service: Optional[GeminiService] = None):
        self.gemini_service = gemini_service or GeminiService()

    async def generate(self, session: SessionState) -> Optional[Recipe]:
        """
        Run one generation attempt.

        Errors never propagate: they end the attempt and are stored in
        ``session.error``. The previous recipe is only replaced on success.

        Returns:
            The new recipe, or None if the attempt failed
        """
        if session.loading:
            # The running attempt owns the session; ignore the retrigger
            logger.warning("Generation requested while another is in flight")
            return None

        try:
            self.gemini_service.ensure_configured()
            ingredients = list(validate_ingredients_list(session.ingredients))
        except RecipeCreatorException as e:
            logger.warning("Generation rejected: %s", str(e))
            session.error = str(e)
            return None

        session.loading = True
        session.error = ""
        try:
            recipe = await self.gemini_service.generate_recipe(ingredients)
        except RecipeCreatorException as e:
            logger.error(
                "Recipe generation failed: %s",
                str(e),
                extra={"error_type": type(e).__name__},
            )
            session.error = str(e)
            return None
        finally:
            session.loading = False

        session.recipe = recipe
        session.error = ""
        logger.info("Recipe generated: %s", recipe.title)
        return recipe
