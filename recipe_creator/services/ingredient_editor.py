"""Ingredient list editing for a session."""

import logging

from recipe_creator.models.session import SessionState
from recipe_creator.utils.validators import normalize_ingredient

logger = logging.getLogger(__name__)


class IngredientEditor:
    """Edits the ingredient list, draft text and results of one session."""

    def __init__(self, session: SessionState):
        self.session = session

    def set_draft(self, text: str) -> None:
        self.session.draft = text or ""

    def add(self, text: str) -> bool:
        """
        Append a trimmed ingredient.

        Empty input and exact duplicates are ignored silently.

        Returns:
            True if the ingredient was appended
        """
        ingredient = normalize_ingredient(text)
        if ingredient is None or ingredient in self.session.ingredients:
            return False

        self.session.ingredients.append(ingredient)
        self.session.draft = ""
        logger.debug("Added ingredient (%d total)", len(self.session.ingredients))
        return True

    def remove(self, index: int) -> None:
        """Remove the ingredient at index. The caller guarantees index is valid."""
        del self.session.ingredients[index]

    def reset(self) -> None:
        """Clear ingredients, draft, recipe and error."""
        self.session.ingredients = []
        self.session.draft = ""
        self.session.recipe = None
        self.session.error = ""
