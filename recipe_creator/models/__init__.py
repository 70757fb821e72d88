"""Pydantic models."""

from recipe_creator.models.recipe import Recipe
from recipe_creator.models.session import SessionState

__all__ = [
    "Recipe",
    "SessionState",
]
