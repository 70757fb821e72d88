"""Shared API dependencies."""

from fastapi import Depends, Request

from recipe_creator.config import Settings, settings
from recipe_creator.models.session import SessionState
from recipe_creator.services.gemini_service import GeminiService
from recipe_creator.services.ingredient_editor import IngredientEditor
from recipe_creator.services.recipe_generator import RecipeGenerator


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return getattr(request.app.state, "settings", settings)


def get_gemini_service(app_settings: Settings = Depends(get_settings)) -> GeminiService:
    """Get Gemini service instance."""
    return GeminiService(app_settings)


def get_recipe_generator(gemini_service: GeminiService = Depends(get_gemini_service)) -> RecipeGenerator:
    """Get recipe generator instance."""
    return RecipeGenerator(gemini_service)


def get_session(request: Request) -> SessionState:
    """Get the caller's session (attached by BrowserSessionMiddleware)."""
    return request.state.session


def get_ingredient_editor(session: SessionState = Depends(get_session)) -> IngredientEditor:
    """Get an ingredient editor bound to the caller's session."""
    return IngredientEditor(session)
