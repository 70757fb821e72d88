"""JSON API for the ingredient list and recipe generation."""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from recipe_creator.api.dependencies import get_ingredient_editor, get_recipe_generator, get_session
from recipe_creator.models.session import SessionState
from recipe_creator.services.ingredient_editor import IngredientEditor
from recipe_creator.services.recipe_generator import RecipeGenerator
from recipe_creator.utils.validators import is_valid_index

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["recipes"])


class IngredientRequest(BaseModel):
    """Request model for adding an ingredient."""

    ingredient: str = Field("", description="Ingredient name; trimmed, ignored if empty or already listed")


@router.get("/session", response_model=SessionState)
async def get_session_state(session: SessionState = Depends(get_session)) -> SessionState:
    """Current ingredients, draft, recipe, error and loading flag."""
    return session


@router.post("/ingredients", response_model=SessionState)
async def add_ingredient(
    req: IngredientRequest = Body(...),
    session: SessionState = Depends(get_session),
    editor: IngredientEditor = Depends(get_ingredient_editor),
) -> SessionState:
    """
    Add an ingredient.

    Empty and duplicate ingredients are ignored; the unchanged session is returned.
    """
    editor.add(req.ingredient)
    return session


@router.delete("/ingredients/{index}", response_model=SessionState)
async def remove_ingredient(
    index: int,
    session: SessionState = Depends(get_session),
    editor: IngredientEditor = Depends(get_ingredient_editor),
) -> SessionState:
    """Remove the ingredient at a zero-based position."""
    if not is_valid_index(session.ingredients, index):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Ingredient not found", "detail": f"No ingredient at position {index}"},
        )
    editor.remove(index)
    return session


@router.post("/generate", response_model=SessionState)
async def generate_recipe(
    request: Request,
    session: SessionState = Depends(get_session),
    generator: RecipeGenerator = Depends(get_recipe_generator),
) -> SessionState:
    """
    Generate a recipe from the current ingredients.

    Always answers 200 with the session: a failed attempt leaves its message
    in `error` and keeps the previous recipe.
    """
    logger.info(
        "Route /api/generate called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/api/generate",
            "params": {"ingredients": len(session.ingredients)},
        },
    )
    await generator.generate(session)
    return session


@router.post("/reset", response_model=SessionState)
async def reset_session(
    session: SessionState = Depends(get_session),
    editor: IngredientEditor = Depends(get_ingredient_editor),
) -> SessionState:
    """Clear ingredients, draft, recipe and error."""
    editor.reset()
    return session
