"""Server-rendered recipe creator page and its form handlers."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from recipe_creator.api.dependencies import get_ingredient_editor, get_recipe_generator, get_session
from recipe_creator.models.session import SessionState
from recipe_creator.services.ingredient_editor import IngredientEditor
from recipe_creator.services.recipe_generator import RecipeGenerator
from recipe_creator.utils.validators import is_valid_index

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pages"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))


def _back_to_page() -> RedirectResponse:
    # 303 so the browser follows up with a GET
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, session: SessionState = Depends(get_session)) -> HTMLResponse:
    """Render the ingredient form and the last recipe."""
    return templates.TemplateResponse(request, "index.html", {"session": session})


@router.post("/ingredients")
async def add_ingredient(
    ingredient: str = Form(""),
    editor: IngredientEditor = Depends(get_ingredient_editor),
) -> RedirectResponse:
    editor.set_draft(ingredient)
    editor.add(ingredient)
    return _back_to_page()


@router.post("/ingredients/{index}/remove")
async def remove_ingredient(
    index: int,
    session: SessionState = Depends(get_session),
    editor: IngredientEditor = Depends(get_ingredient_editor),
) -> RedirectResponse:
    if not is_valid_index(session.ingredients, index):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    editor.remove(index)
    return _back_to_page()


@router.post("/generate")
async def generate_recipe(
    session: SessionState = Depends(get_session),
    generator: RecipeGenerator = Depends(get_recipe_generator),
) -> RedirectResponse:
    await generator.generate(session)
    return _back_to_page()


@router.post("/reset")
async def reset(editor: IngredientEditor = Depends(get_ingredient_editor)) -> RedirectResponse:
    editor.reset()
    return _back_to_page()
