"""Per-browser session state."""

from typing import List, Optional
from pydantic import BaseModel, Field

from recipe_creator.models.recipe import Recipe


class SessionState(BaseModel):
    """Everything the page shows, held in memory for one browser session."""

    ingredients: List[str] = Field(default_factory=list, description="Ingredients in insertion order")
    draft: str = Field("", description="Text currently typed in the ingredient input")
    recipe: Optional[Recipe] = Field(None, description="Last generated recipe")
    error: str = Field("", description="Last error message, empty when there is none")
    loading: bool = Field(False, description="True while a recipe is being generated")

    @property
    def can_generate(self) -> bool:
        return bool(self.ingredients) and not self.loading
