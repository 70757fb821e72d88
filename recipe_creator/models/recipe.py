"""Recipe Pydantic models."""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


def is_missing(value: Any) -> bool:
    """True for values a recipe cannot do without: None, False, 0 and the empty string.

    Empty lists and objects count as present.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


class Recipe(BaseModel):
    """Recipe returned by Gemini for a list of ingredients.

    ``title``, ``ingredients`` and ``instructions`` must be present. Every
    value, and any other key the model sends back, is kept exactly as received.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "title": "Garlic Butter Chicken with Rice",
                "description": "Juicy pan-seared chicken in a garlic butter sauce over fluffy rice.",
                "prep_time": "10 minutes",
                "cook_time": "25 minutes",
                "servings": "4",
                "ingredients": ["2 chicken breasts", "1 cup rice", "3 cloves garlic, minced"],
                "instructions": [
                    "Rinse the rice and cook it in 2 cups of salted water for 18 minutes.",
                    "Season the chicken and sear it for 6 minutes per side.",
                    "Add butter and garlic, baste for 1 minute and serve over the rice.",
                ],
            }
        },
    )

    title: Any = Field(..., description="Recipe title")
    description: Optional[Any] = Field(None, description="Short appetizing description")
    prep_time: Optional[Any] = Field(None, description="Preparation time, free text (e.g. '10 minutes')")
    cook_time: Optional[Any] = Field(None, description="Cooking time, free text (e.g. '25 minutes')")
    servings: Optional[Any] = Field(None, description="Number of servings, free text")
    ingredients: Any = Field(..., description="Ingredients with measurements")
    instructions: Any = Field(..., description="Ordered cooking steps")

    @model_validator(mode="after")
    def check_required_fields(self) -> "Recipe":
        missing = [
            name
            for name in ("title", "ingredients", "instructions")
            if is_missing(getattr(self, name))
        ]
        if missing:
            raise ValueError(f"Incomplete recipe data: missing {', '.join(missing)}")
        return self
