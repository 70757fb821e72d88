"""Input validation utilities."""

from typing import List, Optional

from recipe_creator.utils.exceptions import ValidationError


def normalize_ingredient(text: Optional[str]) -> Optional[str]:
    """
    Trim an ingredient typed by the user.

    Args:
        text: Raw input text

    Returns:
        The trimmed ingredient, or None if nothing is left
    """
    if not isinstance(text, str):
        return None
    text = text.strip()
    return text or None


def validate_ingredients_list(ingredients: List[str]) -> List[str]:
    """
    Validate the ingredients list before a recipe is requested.

    Args:
        ingredients: List of ingredient strings

    Returns:
        The same ingredients

    Raises:
        ValidationError: If the list is empty
    """
    if not ingredients:
        raise ValidationError("Please add at least one ingredient")
    return ingredients


def is_valid_index(items: list, index: int) -> bool:
    """Check that index points at an existing element (no negative indexing)."""
    return 0 <= index < len(items)
