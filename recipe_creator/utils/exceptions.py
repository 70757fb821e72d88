"""Custom exception classes."""

from typing import Optional


class RecipeCreatorException(Exception):
    """Base exception for the recipe creator application."""

    pass


class ConfigurationError(RecipeCreatorException):
    """Raised when required configuration (the Gemini API key) is missing."""

    pass


class ValidationError(RecipeCreatorException):
    """Raised when input validation fails."""

    pass


class GeminiError(RecipeCreatorException):
    """Raised when the Gemini API call fails (HTTP status or transport)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RecipeParseError(RecipeCreatorException):
    """Raised when the model response cannot be turned into a recipe."""

    pass
