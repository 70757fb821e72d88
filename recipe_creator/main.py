"""FastAPI application entry point."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from recipe_creator.api.routes import health, pages, recipes
from recipe_creator.config import Settings, settings
from recipe_creator.core.session_store import SessionStore
from recipe_creator.middleware.logging import RequestLoggingMiddleware, get_request_id
from recipe_creator.middleware.session import BrowserSessionMiddleware
from recipe_creator.utils.exceptions import (
    ConfigurationError,
    GeminiError,
    RecipeCreatorException,
    RecipeParseError,
    ValidationError,
)
from recipe_creator.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def recipe_creator_exception_handler(request: Request, exc: RecipeCreatorException) -> JSONResponse:
    """Handle custom exceptions that escape a route."""
    request_id = get_request_id()

    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = "Validation error"
    elif isinstance(exc, ConfigurationError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        error_message = "Configuration error"
    elif isinstance(exc, (GeminiError, RecipeParseError)):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Gemini API error"
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = "Internal server error"

    logger.error(
        f"Exception: {error_message}",
        extra={"request_id": request_id, "exception": str(exc)},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_message,
            "detail": str(exc),
            "request_id": request_id,
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id()

    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": request_id,
        },
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application with its own in-memory session store."""
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title="AI Recipe Creator",
        description="Turn a list of ingredients into a recipe using Gemini",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = app_settings
    app.state.session_store = SessionStore(max_sessions=app_settings.max_sessions)

    app.add_exception_handler(RecipeCreatorException, recipe_creator_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Last added runs first: request logging wraps the session lookup
    app.add_middleware(
        BrowserSessionMiddleware,
        store=app.state.session_store,
        cookie_name=app_settings.session_cookie_name,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(pages.router)
    app.include_router(recipes.router)

    logger.info(
        "Recipe creator configured",
        extra={
            "model": app_settings.gemini_model,
            "gemini_configured": bool(app_settings.gemini_api_key),
        },
    )
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
