"""Error handlers turning every failure into an error response.

Handlers are matched most-specific first: pydantic validation, endpoint
errors, fatal pipeline errors, HTTP errors from routing, then anything else.
"""

import logging
import traceback
from typing import Tuple

from flask import Flask, Response, current_app
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from docbot.src.api.middleware.exceptions import APIError, error_response
from docbot.src.services.conversation.errors import PipelineError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers with the Flask application.

    Args:
        app: Flask application
    """

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_validation_error(error: PydanticValidationError) -> Tuple[Response, int]:  # type: ignore
        """Reject a webhook envelope whose fields have the wrong types."""
        logger.warning(f"Validation error: {error}")
        details = "\n".join(str(e) for e in error.errors())
        return error_response("Validation error", details, 400)

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError) -> Tuple[Response, int]:  # type: ignore
        logger.error(f"API error ({error.__class__.__name__}): {error.message}")
        if error.details:
            logger.error(f"Error details: {error.details}")
        return error.to_response()

    @app.errorhandler(PipelineError)
    def handle_pipeline_error(error: PipelineError) -> Tuple[Response, int]:  # type: ignore
        """Map an unknown bot to 404 and a malformed message to 400."""
        logger.error(f"Pipeline error ({error.__class__.__name__}): {error.message}")
        return error_response(error.message, error.details, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> Tuple[Response, int]:  # type: ignore
        return error_response(error.name, error.description, error.code or 500)

    @app.errorhandler(Exception)
    def handle_exception(error: Exception) -> Tuple[Response, int]:  # type: ignore
        """Answer 500 for anything unexpected, with details only in debug mode."""
        logger.error(f"Unhandled exception: {str(error)}")
        logger.error(traceback.format_exc())
        details = str(error) if current_app.debug else None
        return error_response("Internal server error", details, 500)
