"""Errors raised by the HTTP layer and the body every error response carries.

Whatever fails, a client of the webhook or dashboard endpoints gets
`{ok: false, error, details, status_code}` with a matching HTTP status.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from flask import Response, jsonify
from pydantic import BaseModel, Field

ErrorDetails = Optional[Union[str, List[Dict[str, Any]]]]


class ErrorResponseModel(BaseModel):
    """Body of every error response."""

    ok: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Short description of what went wrong")
    details: ErrorDetails = Field(None, description="Extra context, if any")
    status_code: int = Field(400, description="HTTP status code")


def error_response(
    message: str, details: ErrorDetails = None, status_code: int = 500
) -> Tuple[Response, int]:
    """Render an error body with its HTTP status."""
    body = ErrorResponseModel(error=message, details=details, status_code=status_code)
    return jsonify(body.model_dump()), status_code


class APIError(Exception):
    """Error raised by an endpoint, rendered as an error response.

    Subclasses pick the HTTP status and the message used when none is given.
    """

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, details: ErrorDetails = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> Tuple[Response, int]:
        return error_response(self.message, self.details, self.status_code)


class ValidationError(APIError):
    """The request body could not be read, e.g. a webhook post that is not a JSON object."""

    status_code = 400
    default_message = "Invalid request data"


class ServiceError(APIError):
    """A backend behind the endpoint failed: the LLM for /generate, the ledger for chat lists."""

    status_code = 500
    default_message = "Service error"
