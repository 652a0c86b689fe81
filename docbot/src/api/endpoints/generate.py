"""Raw generation endpoint module.

Exposes the configured LLM backend directly, without bot context. Used by the
dashboard when it needs a one-off completion.
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, jsonify
from flask_pydantic import validate  # type: ignore
from pydantic import BaseModel, Field, field_validator

from docbot.src.api.middleware.exceptions import ServiceError
from docbot.src.services import BaseLLMService

logger = logging.getLogger(__name__)


# Schema definitions
class GenerateRequest(BaseModel):
    """Generate request model for validation."""

    prompt: str = Field(..., description="Prompt sent to the model")

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Reject blank prompts."""
        if not v.strip():
            raise ValueError("Prompt is required in the request body.")
        return v


class GenerateResponseModel(BaseModel):
    """Generate response model."""

    response: str = Field(..., description="Generated text")


def init_generate_routes(llm_service: BaseLLMService) -> Blueprint:
    """Initialize generation routes with the provided LLM service.

    Args:
        llm_service: Backend used to generate text

    Returns:
        Blueprint: Flask blueprint with the generate route
    """
    generate_bp = Blueprint("generate", __name__)

    @generate_bp.route("/generate", methods=["POST"])
    @validate()
    def generate(body: GenerateRequest) -> Tuple[Response, int]:  # type: ignore
        """Generate text for a raw prompt.

        Args:
            body: Validated request body

        Returns:
            Response with the generated text
        """
        try:
            text = llm_service.generate(body.prompt)
        except Exception as e:
            logger.error(f"Error handling generation request: {str(e)}")
            raise ServiceError(message="Failed to get response from the model.", details=str(e))

        response = GenerateResponseModel(response=text)
        return jsonify(response.model_dump()), 200

    return generate_bp
