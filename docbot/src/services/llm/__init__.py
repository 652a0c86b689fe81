"""LLM service package."""

from .llm_service import BaseLLMService, DeepseekLLMService, GeminiLLMService
from .vllm_client_service import VLLMClientService

__all__ = [
    "BaseLLMService",
    "GeminiLLMService",
    "DeepseekLLMService",
    "VLLMClientService",
]
