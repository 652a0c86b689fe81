"""Generation backends for bot replies.

Hosted backends:
- Gemini: Google's Gemini API (default)
- DeepSeek: DeepSeek's API (via OpenAI SDK)

A backend receives the fully assembled prompt and returns the model's text.
Every call is a single request bounded by Config.GENERATION_TIMEOUT; nothing is
retried, and any failure surfaces as RuntimeError so the caller can fall back.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import google.generativeai as genai
from google.generativeai.generative_models import GenerativeModel
from google.generativeai.types import GenerationConfig
from openai import OpenAI

from docbot.conf.config import Config

logger = logging.getLogger(__name__)


class BaseLLMService(ABC):
    """Interface of a text generation backend."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Generate a completion for an assembled prompt.

        Args:
            prompt: Complete prompt text

        Returns:
            str: Generated text

        Raises:
            RuntimeError: If the backend fails, times out or returns nothing
        """


class GeminiLLMService(BaseLLMService):
    """Backend calling a Gemini model."""

    def __init__(self, timeout: Optional[float] = None):
        """Configure the Gemini client.

        Args:
            timeout: Request timeout in seconds. Defaults to Config.GENERATION_TIMEOUT

        Raises:
            ValueError: If GEMINI_API_KEY is not set
        """
        if not Config.GEMINI_API_KEY:
            raise ValueError(
                "Gemini API key not found. Please set the GEMINI_API_KEY environment variable."
            )
        genai.configure(api_key=Config.GEMINI_API_KEY)  # type: ignore

        self.timeout = timeout or Config.GENERATION_TIMEOUT
        self.client = GenerativeModel(
            model_name=Config.GEMINI_MODEL_NAME,
            generation_config=GenerationConfig(
                temperature=Config.GEMINI_TEMPERATURE,
                max_output_tokens=Config.GEMINI_MAX_TOKENS,
            ),
        )
        logger.info(f"Gemini backend ready (model {Config.GEMINI_MODEL_NAME})")

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.generate_content(  # type: ignore
                prompt, request_options={"timeout": self.timeout}
            )
            # .text raises ValueError when the candidate was blocked
            text = response.text if response else ""
        except Exception as e:
            logger.error(f"Gemini request failed: {str(e)}")
            raise RuntimeError(f"Gemini request failed: {str(e)}") from e

        if not text:
            raise RuntimeError("Empty response from Gemini API")
        return text


class DeepseekLLMService(BaseLLMService):
    """Backend calling DeepSeek's OpenAI-compatible chat API."""

    def __init__(self, timeout: Optional[float] = None):
        if not Config.DEEPSEEK_API_KEY:
            raise ValueError(
                "DeepSeek API key not found. Please set the DEEPSEEK_API_KEY environment variable."
            )
        self.client = OpenAI(
            api_key=Config.DEEPSEEK_API_KEY,
            base_url="https://api.deepseek.com/v1",
            timeout=timeout or Config.GENERATION_TIMEOUT,
            max_retries=0,
        )
        logger.info(f"DeepSeek backend ready (model {Config.DEEPSEEK_MODEL_NAME})")

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=Config.DEEPSEEK_MODEL_NAME,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=Config.DEEPSEEK_MAX_TOKENS,
                temperature=Config.DEEPSEEK_TEMPERATURE,
            )
            content = response.choices[0].message.content if response.choices else None
        except Exception as e:
            logger.error(f"DeepSeek request failed: {str(e)}")
            raise RuntimeError(f"DeepSeek request failed: {str(e)}") from e

        if not content:
            raise RuntimeError("Empty response from DeepSeek API")
        return content
