"""Configuration module for the bot backend."""

import os
from pathlib import Path
from typing import List, Optional


class ConfigMeta(type):
    """Metaclass to prevent direct instantiation and enforce singleton attributes."""

    def __call__(cls, *args: object, **kwargs: object) -> None:
        """Prevent direct instantiation."""
        raise TypeError("Config cannot be instantiated directly. Use class attributes.")


class Config(metaclass=ConfigMeta):
    """Singleton configuration class. Access attributes directly via the class."""

    # =========================================================================
    # Path Configuration
    # =========================================================================
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("DOCBOT_DATA_DIR", str(BASE_DIR / "data")))
    BOTS_PATH: Path = DATA_DIR / "bots.json"
    DOCUMENTATION_PATH: Path = DATA_DIR / "documentation.json"
    MESSAGES_PATH: Path = DATA_DIR / "messages.json"

    # =========================================================================
    # Server Configuration
    # =========================================================================
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    VLLM_PORT: int = int(os.getenv("VLLM_PORT", "8001"))
    VLLM_HOST: str = os.getenv("VLLM_HOST", "localhost")

    # =========================================================================
    # Telegram Configuration
    # =========================================================================
    TELEGRAM_API_BASE_URL: str = os.getenv(
        "TELEGRAM_API_BASE_URL", "https://api.telegram.org"
    )
    TELEGRAM_TIMEOUT: float = float(os.getenv("TELEGRAM_TIMEOUT", "10"))
    MAX_MESSAGE_LENGTH: int = 4096  # Telegram sendMessage limit

    # =========================================================================
    # Conversation Pipeline Configuration
    # =========================================================================
    CONTEXT_LIMIT: int = 10  # Turns fetched from the conversation ledger
    PROMPT_HISTORY_TURNS: int = 5  # Turns actually placed in the prompt
    MAX_KNOWLEDGE_SNIPPETS: int = 2
    KNOWLEDGE_SNIPPET_MAX_CHARS: int = 1000
    DEFAULT_FALLBACK_RESPONSE: str = "Sorry, I didn't quite understand that."
    SERIALIZE_CONVERSATIONS: bool = (
        os.getenv("SERIALIZE_CONVERSATIONS", "false").lower() == "true"
    )

    # =========================================================================
    # LLM Configuration
    # =========================================================================
    # Service selection
    LLM_SERVICE: str = os.getenv(
        "LLM_SERVICE", "gemini"
    )  # Options: gemini, deepseek, vllm
    VALID_LLM_SERVICES: List[str] = ["gemini", "deepseek", "vllm"]

    # Seconds before a generation request is abandoned
    GENERATION_TIMEOUT: float = float(os.getenv("GENERATION_TIMEOUT", "20"))

    # vLLM server configuration
    LOCAL_MODEL_NAME: str = os.getenv(
        "LOCAL_MODEL_NAME", "neuralmagic/Mistral-Small-24B-Instruct-2501-FP8-Dynamic"
    )
    LOCAL_MAX_TOKENS: int = 1024

    # DeepSeek configuration
    DEEPSEEK_MODEL_NAME: str = "deepseek-chat"
    DEEPSEEK_TEMPERATURE: float = 0.7
    DEEPSEEK_API_KEY: Optional[str] = os.getenv("DEEPSEEK_API_KEY")
    DEEPSEEK_MAX_TOKENS: int = 1024

    # Gemini configuration
    GEMINI_MODEL_NAME: str = os.getenv("GEMINI_MODEL_NAME", "gemini-2.0-flash")
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY")
    GEMINI_MAX_TOKENS: int = 1024

    # =========================================================================
    # Service Selection and Validation
    # =========================================================================
    if LLM_SERVICE not in VALID_LLM_SERVICES:
        raise ValueError(
            f"Invalid LLM service: {LLM_SERVICE}. Must be one of {VALID_LLM_SERVICES}"
        )

    if not 10 <= GENERATION_TIMEOUT <= 30:
        raise ValueError(
            f"GENERATION_TIMEOUT must be between 10 and 30 seconds, got {GENERATION_TIMEOUT}"
        )
