"""Backend for a self-hosted vLLM server exposing the OpenAI-compatible API."""

import logging
import time
from typing import Any, Dict, Optional

import requests

from docbot.conf.config import Config
from docbot.src.services.llm.llm_service import BaseLLMService

logger = logging.getLogger(__name__)


class VLLMClientService(BaseLLMService):
    """Generation backend talking to an external vLLM server over HTTP.

    Attributes:
        api_base_url: Base URL of the server, e.g. "http://localhost:8001"
        timeout: Seconds before a generation request is abandoned
        session: HTTP session shared by all requests
    """

    def __init__(
        self,
        api_base_url: str,
        timeout: Optional[float] = None,
        wait_for_server: bool = True,
        max_wait_time: float = 60.0,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.chat_completions_url = f"{self.api_base_url}/v1/chat/completions"
        self.timeout = timeout or Config.GENERATION_TIMEOUT
        self.max_wait_time = max_wait_time
        self.session = requests.Session()

        if wait_for_server:
            self._wait_for_server()

    def _wait_for_server(self) -> None:
        """Poll /health with growing pauses until the server answers 200.

        Raises:
            ConnectionError: If the server is not ready within max_wait_time
        """
        logger.info(f"Waiting for vLLM server at {self.api_base_url}...")
        deadline = time.time() + self.max_wait_time
        pause = 1.0

        while time.time() < deadline:
            try:
                response = self.session.get(f"{self.api_base_url}/health", timeout=10)
                if response.status_code == 200:
                    logger.info("vLLM server is ready")
                    return
                logger.warning(f"vLLM server not ready (status {response.status_code})")
            except requests.exceptions.RequestException as e:
                logger.warning(f"vLLM health check failed: {str(e)}")

            pause = min(pause * 2, 10)
            time.sleep(pause)

        raise ConnectionError(
            f"vLLM server at {self.api_base_url} not ready after {self.max_wait_time} seconds"
        )

    def generate(self, prompt: str) -> str:
        payload: Dict[str, Any] = {
            "model": Config.LOCAL_MODEL_NAME,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": Config.LOCAL_MAX_TOKENS,
        }

        try:
            response = self.session.post(
                self.chat_completions_url, json=payload, timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error("Request to vLLM server timed out")
            raise RuntimeError("Request to vLLM server timed out") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Could not reach vLLM server: {str(e)}")
            raise RuntimeError(f"Could not reach vLLM server: {str(e)}") from e

        if response.status_code != 200:
            error_msg = f"vLLM server error: {response.status_code} - {response.text[:200]}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        try:
            return response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError) as e:
            logger.error(f"Malformed response from vLLM server: {str(e)}")
            raise RuntimeError(f"Malformed response from vLLM server: {str(e)}") from e
