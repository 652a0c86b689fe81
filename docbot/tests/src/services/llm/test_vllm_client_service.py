"""Unit tests for the vLLM client service."""

import unittest
from unittest.mock import Mock

import requests

from docbot.conf.config import Config
from docbot.src.services.llm.vllm_client_service import VLLMClientService


class TestVLLMClientService(unittest.TestCase):
    """Test cases for VLLMClientService."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.service = VLLMClientService(
            api_base_url="http://localhost:8001", wait_for_server=False
        )
        self.mock_session = Mock(spec=requests.Session)
        self.mock_response = Mock()
        self.mock_response.status_code = 200
        self.mock_response.json.return_value = {
            "choices": [{"message": {"content": "Generated answer"}}]
        }
        self.mock_session.post.return_value = self.mock_response
        self.service.session = self.mock_session

    def test_default_timeout(self) -> None:
        """Test that the generation timeout comes from configuration."""
        self.assertEqual(self.service.timeout, Config.GENERATION_TIMEOUT)

    def test_generate_sends_prompt_as_user_message(self) -> None:
        """Test the request built for a plain prompt."""
        result = self.service.generate("Say hi")

        self.assertEqual(result, "Generated answer")
        args, kwargs = self.mock_session.post.call_args
        self.assertEqual(args[0], "http://localhost:8001/v1/chat/completions")
        self.assertEqual(
            kwargs["json"]["messages"], [{"role": "user", "content": "Say hi"}]
        )
        self.assertEqual(kwargs["timeout"], Config.GENERATION_TIMEOUT)
        self.mock_session.post.assert_called_once()

    def test_timeout_raises_runtime_error(self) -> None:
        """Test that a timed out request is not retried."""
        self.mock_session.post.side_effect = requests.exceptions.Timeout()

        with self.assertRaises(RuntimeError):
            self.service.generate("Say hi")
        self.assertEqual(self.mock_session.post.call_count, 1)

    def test_server_error_raises_runtime_error(self) -> None:
        """Test that a non-200 answer raises RuntimeError."""
        self.mock_response.status_code = 500
        self.mock_response.text = "internal error"

        with self.assertRaises(RuntimeError):
            self.service.generate("Say hi")

    def test_malformed_response_raises_runtime_error(self) -> None:
        """Test that an answer without choices raises RuntimeError."""
        self.mock_response.json.return_value = {"choices": []}

        with self.assertRaises(RuntimeError):
            self.service.generate("Say hi")


if __name__ == "__main__":
    unittest.main()
