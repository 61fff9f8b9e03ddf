"""Adapter for the OpenAI chat completions API."""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_LANGUAGE, DEFAULT_REQUEST_TIMEOUT
from .base import language_instruction, post_json


class OpenAIProvider:
    """Sends prompts to an OpenAI-compatible ``/chat/completions`` endpoint."""

    DEFAULT_MODEL = "gpt-4o"
    DEFAULT_API_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        *,
        api_key: str,
        model: str | None = None,
        api_url: str | None = None,
        language: str = DEFAULT_LANGUAGE,
        request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.api_url = (api_url or self.DEFAULT_API_URL).rstrip("/")
        self.language = language
        self.request_timeout = request_timeout

    def generate(self, prompt: str) -> str:
        payload: dict[str, object] = {
            "model": self.model,
            "messages": [
                {"role": "user", "content": language_instruction(self.language, prompt)}
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        response = post_json(
            f"{self.api_url}/chat/completions",
            payload,
            headers=headers,
            timeout=self.request_timeout,
            provider_name="OpenAI",
        )
        return self._extract_content(response)

    @staticmethod
    def _extract_content(payload: dict[str, object]) -> str:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        text = first.get("text")
        if isinstance(text, str):
            return text
        return ""


__all__ = ["OpenAIProvider"]
