"""Adapter for the Google Gemini ``generateContent`` REST API."""

from __future__ import annotations

from typing import List, Optional

from ..config import DEFAULT_LANGUAGE, DEFAULT_REQUEST_TIMEOUT
from .base import language_instruction, post_json


class GeminiProvider:
    """Sends prompts to Gemini and returns the first candidate's text."""

    DEFAULT_MODEL = "gemini-2.0-flash"
    DEFAULT_API_URL = "https://generativelanguage.googleapis.com/v1beta"

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
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": language_instruction(self.language, prompt)}],
                }
            ]
        }
        response = post_json(
            f"{self.api_url}/models/{self.model}:generateContent",
            payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.request_timeout,
            provider_name="Gemini",
        )
        return self._extract_text(response)

    @staticmethod
    def _extract_text(payload: dict[str, object]) -> str:
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        first = candidates[0]
        if not isinstance(first, dict):
            return ""
        content = first.get("content")
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts")
        if not isinstance(parts, list):
            return ""
        texts: List[str] = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(texts)


__all__ = ["GeminiProvider"]
