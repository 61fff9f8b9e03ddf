"""Provider contract, provider kinds and model-name based selection."""

from __future__ import annotations

import json
from enum import Enum
from typing import Mapping, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import DEFAULT_LANGUAGE, DEFAULT_REQUEST_TIMEOUT
from ..errors import ProviderCallError, UnsupportedModel
from ..logging import get_logger
from ..models import Credentials

logger = get_logger("llm")


class Provider(Protocol):
    """Backend that turns a prompt into generated text."""

    model: str

    def generate(self, prompt: str) -> str:
        """Return the model's text for ``prompt``, or an empty string."""


class ProviderKind(str, Enum):
    """Supported vendor families, keyed by the model-name prefix they own."""

    OPENAI = "gpt-"
    GEMINI = "gemini-"

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def from_model(cls, model: str) -> "ProviderKind":
        for kind in cls:
            if model.startswith(kind.prefix):
                return kind
        raise UnsupportedModel(model)


def language_instruction(language: str, prompt: str) -> str:
    """Prefix a prompt with the output-language request shared by all providers."""
    return f"Generate the following in {language} language: {prompt}"


def create_provider(
    kind: ProviderKind,
    *,
    model: str,
    credentials: Credentials,
    language: str = DEFAULT_LANGUAGE,
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
) -> Provider:
    """Construct the provider client for ``kind``."""
    if kind is ProviderKind.OPENAI:
        from .openai import OpenAIProvider

        return OpenAIProvider(
            model=model,
            api_key=credentials.api_key,
            api_url=credentials.api_url,
            language=language,
            request_timeout=request_timeout,
        )
    if kind is ProviderKind.GEMINI:
        from .gemini import GeminiProvider

        return GeminiProvider(
            model=model,
            api_key=credentials.api_key,
            api_url=credentials.api_url,
            language=language,
            request_timeout=request_timeout,
        )
    raise UnsupportedModel(model)  # pragma: no cover - enum is exhaustive


def select_provider(
    model: str,
    credentials: Credentials,
    language: str = DEFAULT_LANGUAGE,
    *,
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
) -> Provider:
    """Map a model name to a configured provider, rejecting unknown prefixes."""
    kind = ProviderKind.from_model(model)
    logger.debug("Selected %s provider for model %s", kind.name.lower(), model)
    return create_provider(
        kind,
        model=model,
        credentials=credentials,
        language=language,
        request_timeout=request_timeout,
    )


def post_json(
    url: str,
    payload: Mapping[str, object],
    *,
    headers: Mapping[str, str],
    timeout: Optional[float],
    provider_name: str,
) -> dict[str, object]:
    """POST a JSON payload and decode the JSON response, wrapping transport errors."""
    data = json.dumps(payload).encode("utf-8")
    request_headers = {"Content-Type": "application/json", **headers}
    http_request = Request(url, data=data, headers=request_headers, method="POST")

    try:
        with urlopen(http_request, timeout=timeout or DEFAULT_REQUEST_TIMEOUT) as response:  # type: ignore[arg-type]
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
        message = detail.strip() or exc.reason
        raise ProviderCallError(
            f"{provider_name} request failed with status {exc.code}: {message}"
        ) from exc
    except URLError as exc:
        raise ProviderCallError(f"{provider_name} request failed: {exc.reason}") from exc
    except TimeoutError as exc:
        raise ProviderCallError(f"{provider_name} request timed out") from exc

    try:
        decoded = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProviderCallError(f"{provider_name} returned invalid JSON") from exc
    if not isinstance(decoded, dict):
        raise ProviderCallError(f"{provider_name} returned an unexpected payload")
    return decoded


__all__ = [
    "Provider",
    "ProviderKind",
    "create_provider",
    "language_instruction",
    "post_json",
    "select_provider",
]
