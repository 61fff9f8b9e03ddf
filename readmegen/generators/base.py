"""Helpers shared by the README and Copilot instructions generators."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ..config import DEFAULT_REQUEST_TIMEOUT
from ..errors import GenerationFailed, ProviderCallError, ReadmeGenError
from ..llm.base import Provider, select_provider
from ..models import Credentials, GenerationRequest
from ..scanner import read_text

ProviderFactory = Callable[[str, Credentials, str], Provider]


def default_provider_factory(
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
) -> ProviderFactory:
    """Return a factory that resolves providers by model-name prefix."""

    def factory(model: str, credentials: Credentials, language: str) -> Provider:
        return select_provider(model, credentials, language, request_timeout=request_timeout)

    return factory


def resolve_provider(factory: ProviderFactory, request: GenerationRequest) -> Provider:
    return factory(request.model, request.credentials, request.language)


def invoke_provider(provider: Provider, prompt: str) -> str:
    """Call the provider, normalising any client failure to ``ProviderCallError``."""
    try:
        text = provider.generate(prompt)
    except ReadmeGenError:
        raise
    except Exception as exc:
        raise ProviderCallError(f"Provider call failed: {exc}") from exc
    return text or ""


def require_text(text: str, output_name: str, target: Path) -> str:
    if not text.strip():
        raise GenerationFailed(f"Failed to generate {output_name} for {target}")
    return text


def read_existing(path: Path) -> str | None:
    """Return the prior output file's text, or None when there is none."""
    if not path.is_file():
        return None
    return read_text(path)


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` so readers never observe a partial file."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


__all__ = [
    "ProviderFactory",
    "default_provider_factory",
    "invoke_provider",
    "read_existing",
    "require_text",
    "resolve_provider",
    "write_atomic",
]
