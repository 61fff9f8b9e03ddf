"""Error taxonomy shared by the generators and provider adapters."""

from __future__ import annotations

from pathlib import Path


class ReadmeGenError(RuntimeError):
    """Base class for failures reported by readmegen."""


class DirectoryNotFound(ReadmeGenError):
    """Raised when a target directory does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Directory not found: {path}")


class UnsupportedModel(ReadmeGenError):
    """Raised when no provider is registered for a model name."""

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"Unsupported model: {model}")


class GenerationFailed(ReadmeGenError):
    """Raised when a provider returns no text for a prompt."""


class ProviderCallError(ReadmeGenError):
    """Raised when the underlying provider client fails."""


__all__ = [
    "DirectoryNotFound",
    "GenerationFailed",
    "ProviderCallError",
    "ReadmeGenError",
    "UnsupportedModel",
]
