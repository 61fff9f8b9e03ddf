"""Helper utilities for constructing temporary directory trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class TreeBuilder:
    """Utility for writing files into a throwaway project tree."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "proj"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the tree root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def mkdir(self, relative: str) -> Path:
        path = self.root / relative
        path.mkdir(parents=True, exist_ok=True)
        return path

    def path(self, relative: str = "") -> Path:
        """Return the tree root, or a path below it."""
        return self.root / relative if relative else self.root


class RecordingProvider:
    """Provider test double that records prompts and replies with canned text."""

    def __init__(self, response: str | None = "generated", *, model: str = "gpt-4o") -> None:
        self.model = model
        self.response = response
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.response  # type: ignore[return-value]


class EchoProvider(RecordingProvider):
    """Returns the prompt it was given."""

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return prompt


class FailingProvider(RecordingProvider):
    """Raises for prompts that mention ``fail_on``."""

    def __init__(self, fail_on: str, *, model: str = "gpt-4o") -> None:
        super().__init__("generated", model=model)
        self.fail_on = fail_on

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail_on in prompt:
            raise ConnectionError(f"boom for {self.fail_on}")
        return "generated"


def factory_for(provider: RecordingProvider):
    """Return a provider factory that always yields ``provider``."""

    def factory(model: str, credentials, language: str) -> RecordingProvider:
        provider.model = model
        return provider

    return factory


__all__ = ["EchoProvider", "FailingProvider", "RecordingProvider", "TreeBuilder", "factory_for"]
