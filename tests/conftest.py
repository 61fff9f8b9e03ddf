from __future__ import annotations

from pathlib import Path

import pytest

from readmegen.models import Credentials, GenerationRequest
from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> TreeBuilder:
    """Provide a reusable tree builder rooted at the pytest tmp_path."""
    return TreeBuilder(tmp_path)


@pytest.fixture
def make_request():
    """Build a GenerationRequest with test credentials."""

    def _make(target: Path, *, model: str = "gpt-4o", recursive: bool = False, language: str = "en"):
        return GenerationRequest(
            target_path=target,
            model=model,
            credentials=Credentials(api_key="test-key"),
            recursive=recursive,
            language=language,
        )

    return _make
