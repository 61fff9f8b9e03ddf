"""Builds README and Copilot instruction prompts from Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import FileEntry, FolderSnapshot
from .constants import AGGREGATE_DELIMITER, COPILOT_FILENAME, README_FILENAME, README_OUTLINE


def build_aggregate(documents: Sequence[FileEntry]) -> str:
    """Join README bodies into one block, each tagged with its relative path."""
    blocks = [f"# {doc.relative_path}\n\n{doc.content.strip()}\n" for doc in documents]
    return AGGREGATE_DELIMITER.join(blocks)


class PromptBuilder:
    """Renders the fixed instruction templates around scanned content.

    Rendering is a pure function of its arguments so the same folder state
    always produces the same prompt.
    """

    README_TEMPLATE = "readme.j2"
    COPILOT_TEMPLATE = "copilot.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        default_dir = Path(__file__).with_name("templates")
        directories = [str(default_dir)]
        if templates_dir is not None and templates_dir != default_dir:
            directories.insert(0, str(templates_dir))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def build_readme_prompt(
        self,
        folder: Path,
        snapshot: FolderSnapshot,
        existing: str | None = None,
    ) -> str:
        """Prompt asking for one folder's README, seeded with any prior README."""
        template = self._env.get_template(self.README_TEMPLATE)
        return template.render(
            folder_path=str(folder),
            outline=README_OUTLINE,
            files=[
                {"path": entry.relative_path, "content": entry.content}
                for entry in snapshot
            ],
            existing=existing,
            output_name=README_FILENAME,
        )

    def build_copilot_prompt(
        self,
        aggregate: str,
        *,
        language: str,
        existing: str | None = None,
    ) -> str:
        """Prompt asking for a project-wide instructions file built from all READMEs."""
        template = self._env.get_template(self.COPILOT_TEMPLATE)
        return template.render(
            aggregate=aggregate,
            language=language,
            existing=existing,
            output_name=COPILOT_FILENAME,
        )


__all__ = ["PromptBuilder", "build_aggregate"]
