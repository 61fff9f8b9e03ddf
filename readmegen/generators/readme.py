"""Per-folder README generation with optional recursion into subdirectories."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..errors import DirectoryNotFound, GenerationFailed, ProviderCallError
from ..llm.base import Provider
from ..logging import get_logger
from ..models import FolderResult, GenerationReport, GenerationRequest, GenerationStatus
from ..prompting.builder import PromptBuilder
from ..prompting.constants import README_FILENAME
from ..scanner import FolderScanner, ScanMode
from .base import (
    ProviderFactory,
    default_provider_factory,
    invoke_provider,
    read_existing,
    require_text,
    resolve_provider,
    write_atomic,
)


class ReadmeGenerator:
    """Writes a README.md for a folder, and for every subfolder when recursive.

    Folders are processed depth-first from an explicit stack. Each folder is
    isolated: a missing directory, an empty response or a provider failure is
    recorded in the report and the walk continues with the remaining folders.
    """

    def __init__(
        self,
        scanner: FolderScanner | None = None,
        prompt_builder: PromptBuilder | None = None,
        provider_factory: ProviderFactory | None = None,
        *,
        output_name: str = README_FILENAME,
        dry_run: bool = False,
    ) -> None:
        self.scanner = scanner or FolderScanner()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.provider_factory = provider_factory or default_provider_factory()
        self.output_name = output_name
        self.dry_run = dry_run
        self.logger = get_logger("readme")

    def generate(self, request: GenerationRequest) -> GenerationReport:
        """Generate README output for ``request.target_path`` (and below, if recursive).

        Raises ``UnsupportedModel`` before touching the filesystem and
        ``DirectoryNotFound`` when the starting directory is missing.
        """
        provider = resolve_provider(self.provider_factory, request)
        root = Path(request.target_path)
        if not root.is_dir():
            raise DirectoryNotFound(root)

        self.logger.info("Generating %s for %s (recursive=%s)", self.output_name, root, request.recursive)
        report = GenerationReport()
        pending: List[GenerationRequest] = [request.for_path(root)]
        while pending:
            current = pending.pop()
            report.add(self._generate_isolated(current, provider))
            if current.recursive:
                children = self._subdirectories(current.target_path)
                pending.extend(current.for_path(child) for child in reversed(children))

        self.logger.debug(
            "Processed %d folder(s): %d written, %d failed",
            len(report.results),
            len(report.written),
            len(report.failed),
        )
        return report

    def generate_folder(self, request: GenerationRequest, provider: Provider) -> FolderResult:
        """Generate the README for exactly one folder, raising on failure."""
        folder = Path(request.target_path)
        snapshot = self.scanner.scan(folder, ScanMode.IMMEDIATE, exclude_names=(self.output_name,))
        output_path = folder / self.output_name
        existing = read_existing(output_path)
        prompt = self.prompt_builder.build_readme_prompt(folder, snapshot, existing)
        self.logger.debug(
            "Built prompt for %s: %d file(s), %d characters, existing=%s",
            folder,
            len(snapshot),
            len(prompt),
            existing is not None,
        )

        if self.dry_run:
            self.logger.info("Dry-run: would write %s", output_path)
            return FolderResult(folder, GenerationStatus.DRY_RUN, output_path, detail=prompt)

        text = require_text(invoke_provider(provider, prompt), self.output_name, folder)
        write_atomic(output_path, text)
        self.logger.info("%s generated: %s", self.output_name, output_path)
        return FolderResult(folder, GenerationStatus.WRITTEN, output_path)

    def _generate_isolated(self, request: GenerationRequest, provider: Provider) -> FolderResult:
        folder = Path(request.target_path)
        try:
            return self.generate_folder(request, provider)
        except DirectoryNotFound as exc:
            self.logger.warning("%s", exc)
            return FolderResult(folder, GenerationStatus.DIRECTORY_NOT_FOUND, detail=str(exc))
        except GenerationFailed as exc:
            self.logger.error("%s", exc)
            return FolderResult(folder, GenerationStatus.GENERATION_FAILED, detail=str(exc))
        except ProviderCallError as exc:
            self.logger.error("Failed to generate %s for %s: %s", self.output_name, folder, exc)
            return FolderResult(folder, GenerationStatus.PROVIDER_ERROR, detail=str(exc))
        except OSError as exc:
            self.logger.error("Failed to generate %s for %s: %s", self.output_name, folder, exc)
            return FolderResult(folder, GenerationStatus.IO_ERROR, detail=str(exc))

    def _subdirectories(self, folder: Path) -> List[Path]:
        try:
            return self.scanner.subdirectories(folder)
        except (DirectoryNotFound, OSError) as exc:
            self.logger.warning("Cannot list subdirectories of %s: %s", folder, exc)
            return []


__all__ = ["ReadmeGenerator"]
