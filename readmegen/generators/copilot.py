"""Project-wide Copilot instructions built from every README in a tree."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..errors import DirectoryNotFound, GenerationFailed, ProviderCallError
from ..logging import get_logger
from ..models import FileEntry, FolderResult, GenerationReport, GenerationRequest, GenerationStatus
from ..prompting.builder import PromptBuilder, build_aggregate
from ..prompting.constants import (
    ALL_READMES_HEADING,
    COPILOT_DIRNAME,
    COPILOT_FILENAME,
    README_FILENAME,
)
from ..scanner import FolderScanner, read_text
from .base import (
    ProviderFactory,
    default_provider_factory,
    invoke_provider,
    read_existing,
    require_text,
    resolve_provider,
    write_atomic,
)

_APPENDED_SECTION = f"\n\n---\n\n{ALL_READMES_HEADING}\n"


class CopilotInstructionsGenerator:
    """Aggregates all README.md files below a root into one instructions file.

    The output always lands in ``<working_dir>/.github/copilot-instructions.md``,
    where ``working_dir`` defaults to the process working directory rather
    than the scanned root.
    """

    def __init__(
        self,
        scanner: FolderScanner | None = None,
        prompt_builder: PromptBuilder | None = None,
        provider_factory: ProviderFactory | None = None,
        *,
        working_dir: Path | None = None,
        append_readmes: bool = True,
        dry_run: bool = False,
    ) -> None:
        self.scanner = scanner or FolderScanner()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.provider_factory = provider_factory or default_provider_factory()
        self.working_dir = working_dir
        self.append_readmes = append_readmes
        self.dry_run = dry_run
        self.logger = get_logger("copilot")

    @property
    def output_path(self) -> Path:
        base = self.working_dir if self.working_dir is not None else Path.cwd()
        return base / COPILOT_DIRNAME / COPILOT_FILENAME

    def collect_readmes(
        self, root: Path, report: GenerationReport | None = None
    ) -> List[FileEntry]:
        """Read every README below ``root``, tagged with its path relative to ``root``.

        A README that cannot be read is left out of the aggregate and, when a
        report is given, recorded there as an I/O failure.
        """
        documents: List[FileEntry] = []
        for path in self.scanner.find_files(root, README_FILENAME):
            rel_path = path.relative_to(root).as_posix()
            try:
                content = read_text(path)
            except OSError as exc:
                self.logger.warning("Cannot read %s: %s", path, exc)
                if report is not None:
                    report.add(FolderResult(path, GenerationStatus.IO_ERROR, detail=str(exc)))
                continue
            documents.append(FileEntry(relative_path=rel_path, content=content))
        self.logger.debug("Discovered %d README file(s) under %s", len(documents), root)
        return documents

    def generate(self, request: GenerationRequest) -> GenerationReport:
        """Generate the instructions file for the tree at ``request.target_path``."""
        provider = resolve_provider(self.provider_factory, request)
        root = Path(request.target_path)
        if not root.is_dir():
            raise DirectoryNotFound(root)

        report = GenerationReport()
        output_path = self.output_path
        aggregate = build_aggregate(self.collect_readmes(root, report))
        existing = read_existing(output_path)
        if existing is not None:
            existing = self._strip_appended_readmes(existing)
        prompt = self.prompt_builder.build_copilot_prompt(
            aggregate,
            language=request.language,
            existing=existing,
        )
        self.logger.debug("Built Copilot prompt: %d characters", len(prompt))

        if self.dry_run:
            self.logger.info("Dry-run: would write %s", output_path)
            report.add(FolderResult(root, GenerationStatus.DRY_RUN, output_path, detail=prompt))
            return report

        try:
            text = require_text(invoke_provider(provider, prompt), COPILOT_FILENAME, root)
        except GenerationFailed as exc:
            self.logger.error("%s", exc)
            report.add(FolderResult(root, GenerationStatus.GENERATION_FAILED, detail=str(exc)))
            return report
        except ProviderCallError as exc:
            self.logger.error("Failed to generate %s: %s", COPILOT_FILENAME, exc)
            report.add(FolderResult(root, GenerationStatus.PROVIDER_ERROR, detail=str(exc)))
            return report

        content = text
        if self.append_readmes and aggregate:
            content = text + _APPENDED_SECTION + aggregate

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            write_atomic(output_path, content)
        except OSError as exc:
            self.logger.error("Failed to write %s: %s", output_path, exc)
            report.add(FolderResult(root, GenerationStatus.IO_ERROR, output_path, detail=str(exc)))
            return report
        self.logger.info("Copilot instructions generated: %s", output_path)
        report.add(FolderResult(root, GenerationStatus.WRITTEN, output_path))
        return report

    @staticmethod
    def _strip_appended_readmes(existing: str) -> str:
        # The appended copy of the READMEs is regenerated from disk on every run.
        index = existing.find(_APPENDED_SECTION)
        if index == -1:
            return existing
        return existing[:index]


__all__ = ["CopilotInstructionsGenerator"]
