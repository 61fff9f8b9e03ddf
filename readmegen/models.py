"""Core data models shared across readmegen components."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class FileEntry:
    """A file read during a scan, with its content already truncated."""

    relative_path: str
    content: str


@dataclass(frozen=True)
class FolderSnapshot:
    """Ordered file entries collected from one directory."""

    root: Path
    entries: Tuple[FileEntry, ...] = ()

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def names(self) -> List[str]:
        return [entry.relative_path for entry in self.entries]


@dataclass(frozen=True)
class Credentials:
    """Provider credentials passed explicitly into the generators."""

    api_key: str = field(repr=False)
    api_url: Optional[str] = None

    def __repr__(self) -> str:
        masked = "***" if self.api_key else "''"
        return f"Credentials(api_key={masked}, api_url={self.api_url!r})"


@dataclass(frozen=True)
class GenerationRequest:
    """Immutable configuration for one top-level generator invocation."""

    target_path: Path
    model: str
    credentials: Credentials
    recursive: bool = False
    language: str = "en"

    def for_path(self, path: Path) -> "GenerationRequest":
        """Return a copy of the request pointed at another directory."""
        return replace(self, target_path=Path(path))


class GenerationStatus(str, Enum):
    """Outcome of generating documentation for one directory."""

    WRITTEN = "written"
    DIRECTORY_NOT_FOUND = "directory_not_found"
    GENERATION_FAILED = "generation_failed"
    PROVIDER_ERROR = "provider_error"
    IO_ERROR = "io_error"
    DRY_RUN = "dry_run"


@dataclass
class FolderResult:
    """Per-directory status line produced by a generator."""

    path: Path
    status: GenerationStatus
    output_path: Optional[Path] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in {GenerationStatus.WRITTEN, GenerationStatus.DRY_RUN}


@dataclass
class GenerationReport:
    """Aggregated results for a generator run, in processing order."""

    results: List[FolderResult] = field(default_factory=list)

    def add(self, result: FolderResult) -> FolderResult:
        self.results.append(result)
        return result

    @property
    def ok(self) -> bool:
        return bool(self.results) and all(result.ok for result in self.results)

    @property
    def written(self) -> List[Path]:
        return [
            result.output_path
            for result in self.results
            if result.status is GenerationStatus.WRITTEN and result.output_path is not None
        ]

    @property
    def failed(self) -> List[FolderResult]:
        return [result for result in self.results if not result.ok]


__all__ = [
    "Credentials",
    "FileEntry",
    "FolderResult",
    "FolderSnapshot",
    "GenerationReport",
    "GenerationRequest",
    "GenerationStatus",
]
