"""Folder scanning: file snapshots, line truncation and README discovery."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from .config import DEFAULT_EXCLUDE_DIRS, DEFAULT_MAX_LINE_WIDTH, ScanConfig
from .errors import DirectoryNotFound
from .logging import get_logger
from .models import FileEntry, FolderSnapshot
from .prompting.constants import TRUNCATION_MARKER

logger = get_logger("scanner")


class ScanMode(str, Enum):
    """Which files a scan collects."""

    IMMEDIATE = "immediate"
    RECURSIVE = "recursive"


def truncate_line(line: str, width: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cut ``line`` so that it is at most ``width`` characters, marker included."""
    if len(line) <= width:
        return line
    if width <= len(marker):
        return line[:width]
    return line[: width - len(marker)] + marker


def truncate_content(
    text: str,
    *,
    max_line_width: Optional[int] = DEFAULT_MAX_LINE_WIDTH,
    max_file_chars: Optional[int] = None,
) -> str:
    """Apply the per-file character cap, then the per-line width limit."""
    if max_file_chars is not None:
        text = text[:max_file_chars]
    if max_line_width is None:
        return text

    lines: List[str] = []
    for line in text.split("\n"):
        ending = "\r" if line.endswith("\r") else ""
        body = line[: len(line) - len(ending)]
        lines.append(truncate_line(body, max_line_width) + ending)
    return "\n".join(lines)


def read_text(path: Path) -> str:
    """Read a file as UTF-8, replacing undecodable bytes instead of failing."""
    return path.read_text(encoding="utf-8", errors="replace")


def _ensure_directory(path: Path) -> Path:
    resolved = Path(path).expanduser()
    if not resolved.is_dir():
        raise DirectoryNotFound(path)
    return resolved


def _matches_any(name: str, names: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(lowered == candidate.lower() for candidate in names)


class FolderScanner:
    """Collects file contents from a directory for prompt construction."""

    def __init__(
        self,
        *,
        max_line_width: Optional[int] = DEFAULT_MAX_LINE_WIDTH,
        max_file_chars: Optional[int] = None,
        exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
    ) -> None:
        self.max_line_width = max_line_width
        self.max_file_chars = max_file_chars
        self.exclude_dirs = tuple(exclude_dirs)

    @classmethod
    def from_config(cls, scan: ScanConfig) -> "FolderScanner":
        return cls(
            max_line_width=scan.max_line_width,
            max_file_chars=scan.max_file_chars,
            exclude_dirs=scan.exclude_dirs,
        )

    def scan(
        self,
        path: Path,
        mode: ScanMode = ScanMode.IMMEDIATE,
        *,
        exclude_names: Sequence[str] = (),
    ) -> FolderSnapshot:
        """Return the truncated contents of files under ``path``.

        Files whose name matches ``exclude_names`` (case-insensitively) are
        skipped so a generator never feeds its own previous output back in as
        source material. Raises ``DirectoryNotFound`` when ``path`` is not an
        existing directory.
        """
        root = _ensure_directory(path)
        if mode is ScanMode.RECURSIVE:
            files = self._iter_tree_files(root)
        else:
            files = self._iter_immediate_files(root)

        entries: List[FileEntry] = []
        for file_path in files:
            if _matches_any(file_path.name, exclude_names):
                logger.debug("Skipping generator output %s", file_path)
                continue
            rel_path = file_path.relative_to(root).as_posix()
            content = truncate_content(
                read_text(file_path),
                max_line_width=self.max_line_width,
                max_file_chars=self.max_file_chars,
            )
            entries.append(FileEntry(relative_path=rel_path, content=content))

        logger.debug("Scanned %d file(s) in %s", len(entries), root)
        return FolderSnapshot(root=root, entries=tuple(entries))

    def subdirectories(self, path: Path) -> List[Path]:
        """Return the immediate child directories of ``path`` in name order."""
        root = _ensure_directory(path)
        return sorted(
            (
                child
                for child in root.iterdir()
                if child.is_dir() and child.name not in self.exclude_dirs
            ),
            key=lambda child: child.name,
        )

    def find_files(self, root: Path, name: str) -> List[Path]:
        """Return every file below ``root`` whose name equals ``name`` case-insensitively.

        Every subdirectory is descended into except the configured
        ``exclude_dirs`` (VCS metadata such as ``.git`` by default), which are
        skipped deliberately. Within each directory, matching files are listed
        before descending into subdirectories, and both are visited in name order.
        """
        base = _ensure_directory(root)
        found: List[Path] = []
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames[:] = sorted(d for d in dirnames if d not in self.exclude_dirs)
            for filename in sorted(filenames):
                if _matches_any(filename, (name,)):
                    found.append(Path(dirpath) / filename)
        return found

    def _iter_immediate_files(self, root: Path) -> Iterator[Path]:
        for child in sorted(root.iterdir(), key=lambda item: item.name):
            if child.is_file():
                yield child

    def _iter_tree_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.exclude_dirs)
            current = Path(dirpath)
            for filename in sorted(filenames):
                candidate = current / filename
                if candidate.is_file():
                    yield candidate


__all__ = ["FolderScanner", "ScanMode", "read_text", "truncate_content", "truncate_line"]
