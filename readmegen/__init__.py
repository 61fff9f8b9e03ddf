"""Generate folder READMEs and project-wide Copilot instructions with an LLM."""

from .errors import (
    DirectoryNotFound,
    GenerationFailed,
    ProviderCallError,
    ReadmeGenError,
    UnsupportedModel,
)
from .generators import CopilotInstructionsGenerator, ReadmeGenerator
from .llm import select_provider
from .models import Credentials, GenerationReport, GenerationRequest, GenerationStatus
from .scanner import FolderScanner, ScanMode

__all__ = [
    "CopilotInstructionsGenerator",
    "Credentials",
    "DirectoryNotFound",
    "FolderScanner",
    "GenerationFailed",
    "GenerationReport",
    "GenerationRequest",
    "GenerationStatus",
    "ProviderCallError",
    "ReadmeGenError",
    "ReadmeGenerator",
    "ScanMode",
    "UnsupportedModel",
    "select_provider",
]
