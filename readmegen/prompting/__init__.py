"""Prompt construction for README and Copilot instructions generation."""

from .builder import PromptBuilder
from .constants import COPILOT_FILENAME, README_FILENAME

__all__ = ["COPILOT_FILENAME", "PromptBuilder", "README_FILENAME"]
