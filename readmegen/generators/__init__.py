"""Documentation generators built on the scanner, prompt builder and providers."""

from .copilot import CopilotInstructionsGenerator
from .readme import ReadmeGenerator

__all__ = ["CopilotInstructionsGenerator", "ReadmeGenerator"]
