"""Shared constants for prompt construction and output locations."""

from __future__ import annotations

README_FILENAME = "README.md"
COPILOT_FILENAME = "copilot-instructions.md"
COPILOT_DIRNAME = ".github"

TRUNCATION_MARKER = "..."

# Separates tagged README bodies in the Copilot aggregate.
AGGREGATE_DELIMITER = "\n---\n"

ALL_READMES_HEADING = "# All README files"

README_OUTLINE: tuple[str, ...] = (
    "- Overview of the folder (natural language)",
    "  - Folder name (do not include path)",
    "  - Purpose of the folder",
    "- Naming conventions",
    "- Design policy",
    "- Technologies and libraries used",
    "- Concise explanation of the role of each file",
    "  - Display in table format",
    "    - File name",
    "    - Role",
    "    - Logic and functions",
    "      - Describe what logic or functions are implemented for each function",
    "    - Names of other files used",
    "      - Show dependencies",
    "- Code style and examples",
    "  - Explain implementation methods and code examples for each pattern",
    "- File templates and explanations",
    "- Coding rules based on the above",
    "- Notes for developers",
)


__all__ = [
    "AGGREGATE_DELIMITER",
    "ALL_READMES_HEADING",
    "COPILOT_DIRNAME",
    "COPILOT_FILENAME",
    "README_FILENAME",
    "README_OUTLINE",
    "TRUNCATION_MARKER",
]
