"""
Error types for palette-machine configuration and token documents.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class PaletteMachineError(Exception):
    """Base exception for all palette-machine errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class DocumentParseError(PaletteMachineError):
    """
    Raised when a previously exported token document cannot be read.

    The analyzers catch this and report it as an ``error`` value, so it never
    escapes the emission pipeline.

    Examples:
    - Invalid JSON
    - Root value is not an object
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of the input that caused an error.

    Attributes:
        file: Path to the offending file
        key: Optional dotted key inside the file
    """

    file: Path
    key: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "palettespec.yaml (figma.grounds.light)"
        """
        if self.key:
            return f"{self.file} ({self.key})"
        return str(self.file)
