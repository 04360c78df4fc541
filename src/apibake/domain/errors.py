"""Domain errors: custom exceptions for apibake.

These exceptions are raised by the composition engine and surfaced to the
caller unchanged. They carry no infrastructure dependencies.
"""


class ApiBakeError(Exception):
    """Base exception for all apibake errors."""


class HeaderNestingError(ApiBakeError):
    """Raised when a header skips a nesting level (e.g. level 0 → level 2)."""

    def __init__(self, level: int, previous_level: int) -> None:
        self.level = level
        self.previous_level = previous_level
        super().__init__(
            "A header can only be nested inside headers with level - 1. "
            f"level={level}, previousLevel={previous_level}"
        )


class ConfigurationError(ApiBakeError):
    """Raised when the style configuration is invalid or unreadable."""


class DocumentGenerationError(ApiBakeError):
    """Raised when document rendering fails."""


class OutputWriteError(DocumentGenerationError):
    """Raised when the output file cannot be opened or written."""


class DocumentStateError(ApiBakeError):
    """Raised when the document API is used out of order (e.g. after finish)."""
