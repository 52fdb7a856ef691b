"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Interchange errors (malformed translator XML, unencodable text)
        2000-2999: File system errors (read/write failures)
        3000-3999: Configuration errors (invalid config, mixed API modes)
        4000-4999: Translation shape errors (placeholders altered)
        9000-9999: Internal errors (violated extraction/transform contract)
    """

    # Interchange parse errors (1000-1999)
    XML_MALFORMED = 1001
    XML_ELEMENT_MISSING = 1002
    XML_ELEMENT_AMBIGUOUS = 1003
    XML_ATTRIBUTE_MISSING = 1004
    XML_PLACEHOLDER_SHAPE = 1005
    XML_UNEXPECTED_NODE = 1006
    XML_TARGET_AMBIGUOUS = 1007
    XML_CHARACTER_INVALID = 1008

    # File system errors (2000-2999)
    FILE_READ_FAILED = 2001
    DIRECTORY_CREATE_FAILED = 2002
    FILE_WRITE_FAILED = 2003

    # Configuration errors (3000-3999)
    CONFIG_INVALID = 3001
    LOCALE_INVALID = 3002
    RUNTIME_CONFIG_IN_TRANSFORM = 3003

    # Translation shape errors (4000-4999)
    PLACEHOLDER_MISMATCH = 4001
    TRANSLATION_UNKNOWN_ID = 4002

    # Internal errors (9000-9999)
    TEMPLATE_SLOT_NOT_PARAMETER = 9001
    TEMPLATE_PARAMETER_UNBOUND = 9002
    RICH_TEMPLATE_IS_STRING = 9003
    LOCALIZED_ARITY = 9004
    TEMPLATE_ARGUMENT_INVALID = 9005
    OPTIONS_ARGUMENT_INVALID = 9006
    MAX_DEPTH_EXCEEDED = 9007


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: File path, unit id or other locator for the offending input
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[XML_PLACEHOLDER_SHAPE]: Expected <ph> to have exactly one text node
              --> trans-unit 'greeting'
              = help: Restore the placeholder content exactly as it appears in the source

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
