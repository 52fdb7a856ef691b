"""LocaleWeaver exception hierarchy with structured diagnostics.

Two families:
- KnownError and subclasses: user-facing conditions (malformed interchange
  files, permission problems, configuration mistakes). Reported with the
  offending file or unit, never swallowed.
- TransformContractError: a structural contract between extraction and
  transform was violated. A defect, not a recoverable condition.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import replace

from .codes import Diagnostic


class LocalizeError(Exception):
    """Base exception for all LocaleWeaver errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizeError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class KnownError(LocalizeError):
    """User-facing error with an actionable message."""


class InterchangeParseError(KnownError):
    """Interchange XML is malformed or has the wrong node shape.

    Attributes:
        source_path: File the document was read from, when known
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str | None = None) -> None:
        super().__init__(message)
        self.source_path = source_path

    def with_source_path(self, source_path: str) -> "InterchangeParseError":
        """Copy of this error located in source_path.

        The file path is prefixed to any unit location already present.
        """
        if self.diagnostic is None:
            return InterchangeParseError(f"{source_path}: {self}", source_path=source_path)
        location = self.diagnostic.location
        located = replace(
            self.diagnostic,
            location=f"{source_path}: {location}" if location else source_path,
        )
        return InterchangeParseError(located, source_path=source_path)


class InterchangeEncodeError(KnownError):
    """Message content cannot be represented in an interchange file."""


class LocalizeFileError(KnownError):
    """Reading or writing a file failed.

    Attributes:
        path: The path whose read or write was attempted
    """

    def __init__(self, message: str | Diagnostic, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(KnownError):
    """Invalid configuration, including mixing run-time and compile-time APIs."""


class TranslationShapeError(KnownError):
    """Translated placeholders diverge from the source message's.

    Attributes:
        locale: Locale of the offending bundle
        message_name: Identifier of the offending message
    """

    def __init__(self, message: str | Diagnostic, *, locale: str, message_name: str) -> None:
        super().__init__(message)
        self.locale = locale
        self.message_name = message_name


class TransformContractError(LocalizeError):
    """Internal invariant between extraction and transform was violated.

    Examples:
    - Parameterized template slot is not a bare parameter reference
    - Rich template call site reduced to a plain string
    - Localized helper called with other than one argument
    """


class DepthLimitExceededError(TransformContractError):
    """Raised when maximum traversal depth is exceeded."""
