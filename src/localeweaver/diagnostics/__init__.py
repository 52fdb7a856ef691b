"""Diagnostic system for LocaleWeaver errors.

Provides structured error diagnostics with codes, locations and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    DepthLimitExceededError,
    InterchangeEncodeError,
    InterchangeParseError,
    KnownError,
    LocalizeError,
    LocalizeFileError,
    TransformContractError,
    TranslationShapeError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "InterchangeEncodeError",
    "InterchangeParseError",
    "KnownError",
    "LocalizeError",
    "LocalizeFileError",
    "OutputFormat",
    "TransformContractError",
    "TranslationShapeError",
]
