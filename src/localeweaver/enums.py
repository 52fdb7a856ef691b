"""Enumerations for LocaleWeaver type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class InterchangeFormat(StrEnum):
    """Translator-facing interchange file format.

    StrEnum provides automatic string conversion: str(InterchangeFormat.XLB) == "xlb"
    """

    XLB = "xlb"
    """Single localization bundle per file, read back by glob pattern."""

    XLIFF = "xliff"
    """XLIFF 1.2, one <locale>.xlf file per target locale."""


class OutputMode(StrEnum):
    """Output strategy for compiled, localized code."""

    TRANSFORM = "transform"
    """Emit one fully localized copy of the program per locale."""


class ApiTag(StrEnum):
    """Marker properties carried by the localization library's exports.

    The transform engine recognizes library calls by these tags rather than
    by import path or local name, so renamed or re-exported bindings are
    still found.
    """

    MSG = "_LOCALEWEAVER_MSG_"
    """Translation request: msg(template, options)."""

    LOCALIZED = "_LOCALEWEAVER_LOCALIZED_"
    """Localized base-class composition helper."""

    CONFIGURE_TRANSFORM = "_LOCALEWEAVER_CONFIGURE_TRANSFORM_LOCALIZATION_"
    """Compile-time locale configuration entry point."""

    CONFIGURE_RUNTIME = "_LOCALEWEAVER_CONFIGURE_LOCALIZATION_"
    """Run-time locale configuration entry point."""


__all__ = [
    "ApiTag",
    "InterchangeFormat",
    "OutputMode",
]
