"""Interchange formats for exchanging messages with translators.

Submodules:
    xml_utils - lxml parsing, indentation and content helpers
    xlb       - XLB bundles, translated files found by glob
    xliff     - XLIFF 1.2, one <locale>.xlf per target locale

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from localeweaver.config import Config
from localeweaver.enums import InterchangeFormat
from localeweaver.messages import Bundle, Message, ProgramMessage

from .xlb import XlbFormatter, encode_xlb, parse_xlb
from .xliff import XliffFormatter, encode_xliff, parse_xliff

__all__ = [
    "Formatter",
    "XlbFormatter",
    "XliffFormatter",
    "encode_xlb",
    "encode_xliff",
    "make_formatter",
    "parse_xlb",
    "parse_xliff",
]


class Formatter(Protocol):
    """Reads translated bundles and writes files for translators."""

    def read_translations(self) -> list[Bundle]:
        """Bundles for every locale that has translations on disk."""
        ...

    def write_output(
        self,
        source_messages: Sequence[ProgramMessage],
        translations: Mapping[str, Sequence[Message]] | None = None,
    ) -> None:
        """Write the interchange file(s) for translators."""
        ...


def make_formatter(config: Config) -> Formatter:
    """Formatter for the configured interchange format."""
    match config.interchange.format:
        case InterchangeFormat.XLB:
            return XlbFormatter(config)
        case InterchangeFormat.XLIFF:
            return XliffFormatter(config)
