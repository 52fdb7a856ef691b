"""Translation shape validation.

A translator may reorder placeholders but never edit, add or drop them.
Validation compares each translated message's placeholder payloads, as a
multiset, against the source message with the same identifier. Checking at
load time reports a corrupted translation against the interchange unit that
carries it, rather than as a broken template during the transform.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from localeweaver.diagnostics import Diagnostic, ErrorTemplate, TranslationShapeError

from .model import Bundle, Message, ProgramMessage, placeholders_of

__all__ = [
    "ValidationResult",
    "ensure_valid_translations",
    "validate_translations",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one bundle against the source messages.

    Attributes:
        locale: Locale of the validated bundle
        errors: Placeholder mismatches, one per offending message
        warnings: Translations with no matching source message
    """

    locale: str
    errors: tuple[Diagnostic, ...] = ()
    warnings: tuple[Diagnostic, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True when no message has divergent placeholders."""
        return not self.errors

    @property
    def error_count(self) -> int:
        """Number of placeholder mismatches."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of unmatched translations."""
        return len(self.warnings)


def _expand(counter: Counter[str]) -> tuple[str, ...]:
    return tuple(sorted(counter.elements()))


def _placeholder_mismatch(
    source: ProgramMessage,
    translation: Message,
    locale: str,
) -> Diagnostic | None:
    expected = Counter(placeholders_of(source.contents))
    actual = Counter(placeholders_of(translation.contents))
    if expected == actual:
        return None
    return ErrorTemplate.placeholder_mismatch(
        locale,
        translation.name,
        missing=_expand(expected - actual),
        extra=_expand(actual - expected),
    )


def validate_translations(
    source_messages: Iterable[ProgramMessage],
    bundle: Bundle,
) -> ValidationResult:
    """Compare translated placeholders against the source messages.

    Args:
        source_messages: Messages extracted from application source
        bundle: Translations for one locale

    Returns:
        ValidationResult listing every mismatch and unmatched translation
    """
    sources = {message.name: message for message in source_messages}
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []
    for translation in bundle:
        source = sources.get(translation.name)
        if source is None:
            warnings.append(ErrorTemplate.translation_unknown_id(bundle.locale, translation.name))
            continue
        mismatch = _placeholder_mismatch(source, translation, bundle.locale)
        if mismatch is not None:
            errors.append(mismatch)
    if warnings:
        logger.info(
            "%d translation(s) in locale '%s' match no source message",
            len(warnings),
            bundle.locale,
        )
    return ValidationResult(locale=bundle.locale, errors=tuple(errors), warnings=tuple(warnings))


def ensure_valid_translations(
    source_messages: Iterable[ProgramMessage],
    bundles: Iterable[Bundle],
) -> None:
    """Raise on the first bundle whose placeholders diverge from the source.

    Raises:
        TranslationShapeError: Naming the locale and offending message
    """
    sources = {message.name: message for message in source_messages}
    for bundle in bundles:
        for translation in bundle:
            source = sources.get(translation.name)
            if source is None:
                continue
            mismatch = _placeholder_mismatch(source, translation, bundle.locale)
            if mismatch is not None:
                raise TranslationShapeError(
                    mismatch, locale=bundle.locale, message_name=translation.name
                )
