"""Transform-mode output: one localized copy of the program per locale.

For the source locale and each target locale, every source file is
rewritten by the transform pass and written to
<output_dir>/<locale>/<file_name>. Locales are processed concurrently;
each one's files are independent of every other locale's.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from localeweaver.config import Config
from localeweaver.core.files import run_concurrently, write_text_file
from localeweaver.locales import write_locale_codes_module
from localeweaver.messages import (
    Bundle,
    Message,
    ProgramMessage,
    ensure_valid_translations,
    make_message_id_map,
)
from localeweaver.syntax import Program, SourceFile, serialize

from .transformer import TransformContext, transform_source_file

__all__ = [
    "bundles_by_locale",
    "localize_program",
    "transform_output",
]

logger = logging.getLogger(__name__)


def bundles_by_locale(bundles: Iterable[Bundle]) -> dict[str, tuple[Message, ...]]:
    """Group bundle messages by locale, concatenating bundles of one locale."""
    grouped: dict[str, list[Message]] = {}
    for bundle in bundles:
        grouped.setdefault(bundle.locale, []).extend(bundle.messages)
    return {locale: tuple(messages) for locale, messages in grouped.items()}


def localize_program(
    program: Program,
    locale: str,
    translations: Mapping[str, Message] | None = None,
) -> tuple[SourceFile, ...]:
    """Rewrite every file of program for one locale.

    Args:
        program: Files and module export tables
        locale: Locale being emitted
        translations: Translations by id; None for the source locale
    """
    return tuple(
        transform_source_file(
            source_file,
            TransformContext(
                locale=locale,
                symbols=program.symbols_for(source_file),
                translations=translations,
            ),
        )
        for source_file in program.files
    )


def _emit_locale(
    program: Program,
    locale: str,
    translations: Mapping[str, Message] | None,
    locale_dir: Path,
) -> list[Path]:
    written: list[Path] = []
    for localized in localize_program(program, locale, translations):
        path = locale_dir / localized.file_name
        write_text_file(path, serialize(localized), kind="output")
        written.append(path)
    logger.info("Emitted %d file(s) for locale '%s' to %s", len(written), locale, locale_dir)
    return written


def transform_output(
    translations_by_locale: Mapping[str, Sequence[Message]],
    config: Config,
    program: Program,
    *,
    source_messages: Iterable[ProgramMessage] | None = None,
) -> dict[str, list[Path]]:
    """Emit the localized program for every configured locale.

    The source locale is emitted with its original text; each target locale
    uses its translations, falling back to source text per message.

    Args:
        translations_by_locale: Translated messages per target locale
        config: Project configuration
        program: Files to localize
        source_messages: When given, translations are checked against these
            before anything is emitted

    Returns:
        Written paths per locale

    Raises:
        TranslationShapeError: When source_messages is given and a
            translation's placeholders diverge from its source message
        ConfigurationError: When a file uses the run-time configuration API
        LocalizeFileError: The first write failure, after every locale finished
    """
    if source_messages is not None:
        ensure_valid_translations(
            tuple(source_messages),
            (
                Bundle.from_messages(locale, messages)
                for locale, messages in translations_by_locale.items()
            ),
        )

    if config.output.locale_codes_module:
        write_locale_codes_module(
            config.source_locale,
            config.target_locales,
            config.resolve(config.output.locale_codes_module),
        )

    out_root = config.resolve(config.output.output_dir)
    lookups: dict[str, Mapping[str, Message] | None] = {config.source_locale: None}
    for locale in config.target_locales:
        lookups[locale] = make_message_id_map(translations_by_locale.get(locale, ()), locale=locale)

    return run_concurrently(
        {
            locale: (
                lambda loc=locale, lookup=lookup: _emit_locale(program, loc, lookup, out_root / loc)
            )
            for locale, lookup in lookups.items()
        }
    )
