"""XLIFF 1.2 interchange format.

One <locale>.xlf file per target locale. Every source message becomes a
<trans-unit>; messages already translated also carry a <target>, so
rewriting the files never discards a translator's work.

https://docs.oasis-open.org/xliff/v1.2/os/xliff-core.html

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from lxml import etree

from localeweaver.config import Config, XliffConfig
from localeweaver.constants import (
    DESC_SEPARATOR,
    XLIFF_DATATYPE,
    XLIFF_EXTENSION,
    XLIFF_NAMESPACE,
    XLIFF_ORIGINAL,
    XLIFF_SCHEMA_LOCATION,
    XLIFF_VERSION,
    XSI_NAMESPACE,
)
from localeweaver.core.files import read_text_file, run_concurrently, write_text_file
from localeweaver.diagnostics import ConfigurationError, ErrorTemplate, InterchangeParseError
from localeweaver.messages import Bundle, Message, ProgramMessage, make_message_id_map

from .xml_utils import (
    append_contents,
    encoding_unit,
    get_non_empty_attribute_or_throw,
    get_one_element_by_local_name_or_throw,
    indent,
    iter_children_by_local_name,
    iter_elements_by_local_name,
    parse_document,
    read_contents,
    serialize_document,
)

__all__ = ["XliffFormatter", "encode_xliff", "parse_xliff"]

logger = logging.getLogger(__name__)


def _q(name: str) -> str:
    return etree.QName(XLIFF_NAMESPACE, name).text


def encode_xliff(
    source_locale: str,
    target_locale: str,
    source_messages: Iterable[ProgramMessage],
    target_messages: Iterable[Message] = (),
) -> str:
    """Serialize source messages, plus any existing translations, as XLIFF.

    Placeholders carry a zero-based id, unique within each <source> or
    <target>.

    Raises:
        InterchangeEncodeError: When a message holds characters XML cannot carry
    """
    translations = make_message_id_map(target_messages, locale=target_locale)

    xliff = etree.Element(_q("xliff"), nsmap={None: XLIFF_NAMESPACE, "xsi": XSI_NAMESPACE})
    xliff.set("version", XLIFF_VERSION)
    xliff.set(etree.QName(XSI_NAMESPACE, "schemaLocation").text, XLIFF_SCHEMA_LOCATION)
    indent(xliff)

    file = etree.SubElement(xliff, _q("file"))
    file.set("target-language", target_locale)
    file.set("source-language", source_locale)
    file.set("original", XLIFF_ORIGINAL)
    file.set("datatype", XLIFF_DATATYPE)
    indent(file)

    body = etree.SubElement(file, _q("body"))
    indent(body)

    for message in source_messages:
        unit = etree.SubElement(body, _q("trans-unit"))
        indent(unit, 1)
        with encoding_unit("trans-unit", message.name):
            unit.set("id", message.name)

            if message.desc_stack:
                note = etree.SubElement(unit, _q("note"))
                note.text = DESC_SEPARATOR.join(message.desc_stack)
                indent(unit, 1)

            source = etree.SubElement(unit, _q("source"))
            append_contents(source, message.contents, numbered=True, namespace=XLIFF_NAMESPACE)

            translation = translations.get(message.name)
            if translation is not None:
                indent(unit, 1)
                target = etree.SubElement(unit, _q("target"))
                append_contents(
                    target, translation.contents, numbered=True, namespace=XLIFF_NAMESPACE
                )
        indent(unit)
        indent(body)

    indent(file)
    indent(xliff)
    return serialize_document(xliff)


def parse_xliff(xml_text: str, *, source_path: str | None = None) -> Bundle:
    """Parse one XLIFF document into a Bundle of its translated units.

    Units without a <target> are not translated yet and are skipped.

    Raises:
        InterchangeParseError: On malformed XML, a missing or repeated
            <file>, a missing attribute, more than one <target> in a unit,
            or a bad content shape
    """
    try:
        root = parse_document(xml_text, source_path=source_path)
        file = get_one_element_by_local_name_or_throw(root, "file")
        locale = get_non_empty_attribute_or_throw(file, "target-language")
        messages: list[Message] = []
        for unit in iter_elements_by_local_name(file, "trans-unit"):
            name = get_non_empty_attribute_or_throw(unit, "id")
            targets = list(iter_children_by_local_name(unit, "target"))
            if not targets:
                continue
            if len(targets) > 1:
                raise InterchangeParseError(ErrorTemplate.target_ambiguous(name, len(targets)))
            contents = read_contents(targets[0], unit_tag="trans-unit", unit_name=name)
            messages.append(Message(name=name, contents=contents))
    except InterchangeParseError as exc:
        if source_path is None or exc.source_path is not None:
            raise
        raise exc.with_source_path(source_path) from exc
    return Bundle.from_messages(locale, messages)


class XliffFormatter:
    """Reads and writes <xliff_dir>/<locale>.xlf for every target locale."""

    def __init__(self, config: Config) -> None:
        if not isinstance(config.interchange, XliffConfig):
            raise ConfigurationError(
                ErrorTemplate.config_invalid(
                    f"expected interchange format 'xliff', got '{config.interchange.format}'"
                )
            )
        self.config = config
        self.xliff_config: XliffConfig = config.interchange

    @property
    def xliff_dir(self) -> Path:
        """Resolved directory holding the .xlf files."""
        return self.config.resolve(self.xliff_config.xliff_dir)

    def locale_path(self, locale: str) -> Path:
        """Path of one locale's XLIFF file."""
        return self.xliff_dir / f"{locale}{XLIFF_EXTENSION}"

    def read_translations(self) -> list[Bundle]:
        """Parse each target locale's file, concurrently.

        A missing file means nothing is translated yet for that locale and is
        skipped. Bundles are returned in target-locale order.

        Raises:
            InterchangeParseError: On the first malformed file
            LocalizeFileError: On the first file that exists but cannot be read
        """
        locales = self.config.target_locales
        results = run_concurrently(
            {locale: (lambda loc=locale: self._read_locale(loc)) for locale in locales}
        )
        bundles = [bundle for locale in locales if (bundle := results[locale]) is not None]
        logger.info("Read XLIFF translations for %d of %d locale(s)", len(bundles), len(locales))
        return bundles

    def _read_locale(self, locale: str) -> Bundle | None:
        path = self.locale_path(locale)
        try:
            xml_text = read_text_file(path)
        except FileNotFoundError:
            logger.debug("No XLIFF file for locale '%s' at %s; skipping", locale, path)
            return None
        return parse_xliff(xml_text, source_path=str(path))

    def write_output(
        self,
        source_messages: Sequence[ProgramMessage],
        translations: Mapping[str, Sequence[Message]] | None = None,
    ) -> None:
        """Write one XLIFF file per target locale.

        Each locale is written independently: a failure for one locale does
        not stop the others, and files already written stay on disk.

        Raises:
            LocalizeFileError: The first failure, after every write finished
        """
        existing = translations or {}

        def write_locale(locale: str) -> None:
            text = encode_xliff(
                self.config.source_locale,
                locale,
                source_messages,
                existing.get(locale, ()),
            )
            write_text_file(self.locale_path(locale), text, kind="XLIFF")

        run_concurrently(
            {locale: (lambda loc=locale: write_locale(loc)) for locale in self.config.target_locales}
        )
        logger.info(
            "Wrote %d message(s) to XLIFF for %d locale(s)",
            len(source_messages),
            len(self.config.target_locales),
        )
