"""XLB interchange format.

One <localizationbundle locale="..."> per file:

    <?xml version="1.0" encoding="UTF-8"?>
    <localizationbundle locale="en">
      <messages>
        <msg name="greeting" desc="Home page">Hello <ph>&lt;b&gt;</ph>World<ph>&lt;/b&gt;</ph></msg>
      </messages>
    </localizationbundle>

The source-locale file is written for translators; translated files (any
number, one locale each) are found by glob.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from lxml import etree

from localeweaver.config import Config, XlbConfig
from localeweaver.constants import DESC_SEPARATOR
from localeweaver.core.files import read_text_file, run_concurrently, write_text_file
from localeweaver.diagnostics import ConfigurationError, ErrorTemplate, InterchangeParseError
from localeweaver.messages import Bundle, Message, ProgramMessage

from .xml_utils import (
    append_contents,
    encoding_unit,
    get_non_empty_attribute_or_throw,
    get_one_element_by_local_name_or_throw,
    indent,
    iter_elements_by_local_name,
    parse_document,
    read_contents,
    serialize_document,
)

__all__ = ["XlbFormatter", "encode_xlb", "parse_xlb"]

logger = logging.getLogger(__name__)


def encode_xlb(source_locale: str, messages: Iterable[ProgramMessage]) -> str:
    """Serialize source messages as an XLB document.

    Raises:
        InterchangeEncodeError: When a message holds characters XML cannot carry
    """
    bundle = etree.Element("localizationbundle")
    bundle.set("locale", source_locale)
    indent(bundle, 1)
    messages_node = etree.SubElement(bundle, "messages")
    for message in messages:
        indent(messages_node, 2)
        msg = etree.SubElement(messages_node, "msg")
        with encoding_unit("msg", message.name):
            msg.set("name", message.name)
            if message.desc_stack:
                msg.set("desc", DESC_SEPARATOR.join(message.desc_stack))
            append_contents(msg, message.contents)
    indent(messages_node, 1)
    indent(bundle)
    return serialize_document(bundle)


def parse_xlb(xml_text: str, *, source_path: str | None = None) -> Bundle:
    """Parse one XLB document into a Bundle.

    Raises:
        InterchangeParseError: On malformed XML, a missing or repeated
            <localizationbundle>, a missing attribute or a bad unit shape
    """
    try:
        root = parse_document(xml_text, source_path=source_path)
        bundle = get_one_element_by_local_name_or_throw(root, "localizationbundle")
        locale = get_non_empty_attribute_or_throw(bundle, "locale")
        messages: list[Message] = []
        for msg in iter_elements_by_local_name(root, "msg"):
            name = get_non_empty_attribute_or_throw(msg, "name")
            contents = read_contents(msg, unit_tag="msg", unit_name=name)
            messages.append(Message(name=name, contents=contents))
    except InterchangeParseError as exc:
        if source_path is None or exc.source_path is not None:
            raise
        raise exc.with_source_path(source_path) from exc
    return Bundle.from_messages(locale, messages)


class XlbFormatter:
    """Reads and writes XLB files for one configuration."""

    def __init__(self, config: Config) -> None:
        if not isinstance(config.interchange, XlbConfig):
            raise ConfigurationError(
                ErrorTemplate.config_invalid(
                    f"expected interchange format 'xlb', got '{config.interchange.format}'"
                )
            )
        self.config = config
        self.xlb_config: XlbConfig = config.interchange

    def translation_files(self) -> list[Path]:
        """Files matching the translations glob, sorted for stable ordering.

        A relative pattern is matched from the base directory; an absolute
        one from its own anchor.
        """
        pattern = Path(self.xlb_config.translations_glob)
        if pattern.is_absolute():
            root = Path(pattern.anchor)
            pattern = pattern.relative_to(root)
        else:
            root = self.config.base_dir
        return sorted(root.glob(str(pattern)))

    def read_translations(self) -> list[Bundle]:
        """Parse every translated XLB file, concurrently.

        No filtering by target locale: each file yields one Bundle.

        Raises:
            InterchangeParseError: On the first malformed file
            LocalizeFileError: On the first unreadable file
        """
        files = self.translation_files()
        results = run_concurrently({path: (lambda p=path: self._read_file(p)) for path in files})
        bundles = [results[path] for path in files]
        logger.info("Read %d XLB translation file(s)", len(bundles))
        return bundles

    def _read_file(self, path: Path) -> Bundle:
        return parse_xlb(read_text_file(path), source_path=str(path))

    def write_output(
        self,
        source_messages: Sequence[ProgramMessage],
        translations: Mapping[str, Sequence[Message]] | None = None,
    ) -> None:
        """Write the source-locale XLB file.

        Translations are not written back: XLB files flow one way, from
        translators to the build.

        Raises:
            LocalizeFileError: When the directory or file cannot be written
        """
        path = self.config.resolve(self.xlb_config.output_file)
        write_text_file(path, encode_xlb(self.config.source_locale, source_messages), kind="XLB")
        logger.info("Wrote %d message(s) to %s", len(source_messages), path)
