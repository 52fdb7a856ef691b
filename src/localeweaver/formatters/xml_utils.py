"""lxml helpers shared by the XLB and XLIFF codecs.

Reading is namespace-agnostic: elements are matched by local name, so a
document with or without the XLIFF namespace parses the same way.

Writing indents by appending whitespace text ("\\n" plus two spaces per
level) at fixed points, so unchanged input always serializes to identical
bytes.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from lxml import etree

from localeweaver.constants import XML_DECLARATION, XML_INDENT_UNIT
from localeweaver.diagnostics import ErrorTemplate, InterchangeEncodeError, InterchangeParseError
from localeweaver.messages import ContentElement, MessageContent, Placeholder

__all__ = [
    "append_contents",
    "append_text",
    "encoding_unit",
    "get_non_empty_attribute_or_throw",
    "get_one_element_by_local_name_or_throw",
    "indent",
    "iter_children_by_local_name",
    "iter_elements_by_local_name",
    "local_name",
    "parse_document",
    "read_contents",
    "serialize_document",
]

PLACEHOLDER_TAG = "ph"


def _make_parser() -> etree.XMLParser:
    # Entities are never expanded and nothing is fetched over the network.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        recover=False,
        remove_blank_text=False,
    )


def parse_document(xml_text: str, *, source_path: str | None = None) -> etree._Element:
    """Parse an interchange document and return its root element.

    Raises:
        InterchangeParseError: When the document is not well-formed
    """
    try:
        return etree.fromstring(xml_text.encode("utf-8"), parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        raise InterchangeParseError(
            ErrorTemplate.xml_malformed(str(exc), source_path), source_path=source_path
        ) from exc


def local_name(element: etree._Element) -> str | None:
    """Tag without namespace, or None for comments and processing instructions."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def iter_elements_by_local_name(root: etree._Element, name: str) -> Iterator[etree._Element]:
    """Root and all descendant elements with the given local name, in document order."""
    for element in root.iter():
        if local_name(element) == name:
            yield element


def iter_children_by_local_name(parent: etree._Element, name: str) -> Iterator[etree._Element]:
    """Direct child elements with the given local name."""
    for child in parent:
        if local_name(child) == name:
            yield child


def get_one_element_by_local_name_or_throw(root: etree._Element, name: str) -> etree._Element:
    """The single element with the given local name anywhere in the document.

    Raises:
        InterchangeParseError: When there is none or more than one
    """
    found = list(iter_elements_by_local_name(root, name))
    if not found:
        raise InterchangeParseError(ErrorTemplate.element_missing(name))
    if len(found) > 1:
        raise InterchangeParseError(ErrorTemplate.element_ambiguous(name, len(found)))
    return found[0]


def get_non_empty_attribute_or_throw(element: etree._Element, attribute: str) -> str:
    """Value of a required attribute.

    Raises:
        InterchangeParseError: When the attribute is absent or empty
    """
    value = element.get(attribute)
    if not value:
        raise InterchangeParseError(
            ErrorTemplate.attribute_missing(local_name(element) or str(element.tag), attribute)
        )
    return value


def _describe_node(node: etree._Element) -> str:
    if isinstance(node, etree._Comment):
        return "comment"
    if isinstance(node, etree._ProcessingInstruction):
        return f"processing instruction <?{node.target}?>"
    if isinstance(node, etree._Entity):
        return f"entity reference &{node.name};"
    return f"element <{local_name(node)}>"


def read_contents(
    element: etree._Element,
    *,
    unit_tag: str,
    unit_name: str,
) -> MessageContent:
    """Message content held by a unit or target element.

    Text becomes text runs and each <ph> a Placeholder. A <ph> must hold
    exactly one text node; any other node kind is an error.

    Raises:
        InterchangeParseError: Naming the unit on any shape violation
    """
    contents: list[ContentElement] = []
    if element.text:
        contents.append(element.text)
    for child in element:
        if local_name(child) != PLACEHOLDER_TAG:
            raise InterchangeParseError(
                ErrorTemplate.unexpected_node(unit_tag, unit_name, _describe_node(child))
            )
        if len(child) or not child.text:
            raise InterchangeParseError(ErrorTemplate.placeholder_shape(unit_tag, unit_name))
        contents.append(Placeholder(child.text))
        if child.tail:
            contents.append(child.tail)
    return tuple(contents)


def append_text(node: etree._Element, text: str) -> None:
    """Append a text node after node's current last child."""
    if len(node):
        last = node[-1]
        last.tail = (last.tail or "") + text
    else:
        node.text = (node.text or "") + text


def indent(node: etree._Element, level: int = 0) -> None:
    """Append a newline plus level indentation units to node."""
    append_text(node, "\n" + XML_INDENT_UNIT * level)


def append_contents(
    element: etree._Element,
    contents: Iterable[ContentElement],
    *,
    numbered: bool = False,
    namespace: str | None = None,
) -> None:
    """Append message content as text and <ph> children.

    Args:
        element: Unit, source or target element to fill
        contents: Text runs and placeholders in order
        numbered: Give each <ph> a zero-based id attribute
        namespace: Namespace for created <ph> elements
    """
    tag = etree.QName(namespace, PLACEHOLDER_TAG).text if namespace else PLACEHOLDER_TAG
    index = 0
    for content in contents:
        if isinstance(content, str):
            append_text(element, content)
            continue
        ph = etree.SubElement(element, tag)
        if numbered:
            ph.set("id", str(index))
            index += 1
        ph.text = content.untranslatable


def serialize_document(root: etree._Element) -> str:
    """XML declaration, newline, root element, trailing newline."""
    return f"{XML_DECLARATION}\n{etree.tostring(root, encoding='unicode')}\n"


@contextmanager
def encoding_unit(unit_tag: str, unit_name: str) -> Iterator[None]:
    """Scope for writing one unit.

    lxml rejects strings XML 1.0 cannot carry (control characters, NUL)
    with ValueError; inside this scope that becomes an error naming the unit.

    Raises:
        InterchangeEncodeError: When the unit's text cannot be written
    """
    try:
        yield
    except ValueError as exc:
        raise InterchangeEncodeError(
            ErrorTemplate.character_invalid(unit_tag, unit_name, str(exc))
        ) from exc
