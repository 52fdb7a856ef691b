"""Message and bundle data model.

Values flowing between extraction, the interchange codecs and the transform
engine. All types are frozen; nothing here performs I/O.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TypeIs

from localeweaver.syntax.template import escape_template_text

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Content
    "Placeholder",
    "ContentElement",
    "MessageContent",
    # Messages
    "ProgramMessage",
    "Message",
    "Bundle",
    # Helpers
    "make_message_id_map",
    "render_template_body",
    "rendered_text",
    "placeholders_of",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Untranslatable fragment of message content.

    The payload is raw template source (markup, ``${expr}`` slots) and is
    reproduced byte-for-byte in every translation. Only its position within
    the surrounding text may change.
    """

    untranslatable: str

    @staticmethod
    def guard(elem: object) -> TypeIs[Placeholder]:
        """Type guard for Placeholder."""
        return isinstance(elem, Placeholder)


type ContentElement = str | Placeholder
type MessageContent = tuple[ContentElement, ...]


def _require_name(name: str, kind: str) -> None:
    if not name:
        msg = f"{kind} name must be a non-empty string"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ProgramMessage:
    """Message as found in application source.

    Produced by extraction, consumed by the codecs' write paths.

    Attributes:
        name: Explicit id override or shape-derived identifier
        contents: Text runs and placeholders in rendering order
        desc_stack: Nested description labels, outermost first
        is_rich: True when the template may contain markup placeholders
        params: Parameter names when the template is a closure
    """

    name: str
    contents: MessageContent
    desc_stack: tuple[str, ...] = ()
    is_rich: bool = False
    params: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        _require_name(self.name, "ProgramMessage")


@dataclass(frozen=True, slots=True)
class Message:
    """Message as found in a translation bundle.

    Created by parsing an interchange file, never mutated afterward.
    """

    name: str
    contents: MessageContent

    def __post_init__(self) -> None:
        _require_name(self.name, "Message")


@dataclass(frozen=True, slots=True)
class Bundle:
    """One locale's complete set of translated messages.

    Invariant: at most one Message per name. Construct through
    from_messages() to apply the duplicate policy; direct construction with
    duplicate names raises ValueError.

    Attributes:
        locale: Locale code exactly as declared in the interchange file
        messages: Messages in document order
    """

    locale: str
    messages: tuple[Message, ...]
    _by_name: dict[str, Message] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.locale:
            msg = "Bundle locale must be a non-empty string"
            raise ValueError(msg)
        by_name: dict[str, Message] = {}
        for message in self.messages:
            if message.name in by_name:
                msg = f"Duplicate message '{message.name}' in bundle '{self.locale}'"
                raise ValueError(msg)
            by_name[message.name] = message
        object.__setattr__(self, "_by_name", by_name)

    @classmethod
    def from_messages(cls, locale: str, messages: Iterable[Message]) -> Bundle:
        """Build a bundle, keeping the first occurrence of each name.

        Later duplicates are dropped with a warning.
        """
        return cls(locale=locale, messages=tuple(make_message_id_map(messages, locale=locale).values()))

    def get(self, name: str) -> Message | None:
        """Look up a message by identifier."""
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    @property
    def names(self) -> tuple[str, ...]:
        """Message identifiers in document order."""
        return tuple(self._by_name)

    def as_mapping(self) -> Mapping[str, Message]:
        """Read-only name -> Message view for O(1) lookup."""
        return dict(self._by_name)


def make_message_id_map(
    messages: Iterable[Message],
    *,
    locale: str | None = None,
) -> dict[str, Message]:
    """Index messages by name, first occurrence wins.

    Args:
        messages: Messages in document order
        locale: Locale used in the duplicate warning, if known

    Returns:
        Insertion-ordered mapping from name to Message
    """
    by_name: dict[str, Message] = {}
    for message in messages:
        if message.name in by_name:
            logger.warning(
                "Duplicate message '%s'%s; keeping the first occurrence",
                message.name,
                f" in locale '{locale}'" if locale else "",
            )
            continue
        by_name[message.name] = message
    return by_name


def render_template_body(contents: Iterable[ContentElement]) -> str:
    """Join contents into the body of a template literal.

    Text runs are escaped for literal embedding; placeholder payloads are
    already template source and are kept verbatim.
    """
    return "".join(
        escape_template_text(element) if isinstance(element, str) else element.untranslatable
        for element in contents
    )


def rendered_text(contents: Iterable[ContentElement]) -> str:
    """Concatenate contents without escaping (what a translator reads)."""
    return "".join(
        element if isinstance(element, str) else element.untranslatable for element in contents
    )


def placeholders_of(contents: Iterable[ContentElement]) -> tuple[str, ...]:
    """Placeholder payloads in order of appearance."""
    return tuple(element.untranslatable for element in contents if isinstance(element, Placeholder))
