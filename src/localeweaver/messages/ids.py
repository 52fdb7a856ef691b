"""Deterministic message identifiers.

A message's identifier is a function of its shape only: the static strings
of its template (text between expression slots) and whether it is a rich
(markup) template. Renaming variables or moving the call site leaves the
identifier unchanged, so existing translations keep matching.

Format: one prefix character ("h" rich, "s" plain) followed by the 64-bit
FNV-1a hash of the strings joined with the ASCII record separator, as 16
lowercase hex digits. Hashing runs over UTF-16 code units so identifiers
match those generated by JavaScript tooling for the same templates.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Sequence

from localeweaver.constants import HASH_DELIMITER, RICH_ID_PREFIX, STRING_ID_PREFIX
from localeweaver.syntax.template import parse_template_body, template_strings

from .model import ContentElement, ProgramMessage, render_template_body

__all__ = [
    "fnv1a64",
    "generate_message_id",
    "message_template_strings",
    "program_message_id",
]

_FNV_OFFSET_BASIS_64 = 0xCBF29CE484222325
_FNV_PRIME_64 = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF


def _utf16_code_units(text: str) -> Iterable[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def fnv1a64(text: str) -> str:
    """64-bit FNV-1a hash of text as 16 hex digits.

    Example:
        >>> fnv1a64("")
        'cbf29ce484222325'
    """
    value = _FNV_OFFSET_BASIS_64
    for unit in _utf16_code_units(text):
        value ^= unit
        value = (value * _FNV_PRIME_64) & _MASK_64
    return f"{value:016x}"


def generate_message_id(strings: Sequence[str], is_rich: bool) -> str:
    """Derive an identifier from a template's static strings.

    Args:
        strings: Template text between expression slots, in order
        is_rich: True for markup templates

    Returns:
        Stable identifier such as 'h3c44aff2d5f5ef6b'
    """
    prefix = RICH_ID_PREFIX if is_rich else STRING_ID_PREFIX
    return prefix + fnv1a64(HASH_DELIMITER.join(strings))


def message_template_strings(contents: Iterable[ContentElement]) -> tuple[str, ...]:
    """Static strings of a message's template.

    Placeholder payloads are template source and may hold ``${...}`` slots;
    rendering the contents back to a template body and splitting at the
    slots yields the same strings the source template has.
    """
    return template_strings(parse_template_body(render_template_body(contents)))


def program_message_id(message: ProgramMessage) -> str:
    """Shape-derived identifier of a ProgramMessage (ignores its name)."""
    return generate_message_id(message_template_strings(message.contents), message.is_rich)
