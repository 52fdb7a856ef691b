"""Template-literal text handling.

Converts between cooked template text (what the AST stores) and template
body source (what sits between the backticks), and between TemplateLiteral
nodes and flat fragment sequences.

A fragment sequence alternates freely between text (str) and expressions;
make_template_literal() normalizes it into head/spans form, merging
adjacent text.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Iterable

from .ast import (
    Expression,
    Identifier,
    RawExpression,
    StringLiteral,
    TemplateLiteral,
    TemplateSpan,
)

__all__ = [
    "TemplateSyntaxError",
    "escape_template_text",
    "make_template_literal",
    "parse_template_body",
    "template_fragments",
    "template_strings",
]

type Fragment = str | Expression

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_UNICODE_ESCAPE_RE = re.compile(r"\{(?P<braced>[0-9a-fA-F]{1,6})\}|(?P<fixed>[0-9a-fA-F]{4})")

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LINE_TERMINATORS = frozenset({"\n", "\u2028", "\u2029"})


class TemplateSyntaxError(ValueError):
    """Template body is not well-formed (unterminated slot or bad escape)."""


def escape_template_text(text: str) -> str:
    """Escape cooked text for embedding between backticks.

    Example:
        >>> escape_template_text("cost: ${5}")
        'cost: \\\\${5}'
    """
    return (
        text.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("${", "\\${")
        .replace("\r", "\\r")
    )


def _read_escape(body: str, pos: int) -> tuple[str, int]:
    """Cook the escape sequence whose backslash is at body[pos]."""
    if pos + 1 >= len(body):
        msg = "Template body ends with a lone backslash"
        raise TemplateSyntaxError(msg)
    char = body[pos + 1]
    if char in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[char], pos + 2
    if char == "\r":
        # Line continuation; \r\n counts as one terminator.
        end = pos + 3 if body.startswith("\n", pos + 2) else pos + 2
        return "", end
    if char in _LINE_TERMINATORS:
        return "", pos + 2
    if char == "x":
        digits = body[pos + 2 : pos + 4]
        if len(digits) != 2 or not all(c in "0123456789abcdefABCDEF" for c in digits):
            msg = f"Invalid hex escape at offset {pos}"
            raise TemplateSyntaxError(msg)
        return chr(int(digits, 16)), pos + 4
    if char == "u":
        match = _UNICODE_ESCAPE_RE.match(body, pos + 2)
        if match is None:
            msg = f"Invalid unicode escape at offset {pos}"
            raise TemplateSyntaxError(msg)
        code_point = int(match.group("braced") or match.group("fixed"), 16)
        if code_point > 0x10FFFF:
            msg = f"Unicode escape out of range at offset {pos}"
            raise TemplateSyntaxError(msg)
        return chr(code_point), match.end()
    return char, pos + 2


def _skip_quoted(body: str, pos: int) -> int:
    """Index just past the string literal opening at body[pos]."""
    quote = body[pos]
    i = pos + 1
    while i < len(body):
        if body[i] == "\\":
            i += 2
            continue
        if body[i] == quote:
            return i + 1
        if quote == "`" and body.startswith("${", i):
            i = _find_slot_end(body, i + 2) + 1
            continue
        i += 1
    msg = f"Unterminated string in template expression at offset {pos}"
    raise TemplateSyntaxError(msg)


def _find_slot_end(body: str, start: int) -> int:
    """Index of the brace closing the ``${`` slot whose expression starts at start."""
    depth = 0
    i = start
    while i < len(body):
        char = body[i]
        if char in "'\"`":
            i = _skip_quoted(body, i)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    msg = f"Unterminated ${{...}} in template body at offset {start - 2}"
    raise TemplateSyntaxError(msg)


def _slot_expression(source: str) -> Expression:
    text = source.strip()
    if not text:
        msg = "Empty ${} in template body"
        raise TemplateSyntaxError(msg)
    if _IDENTIFIER_RE.fullmatch(text):
        return Identifier(text)
    return RawExpression(text)


def parse_template_body(body: str) -> TemplateLiteral:
    """Parse template body source into a TemplateLiteral.

    Escape sequences are cooked. Each ``${...}`` slot (brace-balanced,
    string-aware) becomes an Identifier when it is a bare name, otherwise a
    RawExpression holding the slot source verbatim.

    Raises:
        TemplateSyntaxError: On an unterminated slot or malformed escape

    Example:
        >>> parse_template_body("Hi <b>${name}</b>")
        TemplateLiteral(head='Hi <b>', spans=(TemplateSpan(expression=Identifier(name='name'), literal='</b>'),))
    """
    fragments: list[Fragment] = []
    text: list[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\":
            cooked, i = _read_escape(body, i)
            text.append(cooked)
        elif body.startswith("${", i):
            end = _find_slot_end(body, i + 2)
            fragments.append("".join(text))
            text = []
            fragments.append(_slot_expression(body[i + 2 : end]))
            i = end + 1
        else:
            text.append(char)
            i += 1
    fragments.append("".join(text))
    return make_template_literal(fragments)


def make_template_literal(fragments: Iterable[Fragment]) -> TemplateLiteral:
    """Build a TemplateLiteral, merging adjacent text fragments.

    Example:
        >>> make_template_literal(["a", "b", Identifier("x"), "c"])
        TemplateLiteral(head='ab', spans=(TemplateSpan(expression=Identifier(name='x'), literal='c'),))
    """
    head_parts: list[str] = []
    expressions: list[Expression] = []
    literals: list[list[str]] = []
    for fragment in fragments:
        if isinstance(fragment, str):
            (literals[-1] if literals else head_parts).append(fragment)
        else:
            expressions.append(fragment)
            literals.append([])
    spans = tuple(
        TemplateSpan(expression=expr, literal="".join(parts))
        for expr, parts in zip(expressions, literals, strict=True)
    )
    return TemplateLiteral(head="".join(head_parts), spans=spans)


def template_fragments(template: TemplateLiteral) -> tuple[Fragment, ...]:
    """Flatten a TemplateLiteral to head, expr, text, expr, text ..."""
    result: list[Fragment] = [template.head]
    for span in template.spans:
        result.append(span.expression)
        result.append(span.literal)
    return tuple(result)


def template_strings(node: TemplateLiteral | StringLiteral) -> tuple[str, ...]:
    """Static strings of a template: the text between expression slots."""
    if isinstance(node, StringLiteral):
        return (node.value,)
    return (node.head, *(span.literal for span in node.spans))
