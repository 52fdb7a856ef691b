"""Shape analysis of translation call sites.

A translation request is ``msg(template, options?)`` where template is one
of:

    "Hello"                          plain string
    `Hello`                          plain template
    html`Hello <b>World</b>`         rich template
    (name) => html`Hello ${name}`    parameterized rich template
    (name) => `Hello ${name}`        parameterized plain template

and options is an object literal with optional ``id`` (string), ``desc``
(string) and ``args`` (array, one expression per template parameter).

Malformed shapes mean extraction accepted something the transform cannot
rewrite; they raise TransformContractError.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from localeweaver.constants import RICH_TEMPLATE_TAG
from localeweaver.diagnostics import ErrorTemplate, TransformContractError
from localeweaver.enums import ApiTag
from localeweaver.messages import generate_message_id
from localeweaver.syntax import (
    ArrayLiteral,
    ArrowFunction,
    CallExpression,
    Expression,
    Identifier,
    ObjectLiteral,
    StringLiteral,
    SymbolTable,
    TaggedTemplate,
    TemplateLiteral,
    template_strings,
)

__all__ = [
    "MsgOptions",
    "TemplateInfo",
    "extract_options",
    "extract_template",
    "is_msg_call",
    "is_rich_template",
    "template_message_id",
]

_OPTION_NAMES = frozenset({"id", "desc", "args"})


@dataclass(frozen=True, slots=True)
class TemplateInfo:
    """Template argument of a translation request.

    Attributes:
        template: The literal itself (for rich templates, the untagged literal)
        is_rich: True for html-tagged templates
        params: Parameter names when the argument is an arrow function
    """

    template: TemplateLiteral | StringLiteral
    is_rich: bool
    params: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class MsgOptions:
    """Options argument of a translation request."""

    id: str | None = None
    desc: str | None = None
    args: tuple[Expression, ...] | None = None


def is_rich_template(node: object) -> bool:
    """True for a template tagged with the markup tag identifier."""
    return (
        isinstance(node, TaggedTemplate)
        and isinstance(node.tag, Identifier)
        and node.tag.name == RICH_TEMPLATE_TAG
    )


def is_msg_call(node: object, symbols: SymbolTable) -> bool:
    """True for a call whose callee resolves to the tagged msg export."""
    return isinstance(node, CallExpression) and symbols.has_tag(node.callee, ApiTag.MSG)


def _extract_literal(node: Expression) -> TemplateInfo | None:
    match node:
        case StringLiteral():
            return TemplateInfo(template=node, is_rich=False)
        case TemplateLiteral():
            return TemplateInfo(template=node, is_rich=False)
        case TaggedTemplate() if is_rich_template(node):
            return TemplateInfo(template=node.template, is_rich=True)
        case _:
            return None


def extract_template(node: Expression | None) -> TemplateInfo:
    """Classify a translation request's template argument.

    Raises:
        TransformContractError: When the argument is missing or not one of
            the accepted template forms
    """
    if node is None:
        raise TransformContractError(
            ErrorTemplate.template_argument_invalid("msg() called without a template")
        )
    if isinstance(node, ArrowFunction):
        info = _extract_literal(node.body)
        if info is None:
            raise TransformContractError(
                ErrorTemplate.template_argument_invalid(
                    f"arrow function body is {type(node.body).__name__}, expected a template"
                )
            )
        params = tuple(param.name.name for param in node.parameters)
        return TemplateInfo(template=info.template, is_rich=info.is_rich, params=params)
    info = _extract_literal(node)
    if info is None:
        raise TransformContractError(
            ErrorTemplate.template_argument_invalid(
                f"got {type(node).__name__}, expected a string, template or arrow function"
            )
        )
    return info


def _static_string(node: Expression, option: str) -> str:
    match node:
        case StringLiteral(value=value):
            return value
        case TemplateLiteral(head=head, spans=()):
            return head
        case _:
            raise TransformContractError(
                ErrorTemplate.options_argument_invalid(f"'{option}' must be a static string")
            )


def extract_options(node: Expression | None) -> MsgOptions:
    """Read the options object of a translation request.

    Raises:
        TransformContractError: When options is not an object literal of
            known, statically typed properties
    """
    if node is None:
        return MsgOptions()
    if not isinstance(node, ObjectLiteral):
        raise TransformContractError(
            ErrorTemplate.options_argument_invalid(
                f"got {type(node).__name__}, expected an object literal"
            )
        )
    msg_id: str | None = None
    desc: str | None = None
    args: tuple[Expression, ...] | None = None
    for prop in node.properties:
        name = prop.name.name
        if name not in _OPTION_NAMES:
            raise TransformContractError(
                ErrorTemplate.options_argument_invalid(f"unknown option '{name}'")
            )
        if name == "id":
            msg_id = _static_string(prop.value, name)
        elif name == "desc":
            desc = _static_string(prop.value, name)
        elif isinstance(prop.value, ArrayLiteral):
            args = prop.value.elements
        else:
            raise TransformContractError(
                ErrorTemplate.options_argument_invalid("'args' must be an array literal")
            )
    return MsgOptions(id=msg_id, desc=desc, args=args)


def template_message_id(info: TemplateInfo) -> str:
    """Shape-derived identifier of a source template."""
    return generate_message_id(template_strings(info.template), info.is_rich)
