"""Per-locale rewrite of application source.

LocalizeTransformer walks one SourceFile and removes every trace of the
localization library:

- msg(...) calls become the locale's literal text (translated when a
  translation exists, the source template otherwise)
- html templates are flattened: literal, template and nested html slots
  are inlined into the enclosing template text
- imports of the localization module are dropped
- configureTransformLocalization(...) becomes {getLocale: () => "<locale>"}
- configureLocalization(...) is rejected
- Localized(Base) becomes Base
- LOCALE_STATUS_EVENT becomes its string value

The pass is a pure function of the file and a read-only TransformContext.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, replace

from localeweaver.constants import (
    GET_LOCALE_PROPERTY,
    LOCALE_STATUS_EVENT_NAME,
    LOCALE_STATUS_EVENT_VALUE,
    RICH_TEMPLATE_TAG,
)
from localeweaver.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    TransformContractError,
)
from localeweaver.enums import ApiTag
from localeweaver.messages import Message, render_template_body
from localeweaver.syntax import (
    ArrowFunction,
    ASTTransformer,
    CallExpression,
    Expression,
    Identifier,
    ImportDeclaration,
    MethodDeclaration,
    ObjectLiteral,
    Parameter,
    PropertyAccess,
    PropertyAssignment,
    SourceFile,
    Statement,
    StringLiteral,
    SymbolTable,
    TaggedTemplate,
    TemplateLiteral,
    TemplateSpan,
    TemplateSyntaxError,
    VariableDeclaration,
    make_template_literal,
    parse_template_body,
    serialize,
)

from .analysis import (
    extract_options,
    extract_template,
    is_msg_call,
    is_rich_template,
    template_message_id,
)

__all__ = [
    "Dynamic",
    "Inlined",
    "LocalizeTransformer",
    "TransformContext",
    "transform_source_file",
]

logger = logging.getLogger(__name__)

type Fragment = str | Expression


@dataclass(frozen=True, slots=True)
class TransformContext:
    """Read-only inputs of one locale's pass over one file.

    Attributes:
        locale: Locale being emitted
        symbols: Symbol table of the file being transformed
        translations: Translations by message id; None for the source locale
    """

    locale: str
    symbols: SymbolTable
    translations: Mapping[str, Message] | None = None

    @property
    def file_name(self) -> str:
        """Name of the file being transformed."""
        return self.symbols.source_file.file_name


@dataclass(frozen=True, slots=True)
class Inlined:
    """Slot reduced to content that merges into the parent template."""

    fragments: tuple[Fragment, ...]


@dataclass(frozen=True, slots=True)
class Dynamic:
    """Slot that stays a live ${...} expression."""

    expression: Expression


class LocalizeTransformer(ASTTransformer):
    """Rewrites one file for one locale.

    Example:
        >>> context = TransformContext("es", program.symbols_for(source_file), translations)
        >>> localized = LocalizeTransformer(context).transform(source_file)
    """

    __slots__ = ("_scopes", "context")

    def __init__(self, context: TransformContext, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.context = context
        self._scopes: list[SymbolTable] = [context.symbols]

    @property
    def symbols(self) -> SymbolTable:
        """Symbol table of the innermost scope being transformed."""
        return self._scopes[-1]

    @contextmanager
    def _scope(
        self, parameters: Iterable[Parameter], statements: Iterable[Statement] = ()
    ) -> Iterator[None]:
        self._scopes.append(self.symbols.child_scope(parameters=parameters, statements=statements))
        try:
            yield
        finally:
            self._scopes.pop()

    # ------------------------------------------------------------------
    # Node recognitions
    # ------------------------------------------------------------------

    def visit_CallExpression(self, node: CallExpression) -> Expression:
        if is_msg_call(node, self.symbols):
            return self._replace_msg_call(node)
        tags = self.symbols.tags_of(node.callee)
        if ApiTag.CONFIGURE_TRANSFORM in tags:
            return ObjectLiteral(
                (
                    PropertyAssignment(
                        Identifier(GET_LOCALE_PROPERTY),
                        ArrowFunction((), StringLiteral(self.context.locale)),
                    ),
                )
            )
        if ApiTag.CONFIGURE_RUNTIME in tags:
            raise ConfigurationError(ErrorTemplate.runtime_config_in_transform(self.context.file_name))
        if ApiTag.LOCALIZED in tags:
            if len(node.arguments) != 1:
                raise TransformContractError(ErrorTemplate.localized_arity(len(node.arguments)))
            return self.visit(node.arguments[0])  # type: ignore[return-value]
        return self.generic_visit(node)  # type: ignore[return-value]

    def visit_TaggedTemplate(self, node: TaggedTemplate) -> Expression:
        if is_rich_template(node):
            with self._depth_guard:
                fragments = self._flatten(node.template, rich=True)
            return replace(node, template=make_template_literal(fragments))
        return self.generic_visit(node)  # type: ignore[return-value]

    def visit_ImportDeclaration(self, node: ImportDeclaration) -> ImportDeclaration | None:
        if self.symbols.imports_localize_module(node):
            logger.debug(
                "Removing import of '%s' from %s", node.module_specifier, self.context.file_name
            )
            return None
        return node

    def visit_VariableDeclaration(self, node: VariableDeclaration) -> VariableDeclaration | None:
        # Aliases of the API (const t = msg;) go away with the import.
        if not node.exported and self.symbols.is_alias(node.name.name):
            export = self.symbols.resolve_declaration(node.name)
            if export is not None and export.tags & frozenset(ApiTag):
                return None
        return self.generic_visit(node)  # type: ignore[return-value]

    def visit_MethodDeclaration(self, node: MethodDeclaration) -> MethodDeclaration:
        with self._scope(node.parameters, node.body):
            return self.generic_visit(node)  # type: ignore[return-value]

    def visit_ArrowFunction(self, node: ArrowFunction) -> ArrowFunction:
        with self._scope(node.parameters):
            return self.generic_visit(node)  # type: ignore[return-value]

    def visit_Identifier(self, node: Identifier) -> Expression:
        return self._status_event_literal(node) or node

    def visit_PropertyAccess(self, node: PropertyAccess) -> Expression:
        literal = self._status_event_literal(node)
        if literal is not None:
            return literal
        return self.generic_visit(node)  # type: ignore[return-value]

    def _status_event_literal(self, node: Identifier | PropertyAccess) -> StringLiteral | None:
        export = self.symbols.resolve_declaration(node)
        if (
            export is not None
            and export.name == LOCALE_STATUS_EVENT_NAME
            and self.symbols.program.is_localize_module(export.module)
        ):
            return StringLiteral(LOCALE_STATUS_EVENT_VALUE)
        return None

    # ------------------------------------------------------------------
    # msg() rewrite
    # ------------------------------------------------------------------

    def _replace_msg_call(self, call: CallExpression) -> Expression:
        template_arg = call.arguments[0] if call.arguments else None
        options_arg = call.arguments[1] if len(call.arguments) > 1 else None

        info = extract_template(template_arg)
        options = extract_options(options_arg)
        msg_id = options.id if options.id is not None else template_message_id(info)

        template: TemplateLiteral | StringLiteral = info.template
        if self.context.translations is not None:
            translation = self.context.translations.get(msg_id)
            if translation is not None:
                template = self._translation_template(msg_id, translation)
            else:
                logger.debug(
                    "No '%s' translation for message '%s'; using source text",
                    self.context.locale,
                    msg_id,
                )

        if isinstance(template_arg, ArrowFunction) and isinstance(template, TemplateLiteral):
            if template.spans:
                if info.params is None or options.args is None:
                    raise TransformContractError(
                        ErrorTemplate.template_argument_invalid(
                            f"parameterized message '{msg_id}' has no args option"
                        )
                    )
                template = self._substitute_parameters(
                    template, dict(zip(info.params, options.args, strict=False))
                )

        if isinstance(template, StringLiteral):
            if info.is_rich:
                raise TransformContractError(ErrorTemplate.rich_template_is_string())
            return template

        with self._depth_guard:
            literal = make_template_literal(self._flatten(template, rich=info.is_rich))
        if info.is_rich:
            return TaggedTemplate(Identifier(RICH_TEMPLATE_TAG), literal)
        if not literal.has_substitutions:
            return StringLiteral(literal.head)
        return literal

    def _translation_template(self, msg_id: str, translation: Message) -> TemplateLiteral:
        body = render_template_body(translation.contents)
        try:
            return parse_template_body(body)
        except TemplateSyntaxError as exc:
            raise TransformContractError(
                ErrorTemplate.template_argument_invalid(
                    f"'{self.context.locale}' translation of '{msg_id}' is not a valid "
                    f"template: {exc}"
                )
            ) from exc

    def _substitute_parameters(
        self,
        template: TemplateLiteral,
        values: Mapping[str, Expression],
    ) -> TemplateLiteral:
        """Replace each parameter slot with its argument expression."""
        spans: list[TemplateSpan] = []
        for span in template.spans:
            if not isinstance(span.expression, Identifier):
                raise TransformContractError(
                    ErrorTemplate.slot_not_parameter(serialize(span.expression))
                )
            value = values.get(span.expression.name)
            if value is None:
                raise TransformContractError(ErrorTemplate.parameter_unbound(span.expression.name))
            spans.append(TemplateSpan(expression=value, literal=span.literal))
        return TemplateLiteral(head=template.head, spans=tuple(spans))

    # ------------------------------------------------------------------
    # Flattening
    # ------------------------------------------------------------------

    def _reduce(self, expression: Expression, *, rich: bool) -> Inlined | Dynamic:
        """Classify a slot expression as inlinable content or a live slot."""
        match expression:
            case StringLiteral(value=value):
                return Inlined((value,))
            case TemplateLiteral():
                return Inlined(self._flatten(expression, rich=False))
            case TaggedTemplate() if rich and is_rich_template(expression):
                return Inlined(self._flatten(expression.template, rich=True))
            case _:
                return Dynamic(expression)

    def _flatten(self, template: TemplateLiteral, *, rich: bool) -> tuple[Fragment, ...]:
        """Fragments of template with every reducible slot inlined.

        A slot that does not reduce as written is transformed first (a
        msg() call becomes a literal) and then given a second chance.
        """
        fragments: list[Fragment] = [template.head]
        with self._depth_guard:
            for span in template.spans:
                reduced = self._reduce(span.expression, rich=rich)
                if isinstance(reduced, Dynamic):
                    transformed: Expression = self.visit(span.expression)  # type: ignore[assignment]
                    reduced = self._reduce(transformed, rich=rich)
                match reduced:
                    case Inlined(fragments=inner):
                        fragments.extend(inner)
                    case Dynamic(expression=expression):
                        fragments.append(expression)
                fragments.append(span.literal)
        return tuple(fragments)


def transform_source_file(source_file: SourceFile, context: TransformContext) -> SourceFile:
    """Rewrite one file for the context's locale.

    Raises:
        ConfigurationError: When the file calls configureLocalization()
        TransformContractError: When a call site violates the msg() shape
    """
    result = LocalizeTransformer(context).transform(source_file)
    if not isinstance(result, SourceFile):
        msg = f"Transform of {source_file.file_name} produced {type(result).__name__}"
        raise TransformContractError(msg)
    return result
