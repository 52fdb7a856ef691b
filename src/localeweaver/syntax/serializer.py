"""Serialize the ECMAScript AST back to source text.

Output is deterministic: the same tree always prints the same text, so
per-locale outputs can be diffed and cached. Formatting is fixed (two-space
indentation, double-quoted strings, single-quoted module specifiers) rather
than preserved from the input.

Python 3.13+.
"""

import json

from localeweaver.constants import MAX_DEPTH

from .ast import (
    ArrayLiteral,
    ArrowFunction,
    ASTNode,
    CallExpression,
    ClassDeclaration,
    Expression,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    MethodDeclaration,
    NumericLiteral,
    ObjectLiteral,
    Parameter,
    PropertyAccess,
    RawExpression,
    ReturnStatement,
    SourceFile,
    Statement,
    StringLiteral,
    TaggedTemplate,
    TemplateLiteral,
    VariableDeclaration,
)
from .template import escape_template_text
from .visitor import ASTVisitor

__all__ = ["ECMAScriptSerializer", "SerializationError", "serialize"]

_INDENT: str = "  "


class SerializationError(ValueError):
    """Raised when a node cannot be printed as valid source."""


def _quote_module_specifier(specifier: str) -> str:
    escaped = specifier.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _needs_parens_as_operand(expr: Expression) -> bool:
    """True when expr must be parenthesized as a callee or member base."""
    return isinstance(expr, (ArrowFunction, ObjectLiteral, NumericLiteral, RawExpression))


class ECMAScriptSerializer(ASTVisitor):
    """Converts AST back to ECMAScript source.

    Thread-safe serializer with no mutable instance state beyond the depth
    guard. All output is built in a list local to the serialize() call.

    Usage:
        >>> from localeweaver.syntax import serialize, StringLiteral
        >>> serialize(StringLiteral("Hola"))
        '"Hola"'
    """

    def serialize(self, node: ASTNode) -> str:
        """Serialize a SourceFile, statement or expression.

        A SourceFile ends with a newline unless it has no statements.

        Raises:
            SerializationError: If node is not printable on its own
            DepthLimitExceededError: If nesting exceeds the depth limit
        """
        output: list[str] = []
        match node:
            case SourceFile():
                self._serialize_source_file(node, output)
            case (
                ImportDeclaration()
                | ExpressionStatement()
                | VariableDeclaration()
                | ReturnStatement()
                | ClassDeclaration()
            ):
                self._serialize_statement(node, output, 0)
            case _:
                self._serialize_expression(node, output)  # type: ignore[arg-type]
        return "".join(output)

    def _serialize_source_file(self, node: SourceFile, output: list[str]) -> None:
        for statement in node.statements:
            self._serialize_statement(statement, output, 0)
            output.append("\n")

    def _serialize_statement(self, stmt: Statement, output: list[str], level: int) -> None:
        output.append(_INDENT * level)
        match stmt:
            case ImportDeclaration():
                self._serialize_import(stmt, output)
            case ExpressionStatement(expression=expr):
                if isinstance(expr, ObjectLiteral):
                    output.append("(")
                    self._serialize_expression(expr, output)
                    output.append(")")
                else:
                    self._serialize_expression(expr, output)
                output.append(";")
            case VariableDeclaration():
                if stmt.exported:
                    output.append("export ")
                output.append(f"{stmt.kind} {stmt.name.name}")
                if stmt.initializer is not None:
                    output.append(" = ")
                    self._serialize_expression(stmt.initializer, output)
                output.append(";")
            case ReturnStatement(expression=expr):
                output.append("return")
                if expr is not None:
                    output.append(" ")
                    self._serialize_expression(expr, output)
                output.append(";")
            case ClassDeclaration():
                self._serialize_class(stmt, output, level)
            case _:
                msg = f"Cannot serialize {type(stmt).__name__} as a statement"
                raise SerializationError(msg)

    def _serialize_import(self, node: ImportDeclaration, output: list[str]) -> None:
        clauses: list[str] = []
        if node.default is not None:
            clauses.append(node.default.name)
        if node.namespace is not None:
            clauses.append(f"* as {node.namespace.name}")
        if node.specifiers:
            names = ", ".join(
                spec.name.name if spec.alias is None else f"{spec.name.name} as {spec.alias.name}"
                for spec in node.specifiers
            )
            clauses.append(f"{{{names}}}")
        output.append("import ")
        if clauses:
            output.append(", ".join(clauses))
            output.append(" from ")
        output.append(_quote_module_specifier(node.module_specifier))
        output.append(";")

    def _serialize_class(self, node: ClassDeclaration, output: list[str], level: int) -> None:
        if node.exported:
            output.append("export ")
        output.append(f"class {node.name.name}")
        if node.heritage is not None:
            output.append(" extends ")
            self._serialize_expression(node.heritage, output)
        if not node.members:
            output.append(" {}")
            return
        output.append(" {\n")
        with self._depth_guard:
            for member in node.members:
                self._serialize_method(member, output, level + 1)
                output.append("\n")
        output.append(_INDENT * level + "}")

    def _serialize_method(self, node: MethodDeclaration, output: list[str], level: int) -> None:
        output.append(_INDENT * level)
        output.append(node.name.name)
        self._serialize_parameters(node.parameters, output)
        if not node.body:
            output.append(" {}")
            return
        output.append(" {\n")
        with self._depth_guard:
            for statement in node.body:
                self._serialize_statement(statement, output, level + 1)
                output.append("\n")
        output.append(_INDENT * level + "}")

    def _serialize_parameters(self, params: tuple[Parameter, ...], output: list[str]) -> None:
        output.append("(")
        for i, param in enumerate(params):
            if i > 0:
                output.append(", ")
            output.append(param.name.name)
            if param.type_annotation is not None:
                output.append(f": {param.type_annotation}")
        output.append(")")

    def _serialize_operand(self, expr: Expression, output: list[str]) -> None:
        if _needs_parens_as_operand(expr):
            output.append("(")
            self._serialize_expression(expr, output)
            output.append(")")
        else:
            self._serialize_expression(expr, output)

    def _serialize_expression(self, expr: Expression, output: list[str]) -> None:
        """Serialize Expression nodes using structural pattern matching."""
        with self._depth_guard:
            match expr:
                case Identifier():
                    output.append(expr.name)

                case StringLiteral():
                    output.append(json.dumps(expr.value, ensure_ascii=False))

                case NumericLiteral():
                    output.append(expr.raw)

                case RawExpression():
                    output.append(expr.text)

                case TemplateLiteral():
                    self._serialize_template(expr, output)

                case TaggedTemplate():
                    self._serialize_operand(expr.tag, output)
                    self._serialize_template(expr.template, output)

                case CallExpression():
                    self._serialize_operand(expr.callee, output)
                    output.append("(")
                    for i, arg in enumerate(expr.arguments):
                        if i > 0:
                            output.append(", ")
                        self._serialize_expression(arg, output)
                    output.append(")")

                case PropertyAccess():
                    self._serialize_operand(expr.expression, output)
                    output.append(f".{expr.name.name}")

                case ArrowFunction():
                    self._serialize_parameters(expr.parameters, output)
                    output.append(" => ")
                    if isinstance(expr.body, ObjectLiteral):
                        output.append("(")
                        self._serialize_expression(expr.body, output)
                        output.append(")")
                    else:
                        self._serialize_expression(expr.body, output)

                case ObjectLiteral():
                    output.append("{")
                    for i, prop in enumerate(expr.properties):
                        if i > 0:
                            output.append(", ")
                        output.append(f"{prop.name.name}: ")
                        self._serialize_expression(prop.value, output)
                    output.append("}")

                case ArrayLiteral():
                    output.append("[")
                    for i, element in enumerate(expr.elements):
                        if i > 0:
                            output.append(", ")
                        self._serialize_expression(element, output)
                    output.append("]")

                case _:
                    msg = f"Cannot serialize {type(expr).__name__} as an expression"
                    raise SerializationError(msg)

    def _serialize_template(self, node: TemplateLiteral, output: list[str]) -> None:
        output.append("`")
        output.append(escape_template_text(node.head))
        for span in node.spans:
            output.append("${")
            self._serialize_expression(span.expression, output)
            output.append("}")
            output.append(escape_template_text(span.literal))
        output.append("`")


def serialize(node: ASTNode, *, max_depth: int = MAX_DEPTH) -> str:
    """Serialize an AST node to ECMAScript source.

    Convenience function for ECMAScriptSerializer.serialize().

    Example:
        >>> from localeweaver.syntax import CallExpression, Identifier, StringLiteral
        >>> serialize(CallExpression(Identifier("msg"), (StringLiteral("Hi"),)))
        'msg("Hi")'
    """
    return ECMAScriptSerializer(max_depth=max_depth).serialize(node)

