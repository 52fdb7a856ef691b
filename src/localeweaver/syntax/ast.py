"""ECMAScript AST node definitions.

The subset of a JavaScript/TypeScript syntax tree that localized application
code is made of: imports, declarations, calls, template literals and the
literal forms the transform engine produces. Produced by an external parser,
rewritten by the transform engine, printed back by the serializer.

Template text is stored cooked (escape sequences already resolved); the
serializer re-escapes it.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Expressions
    "Identifier",
    "StringLiteral",
    "NumericLiteral",
    "RawExpression",
    "TemplateLiteral",
    "TemplateSpan",
    "TaggedTemplate",
    "CallExpression",
    "PropertyAccess",
    "Parameter",
    "ArrowFunction",
    "PropertyAssignment",
    "ObjectLiteral",
    "ArrayLiteral",
    # Statements
    "ImportSpecifier",
    "ImportDeclaration",
    "ExpressionStatement",
    "VariableDeclaration",
    "ReturnStatement",
    "MethodDeclaration",
    "ClassDeclaration",
    "SourceFile",
    # Type aliases
    "Expression",
    "Statement",
    "ASTNode",
]

# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier reference or binding name."""

    name: str

    @staticmethod
    def guard(node: object) -> TypeIs["Identifier"]:
        """Type guard for Identifier."""
        return isinstance(node, Identifier)


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal: "text" """

    value: str

    @staticmethod
    def guard(node: object) -> TypeIs["StringLiteral"]:
        """Type guard for StringLiteral."""
        return isinstance(node, StringLiteral)


@dataclass(frozen=True, slots=True)
class NumericLiteral:
    """Number literal, kept as source text."""

    raw: str


@dataclass(frozen=True, slots=True)
class RawExpression:
    """Expression kept as verbatim source.

    Stands for any expression the transform engine never needs to look
    inside, such as a non-identifier ``${...}`` slot in a translation.
    """

    text: str


@dataclass(frozen=True, slots=True)
class TemplateSpan:
    """One ``${expression}`` slot plus the text that follows it."""

    expression: "Expression"
    literal: str


@dataclass(frozen=True, slots=True)
class TemplateLiteral:
    """Template literal: `head${a}middle${b}tail`

    A template with no spans is a no-substitution template.

    Example:
        `Hello ${name}!` ->
        TemplateLiteral(head="Hello ", spans=(TemplateSpan(Identifier("name"), "!"),))
    """

    head: str
    spans: tuple[TemplateSpan, ...] = ()

    @property
    def has_substitutions(self) -> bool:
        """True when the template has at least one expression slot."""
        return bool(self.spans)

    @staticmethod
    def guard(node: object) -> TypeIs["TemplateLiteral"]:
        """Type guard for TemplateLiteral."""
        return isinstance(node, TemplateLiteral)


@dataclass(frozen=True, slots=True)
class TaggedTemplate:
    """Tagged template: html`<b>${x}</b>`"""

    tag: "Expression"
    template: TemplateLiteral

    @staticmethod
    def guard(node: object) -> TypeIs["TaggedTemplate"]:
        """Type guard for TaggedTemplate."""
        return isinstance(node, TaggedTemplate)


@dataclass(frozen=True, slots=True)
class CallExpression:
    """Call: callee(arg1, arg2)"""

    callee: "Expression"
    arguments: tuple["Expression", ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["CallExpression"]:
        """Type guard for CallExpression."""
        return isinstance(node, CallExpression)


@dataclass(frozen=True, slots=True)
class PropertyAccess:
    """Property access: expression.name"""

    expression: "Expression"
    name: Identifier


@dataclass(frozen=True, slots=True)
class Parameter:
    """Function parameter with optional type annotation source."""

    name: Identifier
    type_annotation: str | None = None


@dataclass(frozen=True, slots=True)
class ArrowFunction:
    """Arrow function with an expression body: (a, b) => body"""

    parameters: tuple[Parameter, ...]
    body: "Expression"

    @staticmethod
    def guard(node: object) -> TypeIs["ArrowFunction"]:
        """Type guard for ArrowFunction."""
        return isinstance(node, ArrowFunction)


@dataclass(frozen=True, slots=True)
class PropertyAssignment:
    """Object literal member: name: value"""

    name: Identifier
    value: "Expression"


@dataclass(frozen=True, slots=True)
class ObjectLiteral:
    """Object literal: {a: 1, b: 2}"""

    properties: tuple[PropertyAssignment, ...] = ()

    def get(self, name: str) -> "Expression | None":
        """Value of the first property with the given name."""
        for prop in self.properties:
            if prop.name.name == name:
                return prop.value
        return None


@dataclass(frozen=True, slots=True)
class ArrayLiteral:
    """Array literal: [a, b]"""

    elements: tuple["Expression", ...] = ()


# ============================================================================
# STATEMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class ImportSpecifier:
    """Named import binding: name or name as alias"""

    name: Identifier
    alias: Identifier | None = None

    @property
    def local_name(self) -> str:
        """Name bound in the importing file."""
        return (self.alias or self.name).name


@dataclass(frozen=True, slots=True)
class ImportDeclaration:
    """Import declaration.

    Examples:
        import {msg, html as h} from 'mod';   specifiers
        import * as loc from 'mod';           namespace
        import mod from 'mod';                default
        import 'mod';                         side effect only
    """

    module_specifier: str
    specifiers: tuple[ImportSpecifier, ...] = ()
    namespace: Identifier | None = None
    default: Identifier | None = None


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """Expression evaluated for effect: expr;"""

    expression: "Expression"


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    """Single-binding declaration: [export] const name = initializer;"""

    name: Identifier
    initializer: "Expression | None" = None
    kind: str = "const"
    exported: bool = False


@dataclass(frozen=True, slots=True)
class ReturnStatement:
    """return expression;"""

    expression: "Expression | None" = None


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    """Class method: name(params) { body }"""

    name: Identifier
    parameters: tuple[Parameter, ...] = ()
    body: tuple["Statement", ...] = ()


@dataclass(frozen=True, slots=True)
class ClassDeclaration:
    """Class: [export] class Name extends Heritage { members }"""

    name: Identifier
    heritage: "Expression | None" = None
    members: tuple[MethodDeclaration, ...] = ()
    exported: bool = False


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Root node for one source file.

    Attributes:
        statements: Top-level statements in source order
        file_name: Path relative to the project root, used for output and diagnostics
    """

    statements: tuple["Statement", ...]
    file_name: str = ""


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Expression = (
    Identifier
    | StringLiteral
    | NumericLiteral
    | RawExpression
    | TemplateLiteral
    | TaggedTemplate
    | CallExpression
    | PropertyAccess
    | ArrowFunction
    | ObjectLiteral
    | ArrayLiteral
)

type Statement = (
    ImportDeclaration
    | ExpressionStatement
    | VariableDeclaration
    | ReturnStatement
    | ClassDeclaration
)

type ASTNode = (
    Expression
    | Statement
    | TemplateSpan
    | Parameter
    | PropertyAssignment
    | ImportSpecifier
    | MethodDeclaration
    | SourceFile
)
