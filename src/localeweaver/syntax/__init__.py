"""ECMAScript syntax package.

Provides AST definitions, the visitor pattern, template-literal text
handling, serialization and symbol resolution. Parsing application source
is left to an external front end that produces these nodes.

Python 3.13+.
"""

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
    ImportSpecifier,
    MethodDeclaration,
    NumericLiteral,
    ObjectLiteral,
    Parameter,
    PropertyAccess,
    PropertyAssignment,
    RawExpression,
    ReturnStatement,
    SourceFile,
    Statement,
    StringLiteral,
    TaggedTemplate,
    TemplateLiteral,
    TemplateSpan,
    VariableDeclaration,
)
from .serializer import SerializationError, serialize
from .symbols import Binding, ExportInfo, ModuleInfo, Program, SymbolTable
from .template import (
    TemplateSyntaxError,
    escape_template_text,
    make_template_literal,
    parse_template_body,
    template_fragments,
    template_strings,
)
from .visitor import ASTTransformer, ASTVisitor

# Note: ECMAScriptSerializer is intentionally NOT exported.
# Use the serialize() function instead.

__all__ = [
    "ASTNode",
    "ASTTransformer",
    "ASTVisitor",
    "ArrayLiteral",
    "ArrowFunction",
    "Binding",
    "CallExpression",
    "ClassDeclaration",
    "ExportInfo",
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "ImportDeclaration",
    "ImportSpecifier",
    "MethodDeclaration",
    "ModuleInfo",
    "NumericLiteral",
    "ObjectLiteral",
    "Parameter",
    "Program",
    "PropertyAccess",
    "PropertyAssignment",
    "RawExpression",
    "ReturnStatement",
    "SerializationError",
    "SourceFile",
    "Statement",
    "StringLiteral",
    "SymbolTable",
    "TaggedTemplate",
    "TemplateLiteral",
    "TemplateSpan",
    "TemplateSyntaxError",
    "VariableDeclaration",
    "escape_template_text",
    "make_template_literal",
    "parse_template_body",
    "serialize",
    "template_fragments",
    "template_strings",
]
