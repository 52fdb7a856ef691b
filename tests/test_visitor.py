"""Tests for AST visitor and transformer traversal."""

from __future__ import annotations

import pytest

from localeweaver.diagnostics import DepthLimitExceededError
from localeweaver.syntax import (
    ArrowFunction,
    ASTNode,
    ASTTransformer,
    ASTVisitor,
    CallExpression,
    ClassDeclaration,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    MethodDeclaration,
    ObjectLiteral,
    Parameter,
    PropertyAccess,
    PropertyAssignment,
    ReturnStatement,
    SourceFile,
    StringLiteral,
    TemplateLiteral,
    TemplateSpan,
    VariableDeclaration,
)


class ReferenceCollector(ASTVisitor):
    """Collects every Identifier reached as a reference."""

    def __init__(self) -> None:
        super().__init__()
        self.names: list[str] = []

    def visit_Identifier(self, node: Identifier) -> ASTNode:
        self.names.append(node.name)
        return node


class UppercaseStrings(ASTTransformer):
    """Rewrites every string literal to upper case."""

    def visit_StringLiteral(self, node: StringLiteral) -> StringLiteral:
        return StringLiteral(node.value.upper())


def _sample_file() -> SourceFile:
    return SourceFile(
        (
            ImportDeclaration("lib", specifiers=(ImportSpecifier(Identifier("f"), Identifier("g")),)),
            VariableDeclaration(
                Identifier("x"),
                CallExpression(Identifier("g"), (StringLiteral("a"), Identifier("y"))),
            ),
            ClassDeclaration(
                Identifier("C"),
                heritage=Identifier("Base"),
                members=(
                    MethodDeclaration(
                        Identifier("m"),
                        (Parameter(Identifier("p")),),
                        (ReturnStatement(PropertyAccess(Identifier("obj"), Identifier("prop"))),),
                    ),
                ),
            ),
            ExpressionStatement(
                ObjectLiteral((PropertyAssignment(Identifier("key"), StringLiteral("b")),))
            ),
        ),
        file_name="sample.ts",
    )


class TestASTVisitor:
    """Read-only traversal."""

    def test_visits_references_but_not_bindings(self) -> None:
        """Declared names, parameters, property keys and import names are skipped."""
        collector = ReferenceCollector()
        collector.visit(_sample_file())
        assert collector.names == ["g", "y", "Base", "obj"]

    def test_dispatch_table_built_per_subclass(self) -> None:
        assert "Identifier" in ReferenceCollector._class_visit_methods
        assert "StringLiteral" not in ReferenceCollector._class_visit_methods


class TestASTTransformer:
    """Rebuilding transformation."""

    def test_rewrites_nested_nodes(self) -> None:
        result = UppercaseStrings().transform(_sample_file())
        assert isinstance(result, SourceFile)
        declaration = result.statements[1]
        assert isinstance(declaration, VariableDeclaration)
        assert declaration.initializer == CallExpression(
            Identifier("g"), (StringLiteral("A"), Identifier("y"))
        )
        statement = result.statements[3]
        assert isinstance(statement, ExpressionStatement)
        assert statement.expression == ObjectLiteral(
            (PropertyAssignment(Identifier("key"), StringLiteral("B")),)
        )

    def test_original_tree_untouched(self) -> None:
        original = _sample_file()
        UppercaseStrings().transform(original)
        assert original == _sample_file()

    def test_none_removes_from_list(self) -> None:
        class DropImports(ASTTransformer):
            def visit_ImportDeclaration(self, node: ImportDeclaration) -> None:
                return None

        result = DropImports().transform(_sample_file())
        assert isinstance(result, SourceFile)
        assert not any(isinstance(s, ImportDeclaration) for s in result.statements)
        assert len(result.statements) == 3

    def test_list_splices_into_parent(self) -> None:
        class Duplicate(ASTTransformer):
            def visit_ExpressionStatement(self, node: ExpressionStatement) -> list[ASTNode]:
                return [node, node]

        source = SourceFile((ExpressionStatement(StringLiteral("x")),), file_name="a.ts")
        result = Duplicate().transform(source)
        assert isinstance(result, SourceFile)
        assert len(result.statements) == 2

    def test_template_spans_and_arrow_bodies_transformed(self) -> None:
        node = ArrowFunction(
            (),
            TemplateLiteral("a", (TemplateSpan(StringLiteral("b"), "c"),)),
        )
        result = UppercaseStrings().transform(node)
        assert result == ArrowFunction((), TemplateLiteral("a", (TemplateSpan(StringLiteral("B"), "c"),)))

    def test_depth_limit(self) -> None:
        node: CallExpression | Identifier = Identifier("x")
        for _ in range(30):
            node = CallExpression(Identifier("f"), (node,))
        with pytest.raises(DepthLimitExceededError):
            UppercaseStrings(max_depth=10).transform(node)
