"""Visitor pattern for AST traversal.

Enables tools to traverse and rewrite the ECMAScript AST without modifying
node classes.

Methods are named visit_NodeName (PascalCase) following the stdlib
ast.NodeVisitor convention.

Binding positions (declared names, parameter names, property keys, import
specifiers and the member name of a property access) are never dispatched
as expressions: an Identifier reaching visit_Identifier is always a
reference.

Type Parameters:
- ASTVisitor[T] is generic over return type T
- ASTVisitor (no type param) defaults to T=ASTNode
- ASTTransformer uses extended return type: ASTNode | None | list[ASTNode]

Python 3.13+.
"""

from collections.abc import Callable
from dataclasses import Field, fields, replace
from typing import ClassVar

from localeweaver.constants import MAX_DEPTH
from localeweaver.core.depth_guard import DepthGuard

from .ast import (
    ArrayLiteral,
    ArrowFunction,
    ASTNode,
    CallExpression,
    ClassDeclaration,
    ExpressionStatement,
    MethodDeclaration,
    ObjectLiteral,
    PropertyAccess,
    PropertyAssignment,
    ReturnStatement,
    SourceFile,
    TaggedTemplate,
    TemplateLiteral,
    TemplateSpan,
    VariableDeclaration,
)

__all__ = ["ASTTransformer", "ASTVisitor"]

type TransformerResult = ASTNode | None | list[ASTNode]

# Fields holding binding names rather than expressions.
_BINDING_FIELDS: frozenset[str] = frozenset(
    {"name", "alias", "namespace", "default", "parameters", "specifiers"}
)


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing the AST.

    generic_visit() traverses all child nodes in expression positions.
    Override visit_NodeType methods to add custom behavior.

    Dispatch table built once per class definition via __init_subclass__,
    with an instance-level cache of bound methods.

    Example:
        >>> class CountCallsVisitor(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_CallExpression(self, node: CallExpression) -> ASTNode:
        ...         self.count += 1
        ...         return self.generic_visit(node)
        ...
        >>> visitor = CountCallsVisitor()
        >>> visitor.visit(source_file)
        >>> print(visitor.count)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    _class_visit_methods: ClassVar[dict[str, str]] = {}

    _fields_cache: ClassVar[dict[type, tuple[Field[object], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH from constants)
        """
        effective_max_depth = max_depth if max_depth is not None else MAX_DEPTH
        self._depth_guard = DepthGuard(max_depth=effective_max_depth)
        self._instance_dispatch_cache: dict[type, Callable[[ASTNode], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Dispatch to visit_<NodeType> or generic_visit."""
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        node_type_name = node_type.__name__
        if node_type_name in self._class_visit_methods:
            method = getattr(self, self._class_visit_methods[node_type_name])
        else:
            method = self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def _get_node_fields(self, node_type: type) -> tuple[Field[object], ...]:
        if node_type not in ASTVisitor._fields_cache:
            ASTVisitor._fields_cache[node_type] = fields(node_type)
        return ASTVisitor._fields_cache[node_type]

    def generic_visit(self, node: ASTNode) -> T:
        """Visit every child in an expression or statement position.

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            for field in self._get_node_fields(type(node)):
                if field.name in _BINDING_FIELDS:
                    continue
                value = getattr(node, field.name)

                if value is None or isinstance(value, (str, int, float, bool)):
                    continue

                if isinstance(value, tuple):
                    for item in value:
                        if hasattr(item, "__dataclass_fields__"):
                            self.visit(item)
                elif hasattr(value, "__dataclass_fields__"):
                    self.visit(value)

        return node  # type: ignore[return-value]  # T defaults to ASTNode


class ASTTransformer(ASTVisitor[TransformerResult]):
    """AST transformer producing a new immutable tree.

    Each visit method can return:
    - The modified node (replaces original)
    - None (removes node from parent; only valid in list positions)
    - A list of nodes (replaces single node with multiple; list positions only)

    Example - Drop side-effect-only imports:
        >>> class DropBareImports(ASTTransformer):
        ...     def visit_ImportDeclaration(self, node):
        ...         if not (node.specifiers or node.namespace or node.default):
        ...             return None
        ...         return node
        ...
        >>> cleaned = DropBareImports().transform(source_file)
    """

    def transform(self, node: ASTNode) -> TransformerResult:
        """Transform an AST node or tree."""
        return self.visit(node)

    def generic_visit(self, node: ASTNode) -> TransformerResult:
        """Transform node children, rebuilding the node with replace().

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            match node:
                case SourceFile(statements=statements):
                    return replace(node, statements=self._transform_list(statements))
                case ExpressionStatement(expression=expr):
                    return replace(node, expression=self.visit(expr))
                case VariableDeclaration(initializer=init):
                    return replace(
                        node, initializer=self.visit(init) if init is not None else None
                    )
                case ReturnStatement(expression=expr):
                    return replace(
                        node, expression=self.visit(expr) if expr is not None else None
                    )
                case ClassDeclaration(heritage=heritage, members=members):
                    return replace(
                        node,
                        heritage=self.visit(heritage) if heritage is not None else None,
                        members=self._transform_list(members),
                    )
                case MethodDeclaration(body=body):
                    return replace(node, body=self._transform_list(body))
                case TemplateLiteral(spans=spans):
                    return replace(node, spans=self._transform_list(spans))
                case TemplateSpan(expression=expr):
                    return replace(node, expression=self.visit(expr))
                case TaggedTemplate(tag=tag, template=template):
                    return replace(node, tag=self.visit(tag), template=self.visit(template))
                case CallExpression(callee=callee, arguments=args):
                    return replace(
                        node, callee=self.visit(callee), arguments=self._transform_list(args)
                    )
                case PropertyAccess(expression=expr):
                    return replace(node, expression=self.visit(expr))
                case ArrowFunction(body=body):
                    return replace(node, body=self.visit(body))
                case ObjectLiteral(properties=props):
                    return replace(node, properties=self._transform_list(props))
                case PropertyAssignment(value=value):
                    return replace(node, value=self.visit(value))
                case ArrayLiteral(elements=elements):
                    return replace(node, elements=self._transform_list(elements))
                case _:
                    # Leaf nodes: Identifier, StringLiteral, NumericLiteral,
                    # RawExpression, ImportDeclaration, Parameter. Immutable.
                    return node

    def _transform_list(self, nodes: tuple[ASTNode, ...]) -> tuple[ASTNode, ...]:
        """Transform a tuple of nodes, dropping None and splicing lists."""
        result: list[ASTNode] = []
        for node in nodes:
            transformed = self.visit(node)

            match transformed:
                case None:
                    continue
                case list():
                    result.extend(transformed)
                case _:
                    result.append(transformed)

        return tuple(result)
