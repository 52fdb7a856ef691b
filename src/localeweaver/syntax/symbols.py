"""Symbol resolution over a program's imports and module exports.

The transform engine recognizes the localization library by tagged
exports: each library export carries a set of ApiTag markers. A call is a
translation request when its callee resolves, through any chain of import
renames, namespace imports, local const aliases and re-exporting modules, to
an export tagged ApiTag.MSG. Import paths and local names play no part in
recognition.

Program describes the compilation: the application's source files plus
the export tables of the modules they import. SymbolTable answers
resolution queries for one file.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from localeweaver.enums import ApiTag

from .ast import (
    ClassDeclaration,
    Expression,
    Identifier,
    ImportDeclaration,
    Parameter,
    PropertyAccess,
    SourceFile,
    Statement,
    VariableDeclaration,
)

__all__ = [
    "Binding",
    "ExportInfo",
    "ModuleInfo",
    "Program",
    "SymbolTable",
]

# Re-export and alias chains longer than this are treated as cycles.
_MAX_ALIAS_HOPS = 32

_LOCALIZE_MODULE_TAGS = frozenset({ApiTag.MSG, ApiTag.LOCALIZED})


@dataclass(frozen=True, slots=True)
class ExportInfo:
    """One named export of a module.

    Attributes:
        name: Exported name ("default" for the default export)
        tags: Markers identifying the export as part of a known API surface
        reexport_from: Module specifier this export is forwarded from
        original_name: Name in reexport_from when forwarded under a new name
        module: Specifier of the module that declares the export, set by
            ModuleInfo once the export is registered
    """

    name: str
    tags: frozenset[str] = frozenset()
    reexport_from: str | None = None
    original_name: str | None = None
    module: str = ""

    def has_tag(self, tag: str) -> bool:
        """True when the export carries the given marker."""
        return tag in self.tags


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """Export table of one module, keyed by specifier."""

    specifier: str
    exports: tuple[ExportInfo, ...] = ()
    _by_name: dict[str, ExportInfo] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, ExportInfo] = {}
        for export in self.exports:
            if export.name in by_name:
                msg = f"Module '{self.specifier}' exports '{export.name}' more than once"
                raise ValueError(msg)
            if export.module != self.specifier:
                export = ExportInfo(
                    name=export.name,
                    tags=export.tags,
                    reexport_from=export.reexport_from,
                    original_name=export.original_name,
                    module=self.specifier,
                )
            by_name[export.name] = export
        object.__setattr__(self, "exports", tuple(by_name.values()))
        object.__setattr__(self, "_by_name", by_name)

    def get(self, name: str) -> ExportInfo | None:
        """Look up an export by exported name."""
        return self._by_name.get(name)

    @classmethod
    def tagged(cls, specifier: str, exports: Mapping[str, Iterable[str]]) -> ModuleInfo:
        """Build a module from a name -> tags mapping.

        Example:
            >>> ModuleInfo.tagged("@app/localize", {"msg": [ApiTag.MSG], "str": []})
        """
        return cls(
            specifier=specifier,
            exports=tuple(ExportInfo(name, frozenset(tags)) for name, tags in exports.items()),
        )


@dataclass(frozen=True, slots=True)
class Program:
    """Source files under compilation plus known module export tables.

    Attributes:
        files: Application source files; file names must be unique and non-empty
        modules: Export tables of imported modules
    """

    files: tuple[SourceFile, ...]
    modules: tuple[ModuleInfo, ...] = ()
    _modules_by_specifier: dict[str, ModuleInfo] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for source_file in self.files:
            if not source_file.file_name:
                msg = "Program source files must have a file name"
                raise ValueError(msg)
            if source_file.file_name in seen:
                msg = f"Duplicate source file '{source_file.file_name}'"
                raise ValueError(msg)
            seen.add(source_file.file_name)
        object.__setattr__(
            self, "_modules_by_specifier", {module.specifier: module for module in self.modules}
        )

    def get_module(self, specifier: str) -> ModuleInfo | None:
        """Export table for a module specifier, if known."""
        return self._modules_by_specifier.get(specifier)

    def resolve_export(self, specifier: str, name: str) -> ExportInfo | None:
        """Follow re-exports to the declaring export.

        Returns None for unknown modules, missing names and re-export cycles.
        """
        for _ in range(_MAX_ALIAS_HOPS):
            module = self.get_module(specifier)
            if module is None:
                return None
            export = module.get(name)
            if export is None or export.reexport_from is None:
                return export
            specifier = export.reexport_from
            name = export.original_name or export.name
        return None

    def is_localize_module(self, specifier: str) -> bool:
        """True when the module exports the translation API.

        Decided by tags on the resolved exports, so a module that merely
        re-exports the library counts as the library.
        """
        module = self.get_module(specifier)
        if module is None:
            return False
        for export in module.exports:
            resolved = self.resolve_export(specifier, export.name)
            if resolved is not None and resolved.tags & _LOCALIZE_MODULE_TAGS:
                return True
        return False

    def symbols_for(self, source_file: SourceFile) -> SymbolTable:
        """Symbol table for one source file."""
        return SymbolTable(self, source_file)


@dataclass(frozen=True, slots=True)
class Binding:
    """A top-level name bound by an import.

    Attributes:
        module: Specifier the name was imported from
        export_name: Imported export name, or None for a namespace import
    """

    module: str
    export_name: str | None


class SymbolTable:
    """Resolves references in one source file to module exports.

    The file-level table holds the import bindings. child_scope() builds the
    table of a function or method body: its parameters and local
    declarations shadow outer names, and its const aliases are followed
    like top-level ones. In every scope a const whose initializer is a
    reference is an alias; any other declaration hides outer bindings of
    its name.
    """

    __slots__ = ("_aliases", "_bindings", "_declared", "_parent", "_program", "source_file")

    def __init__(
        self,
        program: Program,
        source_file: SourceFile,
        *,
        parent: SymbolTable | None = None,
        parameters: Iterable[Parameter] = (),
        statements: Iterable[Statement] | None = None,
    ) -> None:
        self._program = program
        self.source_file = source_file
        self._parent = parent
        self._bindings: dict[str, Binding] = {}
        self._aliases: dict[str, Expression] = {}
        self._declared: set[str] = {parameter.name.name for parameter in parameters}

        if statements is None:
            statements = source_file.statements if parent is None else ()
        for statement in statements:
            match statement:
                case ImportDeclaration() if parent is None:
                    spec = statement.module_specifier
                    for specifier in statement.specifiers:
                        self._bindings[specifier.local_name] = Binding(spec, specifier.name.name)
                    if statement.default is not None:
                        self._bindings[statement.default.name] = Binding(spec, "default")
                    if statement.namespace is not None:
                        self._bindings[statement.namespace.name] = Binding(spec, None)
                case VariableDeclaration(name=name, initializer=init):
                    self._declared.add(name.name)
                    if statement.kind == "const" and isinstance(init, (Identifier, PropertyAccess)):
                        self._aliases[name.name] = init
                case ClassDeclaration(name=name):
                    self._declared.add(name.name)
                case _:
                    pass

        for name in self._declared:
            self._bindings.pop(name, None)

    @property
    def program(self) -> Program:
        """Program this table resolves against."""
        return self._program

    def child_scope(
        self,
        *,
        parameters: Iterable[Parameter] = (),
        statements: Iterable[Statement] = (),
    ) -> SymbolTable:
        """Table for a nested function or method body inside this scope."""
        return SymbolTable(
            self._program,
            self.source_file,
            parent=self,
            parameters=parameters,
            statements=statements,
        )

    def binding(self, name: str) -> Binding | None:
        """Import binding a name denotes in this scope, if any."""
        owner = self._owner(name)
        return owner._bindings.get(name) if owner is not None else None

    def is_alias(self, name: str) -> bool:
        """True when name is a const alias declared directly in this scope."""
        return name in self._aliases

    def _owner(self, name: str) -> SymbolTable | None:
        table: SymbolTable | None = self
        while table is not None:
            if name in table._aliases or name in table._declared or name in table._bindings:
                return table
            table = table._parent
        return None

    def resolve_declaration(self, expr: Expression) -> ExportInfo | None:
        """Resolve a reference to the module export it denotes.

        Handles named, renamed and default imports, member access on a
        namespace import, and const aliases of either in any enclosing
        scope. Anything else (calls, literals, locals, parameters) resolves
        to None.
        """
        table = self
        for _ in range(_MAX_ALIAS_HOPS):
            match expr:
                case Identifier(name=name):
                    owner = table._owner(name)
                    if owner is None:
                        return None
                    if name in owner._aliases:
                        table, expr = owner, owner._aliases[name]
                        continue
                    binding = owner._bindings.get(name)
                    if binding is None or binding.export_name is None:
                        return None
                    return self._program.resolve_export(binding.module, binding.export_name)
                case PropertyAccess(expression=Identifier(name=base), name=member):
                    owner = table._owner(base)
                    if owner is None:
                        return None
                    if base in owner._aliases:
                        table, expr = owner, PropertyAccess(owner._aliases[base], member)
                        continue
                    binding = owner._bindings.get(base)
                    if binding is None or binding.export_name is not None:
                        return None
                    return self._program.resolve_export(binding.module, member.name)
                case _:
                    return None
        return None

    def tags_of(self, expr: Expression) -> frozenset[str]:
        """Markers carried by the export expr resolves to (empty if none)."""
        export = self.resolve_declaration(expr)
        return export.tags if export is not None else frozenset()

    def has_tag(self, expr: Expression, tag: str) -> bool:
        """True when expr resolves to an export carrying tag."""
        return tag in self.tags_of(expr)

    def module_for_import(self, declaration: ImportDeclaration) -> ModuleInfo | None:
        """Export table of the module an import declaration names."""
        return self._program.get_module(declaration.module_specifier)

    def imports_localize_module(self, declaration: ImportDeclaration) -> bool:
        """True when the declaration imports the translation API module."""
        return self._program.is_localize_module(declaration.module_specifier)
