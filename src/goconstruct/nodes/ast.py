"""AST node definitions for Go declarations and type expressions."""

from dataclasses import dataclass
from typing import Literal, Optional

from ..utils import unquote
from .core import AstNode, Identifier

# Expressions


@dataclass(kw_only=True, frozen=True)
class BasicLit(AstNode):
    kind: Literal["INT", "FLOAT", "IMAG", "CHAR", "STRING"]
    value: str


@dataclass(kw_only=True, frozen=True)
class SelectorExpr(AstNode):
    value: AstNode
    member: Identifier


@dataclass(kw_only=True, frozen=True)
class StarExpr(AstNode):
    value: AstNode


@dataclass(kw_only=True, frozen=True)
class ParenExpr(AstNode):
    value: AstNode


@dataclass(kw_only=True, frozen=True)
class UnaryExpr(AstNode):
    op: str
    operand: AstNode


@dataclass(kw_only=True, frozen=True)
class BinaryExpr(AstNode):
    op: str
    left: AstNode
    right: AstNode


@dataclass(kw_only=True, frozen=True)
class CallExpr(AstNode):
    callee: AstNode
    args: list[AstNode]


@dataclass(kw_only=True, frozen=True)
class IndexExpr(AstNode):
    """Generic instantiation, e.g. `List[T]` or `Map[K, V]`."""

    value: AstNode
    indices: list[AstNode]


# Types


@dataclass(kw_only=True, frozen=True)
class Field(AstNode):
    """
    A struct field, parameter, result, type parameter or interface element.

    Struct fields always carry at least one name: an embedded field is named
    after its unqualified type name and flagged with `embedded`.
    """

    names: list[Identifier]
    type: AstNode
    tag: Optional[BasicLit] = None
    embedded: bool = False


@dataclass(kw_only=True, frozen=True)
class ArrayType(AstNode):
    """Array type, or slice type when `length` is None."""

    length: Optional[AstNode]
    element: AstNode


@dataclass(kw_only=True, frozen=True)
class MapType(AstNode):
    key: AstNode
    value: AstNode


@dataclass(kw_only=True, frozen=True)
class ChanType(AstNode):
    direction: Literal["both", "send", "recv"]
    value: AstNode


@dataclass(kw_only=True, frozen=True)
class Variadic(AstNode):
    """Final variadic parameter type, e.g. `...string`."""

    element: AstNode


@dataclass(kw_only=True, frozen=True)
class FuncType(AstNode):
    params: list[Field]
    results: list[Field]


@dataclass(kw_only=True, frozen=True)
class StructType(AstNode):
    fields: list[Field]


@dataclass(kw_only=True, frozen=True)
class InterfaceType(AstNode):
    # methods are named fields of FuncType, embedded elements are unnamed
    elements: list[Field]


# Declarations


@dataclass(kw_only=True, frozen=True)
class ImportSpec(AstNode):
    name: Optional[Identifier]
    path: BasicLit

    @property
    def local_name(self) -> str:
        if self.name is not None:
            return self.name.name
        return unquote(self.path.value).split("/")[-1]


@dataclass(kw_only=True, frozen=True)
class TypeSpec(AstNode):
    name: Identifier
    type_params: list[Field]
    type: AstNode
    alias: bool = False


@dataclass(kw_only=True, frozen=True)
class ValueSpec(AstNode):
    # initializer expressions are skipped by the parser
    names: list[Identifier]
    type: Optional[AstNode]


@dataclass(kw_only=True, frozen=True)
class GenDecl(AstNode):
    keyword: Literal["import", "const", "type", "var"]
    specs: list[ImportSpec | TypeSpec | ValueSpec]
    grouped: bool = False


@dataclass(kw_only=True, frozen=True)
class FuncDecl(AstNode):
    # function bodies are skipped by the parser
    name: Identifier
    receiver: Optional[list[Field]]
    type_params: list[Field]
    type: FuncType
    has_body: bool


@dataclass(kw_only=True, frozen=True)
class SourceFile(AstNode):
    package: Identifier
    decls: list[GenDecl | FuncDecl]

    @property
    def imports(self) -> list[ImportSpec]:
        return [
            spec
            for decl in self.decls
            if isinstance(decl, GenDecl) and decl.keyword == "import"
            for spec in decl.specs
            if isinstance(spec, ImportSpec)
        ]
