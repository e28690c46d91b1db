"""Rendering of type expressions back to Go source text."""

from ..classes import ModuleMeta
from ..exceptions.exceptions import Exceptions
from ..nodes.ast import (
    ArrayType,
    BasicLit,
    BinaryExpr,
    CallExpr,
    ChanType,
    Field,
    FuncType,
    IndexExpr,
    InterfaceType,
    MapType,
    ParenExpr,
    SelectorExpr,
    StarExpr,
    StructType,
    UnaryExpr,
    Variadic,
)
from ..nodes.core import AstNode, Identifier
from ..utils import camel2snake_pattern


class TypePrinter:
    """
    Prints type expressions on a single line, spaced the way gofmt spaces them.

    Nodes without a printing method raise a RenderFailure.
    """

    def __init__(self, module: ModuleMeta):
        self.module = module
        self.errors = Exceptions(module=module)

    def identifier_(self, node: Identifier) -> str:
        return node.name

    def basic_lit_(self, node: BasicLit) -> str:
        return node.value

    def selector_expr_(self, node: SelectorExpr) -> str:
        return f"{self.render(node.value)}.{node.member.name}"

    def star_expr_(self, node: StarExpr) -> str:
        return "*" + self.render(node.value)

    def paren_expr_(self, node: ParenExpr) -> str:
        return f"({self.render(node.value)})"

    def unary_expr_(self, node: UnaryExpr) -> str:
        return node.op + self.render(node.operand)

    def binary_expr_(self, node: BinaryExpr) -> str:
        return f"{self.render(node.left)} {node.op} {self.render(node.right)}"

    def call_expr_(self, node: CallExpr) -> str:
        args = ", ".join(self.render(arg) for arg in node.args)
        return f"{self.render(node.callee)}({args})"

    def index_expr_(self, node: IndexExpr) -> str:
        indices = ", ".join(self.render(index) for index in node.indices)
        return f"{self.render(node.value)}[{indices}]"

    def array_type_(self, node: ArrayType) -> str:
        length = self.render(node.length) if node.length is not None else ""
        return f"[{length}]{self.render(node.element)}"

    def map_type_(self, node: MapType) -> str:
        return f"map[{self.render(node.key)}]{self.render(node.value)}"

    def chan_type_(self, node: ChanType) -> str:
        prefix = {"both": "chan ", "send": "chan<- ", "recv": "<-chan "}[node.direction]
        return prefix + self.render(node.value)

    def variadic_(self, node: Variadic) -> str:
        return "..." + self.render(node.element)

    def func_type_(self, node: FuncType) -> str:
        return "func" + self.signature(node)

    def struct_type_(self, node: StructType) -> str:
        if not node.fields:
            return "struct{}"
        return "struct{ " + "; ".join(self.field(f) for f in node.fields) + " }"

    def interface_type_(self, node: InterfaceType) -> str:
        if not node.elements:
            return "interface{}"
        elements = []
        for element in node.elements:
            if element.names and isinstance(element.type, FuncType):
                elements.append(element.names[0].name + self.signature(element.type))
            else:
                elements.append(self.render(element.type))
        return "interface{ " + "; ".join(elements) + " }"

    def signature(self, node: FuncType) -> str:
        out = f"({self.fields(node.params)})"
        if len(node.results) == 1 and not node.results[0].names:
            out += " " + self.render(node.results[0].type)
        elif node.results:
            out += f" ({self.fields(node.results)})"
        return out

    def fields(self, fields: list[Field]) -> str:
        return ", ".join(self.field(f) for f in fields)

    def field(self, node: Field) -> str:
        out = self.render(node.type)
        if node.names and not node.embedded:
            out = ", ".join(name.name for name in node.names) + " " + out
        if node.tag is not None:
            out += " " + node.tag.value
        return out

    def render(self, node: AstNode) -> str:
        name = camel2snake_pattern.sub("_", type(node).__name__).lower() + "_"

        if hasattr(self, name):
            return getattr(self, name)(node)
        self.errors.unrenderable(node)
        raise AssertionError("unreachable")
