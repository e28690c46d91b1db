from ..classes import ModuleMeta
from ..nodes.ast import (
    ArrayType,
    BasicLit,
    BinaryExpr,
    CallExpr,
    ChanType,
    Field,
    FuncDecl,
    FuncType,
    GenDecl,
    ImportSpec,
    IndexExpr,
    InterfaceType,
    MapType,
    ParenExpr,
    SelectorExpr,
    SourceFile,
    StarExpr,
    StructType,
    TypeSpec,
    UnaryExpr,
    ValueSpec,
    Variadic,
)
from ..nodes.core import AstNode, Identifier, Token, nodeloc
from .template import ParserTemplate

# tokens that may begin a type
TYPE_START = {
    "ID",
    "LBRACKET",
    "STRUCT",
    "TIMES",
    "FUNC",
    "INTERFACE",
    "MAP",
    "CHAN",
    "LPAREN",
    "ARROW",
}

# tokens that begin a type but never an expression operand
TYPE_ELEMENTS = {"STRUCT", "LBRACKET", "MAP", "CHAN", "FUNC", "INTERFACE", "TIMES"}

LITERALS = {"INT", "FLOAT", "IMAG", "CHAR", "STRING"}

BINARY_OPERATORS = {
    "PLUS",
    "MINUS",
    "TIMES",
    "DIVIDE",
    "MOD",
    "AMPERSAND",
    "PIPE",
    "CARET",
    "LSHIFT",
    "RSHIFT",
    "ANDNOT",
}


class Parser(ParserTemplate):
    """
    Parser for the declaration level of a Go source file.

    Type expressions are parsed completely. Function bodies and the initializer
    expressions of `var` and `const` declarations are skipped by bracket
    matching, since nothing downstream inspects them.
    """

    def __init__(self, tokens: list[Token], module: ModuleMeta):
        super().__init__(tokens=tokens, module=module)

    def start(self) -> SourceFile:
        if self._peek().type != "PACKAGE":
            self.errors.throw(5, token=self._peek().value, loc=self._peek().loc)
        start = self._consume("PACKAGE")
        package = self._make_id(self._consume("ID"))
        self._terminator()

        decls: list[GenDecl | FuncDecl] = []
        while self._peek().type == "IMPORT":
            decls.append(self.gen_decl("IMPORT", self.import_spec))
            self._terminator()

        while self._peek().type != "EOF":
            if self._accept("SEMICOLON"):
                continue
            decls.append(self.declaration())
            self._terminator()

        return SourceFile(
            package=package,
            decls=decls,
            loc=nodeloc(start, decls[-1] if decls else package),
        )

    def _terminator(self):
        if self._peek().type not in {"EOF", "RPAREN", "RBRACE"}:
            self._consume("SEMICOLON")

    def declaration(self) -> GenDecl | FuncDecl:
        first = self._peek()

        if first.type == "TYPE":
            """Type declaration"""
            return self.gen_decl("TYPE", self.type_spec)
        elif first.type == "VAR":
            """Variable declaration"""
            return self.gen_decl("VAR", self.value_spec)
        elif first.type == "CONST":
            """Constant declaration"""
            return self.gen_decl("CONST", self.value_spec)
        elif first.type == "FUNC":
            """Function or method declaration"""
            return self.func_decl()
        elif first.type == "IMPORT":
            self.errors.unexpectedToken(
                first, help="imports must appear before other declarations"
            )

        self.errors.unexpectedToken(first)
        raise AssertionError("unreachable")

    def gen_decl(self, keyword: str, spec) -> GenDecl:
        start = self._consume(keyword)

        if not self._accept("LPAREN"):
            node = spec()
            return GenDecl(
                keyword=keyword.lower(),  # type: ignore
                specs=[node],
                loc=nodeloc(start, node),
            )

        specs = []
        while self._peek().type != "RPAREN":
            specs.append(spec())
            self._terminator()
        end = self._consume("RPAREN")

        return GenDecl(
            keyword=keyword.lower(),  # type: ignore
            specs=specs,
            grouped=True,
            loc=nodeloc(start, end),
        )

    def import_spec(self) -> ImportSpec:
        name = None
        if self._peek().type in {"ID", "PERIOD"}:
            name = self._make_id(self._consume())

        path = self._consume("STRING")
        literal = BasicLit(kind="STRING", value=path.value, loc=path.loc)
        return ImportSpec(
            name=name,
            path=literal,
            loc=nodeloc(name or literal, literal),
        )

    def type_spec(self) -> TypeSpec:
        name = self._make_id(self._consume("ID"))

        type_params = []
        if self._peek().type == "LBRACKET" and self._type_params_follow():
            type_params = self.type_params()

        alias = bool(self._accept("ASSIGN"))
        typ = self.type()

        return TypeSpec(
            name=name,
            type_params=type_params,
            type=typ,
            alias=alias,
            loc=nodeloc(name, typ),
        )

    def _type_params_follow(self) -> bool:
        """
        Distinguish `type T[P any] ...` from the array type in `type T [N]int`.
        """
        if self._peek(2).type != "ID":
            return False

        following = self._peek(3).type
        if following == "TIMES":
            # `[P *C]` reads as the array length P * C unless the operand can
            # only be a type or another parameter follows
            return self._peek(4).type in TYPE_ELEMENTS or self._list_follows()
        return following in TYPE_START - {"LBRACKET", "LPAREN"} | {
            "COMMA",
            "TILDE",
        }

    def _list_follows(self) -> bool:
        """Whether a comma appears at the top level of the opening bracket."""
        end = self._matching(1, "LBRACKET", "RBRACKET")
        depth = 0
        for n in range(2, end):
            typ = self._peek(n).type
            if typ in {"LBRACKET", "LPAREN", "LBRACE"}:
                depth += 1
            elif typ in {"RBRACKET", "RPAREN", "RBRACE"}:
                depth -= 1
            elif typ == "COMMA" and depth == 0:
                return True
        return False

    def type_params(self) -> list[Field]:
        self._consume("LBRACKET")
        params = []
        names = []
        while self._peek().type != "RBRACKET":
            names.append(self._make_id(self._consume("ID")))
            if self._accept("COMMA"):
                continue

            constraint = self.constraint()
            params.append(
                Field(names=names, type=constraint, loc=nodeloc(names[0], constraint))
            )
            names = []
            if not self._accept("COMMA"):
                break
        self._consume("RBRACKET")
        return params

    def constraint(self) -> AstNode:
        """Type element: a union of (possibly approximate) types."""
        left = self.type_term()
        while self._accept("PIPE"):
            right = self.type_term()
            left = BinaryExpr(op="|", left=left, right=right, loc=nodeloc(left, right))
        return left

    def type_term(self) -> AstNode:
        if tilde := self._accept("TILDE"):
            operand = self.type()
            return UnaryExpr(op="~", operand=operand, loc=nodeloc(tilde, operand))
        return self.type()

    def value_spec(self) -> ValueSpec:
        names = [self._make_id(self._consume("ID"))]
        while self._accept("COMMA"):
            names.append(self._make_id(self._consume("ID")))

        typ = None
        if self._peek().type in TYPE_START:
            typ = self.type()

        end = typ or names[-1]
        if self._accept("ASSIGN"):
            end = self._skip_expression_list()

        return ValueSpec(names=names, type=typ, loc=nodeloc(names[0], end))

    def _skip_expression_list(self) -> Token:
        """Skip an initializer up to the end of the spec."""
        brackets = {"LPAREN": "RPAREN", "LBRACKET": "RBRACKET", "LBRACE": "RBRACE"}
        last = self.tok
        while self._peek().type not in {"SEMICOLON", "RPAREN", "EOF"}:
            if self._peek().type in brackets:
                typ = self._peek().type
                last = self._skip_balanced(typ, brackets[typ])
            else:
                last = self._consume()
        return last

    def func_decl(self) -> FuncDecl:
        start = self._consume("FUNC")

        receiver = None
        if self._peek().type == "LPAREN":
            receiver = self.parameters()

        name = self._make_id(self._consume("ID"))
        type_params = []
        if self._peek().type == "LBRACKET":
            type_params = self.type_params()

        signature = self.signature(start)

        end: Token | AstNode = signature
        has_body = self._peek().type == "LBRACE"
        if has_body:
            end = self._skip_balanced("LBRACE", "RBRACE")

        return FuncDecl(
            name=name,
            receiver=receiver,
            type_params=type_params,
            type=signature,
            has_body=has_body,
            loc=nodeloc(start, end),
        )

    def signature(self, start: Token) -> FuncType:
        params = self.parameters()
        end = self.tok

        results = []
        if self._peek().type == "LPAREN":
            results = self.parameters()
            end = self.tok
        elif self._peek().type in TYPE_START:
            typ = self.type()
            results = [Field(names=[], type=typ, loc=typ.loc)]
            end = typ

        return FuncType(params=params, results=results, loc=nodeloc(start, end))

    def parameters(self) -> list[Field]:
        """
        Parse a parenthesized parameter list.

        Go allows either all parameters to be named, `(a, b int, c string)`, or
        none, `(int, string)`; which form applies is only known at the end.
        """
        self._consume("LPAREN")
        entries: list[tuple[AstNode, AstNode | None]] = []
        while self._peek().type != "RPAREN":
            first = self.parameter_type()
            second = None
            if self._peek().type not in {"COMMA", "RPAREN"}:
                if not isinstance(first, Identifier):
                    self.errors.unexpectedToken(self._peek())
                second = self.parameter_type()
            entries.append((first, second))
            if not self._accept("COMMA"):
                break
        self._consume("RPAREN")

        if not any(typ is not None for _, typ in entries):
            return [Field(names=[], type=typ, loc=typ.loc) for typ, _ in entries]

        params = []
        names: list[Identifier] = []
        for name, typ in entries:
            if not isinstance(name, Identifier):
                self.errors.unexpectedToken(
                    Token(type="TYPE", value=type(name).__name__, loc=name.loc),
                    help="mixed named and unnamed parameters",
                )
            names.append(name)  # type: ignore
            if typ is not None:
                params.append(Field(names=names, type=typ, loc=nodeloc(names[0], typ)))
                names = []
        if names:
            self.errors.unexpectedToken(
                Token(type="ID", value=names[-1].name, loc=names[-1].loc),
                help="missing parameter type",
            )
        return params

    def parameter_type(self) -> AstNode:
        if ellipsis := self._accept("ELLIPSIS"):
            element = self.type()
            return Variadic(element=element, loc=nodeloc(ellipsis, element))
        return self.type()

    def type(self) -> AstNode:
        first = self._peek()

        if first.type == "ID":
            """Named type, possibly qualified or instantiated"""
            return self.type_name()
        elif first.type == "TIMES":
            """Pointer type"""
            star = self._consume("TIMES")
            value = self.type()
            return StarExpr(value=value, loc=nodeloc(star, value))
        elif first.type == "LBRACKET":
            """Array or slice type"""
            return self.array_type()
        elif first.type == "MAP":
            """Map type"""
            start = self._consume("MAP")
            self._consume("LBRACKET")
            key = self.type()
            self._consume("RBRACKET")
            value = self.type()
            return MapType(key=key, value=value, loc=nodeloc(start, value))
        elif first.type in {"CHAN", "ARROW"}:
            """Channel type"""
            return self.chan_type()
        elif first.type == "FUNC":
            """Function type"""
            return self.signature(self._consume("FUNC"))
        elif first.type == "STRUCT":
            """Struct type"""
            return self.struct_type()
        elif first.type == "INTERFACE":
            """Interface type"""
            return self.interface_type()
        elif first.type == "LPAREN":
            start = self._consume("LPAREN")
            value = self.type()
            end = self._consume("RPAREN")
            return ParenExpr(value=value, loc=nodeloc(start, end))

        self.errors.unexpectedToken(first, help="expected a type")
        raise AssertionError("unreachable")

    def type_name(self) -> AstNode:
        name: AstNode = self._make_id(self._consume("ID"))
        if self._peek().type == "PERIOD":
            self._consume("PERIOD")
            member = self._make_id(self._consume("ID"))
            name = SelectorExpr(value=name, member=member, loc=nodeloc(name, member))

        if self._peek().type == "LBRACKET" and self._type_args_follow():
            self._consume("LBRACKET")
            indices = [self.type()]
            while self._accept("COMMA"):
                if self._peek().type == "RBRACKET":
                    break
                indices.append(self.type())
            end = self._consume("RBRACKET")
            name = IndexExpr(value=name, indices=indices, loc=nodeloc(name, end))

        return name

    def _type_args_follow(self) -> bool:
        """
        Tell `List[T]` apart from a name followed by an array or slice type,
        as in the parameter `a []int` or `buf [4]byte`.
        """
        if self._peek(2).type == "RBRACKET":
            return False
        end = self._matching(1, "LBRACKET", "RBRACKET")
        if end < 0:
            return False
        return self._peek(end + 1).type not in TYPE_START - {"LPAREN"}

    def array_type(self) -> AstNode:
        start = self._consume("LBRACKET")
        length = None
        if self._peek().type != "RBRACKET":
            length = self.expression()
        self._consume("RBRACKET")
        element = self.type()
        return ArrayType(length=length, element=element, loc=nodeloc(start, element))

    def chan_type(self) -> AstNode:
        if arrow := self._accept("ARROW"):
            self._consume("CHAN")
            value = self.type()
            return ChanType(direction="recv", value=value, loc=nodeloc(arrow, value))

        start = self._consume("CHAN")
        direction = "send" if self._accept("ARROW") else "both"
        value = self.type()
        return ChanType(direction=direction, value=value, loc=nodeloc(start, value))

    def struct_type(self) -> StructType:
        start = self._consume("STRUCT")
        self._consume("LBRACE")
        fields = []
        while self._peek().type != "RBRACE":
            fields.append(self.field_decl())
            self._terminator()
        end = self._consume("RBRACE")
        return StructType(fields=fields, loc=nodeloc(start, end))

    def field_decl(self) -> Field:
        if self._embedded_follows():
            """Embedded field: named after its unqualified type name"""
            typ = self.type()
            base = typ.value if isinstance(typ, StarExpr) else typ
            base = base.value if isinstance(base, IndexExpr) else base
            name = base.member if isinstance(base, SelectorExpr) else base
            if not isinstance(name, Identifier):
                self.errors.unexpectedToken(
                    Token(type="TYPE", value=type(typ).__name__, loc=typ.loc),
                    help="embedded field must be a type name",
                )
            tag = self._tag()
            return Field(
                names=[name],  # type: ignore
                type=typ,
                tag=tag,
                embedded=True,
                loc=nodeloc(typ, tag or typ),
            )

        names = [self._make_id(self._consume("ID"))]
        while self._accept("COMMA"):
            names.append(self._make_id(self._consume("ID")))
        typ = self.type()
        tag = self._tag()
        return Field(names=names, type=typ, tag=tag, loc=nodeloc(names[0], tag or typ))

    def _embedded_follows(self) -> bool:
        if self._peek().type == "TIMES":
            return True
        if self._peek().type != "ID":
            return False

        following = self._peek(2).type
        if following == "PERIOD":
            return True
        if following == "LBRACKET":
            # `T[int]` embeds an instantiated type, `A [4]int` declares a field
            end = self._matching(2, "LBRACKET", "RBRACKET")
            following = self._peek(end + 1).type if end > 0 else "EOF"
        return following in {"SEMICOLON", "STRING", "RBRACE"}

    def _tag(self) -> BasicLit | None:
        if tok := self._accept("STRING"):
            return BasicLit(kind="STRING", value=tok.value, loc=tok.loc)
        return None

    def interface_type(self) -> InterfaceType:
        start = self._consume("INTERFACE")
        self._consume("LBRACE")
        elements = []
        while self._peek().type != "RBRACE":
            if self._peek().type == "ID" and self._peek(2).type == "LPAREN":
                """Method"""
                name = self._make_id(self._consume("ID"))
                signature = self.signature(self.tok)
                elements.append(
                    Field(names=[name], type=signature, loc=nodeloc(name, signature))
                )
            else:
                """Embedded interface or type union"""
                constraint = self.constraint()
                elements.append(Field(names=[], type=constraint, loc=constraint.loc))
            self._terminator()
        end = self._consume("RBRACE")
        return InterfaceType(elements=elements, loc=nodeloc(start, end))

    def expression(self) -> AstNode:
        """
        Constant expression, as found in array lengths.

        Operators are folded left to right; precedence is irrelevant since the
        expression is only ever printed back.
        """
        left = self.unary()
        while self._peek().type in BINARY_OPERATORS:
            op = self._consume()
            right = self.unary()
            left = BinaryExpr(
                op=op.value, left=left, right=right, loc=nodeloc(left, right)
            )
        return left

    def unary(self) -> AstNode:
        if self._peek().type in {"PLUS", "MINUS", "CARET", "BANG"}:
            op = self._consume()
            operand = self.unary()
            return UnaryExpr(op=op.value, operand=operand, loc=nodeloc(op, operand))
        return self.primary()

    def primary(self) -> AstNode:
        first = self._peek()
        if first.type in LITERALS:
            tok = self._consume()
            node: AstNode = BasicLit(
                kind=tok.type, value=tok.value, loc=tok.loc  # type: ignore
            )
        elif first.type == "LPAREN":
            start = self._consume("LPAREN")
            value = self.expression()
            end = self._consume("RPAREN")
            node = ParenExpr(value=value, loc=nodeloc(start, end))
        elif first.type == "ID":
            node = self._make_id(self._consume("ID"))
            if self._peek().type == "PERIOD":
                self._consume("PERIOD")
                member = self._make_id(self._consume("ID"))
                node = SelectorExpr(
                    value=node, member=member, loc=nodeloc(node, member)
                )
        else:
            self.errors.unexpectedToken(first)
            raise AssertionError("unreachable")

        if self._peek().type == "LPAREN":
            """Call, e.g. unsafe.Sizeof(x) or len(table)"""
            self._consume("LPAREN")
            args = []
            while self._peek().type != "RPAREN":
                if self._peek().type in TYPE_START - {"ID", "LPAREN"}:
                    args.append(self.type())
                else:
                    args.append(self.expression())
                if not self._accept("COMMA"):
                    break
            end = self._consume("RPAREN")
            node = CallExpr(callee=node, args=args, loc=nodeloc(node, end))

        return node
