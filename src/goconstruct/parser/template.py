from ..classes import ModuleMeta
from ..exceptions.exceptions import Exceptions
from ..nodes.core import Identifier, Location, Token


class ParserTemplate:
    def __init__(self, tokens: list[Token], module: ModuleMeta):
        self.tokens = [tok for tok in tokens if tok.type != "WHITESPACE"]
        self.pos = 0
        self.module = module
        self.errors = Exceptions(module=module)

    def _consume(self, *types: str) -> Token:
        if self._peek().type == "EOF":
            self.errors.unexpectedEOF(loc=self._last_loc())

        self.tok = self.tokens[self.pos]
        self.pos += 1
        if types and (self.tok.type not in types):
            self.errors.unexpectedToken(self.tok)
        return self.tok

    def _peek(self, n: int = 1) -> Token:
        if self.pos + n - 1 < len(self.tokens):
            return self.tokens[self.pos + n - 1]
        return Token(type="EOF", value="EOF", loc=self._last_loc())

    def _accept(self, *types: str) -> Token | None:
        if self._peek().type in types:
            return self._consume()
        return None

    def _last_loc(self) -> Location:
        for tok in reversed(self.tokens):
            if tok.loc.line > 0:
                return Location(
                    line=tok.loc.end_line,
                    col=tok.loc.end_col,
                    end_line=tok.loc.end_line,
                    end_col=tok.loc.end_col,
                )
        return Location()

    def _skip_balanced(self, open: str, close: str) -> Token:
        """Consume tokens up to and including the bracket closing `open`."""
        self._consume(open)
        depth = 1
        while depth:
            tok = self._consume()
            if tok.type == open:
                depth += 1
            elif tok.type == close:
                depth -= 1
        return tok

    def _matching(self, n: int, open: str, close: str) -> int:
        """Offset of the bracket closing the one at peek offset `n`, or -1."""
        depth = 0
        while self.pos + n - 1 < len(self.tokens):
            typ = self._peek(n).type
            if typ == open:
                depth += 1
            elif typ == close:
                depth -= 1
                if depth == 0:
                    return n
            n += 1
        return -1

    def _make_id(self, tok: Token) -> Identifier:
        return Identifier(name=tok.value, loc=tok.loc)
