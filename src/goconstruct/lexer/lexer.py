from functools import lru_cache

import ply.lex as plylex

from ..classes import ModuleMeta
from ..exceptions.exceptions import Exceptions
from ..nodes.core import Location, Token


class LexTokens:
    reserved = (
        "BREAK",
        "CASE",
        "CHAN",
        "CONST",
        "CONTINUE",
        "DEFAULT",
        "DEFER",
        "ELSE",
        "FALLTHROUGH",
        "FOR",
        "FUNC",
        "GO",
        "GOTO",
        "IF",
        "IMPORT",
        "INTERFACE",
        "MAP",
        "PACKAGE",
        "RANGE",
        "RETURN",
        "SELECT",
        "STRUCT",
        "SWITCH",
        "TYPE",
        "VAR",
    )

    tokens = reserved + (
        # Literals (identifier, number, rune, string)
        "ID",
        "INT",
        "FLOAT",
        "IMAG",
        "CHAR",
        "STRING",
        # Arithmetic and bitwise operators
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
        # Compound assignment
        "PLUS_ASSIGN",
        "MINUS_ASSIGN",
        "TIMES_ASSIGN",
        "DIVIDE_ASSIGN",
        "MOD_ASSIGN",
        "AND_ASSIGN",
        "OR_ASSIGN",
        "XOR_ASSIGN",
        "LSHIFT_ASSIGN",
        "RSHIFT_ASSIGN",
        "ANDNOT_ASSIGN",
        # Logical and comparison operators
        "LAND",
        "LOR",
        "ARROW",
        "INCREMENT",
        "DECREMENT",
        "EQ",
        "NE",
        "LT",
        "LE",
        "GT",
        "GE",
        "BANG",
        "TILDE",
        # Assignment (=, :=)
        "ASSIGN",
        "DEFINE",
        # Delimiters ( ) [ ] { } , . ; : ...
        "LPAREN",
        "RPAREN",
        "LBRACKET",
        "RBRACKET",
        "LBRACE",
        "RBRACE",
        "COMMA",
        "PERIOD",
        "ELLIPSIS",
        "SEMICOLON",
        "COLON",
        # Hacks
        "WHITESPACE",
    )

    # Operators
    t_PLUS = r"\+"
    t_MINUS = r"-"
    t_TIMES = r"\*"
    t_DIVIDE = r"/"
    t_MOD = r"%"
    t_AMPERSAND = r"&"
    t_PIPE = r"\|"
    t_CARET = r"\^"
    t_LSHIFT = r"<<"
    t_RSHIFT = r">>"
    t_ANDNOT = r"&\^"

    t_PLUS_ASSIGN = r"\+="
    t_MINUS_ASSIGN = r"-="
    t_TIMES_ASSIGN = r"\*="
    t_DIVIDE_ASSIGN = r"/="
    t_MOD_ASSIGN = r"%="
    t_AND_ASSIGN = r"&="
    t_OR_ASSIGN = r"\|="
    t_XOR_ASSIGN = r"\^="
    t_LSHIFT_ASSIGN = r"<<="
    t_RSHIFT_ASSIGN = r">>="
    t_ANDNOT_ASSIGN = r"&\^="

    t_LAND = r"&&"
    t_LOR = r"\|\|"
    t_ARROW = r"<-"
    t_INCREMENT = r"\+\+"
    t_DECREMENT = r"--"

    # Comparison operators
    t_EQ = r"=="
    t_NE = r"!="
    t_LE = r"<="
    t_GE = r">="
    t_LT = r"<"
    t_GT = r">"
    t_BANG = r"!"
    t_TILDE = r"~"

    # Assignment operators
    t_ASSIGN = r"="
    t_DEFINE = r":="

    # Delimiters
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"
    t_LBRACE = r"\{"
    t_RBRACE = r"\}"
    t_COMMA = r","
    t_PERIOD = r"\."
    t_ELLIPSIS = r"\.\.\."
    t_SEMICOLON = r";"
    t_COLON = r":"

    def t_comment(self, t):
        r"(/\*(.|\n)*?(\*/|\Z))|(//[^\n]*)"
        unterminated = len(t.value) < 4 or not t.value.endswith("*/")
        if t.value.startswith("/*") and unterminated:
            t.value = "/*"
            t.type = "comment"
            e = SyntaxError()
            e.tok = t  # type: ignore
            raise e

        newlines = t.value.count("\n")
        t.lexer.lineno += newlines
        if newlines:
            # a general comment spanning lines acts like a newline
            t.type = "WHITESPACE"
            t.value = "\n" * newlines
            return t

    def t_WHITESPACE(self, t):
        r"[ \t\r\n]+"
        t.lexer.lineno += t.value.count("\n")
        return t

    # Identifiers and reserved words
    reserved_map = {}
    for r in reserved:
        reserved_map[r.lower()] = r

    def t_ID(self, t):
        r"[^\W\d]\w*"
        t.type = self.reserved_map.get(t.value, "ID")
        return t

    # Number literals
    def t_NUMBER(self, t):
        r"(0[xX][0-9a-fA-F_]*(\.[0-9a-fA-F_]*)?([pP][+-]?[0-9_]+)?i?)|(0[bB][01_]+i?)|(0[oO][0-7_]+i?)|(([0-9][0-9_]*(\.[0-9_]*)?|\.[0-9][0-9_]*)([eE][+-]?[0-9_]+)?i?)"
        if t.value.endswith("i"):
            t.type = "IMAG"
        elif t.value[:2].lower() == "0x":
            t.type = "FLOAT" if "." in t.value or "p" in t.value.lower() else "INT"
        elif "." in t.value or "e" in t.value.lower():
            t.type = "FLOAT"
        else:
            t.type = "INT"
        return t

    # String and rune literals
    def t_RAW_STRING(self, t):
        r"`[^`]*`"
        t.lexer.lineno += t.value.count("\n")
        t.type = "STRING"
        return t

    def t_STRING(self, t):
        r"\"([^\\\n\"]|(\\.))*\""
        return t

    def t_CHAR(self, t):
        r"'([^\\\n']|(\\.))+'"
        return t

    def t_error(self, t):
        rest = t.lexer.lexdata[t.lexpos :]
        t.value = rest[0]
        if rest[0] in "\"'`":
            t.type = {
                "'": "rune literal",
                '"': "string literal",
                "`": "raw string literal",
            }[rest[0]]
        else:
            t.type = None
        e = SyntaxError()
        e.tok = t  # type: ignore
        raise e


# tokens after which a newline terminates the statement
SEMICOLON_TRIGGERS = {
    "ID",
    "INT",
    "FLOAT",
    "IMAG",
    "CHAR",
    "STRING",
    "BREAK",
    "CONTINUE",
    "FALLTHROUGH",
    "RETURN",
    "INCREMENT",
    "DECREMENT",
    "RPAREN",
    "RBRACKET",
    "RBRACE",
}


@lru_cache(maxsize=None)
def _build():
    return plylex.lex(module=LexTokens(), errorlog=plylex.NullLogger())


def _location(source: str, lexpos: int, lineno: int, value: str) -> Location:
    col = lexpos - source.rfind("\n", 0, lexpos)
    newlines = value.count("\n")
    if newlines:
        end_col = len(value) - value.rfind("\n") - 1
    else:
        end_col = col + len(value) - 1
    return Location(line=lineno, col=col, end_line=lineno + newlines, end_col=end_col)


def lex(source: str, module: ModuleMeta, debug=False) -> list[Token]:
    """
    Tokenize Go source.

    Semicolons are inserted after the final token of a line the way the Go
    grammar requires, so the parser only ever sees explicit terminators.
    """
    lexer = _build().clone()
    errors = Exceptions(module=module)

    # a leading byte order mark is ignored
    source = source.removeprefix("\ufeff")

    output: list[Token] = []
    lexer.lineno = 1
    lexer.lexpos = 0
    lexer.input(source)

    last = None
    while True:
        try:
            tok = lexer.token()
        except SyntaxError as e:
            tok = e.tok  # type: ignore
            token = Token(
                type="ILLEGAL",
                value=tok.value,
                loc=_location(source, tok.lexpos, tok.lineno, tok.value),
            )
            if tok.type:
                errors.unterminated(token, what=tok.type)
            errors.illegalCharacter(token)

        if not tok:
            break

        token = Token(
            type=tok.type,
            value=tok.value,
            loc=_location(source, tok.lexpos, tok.lineno, tok.value),
        )

        if token.type == "WHITESPACE":
            if "\n" in token.value and last in SEMICOLON_TRIGGERS:
                output.append(Token(type="SEMICOLON", value="\n", loc=token.loc))
                last = "SEMICOLON"
        else:
            last = token.type

        if debug:
            print(token)

        output.append(token)

    if last in SEMICOLON_TRIGGERS:
        output.append(Token(type="SEMICOLON", value="\n", loc=Location()))

    if debug:
        print("=" * 80)

    return output
