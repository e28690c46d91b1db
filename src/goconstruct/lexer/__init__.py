from .lexer import lex

__all__ = ["lex"]
