from .parser import Parser

__all__ = ["Parser"]
