from . import (
    classes,
    exceptions,
    generator,
    lexer,
    module,
    nodes,
    parser,
    utils,
)
from ._version import __author__, __version__

__all__ = [
    "classes",
    "exceptions",
    "generator",
    "lexer",
    "module",
    "nodes",
    "parser",
    "utils",
    "__version__",
    "__author__",
]
