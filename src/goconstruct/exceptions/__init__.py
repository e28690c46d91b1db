from .exceptions import (
    Exceptions,
    GenerationError,
    IOFailure,
    ParseFailure,
    RenderFailure,
)

__all__ = [
    "Exceptions",
    "GenerationError",
    "IOFailure",
    "ParseFailure",
    "RenderFailure",
]
