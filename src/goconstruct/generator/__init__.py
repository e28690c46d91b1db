from .constructor import constructor_name, synthesize
from .generator import Generator, output_path
from .imports import resolve_imports, used_qualifiers
from .printer import TypePrinter
from .select import extract_aggregates, filter_aggregates

__all__ = [
    "Generator",
    "TypePrinter",
    "constructor_name",
    "extract_aggregates",
    "filter_aggregates",
    "output_path",
    "resolve_imports",
    "synthesize",
    "used_qualifiers",
]
