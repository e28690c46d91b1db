"""
Import resolution for generated files.

Only packages referenced from the field types of the selected structs are
carried over, so the generated file never has an unused import. Dot imports
are always kept since their uses cannot be seen syntactically.
"""

import dataclasses
from typing import Any

from ..nodes.ast import GenDecl, ImportSpec, SelectorExpr, SourceFile, TypeSpec
from ..nodes.core import Identifier

WILDCARD = "."


def import_table(source: SourceFile) -> dict[str, ImportSpec]:
    """Map local package names to their import specs; later specs win."""
    table: dict[str, ImportSpec] = {}
    for spec in source.imports:
        table[spec.local_name] = spec
    return table


def used_qualifiers(source: SourceFile, specs: list[TypeSpec]) -> dict[str, bool]:
    """
    Collect the qualifiers of `pkg.Name` references inside the given specs.

    The whole file is walked once; references only count while inside one of
    the given specs, which are matched by identity so that two declarations
    with the same name are never confused.
    """
    selected = {id(spec) for spec in specs}
    used: dict[str, bool] = {}

    def visit(n: Any, in_scope: bool):
        if isinstance(n, (list, tuple)):
            for item in n:
                visit(item, in_scope)
            return

        match n:
            case SourceFile():
                pass
            case GenDecl():
                if n.keyword != "type":
                    return
            case TypeSpec():
                in_scope = in_scope or id(n) in selected
                if not in_scope:
                    return
            case SelectorExpr(value=Identifier(name=name)):
                if in_scope:
                    used[name] = True
            case _:
                if not in_scope:
                    return

        try:
            fields = dataclasses.fields(n)
        except TypeError:
            return

        for field in fields:
            if field.name == "loc":
                continue
            val = getattr(n, field.name)
            if val is not None:
                visit(val, in_scope)

    visit(source, False)
    return used


def render_import(spec: ImportSpec) -> str:
    if spec.name is None:
        return f"\t{spec.path.value}"
    return f"\t{spec.name.name} {spec.path.value}"


def resolve_imports(source: SourceFile, specs: list[TypeSpec]) -> list[str]:
    """Import lines needed by constructors of the given specs, in source order."""
    used = used_qualifiers(source, specs)

    result = []
    for name, spec in import_table(source).items():
        if name == WILDCARD or used.get(name, False):
            result.append(render_import(spec))
    return result
