from ..nodes.ast import GenDecl, SourceFile, StructType, TypeSpec


def extract_aggregates(source: SourceFile) -> list[TypeSpec]:
    """
    Return the top-level struct type specs of a file, in declaration order.

    Only the first spec of a grouped `type (...)` declaration is inspected.
    """
    result = []
    for decl in source.decls:
        if not isinstance(decl, GenDecl) or decl.keyword != "type" or not decl.specs:
            continue
        spec = decl.specs[0]
        if isinstance(spec, TypeSpec) and not spec.alias:
            if isinstance(spec.type, StructType):
                result.append(spec)
    return result


def filter_aggregates(specs: list[TypeSpec], types: list[str]) -> list[TypeSpec]:
    if not types:
        return list(specs)
    return [spec for spec in specs if spec.name.name in types]
