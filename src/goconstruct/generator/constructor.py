from ..nodes.ast import StructType, TypeSpec
from .printer import TypePrinter
from .tstr import tstr

PUBLIC_PREFIX = "New"
PRIVATE_PREFIX = "new"

TEMPLATE = "func $name$params($args) *$type {\n$body\n}\n"


def constructor_name(name: str) -> str:
    capitalized = name[:1].upper() + name[1:]
    # decided on the generated name, so the exported prefix wins for any
    # identifier that can be capitalized
    exported = capitalized[:1] == capitalized[:1].upper()
    return (PUBLIC_PREFIX if exported else PRIVATE_PREFIX) + capitalized


def synthesize(spec: TypeSpec, printer: TypePrinter) -> str:
    """
    Render the constructor of a struct type spec.

    Every field name becomes one positional argument, in declaration order,
    typed with the field's own type expression.
    """
    assert isinstance(spec.type, StructType)

    args = []
    names = []
    for field in spec.type.fields:
        typ = printer.render(field.type)
        for name in field.names:
            args.append(f"{name.name} {typ}")
            names.append(name.name)

    type_name = spec.name.name
    if spec.type_params:
        type_args = ", ".join(n.name for p in spec.type_params for n in p.names)
        type_name += f"[{type_args}]"

    taken = set(names) | {n.name for p in spec.type_params for n in p.names}
    var = "s"
    while var in taken:
        var += "_"

    body = [f"\t{var} := {type_name}{{}}"]
    body += [f"\t{var}.{name} = {name}" for name in names]
    body.append(f"\treturn &{var}")

    out = tstr(TEMPLATE)
    out["name"] = constructor_name(spec.name.name)
    out["params"] = (
        f"[{printer.fields(spec.type_params)}]" if spec.type_params else ""
    )
    out["args"] = ",".join(args)
    out["type"] = type_name
    out["body"] = "\n".join(body)
    return str(out)
