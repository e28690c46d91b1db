"""Generation of constructor files from parsed Go sources."""

from pathlib import Path
from typing import Optional

from ..classes import GeneratedFile, GeneratorConfig, ModuleMeta
from ..nodes.ast import SourceFile
from .constructor import synthesize
from .imports import resolve_imports
from .printer import TypePrinter
from .select import extract_aggregates, filter_aggregates
from .tstr import tstr

HEADER = "// Code generated by $tool. DO NOT EDIT.\n\npackage $package\n\n$imports"
IMPORTS = "import (\n$lines\n)\n\n"


def output_path(path: Path, suffix: str = "_gen") -> Path:
    """`dir/file.go` becomes `dir/file_gen.go`."""
    return path.with_name(path.stem + suffix + path.suffix)


class Generator:
    def __init__(
        self,
        source: SourceFile,
        module: ModuleMeta,
        config: Optional[GeneratorConfig] = None,
    ):
        self.source = source
        self.module = module
        self.config = config or GeneratorConfig()
        self.printer = TypePrinter(module=module)

    def start(self) -> Optional[GeneratedFile]:
        """Generate the companion file, or None when no struct is selected."""
        specs = filter_aggregates(extract_aggregates(self.source), self.config.types)
        if not specs:
            return None

        constructors = [synthesize(spec, self.printer) for spec in specs]
        imports = resolve_imports(self.source, specs)

        header = tstr(HEADER)
        header["tool"] = self.config.tool
        header["package"] = self.source.package.name
        if imports:
            block = tstr(IMPORTS)
            block["lines"] = "\n".join(imports)
            header["imports"] = block
        else:
            header.remove("imports")

        return GeneratedFile(
            source=self.module,
            path=output_path(self.module.path, self.config.suffix),
            package=self.source.package.name,
            imports=imports,
            constructors=constructors,
            code=str(header) + "\n".join(constructors),
        )
