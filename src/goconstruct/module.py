from pathlib import Path
from typing import Optional

from .classes import GeneratedFile, GeneratorConfig, ModuleMeta
from .exceptions.exceptions import Exceptions
from .generator.generator import Generator
from .lexer.lexer import lex
from .nodes.ast import SourceFile
from .parser.parser import Parser


class Module:
    """One Go source file and the constructors generated for it."""

    def __init__(self, path: str | Path, source: Optional[str] = None):
        self.meta = ModuleMeta(Path(path), source or "")
        self.errors = Exceptions(module=self.meta)

        if source is None:
            try:
                self.meta.source = self.meta.path.read_text(encoding="utf-8")
            except OSError as e:
                self.errors.ioFailure("read", e)

        self.ast: Optional[SourceFile] = None
        self.generated: Optional[GeneratedFile] = None

    def process(self, config: Optional[GeneratorConfig] = None):
        self.parse()
        self.generate(config)
        return self.generated

    def parse(self):
        lexed = lex(self.meta.source, module=self.meta)
        parser = Parser(lexed, module=self.meta)
        self.ast = parser.start()

    def generate(self, config: Optional[GeneratorConfig] = None):
        assert self.ast is not None
        generator = Generator(self.ast, module=self.meta, config=config)
        self.generated = generator.start()

    def write(self) -> Optional[Path]:
        """Write the generated file, replacing any previous one."""
        if self.generated is None:
            return None

        try:
            with open(self.generated.path, "w", encoding="utf-8", newline="") as f:
                f.write(self.generated.code)
        except OSError as e:
            self.errors.ioFailure("write", e)
        return self.generated.path


def source_files(directory: str | Path, extension: str = ".go") -> list[Path]:
    """Source files directly inside `directory`, sorted by name."""
    return sorted(
        path
        for path in Path(directory).iterdir()
        if path.is_file() and path.name.endswith(extension)
    )
