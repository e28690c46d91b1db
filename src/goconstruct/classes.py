from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ModuleMeta:
    path: Path
    source: str


@dataclass
class GeneratorConfig:
    types: list[str] = field(default_factory=list)
    suffix: str = "_gen"
    tool: str = "goconstruct"


@dataclass
class GeneratedFile:
    source: ModuleMeta
    path: Path
    package: str
    imports: list[str]
    constructors: list[str]
    code: str
