"""Shared test fixtures."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from goconstruct.classes import ModuleMeta
from goconstruct.lexer.lexer import lex
from goconstruct.nodes.ast import SourceFile
from goconstruct.parser.parser import Parser


def dedent(source: str) -> str:
    return textwrap.dedent(source).lstrip("\n")


@pytest.fixture
def meta() -> ModuleMeta:
    return ModuleMeta(Path("example.go"), "")


@pytest.fixture
def parse():
    """Parse Go source into a SourceFile.

    Usage:
        unit = parse("package p\\ntype T struct{ A int }")
    """

    def _parse(source: str, path: str = "example.go") -> SourceFile:
        source = dedent(source)
        module = ModuleMeta(Path(path), source)
        return Parser(lex(source, module=module), module=module).start()

    return _parse


@pytest.fixture
def go_dir(tmp_path: Path) -> Path:
    """Temporary Go package directory."""
    path = tmp_path / "pkg"
    path.mkdir()
    return path


@pytest.fixture
def write_go(go_dir: Path):
    """Helper to write Go files into the package directory."""

    def _write(name: str, content: str) -> Path:
        file_path = go_dir / name
        file_path.write_text(dedent(content), encoding="utf-8")
        return file_path

    return _write
