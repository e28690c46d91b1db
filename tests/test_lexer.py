"""Unit tests for the Go tokenizer."""

from __future__ import annotations

import pytest

from goconstruct.classes import ModuleMeta
from goconstruct.exceptions import ParseFailure
from goconstruct.lexer.lexer import lex


def types(source: str, meta: ModuleMeta) -> list[str]:
    meta.source = source
    return [tok.type for tok in lex(source, module=meta) if tok.type != "WHITESPACE"]


class TestSemicolonInsertion:
    def test_after_identifier_and_literal(self, meta) -> None:
        assert types("package main\nvar x = 1\n", meta) == [
            "PACKAGE",
            "ID",
            "SEMICOLON",
            "VAR",
            "ID",
            "ASSIGN",
            "INT",
            "SEMICOLON",
        ]

    def test_not_after_operator(self, meta) -> None:
        assert types("x +\ny", meta) == ["ID", "PLUS", "ID", "SEMICOLON"]

    def test_not_after_opening_brace(self, meta) -> None:
        assert types("struct {\n}", meta) == [
            "STRUCT",
            "LBRACE",
            "RBRACE",
            "SEMICOLON",
        ]

    def test_line_comment_keeps_newline(self, meta) -> None:
        assert types("a // note\nb", meta) == ["ID", "SEMICOLON", "ID", "SEMICOLON"]

    def test_multiline_block_comment_acts_as_newline(self, meta) -> None:
        assert types("a /* x\n */ b", meta) == ["ID", "SEMICOLON", "ID", "SEMICOLON"]

    def test_inline_block_comment_is_dropped(self, meta) -> None:
        assert types("a /* x */ b", meta) == ["ID", "ID", "SEMICOLON"]

    def test_explicit_semicolon_is_kept(self, meta) -> None:
        assert types("a; b", meta) == ["ID", "SEMICOLON", "ID", "SEMICOLON"]


class TestLiterals:
    def test_number_kinds(self, meta) -> None:
        assert types("1 2.5 0x1F 0b101 1e5 3i", meta) == [
            "INT",
            "FLOAT",
            "INT",
            "INT",
            "FLOAT",
            "IMAG",
            "SEMICOLON",
        ]

    def test_strings_and_runes(self, meta) -> None:
        assert types("\"a\\\"b\" `raw\nstring` 'x'", meta) == [
            "STRING",
            "STRING",
            "CHAR",
            "SEMICOLON",
        ]

    def test_keywords_are_reserved(self, meta) -> None:
        assert types("type struct interface map chan func", meta) == [
            "TYPE",
            "STRUCT",
            "INTERFACE",
            "MAP",
            "CHAN",
            "FUNC",
        ]


class TestOperators:
    def test_longest_match(self, meta) -> None:
        assert types("a <<= b &^ c <- d ... e := f", meta) == [
            "ID",
            "LSHIFT_ASSIGN",
            "ID",
            "ANDNOT",
            "ID",
            "ARROW",
            "ID",
            "ELLIPSIS",
            "ID",
            "DEFINE",
            "ID",
            "SEMICOLON",
        ]

    def test_channel_directions(self, meta) -> None:
        assert types("chan<- int", meta)[:3] == ["CHAN", "ARROW", "ID"]
        assert types("<-chan int", meta)[:3] == ["ARROW", "CHAN", "ID"]


class TestLocations:
    def test_line_and_column(self, meta) -> None:
        source = "package main\n\ntype Foo struct{}\n"
        meta.source = source
        tokens = [tok for tok in lex(source, module=meta) if tok.type == "ID"]
        main, foo = tokens
        assert (main.loc.line, main.loc.col, main.loc.end_col) == (1, 9, 12)
        assert (foo.loc.line, foo.loc.col, foo.loc.end_col) == (3, 6, 8)

    def test_leading_byte_order_mark_is_skipped(self, meta) -> None:
        source = "\ufeffpackage main\n"
        assert types(source, meta) == ["PACKAGE", "ID", "SEMICOLON"]
        package = lex(source, module=meta)[0]
        assert (package.loc.line, package.loc.col) == (1, 1)

    def test_byte_order_mark_elsewhere_is_illegal(self, meta) -> None:
        meta.source = "package main\n\ufeff"
        with pytest.raises(ParseFailure) as exc:
            lex(meta.source, module=meta)
        assert exc.value.message.code == "E003"


class TestErrors:
    def test_illegal_character(self, meta) -> None:
        meta.source = "package main\n$"
        with pytest.raises(ParseFailure) as exc:
            lex(meta.source, module=meta)
        assert exc.value.message.code == "E003"
        assert exc.value.loc.line == 2

    def test_unterminated_string(self, meta) -> None:
        meta.source = 'x := "abc\n'
        with pytest.raises(ParseFailure) as exc:
            lex(meta.source, module=meta)
        assert exc.value.message.code == "E004"
        assert "string literal" in exc.value.message.message

    def test_unterminated_comment(self, meta) -> None:
        meta.source = "package main /* never closed"
        with pytest.raises(ParseFailure) as exc:
            lex(meta.source, module=meta)
        assert exc.value.message.code == "E004"
        assert "comment" in exc.value.message.message
