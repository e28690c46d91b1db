"""Unit tests for struct extraction and filtering."""

from __future__ import annotations

from goconstruct.generator.select import extract_aggregates, filter_aggregates

SOURCE = """
package p

type Foo struct{ A int }

type Alias = struct{ A int }

type Reader interface{ Read() }

type ID int

type Ptr *Foo

func Bar() {}

type Bar struct{}

type (
    Grouped struct{}
    Hidden struct{}
)

type (
    Number int
    Skipped struct{}
)
"""


def names(specs) -> list[str]:
    return [spec.name.name for spec in specs]


class TestExtract:
    def test_only_structs_in_declaration_order(self, parse) -> None:
        assert names(extract_aggregates(parse(SOURCE))) == ["Foo", "Bar", "Grouped"]

    def test_no_structs(self, parse) -> None:
        assert extract_aggregates(parse("package p\nfunc f() {}\n")) == []


class TestFilter:
    def test_empty_filter_selects_all(self, parse) -> None:
        specs = extract_aggregates(parse(SOURCE))
        assert names(filter_aggregates(specs, [])) == ["Foo", "Bar", "Grouped"]

    def test_keeps_source_order(self, parse) -> None:
        specs = extract_aggregates(parse(SOURCE))
        assert names(filter_aggregates(specs, ["Grouped", "Foo"])) == [
            "Foo",
            "Grouped",
        ]

    def test_match_is_exact_and_case_sensitive(self, parse) -> None:
        specs = extract_aggregates(parse(SOURCE))
        assert filter_aggregates(specs, ["foo", "Fo", "Foo2"]) == []

    def test_unknown_names_are_ignored(self, parse) -> None:
        specs = extract_aggregates(parse(SOURCE))
        assert names(filter_aggregates(specs, ["Missing", "Bar"])) == ["Bar"]

    def test_returns_identical_nodes(self, parse) -> None:
        specs = extract_aggregates(parse(SOURCE))
        assert filter_aggregates(specs, ["Foo"])[0] is specs[0]
