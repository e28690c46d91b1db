"""Unit tests for import resolution."""

from __future__ import annotations

from goconstruct.generator.imports import import_table, resolve_imports, used_qualifiers
from goconstruct.generator.select import extract_aggregates, filter_aggregates

SOURCE = """
package p

import (
    "fmt"
    "net/http"
    "time"
    . "math"
    _ "embed"
    str "strings"
    "example.com/unused"
)

type Selected struct {
    Client *http.Client
    When   time.Time
    Names  map[string]str.Builder
}

type Other struct {
    Out fmt.Stringer
    Dep unused.Thing
}

func helper() {
    fmt.Println(unused.Value)
}
"""


def resolve(parse, source: str, types: list[str]) -> list[str]:
    unit = parse(source)
    specs = filter_aggregates(extract_aggregates(unit), types)
    return resolve_imports(unit, specs)


class TestImportTable:
    def test_local_names(self, parse) -> None:
        table = import_table(parse(SOURCE))
        assert list(table) == ["fmt", "http", "time", ".", "_", "str", "unused"]

    def test_later_import_overwrites_same_local_name(self, parse) -> None:
        unit = parse(
            """
            package p

            import (
                "a/log"
                "b/log"
            )
            """
        )
        table = import_table(unit)
        assert list(table) == ["log"]
        assert table["log"].path.value == '"b/log"'


class TestUsedQualifiers:
    def test_only_inside_selected_structs(self, parse) -> None:
        unit = parse(SOURCE)
        specs = filter_aggregates(extract_aggregates(unit), ["Selected"])
        assert used_qualifiers(unit, specs) == {"http": True, "time": True, "str": True}

    def test_same_name_declarations_are_told_apart(self, parse) -> None:
        unit = parse(
            """
            package p

            type Dup struct{ A first.T }

            type Dup struct{ B second.T }
            """
        )
        first, second = extract_aggregates(unit)
        assert used_qualifiers(unit, [second]) == {"second": True}
        assert used_qualifiers(unit, [first]) == {"first": True}

    def test_type_parameter_constraints_count(self, parse) -> None:
        unit = parse("package p\ntype Set[T constraints.Ordered] struct{ items []T }\n")
        assert used_qualifiers(unit, extract_aggregates(unit)) == {"constraints": True}

    def test_nested_and_array_length_references(self, parse) -> None:
        unit = parse(
            "package p\ntype Foo struct {\n\tBuf [sha.Size]byte\n"
            "\tFn func(ctx.Context) struct{ X io.Reader }\n}\n"
        )
        assert set(used_qualifiers(unit, extract_aggregates(unit))) == {
            "sha",
            "ctx",
            "io",
        }


class TestResolveImports:
    def test_minimal_block(self, parse) -> None:
        assert resolve(parse, SOURCE, ["Selected"]) == [
            '\t"net/http"',
            '\t"time"',
            '\t. "math"',
            '\tstr "strings"',
        ]

    def test_unused_in_selection_is_dropped(self, parse) -> None:
        lines = resolve(parse, SOURCE, ["Selected"])
        assert not any('"fmt"' in line or "unused" in line for line in lines)

    def test_other_selection(self, parse) -> None:
        assert resolve(parse, SOURCE, ["Other"]) == [
            '\t"fmt"',
            '\t. "math"',
            '\t"example.com/unused"',
        ]

    def test_each_used_import_appears_once(self, parse) -> None:
        lines = resolve(parse, SOURCE, [])
        assert len(lines) == len(set(lines))
        assert lines.count('\t"fmt"') == 1

    def test_wildcard_kept_without_use(self, parse) -> None:
        source = 'package p\nimport . "math"\ntype Foo struct{ X int }\n'
        assert resolve(parse, source, []) == ['\t. "math"']

    def test_no_imports(self, parse) -> None:
        assert resolve(parse, "package p\ntype Foo struct{ X int }\n", []) == []
