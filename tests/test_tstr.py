"""Tests for `$name` template strings."""

from __future__ import annotations

from goconstruct.generator.tstr import tstr


class TestTstr:
    def test_placeholders_are_filled(self) -> None:
        out = tstr("func $name() *$type")
        out["name"] = "NewFoo"
        out["type"] = "Foo"
        assert str(out) == "func NewFoo() *Foo"

    def test_unfilled_placeholder_is_kept(self) -> None:
        assert str(tstr("package $package")) == "package $package"

    def test_filled_text_is_not_rescanned(self) -> None:
        out = tstr("$a $b")
        out["a"] = "$b"
        out["b"] = "x"
        assert str(out) == "$b x"

    def test_nested_templates(self) -> None:
        inner = tstr("import ($lines)")
        inner["lines"] = '"fmt"'
        outer = tstr("$imports\n")
        outer["imports"] = inner
        assert str(outer) == 'import ("fmt")\n'

    def test_remove_named(self) -> None:
        out = tstr("a$imports b")
        out["imports"] = "x"
        out.remove("imports")
        assert str(out) == "a b"
        assert out["imports"] is None

    def test_remove_all_unfilled(self) -> None:
        out = tstr("$x-$y-$z")
        out["y"] = "2"
        out.remove()
        assert str(out) == "-2-"

    def test_content_is_copied(self) -> None:
        content = {"x": "1"}
        out = tstr("$x", content=content)
        out["x"] = "2"
        assert content == {"x": "1"}
        assert str(out) == "2"
