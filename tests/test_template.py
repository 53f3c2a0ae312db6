"""Tests for wayfinder.routing.template: template parser and tree."""

import pytest

from wayfinder.errors import MalformedPatternError
from wayfinder.routing.template import (
    Literal,
    OptionalSegment,
    Placeholder,
    Template,
    parse_template,
    strip_slashes,
)


class TestParseTemplate:
    def test_literal(self) -> None:
        template = parse_template("/blog")
        assert template.children == (Literal("/blog"),)

    def test_empty(self) -> None:
        template = parse_template("")
        assert template.children == ()
        assert template.variables() == ()

    def test_placeholder(self) -> None:
        template = parse_template("/users/<id>")
        assert template.children == (Literal("/users/"), Placeholder("id"))

    def test_constrained_placeholder(self) -> None:
        template = parse_template(r"/users/<id:\d+>")
        assert template.children[1] == Placeholder("id", r"\d+")

    def test_empty_constraint_is_no_constraint(self) -> None:
        assert parse_template("<id:>").children == parse_template("<id>").children

    def test_optional_segment(self) -> None:
        template = parse_template("/<controller>[/<action>]")
        assert template.children == (
            Literal("/"),
            Placeholder("controller"),
            OptionalSegment((Literal("/"), Placeholder("action"))),
        )

    def test_nested_optional_segments(self) -> None:
        template = parse_template("[<controller>[/<action>[/<id>]]]")
        outer = template.children[0]
        assert isinstance(outer, OptionalSegment)
        middle = outer.children[1]
        assert isinstance(middle, OptionalSegment)
        inner = middle.children[2]
        assert inner == OptionalSegment((Literal("/"), Placeholder("id")))

    def test_brackets_inside_constraint_are_regex(self) -> None:
        template = parse_template("/<code:[a-z]{2}>")
        assert template.children == (Literal("/"), Placeholder("code", "[a-z]{2}"))

    def test_backslash_escapes_literal(self) -> None:
        template = parse_template(r"/a\[b\]")
        assert template.children == (Literal("/a[b]"),)

    def test_frozen(self) -> None:
        template = parse_template("/blog")
        with pytest.raises(AttributeError):
            template.source = "/other"  # type: ignore[misc]


class TestVariables:
    def test_order_of_first_appearance(self) -> None:
        template = parse_template("[<controller>[/<action>[/<id>]]]")
        assert template.variables() == ("controller", "action", "id")

    def test_duplicates_collapse(self) -> None:
        template = parse_template("/<a>/<b>/<a>")
        assert template.variables() == ("a", "b")

    def test_last_constraint_wins(self) -> None:
        template = parse_template(r"/<id:\d+>/<id:[a-f]+>")
        assert template.constraints() == {"id": "[a-f]+"}

    def test_bare_repeat_keeps_constraint(self) -> None:
        template = parse_template(r"/<id:\d+>/<id>")
        assert template.constraints() == {"id": r"\d+"}

    def test_unconstrained(self) -> None:
        assert parse_template("/<a>").constraints() == {"a": None}

    def test_placeholders_include_nested(self) -> None:
        template = parse_template("/<a>[/<b>[/<c>]]")
        assert [p.name for p in template.placeholders()] == ["a", "b", "c"]


class TestMalformed:
    def test_unclosed_bracket(self) -> None:
        with pytest.raises(MalformedPatternError) as exc_info:
            parse_template("/<a>[/<b>")
        assert exc_info.value.position == 4
        assert "Unclosed" in str(exc_info.value)

    def test_unbalanced_closing_bracket(self) -> None:
        with pytest.raises(MalformedPatternError) as exc_info:
            parse_template("/<a>]")
        assert exc_info.value.position == 4

    def test_unterminated_placeholder(self) -> None:
        with pytest.raises(MalformedPatternError, match="Unterminated") as exc_info:
            parse_template("/users/<id")
        assert exc_info.value.position == 7

    def test_invalid_name(self) -> None:
        with pytest.raises(MalformedPatternError, match="Invalid placeholder name"):
            parse_template("/<1st>")

    def test_empty_name(self) -> None:
        with pytest.raises(MalformedPatternError):
            parse_template("/<>")

    def test_trailing_backslash(self) -> None:
        with pytest.raises(MalformedPatternError, match="backslash"):
            parse_template("/blog\\")

    def test_error_carries_pattern(self) -> None:
        with pytest.raises(MalformedPatternError) as exc_info:
            parse_template("[[/<a>]")
        assert exc_info.value.pattern == "[[/<a>]"
        assert "position 0" in str(exc_info.value)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_template("[")


class TestStripSlashes:
    def test_leading_and_trailing(self) -> None:
        template = strip_slashes(parse_template("/<controller>/"))
        assert template.children == (Placeholder("controller"),)

    def test_inside_leading_segment(self) -> None:
        template = strip_slashes(parse_template("[/<action>]"))
        assert template.children == (OptionalSegment((Placeholder("action"),)),)

    def test_separator_moves_into_leading_segment(self) -> None:
        template = strip_slashes(parse_template("[/<lang>]/<controller>"))
        assert template.children == (
            OptionalSegment((Placeholder("lang"), Literal("/"))),
            Placeholder("controller"),
        )

    def test_separator_moves_into_trailing_segment(self) -> None:
        template = strip_slashes(parse_template("/<controller>/[<format>/]"))
        assert template.children == (
            Placeholder("controller"),
            OptionalSegment((Literal("/"), Placeholder("format"))),
        )

    def test_inner_slashes_kept(self) -> None:
        template = strip_slashes(parse_template("/blog/<id>"))
        assert template.children == (Literal("blog/"), Placeholder("id"))

    def test_keeps_source(self) -> None:
        template = strip_slashes(parse_template("/blog/"))
        assert template == Template(source="/blog/", children=(Literal("blog"),))
