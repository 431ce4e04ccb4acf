"""Tests for parsing and the version gate."""

import pytest
from pydantic import ValidationError

from conftest import parse
from ecmabind import from_str, from_str_with_version
from ecmabind.errors import DataError, ParseError
from ecmabind.options import EsVersion, ParseOptions


# ---------------------------------------------------------------------------
# parse_expression
# ---------------------------------------------------------------------------

class TestParseExpression:
    def test_object_not_block(self):
        assert parse("{ a: 1 }").type == "ObjectExpression"

    def test_array(self):
        node = parse("[1, , 3]")
        assert node.type == "ArrayExpression"
        assert node.elements[1] is None

    def test_number_keeps_source_text(self):
        node = parse("1.50")
        assert node.raw == "1.50"

    def test_trailing_line_comment(self):
        assert parse("[1] // trailing").type == "ArrayExpression"

    def test_first_line_columns_match_source(self):
        node = parse("  [1]")
        assert node.loc.start.column == 2
        assert node.elements[0].loc.start.column == 3

    def test_later_line_columns_untouched(self):
        node = parse("[\n  1]")
        assert node.elements[0].loc.start.line == 2
        assert node.elements[0].loc.start.column == 2

    def test_syntax_error(self):
        with pytest.raises(ParseError, match="Parse error"):
            parse("{ a: ")

    def test_two_statements(self):
        with pytest.raises(ParseError):
            parse("1; 2")

    def test_empty_source(self):
        with pytest.raises(ParseError):
            parse("")

    def test_delegate_error_chained(self):
        with pytest.raises(ParseError) as info:
            parse("[1 2]")
        assert info.value.__cause__ is not None

    def test_nesting_too_deep_for_parser(self):
        with pytest.raises(ParseError, match="nested too deeply"):
            parse("[" * 5000 + "]" * 5000)

    def test_jsx_requires_option(self):
        with pytest.raises(ParseError):
            parse("<b>hi</b>")
        assert parse("<b>hi</b>", jsx=True).type == "JSXElement"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class TestParseOptions:
    def test_defaults(self):
        options = ParseOptions()
        assert options.version is EsVersion.ES2017
        assert options.jsx is False
        assert options.max_depth == 128

    def test_frozen(self):
        options = ParseOptions()
        with pytest.raises(ValidationError):
            options.jsx = True

    def test_max_depth_positive(self):
        with pytest.raises(ValidationError):
            ParseOptions(max_depth=0)

    def test_version_order(self):
        assert EsVersion.ES3 < EsVersion.ES5 < EsVersion.ES2015
        assert EsVersion.ES2017 > EsVersion.ES2016
        assert sorted(EsVersion, reverse=True)[0] is EsVersion.ES2017


# ---------------------------------------------------------------------------
# Version gate
# ---------------------------------------------------------------------------

class TestVersionGate:
    @pytest.mark.parametrize("source, what", [
        ("[...a]", "spread"),
        ("{ a }", "shorthand property"),
        ("{ f() {} }", "method property"),
        ("{ [k]: 1 }", "computed property"),
        ("`x`", "template literal"),
        ("0b101", "binary or octal literal"),
        ("0o17", "binary or octal literal"),
        ("{ a: [-0B1] }", "binary or octal literal"),
        ("() => 1", "arrow function"),
    ])
    def test_es5_rejects_es2015_syntax(self, source, what):
        with pytest.raises(ParseError, match=what):
            parse(source, version=EsVersion.ES5)

    def test_es2015_accepts_spread(self):
        assert parse("[...a]", version=EsVersion.ES2015).type == "ArrayExpression"

    def test_es5_accepts_getter(self):
        assert parse("{ get a() { return 1 } }", version=EsVersion.ES5).type == "ObjectExpression"

    def test_es3_rejects_getter(self):
        with pytest.raises(ParseError, match="getter/setter property"):
            parse("{ get a() { return 1 } }", version=EsVersion.ES3)

    def test_exponent_needs_es2016(self):
        with pytest.raises(ParseError, match="exponentiation"):
            parse("2 ** 3", version=EsVersion.ES2015)
        assert parse("2 ** 3", version=EsVersion.ES2016).type == "BinaryExpression"

    def test_async_needs_es2017(self):
        with pytest.raises(ParseError, match="async function"):
            parse("async () => 1", version=EsVersion.ES2016)

    def test_plain_literal_accepted_everywhere(self):
        for version in EsVersion:
            assert parse("{ a: [1, 'x', null] }", version=version).type == "ObjectExpression"

    def test_error_names_version(self):
        with pytest.raises(ParseError, match="es5"):
            parse("[...a]", version=EsVersion.ES5)

    def test_from_str_with_version(self):
        with pytest.raises(ParseError):
            from_str_with_version("`x`", str, EsVersion.ES5)
        assert from_str("0b11", int, version=EsVersion.ES2015) == 3


# ---------------------------------------------------------------------------
# Error locations through from_str
# ---------------------------------------------------------------------------

class TestErrorLocation:
    def test_first_line(self):
        with pytest.raises(DataError, match=r"\(line 1, column 6\)"):
            from_str("{ a: true }", dict[str, int])

    def test_second_line(self):
        with pytest.raises(DataError) as info:
            from_str("{\n  a: true\n}", dict[str, int])
        assert (info.value.line, info.value.column) == (2, 6)
