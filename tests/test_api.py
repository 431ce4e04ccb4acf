"""End-to-end tests for the top-level entry points."""

import json
from dataclasses import dataclass
from typing import Any, Literal

import pytest

from conftest import Shape, array, num, parse
from ecmabind import (
    U64,
    Deserializer,
    EsVersion,
    Ownership,
    ParseOptions,
    RecursionLimitExceeded,
    deserialize,
    from_expr,
    from_str,
)
from ecmabind.bind import ListBinding, binding_for


@dataclass
class Apple:
    pass


@dataclass
class Pear:
    name: str


@dataclass
class Basket:
    foo: U64 | None
    bar: list[bool]
    qux: str
    fruit: list[Literal["Orange"] | Apple | Pear]


SOURCE = """{
    foo: 123,
    "bar": [true, false],
    qux: "hey",
    fruit: [Orange, { Apple: {} }, { "Pear": { name: "+?*" } }],
}"""

EXPECTED = Basket(
    foo=123,
    bar=[True, False],
    qux="hey",
    fruit=["Orange", Apple(), Pear(name="+?*")],
)


# ---------------------------------------------------------------------------
# from_str
# ---------------------------------------------------------------------------

class TestFromStr:
    def test_typed_record(self):
        assert from_str(SOURCE, Basket) == EXPECTED

    def test_untyped_matches_json(self):
        expected = json.loads(
            '{"foo":123,"bar":[true,false],"qux":"hey",'
            '"fruit":["Orange",{"Apple":{}},{"Pear":{"name":"+?*"}}]}'
        )
        assert from_str(SOURCE) == expected

    def test_optional_field_null(self):
        source = "{ foo: null, bar: [], qux: '', fruit: [] }"
        assert from_str(source, Basket) == Basket(None, [], "", [])

    def test_depth_limit(self):
        options = ParseOptions(max_depth=2)
        assert from_str("[[1]]", Any, options=options) == [[1]]
        with pytest.raises(RecursionLimitExceeded, match="deeper than 2"):
            from_str("[[[1]]]", Any, options=options)

    def test_version_keyword_keeps_other_options(self):
        options = ParseOptions(max_depth=1)
        with pytest.raises(RecursionLimitExceeded):
            from_str("[[1]]", Any, options=options, version=EsVersion.ES2015)


# ---------------------------------------------------------------------------
# Borrowed and owned trees
# ---------------------------------------------------------------------------

class TestOwnership:
    def test_borrowed_tree_reusable(self):
        node = parse(SOURCE)
        assert from_expr(node, Basket) == EXPECTED
        assert from_expr(node, Basket) == EXPECTED

    def test_owned_same_result_as_borrowed(self):
        borrowed = from_expr(parse(SOURCE), Basket)
        owned = deserialize(Basket, Deserializer(parse(SOURCE), Ownership.OWNED))
        assert owned == borrowed

    def test_owned_consumes_tree(self):
        node = parse("[[1, 2], [3]]")
        result = deserialize(list[list[int]], Deserializer(node, Ownership.OWNED))
        assert result == [[1, 2], [3]]
        assert node.elements == []

    def test_from_expr_depth(self):
        with pytest.raises(RecursionLimitExceeded):
            from_expr(parse("[[1]]"), Any, max_depth=1)

    def test_interpreter_stack_exhausted(self):
        node = num(1)
        for _ in range(2000):
            node = array(node)
        with pytest.raises(RecursionLimitExceeded):
            from_expr(node, Any, max_depth=5000)


# ---------------------------------------------------------------------------
# Seeds
# ---------------------------------------------------------------------------

class TestSeeds:
    def test_binding_instance(self):
        seed = ListBinding(binding_for(int), factory=tuple)
        assert deserialize(seed, Deserializer(parse("[1, 2]"))) == (1, 2)

    def test_custom_seed(self):
        assert deserialize(Shape("bool"), Deserializer(parse("true"))) == ("bool", True)
