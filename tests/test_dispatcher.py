"""Tests for the core dispatcher: one shape request against one node."""

import math
from types import SimpleNamespace

import pytest

from conftest import Recorder, array, ident, lit, neg, num, obj, regex
from ecmabind.de import Deserializer, Ownership, StrDeserializer
from ecmabind.de._access import _Enum, _Map, _Seq
from ecmabind.errors import (
    DataError,
    DataErrorKind,
    InvalidNumber,
    RecursionLimitExceeded,
    UnexpectedBigInt,
    UnexpectedExpression,
    UnexpectedJsxText,
    UnexpectedRegex,
)


def ask(node, shape, *args):
    """Request *shape* from *node* with a recording visitor."""
    return getattr(Deserializer(node), f"deserialize_{shape}")(*args, Recorder())


def call_expression():
    return SimpleNamespace(type="CallExpression", callee=ident("f"), arguments=[])


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

class TestBool:
    def test_true(self):
        assert ask(lit(True), "bool") == ("bool", True)

    def test_number_rejected(self):
        with pytest.raises(DataError, match="invalid type: integer `1`, expected boolean"):
            ask(num(1), "bool")

    def test_object_rejected(self):
        with pytest.raises(DataError, match="invalid type: map, expected boolean"):
            ask(obj(), "bool")

    def test_array_rejected(self):
        with pytest.raises(DataError, match="invalid type: sequence, expected boolean"):
            ask(array(), "bool")

    def test_identifier_rejected_as_string(self):
        with pytest.raises(DataError, match='invalid type: string "yes", expected boolean'):
            ask(ident("yes"), "bool")

    def test_other_expression(self):
        with pytest.raises(UnexpectedExpression):
            ask(call_expression(), "bool")


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

class TestIntegers:
    def test_u8_max(self):
        assert ask(num(255), "u8") == ("u64", 255)

    def test_u8_past_max(self):
        with pytest.raises(DataError, match="invalid type: integer `256`, expected u8"):
            ask(num(256), "u8")

    def test_i8_min_from_negated_literal(self):
        assert ask(neg(num(128)), "i8") == ("i64", -128)

    def test_i8_past_min(self):
        with pytest.raises(DataError, match="invalid type: integer `-129`, expected i8"):
            ask(neg(num(129)), "i8")

    def test_u32_negative(self):
        with pytest.raises(DataError, match="expected u32"):
            ask(neg(num(1)), "u32")

    def test_decimal_point_rejected(self):
        with pytest.raises(DataError, match=r"invalid type: floating point `1\.0`, expected i32"):
            ask(num(1, "1.0"), "i32")

    def test_fraction_rejected(self):
        with pytest.raises(DataError, match=r"floating point `1\.5`, expected u16"):
            ask(num(1.5), "u16")

    def test_i128(self):
        assert ask(num(10**20, "100000000000000000000"), "i128") == ("i64", 10**20)

    def test_no_descriptor(self):
        with pytest.raises(InvalidNumber):
            ask(num(1e30, "1e30"), "i64")

    def test_string_rejected(self):
        with pytest.raises(DataError, match='invalid type: string "5", expected i64'):
            ask(lit("5"), "i64")

    def test_negated_identifier_is_not_a_number(self):
        node = SimpleNamespace(type="UnaryExpression", operator="-", argument=ident("x"))
        with pytest.raises(UnexpectedExpression):
            ask(node, "i64")

    def test_error_kind(self):
        with pytest.raises(DataError) as info:
            ask(num(300), "u8")
        assert info.value.kind is DataErrorKind.INVALID_TYPE


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------

class TestFloats:
    def test_f64_from_integer_literal(self):
        assert ask(num(5), "f64") == ("f64", 5.0)

    def test_f64_negative(self):
        assert ask(neg(num(2.5)), "f64") == ("f64", -2.5)

    def test_f32_narrowed(self):
        kind, value = ask(num(0.1), "f32")
        assert kind == "f64"
        assert value != 0.1
        assert value == pytest.approx(0.1)

    def test_f32_overflow(self):
        assert ask(num(1e40), "f32") == ("f64", math.inf)

    def test_bool_rejected(self):
        with pytest.raises(DataError, match="expected f64"):
            ask(lit(False), "f64")


# ---------------------------------------------------------------------------
# Strings, characters, bytes
# ---------------------------------------------------------------------------

class TestText:
    def test_string(self):
        assert ask(lit("hey"), "str") == ("str", "hey")

    def test_identifier_reads_as_string(self):
        assert ask(ident("Orange"), "string") == ("str", "Orange")
        assert ask(ident("Orange"), "identifier") == ("str", "Orange")

    def test_number_rejected(self):
        with pytest.raises(DataError, match="invalid type: integer `1`, expected string"):
            ask(num(1), "str")

    def test_char(self):
        assert ask(lit("a"), "char") == ("char", "a")

    def test_char_single_code_point(self):
        assert ask(lit("\U0001F600"), "char") == ("char", "\U0001F600")

    def test_char_too_long(self):
        with pytest.raises(DataError, match='invalid value: string "ab", expected character') as info:
            ask(lit("ab"), "char")
        assert info.value.kind is DataErrorKind.INVALID_VALUE

    def test_char_empty(self):
        with pytest.raises(DataError, match="expected character"):
            ask(lit(""), "char")

    def test_bytes_utf8(self):
        assert ask(lit("hé"), "bytes") == ("bytes", "hé".encode("utf-8"))
        assert ask(lit("x"), "byte_buf") == ("bytes", b"x")

    def test_bytes_lone_surrogate(self):
        with pytest.raises(DataError, match="invalid value: string .*, expected bytes") as info:
            ask(lit("\ud800"), "bytes")
        assert info.value.kind is DataErrorKind.INVALID_VALUE

    def test_bytes_from_array_rejected(self):
        with pytest.raises(DataError, match="invalid type: sequence, expected bytes"):
            ask(array(num(1)), "bytes")


# ---------------------------------------------------------------------------
# Null, option, unit, newtype
# ---------------------------------------------------------------------------

class TestAbsentValues:
    def test_option_null(self):
        assert ask(lit(None), "option") == ("none",)

    def test_option_some_passes_same_deserializer(self):
        de = Deserializer(num(1))
        kind, inner = de.deserialize_option(Recorder())
        assert kind == "some"
        assert inner is de

    def test_unit(self):
        assert ask(lit(None), "unit") == ("unit",)
        assert ask(lit(None), "unit_struct", "Marker") == ("unit",)

    def test_unit_rejects_zero(self):
        with pytest.raises(DataError, match="invalid type: integer `0`, expected null"):
            ask(num(0), "unit")

    def test_newtype_passes_same_deserializer(self):
        de = Deserializer(lit("x"))
        assert de.deserialize_newtype_struct("Name", Recorder()) == ("newtype", de)


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------

class TestComposites:
    def test_seq(self):
        kind, access = ask(array(num(1)), "seq")
        assert kind == "seq"
        assert isinstance(access, _Seq)

    def test_tuple_shapes(self):
        assert ask(array(), "tuple", 2)[0] == "seq"
        assert ask(array(), "tuple_struct", "Pair", 2)[0] == "seq"

    def test_seq_from_object(self):
        with pytest.raises(DataError, match="invalid type: map, expected sequence"):
            ask(obj(), "seq")

    def test_map(self):
        kind, access = ask(obj(a=num(1)), "map")
        assert kind == "map"
        assert isinstance(access, _Map)
        assert ask(obj(), "struct", "Point", ("x", "y"))[0] == "map"

    def test_map_from_array(self):
        with pytest.raises(DataError, match="invalid type: sequence, expected map"):
            ask(array(), "map")

    def test_map_from_string(self):
        with pytest.raises(DataError, match='invalid type: string "x", expected map'):
            ask(lit("x"), "map")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TestEnum:
    def test_bare_string(self):
        kind, access = ask(lit("Orange"), "enum", "Fruit", ("Orange",))
        assert kind == "enum"
        assert isinstance(access, StrDeserializer)
        assert access.value == "Orange"

    def test_bare_identifier(self):
        _, access = ask(ident("Orange"), "enum", "Fruit", ("Orange",))
        assert access.value == "Orange"

    def test_single_key_object(self):
        _, access = ask(obj(Pear=obj()), "enum", "Fruit", ("Pear",))
        assert isinstance(access, _Enum)

    def test_number_rejected(self):
        with pytest.raises(DataError, match="invalid type: integer `1`, expected enumeration"):
            ask(num(1), "enum", "Fruit", ())

    def test_array_rejected(self):
        with pytest.raises(DataError, match="invalid type: sequence, expected enumeration"):
            ask(array(), "enum", "Fruit", ())


# ---------------------------------------------------------------------------
# Self-describing
# ---------------------------------------------------------------------------

class TestAny:
    def test_array(self):
        assert ask(array(), "any")[0] == "seq"

    def test_object(self):
        assert ask(obj(), "any")[0] == "map"

    def test_bool(self):
        assert ask(lit(False), "any") == ("bool", False)

    def test_integer(self):
        assert ask(num(5), "any") == ("i64", 5)

    def test_negative_integer(self):
        assert ask(neg(num(5)), "any") == ("i64", -5)

    def test_float(self):
        assert ask(num(5.5), "any") == ("f64", 5.5)

    def test_null(self):
        assert ask(lit(None), "any") == ("none",)

    def test_string(self):
        assert ask(lit("s"), "any") == ("str", "s")

    def test_identifier(self):
        assert ask(ident("s"), "any") == ("str", "s")

    def test_regex(self):
        with pytest.raises(UnexpectedRegex):
            ask(regex("a"), "any")

    def test_bigint(self):
        node = lit(None, "10n")
        node.bigint = "10"
        with pytest.raises(UnexpectedBigInt):
            ask(node, "any")

    def test_jsx_text(self):
        with pytest.raises(UnexpectedJsxText):
            ask(SimpleNamespace(type="JSXText", value="hi", raw="hi"), "any")

    def test_call_expression(self):
        with pytest.raises(UnexpectedExpression, match="CallExpression"):
            ask(call_expression(), "any")


class TestIgnoredAny:
    @pytest.mark.parametrize("node", [
        lit(True),
        array(None),
        call_expression(),
        regex("x"),
    ])
    def test_always_unit(self, node):
        assert ask(node, "ignored_any") == ("unit",)


# ---------------------------------------------------------------------------
# Depth and ownership
# ---------------------------------------------------------------------------

class TestDepth:
    def test_child_is_one_level_deeper(self):
        root = Deserializer(array(), Ownership.OWNED, max_depth=5)
        child = root.child(num(1))
        assert child.depth == 1
        assert child.max_depth == 5
        assert child.ownership is Ownership.OWNED

    def test_limit_exceeded(self):
        root = Deserializer(array(), max_depth=1)
        child = root.child(array())
        with pytest.raises(RecursionLimitExceeded):
            child.child(num(1))

    def test_limit_inclusive(self):
        assert Deserializer(num(1), depth=3, max_depth=3).depth == 3
