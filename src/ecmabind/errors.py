"""Error taxonomy for the literal deserializer.

Every failure raised anywhere in the engine derives from
``DeserializeError``.  Errors that can point at a node carry it in
``.node``; when the node has ESTree location info (``loc``) the message
ends with ``(line L, column C)``.

Two families:

- **Tree errors**: the literal tree itself has no mapping for what was
  asked (``InvalidObjectKey``, ``InvalidArrayElement``,
  ``UnexpectedSpread``, ``UnexpectedProperty``, ``UnexpectedExpression``,
  ...).
- **Data errors**: ``DataError`` with a ``DataErrorKind``; raised by the
  dispatcher for shape mismatches and by target bindings for their own
  validation (missing/unknown/duplicate fields, unknown variants, lengths).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Unexpected-value descriptors
# ---------------------------------------------------------------------------

class UnexpectedKind(str, Enum):
    """What kind of value was found where something else was expected."""

    BOOL = "bool"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    CHAR = "char"
    STR = "str"
    BYTES = "bytes"
    UNIT = "unit"
    OPTION = "option"
    NEWTYPE_STRUCT = "newtype_struct"
    SEQ = "seq"
    MAP = "map"
    ENUM = "enum"
    UNIT_VARIANT = "unit_variant"
    NEWTYPE_VARIANT = "newtype_variant"
    TUPLE_VARIANT = "tuple_variant"
    STRUCT_VARIANT = "struct_variant"
    OTHER = "other"


_BARE_DESCRIPTIONS = {
    UnexpectedKind.BYTES: "byte array",
    UnexpectedKind.UNIT: "unit value",
    UnexpectedKind.OPTION: "Option value",
    UnexpectedKind.NEWTYPE_STRUCT: "newtype struct",
    UnexpectedKind.SEQ: "sequence",
    UnexpectedKind.MAP: "map",
    UnexpectedKind.ENUM: "enum",
    UnexpectedKind.UNIT_VARIANT: "unit variant",
    UnexpectedKind.NEWTYPE_VARIANT: "newtype variant",
    UnexpectedKind.TUPLE_VARIANT: "tuple variant",
    UnexpectedKind.STRUCT_VARIANT: "struct variant",
}


@dataclass(frozen=True)
class Unexpected:
    """Descriptor of the value actually encountered, used in messages."""

    kind: UnexpectedKind
    value: Any = None

    def __str__(self) -> str:
        kind = self.kind
        if kind in _BARE_DESCRIPTIONS:
            return _BARE_DESCRIPTIONS[kind]
        if kind == UnexpectedKind.BOOL:
            return f"boolean `{'true' if self.value else 'false'}`"
        if kind in (UnexpectedKind.SIGNED, UnexpectedKind.UNSIGNED):
            return f"integer `{self.value}`"
        if kind == UnexpectedKind.FLOAT:
            return f"floating point `{self.value!r}`"
        if kind == UnexpectedKind.CHAR:
            return f"character `{self.value}`"
        if kind == UnexpectedKind.STR:
            return f"string {json.dumps(self.value, ensure_ascii=False)}"
        return str(self.value)


UNIT = Unexpected(UnexpectedKind.UNIT)
OPTION = Unexpected(UnexpectedKind.OPTION)
SEQ = Unexpected(UnexpectedKind.SEQ)
MAP = Unexpected(UnexpectedKind.MAP)
UNIT_VARIANT = Unexpected(UnexpectedKind.UNIT_VARIANT)


def _expected_text(expected: Any) -> str:
    """Render an expectation: a plain string or anything with ``expecting()``."""
    expecting = getattr(expected, "expecting", None)
    if callable(expecting):
        return expecting()
    return str(expected)


def _describe(node: Any) -> str:
    """Short human-readable description of an expression node."""
    if node is None:
        return "hole"
    node_type = getattr(node, "type", None) or type(node).__name__
    raw = getattr(node, "raw", None)
    if raw is not None:
        return f"{node_type} `{raw}`"
    name = getattr(node, "name", None)
    if isinstance(name, str):
        return f"{node_type} `{name}`"
    return node_type


def _location(node: Any) -> tuple[int | None, int | None]:
    loc = getattr(node, "loc", None)
    start = getattr(loc, "start", None)
    line = getattr(start, "line", None)
    column = getattr(start, "column", None)
    if not isinstance(line, int):
        return None, None
    # ESTree columns are 0-based
    return line, (column + 1 if isinstance(column, int) else None)


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class DeserializeError(Exception):
    """Base class for every failure raised while binding a literal tree."""

    def __init__(self, message: str, node: Any = None) -> None:
        self.message = message
        self.node = node
        self.line, self.column = _location(node)
        loc = ""
        if self.line is not None:
            loc = f" (line {self.line}"
            if self.column is not None:
                loc += f", column {self.column}"
            loc += ")"
        super().__init__(f"{message}{loc}")


# ---------------------------------------------------------------------------
# Tree errors
# ---------------------------------------------------------------------------

class ParseError(DeserializeError):
    """The delegate parser rejected the source (or the requested version did)."""


class InvalidObjectKey(DeserializeError):
    """Object key is neither an identifier nor a string literal."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Invalid object key: {_describe(key)}", key)


class InvalidNumber(DeserializeError):
    """Numeric literal that fits no integer or float descriptor."""

    def __init__(self, node: Any) -> None:
        super().__init__(f"Invalid number: {_describe(node)}", node)


class InvalidArrayElement(DeserializeError):
    """Hole in a sparse array literal (``[1, , 3]``)."""

    def __init__(self, array: Any = None) -> None:
        super().__init__("Invalid array element: hole in sparse array", array)


class UnexpectedSpread(DeserializeError):
    """Spread used where a plain element or key-value entry was required."""

    def __init__(self, spread: Any) -> None:
        super().__init__("Unexpected spread", spread)


class UnexpectedProperty(DeserializeError):
    """Shorthand, method, getter or setter property."""

    def __init__(self, prop: Any) -> None:
        kind = getattr(prop, "kind", None)
        if getattr(prop, "shorthand", False):
            what = "shorthand property"
        elif getattr(prop, "method", False):
            what = "method property"
        elif kind in ("get", "set"):
            what = f"{kind}ter property"
        else:
            what = _describe(prop)
        super().__init__(f"Unexpected property: {what}", prop)


class UnexpectedExpression(DeserializeError):
    """Expression form with no defined mapping."""

    _what = "expression"

    def __init__(self, node: Any) -> None:
        super().__init__(f"Unexpected {self._what}: {_describe(node)}", node)


class UnexpectedRegex(UnexpectedExpression):
    """Regular expression literal."""

    _what = "regex"


class UnexpectedBigInt(UnexpectedExpression):
    """Big-integer literal (``10n``)."""

    _what = "big integer"


class UnexpectedJsxText(UnexpectedExpression):
    """JSX text node."""

    _what = "JSX text"


class ExpectedFieldValue(DeserializeError):
    """``next_value`` called without a pending key."""

    def __init__(self) -> None:
        super().__init__("Expected field value: no key is pending")


class RecursionLimitExceeded(DeserializeError):
    """Literal nesting deeper than the configured ``max_depth``."""

    def __init__(self, max_depth: int, node: Any = None) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Recursion limit exceeded: nesting deeper than {max_depth}", node,
        )


# ---------------------------------------------------------------------------
# Data errors (shape mismatches and target validation)
# ---------------------------------------------------------------------------

class DataErrorKind(str, Enum):
    CUSTOM = "custom"
    DUPLICATE_FIELD = "duplicate_field"
    INVALID_LENGTH = "invalid_length"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    MISSING_FIELD = "missing_field"
    UNKNOWN_FIELD = "unknown_field"
    UNKNOWN_VARIANT = "unknown_variant"


def _one_of(names: tuple[str, ...] | list[str], none_text: str) -> str:
    if not names:
        return none_text
    quoted = [f"`{n}`" for n in names]
    if len(quoted) == 1:
        return f"expected {quoted[0]}"
    if len(quoted) == 2:
        return f"expected {quoted[0]} or {quoted[1]}"
    return f"expected one of {', '.join(quoted)}"


class DataError(DeserializeError):
    """Pass-through failure reported with a ``DataErrorKind``.

    Build instances with the classmethods rather than the constructor.
    """

    def __init__(self, kind: DataErrorKind, message: str, node: Any = None) -> None:
        self.kind = kind
        super().__init__(message, node)

    @classmethod
    def custom(cls, message: str, node: Any = None) -> DataError:
        return cls(DataErrorKind.CUSTOM, message, node)

    @classmethod
    def duplicate_field(cls, field: str, node: Any = None) -> DataError:
        return cls(DataErrorKind.DUPLICATE_FIELD, f"duplicate field `{field}`", node)

    @classmethod
    def invalid_length(cls, length: int, expected: Any, node: Any = None) -> DataError:
        return cls(
            DataErrorKind.INVALID_LENGTH,
            f"invalid length {length}, expected {_expected_text(expected)}",
            node,
        )

    @classmethod
    def invalid_type(cls, unexpected: Unexpected, expected: Any, node: Any = None) -> DataError:
        return cls(
            DataErrorKind.INVALID_TYPE,
            f"invalid type: {unexpected}, expected {_expected_text(expected)}",
            node,
        )

    @classmethod
    def invalid_value(cls, unexpected: Unexpected, expected: Any, node: Any = None) -> DataError:
        return cls(
            DataErrorKind.INVALID_VALUE,
            f"invalid value: {unexpected}, expected {_expected_text(expected)}",
            node,
        )

    @classmethod
    def missing_field(cls, field: str) -> DataError:
        return cls(DataErrorKind.MISSING_FIELD, f"missing field `{field}`")

    @classmethod
    def unknown_field(cls, field: str, expected: tuple[str, ...] | list[str]) -> DataError:
        return cls(
            DataErrorKind.UNKNOWN_FIELD,
            f"unknown field `{field}`, {_one_of(expected, 'there are no fields')}",
        )

    @classmethod
    def unknown_variant(cls, variant: str, expected: tuple[str, ...] | list[str]) -> DataError:
        return cls(
            DataErrorKind.UNKNOWN_VARIANT,
            f"unknown variant `{variant}`, {_one_of(expected, 'there are no variants')}",
        )


# ---------------------------------------------------------------------------
# Literal mismatch helper
# ---------------------------------------------------------------------------

def unexpected_literal(node: Any, expected: Any) -> DeserializeError:
    """Build the error for a literal node that cannot satisfy *expected*.

    Booleans, strings, null and numbers become invalid-type ``DataError``s
    naming the literal; literals with no mapping at all (regex, big-int,
    JSX text) get their own error classes.
    """
    from ecmabind.de._nodes import LiteralKind, literal_kind, number_of
    from ecmabind.de._numbers import number_to_unexpected

    kind = literal_kind(node)
    if kind is LiteralKind.BOOL:
        return DataError.invalid_type(Unexpected(UnexpectedKind.BOOL, node.value), expected, node)
    if kind is LiteralKind.NULL:
        return DataError.invalid_type(OPTION, expected, node)
    if kind is LiteralKind.STRING:
        return DataError.invalid_type(Unexpected(UnexpectedKind.STR, node.value), expected, node)
    if kind is LiteralKind.NUMBER:
        unexpected = number_to_unexpected(number_of(node))
        if unexpected is None:
            return InvalidNumber(node)
        return DataError.invalid_type(unexpected, expected, node)
    if kind is LiteralKind.REGEX:
        return UnexpectedRegex(node)
    if kind is LiteralKind.BIGINT:
        return UnexpectedBigInt(node)
    if kind is LiteralKind.JSX_TEXT:
        return UnexpectedJsxText(node)
    return UnexpectedExpression(node)
