"""Core dispatcher: answers one shape request against one expression node.

``Deserializer`` wraps a single ESTree node.  A seed asks it for a shape
(``deserialize_bool``, ``deserialize_u16``, ``deserialize_map``, ...); it
either calls the matching ``visit_*`` method on the visitor, hands the
visitor an accessor for composite nodes, or raises.

Rules in brief:

- booleans, numbers, strings and null only satisfy their own shapes;
- a number satisfies an integer width only when its source text has no
  ``.`` and its value lies within the width's bounds;
- identifiers read as strings, never as references;
- arrays satisfy seq/tuple shapes, objects map/struct/enum shapes;
- everything that cannot satisfy the request raises: invalid-type
  ``DataError`` for known value kinds, ``UnexpectedExpression`` (or the
  regex / big-int / JSX-text variants) for nodes with no mapping at all.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ecmabind.errors import (
    MAP,
    SEQ,
    DataError,
    DeserializeError,
    RecursionLimitExceeded,
    Unexpected,
    UnexpectedExpression,
    UnexpectedKind,
    unexpected_literal,
)

from ._access import (
    BareIdentifier,
    BareString,
    SingleKeyObject,
    _Enum,
    _Map,
    _Seq,
    resolve_enum_tag,
)
from ._nodes import ARRAY, IDENTIFIER, OBJECT, LiteralKind, literal_kind, node_type, number_of
from ._numbers import IntWidth, is_integer, to_f32, to_int
from ._ownership import Ownership
from ._value import StrDeserializer
from ._visitor import Visitor

DEFAULT_MAX_DEPTH = 128


class Deserializer:
    """Deserializer over one expression node.

    Parameters
    ----------
    node:
        The ESTree expression node to read.
    ownership:
        ``Ownership.BORROWED`` leaves the tree untouched;
        ``Ownership.OWNED`` drains child lists as they are consumed.
        Children inherit the mode.
    depth:
        Nesting level of *node* below the root.
    max_depth:
        Deepest nesting level allowed before ``RecursionLimitExceeded``.
    """

    __slots__ = ("node", "ownership", "depth", "max_depth")

    def __init__(
        self,
        node: Any,
        ownership: Ownership = Ownership.BORROWED,
        *,
        depth: int = 0,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if depth > max_depth:
            raise RecursionLimitExceeded(max_depth, node)
        self.node = node
        self.ownership = ownership
        self.depth = depth
        self.max_depth = max_depth

    def __repr__(self) -> str:
        return f"Deserializer({node_type(self.node)}, {self.ownership.value}, depth={self.depth})"

    def child(self, node: Any) -> Deserializer:
        """Deserializer for a direct child of this node, same ownership mode."""
        return Deserializer(
            node, self.ownership, depth=self.depth + 1, max_depth=self.max_depth,
        )

    # -----------------------------------------------------------------------
    # Mismatch reporting
    # -----------------------------------------------------------------------

    def _mismatch(self, expected: Any) -> DeserializeError:
        """Error for this node failing the *expected* shape request."""
        node = self.node
        if literal_kind(node) is not None:
            return unexpected_literal(node, expected)
        kind = node_type(node)
        if kind == OBJECT:
            return DataError.invalid_type(MAP, expected, node)
        if kind == ARRAY:
            return DataError.invalid_type(SEQ, expected, node)
        if kind == IDENTIFIER:
            return DataError.invalid_type(Unexpected(UnexpectedKind.STR, node.name), expected, node)
        return UnexpectedExpression(node)

    def _literal(self, kind: LiteralKind) -> bool:
        return literal_kind(self.node) is kind

    # -----------------------------------------------------------------------
    # Self-describing
    # -----------------------------------------------------------------------

    def deserialize_any(self, visitor: Visitor) -> Any:
        """Let the node pick its own shape."""
        kind = node_type(self.node)
        if kind == ARRAY:
            return self.deserialize_seq(visitor)
        if kind == OBJECT:
            return self.deserialize_map(visitor)
        if kind == IDENTIFIER:
            return self.deserialize_str(visitor)
        handler = _ANY_LITERAL_HANDLERS.get(literal_kind(self.node))
        if handler is None:
            raise self._mismatch("any value")
        return handler(self, visitor)

    def _any_number(self, visitor: Visitor) -> Any:
        if is_integer(number_of(self.node)):
            return self.deserialize_i64(visitor)
        return self.deserialize_f64(visitor)

    def deserialize_ignored_any(self, visitor: Visitor) -> Any:
        """Skip this node without looking at it."""
        return visitor.visit_unit()

    # -----------------------------------------------------------------------
    # Scalars
    # -----------------------------------------------------------------------

    def deserialize_bool(self, visitor: Visitor) -> Any:
        if self._literal(LiteralKind.BOOL):
            return visitor.visit_bool(self.node.value)
        raise self._mismatch("boolean")

    def _deserialize_int(self, width: IntWidth, visit: Callable[[int], Any]) -> Any:
        if not self._literal(LiteralKind.NUMBER):
            raise self._mismatch(width.value)
        value = to_int(number_of(self.node), width)
        if value is None:
            raise unexpected_literal(self.node, width.value)
        return visit(value)

    def deserialize_i8(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.I8, visitor.visit_i8)

    def deserialize_i16(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.I16, visitor.visit_i16)

    def deserialize_i32(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.I32, visitor.visit_i32)

    def deserialize_i64(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.I64, visitor.visit_i64)

    def deserialize_i128(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.I128, visitor.visit_i128)

    def deserialize_u8(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.U8, visitor.visit_u8)

    def deserialize_u16(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.U16, visitor.visit_u16)

    def deserialize_u32(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.U32, visitor.visit_u32)

    def deserialize_u64(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.U64, visitor.visit_u64)

    def deserialize_u128(self, visitor: Visitor) -> Any:
        return self._deserialize_int(IntWidth.U128, visitor.visit_u128)

    def deserialize_f32(self, visitor: Visitor) -> Any:
        if self._literal(LiteralKind.NUMBER):
            return visitor.visit_f32(to_f32(number_of(self.node).value))
        raise self._mismatch("f32")

    def deserialize_f64(self, visitor: Visitor) -> Any:
        if self._literal(LiteralKind.NUMBER):
            return visitor.visit_f64(number_of(self.node).value)
        raise self._mismatch("f64")

    def deserialize_char(self, visitor: Visitor) -> Any:
        if not self._literal(LiteralKind.STRING):
            raise self._mismatch("character")
        value = self.node.value
        if len(value) != 1:
            raise DataError.invalid_value(
                Unexpected(UnexpectedKind.STR, value), "character", self.node,
            )
        return visitor.visit_char(value)

    def deserialize_str(self, visitor: Visitor) -> Any:
        if self._literal(LiteralKind.STRING):
            return visitor.visit_str(self.node.value)
        if node_type(self.node) == IDENTIFIER:
            return visitor.visit_str(self.node.name)
        raise self._mismatch("string")

    def deserialize_string(self, visitor: Visitor) -> Any:
        return self.deserialize_str(visitor)

    def deserialize_identifier(self, visitor: Visitor) -> Any:
        return self.deserialize_str(visitor)

    def deserialize_bytes(self, visitor: Visitor) -> Any:
        if not self._literal(LiteralKind.STRING):
            raise self._mismatch("bytes")
        value = self.node.value
        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as e:
            # Lone surrogates have no UTF-8 form
            raise DataError.invalid_value(
                Unexpected(UnexpectedKind.STR, value), "bytes", self.node,
            ) from e
        return visitor.visit_bytes(encoded)

    def deserialize_byte_buf(self, visitor: Visitor) -> Any:
        return self.deserialize_bytes(visitor)

    # -----------------------------------------------------------------------
    # Absent values and wrappers
    # -----------------------------------------------------------------------

    def deserialize_option(self, visitor: Visitor) -> Any:
        if self._literal(LiteralKind.NULL):
            return visitor.visit_none()
        return visitor.visit_some(self)

    def deserialize_unit(self, visitor: Visitor) -> Any:
        if self._literal(LiteralKind.NULL):
            return visitor.visit_unit()
        raise self._mismatch("null")

    def deserialize_unit_struct(self, name: str, visitor: Visitor) -> Any:
        return self.deserialize_unit(visitor)

    def deserialize_newtype_struct(self, name: str, visitor: Visitor) -> Any:
        return visitor.visit_newtype_struct(self)

    # -----------------------------------------------------------------------
    # Composites
    # -----------------------------------------------------------------------

    def deserialize_seq(self, visitor: Visitor) -> Any:
        if node_type(self.node) == ARRAY:
            return visitor.visit_seq(_Seq(self, self.node.elements))
        raise self._mismatch("sequence")

    def deserialize_tuple(self, length: int, visitor: Visitor) -> Any:
        return self.deserialize_seq(visitor)

    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor) -> Any:
        return self.deserialize_seq(visitor)

    def deserialize_map(self, visitor: Visitor) -> Any:
        if node_type(self.node) == OBJECT:
            return visitor.visit_map(_Map(self, self.node.properties))
        raise self._mismatch("map")

    def deserialize_struct(self, name: str, fields: tuple[str, ...], visitor: Visitor) -> Any:
        return self.deserialize_map(visitor)

    def deserialize_enum(self, name: str, variants: tuple[str, ...], visitor: Visitor) -> Any:
        tag = resolve_enum_tag(self.node, self.ownership)
        if isinstance(tag, BareString):
            return visitor.visit_enum(StrDeserializer(tag.text))
        if isinstance(tag, BareIdentifier):
            return visitor.visit_enum(StrDeserializer(tag.name))
        if isinstance(tag, SingleKeyObject):
            return visitor.visit_enum(_Enum(self, tag))
        raise self._mismatch("enumeration")


# ---------------------------------------------------------------------------
# deserialize_any dispatch table (literal kind -> handler)
# ---------------------------------------------------------------------------

_ANY_LITERAL_HANDLERS: dict[LiteralKind, Callable[[Deserializer, Visitor], Any]] = {
    LiteralKind.BOOL: Deserializer.deserialize_bool,
    LiteralKind.NUMBER: Deserializer._any_number,
    LiteralKind.NULL: lambda de, visitor: visitor.visit_none(),
    LiteralKind.STRING: Deserializer.deserialize_str,
}
