"""Visitor and access contracts between the dispatcher and target types.

A target type drives deserialization through a **seed**: an object whose
``deserialize(deserializer)`` picks one shape request
(``deserializer.deserialize_u64(visitor)``,
``deserializer.deserialize_map(visitor)``, ...).  The deserializer answers
by calling exactly one ``visit_*`` method on the visitor, handing over
either a primitive or an access object for composite values:

- ``SeqAccess``: pull elements one at a time.
- ``MapAccess``: pull a key, then its value.
- ``EnumAccess`` / ``VariantAccess``: read the variant tag, then its
  payload as a unit, newtype, tuple or struct variant.

These ``@runtime_checkable`` protocols document the access objects;
``Visitor`` is a concrete base class whose defaults reject everything
with an invalid-type error naming ``expecting()``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ecmabind.errors import (
    MAP,
    OPTION,
    SEQ,
    UNIT,
    DataError,
    Unexpected,
    UnexpectedKind,
)


class _Exhausted:
    __slots__ = ()

    def __repr__(self) -> str:
        return "EXHAUSTED"

    def __bool__(self) -> bool:
        return False


EXHAUSTED = _Exhausted()
"""Returned by ``next_element``/``next_key`` once no entries remain."""


# ---------------------------------------------------------------------------
# Access protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class Seed(Protocol):
    """Anything that knows which shape to request from a deserializer."""

    def deserialize(self, deserializer: Any) -> Any: ...


@runtime_checkable
class SeqAccess(Protocol):
    def next_element(self, seed: Seed) -> Any: ...

    def size_hint(self) -> int: ...


@runtime_checkable
class MapAccess(Protocol):
    def next_key(self, seed: Seed) -> Any: ...

    def next_value(self, seed: Seed) -> Any: ...

    def size_hint(self) -> int: ...


@runtime_checkable
class VariantAccess(Protocol):
    def unit_variant(self) -> None: ...

    def newtype_variant(self, seed: Seed) -> Any: ...

    def tuple_variant(self, length: int, visitor: Visitor) -> Any: ...

    def struct_variant(self, fields: tuple[str, ...], visitor: Visitor) -> Any: ...


@runtime_checkable
class EnumAccess(Protocol):
    def variant(self, seed: Seed) -> tuple[Any, VariantAccess]: ...


# ---------------------------------------------------------------------------
# Visitor
# ---------------------------------------------------------------------------

class Visitor:
    """Base visitor: override the ``visit_*`` methods for accepted shapes.

    Narrow integer visits forward to ``visit_i64``/``visit_u64`` (as do the
    128-bit ones), ``visit_f32`` forwards to ``visit_f64`` and
    ``visit_char`` to ``visit_str``.  Every other default raises
    ``DataError.invalid_type``.
    """

    def expecting(self) -> str:
        return "a value"

    def _reject(self, unexpected: Unexpected) -> Any:
        raise DataError.invalid_type(unexpected, self)

    # -- Scalars -------------------------------------------------------------

    def visit_bool(self, value: bool) -> Any:
        return self._reject(Unexpected(UnexpectedKind.BOOL, value))

    def visit_i8(self, value: int) -> Any:
        return self.visit_i64(value)

    def visit_i16(self, value: int) -> Any:
        return self.visit_i64(value)

    def visit_i32(self, value: int) -> Any:
        return self.visit_i64(value)

    def visit_i64(self, value: int) -> Any:
        return self._reject(Unexpected(UnexpectedKind.SIGNED, value))

    def visit_i128(self, value: int) -> Any:
        return self.visit_i64(value)

    def visit_u8(self, value: int) -> Any:
        return self.visit_u64(value)

    def visit_u16(self, value: int) -> Any:
        return self.visit_u64(value)

    def visit_u32(self, value: int) -> Any:
        return self.visit_u64(value)

    def visit_u64(self, value: int) -> Any:
        return self._reject(Unexpected(UnexpectedKind.UNSIGNED, value))

    def visit_u128(self, value: int) -> Any:
        return self.visit_u64(value)

    def visit_f32(self, value: float) -> Any:
        return self.visit_f64(value)

    def visit_f64(self, value: float) -> Any:
        return self._reject(Unexpected(UnexpectedKind.FLOAT, value))

    def visit_char(self, value: str) -> Any:
        return self.visit_str(value)

    def visit_str(self, value: str) -> Any:
        return self._reject(Unexpected(UnexpectedKind.STR, value))

    def visit_bytes(self, value: bytes) -> Any:
        return self._reject(Unexpected(UnexpectedKind.BYTES, value))

    # -- Absent values -------------------------------------------------------

    def visit_none(self) -> Any:
        return self._reject(OPTION)

    def visit_some(self, deserializer: Any) -> Any:
        return self._reject(OPTION)

    def visit_unit(self) -> Any:
        return self._reject(UNIT)

    # -- Composites ----------------------------------------------------------

    def visit_newtype_struct(self, deserializer: Any) -> Any:
        return self._reject(Unexpected(UnexpectedKind.NEWTYPE_STRUCT))

    def visit_seq(self, access: SeqAccess) -> Any:
        return self._reject(SEQ)

    def visit_map(self, access: MapAccess) -> Any:
        return self._reject(MAP)

    def visit_enum(self, access: EnumAccess) -> Any:
        return self._reject(Unexpected(UnexpectedKind.ENUM))


# ---------------------------------------------------------------------------
# Ignored values
# ---------------------------------------------------------------------------

class _IgnoredVisitor(Visitor):
    """Accepts anything and keeps nothing."""

    def expecting(self) -> str:
        return "anything at all"

    def _discard(self, *_: Any) -> None:
        return None

    visit_bool = visit_i64 = visit_u64 = visit_f64 = _discard
    visit_str = visit_bytes = visit_none = visit_unit = _discard

    def visit_some(self, deserializer: Any) -> None:
        return IGNORED.deserialize(deserializer)

    def visit_newtype_struct(self, deserializer: Any) -> None:
        return IGNORED.deserialize(deserializer)

    def visit_seq(self, access: SeqAccess) -> None:
        while access.next_element(IGNORED) is not EXHAUSTED:
            pass

    def visit_map(self, access: MapAccess) -> None:
        while access.next_key(IGNORED) is not EXHAUSTED:
            access.next_value(IGNORED)

    def visit_enum(self, access: EnumAccess) -> None:
        access.variant(IGNORED)


class IgnoredAny:
    """Seed that skips whatever value is next."""

    __slots__ = ()

    def deserialize(self, deserializer: Any) -> None:
        return deserializer.deserialize_ignored_any(_IgnoredVisitor())


IGNORED = IgnoredAny()
