"""Bindings for scalars, containers and untyped values.

A binding is both the seed and the visitor for one target type:
``deserialize`` picks the shape request, the ``visit_*`` overrides build
the Python value from what the dispatcher hands back.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ecmabind.de._numbers import FloatWidth, IntWidth
from ecmabind.de._visitor import EXHAUSTED, IGNORED, MapAccess, SeqAccess, Visitor
from ecmabind.errors import DataError, Unexpected, UnexpectedKind


class Binding(Visitor):
    """Seed plus visitor for one target type."""

    def deserialize(self, deserializer: Any) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.expecting()}>"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

class BoolBinding(Binding):
    def expecting(self) -> str:
        return "a boolean"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_bool(self)

    def visit_bool(self, value: bool) -> bool:
        return value


class IntBinding(Binding):
    """Integer of a fixed width; ``int`` annotations use ``i64``."""

    __slots__ = ("width",)

    def __init__(self, width: IntWidth = IntWidth.I64) -> None:
        self.width = width

    def expecting(self) -> str:
        return self.width.value

    def deserialize(self, deserializer: Any) -> Any:
        return getattr(deserializer, f"deserialize_{self.width.value}")(self)

    def _checked(self, value: int, kind: UnexpectedKind) -> int:
        lower, upper = self.width.bounds
        if not lower <= value <= upper:
            raise DataError.invalid_value(Unexpected(kind, value), self)
        return value

    def visit_i64(self, value: int) -> int:
        return self._checked(value, UnexpectedKind.SIGNED)

    def visit_u64(self, value: int) -> int:
        return self._checked(value, UnexpectedKind.UNSIGNED)


class FloatBinding(Binding):
    __slots__ = ("width",)

    def __init__(self, width: FloatWidth = FloatWidth.F64) -> None:
        self.width = width

    def expecting(self) -> str:
        return self.width.value

    def deserialize(self, deserializer: Any) -> Any:
        if self.width is FloatWidth.F32:
            return deserializer.deserialize_f32(self)
        return deserializer.deserialize_f64(self)

    def visit_f64(self, value: float) -> float:
        return value

    def visit_i64(self, value: int) -> float:
        return float(value)

    def visit_u64(self, value: int) -> float:
        return float(value)


class StrBinding(Binding):
    def expecting(self) -> str:
        return "a string"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_string(self)

    def visit_str(self, value: str) -> str:
        return value


class CharBinding(Binding):
    def expecting(self) -> str:
        return "a character"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_char(self)

    def visit_str(self, value: str) -> str:
        # Reached directly from string deserializers (object keys)
        if len(value) != 1:
            raise DataError.invalid_value(Unexpected(UnexpectedKind.STR, value), self)
        return value


class BytesBinding(Binding):
    def expecting(self) -> str:
        return "a byte array"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_byte_buf(self)

    def visit_bytes(self, value: bytes) -> bytes:
        return bytes(value)

    def visit_str(self, value: str) -> bytes:
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise DataError.invalid_value(Unexpected(UnexpectedKind.STR, value), self) from e


class UnitBinding(Binding):
    """``None`` read from ``null``."""

    def expecting(self) -> str:
        return "unit"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_unit(self)

    def visit_unit(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Wrappers and containers
# ---------------------------------------------------------------------------

class OptionBinding(Binding):
    """``T | None``: ``null`` is ``None``, anything else is read as ``T``."""

    __slots__ = ("inner",)

    def __init__(self, inner: Binding) -> None:
        self.inner = inner

    def expecting(self) -> str:
        return "option"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_option(self)

    def visit_none(self) -> None:
        return None

    def visit_unit(self) -> None:
        return None

    def visit_some(self, deserializer: Any) -> Any:
        return self.inner.deserialize(deserializer)


class ListBinding(Binding):
    """Variable-length sequence collected into *factory* (list, set, ...)."""

    __slots__ = ("item", "factory")

    def __init__(self, item: Binding, factory: Callable[[list[Any]], Any] = list) -> None:
        self.item = item
        self.factory = factory

    def expecting(self) -> str:
        return "a sequence"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_seq(self)

    def visit_seq(self, access: SeqAccess) -> Any:
        items = []
        while True:
            item = access.next_element(self.item)
            if item is EXHAUSTED:
                break
            items.append(item)
        return self.factory(items)


def _count_rest(access: SeqAccess, seen: int) -> int:
    """Drain the remaining elements, returning the total element count."""
    while access.next_element(IGNORED) is not EXHAUSTED:
        seen += 1
    return seen


class TupleBinding(Binding):
    """Fixed-length heterogeneous tuple; lengths must match exactly."""

    __slots__ = ("items",)

    def __init__(self, items: tuple[Binding, ...]) -> None:
        self.items = items

    def expecting(self) -> str:
        return f"a tuple of size {len(self.items)}"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_tuple(len(self.items), self)

    def visit_seq(self, access: SeqAccess) -> tuple[Any, ...]:
        values = []
        for index, item in enumerate(self.items):
            value = access.next_element(item)
            if value is EXHAUSTED:
                raise DataError.invalid_length(index, self)
            values.append(value)
        total = _count_rest(access, len(values))
        if total != len(self.items):
            raise DataError.invalid_length(total, self)
        return tuple(values)


class MapBinding(Binding):
    """``dict[K, V]``; a repeated key keeps the last value."""

    __slots__ = ("key", "value")

    def __init__(self, key: Binding, value: Binding) -> None:
        self.key = key
        self.value = value

    def expecting(self) -> str:
        return "a map"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_map(self)

    def visit_map(self, access: MapAccess) -> dict[Any, Any]:
        result = {}
        while True:
            key = access.next_key(self.key)
            if key is EXHAUSTED:
                break
            result[key] = access.next_value(self.value)
        return result


# ---------------------------------------------------------------------------
# Untyped values
# ---------------------------------------------------------------------------

class AnyBinding(Binding):
    """Plain Python value: the node picks its own shape.

    Produces the same values ``json.loads`` would for JSON-compatible input:
    ``bool``, ``int``, ``float``, ``str``, ``None``, ``list`` and ``dict``.
    """

    def expecting(self) -> str:
        return "any value"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_any(self)

    def visit_bool(self, value: bool) -> bool:
        return value

    def visit_i64(self, value: int) -> int:
        return value

    def visit_u64(self, value: int) -> int:
        return value

    def visit_f64(self, value: float) -> float:
        return value

    def visit_str(self, value: str) -> str:
        return value

    def visit_bytes(self, value: bytes) -> bytes:
        return bytes(value)

    def visit_none(self) -> None:
        return None

    def visit_unit(self) -> None:
        return None

    def visit_some(self, deserializer: Any) -> Any:
        return self.deserialize(deserializer)

    def visit_newtype_struct(self, deserializer: Any) -> Any:
        return self.deserialize(deserializer)

    def visit_seq(self, access: SeqAccess) -> list[Any]:
        return ListBinding(self).visit_seq(access)

    def visit_map(self, access: MapAccess) -> dict[str, Any]:
        return MapBinding(self, self).visit_map(access)


BOOL = BoolBinding()
STR = StrBinding()
ANY = AnyBinding()
