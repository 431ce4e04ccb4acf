"""Deserializer over a plain string.

Used for object keys and for bare enum tags (``Orange`` or ``"Orange"``):
every shape request visits the string as-is, except

- ``deserialize_enum``: the string is the variant tag of a payload-less
  variant (unit-only variant access);
- ``deserialize_newtype_struct``: hands itself to the newtype visitor.
"""

from __future__ import annotations

from typing import Any

from ecmabind.errors import UNIT_VARIANT, DataError

from ._visitor import Seed, Visitor


class StrDeserializer:
    """Deserializer whose value is one string."""

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"StrDeserializer({self.value!r})"

    def deserialize_any(self, visitor: Visitor) -> Any:
        return visitor.visit_str(self.value)

    def deserialize_newtype_struct(self, name: str, visitor: Visitor) -> Any:
        return visitor.visit_newtype_struct(self)

    def deserialize_enum(self, name: str, variants: tuple[str, ...], visitor: Visitor) -> Any:
        return visitor.visit_enum(self)

    # -- EnumAccess ----------------------------------------------------------

    def variant(self, seed: Seed) -> tuple[Any, UnitOnlyVariant]:
        return seed.deserialize(self), UnitOnlyVariant()


# Every remaining shape request visits the string; the visitor is always
# the last positional argument.
_FORWARDED_SHAPES = (
    "bool",
    "i8", "i16", "i32", "i64", "i128",
    "u8", "u16", "u32", "u64", "u128",
    "f32", "f64",
    "char", "str", "string", "bytes", "byte_buf", "identifier",
    "option", "unit", "unit_struct",
    "seq", "tuple", "tuple_struct", "map", "struct",
    "ignored_any",
)


def _forward_to_any(shape: str) -> Any:
    def deserialize(self: StrDeserializer, *args: Any) -> Any:
        return self.deserialize_any(args[-1])

    deserialize.__name__ = f"deserialize_{shape}"
    deserialize.__qualname__ = f"StrDeserializer.deserialize_{shape}"
    return deserialize


for _shape in _FORWARDED_SHAPES:
    setattr(StrDeserializer, f"deserialize_{_shape}", _forward_to_any(_shape))


class UnitOnlyVariant:
    """Variant access for a bare tag: there is no payload to read."""

    __slots__ = ()

    def unit_variant(self) -> None:
        return None

    def newtype_variant(self, seed: Seed) -> Any:
        raise DataError.invalid_type(UNIT_VARIANT, "newtype variant")

    def tuple_variant(self, length: int, visitor: Visitor) -> Any:
        raise DataError.invalid_type(UNIT_VARIANT, "tuple variant")

    def struct_variant(self, fields: tuple[str, ...], visitor: Visitor) -> Any:
        raise DataError.invalid_type(UNIT_VARIANT, "struct variant")
