"""Lazy accessors over array and object literals, and enum tag resolution.

- ``_Seq`` pulls array elements one at a time.
- ``_Map`` pulls object entries as a key, then exactly one value.
- ``resolve_enum_tag`` turns a node into one of four tag forms; a
  single-key object is then read through ``_Enum``.

Accessors never collect children up front: each child is dispatched when
the visitor asks for it, in the ownership mode of the parent deserializer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from ecmabind.errors import (
    DataError,
    ExpectedFieldValue,
    InvalidArrayElement,
    InvalidObjectKey,
    UnexpectedExpression,
    UnexpectedProperty,
    UnexpectedSpread,
)

from ._nodes import (
    IDENTIFIER,
    OBJECT,
    SPREAD_TYPES,
    LiteralKind,
    is_plain_property,
    literal_kind,
    node_type,
    property_key,
)
from ._ownership import Ownership
from ._value import StrDeserializer
from ._visitor import EXHAUSTED, Seed, Visitor

if TYPE_CHECKING:
    from ._deserializer import Deserializer


def _split_entry(entry: Any) -> tuple[str, Any]:
    """``(key, value node)`` of one object entry, or raise."""
    if node_type(entry) in SPREAD_TYPES:
        raise UnexpectedSpread(entry)
    if not is_plain_property(entry):
        raise UnexpectedProperty(entry)
    key = property_key(entry)
    if key is None:
        raise InvalidObjectKey(entry.key)
    return key, entry.value


# ---------------------------------------------------------------------------
# Sequence accessor
# ---------------------------------------------------------------------------

class _Seq:
    """Elements of one array literal, in order."""

    __slots__ = ("_de", "_slots")

    def __init__(self, de: Deserializer, elements: list[Any]) -> None:
        self._de = de
        self._slots = de.ownership.cursor(elements)

    def next_element(self, seed: Seed) -> Any:
        if not self._slots:
            return EXHAUSTED
        slot = self._slots.pop()
        if slot is None:
            raise InvalidArrayElement(self._de.node)
        if node_type(slot) in SPREAD_TYPES:
            raise UnexpectedSpread(slot)
        return seed.deserialize(self._de.child(slot))

    def size_hint(self) -> int:
        # Counts remaining slots, holes included
        return len(self._slots)


# ---------------------------------------------------------------------------
# Map accessor
# ---------------------------------------------------------------------------

class _Map:
    """Entries of one object literal: ``next_key`` then ``next_value``."""

    __slots__ = ("_de", "_entries", "_pending")

    def __init__(self, de: Deserializer, properties: list[Any]) -> None:
        self._de = de
        self._entries = de.ownership.cursor(properties)
        self._pending: Any = None

    def next_key(self, seed: Seed) -> Any:
        if not self._entries:
            return EXHAUSTED
        key, value = _split_entry(self._entries.pop())
        self._pending = value
        return seed.deserialize(StrDeserializer(key))

    def next_value(self, seed: Seed) -> Any:
        value, self._pending = self._pending, None
        if value is None:
            raise ExpectedFieldValue()
        return seed.deserialize(self._de.child(value))

    def size_hint(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# Enum tags
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BareString:
    """``"Orange"``: a string literal naming a payload-less variant."""

    text: str


@dataclass(frozen=True)
class BareIdentifier:
    """``Orange``: a bare identifier naming a payload-less variant."""

    name: str


@dataclass(frozen=True)
class SingleKeyObject:
    """``{ Pear: {...} }``: the key names the variant, the value is its payload."""

    key: str
    payload: Any


@dataclass(frozen=True)
class Unsupported:
    """Any other node: it cannot name a variant."""

    node: Any


EnumTag = Union[BareString, BareIdentifier, SingleKeyObject, Unsupported]


def resolve_enum_tag(node: Any, ownership: Ownership = Ownership.BORROWED) -> EnumTag:
    """Resolve *node* into one of the four enum tag forms.

    An object literal must hold exactly one plain ``key: value`` entry;
    other entry counts raise an invalid-length ``DataError`` and other
    entry shapes raise the matching tree error.
    """
    if literal_kind(node) is LiteralKind.STRING:
        return BareString(node.value)
    kind = node_type(node)
    if kind == IDENTIFIER:
        return BareIdentifier(node.name)
    if kind == OBJECT:
        entries = ownership.cursor(node.properties)
        if len(entries) != 1:
            raise DataError.invalid_length(len(entries), "1", node)
        key, payload = _split_entry(entries.pop())
        return SingleKeyObject(key, payload)
    return Unsupported(node)


class _Enum:
    """Enum and variant access for a single-key object tag."""

    __slots__ = ("_de", "_tag")

    def __init__(self, de: Deserializer, tag: SingleKeyObject) -> None:
        self._de = de
        self._tag = tag

    def variant(self, seed: Seed) -> tuple[Any, _Enum]:
        return seed.deserialize(StrDeserializer(self._tag.key)), self

    def unit_variant(self) -> None:
        # A single-key object always carries a payload
        raise UnexpectedExpression(self._tag.payload)

    def newtype_variant(self, seed: Seed) -> Any:
        return seed.deserialize(self._payload())

    def tuple_variant(self, length: int, visitor: Visitor) -> Any:
        return self._payload().deserialize_seq(visitor)

    def struct_variant(self, fields: tuple[str, ...], visitor: Visitor) -> Any:
        return self._payload().deserialize_map(visitor)

    def _payload(self) -> Deserializer:
        return self._de.child(self._tag.payload)
