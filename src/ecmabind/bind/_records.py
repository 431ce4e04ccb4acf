"""Bindings for user-defined records and tagged unions.

- ``DataclassBinding`` / ``ModelBinding``: struct shape (object literal).
- ``TupleStructBinding``: ``NamedTuple`` classes (array literal).
- ``NewtypeBinding``: pydantic ``RootModel`` and ``typing.NewType``.
- ``EnumBinding``: payload-less variants (``enum.Enum``, ``Literal``).
- ``UnionBinding``: tagged union of record classes and unit tags.

Record bindings are created empty and populated afterwards, so a class
can refer to itself (directly or through a union) in its own fields.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from ecmabind.de._visitor import EXHAUSTED, IGNORED, EnumAccess, MapAccess, SeqAccess
from ecmabind.errors import DataError

from ._bindings import STR, Binding, _count_rest


class _Omit:
    __slots__ = ()

    def __repr__(self) -> str:
        return "OMIT"


OMIT = _Omit()
"""Missing-field default meaning "leave it to the class constructor"."""


@dataclass(frozen=True)
class FieldSpec:
    """One struct field: attribute name, key in the literal, value binding."""

    name: str
    key: str
    binding: Binding
    required: bool = True
    default: Any = OMIT


# ---------------------------------------------------------------------------
# Structs
# ---------------------------------------------------------------------------

class StructBinding(Binding):
    """Object literal read field by field into a record class."""

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.name = cls.__name__
        self.fields: tuple[FieldSpec, ...] = ()
        self.keys: tuple[str, ...] = ()
        self.forbid_unknown = False
        self._by_key: dict[str, FieldSpec] = {}

    def populate(self, fields: list[FieldSpec], *, forbid_unknown: bool = False) -> None:
        self.fields = tuple(fields)
        self.keys = tuple(f.key for f in fields)
        self.forbid_unknown = forbid_unknown
        self._by_key = {f.key: f for f in fields}

    def expecting(self) -> str:
        return f"struct {self.name}"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_struct(self.name, self.keys, self)

    def visit_map(self, access: MapAccess) -> Any:
        values: dict[str, Any] = {}
        while True:
            key = access.next_key(STR)
            if key is EXHAUSTED:
                break
            spec = self._by_key.get(key)
            if spec is None:
                if self.forbid_unknown:
                    raise DataError.unknown_field(key, self.keys)
                access.next_value(IGNORED)
                continue
            if spec.name in values:
                raise DataError.duplicate_field(key)
            values[spec.name] = access.next_value(spec.binding)

        for spec in self.fields:
            if spec.name in values:
                continue
            if spec.required:
                raise DataError.missing_field(spec.key)
            if spec.default is not OMIT:
                values[spec.name] = spec.default
        return self.build(values)

    def build(self, values: dict[str, Any]) -> Any:
        raise NotImplementedError


class DataclassBinding(StructBinding):
    def build(self, values: dict[str, Any]) -> Any:
        try:
            return self.cls(**values)
        except (TypeError, ValueError) as exc:
            # Raised by __post_init__ validation
            raise DataError.custom(str(exc)) from exc


class ModelBinding(StructBinding):
    """Pydantic model: values go through ``model_validate`` by key."""

    def build(self, values: dict[str, Any]) -> Any:
        by_key = {spec.key: values[spec.name] for spec in self.fields if spec.name in values}
        try:
            return self.cls.model_validate(by_key)
        except ValidationError as exc:
            raise DataError.custom(str(exc)) from exc


# ---------------------------------------------------------------------------
# Tuple structs and newtypes
# ---------------------------------------------------------------------------

class TupleStructBinding(Binding):
    """``NamedTuple`` read positionally from an array literal.

    Trailing fields with defaults may be left out.
    """

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.name = cls.__name__
        self.items: tuple[Binding, ...] = ()
        self.required = 0

    def populate(self, items: list[Binding], required: int) -> None:
        self.items = tuple(items)
        self.required = required

    def expecting(self) -> str:
        return f"tuple struct {self.name}"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_tuple_struct(self.name, len(self.items), self)

    def visit_seq(self, access: SeqAccess) -> Any:
        values = []
        for index, item in enumerate(self.items):
            value = access.next_element(item)
            if value is EXHAUSTED:
                if index < self.required:
                    raise DataError.invalid_length(index, self)
                break
            values.append(value)
        else:
            total = _count_rest(access, len(values))
            if total != len(values):
                raise DataError.invalid_length(total, self)
        return self.cls(*values)


class NewtypeBinding(Binding):
    """Single wrapped value; *build* turns the inner value into the result."""

    def __init__(self, name: str, build: Callable[[Any], Any]) -> None:
        self.name = name
        self.inner: Binding | None = None
        self._build = build

    def populate(self, inner: Binding) -> None:
        self.inner = inner

    def expecting(self) -> str:
        return f"newtype struct {self.name}"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_newtype_struct(self.name, self)

    def visit_newtype_struct(self, deserializer: Any) -> Any:
        return self.build(self.inner.deserialize(deserializer))

    def build(self, value: Any) -> Any:
        try:
            return self._build(value)
        except ValidationError as exc:
            raise DataError.custom(str(exc)) from exc


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class EnumBinding(Binding):
    """Payload-less variants, named by a bare tag."""

    def __init__(self, name: str, variants: dict[str, Any]) -> None:
        self.name = name
        self.variants = variants
        self.names = tuple(variants)

    @classmethod
    def for_enum(cls, enum_cls: type[Enum]) -> EnumBinding:
        return cls(enum_cls.__name__, dict(enum_cls.__members__))

    @classmethod
    def for_literal(cls, values: tuple[str, ...]) -> EnumBinding:
        return cls("Literal", {v: v for v in values})

    def expecting(self) -> str:
        return f"enum {self.name}"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_enum(self.name, self.names, self)

    def visit_enum(self, access: EnumAccess) -> Any:
        tag, variant = access.variant(STR)
        if tag not in self.variants:
            raise DataError.unknown_variant(tag, self.names)
        variant.unit_variant()
        return self.variants[tag]


class VariantKind(str, Enum):
    UNIT = "unit"
    NEWTYPE = "newtype"
    TUPLE = "tuple"
    STRUCT = "struct"


@dataclass(frozen=True)
class VariantSpec:
    """One union variant: tag, payload kind, and its binding or unit value."""

    name: str
    kind: VariantKind
    binding: Binding | None = None
    value: Any = None


class UnionBinding(Binding):
    """Tagged union; record classes are tagged by class name.

    Unit variants come from ``Literal`` strings and ``Enum`` members in the
    union; every record class carries a payload, even one without fields.
    """

    def __init__(self, variants: list[VariantSpec]) -> None:
        self.variants = {v.name: v for v in variants}
        self.names = tuple(self.variants)
        self.name = " | ".join(self.names)

    def expecting(self) -> str:
        return f"one of the variants {', '.join(self.names)}"

    def deserialize(self, deserializer: Any) -> Any:
        return deserializer.deserialize_enum(self.name, self.names, self)

    def visit_enum(self, access: EnumAccess) -> Any:
        tag, variant = access.variant(STR)
        spec = self.variants.get(tag)
        if spec is None:
            raise DataError.unknown_variant(tag, self.names)
        binding = spec.binding
        if spec.kind is VariantKind.UNIT:
            variant.unit_variant()
            return spec.value
        if spec.kind is VariantKind.NEWTYPE:
            return binding.build(variant.newtype_variant(binding.inner))
        if spec.kind is VariantKind.TUPLE:
            return variant.tuple_variant(len(binding.items), binding)
        return variant.struct_variant(binding.keys, binding)
