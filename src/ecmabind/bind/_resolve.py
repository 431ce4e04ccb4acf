"""Type hint -> binding resolution.

``binding_for(annotation)`` returns the seed that reads a value of that
type from a literal tree.  Bindings are cached per annotation; record
classes are registered before their fields are resolved, so recursive
types resolve to the same (eventually populated) binding.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import types
import typing
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, RootModel

from ecmabind.de._numbers import FloatWidth, IntWidth

from ._bindings import (
    ANY,
    BOOL,
    STR,
    Binding,
    BytesBinding,
    CharBinding,
    FloatBinding,
    IntBinding,
    ListBinding,
    MapBinding,
    OptionBinding,
    TupleBinding,
    UnitBinding,
)
from ._records import (
    DataclassBinding,
    EnumBinding,
    FieldSpec,
    ModelBinding,
    NewtypeBinding,
    TupleStructBinding,
    UnionBinding,
    VariantKind,
    VariantSpec,
)
from ._types import TextShape

logger = logging.getLogger(__name__)


class UnsupportedTypeError(TypeError):
    """Annotation with no literal binding."""

    def __init__(self, annotation: Any, reason: str = "") -> None:
        self.annotation = annotation
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot bind a literal to {annotation!r}{detail}")


_CACHE: dict[Any, Binding] = {}
# Nesting of binding_for calls; 0 outside resolution
_depth = 0

_NONE_TYPES = (None, type(None))
_UNION_ORIGINS = (Union, types.UnionType)
_MARKERS = (IntWidth, FloatWidth, TextShape)

_SEQUENCE_FACTORIES: dict[Any, Any] = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    set: set,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
}

_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

_SCALARS: dict[Any, Binding] = {
    bool: BOOL,
    int: IntBinding(),
    float: FloatBinding(),
    str: STR,
    bytes: BytesBinding(),
}


def binding_for(annotation: Any) -> Binding:
    """Binding for *annotation*, built on first use.

    If resolution fails, every binding cached since the outermost call
    began is dropped again, so no cached binding refers to a record that
    was never populated.
    """
    global _depth
    try:
        cached = _CACHE.get(annotation)
        hashable = True
    except TypeError:
        # Unhashable metadata inside the annotation
        cached, hashable = None, False
    if cached is not None:
        return cached

    snapshot = set(_CACHE) if _depth == 0 else None
    _depth += 1
    try:
        binding = _build(annotation)
    except Exception:
        if snapshot is not None:
            for key in set(_CACHE) - snapshot:
                del _CACHE[key]
        raise
    finally:
        _depth -= 1

    if hashable:
        _CACHE[annotation] = binding
        logger.debug("built %s for %r", type(binding).__name__, annotation)
    return binding


def clear_cache() -> None:
    _CACHE.clear()


def _build(annotation: Any) -> Binding:
    if annotation is Any or annotation is object:
        return ANY
    if annotation in _NONE_TYPES:
        return UnitBinding()
    if isinstance(annotation, type) and annotation in _SCALARS:
        return _SCALARS[annotation]

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is Annotated:
        return _annotated(annotation, args[0], args[1:])
    if origin in _UNION_ORIGINS:
        return _union(annotation, args)
    if origin is Literal:
        return _literal(annotation, args)

    container = origin or annotation
    if isinstance(container, type) and container in _SEQUENCE_FACTORIES:
        factory = _SEQUENCE_FACTORIES[container]
        item = binding_for(args[0]) if args else ANY
        return ListBinding(item, factory)
    if container is tuple:
        return _tuple(args, bare=origin is None)
    if container in _MAPPING_ORIGINS:
        if args:
            return MapBinding(binding_for(args[0]), binding_for(args[1]))
        return MapBinding(STR, ANY)

    if hasattr(annotation, "__supertype__"):
        return _newtype(annotation)
    if isinstance(annotation, type):
        return _record(annotation)

    raise UnsupportedTypeError(annotation)


# ---------------------------------------------------------------------------
# typing constructs
# ---------------------------------------------------------------------------

def _annotated(annotation: Any, base: Any, metadata: tuple[Any, ...]) -> Binding:
    for marker in metadata:
        if isinstance(marker, IntWidth):
            if base is not int:
                raise UnsupportedTypeError(annotation, "integer widths apply to int")
            return IntBinding(marker)
        if isinstance(marker, FloatWidth):
            if base is not float:
                raise UnsupportedTypeError(annotation, "float widths apply to float")
            return FloatBinding(marker)
        if marker is TextShape.CHAR:
            if base is not str:
                raise UnsupportedTypeError(annotation, "Char applies to str")
            return CharBinding()
    return binding_for(base)


def _is_optional(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return _is_optional(typing.get_args(annotation)[0])
    return origin in _UNION_ORIGINS and type(None) in typing.get_args(annotation)


def _union(annotation: Any, args: tuple[Any, ...]) -> Binding:
    members = [a for a in args if a not in _NONE_TYPES]
    if len(members) == len(args):
        return _variants(annotation, members)
    if len(members) == 1:
        return OptionBinding(binding_for(members[0]))
    return OptionBinding(_variants(annotation, members))


def _literal(annotation: Any, values: tuple[Any, ...]) -> Binding:
    if not all(isinstance(v, str) for v in values):
        raise UnsupportedTypeError(annotation, "only string literals name variants")
    return EnumBinding.for_literal(values)


def _tuple(args: tuple[Any, ...], *, bare: bool) -> Binding:
    if bare:
        return ListBinding(ANY, tuple)
    if len(args) == 2 and args[1] is Ellipsis:
        return ListBinding(binding_for(args[0]), tuple)
    if not args or args == ((),):
        return TupleBinding(())
    return TupleBinding(tuple(binding_for(a) for a in args))


def _newtype(annotation: Any) -> Binding:
    binding = NewtypeBinding(annotation.__name__, lambda value: value)
    _CACHE[annotation] = binding
    binding.populate(binding_for(annotation.__supertype__))
    return binding


# ---------------------------------------------------------------------------
# Record classes
# ---------------------------------------------------------------------------

def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _record(cls: type) -> Binding:
    if issubclass(cls, Enum):
        return EnumBinding.for_enum(cls)
    if issubclass(cls, RootModel):
        binding = NewtypeBinding(cls.__name__, cls)
        _register(cls, binding, lambda: binding.populate(
            binding_for(cls.model_fields["root"].annotation)
        ))
        return binding
    if issubclass(cls, BaseModel):
        binding = ModelBinding(cls)
        _register(cls, binding, lambda: _populate_model(binding, cls))
        return binding
    if dataclasses.is_dataclass(cls):
        binding = DataclassBinding(cls)
        _register(cls, binding, lambda: _populate_dataclass(binding, cls))
        return binding
    if _is_named_tuple(cls):
        binding = TupleStructBinding(cls)
        _register(cls, binding, lambda: _populate_named_tuple(binding, cls))
        return binding
    raise UnsupportedTypeError(cls)


def _register(cls: type, binding: Binding, populate: Any) -> None:
    """Cache *binding* for *cls* before resolving its fields."""
    _CACHE[cls] = binding
    populate()


def _field_spec(name: str, key: str, annotation: Any, has_default: bool) -> FieldSpec:
    binding = binding_for(annotation)
    if has_default:
        return FieldSpec(name, key, binding, required=False)
    if _is_optional(annotation):
        # Absent optional field reads as null
        return FieldSpec(name, key, binding, required=False, default=None)
    return FieldSpec(name, key, binding)


def _populate_dataclass(binding: DataclassBinding, cls: type) -> None:
    hints = typing.get_type_hints(cls, include_extras=True)
    fields = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        key = f.metadata.get("alias", f.name)
        fields.append(_field_spec(f.name, key, hints[f.name], has_default))
    binding.populate(fields)


def _populate_model(binding: ModelBinding, cls: type[BaseModel]) -> None:
    fields = []
    for name, info in cls.model_fields.items():
        annotation = info.annotation
        markers = [m for m in info.metadata if isinstance(m, _MARKERS)]
        if markers:
            annotation = Annotated[(annotation, *markers)]
        key = info.alias or name
        fields.append(_field_spec(name, key, annotation, not info.is_required()))
    binding.populate(fields, forbid_unknown=cls.model_config.get("extra") == "forbid")


def _populate_named_tuple(binding: TupleStructBinding, cls: type) -> None:
    hints = typing.get_type_hints(cls, include_extras=True)
    defaults = getattr(cls, "_field_defaults", {})
    items = [binding_for(hints.get(name, Any)) for name in cls._fields]
    required = sum(1 for name in cls._fields if name not in defaults)
    binding.populate(items, required)


# ---------------------------------------------------------------------------
# Unions of record classes
# ---------------------------------------------------------------------------

def _variant_specs(annotation: Any, member: Any) -> list[VariantSpec]:
    """Variants contributed by one union member."""
    if typing.get_origin(member) is Literal:
        values = typing.get_args(member)
        if not all(isinstance(v, str) for v in values):
            raise UnsupportedTypeError(annotation, "only string literals name variants")
        return [VariantSpec(v, VariantKind.UNIT, value=v) for v in values]
    if not isinstance(member, type):
        raise UnsupportedTypeError(annotation, f"variant {member!r} is not a class")
    name = member.__name__
    if issubclass(member, Enum):
        return [
            VariantSpec(tag, VariantKind.UNIT, value=value)
            for tag, value in member.__members__.items()
        ]
    if issubclass(member, RootModel):
        return [VariantSpec(name, VariantKind.NEWTYPE, binding_for(member))]
    if _is_named_tuple(member):
        return [VariantSpec(name, VariantKind.TUPLE, binding_for(member))]
    if issubclass(member, BaseModel) or dataclasses.is_dataclass(member):
        return [VariantSpec(name, VariantKind.STRUCT, binding_for(member))]
    raise UnsupportedTypeError(annotation, f"variant {name} is not a record class")


def _variants(annotation: Any, members: list[Any]) -> Binding:
    specs = []
    for member in members:
        specs.extend(_variant_specs(annotation, member))
    return UnionBinding(specs)
