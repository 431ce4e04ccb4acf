"""Target bindings: from a type hint to the seed that reads it.

    from ecmabind.bind import binding_for, U16, Char
"""

from ._types import (
    # Integer widths
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    # Float widths
    F32,
    F64,
    # Text
    Char,
    TextShape,
)

from ._bindings import (
    Binding,
    AnyBinding,
    BoolBinding,
    BytesBinding,
    CharBinding,
    FloatBinding,
    IntBinding,
    ListBinding,
    MapBinding,
    OptionBinding,
    StrBinding,
    TupleBinding,
    UnitBinding,
)

from ._records import (
    DataclassBinding,
    EnumBinding,
    FieldSpec,
    ModelBinding,
    NewtypeBinding,
    StructBinding,
    TupleStructBinding,
    UnionBinding,
    VariantKind,
    VariantSpec,
)

from ._resolve import (
    UnsupportedTypeError,
    binding_for,
    clear_cache,
)

__all__ = [
    # Width markers
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "F32",
    "F64",
    "Char",
    "TextShape",
    # Scalar and container bindings
    "Binding",
    "AnyBinding",
    "BoolBinding",
    "BytesBinding",
    "CharBinding",
    "FloatBinding",
    "IntBinding",
    "ListBinding",
    "MapBinding",
    "OptionBinding",
    "StrBinding",
    "TupleBinding",
    "UnitBinding",
    # Record bindings
    "DataclassBinding",
    "EnumBinding",
    "FieldSpec",
    "ModelBinding",
    "NewtypeBinding",
    "StructBinding",
    "TupleStructBinding",
    "UnionBinding",
    "VariantKind",
    "VariantSpec",
    # Resolution
    "UnsupportedTypeError",
    "binding_for",
    "clear_cache",
]
