"""ecmabind deserialization engine.

The dispatcher, its accessors and the visitor contract::

    from ecmabind.de import Deserializer, Ownership, Visitor, EXHAUSTED
"""

from ._numbers import (
    # Widths
    IntWidth,
    FloatWidth,
    # Numeric literal view
    Number,
    is_integer,
    to_int,
    to_i8,
    to_i16,
    to_i32,
    to_i64,
    to_i128,
    to_u8,
    to_u16,
    to_u32,
    to_u64,
    to_u128,
    to_f32,
    number_to_unexpected,
)

from ._nodes import (
    LiteralKind,
    literal_kind,
    node_type,
    number_of,
)

from ._ownership import (
    Ownership,
)

from ._visitor import (
    EXHAUSTED,
    IGNORED,
    IgnoredAny,
    Seed,
    SeqAccess,
    MapAccess,
    EnumAccess,
    VariantAccess,
    Visitor,
)

from ._value import (
    StrDeserializer,
    UnitOnlyVariant,
)

from ._access import (
    BareIdentifier,
    BareString,
    EnumTag,
    SingleKeyObject,
    Unsupported,
    resolve_enum_tag,
)

from ._deserializer import (
    DEFAULT_MAX_DEPTH,
    Deserializer,
)

__all__ = [
    # Numeric coercion
    "IntWidth",
    "FloatWidth",
    "Number",
    "is_integer",
    "to_int",
    "to_i8",
    "to_i16",
    "to_i32",
    "to_i64",
    "to_i128",
    "to_u8",
    "to_u16",
    "to_u32",
    "to_u64",
    "to_u128",
    "to_f32",
    "number_to_unexpected",
    # Nodes
    "LiteralKind",
    "literal_kind",
    "node_type",
    "number_of",
    # Ownership
    "Ownership",
    # Visitor contract
    "EXHAUSTED",
    "IGNORED",
    "IgnoredAny",
    "Seed",
    "SeqAccess",
    "MapAccess",
    "EnumAccess",
    "VariantAccess",
    "Visitor",
    # String deserializer
    "StrDeserializer",
    "UnitOnlyVariant",
    # Enum tags
    "BareIdentifier",
    "BareString",
    "EnumTag",
    "SingleKeyObject",
    "Unsupported",
    "resolve_enum_tag",
    # Dispatcher
    "DEFAULT_MAX_DEPTH",
    "Deserializer",
]
