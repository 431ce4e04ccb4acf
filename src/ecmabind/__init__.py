"""ecmabind: bind typed Python values onto JavaScript literal expressions.

    from ecmabind import from_str

    config = from_str("{ name: 'pump', rates: [1, 2.5] }", Config)
"""

from .errors import (
    DeserializeError,
    ParseError,
    InvalidObjectKey,
    InvalidNumber,
    InvalidArrayElement,
    UnexpectedSpread,
    UnexpectedProperty,
    UnexpectedExpression,
    UnexpectedRegex,
    UnexpectedBigInt,
    UnexpectedJsxText,
    ExpectedFieldValue,
    RecursionLimitExceeded,
    DataError,
    DataErrorKind,
    Unexpected,
    UnexpectedKind,
)

from .options import (
    EsVersion,
    ParseOptions,
)

from .parser import (
    parse_expression,
)

from .de import (
    Deserializer,
    Ownership,
    Visitor,
)

from .bind import (
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
    F32,
    F64,
    Char,
    UnsupportedTypeError,
    binding_for,
)

from ._api import (
    deserialize,
    from_expr,
    from_str,
    from_str_with_version,
)

__all__ = [
    # Entry points
    "from_str",
    "from_str_with_version",
    "from_expr",
    "deserialize",
    "parse_expression",
    # Configuration
    "EsVersion",
    "ParseOptions",
    # Engine
    "Deserializer",
    "Ownership",
    "Visitor",
    "binding_for",
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
    # Errors
    "DeserializeError",
    "ParseError",
    "InvalidObjectKey",
    "InvalidNumber",
    "InvalidArrayElement",
    "UnexpectedSpread",
    "UnexpectedProperty",
    "UnexpectedExpression",
    "UnexpectedRegex",
    "UnexpectedBigInt",
    "UnexpectedJsxText",
    "ExpectedFieldValue",
    "RecursionLimitExceeded",
    "DataError",
    "DataErrorKind",
    "Unexpected",
    "UnexpectedKind",
    "UnsupportedTypeError",
]
