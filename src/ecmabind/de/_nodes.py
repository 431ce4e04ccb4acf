"""Read-only view over ESTree expression nodes.

The engine never depends on a concrete node class: anything exposing the
ESTree attributes (``type``, ``elements``, ``properties``, ``value``,
``raw``, ...) works, whether it came from ``esprima`` or was built by
hand.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from ._numbers import Number


ARRAY = "ArrayExpression"
OBJECT = "ObjectExpression"
LITERAL = "Literal"
IDENTIFIER = "Identifier"
PROPERTY = "Property"
UNARY = "UnaryExpression"
TEMPLATE = "TemplateLiteral"
JSX_TEXT = "JSXText"

SPREAD_TYPES = frozenset({
    "SpreadElement",
    "SpreadProperty",
    "ExperimentalSpreadProperty",
})


class LiteralKind(str, Enum):
    BOOL = "bool"
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    REGEX = "regex"
    BIGINT = "bigint"
    JSX_TEXT = "jsx_text"


def node_type(node: Any) -> str:
    return getattr(node, "type", None) or type(node).__name__


def _is_negated_number(node: Any) -> bool:
    # -1 parses as UnaryExpression('-', Literal(1)); read it as one literal
    if getattr(node, "operator", None) != "-":
        return False
    argument = getattr(node, "argument", None)
    return node_type(argument) == LITERAL and literal_kind(argument) is LiteralKind.NUMBER


def literal_kind(node: Any) -> LiteralKind | None:
    """Classify a literal node, or ``None`` for non-literal nodes."""
    node_kind = node_type(node)
    if node_kind == JSX_TEXT:
        return LiteralKind.JSX_TEXT
    if node_kind == UNARY:
        return LiteralKind.NUMBER if _is_negated_number(node) else None
    if node_kind != LITERAL:
        return None
    if getattr(node, "regex", None) is not None:
        return LiteralKind.REGEX
    if getattr(node, "bigint", None) is not None:
        return LiteralKind.BIGINT
    value = node.value
    # bool check before int (bool is subclass of int)
    if isinstance(value, bool):
        return LiteralKind.BOOL
    if value is None:
        return LiteralKind.NULL
    if isinstance(value, str):
        return LiteralKind.STRING
    if isinstance(value, (int, float)):
        return LiteralKind.NUMBER
    return None


def _as_float(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def number_of(node: Any) -> Number:
    """Numeric view of a node already classified as ``LiteralKind.NUMBER``."""
    if node_type(node) == UNARY:
        inner = number_of(node.argument)
        raw = f"-{inner.raw}" if inner.raw is not None else None
        return Number(-inner.value, raw)
    return Number(_as_float(node.value), getattr(node, "raw", None))


# ---------------------------------------------------------------------------
# Object properties
# ---------------------------------------------------------------------------

def is_plain_property(prop: Any) -> bool:
    """``key: value`` entry: not shorthand, not a method, not an accessor."""
    if node_type(prop) != PROPERTY:
        return False
    return (
        (getattr(prop, "kind", None) or "init") == "init"
        and not getattr(prop, "method", False)
        and not getattr(prop, "shorthand", False)
    )


def property_key(prop: Any) -> str | None:
    """Key of a property as a string; only identifier and string keys count."""
    if getattr(prop, "computed", False):
        return None
    key = prop.key
    key_type = node_type(key)
    if key_type == IDENTIFIER:
        return key.name
    if key_type == LITERAL and literal_kind(key) is LiteralKind.STRING:
        return key.value
    return None
