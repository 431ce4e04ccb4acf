"""Shared test helpers for the ecmabind test suite."""

from types import SimpleNamespace

from ecmabind.de import Visitor
from ecmabind.options import ParseOptions
from ecmabind.parser import parse_expression


def parse(source: str, **options):
    """Parse *source* with ``ParseOptions(**options)``."""
    return parse_expression(source, ParseOptions(**options))


# ---------------------------------------------------------------------------
# Hand-built ESTree nodes
# ---------------------------------------------------------------------------

def lit(value, raw=None):
    """Boolean, null or string literal."""
    if raw is None:
        if value is None:
            raw = "null"
        elif isinstance(value, bool):
            raw = "true" if value else "false"
        else:
            raw = f'"{value}"'
    return SimpleNamespace(type="Literal", value=value, raw=raw)


def num(value, raw=None):
    """Numeric literal; *raw* defaults to ``repr(value)``."""
    return SimpleNamespace(type="Literal", value=value, raw=repr(value) if raw is None else raw)


def neg(argument):
    return SimpleNamespace(type="UnaryExpression", operator="-", prefix=True, argument=argument)


def ident(name):
    return SimpleNamespace(type="Identifier", name=name)


def regex(pattern, flags=""):
    return SimpleNamespace(
        type="Literal", value=None, raw=f"/{pattern}/{flags}",
        regex=SimpleNamespace(pattern=pattern, flags=flags),
    )


def array(*elements):
    """Array literal; pass ``None`` for a hole."""
    return SimpleNamespace(type="ArrayExpression", elements=list(elements))


def prop(key, value, **flags):
    """``key: value`` property; a str key becomes an identifier."""
    fields = dict(kind="init", computed=False, method=False, shorthand=False)
    fields.update(flags)
    if isinstance(key, str):
        key = ident(key)
    return SimpleNamespace(type="Property", key=key, value=value, **fields)


def obj(*entries, **fields):
    """Object literal from explicit entries plus ``name=value`` properties."""
    properties = list(entries) + [prop(k, v) for k, v in fields.items()]
    return SimpleNamespace(type="ObjectExpression", properties=properties)


def spread(argument):
    return SimpleNamespace(type="SpreadElement", argument=argument)


def located(node, line, column):
    """Attach ESTree location info (0-based *column*) to *node*."""
    start = SimpleNamespace(line=line, column=column)
    node.loc = SimpleNamespace(start=start, end=start)
    return node


# ---------------------------------------------------------------------------
# Visitors and seeds
# ---------------------------------------------------------------------------

class Recorder(Visitor):
    """Returns ``(visit, value)`` for whatever the deserializer hands over."""

    def visit_bool(self, value):
        return ("bool", value)

    def visit_i64(self, value):
        return ("i64", value)

    def visit_u64(self, value):
        return ("u64", value)

    def visit_f64(self, value):
        return ("f64", value)

    def visit_char(self, value):
        return ("char", value)

    def visit_str(self, value):
        return ("str", value)

    def visit_bytes(self, value):
        return ("bytes", value)

    def visit_none(self):
        return ("none",)

    def visit_some(self, deserializer):
        return ("some", deserializer)

    def visit_unit(self):
        return ("unit",)

    def visit_newtype_struct(self, deserializer):
        return ("newtype", deserializer)

    def visit_seq(self, access):
        return ("seq", access)

    def visit_map(self, access):
        return ("map", access)

    def visit_enum(self, access):
        return ("enum", access)


class Shape:
    """Seed that requests one shape and records the answer."""

    def __init__(self, shape):
        self.shape = shape

    def deserialize(self, deserializer):
        return getattr(deserializer, f"deserialize_{self.shape}")(Recorder())
