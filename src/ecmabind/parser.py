"""Parse JS-literal source into a single ESTree expression.

The delegate parser is ``esprima``.  Source is parsed as the body of a
parenthesised expression, so ``{ a: 1 }`` reads as an object literal and
not a block.  After parsing, one pass over the tree

- shifts first-line columns back to the caller's source, and
- rejects syntax newer than the requested ``EsVersion``.
"""

from __future__ import annotations

import logging
from typing import Any

import esprima

from ecmabind.de._nodes import LITERAL, PROPERTY, SPREAD_TYPES, TEMPLATE, node_type
from ecmabind.errors import ParseError
from ecmabind.options import EsVersion, ParseOptions

logger = logging.getLogger(__name__)

# Source is wrapped as "(" + source + "\n)"
_PREFIX = "("
_SUFFIX = "\n)"


def parse_expression(source: str, options: ParseOptions | None = None) -> Any:
    """Parse *source* into its single expression node.

    Raises
    ------
    ParseError
        The source is not exactly one expression, ``esprima`` rejected
        it, or it uses syntax newer than ``options.version``.
    """
    options = options or ParseOptions()
    logger.debug(
        "parsing %d chars as %s (jsx=%s)", len(source), options.version.value, options.jsx,
    )

    try:
        script = esprima.parseScript(
            f"{_PREFIX}{source}{_SUFFIX}", {"jsx": options.jsx, "loc": True},
        )
    except esprima.Error as e:
        raise ParseError(f"Parse error: {e}") from e
    except RecursionError as e:
        raise ParseError("Parse error: literal nested too deeply to parse") from e

    body = script.body
    if len(body) != 1 or node_type(body[0]) != "ExpressionStatement":
        raise ParseError("Parse error: expected exactly one expression")

    expression = body[0].expression
    _finish(expression, options.version)
    return expression


# ---------------------------------------------------------------------------
# Post-parse pass
# ---------------------------------------------------------------------------

def _children(node: Any) -> list[Any]:
    """Direct child nodes of *node*, in source order."""
    children = []
    for name, value in vars(node).items():
        if name == "loc":
            continue
        if isinstance(value, list):
            children.extend(v for v in value if _is_node(v))
        elif _is_node(value):
            children.append(value)
    return children


def _is_node(value: Any) -> bool:
    return isinstance(getattr(value, "type", None), str)


def _shift_first_line(node: Any) -> None:
    loc = getattr(node, "loc", None)
    for position in (getattr(loc, "start", None), getattr(loc, "end", None)):
        if getattr(position, "line", None) == 1 and position.column:
            position.column -= len(_PREFIX)


def _finish(root: Any, version: EsVersion) -> None:
    pending = [root]
    while pending:
        node = pending.pop()
        _shift_first_line(node)
        reason = _too_new(node, version)
        if reason is not None:
            line = node.loc.start.line if node.loc else "?"
            raise ParseError(
                f"Parse error: {reason} requires a newer version than "
                f"{version.value} (line {line})"
            )
        pending.extend(_children(node))


# ---------------------------------------------------------------------------
# Version gate
# ---------------------------------------------------------------------------

_BINARY_PREFIXES = ("0b", "0o", "-0b", "-0o")


def _too_new(node: Any, version: EsVersion) -> str | None:
    """Name of the syntax in *node* that *version* does not have, if any."""
    kind = node_type(node)

    if version < EsVersion.ES2015:
        if kind in SPREAD_TYPES:
            return "spread"
        if kind == TEMPLATE or kind == "TaggedTemplateExpression":
            return "template literal"
        if kind == "ArrowFunctionExpression":
            return "arrow function"
        if kind == PROPERTY:
            if node.shorthand:
                return "shorthand property"
            if node.method:
                return "method property"
            if node.computed:
                return "computed property"
        if kind == LITERAL and isinstance(node.raw, str):
            if node.raw.lower().startswith(_BINARY_PREFIXES):
                return "binary or octal literal"

    if version < EsVersion.ES5:
        if kind == PROPERTY and node.kind in ("get", "set"):
            return "getter/setter property"

    if version < EsVersion.ES2016:
        if kind == "BinaryExpression" and node.operator == "**":
            return "exponentiation operator"

    if version < EsVersion.ES2017:
        if kind in ("FunctionExpression", "ArrowFunctionExpression") and node.isAsync:
            return "async function"

    return None
