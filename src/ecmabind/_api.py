"""Top-level entry points."""

from __future__ import annotations

import logging
from typing import Any

from ecmabind.bind import binding_for
from ecmabind.de import DEFAULT_MAX_DEPTH, Deserializer, Ownership, Seed
from ecmabind.errors import RecursionLimitExceeded
from ecmabind.options import EsVersion, ParseOptions
from ecmabind.parser import parse_expression

logger = logging.getLogger(__name__)


def _seed(target: Any) -> Seed:
    if not isinstance(target, type) and isinstance(target, Seed):
        return target
    return binding_for(target)


def deserialize(target: Any, deserializer: Any) -> Any:
    """Read a value of *target* from *deserializer*.

    *target* is a type hint (``list[int]``, a dataclass, ``Any`` ...) or a
    ready-made seed.

    Exhausting the interpreter stack while reading raises
    ``RecursionLimitExceeded``, whatever *max_depth* allows.
    """
    seed = _seed(target)
    logger.debug("deserializing %r with %r", target, deserializer)
    try:
        return seed.deserialize(deserializer)
    except RecursionError as e:
        # Interpreter stack ran out before max_depth was reached
        raise RecursionLimitExceeded(
            getattr(deserializer, "max_depth", DEFAULT_MAX_DEPTH),
            getattr(deserializer, "node", None),
        ) from e


def from_expr(node: Any, target: Any = Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Read *target* from a caller-owned expression node.

    The tree is only read, never modified, so it can be deserialized
    again afterwards.
    """
    return deserialize(target, Deserializer(node, Ownership.BORROWED, max_depth=max_depth))


def from_str(
    source: str,
    target: Any = Any,
    *,
    version: EsVersion | None = None,
    options: ParseOptions | None = None,
) -> Any:
    """Parse *source* and read *target* from it.

    The freshly parsed tree belongs to this call and is consumed while it
    is read.

    Examples
    --------
    >>> from_str("{ a: [1, 2], b: 'x' }", dict[str, Any])
    {'a': [1, 2], 'b': 'x'}
    """
    options = options or ParseOptions()
    if version is not None:
        options = options.model_copy(update={"version": version})
    node = parse_expression(source, options)
    return deserialize(
        target, Deserializer(node, Ownership.OWNED, max_depth=options.max_depth),
    )


def from_str_with_version(source: str, target: Any, version: EsVersion) -> Any:
    """``from_str`` with an explicit ECMAScript version."""
    return from_str(source, target, version=version)
