"""Numeric coercion for JS numeric literals.

A JS numeric literal carries its computed float value and its source
text.  Whether it counts as an *integer* is decided by the source text
alone: no ``.`` in ``raw`` means integer.  ``1e3`` is therefore an
integer, and so is ``1e-3`` (its value truncates to 0).
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum

from ecmabind.errors import Unexpected, UnexpectedKind


# ---------------------------------------------------------------------------
# Widths
# ---------------------------------------------------------------------------

class IntWidth(str, Enum):
    """Fixed-width integer types a literal can be coerced into."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive ``(MIN, MAX)``."""
        return _INT_BOUNDS[self]

    @property
    def signed(self) -> bool:
        return self.value.startswith("i")


def _signed(bits: int) -> tuple[int, int]:
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _unsigned(bits: int) -> tuple[int, int]:
    return 0, (1 << bits) - 1


_INT_BOUNDS: dict[IntWidth, tuple[int, int]] = {
    IntWidth.I8: _signed(8),
    IntWidth.I16: _signed(16),
    IntWidth.I32: _signed(32),
    IntWidth.I64: _signed(64),
    IntWidth.I128: _signed(128),
    IntWidth.U8: _unsigned(8),
    IntWidth.U16: _unsigned(16),
    IntWidth.U32: _unsigned(32),
    IntWidth.U64: _unsigned(64),
    IntWidth.U128: _unsigned(128),
}


class FloatWidth(str, Enum):
    F32 = "f32"
    F64 = "f64"


# ---------------------------------------------------------------------------
# Numeric literal view
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Number:
    """A parsed numeric literal: computed value plus its source text."""

    value: float
    raw: str | None = None


def is_integer(number: Number) -> bool:
    """Textual classification: source text present and without a ``.``."""
    return number.raw is not None and "." not in number.raw


def to_int(number: Number, width: IntWidth) -> int | None:
    """Coerce *number* into *width*, or ``None`` if it does not fit.

    The range check compares the float value against the bounds as
    floats.  For the 64- and 128-bit widths ``float(MAX)`` rounds up past
    ``MAX``, so the truncated value is saturated back into range.
    """
    if not is_integer(number):
        return None
    lower, upper = width.bounds
    # NaN fails both comparisons
    if not float(lower) <= number.value <= float(upper):
        return None
    return min(max(int(number.value), lower), upper)


def to_i8(number: Number) -> int | None:
    return to_int(number, IntWidth.I8)


def to_i16(number: Number) -> int | None:
    return to_int(number, IntWidth.I16)


def to_i32(number: Number) -> int | None:
    return to_int(number, IntWidth.I32)


def to_i64(number: Number) -> int | None:
    return to_int(number, IntWidth.I64)


def to_i128(number: Number) -> int | None:
    return to_int(number, IntWidth.I128)


def to_u8(number: Number) -> int | None:
    return to_int(number, IntWidth.U8)


def to_u16(number: Number) -> int | None:
    return to_int(number, IntWidth.U16)


def to_u32(number: Number) -> int | None:
    return to_int(number, IntWidth.U32)


def to_u64(number: Number) -> int | None:
    return to_int(number, IntWidth.U64)


def to_u128(number: Number) -> int | None:
    return to_int(number, IntWidth.U128)


def to_f32(value: float) -> float:
    """Narrow *value* through IEEE single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

def number_to_unexpected(number: Number) -> Unexpected | None:
    """Most specific descriptor of *number* for an invalid-type message.

    Integers within the i64 range are signed, larger ones up to the u64
    range unsigned; anything outside both has no descriptor (``None``).
    Non-integers are always floats.
    """
    if not is_integer(number):
        return Unexpected(UnexpectedKind.FLOAT, number.value)

    value = number.value
    i64_min, i64_max = IntWidth.I64.bounds
    _, u64_max = IntWidth.U64.bounds
    if value <= float(i64_max):
        if value >= float(i64_min):
            return Unexpected(UnexpectedKind.SIGNED, min(int(value), i64_max))
        return None
    if 0.0 <= value <= float(u64_max):
        return Unexpected(UnexpectedKind.UNSIGNED, min(int(value), u64_max))
    return None
