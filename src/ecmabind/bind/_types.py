"""Width markers for annotating target types.

Python has one ``int`` and one ``float``; these aliases say which
fixed-width shape to request from the literal::

    @dataclass
    class Pixel:
        x: U16
        y: U16
        alpha: F32
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from ecmabind.de._numbers import FloatWidth, IntWidth


class TextShape(str, Enum):
    """String shapes narrower than ``str``."""

    CHAR = "char"


# ---------------------------------------------------------------------------
# Integer widths
# ---------------------------------------------------------------------------

I8 = Annotated[int, IntWidth.I8]
I16 = Annotated[int, IntWidth.I16]
I32 = Annotated[int, IntWidth.I32]
I64 = Annotated[int, IntWidth.I64]
I128 = Annotated[int, IntWidth.I128]

U8 = Annotated[int, IntWidth.U8]
U16 = Annotated[int, IntWidth.U16]
U32 = Annotated[int, IntWidth.U32]
U64 = Annotated[int, IntWidth.U64]
U128 = Annotated[int, IntWidth.U128]


# ---------------------------------------------------------------------------
# Float widths
# ---------------------------------------------------------------------------

F32 = Annotated[float, FloatWidth.F32]
F64 = Annotated[float, FloatWidth.F64]


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

Char = Annotated[str, TextShape.CHAR]
