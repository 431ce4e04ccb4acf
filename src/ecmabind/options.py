"""Parse configuration."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ecmabind.de._deserializer import DEFAULT_MAX_DEPTH


class EsVersion(str, Enum):
    """ECMAScript edition the source must conform to."""

    ES3 = "es3"
    ES5 = "es5"
    ES2015 = "es2015"
    ES2016 = "es2016"
    ES2017 = "es2017"

    @property
    def year(self) -> int:
        return _EDITION_ORDER[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EsVersion):
            return NotImplemented
        return self.year < other.year

    def __le__(self, other: object) -> bool:
        if not isinstance(other, EsVersion):
            return NotImplemented
        return self.year <= other.year

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, EsVersion):
            return NotImplemented
        return self.year > other.year

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, EsVersion):
            return NotImplemented
        return self.year >= other.year


_EDITION_ORDER = {
    EsVersion.ES3: 1999,
    EsVersion.ES5: 2009,
    EsVersion.ES2015: 2015,
    EsVersion.ES2016: 2016,
    EsVersion.ES2017: 2017,
}

DEFAULT_VERSION = EsVersion.ES2017


class ParseOptions(BaseModel):
    """How to parse and walk one literal source.

    ``max_depth`` bounds the nesting the deserializer walks.  Source read
    through ``from_str`` is also bounded by the parser: ``esprima`` gives up
    (``ParseError``) at roughly 70 levels of nesting, below the default.
    """

    model_config = ConfigDict(frozen=True)

    version: EsVersion = DEFAULT_VERSION
    jsx: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
