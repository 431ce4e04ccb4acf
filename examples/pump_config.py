"""Reading a pump station configuration written as a JavaScript literal.

Demonstrates:
  - Dataclass and pydantic model targets
  - Width markers (U8, U16) on fields
  - A union of variants tagged by class name
  - Error messages carrying the source position
"""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field

from ecmabind import U8, U16, DataError, EsVersion, from_str


# =========================================================================
# Target types
# =========================================================================

@dataclass
class Timed:
    on_seconds: U16
    off_seconds: U16


@dataclass
class Level:
    start_pct: U8
    stop_pct: U8


class Pump(BaseModel):
    name: str
    rated_kw: float
    control: Literal["Manual"] | Timed | Level
    tags: list[str] = Field(default_factory=list)


@dataclass
class Station:
    site: str
    pumps: list[Pump]
    alarms: dict[str, bool] = field(default_factory=dict)


SOURCE = """{
    site: 'North Basin',
    pumps: [
        { name: 'P-101', rated_kw: 7.5, control: { Level: { start_pct: 80, stop_pct: 20 } } },
        { name: 'P-102', rated_kw: 7.5, control: Manual, tags: ['standby'] },
        { name: 'P-103', rated_kw: 11, control: { Timed: { on_seconds: 600, off_seconds: 1200 } } },
    ],
    alarms: { high_level: true, dry_run: false },
}"""


# =========================================================================
# Print results
# =========================================================================

if __name__ == "__main__":
    station = from_str(SOURCE, Station, version=EsVersion.ES5)
    print(f"site: {station.site}")
    for pump in station.pumps:
        print(f"  {pump.name} ({pump.rated_kw} kW): {pump.control!r} {pump.tags}")
    print(f"  alarms: {station.alarms}")

    try:
        from_str("{ site: 'x', pumps: [{ name: 'P', rated_kw: 1, control: { Level: { start_pct: 300, stop_pct: 0 } } }] }", Station)
    except DataError as e:
        print(f"rejected: {e}")
