# planet_ephem/elements.py
"""
Orbital element sets and the table reader that builds them.

Tables are parsed into plain ``ElementRow`` records in the units of the
source (au, degrees, rates per century or per day).  A pure conversion
maps Schlyter's convention onto JPL's, and ``build_element_sets`` turns
rows into immutable ``OrbitalElements`` in radians, per Julian century
past J2000.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

DEG = math.pi / 180.0
DAYS_PER_CENTURY = 36525.0
# Schlyter's day 0 is 1999 Dec 31 0h, J2000 is 1.5 days later.
SCHLYTER_J2000_DAY = 1.5

_num_re = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

Pair = Tuple[float, float]
Correction = Tuple[float, float, float, float]


class ElementRow(NamedTuple):
    """One body from a source table, in the table's own units."""
    name: str
    values: Tuple[float, ...]
    rates: Tuple[float, ...]


@dataclass(frozen=True)
class OrbitalElements:
    """Six elements as (value at J2000, rate per Julian century) pairs.

    Angles are radians.  ``correction`` holds the (b, c, s, f) mean
    anomaly terms of JPL Table 2b for the outer planets.
    """
    a: Pair
    e: Pair
    incl: Pair
    mean_longitude: Pair
    perihelion_longitude: Pair
    node_longitude: Pair
    correction: Optional[Correction] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.e[0] < 1.0:
            raise ValueError(f"eccentricity {self.e[0]!r} outside [0, 1)")

    def at(self, t: float) -> Tuple[float, float, float, float, float, float]:
        """(a, e, incl, mlon, plon, nlon) at t Julian centuries past J2000."""
        return tuple(v + r * t for v, r in (  # type: ignore[return-value]
            self.a, self.e, self.incl, self.mean_longitude,
            self.perihelion_longitude, self.node_longitude))

    def mean_anomaly(self, t: float) -> float:
        ma = ((self.mean_longitude[0] + self.mean_longitude[1] * t)
              - (self.perihelion_longitude[0] + self.perihelion_longitude[1] * t))
        if self.correction is not None:
            b, c, s, f = self.correction
            ft = f * t
            ma += b * t * t + c * math.cos(ft) + s * math.sin(ft)
        return ma

    def mean_anomaly_rate(self, t: float) -> float:
        """d(ma)/dt in rad per century, measured from a fixed direction.

        Uses the mean longitude rate alone: the perihelion drift is part of
        the orientation, not of the motion along the orbit.
        """
        madot = self.mean_longitude[1]
        if self.correction is not None:
            b, c, s, f = self.correction
            ft = f * t
            madot += 2.0 * b * t + f * (s * math.cos(ft) - c * math.sin(ft))
        return madot


# ---------------- Table reader ----------------
def _is_number(tok: str) -> bool:
    return bool(_num_re.match(tok))


def _split_rows(table: str) -> List[List[str]]:
    text = table.replace("EM Bary", "Earth")
    return [line.split() for line in text.splitlines() if line.strip()]


def parse_element_table(table: str) -> List[ElementRow]:
    """Parse "name + 6 values" lines, each followed by a "6 rates" line."""
    lines = _split_rows(table)
    if len(lines) % 2:
        raise ValueError("element table needs a rate line for every body")
    rows: List[ElementRow] = []
    for head, tail in zip(lines[0::2], lines[1::2]):
        if _is_number(head[0]) or len(head) != 7:
            raise ValueError(f"bad element line: {' '.join(head)!r}")
        if len(tail) != 6 or not all(_is_number(tok) for tok in tail):
            raise ValueError(f"bad rate line for {head[0]}: {' '.join(tail)!r}")
        rows.append(ElementRow(head[0].lower(),
                               tuple(float(v) for v in head[1:]),
                               tuple(float(v) for v in tail)))
    return rows


def parse_correction_table(table: str) -> Dict[str, Tuple[float, ...]]:
    """Parse "name b c s f" lines (degrees) of JPL Table 2b."""
    out: Dict[str, Tuple[float, ...]] = {}
    for toks in _split_rows(table):
        if len(toks) != 5 or _is_number(toks[0]):
            raise ValueError(f"bad correction line: {' '.join(toks)!r}")
        out[toks[0].lower()] = tuple(float(v) for v in toks[1:])
    return out


def schlyter_to_j2000(rows: Iterable[ElementRow]) -> List[ElementRow]:
    """Convert Schlyter rows to the JPL convention.

    (M, w, N) become (L, long.peri., N), the epoch moves from
    1999 Dec 31 0h to J2000, and rates go from per day to per century.
    """
    out: List[ElementRow] = []
    for row in rows:
        a, e, i, ma, aper, nlon = row.values
        ra, re_, ri, rma, raper, rnlon = row.rates
        plon, rplon = aper + nlon, raper + rnlon
        mlon, rmlon = ma + plon, rma + rplon
        values = (a, e, i, mlon, plon, nlon)
        rates = (ra, re_, ri, rmlon, rplon, rnlon)
        values = tuple(v + SCHLYTER_J2000_DAY * r for v, r in zip(values, rates))
        rates = tuple(DAYS_PER_CENTURY * r for r in rates)
        out.append(ElementRow(row.name, values, rates))
    return out


def build_element_sets(rows: Iterable[ElementRow],
                       corrections: Optional[Mapping[str, Tuple[float, ...]]] = None
                       ) -> Dict[str, OrbitalElements]:
    """Rows in degrees -> {name: OrbitalElements} in radians."""
    sets: Dict[str, OrbitalElements] = {}
    for row in rows:
        pairs = [(v, r) if k < 2 else (v * DEG, r * DEG)
                 for k, (v, r) in enumerate(zip(row.values, row.rates))]
        sets[row.name] = OrbitalElements(*pairs)  # type: ignore[arg-type]
    for name, aux in (corrections or {}).items():
        if name not in sets:
            raise ValueError(f"correction for unknown body {name!r}")
        b, c, s, f = (v * DEG for v in aux)
        sets[name] = replace(sets[name], correction=(b, c, s, f))
    return sets


__all__ = [
    "DAYS_PER_CENTURY",
    "ElementRow",
    "OrbitalElements",
    "parse_element_table",
    "parse_correction_table",
    "schlyter_to_j2000",
    "build_element_sets",
]
