# planet_ephem/opposition.py
"""
Opposition / inferior conjunction detector.

An ``OppositionDetector`` is fed days one at a time, in any order.  It keeps
the explored interval [first.day, last.day] and, whenever a new day extends
it, checks the sign of the heliocentric cross product planet x Earth between
the new day and the old edge on that side.  A sign change with both dot
products non-negative brackets an opposition (outer planet) or inferior
conjunction (inner planet), which is refined with Brent's method.

Each edge also carries a running count of revolutions of the planet's
geocentric direction since the detector was created, so repeated events
can be told apart.
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass, replace
from typing import Any, List, NamedTuple, Optional, Tuple

import numpy as np

from planet_ephem.ephemeris import DEFAULT_DISPATCHER, ModelDispatcher, as_number
from planet_ephem.zbrent import ZBRENT_TOL, zbrent

TWO_PI = 2.0 * math.pi
# Largest step (days) over which the geocentric direction of any planet
# turns well under half a revolution.
MAX_SWEEP_DAYS = 30.0


class OppositionRefinementError(RuntimeError):
    """A confirmed sign change could not be refined to a root."""


@dataclass(frozen=True, eq=False)
class DetectorEdge:
    revs: float
    day: float
    xyz: np.ndarray          # planet, heliocentric au
    xyz_earth: np.ndarray    # Earth, heliocentric au
    cross: float             # x*ye - y*xe
    dot: float               # x*xe + y*ye

    @property
    def geocentric(self) -> Tuple[float, float]:
        return (float(self.xyz[0] - self.xyz_earth[0]),
                float(self.xyz[1] - self.xyz_earth[1]))


@dataclass(frozen=True, eq=False)
class OppositionEvent:
    day: float
    revs: float
    position: np.ndarray
    earth_position: np.ndarray
    cross: float
    dot: float


class DetectorWindow(NamedTuple):
    first: DetectorEdge
    last: DetectorEdge

    def contains(self, day: float) -> bool:
        return self.first.day <= day <= self.last.day

    def extended(self, edge: DetectorEdge) -> "DetectorWindow":
        if edge.day < self.first.day:
            return DetectorWindow(edge, self.last)
        return DetectorWindow(self.first, edge)


def _angle_revs(g0: Tuple[float, float], g1: Tuple[float, float]) -> float:
    """Signed turn from g0 to g1 in revolutions, in (-1/2, 1/2]."""
    return math.atan2(g0[0] * g1[1] - g0[1] * g1[0], g0[0] * g1[0] + g0[1] * g1[1]) / TWO_PI


class OppositionDetector:
    """Stateful scanner for oppositions of one planet.  Not thread-safe."""

    def __init__(self, planet: str, day: Any, *, ephemeris: Optional[ModelDispatcher] = None,
                 tol: float = ZBRENT_TOL, debug: bool = False) -> None:
        self.planet = str(planet).strip().lower()
        if self.planet in ("earth", "sun", "moon"):
            raise ValueError(f"no oppositions for {planet!r}")
        d = as_number(day)
        if d is None:
            raise ValueError(f"bad initial day {day!r}")
        self.ephemeris = ephemeris if ephemeris is not None else DEFAULT_DISPATCHER
        self.tol = tol
        self.debug = debug
        initial = self._edge(0.0, d)
        self.window = DetectorWindow(initial, initial)
        self.found: List[OppositionEvent] = []

    def _positions(self, day: float) -> Tuple[np.ndarray, np.ndarray]:
        model = self.ephemeris.select(day)
        return (model.position_relative_to_sun(self.planet, day),
                model.position_relative_to_sun("earth", day))

    def cross(self, day: float) -> float:
        xyz, xyze = self._positions(day)
        return float(xyz[0] * xyze[1] - xyz[1] * xyze[0])

    def _edge(self, revs: float, day: float) -> DetectorEdge:
        xyz, xyze = self._positions(day)
        x, y = xyz[0], xyz[1]
        xe, ye = xyze[0], xyze[1]
        return DetectorEdge(revs, day, xyz, xyze,
                            float(x * ye - y * xe), float(x * xe + y * ye))

    def _geocentric(self, day: float) -> Tuple[float, float]:
        xyz, xyze = self._positions(day)
        return float(xyz[0] - xyze[0]), float(xyz[1] - xyze[1])

    def delta_revs(self, prev: DetectorEdge, day: float,
                   geocentric: Tuple[float, float]) -> float:
        """Revolutions swept by the geocentric direction from ``prev`` to ``day``.

        Steps longer than MAX_SWEEP_DAYS are split into equal pieces so no
        piece turns past half a revolution, which atan2 would alias.
        """
        n = max(1, int(math.ceil(abs(day - prev.day) / MAX_SWEEP_DAYS)))
        g0 = prev.geocentric
        total = 0.0
        for k in range(1, n):
            g1 = self._geocentric(prev.day + (day - prev.day) * k / n)
            total += _angle_revs(g0, g1)
            g0 = g1
        return total + _angle_revs(g0, geocentric)

    @property
    def range(self) -> Tuple[float, float]:
        return self.window.first.day, self.window.last.day

    def next(self, day: Any) -> Optional[OppositionEvent]:
        """Extend the explored interval to ``day``; return the event found, if any.

        Days inside the interval (or unparsable ones) are a no-op.  A step
        reports an event when cross changes sign or lands on zero at the new
        day, and both dots are non-negative.  A zero on the old edge is not
        counted again, so an opposition falling exactly on the seed day of a
        fresh detector is never reported.
        """
        d = as_number(day)
        if d is None or self.window.contains(d):
            return None
        earlier = d < self.window.first.day
        prev = self.window.first if earlier else self.window.last
        current = self._edge(prev.revs, d)
        current = replace(current, revs=prev.revs + self.delta_revs(prev, d, current.geocentric))
        self.window = self.window.extended(current)
        cross, crossp = current.cross, prev.cross
        if crossp == 0.0 or cross * crossp > 0.0 or current.dot < 0.0 or prev.dot < 0.0:
            return None
        # Opposition (or inferior conjunction) lies between prev.day and d.
        day_opp = zbrent(self.cross, (prev.day, crossp), (d, cross), tol=self.tol)
        if day_opp is None:
            raise OppositionRefinementError(
                f"{self.planet}: no root of cross between day {prev.day} and {d}")
        edge = self._edge(prev.revs, day_opp)
        event = OppositionEvent(day_opp, prev.revs + self.delta_revs(prev, day_opp, edge.geocentric),
                                edge.xyz, edge.xyz_earth, edge.cross, edge.dot)
        if earlier:
            self.found.insert(0, event)
        else:
            self.found.append(event)
        if self.debug:
            print(f"[opposition] {self.planet} at day {day_opp:.5f} (revs {event.revs:+.4f})",
                  file=sys.stderr)
        return event


def scan_oppositions(planet: str, start_day: float, end_day: float, step: float = 5.0, *,
                     ephemeris: Optional[ModelDispatcher] = None,
                     debug: bool = False) -> List[OppositionEvent]:
    """All oppositions of ``planet`` between two days, scanning in ``step`` day increments.

    ``end_day`` may precede ``start_day``; the result is chronological either way.
    """
    if step <= 0.0:
        raise ValueError("scan_oppositions: step must be positive")
    start_day = float(start_day)
    det = OppositionDetector(planet, start_day, ephemeris=ephemeris, debug=debug)
    span = float(end_day) - start_day
    n = int(math.ceil(abs(span) / step))
    for k in range(1, n + 1):
        det.next(start_day + math.copysign(min(k * step, abs(span)), span))
    return list(det.found)


__all__ = [
    "MAX_SWEEP_DAYS",
    "OppositionRefinementError",
    "DetectorEdge",
    "DetectorWindow",
    "OppositionEvent",
    "OppositionDetector",
    "scan_oppositions",
]
