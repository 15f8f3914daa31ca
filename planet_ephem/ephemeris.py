# planet_ephem/ephemeris.py
"""
Public ephemeris queries.

Times are days past J2000 (JD 2451545.0, 2000 Jan 1 12:00).  JPL Table 1
is used from 1800 to 2050 and Table 2a/2b outside that range; the Moon
comes from Schlyter's elements.

Every query here accepts numbers or numeric strings and returns ``None``
for missing or non-finite input, so a caller redrawing every frame can
simply skip the frame.
"""
from __future__ import annotations

import math
import re
import sys
from typing import Any, Callable, Optional, TypeVar

import numpy as np

from planet_ephem.orbital import EccentricityDomainError
from planet_ephem.solar_system import MoonPosition, OrbitParams, SolarSystemModel
from planet_ephem.tables import JPL_TABLE_1, JPL_TABLE_2A, JPL_TABLE_2B, SCHLYTER_TABLE

# Table 1 is valid from 1800 Jan 1 to 2050 Jan 1
MODEL1_FIRST_DAY = -73048.0
MODEL1_LAST_DAY = 18263.0

T = TypeVar("T")

PLANETS = ("mercury", "venus", "earth", "mars", "jupiter", "saturn", "uranus", "neptune")
BODIES = PLANETS + ("sun",)

_num_re = re.compile(r"^[\s]*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def as_number(x: Any) -> Optional[float]:
    """Robust float parser: None/''/junk/nan/inf -> None; parses a leading numeric token."""
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, (int, float, np.integer, np.floating)):
        v = float(x)
    else:
        m = _num_re.match(str(x))
        if not m:
            return None
        v = float(m.group(1))
    return v if math.isfinite(v) else None


class ModelDispatcher:
    """Routes each query to the element tables valid on its day.

    Days so far out that a secular rate drives an eccentricity out of
    [0, 1) give ``None`` like any other unusable input.
    """

    def __init__(self, tight: SolarSystemModel, wide: SolarSystemModel,
                 first_day: float = MODEL1_FIRST_DAY, last_day: float = MODEL1_LAST_DAY,
                 *, debug: bool = False) -> None:
        self.tight = tight
        self.wide = wide
        self.first_day = first_day
        self.last_day = last_day
        self.debug = debug

    def select(self, day: float) -> SolarSystemModel:
        if day < self.first_day or day > self.last_day:
            return self.wide
        return self.tight

    def safe_query(self, query: Callable[..., T], *args: Any) -> Optional[T]:
        try:
            return query(*args)
        except EccentricityDomainError as e:
            if self.debug:
                print(f"[ephem] no result: {e}", file=sys.stderr)
            return None

    def position_of(self, body: str, day: Any) -> Optional[np.ndarray]:
        """Heliocentric ecliptic [x, y, z] (au); "sun" gives the Earth-to-Sun vector."""
        d = as_number(day)
        if d is None:
            return None
        model = self.select(d)
        if str(body).strip().lower() == "sun":
            return self.safe_query(model.position_relative_to_earth, "sun", d)
        return self.safe_query(model.position_relative_to_sun, body, d)

    def direction_of(self, body: str, day: Any, norm3: bool = False) -> Optional[np.ndarray]:
        """Geocentric [cos(lon), sin(lon), lat], or a 3D unit vector if ``norm3``."""
        d = as_number(day)
        if d is None:
            return None
        return self.safe_query(self.select(d).direction, body, d, norm3)

    def orbit_params(self, body: str, day: Any) -> Optional[OrbitParams]:
        d = as_number(day)
        if d is None:
            return None
        return self.safe_query(self.select(d).orbit_params, body, d)

    def ecliptic_orientation(self, day: Any) -> Optional[np.ndarray]:
        d = as_number(day)
        if d is None:
            return None
        return self.select(d).ecliptic_tilt(d)

    def time_sun_at(self, x: Any, y: Any, near_day: Any) -> Optional[float]:
        vals = [as_number(v) for v in (x, y, near_day)]
        if any(v is None for v in vals):
            return None
        xv, yv, d = vals
        if xv == 0.0 and yv == 0.0:
            return None
        return self.safe_query(self.select(d).time_sun_at, xv, yv, d)  # type: ignore[arg-type]


JPL_1800_2050 = SolarSystemModel.from_tables(JPL_TABLE_1, name="jpl-1800-2050")
JPL_3000BC_3000AD = SolarSystemModel.from_tables(JPL_TABLE_2A, JPL_TABLE_2B,
                                                 name="jpl-3000bc-3000ad")
SCHLYTER = SolarSystemModel.from_tables(SCHLYTER_TABLE, convention="schlyter",
                                        name="schlyter")

DEFAULT_DISPATCHER = ModelDispatcher(JPL_1800_2050, JPL_3000BC_3000AD)


def select_model(day: float) -> SolarSystemModel:
    return DEFAULT_DISPATCHER.select(day)


def position_of(body: str, day: Any) -> Optional[np.ndarray]:
    return DEFAULT_DISPATCHER.position_of(body, day)


def direction_of(body: str, day: Any, norm3: bool = False) -> Optional[np.ndarray]:
    return DEFAULT_DISPATCHER.direction_of(body, day, norm3)


def orbit_params(body: str, day: Any) -> Optional[OrbitParams]:
    return DEFAULT_DISPATCHER.orbit_params(body, day)


def ecliptic_orientation(day: Any) -> Optional[np.ndarray]:
    return DEFAULT_DISPATCHER.ecliptic_orientation(day)


def time_sun_at(x: Any, y: Any, near_day: Any) -> Optional[float]:
    return DEFAULT_DISPATCHER.time_sun_at(x, y, near_day)


def moon_position(day: Any) -> Optional[MoonPosition]:
    """Geocentric Moon (cos lon, sin lon, lat, r in Earth radii) from Schlyter's model."""
    d = as_number(day)
    if d is None:
        return None
    return DEFAULT_DISPATCHER.safe_query(SCHLYTER.moon, d)


__all__ = [
    "MODEL1_FIRST_DAY",
    "MODEL1_LAST_DAY",
    "PLANETS",
    "BODIES",
    "as_number",
    "ModelDispatcher",
    "JPL_1800_2050",
    "JPL_3000BC_3000AD",
    "SCHLYTER",
    "DEFAULT_DISPATCHER",
    "select_model",
    "position_of",
    "direction_of",
    "orbit_params",
    "ecliptic_orientation",
    "time_sun_at",
    "moon_position",
]
