# planet_ephem/solar_system.py
"""
Solar system model built from one generation of orbital element tables.

A ``SolarSystemModel`` answers position, direction, orbit and inverse
(time the Sun is in a given direction) queries for the bodies in its
table.  Times are days past J2000 (JD 2451545.0); internally they are
converted to Julian centuries.

Two table flavours exist.  The JPL tables carry the Earth (EM barycentre)
directly; the Schlyter table carries the geocentric orbit of the Sun
instead, plus the Moon.  The Earth is then minus the Sun.

Each model owns a single-slot position cache per body.  Models are not
thread-safe: give each thread its own instance.
"""
from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping, NamedTuple, Optional, Tuple

import numpy as np

from planet_ephem.elements import (
    DAYS_PER_CENTURY,
    OrbitalElements,
    build_element_sets,
    parse_correction_table,
    parse_element_table,
    schlyter_to_j2000,
)
from planet_ephem.orbital import (
    KeplerConvergenceError,
    elliptical_position,
    kepler_E_from_M,
    perifocal_rotation,
)

SUN_TIME_TOL = 0.0003   # rad of mean anomaly, about 1 arc minute
SUN_TIME_ITMAX = 20
DEG = math.pi / 180.0


class OrbitParams(NamedTuple):
    x_axis: np.ndarray           # toward perihelion
    y_axis: np.ndarray           # 90 deg ahead of perihelion in the orbit plane
    z_axis: np.ndarray           # orbit normal, x_axis cross y_axis
    e: float
    a: float                     # au
    b: float                     # au
    ecc_anomaly: float           # rad
    mean_anomaly: float          # rad
    mean_anomaly_rate: float     # rad/day; period is 2*pi/mean_anomaly_rate


class MoonPosition(NamedTuple):
    cos_lon: float
    sin_lon: float
    lat: float                   # rad
    r: float                     # Earth radii


class PositionCache:
    """Single-slot (day, xyz) memo for each body of one model."""

    def __init__(self, bodies: Iterable[str]) -> None:
        self._slots: Dict[str, Optional[Tuple[float, np.ndarray]]] = {b: None for b in bodies}

    def get(self, body: str, day: float) -> Optional[np.ndarray]:
        slot = self._slots.get(body)
        if slot is None or slot[0] != day:
            return None
        return slot[1].copy()

    def put(self, body: str, day: float, xyz: np.ndarray) -> None:
        self._slots[body] = (day, xyz.copy())

    def day_of(self, body: str) -> Optional[float]:
        slot = self._slots.get(body)
        return None if slot is None else slot[0]

    def clear(self) -> None:
        for body in self._slots:
            self._slots[body] = None


class SolarSystemModel:
    """Keplerian model of the bodies in one element table."""

    def __init__(self, elements: Mapping[str, OrbitalElements], name: str = "model") -> None:
        self.name = name
        self.elements: Dict[str, OrbitalElements] = dict(elements)
        if "earth" not in self.elements and "sun" not in self.elements:
            raise ValueError(f"{name}: table needs either an earth or a sun row")
        self.sun_table = "earth" not in self.elements
        self.cache = PositionCache(self.elements)

    @classmethod
    def from_tables(cls, table: str, aux_table: Optional[str] = None, *,
                    convention: str = "jpl", name: str = "model") -> "SolarSystemModel":
        """Build a model from pasted tables.

        ``convention`` is "jpl" (L, long.peri., rates per century) or
        "schlyter" (M, arg.peri., rates per day from 1999 Dec 31 0h).
        """
        rows = parse_element_table(table)
        if convention == "schlyter":
            rows = schlyter_to_j2000(rows)
        elif convention != "jpl":
            raise ValueError(f"unknown table convention {convention!r}")
        aux = parse_correction_table(aux_table) if aux_table is not None else None
        return cls(build_element_sets(rows, aux), name=name)

    def __repr__(self) -> str:
        return f"SolarSystemModel({self.name!r}, bodies={sorted(self.elements)})"

    @property
    def bodies(self) -> Tuple[str, ...]:
        return tuple(self.elements)

    def _row(self, body: str) -> str:
        key = str(body).strip().lower()
        if key == "em bary":
            key = "earth"
        if key not in self.elements:
            raise ValueError(f"{self.name}: unknown body {body!r}")
        return key

    # ---------------- Positions ----------------
    def xyz(self, body: str, day: float) -> np.ndarray:
        """Position of ``body`` from its own table row, scaled by a.

        For planets this is heliocentric ecliptic J2000 in au.  The
        Schlyter sun and moon rows are geocentric (au and Earth radii).
        """
        key = self._row(body)
        xyz = self.cache.get(key, day)
        if xyz is not None:
            return xyz
        t = day / DAYS_PER_CENTURY
        el = self.elements[key]
        a = el.a[0] + el.a[1] * t
        p = elliptical_position(t, el)
        xyz = np.array([a * p.x, a * p.y, a * p.z], dtype=float)
        self.cache.put(key, day, xyz)
        return xyz

    def position_relative_to_sun(self, body: str, day: float) -> np.ndarray:
        """Heliocentric ecliptic J2000 position (au); the Sun itself is the origin."""
        key = str(body).strip().lower()
        if key == "sun":
            return np.zeros(3)
        if key in ("earth", "em bary") and self.sun_table:
            return -self.xyz("sun", day)
        if key == "moon":
            raise ValueError(f"{self.name}: the moon row is geocentric, use moon()")
        return self.xyz(key, day)

    def position_relative_to_earth(self, body: str, day: float) -> np.ndarray:
        """Geocentric ecliptic J2000 position (au).

        "earth" and "sun" both give the direction to the Sun, since the
        direction from the Earth to itself is undefined.
        """
        key = str(body).strip().lower()
        earth = self.position_relative_to_sun("earth", day)
        if key in ("earth", "sun", "em bary"):
            return -earth
        return self.position_relative_to_sun(key, day) - earth

    def direction(self, body: str, day: float, norm3: bool = False) -> np.ndarray:
        """Geocentric direction of ``body``.

        Returns [cos(lon), sin(lon), lat] by default, or a 3D unit vector
        when ``norm3`` is true.
        """
        x, y, z = self.position_relative_to_earth(body, day)
        recl = math.sqrt(x * x + y * y + z * z) if norm3 else math.hypot(x, y)
        return np.array([x / recl, y / recl, z / recl if norm3 else math.atan2(z, recl)])

    # ---------------- Orbit geometry ----------------
    def orbit_params(self, body: str, day: float) -> OrbitParams:
        key = self._row(body)
        el = self.elements[key]
        t = day / DAYS_PER_CENTURY
        a, e, incl, _, plon, nlon = el.at(t)
        ma = el.mean_anomaly(t)
        ee = kepler_E_from_M(ma, e)
        R = perifocal_rotation(incl, nlon, plon - nlon)
        return OrbitParams(R[:, 0].copy(), R[:, 1].copy(), R[:, 2].copy(),
                           e, a, a * math.sqrt(1.0 - e * e), ee, ma,
                           el.mean_anomaly_rate(t) / DAYS_PER_CENTURY)

    def ecliptic_tilt(self, day: float) -> np.ndarray:
        """[cos(node)*tan(incl), -sin(node)*tan(incl)] of the Earth's orbit.

        The ecliptic of date is z = -s*x + c*y in J2000 coordinates.
        """
        el = self.elements["sun" if self.sun_table else "earth"]
        _, _, incl, _, _, nlon = el.at(day / DAYS_PER_CENTURY)
        ti = math.tan(incl)
        return np.array([math.cos(nlon) * ti, -math.sin(nlon) * ti])

    def time_sun_at(self, x: float, y: float, near_day: float,
                    tol: float = SUN_TIME_TOL, itmax: int = SUN_TIME_ITMAX) -> float:
        """Day, within about six months of ``near_day``, when the Sun is toward (x, y).

        (x, y) is an unnormalized direction in the J2000 ecliptic plane.
        The Sun lies within about 1 arc minute of it at the returned day.
        """
        if self.sun_table:
            body = "sun"
        else:
            # Earth is opposite the Sun
            x, y, body = -x, -y, "earth"
        el = self.elements[body]
        freq = el.mean_longitude[1]
        t = near_day / DAYS_PER_CENTURY
        dma = 1.0
        it = 0
        while abs(dma) > tol:
            if it >= itmax:
                raise KeplerConvergenceError(
                    f"{self.name}: time_sun_at did not converge in {itmax} steps (dma={dma:.3e})")
            p = elliptical_position(t, el)
            dee = math.atan2(p.x * y - p.y * x, p.x * x + p.y * y)
            dma = dee - p.e * (math.sin(p.ecc_anomaly + dee) - p.sin_ecc_anomaly)
            t += dma / freq
            it += 1
        return t * DAYS_PER_CENTURY

    # ---------------- Moon ----------------
    def moon(self, day: float) -> MoonPosition:
        """Geocentric Moon with Schlyter's largest periodic perturbations."""
        if "moon" not in self.elements or "sun" not in self.elements:
            raise ValueError(f"{self.name}: moon needs a table with moon and sun rows")
        t = day / DAYS_PER_CENTURY
        x, y, z = self.xyz("moon", day)
        r = math.hypot(x, y)
        lon = math.atan2(y, x)
        lat = math.atan2(z, r)
        r = math.sqrt(r * r + z * z)
        _, _, _, mlm, plm, nlm = self.elements["moon"].at(t)
        _, _, _, mls, pls, _ = self.elements["sun"].at(t)
        mam = mlm - plm          # Moon mean anomaly
        mas = mls - pls          # Sun mean anomaly
        mel = mlm - mls          # mean elongation
        alat = mlm - nlm         # argument of latitude
        sin, cos = math.sin, math.cos
        dlon = (-1.274 * sin(mam - 2 * mel) + 0.658 * sin(2 * mel) - 0.186 * sin(mas)
                - 0.059 * sin(2 * mam - 2 * mel) - 0.057 * sin(mam - 2 * mel + mas)
                + 0.053 * sin(mam + 2 * mel) + 0.046 * sin(2 * mel - mas)
                + 0.041 * sin(mam - mas) - 0.035 * sin(mel) - 0.031 * sin(mam + mas)
                - 0.015 * sin(2 * alat - 2 * mel) + 0.011 * sin(mam - 4 * mel))
        dlat = (-0.173 * sin(alat - 2 * mel) - 0.055 * sin(mam - alat - 2 * mel)
                - 0.046 * sin(mam + alat - 2 * mel) + 0.033 * sin(alat + 2 * mel)
                + 0.017 * sin(2 * mam + alat))
        r += -0.58 * cos(mam - 2 * mel) - 0.46 * cos(2 * mel)
        lon += dlon * DEG
        lat += dlat * DEG
        return MoonPosition(cos(lon), sin(lon), lat, r)


__all__ = [
    "SUN_TIME_TOL",
    "SUN_TIME_ITMAX",
    "OrbitParams",
    "MoonPosition",
    "PositionCache",
    "SolarSystemModel",
]
