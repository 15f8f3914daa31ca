# planet_ephem/orbital.py
from __future__ import annotations

import math
from typing import NamedTuple, Union

import numpy as np

from planet_ephem.elements import OrbitalElements

Number = Union[float, np.floating]

KEPLER_TOL = 1e-9   # rad, residual of Kepler's equation
KEPLER_ITMAX = 50


class KeplerConvergenceError(RuntimeError):
    """Newton iteration did not converge within its iteration cap."""


class EccentricityDomainError(ValueError):
    """Eccentricity outside [0, 1), e.g. a secular rate extrapolated too far."""


class EllipticalPosition(NamedTuple):
    """Unscaled ecliptic position (multiply x, y, z by a) plus the angles used."""
    x: float
    y: float
    z: float
    e: float
    ecc_anomaly: float
    sin_ecc_anomaly: float
    mean_anomaly: float
    arg_perihelion: float
    node_longitude: float


def kepler_E_from_M(M: Number, e: float, tol: float = KEPLER_TOL,
                    itmax: int = KEPLER_ITMAX) -> float:
    """Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly.

    M is not reduced, so E stays on the same turn as M.  Iterates until
    the residual in M is below ``tol``.
    """
    M = float(M)
    e = float(e)
    if not 0.0 <= e < 1.0:
        raise EccentricityDomainError(f"kepler_E_from_M: eccentricity {e!r} outside [0, 1)")
    E = M + e * math.sin(M + e * math.sin(M))
    dM = M - (E - e * math.sin(E))
    for _ in range(itmax):
        if abs(dM) <= tol:
            return E
        E += dM / (1.0 - e * math.cos(E))
        dM = M - (E - e * math.sin(E))
    if abs(dM) <= tol:
        return E
    raise KeplerConvergenceError(
        f"Kepler: no convergence after {itmax} iterations (M={M!r}, e={e!r}, dM={dM:.3e})")


def perifocal_rotation(incl: Number, nlon: Number, aper: Number) -> np.ndarray:
    """Rotation matrix perifocal -> ecliptic.

    Columns are the unit vectors toward perihelion, 90 degrees ahead of it
    in the orbital plane, and the orbit normal.
    """
    ci, si = math.cos(incl), math.sin(incl)
    cO, sO = math.cos(nlon), math.sin(nlon)
    cw, sw = math.cos(aper), math.sin(aper)
    return np.array([
        [cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci,  sO * si],
        [sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci, -cO * si],
        [sw * si,                 cw * si,                 ci],
    ], dtype=float)


def elliptical_position(t: float, elements: OrbitalElements) -> EllipticalPosition:
    """Position on the orbit at t Julian centuries past J2000, in units of a."""
    _, e, incl, _, plon, nlon = elements.at(t)
    ma = elements.mean_anomaly(t)
    E = kepler_E_from_M(ma, e)
    cE, sE = math.cos(E), math.sin(E)
    r_pf = np.array([cE - e, math.sqrt(1.0 - e * e) * sE, 0.0])
    aper = plon - nlon
    x, y, z = perifocal_rotation(incl, nlon, aper) @ r_pf
    return EllipticalPosition(float(x), float(y), float(z), e, E, sE, ma, aper, nlon)


__all__ = [
    "KEPLER_TOL",
    "KEPLER_ITMAX",
    "KeplerConvergenceError",
    "EccentricityDomainError",
    "EllipticalPosition",
    "kepler_E_from_M",
    "perifocal_rotation",
    "elliptical_position",
]
