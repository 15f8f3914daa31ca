# planet_ephem/zbrent.py
"""
Bracketed root finder (Van Wijngaarden-Dekker-Brent).

Inverse quadratic interpolation with a bisection fallback, following the
layout of Numerical Recipes section 9.3 / netlib zeroin.f.  Used to refine
oppositions and other crossings once a sign change has been bracketed.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple, Union

Bracket = Union[float, Sequence[float], Tuple[float, float]]

ZBRENT_TOL = 1.0e-5
ZBRENT_ITMAX = 25


def _point(f: Callable[[float], float], xy: Bracket) -> Tuple[float, float]:
    """Accept either x or a pre-evaluated (x, f(x)) pair."""
    if isinstance(xy, (tuple, list)):
        x, fx = xy
        return float(x), float(fx)
    x = float(xy)  # type: ignore[arg-type]
    return x, float(f(x))


def zbrent(f: Callable[[float], float], xy0: Bracket, xy1: Bracket,
           tol: float = ZBRENT_TOL, itmax: int = ZBRENT_ITMAX) -> Optional[float]:
    """Find x with f(x) = 0 between two bracketing abscissas.

    ``xy0`` and ``xy1`` are either plain abscissas or ``(x, f(x))`` pairs
    so the caller can skip evaluations it already did.  Returns ``None``
    when f(x0)*f(x1) > 0, otherwise x to within ``tol``.
    """
    a, fa = _point(f, xy0)
    b, fb = _point(f, xy1)
    if fa * fb > 0.0:
        return None
    c, fc = b, fb
    d = e = b - a
    for _ in range(itmax):
        if fb * fc > 0.0:
            c, fc = a, fa
            e = d = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb
        xm = 0.5 * (c - b)
        if abs(xm) <= tol or fb == 0.0:
            break
        if abs(e) >= tol and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # only two points, linear interpolation
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                # inverse quadratic interpolation
                q, r = fa / fc, fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0.0:
                q = -q
            else:
                p = -p
            if 2.0 * p < min(3.0 * xm * q - abs(tol * q), abs(e * q)):
                e, d = d, p / q
            else:
                e = d = xm
        else:
            e = d = xm
        a, fa = b, fb
        if abs(d) >= tol:
            b += d
        elif xm > 0.0:
            b += tol
        else:
            b -= tol
        fb = float(f(b))
    return b


__all__ = ["ZBRENT_TOL", "ZBRENT_ITMAX", "zbrent"]
