#!/usr/bin/env python3
"""
planet-ephem: low precision planet, Sun and Moon ephemerides from the command line.

Dates are ISO dates/times (UTC) or day numbers past J2000.  Results are
printed as JSON.  Use ``--debug`` for diagnostics on stderr.
"""
from __future__ import annotations

import argparse
import json
import math
import sys
from typing import Any, Dict, List, Optional

from planet_ephem.ephemeris import (
    BODIES,
    DEFAULT_DISPATCHER,
    PLANETS,
    as_number,
    direction_of,
    ecliptic_orientation,
    moon_position,
    orbit_params,
    position_of,
    select_model,
    time_sun_at,
)
from planet_ephem.orbital import EccentricityDomainError
from planet_ephem.opposition import scan_oppositions
from planet_ephem.timeutil import parse_day, utc_from_day


def _when(day: float) -> Dict[str, Any]:
    return {"day": day, "utc": utc_from_day(day)}


def _day_arg(text: str, what: str, debug: bool) -> Optional[float]:
    day = parse_day(text)
    if day is None:
        print(f"[ephem] bad {what}: {text!r}", file=sys.stderr)
    elif debug:
        print(f"[ephem] {what} {text!r} -> day {day:.6f} ({select_model(day).name})",
              file=sys.stderr)
    return day


def _cmd_position(args: argparse.Namespace, day: float) -> Optional[Dict[str, Any]]:
    xyz = position_of(args.body, day)
    if xyz is None:
        return None
    return {**_when(day), "body": args.body, "xyz_au": [float(v) for v in xyz]}


def _cmd_direction(args: argparse.Namespace, day: float) -> Optional[Dict[str, Any]]:
    d = direction_of(args.body, day, args.norm3)
    if d is None:
        return None
    out: Dict[str, Any] = {**_when(day), "body": args.body}
    if args.norm3:
        out["unit_xyz"] = [float(v) for v in d]
    else:
        out["lon_deg"] = math.degrees(math.atan2(d[1], d[0])) % 360.0
        out["lat_deg"] = math.degrees(d[2])
    return out


def _cmd_orbit(args: argparse.Namespace, day: float) -> Optional[Dict[str, Any]]:
    p = orbit_params(args.body, day)
    if p is None:
        return None
    return {
        **_when(day), "body": args.body,
        "x_axis": p.x_axis.tolist(), "y_axis": p.y_axis.tolist(), "z_axis": p.z_axis.tolist(),
        "e": p.e, "a_au": p.a, "b_au": p.b,
        "ecc_anomaly_rad": p.ecc_anomaly, "mean_anomaly_rad": p.mean_anomaly,
        "mean_anomaly_rate_rad_day": p.mean_anomaly_rate,
        "period_days": 2.0 * math.pi / p.mean_anomaly_rate,
    }


def _cmd_tilt(args: argparse.Namespace, day: float) -> Optional[Dict[str, Any]]:
    tilt = ecliptic_orientation(day)
    if tilt is None:
        return None
    c, s = tilt
    return {**_when(day), "tilt": [float(c), float(s)]}


def _cmd_moon(args: argparse.Namespace, day: float) -> Optional[Dict[str, Any]]:
    m = moon_position(day)
    if m is None:
        return None
    return {**_when(day), "lon_deg": math.degrees(math.atan2(m.sin_lon, m.cos_lon)) % 360.0,
            "lat_deg": math.degrees(m.lat), "r_earth_radii": m.r}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="planet-ephem", description=__doc__.strip().splitlines()[0])
    ap.add_argument("--debug", action="store_true")
    sub = ap.add_subparsers(dest="cmd", required=True)

    for name, helptext in (("position", "heliocentric ecliptic J2000 position (au)"),
                           ("direction", "geocentric ecliptic direction"),
                           ("orbit", "orbital basis and ellipse parameters")):
        p = sub.add_parser(name, help=helptext)
        p.add_argument("body", choices=BODIES if name != "orbit" else PLANETS)
        p.add_argument("--date", required=True)
        if name == "direction":
            p.add_argument("--norm3", action="store_true", help="3D unit vector output")

    p = sub.add_parser("tilt", help="orientation of the ecliptic of date")
    p.add_argument("--date", required=True)
    p = sub.add_parser("moon", help="geocentric Moon")
    p.add_argument("--date", required=True)

    p = sub.add_parser("sun-time", help="when the Sun is toward ecliptic direction (x, y)")
    p.add_argument("x")
    p.add_argument("y")
    p.add_argument("--near", required=True)

    p = sub.add_parser("oppositions", help="oppositions / inferior conjunctions in a date range")
    p.add_argument("planet", choices=[b for b in PLANETS if b != "earth"])
    p.add_argument("--start", required=True)
    p.add_argument("--end", required=True)
    p.add_argument("--step", type=float, default=5.0, help="scan step in days")
    return ap


_DATED = {
    "position": _cmd_position,
    "direction": _cmd_direction,
    "orbit": _cmd_orbit,
    "tilt": _cmd_tilt,
    "moon": _cmd_moon,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    DEFAULT_DISPATCHER.debug = args.debug
    if args.cmd in _DATED:
        day = _day_arg(args.date, "date", args.debug)
        if day is None:
            return 2
        out: Any = _DATED[args.cmd](args, day)
        if out is None:
            print(f"[ephem] no result for {args.cmd} on day {day!r}", file=sys.stderr)
            return 2
    elif args.cmd == "sun-time":
        near = _day_arg(args.near, "near date", args.debug)
        day = time_sun_at(args.x, args.y, near) if near is not None else None
        if day is None:
            print(f"[ephem] bad direction ({args.x!r}, {args.y!r})", file=sys.stderr)
            return 2
        out = _when(day)
    else:
        start = _day_arg(args.start, "start", args.debug)
        end = _day_arg(args.end, "end", args.debug)
        if start is None or end is None:
            return 2
        if as_number(args.step) is None or args.step <= 0.0:
            print(f"[ephem] bad step: {args.step!r}", file=sys.stderr)
            return 2
        try:
            events = scan_oppositions(args.planet, start, end, args.step, debug=args.debug)
        except EccentricityDomainError as e:
            print(f"[ephem] no result: {e}", file=sys.stderr)
            return 2
        out = [{**_when(ev.day), "revs": ev.revs,
                "xyz_au": ev.position.tolist(), "earth_xyz_au": ev.earth_position.tolist()}
               for ev in events]
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
