"""Low precision planetary and lunar ephemerides from Keplerian elements."""
from planet_ephem.ephemeris import (
    ModelDispatcher,
    direction_of,
    ecliptic_orientation,
    moon_position,
    orbit_params,
    position_of,
    time_sun_at,
)
from planet_ephem.opposition import OppositionDetector, OppositionEvent, scan_oppositions
from planet_ephem.solar_system import SolarSystemModel
from planet_ephem.zbrent import zbrent

__version__ = "0.1.0"

__all__ = [
    "ModelDispatcher",
    "OppositionDetector",
    "OppositionEvent",
    "SolarSystemModel",
    "direction_of",
    "ecliptic_orientation",
    "moon_position",
    "orbit_params",
    "position_of",
    "scan_oppositions",
    "time_sun_at",
    "zbrent",
]
