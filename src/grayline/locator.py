"""Subsolar point from a UTC instant, using only solar-noon and altitude queries."""

import math
from datetime import datetime

from grayline.ephemeris import Ephemeris, as_utc, fractional_hour
from grayline.models import SubsolarPoint


def normalize_lon(lon: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    wrapped = (lon + 180.0) % 360.0 - 180.0
    # (x % 360) can round up to exactly 360 for tiny negative x
    if wrapped >= 180.0:
        wrapped -= 360.0
    return wrapped


def locate(instant: datetime, ephemeris: Ephemeris) -> SubsolarPoint:
    """Compute the subsolar point at ``instant``.

    Longitude comes from the offset between ``instant`` and solar noon at the
    prime meridian. On the subsolar meridian the hour angle is zero, so
    sin(altitude) = cos(declination) at the equator and
    |declination| = 90° - altitude. Probes at ±1° latitude pick the sign.

    Args:
        instant: Any datetime. Naive values are taken as UTC.
        ephemeris: Solar noon / altitude provider.

    Returns:
        SubsolarPoint with lon in [-180, 180) and lat == degrees(decl).

    Raises:
        Whatever the ephemeris raises for an unsupported date; nothing is caught here.
    """
    instant = as_utc(instant)
    noon = as_utc(ephemeris.solar_noon(instant.date()))

    lon = normalize_lon((fractional_hour(noon) - fractional_hour(instant)) * 15.0)

    alt_eq = ephemeris.solar_altitude(instant, 0.0, lon)
    alt_north = ephemeris.solar_altitude(instant, 1.0, lon)
    alt_south = ephemeris.solar_altitude(instant, -1.0, lon)

    sign = 1.0 if alt_north >= alt_south else -1.0
    decl = sign * (math.pi / 2.0 - alt_eq)

    return SubsolarPoint(lon=lon, lat=math.degrees(decl), decl=decl)
