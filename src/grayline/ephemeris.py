"""Ephemeris collaborators — solar noon and solar altitude primitives.

Two implementations share the ``Ephemeris`` protocol:

- ``SkyfieldEphemeris``: JPL kernel via skyfield (accurate, needs ``de421.bsp``).
- ``AnalyticEphemeris``: NOAA low-precision series (offline, ~0.1° accuracy).
"""

import math
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Protocol

import structlog
from pytz import utc
from skyfield import almanac
from skyfield.api import Loader, wgs84

from grayline.config import Settings

log = structlog.get_logger(__name__)


class Ephemeris(Protocol):
    def solar_noon(self, day: date) -> datetime:
        """UTC instant of solar noon at latitude 0, longitude 0 on ``day``."""
        ...

    def solar_altitude(self, instant: datetime, lat_deg: float, lon_deg: float) -> float:
        """Topocentric solar altitude in radians."""
        ...


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` in UTC. Naive datetimes are taken to already be UTC."""
    if instant.tzinfo is None:
        return utc.localize(instant)
    return instant.astimezone(utc)


class SkyfieldEphemeris:
    """Solar primitives backed by a skyfield JPL ephemeris."""

    def __init__(self, loader: Loader, kernel: str = "de421.bsp") -> None:
        self._ts = loader.timescale()
        self._eph = loader(kernel)
        self._earth = self._eph["earth"]
        self._sun = self._eph["sun"]
        self._transits = almanac.meridian_transits(
            self._eph, self._sun, wgs84.latlon(0.0, 0.0)
        )

    def solar_noon(self, day: date) -> datetime:
        t0 = self._ts.utc(day.year, day.month, day.day)
        t1 = self._ts.utc(day.year, day.month, day.day + 1)
        times, events = almanac.find_discrete(t0, t1, self._transits)
        # event 1 = upper meridian transit, 0 = antimeridian
        noons = times[events == 1]
        if len(noons) == 0:
            raise ValueError(f"No solar transit found on {day.isoformat()}")
        return noons[0].utc_datetime()

    def solar_altitude(self, instant: datetime, lat_deg: float, lon_deg: float) -> float:
        t = self._ts.from_datetime(as_utc(instant))
        site = self._earth + wgs84.latlon(
            latitude_degrees=lat_deg, longitude_degrees=lon_deg
        )
        # No temperature/pressure given, so altaz() applies no refraction
        alt, _, _ = site.at(t).observe(self._sun).apparent().altaz()  # type: ignore[union-attr]
        return float(alt.radians)


def _fractional_year(day_of_year: int, hour: float) -> float:
    """NOAA fractional year gamma (radians)."""
    return 2.0 * math.pi / 365.0 * (day_of_year - 1 + (hour - 12.0) / 24.0)


def _equation_of_time(gamma: float) -> float:
    """Equation of time (minutes)."""
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2.0 * gamma)
        - 0.040849 * math.sin(2.0 * gamma)
    )


def _declination(gamma: float) -> float:
    """Solar declination (radians)."""
    return (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2.0 * gamma)
        + 0.000907 * math.sin(2.0 * gamma)
        - 0.002697 * math.cos(3.0 * gamma)
        + 0.00148 * math.sin(3.0 * gamma)
    )


def fractional_hour(instant: datetime) -> float:
    """Hour of day as a float, including seconds and microseconds."""
    return (
        instant.hour
        + instant.minute / 60.0
        + instant.second / 3600.0
        + instant.microsecond / 3_600_000_000.0
    )


class AnalyticEphemeris:
    """Solar primitives from the NOAA general solar position series.

    Needs no data files. Declination is good to roughly 0.1°, which is
    plenty for a map overlay.
    """

    def solar_noon(self, day: date) -> datetime:
        gamma = _fractional_year(day.timetuple().tm_yday, 12.0)
        noon_min = 720.0 - _equation_of_time(gamma)
        midnight = utc.localize(datetime(day.year, day.month, day.day))
        return midnight + timedelta(minutes=noon_min)

    def solar_altitude(self, instant: datetime, lat_deg: float, lon_deg: float) -> float:
        instant = as_utc(instant)
        hour = fractional_hour(instant)
        gamma = _fractional_year(instant.timetuple().tm_yday, hour)
        decl = _declination(gamma)

        true_solar_min = (hour * 60.0 + _equation_of_time(gamma) + 4.0 * lon_deg) % 1440.0
        hour_angle = math.radians(true_solar_min / 4.0 - 180.0)

        lat = math.radians(lat_deg)
        sin_alt = math.sin(lat) * math.sin(decl) + math.cos(lat) * math.cos(decl) * math.cos(
            hour_angle
        )
        return math.asin(max(-1.0, min(1.0, sin_alt)))


def load_ephemeris(settings: Settings) -> Ephemeris:
    """Build the ephemeris collaborator named in settings.

    The skyfield kernel is downloaded into ``settings.data_dir`` on first use.
    """
    if settings.ephemeris == "analytic":
        log.info("ephemeris_loaded", kind="analytic")
        return AnalyticEphemeris()

    data_dir = Path(settings.data_dir)
    eph = SkyfieldEphemeris(Loader(str(data_dir)), settings.kernel)
    log.info("ephemeris_loaded", kind="skyfield", kernel=settings.kernel, data_dir=str(data_dir))
    return eph
