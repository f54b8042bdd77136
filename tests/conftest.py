"""Shared fixtures: offline ephemerides and a headless matplotlib backend."""

from __future__ import annotations

import math
from datetime import date, datetime, time

import matplotlib
import structlog
import pytest
from pytz import utc

from grayline.ephemeris import AnalyticEphemeris, as_utc, fractional_hour

matplotlib.use("Agg")


class FixedDeclinationEphemeris:
    """Idealized sun: fixed declination, solar noon at the same UTC time every day."""

    def __init__(self, decl_deg: float, noon: time = time(12, 0)) -> None:
        self.decl = math.radians(decl_deg)
        self.noon = noon
        self.calls: list[tuple[float, float]] = []

    def solar_noon(self, day: date) -> datetime:
        return utc.localize(datetime.combine(day, self.noon))

    def solar_altitude(self, instant: datetime, lat_deg: float, lon_deg: float) -> float:
        self.calls.append((lat_deg, lon_deg))
        instant = as_utc(instant)
        noon_h = self.noon.hour + self.noon.minute / 60.0
        ss_lon = (noon_h - fractional_hour(instant)) * 15.0
        h = math.radians(lon_deg - ss_lon)
        lat = math.radians(lat_deg)
        sin_alt = math.sin(lat) * math.sin(self.decl) + math.cos(lat) * math.cos(
            self.decl
        ) * math.cos(h)
        return math.asin(max(-1.0, min(1.0, sin_alt)))


@pytest.fixture
def analytic() -> AnalyticEphemeris:
    return AnalyticEphemeris()


@pytest.fixture
def fixed_north() -> FixedDeclinationEphemeris:
    return FixedDeclinationEphemeris(15.0)


@pytest.fixture
def fixed_south() -> FixedDeclinationEphemeris:
    return FixedDeclinationEphemeris(-15.0)


@pytest.fixture
def make_fixed() -> type[FixedDeclinationEphemeris]:
    return FixedDeclinationEphemeris


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    # setup_logging binds sys.stderr, which pytest swaps out per test
    structlog.reset_defaults()
