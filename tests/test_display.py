"""Tests for readout formatting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from grayline.display import format_subsolar, format_utc_clock


@pytest.mark.parametrize(
    ("lat", "lon", "expected"),
    [
        (23.44, -132.34, "subsolar  23.4°N  132.3°W"),
        (-23.41, 45.06, "subsolar  23.4°S  45.1°E"),
        (0.0, 0.0, "subsolar  0.0°N  0.0°E"),
        (-0.04, -180.0, "subsolar  0.0°S  180.0°W"),
    ],
)
def test_format_subsolar(lat: float, lon: float, expected: str) -> None:
    """One decimal, magnitude only, hemisphere letter suffix."""
    assert format_subsolar(lat, lon) == expected


def test_format_utc_clock() -> None:
    """HH:MM:SS in UTC."""
    assert format_utc_clock(datetime(2024, 6, 20, 20, 51, 5, 999_000, tzinfo=timezone.utc)) == "20:51:05"


def test_format_utc_clock_converts_zone() -> None:
    """Aware instants in other zones are shown in UTC."""
    seoul = timezone(timedelta(hours=9))
    assert format_utc_clock(datetime(2024, 6, 21, 5, 51, 5, tzinfo=seoul)) == "20:51:05"
