"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from grayline.config import ConfigError, Settings, load_settings, parse_bands
from grayline.models import DEFAULT_BANDS, AltitudeBand


def test_defaults() -> None:
    """An empty environment yields the default settings."""
    settings = load_settings({})
    assert settings == Settings()
    assert settings.bands == DEFAULT_BANDS
    assert settings.refresh_seconds == 60.0
    assert settings.clock_seconds == 1.0


def test_overrides() -> None:
    """GRAYLINE_* variables override every default."""
    settings = load_settings(
        {
            "GRAYLINE_EPHEMERIS": "Analytic",
            "GRAYLINE_DATA_DIR": "/tmp/kernels",
            "GRAYLINE_KERNEL": "de440s.bsp",
            "GRAYLINE_BANDS": "night:0:0.25, civil:-6:0.2, nautical:-12:0.15",
            "GRAYLINE_REFRESH_SECONDS": "30",
            "GRAYLINE_CLOCK_SECONDS": "0.5",
            "GRAYLINE_NIGHT_COLOR": "#000000",
            "GRAYLINE_LOG_LEVEL": "debug",
        }
    )
    assert settings.ephemeris == "analytic"
    assert settings.data_dir == Path("/tmp/kernels")
    assert settings.kernel == "de440s.bsp"
    assert [b.id for b in settings.bands] == ["night", "civil", "nautical"]
    assert settings.refresh_seconds == 30.0
    assert settings.clock_seconds == 0.5
    assert settings.night_color == "#000000"
    assert settings.log_level == "DEBUG"


def test_empty_values_fall_back() -> None:
    """Empty strings count as unset."""
    settings = load_settings({"GRAYLINE_BANDS": "", "GRAYLINE_REFRESH_SECONDS": ""})
    assert settings.bands == DEFAULT_BANDS
    assert settings.refresh_seconds == 60.0


def test_parse_bands() -> None:
    """id:alt:opacity entries become AltitudeBand values in order."""
    assert parse_bands("night:0:0.3,astro:-18:0.1,") == (
        AltitudeBand(id="night", alt_deg=0.0, opacity=0.3),
        AltitudeBand(id="astro", alt_deg=-18.0, opacity=0.1),
    )


@pytest.mark.parametrize(
    "raw",
    [
        "night:0",
        "night:zero:0.3",
        ":0:0.3",
        "deep:-24:0.3",
        "day:5:0.3",
        "night:0:1.5",
        "night:0:0.3,night:-6:0.3",
        " , ",
    ],
)
def test_parse_bands_rejects(raw: str) -> None:
    """Malformed, out-of-range and duplicate bands raise ConfigError."""
    with pytest.raises(ConfigError):
        parse_bands(raw)


@pytest.mark.parametrize(
    "env",
    [
        {"GRAYLINE_EPHEMERIS": "vsop87"},
        {"GRAYLINE_REFRESH_SECONDS": "0"},
        {"GRAYLINE_CLOCK_SECONDS": "soon"},
        {"GRAYLINE_LOG_LEVEL": "loud"},
    ],
)
def test_load_settings_rejects(env: dict[str, str]) -> None:
    """Bad values raise ConfigError, which is a ValueError."""
    with pytest.raises(ValueError):
        load_settings(env)
