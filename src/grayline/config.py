"""Runtime settings read from the environment (and .env via python-dotenv at entry points)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from grayline.models import DEFAULT_BANDS, TWILIGHT_ALTITUDES, AltitudeBand

_ROOT = Path(__file__).parent.parent.parent

_EPHEMERIS_KINDS = ("skyfield", "analytic")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_DEEPEST_ALT_DEG = min(TWILIGHT_ALTITUDES.values())


class ConfigError(ValueError):
    """Invalid setting value."""


@dataclass(frozen=True)
class Settings:
    ephemeris: str = "skyfield"  # "skyfield" | "analytic"
    data_dir: Path = _ROOT / "resources"  # skyfield Loader directory
    kernel: str = "de421.bsp"
    bands: tuple[AltitudeBand, ...] = DEFAULT_BANDS
    refresh_seconds: float = 60.0  # Geometry tick
    clock_seconds: float = 1.0  # Clock tick
    night_color: str = "#0a1428"
    log_level: str = "INFO"


def parse_bands(raw: str) -> tuple[AltitudeBand, ...]:
    """Parse ``"night:0:0.30,twilight:-6:0.30"`` into AltitudeBand values.

    Raises:
        ConfigError: On malformed entries, thresholds outside [-18, 0],
            opacities outside [0, 1] or duplicate ids.
    """
    bands: list[AltitudeBand] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = entry.split(":")
        if len(parts) != 3:
            raise ConfigError(f"Band must be 'id:alt:opacity', got {entry!r}")
        band_id, alt_raw, opacity_raw = (p.strip() for p in parts)
        try:
            alt_deg = float(alt_raw)
            opacity = float(opacity_raw)
        except ValueError as e:
            raise ConfigError(f"Non-numeric band value in {entry!r}") from e
        if not band_id:
            raise ConfigError(f"Empty band id in {entry!r}")
        if not _DEEPEST_ALT_DEG <= alt_deg <= 0.0:
            raise ConfigError(
                f"Band {band_id!r} threshold {alt_deg} outside [{_DEEPEST_ALT_DEG}, 0]"
            )
        if not 0.0 <= opacity <= 1.0:
            raise ConfigError(f"Band {band_id!r} opacity {opacity} outside [0, 1]")
        if any(b.id == band_id for b in bands):
            raise ConfigError(f"Duplicate band id {band_id!r}")
        bands.append(AltitudeBand(id=band_id, alt_deg=alt_deg, opacity=opacity))
    if not bands:
        raise ConfigError("At least one band is required")
    return tuple(bands)


def _positive_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``GRAYLINE_*`` variables. Empty values fall back to defaults."""
    if environ is None:
        environ = os.environ
    defaults = Settings()

    ephemeris = (environ.get("GRAYLINE_EPHEMERIS") or defaults.ephemeris).strip().lower()
    if ephemeris not in _EPHEMERIS_KINDS:
        raise ConfigError(f"GRAYLINE_EPHEMERIS must be one of {_EPHEMERIS_KINDS}, got {ephemeris!r}")

    log_level = (environ.get("GRAYLINE_LOG_LEVEL") or defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"GRAYLINE_LOG_LEVEL must be one of {_LOG_LEVELS}, got {log_level!r}")

    bands_raw = environ.get("GRAYLINE_BANDS")
    data_dir_raw = environ.get("GRAYLINE_DATA_DIR")

    return Settings(
        ephemeris=ephemeris,
        data_dir=Path(data_dir_raw) if data_dir_raw else defaults.data_dir,
        kernel=environ.get("GRAYLINE_KERNEL") or defaults.kernel,
        bands=parse_bands(bands_raw) if bands_raw else defaults.bands,
        refresh_seconds=_positive_float(
            environ, "GRAYLINE_REFRESH_SECONDS", defaults.refresh_seconds
        ),
        clock_seconds=_positive_float(environ, "GRAYLINE_CLOCK_SECONDS", defaults.clock_seconds),
        night_color=environ.get("GRAYLINE_NIGHT_COLOR") or defaults.night_color,
        log_level=log_level,
    )
