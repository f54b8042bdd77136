"""Data model definitions — explicit boundaries between ephemeris, geometry, and render layers."""

from dataclasses import dataclass
from datetime import datetime

# (longitude, latitude) pairs in decimal degrees
GeoRing = tuple[tuple[float, float], ...]  # Closed: first point repeated at the end
GeoCurve = tuple[tuple[float, float], ...]  # Open: no pole vertices, not re-closed

# Named solar-altitude thresholds (degrees)
TWILIGHT_ALTITUDES: dict[str, float] = {
    "night": 0.0,
    "civil": -6.0,
    "nautical": -12.0,
    "astronomical": -18.0,
}


@dataclass(frozen=True)
class SubsolarPoint:
    """Point on Earth directly beneath the sun."""

    lon: float  # Longitude in [-180, 180) (decimal degrees)
    lat: float  # Latitude (decimal degrees), always degrees(decl)
    decl: float  # Solar declination (radians, signed)


@dataclass(frozen=True)
class AltitudeBand:
    """One shaded overlay layer: the region where solar altitude < alt_deg."""

    id: str  # Layer identifier ("night", "twilight", ...)
    alt_deg: float  # Solar altitude threshold (degrees, <= 0)
    opacity: float  # Fill opacity passed through to the renderer


DEFAULT_BANDS: tuple[AltitudeBand, ...] = (
    AltitudeBand(id="night", alt_deg=0.0, opacity=0.30),
    AltitudeBand(id="twilight", alt_deg=-6.0, opacity=0.30),
)


@dataclass(frozen=True)
class BandRing:
    """A band paired with its boundary ring for one refresh."""

    band: AltitudeBand
    ring: GeoRing


@dataclass(frozen=True)
class Overlay:
    """The sole input to renderers. Fully computed state for one instant."""

    instant: datetime  # UTC datetime (with tzinfo=utc)
    subsolar: SubsolarPoint
    band_rings: tuple[BandRing, ...]  # Bands without a boundary right now are omitted
    terminator: GeoCurve  # Open altitude-0 curve
