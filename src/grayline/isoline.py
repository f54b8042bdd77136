"""Solar-altitude isolines: night/twilight boundary rings and the terminator curve.

For each integer longitude the boundary latitude solves

    sin(lat)·sin(decl) + cos(lat)·cos(decl)·cos(H) = sin(alt)

where H is the hour angle from the subsolar meridian. With p = sin(decl),
q = cos(decl)·cos(H), R = hypot(p, q) and phase φ = atan2(p, q) the left side
is R·cos(lat - φ), so lat = φ ∓ acos(sin(alt) / R). The root on the side of
the night pole is kept.

The amplitude form is singular only when R -> 0, i.e. decl ≈ 0 at H = ±90°,
which the equinox clamp rules out. The half-angle substitution
t = tan(lat/2) has its own singular locus where cos(decl)·cos(H) + sin(alt)
vanishes near H ≈ 180° and needs a separate branch there, so it is not used.
"""

import math

import numpy as np

from grayline.models import GeoCurve, GeoRing

MIN_DECL = math.radians(2.0)  # Equinox guard
MAX_LAT = 89.9  # Solved latitudes never touch the poles

_LONGITUDES = np.arange(-180, 181, dtype=float)  # 361 samples, 1° apart


def clamp_declination(decl_raw: float) -> float:
    """Keep declination at least MIN_DECL away from zero, preserving sign.

    Exactly zero is treated as northern (+MIN_DECL).
    """
    if abs(decl_raw) >= MIN_DECL:
        return decl_raw
    return MIN_DECL if decl_raw >= 0 else -MIN_DECL


def night_pole(decl: float, alt_deg: float) -> float:
    """Latitude of the pole inside the below-threshold region (-90 or +90)."""
    # The south pole sees the sun at altitude -decl
    return -90.0 if math.sin(decl) > -math.sin(math.radians(alt_deg)) else 90.0


def _solve_latitudes(
    ss_lon: float, decl: float, alt_deg: float, pole: float
) -> list[tuple[float, float]]:
    s = math.sin(math.radians(alt_deg))
    p = math.sin(decl)
    q = math.cos(decl) * np.cos(np.radians(_LONGITUDES - ss_lon))
    r = np.hypot(p, q)

    # Longitudes where the sun's daily altitude range never reaches the threshold
    reachable = r >= abs(s)
    lons = _LONGITUDES[reachable]
    q = q[reachable]
    r = r[reachable]

    phase = np.arctan2(p, q)
    offset = np.arccos(np.clip(s / r, -1.0, 1.0))
    lat_rad = phase - offset if pole < 0 else phase + offset
    lats = np.clip(np.degrees(lat_rad), -MAX_LAT, MAX_LAT)

    return [(float(lon), float(lat)) for lon, lat in zip(lons, lats)]


def build_boundary(ss_lon: float, decl_raw: float, alt_deg: float) -> GeoRing | None:
    """Closed ring around the region where solar altitude < alt_deg.

    Args:
        ss_lon: Subsolar longitude (degrees).
        decl_raw: Solar declination (radians), clamped by clamp_declination.
        alt_deg: Altitude threshold (degrees).

    Returns:
        The per-longitude boundary points followed by (180, pole), (-180, pole)
        and the first point again, or None when no longitude reaches the
        threshold (nothing to draw for this band right now).
    """
    decl = clamp_declination(decl_raw)
    pole = night_pole(decl, alt_deg)
    coords = _solve_latitudes(ss_lon, decl, alt_deg, pole)
    if not coords:
        return None

    coords.append((180.0, pole))
    coords.append((-180.0, pole))
    coords.append(coords[0])
    return tuple(coords)


def build_curve(ss_lon: float, decl_raw: float) -> GeoCurve:
    """Open terminator (altitude 0) line: the boundary ring without its closing points."""
    ring = build_boundary(ss_lon, decl_raw, 0.0)
    # R >= |sin(decl)| > 0 = |sin(0)| at every longitude, so the ring always exists
    assert ring is not None
    return ring[:-3]
