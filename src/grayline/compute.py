"""Overlay computation layer — subsolar point, band rings, and terminator for one instant."""

from datetime import datetime

import structlog
from pytz import utc

from grayline.ephemeris import Ephemeris, as_utc
from grayline.isoline import build_boundary, build_curve
from grayline.locator import locate
from grayline.models import DEFAULT_BANDS, AltitudeBand, BandRing, Overlay

log = structlog.get_logger(__name__)


def compute_overlay(
    instant: datetime,
    ephemeris: Ephemeris,
    bands: tuple[AltitudeBand, ...] = DEFAULT_BANDS,
) -> Overlay:
    """Compute every overlay shape for ``instant``.

    Bands whose threshold has no boundary right now are left out of
    ``band_rings``; renderers simply draw nothing for them this tick.

    Args:
        instant: Moment to compute for. Naive values are taken as UTC.
        ephemeris: Solar noon / altitude provider.
        bands: Altitude bands, in render order.

    Returns:
        Overlay ready for any renderer.
    """
    instant = as_utc(instant)
    subsolar = locate(instant, ephemeris)

    band_rings: list[BandRing] = []
    for band in bands:
        ring = build_boundary(subsolar.lon, subsolar.decl, band.alt_deg)
        if ring is None:
            log.debug("band_skipped", band=band.id, alt_deg=band.alt_deg)
            continue
        band_rings.append(BandRing(band=band, ring=ring))

    overlay = Overlay(
        instant=instant,
        subsolar=subsolar,
        band_rings=tuple(band_rings),
        terminator=build_curve(subsolar.lon, subsolar.decl),
    )
    log.debug(
        "overlay_computed",
        utc=instant.isoformat(),
        subsolar_lon=round(subsolar.lon, 3),
        subsolar_lat=round(subsolar.lat, 3),
        bands=[br.band.id for br in overlay.band_rings],
    )
    return overlay


def run(
    ephemeris: Ephemeris,
    bands: tuple[AltitudeBand, ...] = DEFAULT_BANDS,
    instant: datetime | None = None,
) -> Overlay:
    """Top-level entry point: compute the overlay for ``instant`` (default: now)."""
    if instant is None:
        instant = datetime.now(utc)
    return compute_overlay(instant, ephemeris, bands)
