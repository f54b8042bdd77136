"""GeoJSON Feature builders for map clients (coordinates are [lon, lat])."""

from typing import Any

from grayline.models import GeoCurve, GeoRing, Overlay

Feature = dict[str, Any]


def polygon_feature(ring: GeoRing, **properties: Any) -> Feature:
    """Single-ring Polygon feature. ``ring`` must already be closed."""
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [[[lon, lat] for lon, lat in ring]]},
        "properties": properties,
    }


def line_feature(curve: GeoCurve, **properties: Any) -> Feature:
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": [[lon, lat] for lon, lat in curve]},
        "properties": properties,
    }


def point_feature(lon: float, lat: float, **properties: Any) -> Feature:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


def overlay_feature_collection(overlay: Overlay, night_color: str) -> dict[str, Any]:
    """All overlay geometry as one FeatureCollection.

    Order matches the render stack: band polygons, terminator line, subsolar point.
    Styling values are passed through untouched in ``properties``.
    """
    features = [
        polygon_feature(
            br.ring,
            layer=br.band.id,
            alt_deg=br.band.alt_deg,
            fill_color=night_color,
            fill_opacity=br.band.opacity,
        )
        for br in overlay.band_rings
    ]
    features.append(line_feature(overlay.terminator, layer="terminator"))
    features.append(
        point_feature(
            overlay.subsolar.lon,
            overlay.subsolar.lat,
            layer="subsolar",
            utc=overlay.instant.isoformat(),
        )
    )
    return {"type": "FeatureCollection", "features": features}
