"""Plotly interactive world map renderer.

Uses Scattergeo on an equirectangular projection so the (lon, lat) rings map
straight onto the plot. Supports wheel zoom and drag panning.
"""

import plotly.graph_objects as go

from grayline.display import format_subsolar
from grayline.models import GeoRing, Overlay

_BG = "#050a1a"
_LAND = "#1b2a44"
_OCEAN = "#0d1b35"
_TERMINATOR_COLOR = "rgba(255, 255, 255, 0.25)"
_SUBSOLAR_COLOR = "#ffd700"


def _rgba(hex_color: str, alpha: float) -> str:
    """'#0a1428' + 0.3 → 'rgba(10, 20, 40, 0.3)'."""
    h = hex_color.lstrip("#")
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


def _clockwise(ring: GeoRing) -> GeoRing:
    """Orient a boundary ring clockwise (interior on the right) for d3 fills.

    plotly draws `fill="toself"` through d3-geo, which fills the complement
    of a counter-clockwise ring. Southern-cap rings already run east along the
    boundary and back west over the pole; northern-cap rings are reversed.
    """
    pole = ring[-2][1]
    return ring[::-1] if pole > 0 else ring


def render_plotly_map(overlay: Overlay, night_color: str = "#0a1428") -> go.Figure:
    """Render an Overlay as a Plotly world map.

    Band polygons are stacked in band order, so overlapping translucent
    fills darken toward the night pole. The terminator line and the
    subsolar marker are drawn on top.

    Args:
        overlay: Fully computed overlay geometry.
        night_color: Hex fill color for every band; opacity comes from each band.

    Returns:
        Plotly Figure object.
    """
    traces: list[go.Scattergeo] = []

    for br in overlay.band_rings:
        lons, lats = zip(*_clockwise(br.ring))
        traces.append(
            go.Scattergeo(
                lon=list(lons),
                lat=list(lats),
                mode="lines",
                fill="toself",
                fillcolor=_rgba(night_color, br.band.opacity),
                line=dict(width=0, color=_rgba(night_color, 0.0)),
                hoverinfo="skip",
                name=br.band.id,
            )
        )

    t_lons, t_lats = zip(*overlay.terminator)
    traces.append(
        go.Scattergeo(
            lon=list(t_lons),
            lat=list(t_lats),
            mode="lines",
            line=dict(color=_TERMINATOR_COLOR, width=0.8),
            hoverinfo="skip",
            name="terminator",
        )
    )

    sub = overlay.subsolar
    traces.append(
        go.Scattergeo(
            lon=[sub.lon],
            lat=[sub.lat],
            mode="markers",
            marker=dict(
                size=10,
                color=_SUBSOLAR_COLOR,
                opacity=0.9,
                line=dict(color="#ffffff", width=1.5),
            ),
            hovertext=[format_subsolar(sub.lat, sub.lon)],
            hoverinfo="text",
            name="subsolar",
        )
    )

    fig = go.Figure(data=traces)
    fig.update_geos(
        projection_type="equirectangular",
        showland=True,
        landcolor=_LAND,
        showocean=True,
        oceancolor=_OCEAN,
        showcountries=True,
        countrycolor="#334466",
        coastlinecolor="#334466",
        showframe=False,
        bgcolor=_BG,
        lonaxis=dict(range=[-180, 180]),
        lataxis=dict(range=[-90, 90]),
    )
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=520,
        dragmode="pan",
    )

    # st.plotly_chart call also requires config={"scrollZoom": True}
    fig._config = {"scrollZoom": True, "displayModeBar": False}  # type: ignore[attr-defined]

    return fig
