"""Matplotlib static PNG renderer (plain equirectangular lon/lat axes)."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from grayline.display import format_subsolar, format_utc_clock
from grayline.models import Overlay

_ROOT = Path(__file__).parent.parent.parent.parent


def render_static_map(overlay: Overlay, night_color: str = "#0a1428", width: float = 12) -> Figure:
    """Render an Overlay as a static matplotlib image.

    Args:
        overlay: Fully computed overlay geometry.
        night_color: Fill color for every band.
        width: Output image width in inches (height is half of it).

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(width, width / 2))
    fig.patch.set_facecolor("#050a1a")
    ax.set_facecolor("#9ec1e0")

    for lon in range(-180, 181, 30):
        ax.axvline(lon, color="white", linewidth=0.3, alpha=0.5, zorder=0)
    for lat in range(-90, 91, 30):
        ax.axhline(lat, color="white", linewidth=0.3, alpha=0.5, zorder=0)

    for br in overlay.band_rings:
        ring = np.array(br.ring)
        ax.fill(ring[:, 0], ring[:, 1], color=night_color, alpha=br.band.opacity, linewidth=0, zorder=1)

    curve = np.array(overlay.terminator)
    ax.plot(curve[:, 0], curve[:, 1], color="white", linewidth=0.8, alpha=0.6, zorder=2)

    sub = overlay.subsolar
    ax.scatter(
        [sub.lon], [sub.lat], s=60, color="#ffd700", edgecolors="white", linewidths=1.5, zorder=3
    )

    ax.set_title(
        f"{format_utc_clock(overlay.instant)} UTC    {format_subsolar(sub.lat, sub.lon)}",
        color="#e8e8e8",
        fontsize=10,
    )
    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])

    return fig


def save_static_map(
    overlay: Overlay, output_path: Path | None = None, night_color: str = "#0a1428"
) -> Path:
    """Save an Overlay as a PNG file.

    Args:
        overlay: Fully computed overlay geometry.
        output_path: Destination path. Auto-generated under results/ if None.
        night_color: Fill color for every band.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        when_str = overlay.instant.strftime("%Y_%m_%d_%H_%M")
        output_path = _ROOT / "results" / f"grayline__{when_str}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_map(overlay, night_color=night_color)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path
