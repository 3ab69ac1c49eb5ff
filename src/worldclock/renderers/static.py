"""Matplotlib static PNG renderer."""

import os
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from worldclock.models import LocationCandidate, TerminatorCurve
from worldclock.terminator import night_polygon

_ROOT = Path(__file__).parent.parent.parent.parent
_RESULTS_DIR = Path(os.environ.get("WORLDCLOCK_RESULTS_DIR", _ROOT / "results"))


def render_static_map(
    curve: TerminatorCurve,
    zones: tuple[LocationCandidate, ...] = (),
    chart_width: int = 12,
) -> Figure:
    """Render the night side on an equirectangular lat/lng grid.

    Args:
        curve: Computed terminator.
        zones: Tracked clocks drawn as labelled dots.
        chart_width: Output image width in inches (height is half).

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_width, chart_width / 2))
    fig.patch.set_facecolor("#0d1b35")
    ax.set_facecolor("#152744")

    polygon = night_polygon(curve)
    lngs = np.array([p.lng for p in polygon])
    lats = np.array([p.lat for p in polygon])
    ax.fill(lngs, lats, color="black", alpha=0.45, linewidth=0, zorder=1)
    ax.plot(lngs[1:-1], lats[1:-1], color="#c9a96e", linewidth=0.8, zorder=2)

    for z in zones:
        if z.point is None:
            continue
        ax.scatter([z.point.lng], [z.point.lat], s=18, color="#e8d5a3", zorder=3)
        ax.annotate(
            z.city,
            (z.point.lng, z.point.lat),
            textcoords="offset points",
            xytext=(0, 6),
            ha="center",
            fontsize=8,
            color="#e8d5a3",
        )

    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_xticks(range(-180, 181, 60))
    ax.set_yticks(range(-90, 91, 30))
    ax.tick_params(colors="#aaaaaa", labelsize=7)
    ax.grid(color="#334466", linewidth=0.4)
    ax.set_title(
        curve.utc_dt.strftime("%Y-%m-%d %H:%M UTC"), color="#e8d5a3", fontsize=10
    )
    return fig


def save_static_map(
    curve: TerminatorCurve,
    zones: tuple[LocationCandidate, ...] = (),
    output_path: Path | None = None,
) -> Path:
    """Save the day/night map as a PNG file.

    Args:
        curve: Computed terminator.
        zones: Tracked clocks drawn as labelled dots.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        when_str = curve.utc_dt.strftime("%Y_%m_%d_%H_%M")
        output_path = _RESULTS_DIR / f"daynight__{when_str}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_map(curve, zones)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path
