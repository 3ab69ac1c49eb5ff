"""Plotly interactive world map renderer.

Draws the night side as a filled polygon over an equirectangular
world map, with markers for tracked clocks.
"""

from datetime import datetime

import numpy as np
import plotly.graph_objects as go

from worldclock.clock import format_time_for_timezone
from worldclock.models import LocationCandidate, TerminatorCurve
from worldclock.terminator import night_polygon

_BG = "#0d1b35"
_LAND = "#2a3b5c"
_OCEAN = "#152744"
_NIGHT_FILL = "rgba(0, 0, 0, 0.35)"
_MARKER_COLOR = "#c9a96e"


def render_world_map(
    curve: TerminatorCurve,
    zones: tuple[LocationCandidate, ...] = (),
    at: datetime | None = None,
) -> go.Figure:
    """Render the terminator and tracked clocks as a Plotly geo figure.

    Args:
        curve: Computed terminator.
        zones: Tracked clocks. Entries without a coordinate are not drawn.
        at: Time shown in marker labels. Defaults to the curve's instant.

    Returns:
        Plotly Figure object.
    """
    polygon = night_polygon(curve)
    night_trace = go.Scattergeo(
        lon=np.array([p.lng for p in polygon]),
        lat=np.array([p.lat for p in polygon]),
        mode="lines",
        fill="toself",
        fillcolor=_NIGHT_FILL,
        line=dict(width=0),
        hoverinfo="skip",
        name="night",
    )

    when = at or curve.utc_dt
    placed = [z for z in zones if z.point is not None]
    labels = [
        f"{z.city}<br>{format_time_for_timezone(when, z.timezone)}" for z in placed
    ]
    marker_trace = go.Scattergeo(
        lon=[z.point.lng for z in placed],  # type: ignore[union-attr]
        lat=[z.point.lat for z in placed],  # type: ignore[union-attr]
        mode="markers+text",
        text=labels,
        textposition="top center",
        textfont=dict(color="#e8d5a3", size=10),
        marker=dict(size=7, color=_MARKER_COLOR, line=dict(width=0)),
        customdata=[z.id for z in placed],
        hoverinfo="text",
        name="clocks",
    )

    fig = go.Figure(data=[night_trace, marker_trace])
    fig.update_geos(
        projection_type="equirectangular",
        showcountries=True,
        countrycolor="#3d5078",
        showland=True,
        landcolor=_LAND,
        showocean=True,
        oceancolor=_OCEAN,
        showframe=False,
        lataxis_range=[-90, 90],
        lonaxis_range=[-180, 180],
        bgcolor=_BG,
    )
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=420,
    )
    return fig
