"""SVG terminator overlay renderer.

Produces a transparent <svg> element holding one <polygon> for the night
side, meant to be stacked over a same-sized equirectangular map image.

Coordinate system:
  x ∈ [0, width]   (lng -180 → 0, lng 180 → width)
  y ∈ [0, height]  (lat 90 → 0, lat -90 → height)

The full -360..360 curve is projected; points outside the viewport fall
off the edges and are clipped by the SVG itself.
"""

from __future__ import annotations

from worldclock.models import GeoPoint, TerminatorCurve

_NIGHT_FILL = "rgba(0, 0, 0, 0.3)"


def lat_lng_to_pixel(point: GeoPoint, width: float, height: float) -> tuple[float, float]:
    """Equirectangular projection of a point into pixel space."""
    x = (point.lng + 180) / 360 * width
    y = (90 - point.lat) / 180 * height
    return x, y


def render_svg_overlay(curve: TerminatorCurve, width: int = 1024, height: int = 512) -> str:
    """Return an <svg> string with the night polygon.

    Args:
        curve: Computed terminator.
        width: Pixel width of the underlying map.
        height: Pixel height of the underlying map.

    Returns:
        SVG markup suitable for absolute positioning over the map.
    """
    points = " ".join(
        f"{x:.2f},{y:.2f}"
        for x, y in (lat_lng_to_pixel(p, width, height) for p in curve.points)
    )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"'
        f' viewBox="0 0 {width} {height}"'
        ' style="position:absolute; top:0; left:0; pointer-events:none">'
        f'<polygon points="{points}" style="fill: {_NIGHT_FILL}; stroke: none"/>'
        "</svg>"
    )
