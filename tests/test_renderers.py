"""
Tests for map renderers and the day/night CLI.
"""

import re
from datetime import datetime

import plotly.graph_objects as go
from pytz import utc

from worldclock.clock import DEFAULT_TIME_ZONES
from worldclock.daynight import main
from worldclock.i18n import t
from worldclock.models import GeoPoint, LocationCandidate
from worldclock.renderers.plotly_2d import render_world_map
from worldclock.renderers.static import save_static_map
from worldclock.renderers.svg_2d import lat_lng_to_pixel, render_svg_overlay
from worldclock.terminator import compute_terminator

AT = datetime(2024, 6, 21, 12, 0, tzinfo=utc)


def test_lat_lng_to_pixel_corners():
    assert lat_lng_to_pixel(GeoPoint(lat=90, lng=-180), 360, 180) == (0, 0)
    assert lat_lng_to_pixel(GeoPoint(lat=-90, lng=180), 360, 180) == (360, 180)
    assert lat_lng_to_pixel(GeoPoint(lat=0, lng=0), 1024, 512) == (512, 256)


def test_svg_overlay_has_every_point():
    svg = render_svg_overlay(compute_terminator(AT), width=800, height=400)
    assert svg.startswith("<svg")
    match = re.search(r'<polygon points="([^"]+)"', svg)
    assert match is not None
    assert len(match.group(1).split(" ")) == 1443
    assert "rgba(0, 0, 0, 0.3)" in svg


def test_plotly_world_map():
    missing = LocationCandidate(id="nowhere", point=None, city="Nowhere", timezone="UTC")
    fig = render_world_map(compute_terminator(AT), DEFAULT_TIME_ZONES + (missing,), at=AT)
    assert isinstance(fig, go.Figure)
    night, markers = fig.data
    assert night.fill == "toself"
    assert len(night.lon) == 723
    assert list(markers.customdata) == ["new-york", "london", "tokyo"]
    assert "Tokyo<br>9:00:00 PM" in markers.text


def test_save_static_map(tmp_path):
    out = save_static_map(compute_terminator(AT), DEFAULT_TIME_ZONES, tmp_path / "map.png")
    assert out == tmp_path / "map.png"
    assert out.stat().st_size > 0


def test_cli_writes_png(tmp_path):
    out = tmp_path / "nested" / "daynight.png"
    assert main(["--at", "2024-12-21T06:30", "--output", str(out)]) == 0
    assert out.exists()


def test_i18n_fallbacks():
    assert t("btn_add", "ko") == "추가"
    assert t("btn_add", "fr") == "Add"
    assert t("no_such_key", "en") == "no_such_key"
