"""
Tests for the terminator calculator.

Covers curve shape (closure, sampling), hemisphere of the night pole,
the right-ascension quadrant correction against reference values, and a
geometric cross-check: the Sun sits on the horizon along the curve.
"""

import math
from datetime import datetime

import pytest
from pytz import timezone, utc

from worldclock.models import GeoPoint, SunPosition
from worldclock.terminator import (
    InvalidInstantError,
    compute_terminator,
    gmst,
    julian_day,
    night_polygon,
    solar_elevation,
    sun_ecliptic_position,
    sun_equatorial_position,
    terminator_latitude,
    to_unix_ms,
)

JUNE_SOLSTICE = datetime(2024, 6, 21, 0, 0, tzinfo=utc)
DECEMBER_SOLSTICE = datetime(2024, 12, 21, 0, 0, tzinfo=utc)

INSTANTS = [
    JUNE_SOLSTICE,
    DECEMBER_SOLSTICE,
    datetime(1970, 1, 1, tzinfo=utc),
    datetime(1985, 3, 9, 17, 42, tzinfo=utc),
    datetime(2024, 11, 1, tzinfo=utc),
    datetime(2031, 9, 23, 6, 15, tzinfo=utc),
]


def test_julian_day_reference_points():
    """Unix epoch and J2000.0 land on their known Julian Days."""
    assert julian_day(0) == 2440587.5
    j2000_ms = to_unix_ms(datetime(2000, 1, 1, 12, 0, tzinfo=utc))
    assert julian_day(j2000_ms) == 2451545.0


def test_gmst_at_j2000():
    assert gmst(2451545.0) == pytest.approx(18.697374558)


def test_gmst_stays_in_range_before_j2000():
    """Negative day counts still give a sidereal time in [0, 24)."""
    for jd in (2440587.5, 2445000.25, 2451544.9):
        assert 0 <= gmst(jd) < 24


def test_sun_distance_is_about_one_au():
    _, r = sun_ecliptic_position(julian_day(to_unix_ms(JUNE_SOLSTICE)))
    assert 1.01 < r < 1.02  # aphelion season


@pytest.mark.parametrize("instant", INSTANTS)
def test_closure(instant):
    """First and last points share the pole latitude at lng -360 / +360."""
    points = compute_terminator(instant).points
    assert points[0].lat == points[-1].lat
    assert points[0].lat in (90.0, -90.0)
    assert points[0].lng == -360
    assert points[-1].lng == 360


@pytest.mark.parametrize("instant", INSTANTS)
def test_longitude_sampling(instant):
    """1441 boundary samples step by exactly 0.5° from -360 to 360."""
    curve = compute_terminator(instant)
    assert len(curve.points) == 1443
    inner = curve.points[1:-1]
    assert inner[0].lng == -360
    assert inner[-1].lng == 360
    for a, b in zip(inner, inner[1:]):
        assert b.lng - a.lng == 0.5


@pytest.mark.parametrize("instant", INSTANTS)
def test_latitudes_are_on_the_globe(instant):
    for p in compute_terminator(instant).points:
        assert -90 <= p.lat <= 90


def test_june_solstice_closes_at_south_pole():
    """Sun north of the equator → the south pole is dark."""
    curve = compute_terminator(JUNE_SOLSTICE)
    assert curve.sun.delta > 23
    assert curve.points[0].lat == -90
    assert curve.points[-1].lat == -90
    assert curve.night_pole == -90


def test_december_solstice_closes_at_north_pole():
    curve = compute_terminator(DECEMBER_SOLSTICE)
    assert curve.sun.delta < -23
    assert curve.points[0].lat == 90
    assert curve.points[-1].lat == 90


def test_determinism():
    assert compute_terminator(JUNE_SOLSTICE) == compute_terminator(JUNE_SOLSTICE)


def test_instant_forms_agree():
    """Aware datetime, naive UTC datetime and Unix millis give the same curve."""
    aware = compute_terminator(JUNE_SOLSTICE)
    naive = compute_terminator(datetime(2024, 6, 21, 0, 0))
    millis = compute_terminator(1718928000000)
    seoul = compute_terminator(timezone("Asia/Seoul").localize(datetime(2024, 6, 21, 9, 0)))
    assert aware == naive == millis == seoul
    assert aware.utc_dt == JUNE_SOLSTICE


def test_right_ascension_reference_2024_11_01():
    """Almanac: RA ≈ 14h27m (≈216.7°), dec ≈ -14.5° at 2024-11-01 00:00 UTC."""
    sun = compute_terminator(datetime(2024, 11, 1, tzinfo=utc)).sun
    assert 215.5 < sun.alpha < 218.0
    assert -15.5 < sun.delta < -13.5


@pytest.mark.parametrize(
    "ecl_lng, low, high",
    [
        (45.0, 42.0, 43.0),  # Q1: atan already right
        (100.0, 100.0, 101.5),  # Q2: atan lands in -90..0
        (200.0, 198.0, 199.0),  # Q3: atan lands in 0..90
        (300.0, 301.5, 303.0),  # Q4: atan lands in -90..0
    ],
)
def test_quadrant_correction(ecl_lng, low, high):
    """Right ascension ends up in the same 90° quadrant as ecliptic longitude."""
    sun = sun_equatorial_position(ecl_lng, 23.44)
    assert low < sun.alpha < high
    assert math.floor(sun.alpha / 90) == math.floor(ecl_lng / 90)


@pytest.mark.parametrize("instant", INSTANTS)
def test_sun_on_horizon_along_curve(instant):
    """Every boundary sample has ~zero solar elevation."""
    curve = compute_terminator(instant)
    for p in curve.points[1:-1:40]:
        if abs(p.lat) > 89.9:
            continue
        assert abs(solar_elevation(p, instant)) < 1e-6


@pytest.mark.parametrize("instant", INSTANTS)
def test_night_pole_is_dark(instant):
    curve = compute_terminator(instant)
    assert solar_elevation(GeoPoint(lat=curve.night_pole, lng=0), instant) < 0


def test_zero_declination_does_not_divide_by_zero():
    sun = SunPosition(alpha=0.0, delta=0.0)
    assert terminator_latitude(0.0, sun) == -90.0
    assert terminator_latitude(180.0, sun) == 90.0


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_instant_rejected(bad):
    with pytest.raises(InvalidInstantError):
        compute_terminator(bad)


@pytest.mark.parametrize("bad", [1e200, -1.7e308, 1.7e308, 2.6e14, -6.3e13])
def test_out_of_range_instant_rejected(bad):
    with pytest.raises(InvalidInstantError):
        compute_terminator(bad)


def test_far_future_instant_supported():
    """Late year 9999 still computes and round-trips through utc_dt."""
    at = datetime(9999, 12, 31, 23, 0, tzinfo=utc)
    curve = compute_terminator(at)
    assert len(curve.points) == 1443
    assert all(-90 <= p.lat <= 90 for p in curve.points)
    assert curve.utc_dt == at


@pytest.mark.parametrize("bad", ["2024-06-21", True, [0]])
def test_unsupported_instant_type_rejected(bad):
    with pytest.raises(ValueError):
        compute_terminator(bad)


def test_none_means_now():
    curve = compute_terminator()
    assert len(curve.points) == 1443


def test_night_polygon_single_window():
    curve = compute_terminator(JUNE_SOLSTICE)
    polygon = night_polygon(curve)
    assert polygon[0] == GeoPoint(lat=-90, lng=-180)
    assert polygon[-1] == GeoPoint(lat=-90, lng=180)
    assert len(polygon) == 721 + 2
    assert all(-180 <= p.lng <= 180 for p in polygon)


def test_latlng_pairs():
    curve = compute_terminator(DECEMBER_SOLSTICE)
    pairs = curve.latlng()
    assert pairs[0] == (90.0, -360)
    assert len(pairs) == 1443
