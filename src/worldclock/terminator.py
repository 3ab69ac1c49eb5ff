"""Day/night terminator computation — low-precision solar position astronomy.

Adequate for drawing the night side on a world map, not for navigation.
Formulas follow Leaflet.Terminator:
https://github.com/joergdietrich/Leaflet.Terminator
"""

import math
import time
from datetime import datetime

from pytz import utc

from worldclock.models import GeoPoint, SunPosition, TerminatorCurve

_J2000 = 2451545.0  # Julian Day of 2000-01-01T12:00:00Z
_UNIX_EPOCH_JD = 2440587.5  # Julian Day of 1970-01-01T00:00:00Z
_MS_PER_DAY = 86400000

_RESOLUTION = 2  # samples per degree of longitude
_LNG_SPAN = 360  # curve runs from -360 to +360

# Representable datetime range, whole seconds: 0001-01-01T00:00:00Z to
# 9999-12-31T23:59:59Z
_MIN_UNIX_MS = -62135596800000
_MAX_UNIX_MS = 253402300799000


class InvalidInstantError(ValueError):
    """Instant is not a datetime or a finite, in-range number of Unix milliseconds."""


def to_unix_ms(instant: datetime | float | None = None) -> float:
    """Normalise an instant to Unix milliseconds.

    Args:
        instant: Aware datetime, naive datetime (taken as UTC), Unix
            milliseconds, or None for the current time.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.

    Raises:
        InvalidInstantError: On non-finite or out-of-range numbers, or
            unsupported types.
    """
    if instant is None:
        return time.time() * 1000
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = utc.localize(instant)
        return _check_range(instant.timestamp() * 1000)
    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise InvalidInstantError(f"Unsupported instant type: {type(instant).__name__}")
    if not math.isfinite(instant):
        raise InvalidInstantError(f"Instant must be finite, got {instant!r}")
    return _check_range(float(instant))


def _check_range(unix_ms: float) -> float:
    if not _MIN_UNIX_MS <= unix_ms <= _MAX_UNIX_MS:
        raise InvalidInstantError(f"Instant out of range (years 1-9999): {unix_ms!r} ms")
    return unix_ms


def julian_day(unix_ms: float) -> float:
    """Continuous Julian Day for a Unix timestamp. Ignores leap seconds."""
    return unix_ms / _MS_PER_DAY + _UNIX_EPOCH_JD


def gmst(jd: float) -> float:
    """Greenwich Mean Sidereal Time in hours (low precision USNO equation)."""
    d = jd - _J2000
    return (18.697374558 + 24.06570982441908 * d) % 24


def sun_ecliptic_position(jd: float) -> tuple[float, float]:
    """Ecliptic longitude of the Sun (degrees) and its distance (AU).

    Following https://en.wikipedia.org/wiki/Position_of_the_Sun
    """
    n = jd - _J2000
    mean_lng = (280.460 + 0.9856474 * n) % 360
    g = math.radians((357.528 + 0.9856003 * n) % 360)
    lam = mean_lng + 1.915 * math.sin(g) + 0.02 * math.sin(2 * g)
    r = 1.00014 - 0.01671 * math.cos(g) - 0.0014 * math.cos(2 * g)
    return lam, r


def ecliptic_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic in degrees (short-term polynomial)."""
    t = (jd - _J2000) / 36525
    return 23.43929111 - t * (
        46.836769 / 3600
        - t
        * (
            0.0001831 / 3600
            + t * (0.00200340 / 3600 - t * (0.576e-6 / 3600 - t * 4.34e-8 / 3600))
        )
    )


def sun_equatorial_position(ecl_lng: float, obliquity: float) -> SunPosition:
    """Convert the Sun's ecliptic longitude to right ascension / declination.

    atan only covers a 180° range, so alpha is moved into the same
    90° quadrant as the ecliptic longitude.

    Args:
        ecl_lng: Ecliptic longitude (degrees).
        obliquity: Obliquity of the ecliptic (degrees).

    Returns:
        SunPosition with alpha and delta in degrees.
    """
    eps = math.radians(obliquity)
    lam = math.radians(ecl_lng)
    alpha = math.degrees(math.atan(math.cos(eps) * math.tan(lam)))
    delta = math.degrees(math.asin(math.sin(eps) * math.sin(lam)))

    lng_quadrant = math.floor(ecl_lng / 90) * 90
    ra_quadrant = math.floor(alpha / 90) * 90
    return SunPosition(alpha=alpha + (lng_quadrant - ra_quadrant), delta=delta)


def hour_angle(lng: float, sun: SunPosition, gst: float) -> float:
    """Hour angle of the Sun (degrees) seen from a longitude."""
    lst = gst + lng / 15
    return lst * 15 - sun.alpha


def terminator_latitude(ha: float, sun: SunPosition) -> float:
    """Latitude (degrees) where the Sun sits on the horizon at hour angle ha."""
    numerator = -math.cos(math.radians(ha))
    tan_delta = math.tan(math.radians(sun.delta))
    if tan_delta == 0.0:
        # Equinox: the boundary is a meridian pair, latitude goes to ±90.
        return math.copysign(90.0, numerator) * math.copysign(1.0, tan_delta)
    return math.degrees(math.atan(numerator / tan_delta))


def compute_terminator(instant: datetime | float | None = None) -> TerminatorCurve:
    """Compute the day/night boundary as a closed polygon.

    Longitudes are sampled every 0.5° from -360 to 360 so the polygon stays
    continuous across the antimeridian. Both ends are pinned to the pole on
    the night side, so the polygon encloses the dark hemisphere.

    Args:
        instant: Aware datetime, naive datetime (UTC), Unix milliseconds,
            or None for now.

    Returns:
        TerminatorCurve with 1443 points.

    Raises:
        InvalidInstantError: On non-finite or unsupported instant values.
    """
    unix_ms = to_unix_ms(instant)
    jd = julian_day(unix_ms)
    gst = gmst(jd)
    ecl_lng, _ = sun_ecliptic_position(jd)
    sun = sun_equatorial_position(ecl_lng, ecliptic_obliquity(jd))

    points: list[GeoPoint] = []
    for i in range(2 * _LNG_SPAN * _RESOLUTION + 1):
        lng = -_LNG_SPAN + i / _RESOLUTION
        ha = hour_angle(lng, sun, gst)
        points.append(GeoPoint(lat=terminator_latitude(ha, sun), lng=lng))

    # Sun south of the equator → the north pole is in darkness
    pole = 90.0 if sun.delta < 0 else -90.0
    points.insert(0, GeoPoint(lat=pole, lng=-_LNG_SPAN))
    points.append(GeoPoint(lat=pole, lng=_LNG_SPAN))

    return TerminatorCurve(unix_ms=unix_ms, points=tuple(points), sun=sun, gmst=gst)


def solar_elevation(point: GeoPoint, instant: datetime | float | None = None) -> float:
    """Elevation of the Sun above the horizon at a point, in degrees.

    Zero on the terminator, positive on the lit side.
    """
    jd = julian_day(to_unix_ms(instant))
    ecl_lng, _ = sun_ecliptic_position(jd)
    sun = sun_equatorial_position(ecl_lng, ecliptic_obliquity(jd))
    ha = math.radians(hour_angle(point.lng, sun, gmst(jd)))
    lat = math.radians(point.lat)
    delta = math.radians(sun.delta)
    sin_elev = math.sin(lat) * math.sin(delta) + math.cos(lat) * math.cos(
        delta
    ) * math.cos(ha)
    return math.degrees(math.asin(max(-1.0, min(1.0, sin_elev))))


def is_daylit(point: GeoPoint, instant: datetime | float | None = None) -> bool:
    """True when the Sun's centre is above the horizon at point."""
    return solar_elevation(point, instant) > 0


def night_polygon(curve: TerminatorCurve, west: float = -180.0) -> list[GeoPoint]:
    """Closed night-side polygon for a single 360° map window.

    Keeps the boundary samples with west <= lng <= west + 360 and pins both
    ends to the night pole at the window edges.
    """
    east = west + 360
    inner = [p for p in curve.points[1:-1] if west <= p.lng <= east]
    pole = curve.night_pole
    return [GeoPoint(lat=pole, lng=west), *inner, GeoPoint(lat=pole, lng=east)]
