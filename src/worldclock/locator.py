"""Spatial lookups — nearest directory entry and coordinate → timezone resolution."""

import math
from collections.abc import Sequence

from timezonefinder import TimezoneFinder

from worldclock.clock import utc_offset_label
from worldclock.models import GeoPoint, LocationCandidate

EARTH_RADIUS_KM = 6371.0

_tf = TimezoneFinder()


class TimeZoneLookupError(Exception):
    """No timezone covers the requested coordinate."""


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in km between two points."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat))
        * math.cos(math.radians(b.lat))
        * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def has_usable_point(candidate: LocationCandidate) -> bool:
    """True when the candidate carries a finite, in-range coordinate."""
    point = candidate.point
    if point is None:
        return False
    lat, lng = point.lat, point.lng
    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return -90 <= lat <= 90


def find_closest(
    query: GeoPoint, candidates: Sequence[LocationCandidate]
) -> LocationCandidate | None:
    """Return the candidate geodesically closest to query.

    Candidates without a usable coordinate (see has_usable_point) are
    skipped rather than treated as errors. On equal distances the earliest
    candidate in input order wins.

    Args:
        query: The clicked/requested point.
        candidates: Directory entries to compare against.

    Returns:
        The closest candidate, or None when no candidate has a usable
        coordinate (including an empty sequence).
    """
    best: LocationCandidate | None = None
    best_km = math.inf
    for candidate in candidates:
        if not has_usable_point(candidate):
            continue
        assert candidate.point is not None
        km = haversine_km(query, candidate.point)
        if km < best_km:
            best, best_km = candidate, km
    return best


def resolve_timezone(query: GeoPoint) -> str:
    """Resolve the IANA timezone name containing a coordinate.

    Raises:
        TimeZoneLookupError: When the point is outside every timezone polygon.
    """
    tz_str = _tf.timezone_at(lat=query.lat, lng=query.lng)
    if tz_str is None:
        raise TimeZoneLookupError(f"Timezone not found: lat={query.lat}, lng={query.lng}")
    return tz_str


def candidate_for_point(
    query: GeoPoint,
    candidates: Sequence[LocationCandidate],
    max_distance_km: float | None = None,
) -> LocationCandidate:
    """Pick the directory entry for a map click.

    Returns the closest candidate. If there is none, or it is farther than
    max_distance_km, a new entry is built from the timezone polygon
    containing the point instead.

    Raises:
        TimeZoneLookupError: When a new entry is needed but the point is in
            no timezone.
    """
    closest = find_closest(query, candidates)
    if closest is not None and closest.point is not None:
        if max_distance_km is None or haversine_km(query, closest.point) <= max_distance_km:
            return closest

    tz_str = resolve_timezone(query)
    place = tz_str.rsplit("/", 1)[-1].replace("_", " ")
    return LocationCandidate(
        id=tz_str,
        point=query,
        name=place,
        city=place,
        timezone=tz_str,
        offset=utc_offset_label(tz_str),
    )
