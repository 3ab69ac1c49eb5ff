"""Timezone directory, local-time formatting and the tracked-clock list."""

import os
import time
from dataclasses import replace
from datetime import datetime

from pytz import UnknownTimeZoneError, timezone, utc

from worldclock.models import GeoPoint, LocationCandidate

DEFAULT_TZ = os.environ.get("WORLDCLOCK_DEFAULT_TZ", "UTC")


def _entry(
    id: str,
    city: str,
    country: str,
    tz: str,
    offset: str,
    lng: float,
    lat: float,
) -> LocationCandidate:
    return LocationCandidate(
        id=id,
        point=GeoPoint(lat=lat, lng=lng),
        name=city,
        city=city,
        country=country,
        timezone=tz,
        offset=offset,
    )


# Simplified directory; coordinates are city centres
POPULAR_TIME_ZONES: tuple[LocationCandidate, ...] = (
    _entry("new-york", "New York", "United States", "America/New_York", "UTC-5", -74.006, 40.7128),
    _entry("los-angeles", "Los Angeles", "United States", "America/Los_Angeles", "UTC-8", -118.2437, 34.0522),
    _entry("london", "London", "United Kingdom", "Europe/London", "UTC+0", -0.1278, 51.5074),
    _entry("paris", "Paris", "France", "Europe/Paris", "UTC+1", 2.3522, 48.8566),
    _entry("berlin", "Berlin", "Germany", "Europe/Berlin", "UTC+1", 13.4050, 52.5200),
    _entry("tokyo", "Tokyo", "Japan", "Asia/Tokyo", "UTC+9", 139.6503, 35.6762),
    _entry("sydney", "Sydney", "Australia", "Australia/Sydney", "UTC+10", 151.2093, -33.8688),
    _entry("auckland", "Auckland", "New Zealand", "Pacific/Auckland", "UTC+12", 174.7633, -36.8485),
    _entry("dubai", "Dubai", "United Arab Emirates", "Asia/Dubai", "UTC+4", 55.2708, 25.2048),
    _entry("singapore", "Singapore", "Singapore", "Asia/Singapore", "UTC+8", 103.8198, 1.3521),
    _entry("rio", "Rio de Janeiro", "Brazil", "America/Sao_Paulo", "UTC-3", -43.1729, -22.9068),
    _entry("johannesburg", "Johannesburg", "South Africa", "Africa/Johannesburg", "UTC+2", 28.0473, -26.2041),
)

DEFAULT_TIME_ZONES: tuple[LocationCandidate, ...] = tuple(
    z for z in POPULAR_TIME_ZONES if z.id in ("new-york", "london", "tokyo")
)


def _localize(at: datetime | None, tz_name: str) -> datetime:
    """Convert at (naive = UTC, None = now) into tz_name local time."""
    if at is None:
        at = datetime.now(utc)
    elif at.tzinfo is None:
        at = utc.localize(at)
    return at.astimezone(timezone(tz_name))


def format_time_for_timezone(
    at: datetime | None, tz_name: str, format_24h: bool = False
) -> str:
    """Wall-clock time in tz_name: "HH:MM:SS" or "h:MM:SS AM".

    Raises:
        pytz.UnknownTimeZoneError: If tz_name is not an IANA zone.
    """
    local = _localize(at, tz_name)
    if format_24h:
        return local.strftime("%H:%M:%S")
    return local.strftime("%I:%M:%S %p").lstrip("0")


def format_date_for_timezone(at: datetime | None, tz_name: str) -> str:
    """Local date in tz_name, e.g. "Friday, June 21, 2024"."""
    local = _localize(at, tz_name)
    return f"{local:%A}, {local:%B} {local.day}, {local.year}"


def is_known_timezone(tz_name: str) -> bool:
    """True when pytz recognises tz_name."""
    try:
        timezone(tz_name)
    except UnknownTimeZoneError:
        return False
    return True


def utc_offset_label(tz_name: str, at: datetime | None = None) -> str:
    """Offset of tz_name from UTC at a given moment, e.g. "UTC+5:30"."""
    offset = _localize(at, tz_name).utcoffset()
    assert offset is not None
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, rest = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours}" + (f":{rest:02d}" if rest else "")


def get_time_difference(tz1: str, tz2: str, at: datetime | None = None) -> int:
    """Whole hours tz2 is ahead of tz1, normalised into [-12, 12].

    Compares local hours of day only, so half-hour offsets are truncated.
    """
    if at is None:
        at = datetime.now(utc)
    diff = _localize(at, tz2).hour - _localize(at, tz1).hour
    if diff > 12:
        diff -= 24
    if diff < -12:
        diff += 24
    return diff


def format_time_difference(diff_hours: int) -> str:
    if diff_hours == 0:
        return "Same time"
    abs_hours = abs(diff_hours)
    unit = "hour" if abs_hours == 1 else "hours"
    return f"{abs_hours} {unit} {'ahead' if diff_hours > 0 else 'behind'}"


def is_daytime_in_timezone(at: datetime | None, tz_name: str) -> bool:
    """Local hour in [06:00, 18:00)."""
    return 6 <= _localize(at, tz_name).hour < 18


def search_time_zones(
    query: str, directory: tuple[LocationCandidate, ...] = POPULAR_TIME_ZONES
) -> tuple[LocationCandidate, ...]:
    """Case-insensitive substring match on city, country or name."""
    needle = query.lower().strip()
    if not needle:
        return ()
    return tuple(
        z
        for z in directory
        if needle in z.city.lower()
        or needle in z.country.lower()
        or needle in z.name.lower()
    )


def generate_time_zone_id(now_ms: int | None = None) -> str:
    """Unique-enough id for a user-added entry: the current millisecond."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return str(now_ms)


# --- Tracked clocks (immutable tuples, newest last) ---


def add_time_zone(
    zones: tuple[LocationCandidate, ...], entry: LocationCandidate
) -> tuple[LocationCandidate, ...]:
    """Append entry unless a clock for the same IANA zone is already tracked."""
    if any(z.timezone == entry.timezone for z in zones):
        return zones
    return zones + (entry,)


def remove_time_zone(
    zones: tuple[LocationCandidate, ...], id: str
) -> tuple[LocationCandidate, ...]:
    return tuple(z for z in zones if z.id != id)


def toggle_favorite(
    zones: tuple[LocationCandidate, ...], id: str
) -> tuple[LocationCandidate, ...]:
    return tuple(replace(z, favorite=not z.favorite) if z.id == id else z for z in zones)
