"""Data model definitions — explicit boundaries between compute and render layers."""

from dataclasses import dataclass
from datetime import datetime

from pytz import utc


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float  # Latitude, [-90, 90]
    lng: float  # Longitude, [-180, 180] (terminator curves extend to [-360, 360])


@dataclass(frozen=True)
class SunPosition:
    """Equatorial coordinates of the Sun."""

    alpha: float  # Right ascension (degrees), quadrant-corrected
    delta: float  # Declination (degrees)


@dataclass(frozen=True)
class TerminatorCurve:
    """Day/night boundary for one instant. The sole input to renderers."""

    unix_ms: float  # Instant as Unix milliseconds
    points: tuple[GeoPoint, ...]  # Pole, 1441 boundary samples, pole
    sun: SunPosition
    gmst: float  # Greenwich Mean Sidereal Time (hours)

    @property
    def utc_dt(self) -> datetime:
        """The instant as an aware UTC datetime (for display)."""
        return datetime.fromtimestamp(self.unix_ms / 1000, tz=utc)

    @property
    def night_pole(self) -> float:
        """Latitude of the closing pole points (+90 or -90)."""
        return self.points[0].lat

    def latlng(self) -> list[tuple[float, float]]:
        """Plain (lat, lng) pairs, in curve order."""
        return [(p.lat, p.lng) for p in self.points]


@dataclass(frozen=True)
class LocationCandidate:
    """A timezone directory entry. Locators only read id and point."""

    id: str
    point: GeoPoint | None  # None = no usable coordinate
    name: str = ""
    city: str = ""
    country: str = ""
    timezone: str = ""  # IANA name ("Asia/Tokyo")
    offset: str = ""  # Display offset ("UTC+9")
    favorite: bool = False
