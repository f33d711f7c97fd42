"""Range and ordering checks applied before a query URL is built.

Every check raises on the first failure, so callers control which problem is
reported by the order in which they call these functions.
"""

from __future__ import annotations

from datetime import datetime, timezone

from quake_query.errors import InvalidBoundsError, InvalidRangeError

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)
RADIUS_DEGREES_RANGE = (0.0, 180.0)
# Half of Earth's great-circle circumference
RADIUS_KM_RANGE = (0.0, 20001.6)


def check_order(lower_name: str, lower, upper_name: str, upper) -> None:
    if lower > upper:
        raise InvalidRangeError(lower_name, lower, upper_name, upper)


def check_bounds(name: str, value: float, limits: tuple[float, float]) -> None:
    minimum, maximum = limits
    if not minimum <= value <= maximum:
        raise InvalidBoundsError(name, value, minimum, maximum)


def to_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime. Naive values are taken as local time."""
    return value.astimezone(timezone.utc)


def check_time_range(start_time: datetime, end_time: datetime) -> tuple[datetime, datetime]:
    """Return both times in UTC, raising if start is after end."""
    start_utc, end_utc = to_utc(start_time), to_utc(end_time)
    check_order("starttime", start_utc, "endtime", end_utc)
    return start_utc, end_utc


def check_rectangle(min_lat: float, min_lon: float, max_lat: float, max_lon: float) -> None:
    check_order("minlatitude", min_lat, "maxlatitude", max_lat)
    check_order("minlongitude", min_lon, "maxlongitude", max_lon)
    check_bounds("minlatitude", min_lat, LATITUDE_RANGE)
    check_bounds("maxlatitude", max_lat, LATITUDE_RANGE)
    check_bounds("minlongitude", min_lon, LONGITUDE_RANGE)
    check_bounds("maxlongitude", max_lon, LONGITUDE_RANGE)


def check_circle(
    lat: float,
    lon: float,
    radius: float,
    radius_name: str,
    radius_range: tuple[float, float],
) -> None:
    check_bounds("latitude", lat, LATITUDE_RANGE)
    check_bounds("longitude", lon, LONGITUDE_RANGE)
    check_bounds(radius_name, radius, radius_range)
