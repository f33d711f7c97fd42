"""HTTP client for the USGS FDSN event query API."""

from __future__ import annotations

import logging
import time
from datetime import datetime

import httpx

from quake_query.errors import RequestError
from quake_query.models import QueryResult
from quake_query.validation import (
    RADIUS_DEGREES_RANGE,
    RADIUS_KM_RANGE,
    check_circle,
    check_rectangle,
    check_time_range,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query?format=geojson"

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _with_params(base_url: str, params: list[tuple[str, object]]) -> str:
    # Appended after the base URL's own query string, in the given order
    return str(httpx.URL(base_url).copy_merge_params(params))


def build_date_url(
    start_time: datetime,
    end_time: datetime,
    min_magnitude: float = 0,
    base_url: str = BASE_URL,
) -> str:
    start_utc, end_utc = check_time_range(start_time, end_time)
    return _with_params(base_url, [
        ("starttime", start_utc.strftime(TIME_FORMAT)),
        ("endtime", end_utc.strftime(TIME_FORMAT)),
        ("minmagnitude", min_magnitude),
    ])


def build_rectangle_url(
    min_lat: float,
    min_lon: float,
    max_lat: float,
    max_lon: float,
    min_magnitude: float = 0,
    base_url: str = BASE_URL,
) -> str:
    check_rectangle(min_lat, min_lon, max_lat, max_lon)
    return _with_params(base_url, [
        ("minlatitude", min_lat),
        ("minlongitude", min_lon),
        ("maxlatitude", max_lat),
        ("maxlongitude", max_lon),
        ("minmagnitude", min_magnitude),
    ])


def build_circle_degrees_url(
    lat: float,
    lon: float,
    max_radius_degrees: float,
    min_magnitude: float = 0,
    base_url: str = BASE_URL,
) -> str:
    check_circle(lat, lon, max_radius_degrees, "maxradius", RADIUS_DEGREES_RANGE)
    return _with_params(base_url, [
        ("latitude", lat),
        ("longitude", lon),
        ("maxradius", max_radius_degrees),
        ("minmagnitude", min_magnitude),
    ])


def build_circle_km_url(
    lat: float,
    lon: float,
    max_radius_km: float,
    min_magnitude: float = 0,
    base_url: str = BASE_URL,
) -> str:
    check_circle(lat, lon, max_radius_km, "maxradiuskm", RADIUS_KM_RANGE)
    return _with_params(base_url, [
        ("latitude", lat),
        ("longitude", lon),
        ("maxradiuskm", max_radius_km),
        ("minmagnitude", min_magnitude),
    ])


class QueryClient:
    """Query the earthquake catalog by date, rectangle or radius.

    Each query validates its arguments, issues one GET with its own
    ``httpx.AsyncClient`` and parses the GeoJSON body into a QueryResult.
    No state is shared between calls, so one instance can serve concurrent
    tasks. Timeouts and redirects follow httpx defaults; nothing is retried.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url

    async def query_by_date(
        self,
        start_time: datetime,
        end_time: datetime,
        min_magnitude: float = 0,
    ) -> QueryResult:
        """Fetch events whose origin time lies between start_time and end_time.

        Args:
            start_time: Window start; naive values are taken as local time.
            end_time: Window end, not before start_time.
            min_magnitude: Only include events at or above this magnitude.

        Raises:
            InvalidRangeError: start_time is after end_time.
            RequestError: The server answered with a non-2xx status.
            DeserializationError: The body is not the expected GeoJSON.
        """
        url = build_date_url(start_time, end_time, min_magnitude, self.base_url)
        return await self._query(url)

    async def query_by_rectangle(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
        min_magnitude: float = 0,
    ) -> QueryResult:
        """Fetch events inside a latitude/longitude rectangle.

        Raises:
            InvalidRangeError: A minimum is greater than its maximum.
            InvalidBoundsError: A latitude is outside [-90, 90] or a longitude
                outside [-180, 180].
        """
        url = build_rectangle_url(
            min_lat, min_lon, max_lat, max_lon, min_magnitude, self.base_url,
        )
        return await self._query(url)

    async def query_by_circle_degrees(
        self,
        lat: float,
        lon: float,
        max_radius_degrees: float,
        min_magnitude: float = 0,
    ) -> QueryResult:
        """Fetch events within max_radius_degrees (0 to 180) of a point.

        Raises:
            InvalidBoundsError: lat, lon or the radius is out of range.
        """
        url = build_circle_degrees_url(
            lat, lon, max_radius_degrees, min_magnitude, self.base_url,
        )
        return await self._query(url)

    async def query_by_circle_km(
        self,
        lat: float,
        lon: float,
        max_radius_km: float,
        min_magnitude: float = 0,
    ) -> QueryResult:
        """Fetch events within max_radius_km (0 to 20001.6) of a point.

        Raises:
            InvalidBoundsError: lat, lon or the radius is out of range.
        """
        url = build_circle_km_url(lat, lon, max_radius_km, min_magnitude, self.base_url)
        return await self._query(url)

    async def _query(self, url: str) -> QueryResult:
        t0 = time.monotonic()
        body = await self._fetch(url)
        result = QueryResult.from_json(body)
        duration_ms = round((time.monotonic() - t0) * 1000, 1)
        logger.info(
            "Query returned %d feature(s) in %.1f ms",
            len(result.features), duration_ms,
            extra={
                "query": url,
                "feature_count": len(result.features),
                "duration_ms": duration_ms,
            },
        )
        return result

    async def _fetch(self, url: str) -> str:
        """GET the URL and return the body text, raising on non-2xx status."""
        logger.debug("GET %s", url)
        async with httpx.AsyncClient() as client:
            resp = await client.get(url)
            if resp.is_success:
                return resp.text

            request = resp.request
            logger.warning(
                "Query failed with HTTP %d", resp.status_code,
                extra={"query": url, "status_code": resp.status_code},
            )
            raise RequestError(resp.status_code, request.method, str(request.url))
