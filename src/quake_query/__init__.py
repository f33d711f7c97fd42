"""Client for the USGS FDSN earthquake catalog query API."""

from quake_query.client import BASE_URL, QueryClient
from quake_query.errors import (
    DeserializationError,
    InvalidBoundsError,
    InvalidRangeError,
    QuakeQueryError,
    RequestError,
    TransportError,
)
from quake_query.models import Feature, Geometry, Metadata, QueryResult

__all__ = [
    "BASE_URL", "QueryClient",
    "Feature", "Geometry", "Metadata", "QueryResult",
    "QuakeQueryError", "InvalidRangeError", "InvalidBoundsError",
    "RequestError", "TransportError", "DeserializationError",
]
