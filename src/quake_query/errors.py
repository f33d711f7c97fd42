"""Errors raised by the earthquake query client."""

from __future__ import annotations

from httpx import TransportError

__all__ = [
    "QuakeQueryError",
    "InvalidRangeError",
    "InvalidBoundsError",
    "RequestError",
    "TransportError",
    "DeserializationError",
]


class QuakeQueryError(Exception):
    pass


class InvalidRangeError(QuakeQueryError, ValueError):
    """Two related bounds are out of order (start after end, min after max)."""

    def __init__(self, lower_name: str, lower, upper_name: str, upper):
        super().__init__(
            f"{lower_name} ({lower}) must be less than or equal to {upper_name} ({upper})"
        )
        self.lower_name = lower_name
        self.lower = lower
        self.upper_name = upper_name
        self.upper = upper


class InvalidBoundsError(QuakeQueryError, ValueError):
    """A single value lies outside its valid domain."""

    def __init__(self, parameter: str, value: float, minimum: float, maximum: float):
        super().__init__(
            f"{parameter} must be between {minimum} and {maximum}, got {value}"
        )
        self.parameter = parameter
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class RequestError(QuakeQueryError):
    """The server answered with a non-success status code."""

    def __init__(self, status_code: int, method: str, url: str):
        super().__init__(f"{status_code} - {method} {url}")
        self.status_code = status_code
        self.method = method
        self.url = url


class DeserializationError(QuakeQueryError):
    """Response body is not valid JSON or does not match the expected shape."""
