"""
Geocoding Errors
--------------
A closed set of failure kinds raised by the lookup service.
Each failure carries its kind so the API layer can translate it to a status code in one place.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"


class GeocodingError(Exception):
    """Base error for every failed lookup. `kind` tells which failure it is."""

    kind: ErrorKind = ErrorKind.UPSTREAM_UNREACHABLE

    def __init__(self, message, kind=None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __repr__(self):
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidInput(GeocodingError):
    kind = ErrorKind.INVALID_INPUT


class Unauthorized(GeocodingError):
    kind = ErrorKind.UNAUTHORIZED


class MalformedUpstreamResponse(GeocodingError):
    kind = ErrorKind.MALFORMED_UPSTREAM_RESPONSE


class UpstreamUnreachable(GeocodingError):
    kind = ErrorKind.UPSTREAM_UNREACHABLE
