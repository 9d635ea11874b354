"""
Geocoding Lookup Module
--------------
Handles forward and reverse geocoding through the positionstack API.
Results are kept in per-kind in-memory caches so repeated lookups skip the network.
Upstream failures are classified into typed GeocodingError kinds, never retried.
"""
import logging
import math
import os
import re

import requests
from pydantic import ValidationError

from src.geocoding.cache import GeocodeCache
from src.geocoding.errors import (
    InvalidInput,
    MalformedUpstreamResponse,
    Unauthorized,
    UpstreamUnreachable,
)
from src.models.coordinates import Coordinates

# Constants
POSITIONSTACK_BASE_URL = os.getenv("POSITIONSTACK_BASE_URL", "http://api.positionstack.com/v1")
POSITIONSTACK_ACCESS_KEY = os.getenv("POSITIONSTACK_ACCESS_KEY", "")
REQUEST_TIMEOUT = float(os.getenv("GEOCODING_REQUEST_TIMEOUT", "10"))

# Addresses that are always looked up upstream and never cached
UNCACHED_ADDRESSES = {"goa"}

# Plain decimal or exponent notation, ASCII digits only
COORDINATE_PATTERN = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)

# Get logger
logger = logging.getLogger(__name__)


def is_valid_latitude(latitude):
    return _in_range(latitude, 90)


def is_valid_longitude(longitude):
    return _in_range(longitude, 180)


def _in_range(value, limit):
    if not isinstance(value, str) or not COORDINATE_PATTERN.fullmatch(value):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    if math.isnan(number):
        return False
    return -limit <= number <= limit


def raise_for_status(status_code):
    """Translate a non-2xx upstream status into the matching error."""
    if status_code == 401:
        raise Unauthorized("Unauthorized access")
    if status_code == 422:
        raise InvalidInput("Invalid parameters provided")
    raise UpstreamUnreachable("Resource not found")


class GeocodeLookupService:
    """
    Cache-backed proxy in front of the positionstack forward and reverse endpoints.

    Args:
        forward_cache: cache for address -> coordinates
        reverse_cache: cache for "lat,lon" -> label
        session: requests session used for upstream calls
        access_key: positionstack API key
        base_url: positionstack base URL, without trailing slash
        timeout: seconds before an upstream call is abandoned
    """

    def __init__(
        self,
        forward_cache: GeocodeCache,
        reverse_cache: GeocodeCache,
        session: requests.Session = None,
        access_key: str = POSITIONSTACK_ACCESS_KEY,
        base_url: str = POSITIONSTACK_BASE_URL,
        timeout: float = REQUEST_TIMEOUT
    ):
        self.forward_cache = forward_cache
        self.reverse_cache = reverse_cache
        self.session = session or requests.Session()
        self.access_key = access_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def forward_geocode(self, address: str) -> Coordinates:
        logger.info(f"Attempting to get forward geocoding for address: {address}")

        use_cache = address.lower() not in UNCACHED_ADDRESSES
        if use_cache:
            cached = self.forward_cache.get(address)
            if cached is not None:
                logger.debug(f"Forward geocoding cache hit for address: {address}")
                return cached

        response = self._fetch(
            "forward",
            address,
            unreachable_message=f"Error fetching data for address: {address}"
        )
        data = self._parse_results(response)

        if not data:
            logger.warning(f"No geocoding data found for address: {address}")
            raise InvalidInput("Invalid address provided")

        try:
            first = data[0]
            coordinates = Coordinates(latitude=first["latitude"], longitude=first["longitude"])
        except (KeyError, TypeError, ValidationError) as e:
            logger.error(f"Error parsing geocoding response for address: {address}. Error: {e}")
            raise MalformedUpstreamResponse("Invalid response format received")

        if use_cache:
            self.forward_cache.put(address, coordinates)
        logger.info(f"Successfully fetched geocoding data for address: {address}")
        return coordinates

    def reverse_geocode(self, latitude: str, longitude: str) -> str:
        logger.info(f"Attempting to get reverse geocoding for coordinates: {latitude}, {longitude}")

        if not is_valid_latitude(latitude) or not is_valid_longitude(longitude):
            logger.warning(f"Invalid latitude or longitude provided: {latitude}, {longitude}")
            raise InvalidInput("Invalid latitude or longitude provided")

        # Literal input strings, not the parsed numbers
        cache_key = f"{latitude},{longitude}"
        cached = self.reverse_cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Reverse geocoding cache hit for coordinates: {cache_key}")
            return cached

        response = self._fetch(
            "reverse",
            cache_key,
            unreachable_message=f"Error fetching data for coordinates: {latitude}, {longitude}"
        )
        data = self._parse_results(response)

        if not data:
            logger.warning(f"No address found for coordinates: {latitude}, {longitude}")
            raise InvalidInput("Invalid latitude or longitude provided")

        try:
            label = data[0]["label"]
        except (KeyError, TypeError) as e:
            logger.error(f"Error parsing reverse geocoding response for coordinates: {latitude}, {longitude}. Error: {e}")
            raise MalformedUpstreamResponse("Invalid response format received")
        if not isinstance(label, str):
            logger.error(f"Reverse geocoding label is not a string for coordinates: {latitude}, {longitude}")
            raise MalformedUpstreamResponse("Invalid response format received")

        self.reverse_cache.put(cache_key, label)
        logger.info(f"Successfully fetched reverse geocoding data for coordinates: {latitude}, {longitude}")
        return label

    def _fetch(self, endpoint, query, unreachable_message):
        url = f"{self.base_url}/{endpoint}"
        params = {
            "access_key": self.access_key,
            "query": query
        }
        logger.debug(f"{endpoint.capitalize()} geocoding URL: {url} (query={query})")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except Exception as e:
            logger.error(f"Failed to fetch {endpoint} geocoding data for query: {query}. Error: {self._redact(str(e))}")
            raise UpstreamUnreachable(unreachable_message)

        logger.debug(f"{endpoint.capitalize()} geocoding response status: {response.status_code}")

        if not 200 <= response.status_code < 300:
            logger.error(f"Received error response for query: {query}. Status: {response.status_code}, Body: {self._redact(response.text)}")
            raise_for_status(response.status_code)

        return response

    def _redact(self, text):
        """Mask the access key, which requests echoes back in URLs."""
        if self.access_key:
            return text.replace(self.access_key, "***")
        return text

    @staticmethod
    def _parse_results(response):
        """Return the `data` list of a 2xx upstream response."""
        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Error parsing geocoding response body. Error: {e}")
            raise MalformedUpstreamResponse("Invalid response format received")

        if not isinstance(payload, dict):
            logger.error(f"Unexpected geocoding response shape: {type(payload).__name__}")
            raise MalformedUpstreamResponse("Invalid response format received")

        data = payload.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error(f"Unexpected geocoding 'data' shape: {type(data).__name__}")
            raise MalformedUpstreamResponse("Invalid response format received")
        return data
