"""Shared pytest fixtures for the geocoding cache tests."""

import os
import sys
from unittest.mock import Mock

import pytest
import requests

# Ensure project root is on sys.path so that
# imports like `from src...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from src.geocoding.cache import GeocodeCache  # noqa: E402
from src.geocoding.positionstack import GeocodeLookupService  # noqa: E402


@pytest.fixture
def session():
    """Upstream session; no test ever reaches the network."""
    return Mock(spec=requests.Session)


@pytest.fixture
def forward_cache():
    return GeocodeCache("geocoding")


@pytest.fixture
def reverse_cache():
    return GeocodeCache("reverse-geocoding")


@pytest.fixture
def service(forward_cache, reverse_cache, session):
    return GeocodeLookupService(
        forward_cache,
        reverse_cache,
        session=session,
        access_key="test-key",
        base_url="http://upstream.test/v1/",
        timeout=2
    )
