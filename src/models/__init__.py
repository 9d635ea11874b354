"""
Data Models Module
----------------
Contains Pydantic models for data validation and serialization.
Defines the shape of geocoding results returned by the API.
"""
from src.models.coordinates import Coordinates

__all__ = ["Coordinates"]
