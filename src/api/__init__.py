"""
API Module
---------
Provides RESTful API endpoints for the geocoding proxy using FastAPI.
Features include:
- Forward geocoding (address to coordinates)
- Reverse geocoding (coordinates to address)
- Periodic purge of the in-memory lookup caches
"""
