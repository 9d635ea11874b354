"""
Geocoding Module
--------------
Handles forward and reverse geocoding through the positionstack API.
Lookups are cached in memory and the caches are purged on a fixed interval.
"""
