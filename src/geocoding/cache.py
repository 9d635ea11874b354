"""
Geocoding Cache Module
--------------
In-memory caches for geocoding results, one per lookup kind.
Entries have no individual expiry; a janitor thread empties the whole cache on a fixed interval.
"""
import logging
import os
import threading
from typing import Any, Optional

# Seconds between two whole-cache clears
CACHE_CLEAR_INTERVAL = float(os.getenv("CACHE_CLEAR_INTERVAL", "60"))

# Get logger
logger = logging.getLogger(__name__)


class GeocodeCache:
    """Thread-safe key/value store with a bulk clear."""

    def __init__(self, name):
        self.name = name
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, key) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key, value):
        with self._lock:
            self._entries[key] = value

    def clear(self):
        # Swap the dict so readers see either the old entries or none at all
        with self._lock:
            evicted = len(self._entries)
            self._entries = {}
        logger.info(f"{self.name.replace('-', ' ').capitalize()} cache cleared. ({evicted} entries evicted)")
        return evicted

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key):
        with self._lock:
            return key in self._entries


class CacheJanitor:
    """
    Clears a single cache every `interval` seconds on its own daemon thread.
    The schedule is independent of lookup traffic.
    """

    def __init__(self, cache, interval=CACHE_CLEAR_INTERVAL):
        self.cache = cache
        self.interval = interval
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        if self.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"{self.cache.name}-janitor",
            daemon=True
        )
        self._thread.start()
        logger.info(f"Started janitor for '{self.cache.name}' cache (every {self.interval}s)")

    def stop(self, timeout=None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            logger.info(f"Stopped janitor for '{self.cache.name}' cache")

    def is_alive(self):
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        while not self._stop.wait(self.interval):
            try:
                self.cache.clear()
            except Exception as e:
                logger.error(f"Error clearing '{self.cache.name}' cache: {e}")
