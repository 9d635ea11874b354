from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from src.geocoding.cache import CACHE_CLEAR_INTERVAL, CacheJanitor, GeocodeCache
from src.geocoding.errors import ErrorKind, GeocodingError
from src.geocoding.positionstack import POSITIONSTACK_ACCESS_KEY, GeocodeLookupService
from src.models.coordinates import Coordinates

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# One cache per lookup kind, shared by every request
forward_cache = GeocodeCache("geocoding")
reverse_cache = GeocodeCache("reverse-geocoding")
lookup_service = GeocodeLookupService(forward_cache, reverse_cache)

janitors = [
    CacheJanitor(forward_cache, CACHE_CLEAR_INTERVAL),
    CacheJanitor(reverse_cache, CACHE_CLEAR_INTERVAL)
]

# Status code returned for each kind of lookup failure
ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.MALFORMED_UPSTREAM_RESPONSE: 400,
    ErrorKind.UPSTREAM_UNREACHABLE: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the cache janitors with the app and stop them on shutdown."""
    if not POSITIONSTACK_ACCESS_KEY:
        logger.warning("POSITIONSTACK_ACCESS_KEY is not set, upstream lookups will be rejected")
    for janitor in janitors:
        janitor.start()
    yield
    for janitor in janitors:
        janitor.stop(timeout=5)


app = FastAPI(
    title="Geocoding Cache API",
    description="Caching proxy for forward and reverse geocoding",
    version="1.0.0",
    lifespan=lifespan
)


def get_lookup_service():
    return lookup_service


@app.exception_handler(GeocodingError)
async def geocoding_error_handler(request: Request, exc: GeocodingError):
    status_code = ERROR_STATUS.get(exc.kind, 500)
    logger.warning(f"{request.url.path} failed with {exc.kind.value} ({status_code}): {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def read_root():
    return {"message": "Welcome to the Geocoding Cache API"}


@app.get("/geocoding", response_model=Coordinates)
def get_geocoding(address: str, service: GeocodeLookupService = Depends(get_lookup_service)):
    """
    Get forward geocoding result for the provided address.
    The response contains latitude and longitude.
    """
    return service.forward_geocode(address)


@app.get("/reverse-geocoding", response_class=PlainTextResponse)
def get_reverse_geocoding(
    latitude: str,
    longitude: str,
    service: GeocodeLookupService = Depends(get_lookup_service)
):
    """
    Get reverse geocoding result for the provided latitude and longitude.
    The response contains the address label.
    """
    return service.reverse_geocode(latitude, longitude)
