from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Result of a forward lookup. Frozen, since cached instances are shared between callers."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
